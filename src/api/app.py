"""
FastAPI application serving board images.

GET /?fen=<FEN>&size=<pixels>&reversed=<bool>&download=<bool> returns a PNG of the position.
The endpoint is sync on purpose: FastAPI runs it in its thread pool, which suits the blocking image work.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import Response

from src.api.models import BoardImageRequest, HealthResponse
from src.cache.artifact_cache import ArtifactCache, build_store
from src.core.config import RenderConfig
from src.core.exceptions import RenderingUnavailableError
from src.services.render_service import RenderService

logger = logging.getLogger(__name__)

PNG_MEDIA_TYPE = "image/png"


def create_app(config: RenderConfig | None = None) -> FastAPI:
    """Build the app with its service. Without a config, it is read from the environment."""
    config = config or RenderConfig.from_env()
    logging.basicConfig(level=config.log_level)

    service = RenderService(config, ArtifactCache(build_store(config)))
    app = FastAPI(title="FEN board renderer")
    app.state.config = config
    app.state.render_service = service

    @app.get("/health")
    def health() -> HealthResponse:
        """Simple readiness check."""
        return HealthResponse(status="ok")

    @app.get("/", response_class=Response)
    def board_image(request: Request) -> Response:
        """PNG image of the position in the query string."""
        params = BoardImageRequest.model_validate(
            dict(request.query_params), context={"config": config}
        )
        try:
            result = service.render(params.to_render_request(config))
        except RenderingUnavailableError as e:
            logger.error("Rendering unavailable for fen=%r: %s", params.fen, e)
            raise HTTPException(status_code=500, detail="Rendering unavailable") from e

        headers = {}
        if params.download:
            headers["Content-Disposition"] = f'attachment; filename="{result.key}"'
        return Response(content=result.data, media_type=PNG_MEDIA_TYPE, headers=headers)

    return app
