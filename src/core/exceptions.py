"""Custom exceptions shared by all layers"""


class RenderError(Exception):
    """Top-level exception for anything going wrong while producing a board image."""


class RenderingUnavailableError(RenderError):
    """The image surface could not be created or encoded. Nothing can be sent back to the client."""


class CacheError(RenderError):
    """A storage backend failed to persist an artifact. Never leaves the ArtifactCache."""

class ConfigError(RenderError):
    """Configuration values the service cannot start with."""
