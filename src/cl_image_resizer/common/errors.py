"""Error taxonomy shared by the pipeline and its front ends."""


class ResizerError(Exception):
    """Base class for pipeline failures."""


class NotFound(ResizerError):
    """Raised when a source image is missing or cannot be decoded."""

    def __init__(self, source: str | None = None):
        self.source: str | None = source
        super().__init__("image not found")


class FailedToResize(ResizerError):
    """Raised when dimension resolution, resampling or encoding fails.

    The collaborator's diagnostic text is kept verbatim in ``message``.
    """

    def __init__(self, message: str):
        self.message: str = message
        super().__init__(f"failed to resize: {message}")


class UnsupportedEncoding(ValueError):
    """Raised when an output encoding selector is not recognised."""

    def __init__(self, value: str):
        self.value: str = value
        super().__init__(f"unsupported encoding: {value!r} (expected avif, jpeg or jpg)")
