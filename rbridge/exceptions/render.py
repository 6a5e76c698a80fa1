"""Render pipeline exceptions."""

from rbridge.exceptions.base import RBridgeError


class RenderError(RBridgeError):
    """Base exception for render job failures."""

    pass


class RenderIOError(RenderError):
    """Raised when the source document cannot be written or the artifact read."""

    def __init__(self, path: str, reason: str):
        super().__init__(code="RENDER_IO_ERROR", message=reason, details={"path": path})
        self.path = path


class FragmentExtractionError(RenderError):
    """Raised when the rendered artifact has no body to extract."""

    def __init__(self, marker: str):
        super().__init__(
            code="FRAGMENT_EXTRACTION_ERROR",
            message=f"Rendered output has no '{marker}' marker",
            details={"marker": marker},
        )
        self.marker = marker
