"""Exception hierarchy for ContourPad."""


class ContourPadError(Exception):
    """Base exception for all ContourPad errors."""

    pass


class ImageError(ContourPadError):
    """Errors related to image loading."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ImageTooLargeError(ImageError):
    """Image file exceeds the configured size limit."""

    def __init__(self, path: str, size_bytes: int, limit_bytes: int) -> None:
        self.path = path
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Image '{path}' is too large: {size_bytes} bytes (limit {limit_bytes})"
        )


class GeometryError(ContourPadError):
    """Errors in geometric calculations."""

    pass


class EmptyPathError(GeometryError):
    """An operation that needs at least one point received none."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: point sequence is empty")


class EmptySilhouetteError(GeometryError):
    """The canvas holds no occupied pixels to trace."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__(f"No silhouette found on {width}x{height} canvas")


class ExportError(ContourPadError):
    """Errors related to writing results."""

    pass


class MeshExportError(ExportError):
    """Error saving a mesh file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export mesh '{path}': {reason}")
