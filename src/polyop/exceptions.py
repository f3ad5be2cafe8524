"""Exception hierarchy for polyop."""


class PolyopError(Exception):
    """Base exception for all polyop errors."""

    pass


class GeometryError(PolyopError):
    """Errors in geometric input or calculations."""

    pass


class InvalidGeometryError(GeometryError):
    """Input geometry that cannot form a valid ring or polygon."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AmbiguousTopologyError(GeometryError):
    """Crossing structure that the operation cannot resolve into valid rings."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Ambiguous topology during {operation}: {reason}")


class UnboundedResultError(GeometryError):
    """Result that covers the whole plane and so has no boundary to return."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Result of {operation} covers the whole plane")


class PolygonIOError(PolyopError):
    """Errors related to reading or writing polygon files."""

    pass


class PolygonLoadError(PolygonIOError):
    """Error loading a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polygon '{path}': {reason}")


class PolygonSaveError(PolygonIOError):
    """Error saving a polygon file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save polygon '{path}': {reason}")
