"""Exception types raised inside the generative content path."""


class GrindworldError(Exception):
    """Base class for grindworld errors."""


class ContentServiceError(GrindworldError):
    """Raised when the generative content service is unavailable or returns an error."""


class ContentValidationError(GrindworldError):
    """Raised when a generative payload does not describe a usable tile."""
