class MandelrenderError(Exception):
    """Base class for every error raised by mandelrender."""


class InvalidDimension(MandelrenderError, ValueError):
    def __init__(self, width: int, height: int):
        super().__init__(f"width and height must both be >= 2 (got {width}x{height})")
        self.width = width
        self.height = height


class InvalidIterationCap(MandelrenderError, ValueError):
    def __init__(self, max_iterations: int):
        super().__init__(f"max_iterations must be >= 1 (got {max_iterations})")
        self.max_iterations = max_iterations


class InvalidViewport(MandelrenderError, ValueError):
    pass


class SinkUnavailable(MandelrenderError, OSError):
    """The image could not be written to its destination.

    The rendered buffer is untouched, so the caller can retry with another
    destination.
    """

    def __init__(self, destination, reason: str):
        super().__init__(f"Could not write image to {destination}: {reason}")
        self.destination = destination
        self.reason = reason
