"""Exceptions raised by docsegment components."""


class InvalidArgument(ValueError):
    """Raised when a component is built from an absent or unusable argument."""
    pass


class ExhaustedError(StopIteration):
    """Raised by ``next()`` once a sentence sequence has no more sentences."""
    pass


class StreamReadError(OSError):
    """Raised when the underlying character stream cannot be read."""
    pass
