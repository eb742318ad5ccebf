from __future__ import annotations


class PathError(ValueError):
    """Base class for errors raised by the numerical path engine."""


class MalformedPathError(PathError):
    """
    The sampled curve cannot be tabulated: path distance is not strictly
    increasing (zero-length or non-progressing curve), a sample is not
    finite, or too few samples were requested.
    """


class NonMonotonicXError(PathError):
    """An x-indexed query was made on a path whose x values are not monotonic."""
