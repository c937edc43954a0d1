"""Exception hierarchy for polyvalid.

Invalid geometry is never an exception: validators report it through
:class:`~polyvalid.core.result.ValidationResult`. The exceptions below signal
programming errors, such as values that are not geometries or coordinates
whose dimensionality does not match.
"""


class PolyvalidError(Exception):
    """Base class for all polyvalid exceptions."""
    pass


class DimensionMismatchError(PolyvalidError, ValueError):
    """Raised when coordinates do not share a usable dimension count.

    Examples:
        >>> Box((0, 0), (1, 1, 1))
        Traceback (most recent call last):
        ...
        DimensionMismatchError: Box corners have different dimensions: 2 and 3
    """
    pass


class UnsupportedGeometryError(PolyvalidError, TypeError):
    """Raised when a value outside the supported geometry set is validated."""
    pass


class ConfigurationError(PolyvalidError, ValueError):
    """Raised for unknown coordinate systems, units or mixed settings."""
    pass


__all__ = [
    'PolyvalidError',
    'DimensionMismatchError',
    'UnsupportedGeometryError',
    'ConfigurationError',
]
