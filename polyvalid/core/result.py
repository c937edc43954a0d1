"""Validation outcome types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .types import FailureKind


@dataclass(frozen=True)
class PositionRef:
    """Where in a geometry a failure was found.

    Ring index 0 is the exterior ring of a polygon and index ``k >= 1`` is
    hole ``k - 1``. Vertex indexes refer to the point list the caller built the
    ring or linestring from, closing point included.

    Attributes:
        polygon: Index of the polygon inside a multi-polygon
        ring: Index of the ring inside the polygon
        vertex: Index of the offending vertex
        other_polygon: Second polygon involved in a pairwise failure
        other_ring: Second ring involved in a pairwise failure
        member: Index of the member of a multi-point or multi-linestring
    """

    polygon: Optional[int] = None
    ring: Optional[int] = None
    vertex: Optional[int] = None
    other_polygon: Optional[int] = None
    other_ring: Optional[int] = None
    member: Optional[int] = None

    def describe(self) -> str:
        parts = []
        if self.polygon is not None:
            parts.append(f"polygon {self.polygon}")
        if self.other_polygon is not None:
            parts.append(f"polygon {self.other_polygon}")
        if self.member is not None:
            parts.append(f"member {self.member}")
        if self.ring is not None:
            parts.append(_ring_name(self.ring))
        if self.other_ring is not None:
            parts.append(_ring_name(self.other_ring))
        if self.vertex is not None:
            parts.append(f"vertex {self.vertex}")
        return ", ".join(parts)


def _ring_name(index: int) -> str:
    return "exterior" if index == 0 else f"hole {index - 1}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one geometry.

    Attributes:
        valid: Verdict
        failure: Failure classification when invalid
        location: Offending position when known

    Examples:
        >>> from polyvalid import validate, LineString
        >>> result = validate(LineString([(0, 0)]))
        >>> bool(result)
        False
        >>> result.message
        'Too few distinct points'
    """

    valid: bool
    failure: Optional[FailureKind] = None
    location: Optional[PositionRef] = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(
        cls,
        failure: FailureKind,
        location: Optional[PositionRef] = None,
    ) -> ValidationResult:
        return cls(valid=False, failure=failure, location=location)

    def at(self, **indexes: Optional[int]) -> ValidationResult:
        """Return a copy whose location also carries ``indexes``.

        Indexes already set on the location are kept, so inner validators can
        record the vertex and outer ones add the ring and polygon.
        """
        if self.valid:
            return self
        location = self.location or PositionRef()
        updates = {
            name: value for name, value in indexes.items()
            if getattr(location, name) is None
        }
        return replace(self, location=replace(location, **updates))

    @property
    def message(self) -> str:
        if self.valid:
            return "Valid Geometry"
        text = self.failure.description
        if self.location is not None:
            where = self.location.describe()
            if where:
                text = f"{text} at {where}"
        return text

    def __bool__(self) -> bool:
        return self.valid


VALID = ValidationResult.ok()


__all__ = [
    'PositionRef',
    'ValidationResult',
    'VALID',
]
