"""Intersection records, sorted intersection collections and hit selection.

An Intersection pairs a ray parameter t with the object that was hit. The
object reference is a plain back-reference: intersections never own the
spheres they point at, and many records may refer to the same sphere.

Intersections is an immutable collection that is always sorted ascending
by t. Its hit() is the first record with t >= 0, i.e. the first visible
surface along the ray. Records behind the ray origin (t < 0) are kept in
the collection but never selected as the hit.

Example:
    >>> from src.phongtrace.geometry.sphere import Sphere
    >>> from src.phongtrace.scene.intersection import Intersection, Intersections
    >>> s = Sphere()
    >>> xs = Intersections(Intersection(5, s), Intersection(-3, s), Intersection(2, s))
    >>> xs.hit().t
    2
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING, overload

from src.phongtrace.core.tuples import Point, Vector

if TYPE_CHECKING:
    from src.phongtrace.core.ray import Ray
    from src.phongtrace.geometry.sphere import Sphere

# Conventional bound for a fixed-size intersection buffer.
# Intersections is unbounded unless a capacity is passed explicitly.
MAX_INTERSECTIONS = 32

_by_t = attrgetter("t")


class IntersectionCapacityError(RuntimeError):
    """Raised when a bounded Intersections collection overflows."""


@dataclass(frozen=True, eq=False)
class Intersection:
    """A single ray-object intersection.

    Attributes:
        t: Ray parameter at which the intersection occurs.
        object: The sphere that was hit (non-owning reference).
    """

    t: float
    object: Sphere


class Intersections(Sequence[Intersection]):
    """An ascending-by-t collection of intersections.

    The collection is sorted on construction and never changes afterwards.
    Records with equal t keep their insertion order.
    """

    def __init__(self, *intersections: Intersection, capacity: int | None = None) -> None:
        """Create a sorted collection.

        Args:
            *intersections: The records, in any order.
            capacity: Optional hard bound on the number of records.

        Raises:
            IntersectionCapacityError: If capacity is given and exceeded.
        """
        if capacity is not None and len(intersections) > capacity:
            raise IntersectionCapacityError(
                f"Too many intersections ({len(intersections)}), max is {capacity}"
            )
        self._items: tuple[Intersection, ...] = tuple(sorted(intersections, key=_by_t))
        self._capacity = capacity

    @classmethod
    def from_iterable(
        cls, intersections: Iterable[Intersection], capacity: int | None = None
    ) -> Intersections:
        return cls(*intersections, capacity=capacity)

    @property
    def capacity(self) -> int | None:
        return self._capacity

    @overload
    def __getitem__(self, index: int) -> Intersection: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Intersection]: ...

    def __getitem__(self, index: int | slice) -> Intersection | Sequence[Intersection]:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __repr__(self) -> str:
        ts = ", ".join(f"{i.t:g}" for i in self._items)
        return f"Intersections([{ts}])"

    def hit(self) -> Intersection | None:
        """Return the lowest non-negative intersection, or None.

        Returns None when the collection is empty or every record lies
        behind the ray origin.
        """
        for intersection in self._items:
            if intersection.t >= 0.0:
                return intersection
        return None

    def merge(self, other: Intersections) -> Intersections:
        """Combine two sorted collections into a new sorted collection.

        The result keeps this collection's capacity bound, if any.
        """
        merged = heapq.merge(self._items, other._items, key=_by_t)
        return Intersections(*merged, capacity=self._capacity)


@dataclass(frozen=True)
class Computations:
    """Shading inputs derived from a hit.

    Attributes:
        t: Ray parameter of the hit.
        object: The sphere that was hit.
        point: World-space hit point.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit world-space surface normal at the point.
    """

    t: float
    object: Sphere
    point: Point
    eyev: Vector
    normalv: Vector


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Precompute the point, eye vector and normal for shading a hit.

    The eye vector is the negated ray direction; camera rays are normalized,
    so it is a unit vector.
    """
    point = ray.position(intersection.t)
    return Computations(
        t=intersection.t,
        object=intersection.object,
        point=point,
        eyev=-ray.direction,
        normalv=intersection.object.normal_at(point),
    )
