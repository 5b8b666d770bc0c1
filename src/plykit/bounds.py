"""
Axis-aligned bounding box of a vertex stream.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from plykit.errors import UsageError
from plykit.readers import BufferedElementReader, ElementReader


@dataclass(frozen=True)
class Bounds:
    """Closed box [min_x, max_x] x [min_y, max_y] x [min_z, max_z]"""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    min_z: float
    max_z: float

    @property
    def center(self) -> Tuple[float, float, float]:
        return (
            (self.min_x + self.max_x) / 2.0,
            (self.min_y + self.max_y) / 2.0,
            (self.min_z + self.max_z) / 2.0,
        )

    @property
    def size(self) -> Tuple[float, float, float]:
        return (
            self.max_x - self.min_x,
            self.max_y - self.min_y,
            self.max_z - self.min_z,
        )

    def contains(self, x: float, y: float, z: float) -> bool:
        return (
            self.min_x <= x <= self.max_x
            and self.min_y <= y <= self.max_y
            and self.min_z <= z <= self.max_z
        )


def compute_bounds(reader: ElementReader) -> Optional[Bounds]:
    """Drain reader and return the box around all x, y, z; None if it is empty

    A BufferedElementReader is reset first so the whole stream is covered.

    Raises:
        UsageError: If the element type does not declare x, y and z
    """
    element_type = reader.get_element_type()
    for name in ("x", "y", "z"):
        if not element_type.has_property(name):
            raise UsageError(f"Element type {element_type.name!r} has no {name!r} coordinate")

    if isinstance(reader, BufferedElementReader):
        reader.reset()

    lo = hi = None
    for element in reader:
        point = (element.get_double("x"), element.get_double("y"), element.get_double("z"))
        if lo is None:
            lo, hi = list(point), list(point)
            continue
        for axis in range(3):
            lo[axis] = min(lo[axis], point[axis])
            hi[axis] = max(hi[axis], point[axis])

    if lo is None:
        return None
    return Bounds(lo[0], hi[0], lo[1], hi[1], lo[2], hi[2])
