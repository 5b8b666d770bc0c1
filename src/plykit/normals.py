"""
Vertex Normal Generation

Computes one unit normal per vertex with angle-weighted accumulation
(Max, "Weights for Computing Vertex Normals from Facet Normals", 1999):
every face adds its unit normal to each of its corners, scaled by the
interior angle at that corner, and the per-vertex sums are normalized.

Degenerate geometry is not an error. A face whose first corner has a
zero-length cross product contributes nothing, and a zero-length edge
gives a zero angle.
"""

import logging
from typing import List, Optional, Sequence

from plykit.element import Element
from plykit.errors import UsageError
from plykit.readers import BufferedElementReader, ElementReader
from plykit.schema import ElementType, ScalarType, scalar_property
from plykit.vectors import ZERO, Vector, angle_between, cross, normalize, sub

logger = logging.getLogger(__name__)

POSITION_PROPERTIES = ("x", "y", "z")
NORMAL_PROPERTIES = ("nx", "ny", "nz")

# Preferred face list names, in order, when a face type declares several lists
INDEX_PROPERTY_NAMES = ("vertex_indices", "vertex_index")


class NormalGenerator:
    """
    Writes angle-weighted vertex normals into a buffered vertex stream.

    Properties:
        counter_clockwise:
            True if a face's index order winds counter-clockwise when seen
            from outside (right-hand rule gives the outward normal). False
            flips every face normal.

        index_property:
            Name of the face list property holding vertex indices. None
            picks it from the face type (see find_index_property).

    The generator holds no state between calls.
    """

    def __init__(self, counter_clockwise: bool = True, index_property: Optional[str] = None):
        self._counter_clockwise = bool(counter_clockwise)
        self.index_property = index_property

    @property
    def counter_clockwise(self) -> bool:
        return self._counter_clockwise

    @counter_clockwise.setter
    def counter_clockwise(self, value: bool) -> None:
        self._counter_clockwise = bool(value)

    def generate_normals(self, vertices: BufferedElementReader, faces: ElementReader) -> None:
        """
        Compute normals for every vertex and store them in nx, ny, nz.

        The face reader is drained once. Vertex elements are mutated in
        place through the buffer; if the vertex type has no nx/ny/nz they
        are appended to it first. Callers must reset() the vertex buffer
        before reading it again.

        Args:
            vertices: Buffered vertex stream declaring x, y, z
            faces: Face stream declaring a list of vertex indices

        Raises:
            UsageError: Missing coordinates, nx/ny/nz declared as lists or
                integers, no usable index list, a face
                with fewer than 3 indices or an index out of range. Nothing
                is rolled back; a schema extension made before the
                error stays.
        """
        vertex_type = vertices.get_element_type()
        for name in POSITION_PROPERTIES:
            prop = vertex_type.find_property(name)
            if prop is None or prop.is_list:
                raise UsageError(f"Vertex type {vertex_type.name!r} needs a scalar {name!r} property")
        for name in NORMAL_PROPERTIES:
            prop = vertex_type.find_property(name)
            if prop is not None and (prop.is_list or prop.data_type.is_integer):
                raise UsageError(
                    f"Vertex property {name!r} of {vertex_type.name!r} must be a float scalar"
                )

        face_type = faces.get_element_type()
        index_name = self.index_property or find_index_property(face_type)
        if not face_type.get_property(index_name).is_list:
            raise UsageError(f"Face property {index_name!r} is not a list")

        vertex_count = vertices.drain()
        vertices.extend_element_type(
            *(scalar_property(name, ScalarType.FLOAT) for name in NORMAL_PROPERTIES)
        )

        positions = [_position(vertices[i]) for i in range(vertex_count)]
        accumulators: List[List[float]] = [[0.0, 0.0, 0.0] for _ in range(vertex_count)]

        face_count = 0
        degenerate = 0
        for face in faces:
            indices = face.get_int_list(index_name)
            _check_indices(indices, vertex_count, face_count)
            if not self._accumulate(indices, positions, accumulators):
                degenerate += 1
            face_count += 1

        if degenerate:
            logger.warning(f"{degenerate} of {face_count} faces are degenerate and add no normal")

        for position, total in enumerate(accumulators):
            vertex = vertices[position]
            normal = normalize((total[0], total[1], total[2]))
            if normal == ZERO:
                for name in NORMAL_PROPERTIES:
                    if not vertex.is_set(name):
                        vertex.set_double(name, 0.0)
                continue
            vertex.set_double("nx", normal[0])
            vertex.set_double("ny", normal[1])
            vertex.set_double("nz", normal[2])

        logger.info(f"Generated normals for {vertex_count} vertices from {face_count} faces")

    def _accumulate(
        self,
        indices: Sequence[int],
        positions: Sequence[Vector],
        accumulators: List[List[float]],
    ) -> bool:
        """Add one face's weighted normal to its corners; False if degenerate."""
        normal = face_normal([positions[i] for i in indices[:3]])
        if normal == ZERO:
            return False
        if not self._counter_clockwise:
            normal = (-normal[0], -normal[1], -normal[2])

        n = len(indices)
        for k in range(n):
            here = positions[indices[k]]
            previous = positions[indices[(k - 1) % n]]
            following = positions[indices[(k + 1) % n]]
            angle = angle_between(sub(previous, here), sub(following, here))
            total = accumulators[indices[k]]
            total[0] += angle * normal[0]
            total[1] += angle * normal[1]
            total[2] += angle * normal[2]
        return True


def face_normal(corners: Sequence[Vector]) -> Vector:
    """Counter-clockwise unit normal from the first three corners; ZERO if degenerate."""
    p0, p1, p2 = corners[0], corners[1], corners[2]
    return normalize(cross(sub(p1, p0), sub(p2, p0)))


def find_index_property(face_type: ElementType) -> str:
    """
    Pick the list property of a face type that holds vertex indices.

    A single list property is used whatever its name. With several, the
    conventional names vertex_indices and vertex_index are tried in order.

    Raises:
        UsageError: If no list property qualifies, or the choice is ambiguous
    """
    lists = face_type.list_properties()
    if len(lists) == 1:
        return lists[0].name
    names = {p.name for p in lists}
    for candidate in INDEX_PROPERTY_NAMES:
        if candidate in names:
            return candidate
    if not lists:
        raise UsageError(f"Face type {face_type.name!r} declares no list property")
    raise UsageError(
        f"Face type {face_type.name!r} has several list properties {sorted(names)}; "
        "set index_property"
    )


def _position(vertex: Element) -> Vector:
    return (vertex.get_double("x"), vertex.get_double("y"), vertex.get_double("z"))


def _check_indices(indices: Sequence[int], vertex_count: int, face_number: int) -> None:
    if len(indices) < 3:
        raise UsageError(f"Face {face_number} has {len(indices)} indices; at least 3 are required")
    for index in indices:
        if index < 0 or index >= vertex_count:
            raise UsageError(
                f"Face {face_number} refers to vertex {index}, "
                f"but only {vertex_count} vertices are buffered"
            )
