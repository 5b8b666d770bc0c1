"""
Example meshes for demos and tests.

Each builder returns (vertex_reader, face_reader), both forward-only
ListElementReaders over fresh elements. Vertices declare x, y, z as
doubles; faces declare a uchar-counted int list "vertex_index".
"""
import math
from typing import List, Sequence, Tuple

from plykit.element import Element
from plykit.readers import ListElementReader
from plykit.schema import ElementType, ScalarType, list_property, scalar_property

Point = Tuple[float, float, float]


def vertex_type(with_normals: bool = False) -> ElementType:
    names = ["x", "y", "z"] + (["nx", "ny", "nz"] if with_normals else [])
    return ElementType("vertex", *(scalar_property(n, ScalarType.DOUBLE) for n in names))


def face_type() -> ElementType:
    return ElementType("face", list_property("vertex_index", ScalarType.UCHAR, ScalarType.INT))


def make_vertices(points: Sequence[Point], with_normals: bool = False) -> List[Element]:
    t = vertex_type(with_normals)
    vertices = []
    for x, y, z in points:
        v = Element(t)
        v.set_double("x", x)
        v.set_double("y", y)
        v.set_double("z", z)
        vertices.append(v)
    return vertices


def make_faces(index_lists: Sequence[Sequence[int]]) -> List[Element]:
    t = face_type()
    faces = []
    for indices in index_lists:
        f = Element(t)
        f.set_int_list("vertex_index", indices)
        faces.append(f)
    return faces


def build_mesh(
    points: Sequence[Point],
    index_lists: Sequence[Sequence[int]],
    with_normals: bool = False,
) -> Tuple[ListElementReader, ListElementReader]:
    return (
        ListElementReader(vertex_type(with_normals), make_vertices(points, with_normals)),
        ListElementReader(face_type(), make_faces(index_lists)),
    )


def build_single_triangle(with_normals: bool = True):
    """Flat triangle in the z=0 plane, counter-clockwise seen from +z."""
    return build_mesh([(0, 0, 0), (1, 0, 0), (1, 1, 0)], [[0, 1, 2]], with_normals)


def build_two_faces(with_normals: bool = True):
    """Two triangles sharing the edge 0-2, folded 45 degrees."""
    points = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0.5, 0.5, math.sqrt(2.0) / 2.0)]
    return build_mesh(points, [[0, 1, 2], [0, 2, 3]], with_normals)


def build_angle_pair(wide: bool, with_normals: bool = True):
    """
    Two faces meeting at vertex 0 with a right angle in the xz plane and
    either a 135 degree (wide) or 45 degree corner in the xy plane.
    """
    third = (-1, 1, 0) if wide else (1, 1, 0)
    points = [(0, 0, 0), (1, 0, 0), third, (0, 0, 1)]
    return build_mesh(points, [[0, 1, 2], [0, 3, 1]], with_normals)


def build_tetrahedron(with_normals: bool = False):
    """Regular tetrahedron centred on the origin, faces wound outward."""
    points = [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]
    faces = [[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]]
    return build_mesh(points, faces, with_normals)
