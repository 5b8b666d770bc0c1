"""
Test the example mesh builders.

Validates that the builders create the expected element types, vertex
positions and face index lists.
"""

from plykit import examples


def test_single_triangle_structure():
    vertex_reader, face_reader = examples.build_single_triangle()

    assert vertex_reader.get_element_type().property_names == ["x", "y", "z", "nx", "ny", "nz"]
    vertices = list(vertex_reader)
    assert len(vertices) == 3
    assert vertices[2].get_double("y") == 1.0
    assert not vertices[0].is_set("nx")

    faces = list(face_reader)
    assert [f.get_int_list("vertex_index") for f in faces] == [[0, 1, 2]]


def test_angle_pair_differs_in_third_vertex():
    wide = list(examples.build_angle_pair(wide=True)[0])
    narrow = list(examples.build_angle_pair(wide=False)[0])
    assert wide[2].get_double("x") == -1.0
    assert narrow[2].get_double("x") == 1.0
    assert [v.to_dict() for i, v in enumerate(wide) if i != 2] == [
        v.to_dict() for i, v in enumerate(narrow) if i != 2
    ]


def test_builders_return_fresh_elements():
    """Each call builds new elements, so meshes can be mutated independently."""
    first = list(examples.build_tetrahedron()[0])
    second = list(examples.build_tetrahedron()[0])
    assert first == second
    assert all(a is not b for a, b in zip(first, second))
