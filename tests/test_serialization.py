"""
Tests for serialization and deserialization of element streams.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `plykit.serialization`.
"""

import pytest
from plykit import examples
from plykit.element import Element
from plykit.errors import UsageError
from plykit.normals import NormalGenerator
from plykit.readers import BufferedElementReader
from plykit.schema import ElementType, ScalarType, list_property, scalar_property
from plykit.serialization import (
    element_type_from_dict,
    element_type_to_dict,
    elements_from_json,
    elements_from_yaml,
    elements_to_dict,
    elements_to_json,
    elements_to_yaml,
)


def build_sample_faces():
    face_type = ElementType(
        "face",
        list_property("vertex_indices", ScalarType.UCHAR, ScalarType.INT),
        scalar_property("quality", ScalarType.DOUBLE),
    )
    faces = []
    for indices, quality in (([0, 1, 2], 0.25), ([2, 3, 0, 1], 1.0 / 3.0)):
        f = Element(face_type)
        f.set_int_list("vertex_indices", indices)
        f.set_double("quality", quality)
        faces.append(f)
    return face_type, faces


def test_element_type_dict_roundtrip():
    face_type, _ = build_sample_faces()
    d = element_type_to_dict(face_type)
    assert d["properties"][0] == {
        "name": "vertex_indices",
        "kind": "list",
        "count_type": "uchar",
        "item_type": "int",
    }
    assert element_type_from_dict(d) == face_type


def test_json_roundtrip():
    face_type, faces = build_sample_faces()
    restored_type, restored = elements_from_json(elements_to_json(face_type, faces))
    assert restored_type == face_type
    assert restored == faces


def test_yaml_roundtrip():
    face_type, faces = build_sample_faces()
    restored_type, restored = elements_from_yaml(elements_to_yaml(face_type, faces))
    assert restored_type == face_type
    assert restored == faces


def test_yaml_keeps_property_order():
    face_type, faces = build_sample_faces()
    restored_type, _ = elements_from_yaml(elements_to_yaml(face_type, faces))
    assert restored_type.property_names == ["vertex_indices", "quality"]


def test_generated_normals_roundtrip():
    """Vertices re-streamed after normal generation serialize losslessly."""
    vertex_reader, face_reader = examples.build_two_faces(with_normals=False)
    vertices = BufferedElementReader(vertex_reader)
    NormalGenerator().generate_normals(vertices, face_reader)
    vertices.reset()
    before = list(vertices)
    vertices.reset()
    restored_type, restored = elements_from_yaml(
        elements_to_yaml(vertices.get_element_type(), vertices)
    )
    assert restored_type == vertices.get_element_type()
    assert restored == before


def test_mismatched_element_rejected():
    face_type, faces = build_sample_faces()
    with pytest.raises(UsageError):
        elements_to_dict(examples.vertex_type(), faces)


def test_unknown_kind_rejected():
    with pytest.raises(TypeError):
        element_type_from_dict({"name": "face", "properties": [{"name": "a", "kind": "map"}]})
