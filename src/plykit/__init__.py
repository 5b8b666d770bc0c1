"""
plykit: typed element streams and vertex normals for PLY meshes.

A PLY file is a set of named element sections (vertex, face, ...), each a
stream of records typed by an ElementType. This package holds:
    - The record model (ScalarType, PropertyDescriptor, ElementType, Element)
    - Element readers, including a buffered multi-pass reader
    - Angle-weighted vertex normal generation

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - PLY header tokenization
    - ASCII or binary property encodings
    - File I/O

Decoders produce ElementReaders; encoders consume Elements.
"""

from plykit.element import Element
from plykit.errors import ConfigError, PlyError, SourceIOError, UsageError
from plykit.normals import NormalGenerator
from plykit.readers import BufferedElementReader, ElementReader, ListElementReader
from plykit.schema import (
    ElementType,
    ListKind,
    PropertyDescriptor,
    ScalarKind,
    ScalarType,
    list_property,
    scalar_property,
)

__version__ = "0.1.0"

__all__ = [
    "BufferedElementReader",
    "ConfigError",
    "Element",
    "ElementReader",
    "ElementType",
    "ListElementReader",
    "ListKind",
    "NormalGenerator",
    "PlyError",
    "PropertyDescriptor",
    "ScalarKind",
    "ScalarType",
    "SourceIOError",
    "UsageError",
    "list_property",
    "scalar_property",
]
