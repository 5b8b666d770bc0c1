"""
Schema Objects for PLY Element Streams

Defines the descriptors every element stream is typed against:
    - ScalarType (storage width of a single number)
    - ScalarKind / ListKind (shape of a property)
    - PropertyDescriptor (named, typed field)
    - ElementType (named, ordered set of properties)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable
        - Know nothing about text or binary encodings
        - Describe records, they never hold values (see plykit.element)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from plykit.errors import UsageError


class ScalarType(Enum):
    """
    Numeric storage types a PLY property can declare.

    The enum value is the canonical PLY header name. Whatever the declared
    width, values are held widened: integer types as Python int, float types
    as Python float (double precision). This keeps a single record container
    for every schema.
    """

    CHAR = "char"
    UCHAR = "uchar"
    SHORT = "short"
    USHORT = "ushort"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    DOUBLE = "double"

    @property
    def is_integer(self) -> bool:
        return self not in (ScalarType.FLOAT, ScalarType.DOUBLE)

    @property
    def size(self) -> int:
        """Width in bytes of the on-disk representation."""
        return _SIZES[self]

    def coerce(self, value: Union[int, float]) -> Union[int, float]:
        """Widen a number into this type's storage family."""
        if isinstance(value, bool):
            raise UsageError(f"Boolean is not a valid {self.value} value")
        if self.is_integer:
            return int(value)
        return float(value)

    @classmethod
    def parse(cls, name: str) -> "ScalarType":
        """
        Resolve a header type name.

        Accepts the canonical names (char, uchar, ...) as well as the sized
        aliases (int8, uint8, ..., float64) found in newer files.

        Raises:
            UsageError: If the name is not a known PLY type
        """
        key = name.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise UsageError(f"Unknown scalar type: {name!r}")


_SIZES = {
    ScalarType.CHAR: 1,
    ScalarType.UCHAR: 1,
    ScalarType.SHORT: 2,
    ScalarType.USHORT: 2,
    ScalarType.INT: 4,
    ScalarType.UINT: 4,
    ScalarType.FLOAT: 4,
    ScalarType.DOUBLE: 8,
}

_ALIASES = {
    "int8": ScalarType.CHAR,
    "uint8": ScalarType.UCHAR,
    "int16": ScalarType.SHORT,
    "uint16": ScalarType.USHORT,
    "int32": ScalarType.INT,
    "uint32": ScalarType.UINT,
    "float32": ScalarType.FLOAT,
    "float64": ScalarType.DOUBLE,
}


@dataclass(frozen=True)
class ScalarKind:
    """A property holding exactly one number."""

    data_type: ScalarType


@dataclass(frozen=True)
class ListKind:
    """
    A property holding a variable-length sequence of numbers.

    Properties:
        count_type: Integer type the list length is encoded with
        item_type: Type of each item
    """

    count_type: ScalarType
    item_type: ScalarType

    def __post_init__(self):
        if not self.count_type.is_integer:
            raise UsageError(
                f"List count type must be an integer type, got {self.count_type.value}"
            )


PropertyKind = Union[ScalarKind, ListKind]


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    A named, typed field of an element type.

    Example:
        PropertyDescriptor("x", ScalarKind(ScalarType.FLOAT))
        PropertyDescriptor("vertex_indices", ListKind(ScalarType.UCHAR, ScalarType.INT))
    """

    name: str
    kind: PropertyKind

    @property
    def is_list(self) -> bool:
        return isinstance(self.kind, ListKind)

    @property
    def data_type(self) -> ScalarType:
        """Type of the stored numbers (the item type for lists)."""
        if isinstance(self.kind, ListKind):
            return self.kind.item_type
        return self.kind.data_type


def scalar_property(name: str, data_type: ScalarType) -> PropertyDescriptor:
    return PropertyDescriptor(name, ScalarKind(data_type))


def list_property(name: str, count_type: ScalarType, item_type: ScalarType) -> PropertyDescriptor:
    return PropertyDescriptor(name, ListKind(count_type, item_type))


class ElementType:
    """
    The schema shared by all elements of one section (e.g. "vertex", "face").

    Property order is kept because encoders need it, but equality ignores
    it: two types are equal when they have the same name and declare the
    same (name, kind) pairs.

    INVARIANTS:
        - Property names are unique
        - Instances are never mutated; extended() returns a new type
    """

    __slots__ = ("_name", "_properties", "_by_name")

    def __init__(self, name: str, *properties: PropertyDescriptor):
        by_name: Dict[str, PropertyDescriptor] = {}
        for prop in properties:
            if prop.name in by_name:
                raise UsageError(f"Duplicate property {prop.name!r} in element type {name!r}")
            by_name[prop.name] = prop
        self._name = name
        self._properties: Tuple[PropertyDescriptor, ...] = tuple(properties)
        self._by_name = by_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def properties(self) -> Tuple[PropertyDescriptor, ...]:
        return self._properties

    @property
    def property_names(self) -> List[str]:
        return [p.name for p in self._properties]

    def has_property(self, name: str) -> bool:
        return name in self._by_name

    def get_property(self, name: str) -> PropertyDescriptor:
        """
        Look up a property by name.

        Raises:
            UsageError: If the type does not declare the property
        """
        prop = self._by_name.get(name)
        if prop is None:
            raise UsageError(f"Element type {self._name!r} has no property {name!r}")
        return prop

    def find_property(self, name: str) -> Optional[PropertyDescriptor]:
        return self._by_name.get(name)

    def list_properties(self) -> List[PropertyDescriptor]:
        return [p for p in self._properties if p.is_list]

    def extended(self, *properties: PropertyDescriptor) -> "ElementType":
        """Return a type with the given properties appended, skipping names already declared."""
        extra = [p for p in properties if p.name not in self._by_name]
        if not extra:
            return self
        return ElementType(self._name, *self._properties, *extra)

    def __eq__(self, other):
        if not isinstance(other, ElementType):
            return NotImplemented
        return self._name == other._name and frozenset(self._properties) == frozenset(other._properties)

    def __hash__(self):
        return hash((self._name, frozenset(self._properties)))

    def __repr__(self):
        props = ", ".join(p.name for p in self._properties)
        return f"ElementType({self._name!r}, [{props}])"
