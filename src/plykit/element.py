"""
Element: one typed record of a PLY element stream.

An Element is bound to a single ElementType for its whole life and stores
values by property name. Every access is checked against that type, so the
same container serves any per-file schema.

Storage:
    - integer scalar types  -> int
    - float scalar types    -> float
    - list properties       -> list of int or float (per item type)

INVARIANTS:
    - No value is ever stored for an undeclared property
    - Reading an unset scalar is a UsageError
    - An unset list property reads as an empty list
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from plykit.errors import UsageError
from plykit.schema import ElementType, PropertyDescriptor

Number = Union[int, float]


class Element:
    """
    A record of named scalar and list values.

    Example:
        vertex = Element(vertex_type)
        vertex.set_double("x", 1.5)
        vertex.get_double("x")      # 1.5
        vertex["y"] = 2             # dispatches on the declared kind
    """

    __slots__ = ("_type", "_values")

    # Elements are mutable
    __hash__ = None

    def __init__(self, element_type: ElementType):
        self._type = element_type
        self._values: Dict[str, Any] = {}

    @property
    def element_type(self) -> ElementType:
        return self._type

    # -------------------------------------------------------------------------
    # Access checks
    # -------------------------------------------------------------------------

    def _scalar(self, name: str) -> PropertyDescriptor:
        prop = self._type.get_property(name)
        if prop.is_list:
            raise UsageError(f"Property {name!r} of {self._type.name!r} is a list, not a scalar")
        return prop

    def _list(self, name: str) -> PropertyDescriptor:
        prop = self._type.get_property(name)
        if not prop.is_list:
            raise UsageError(f"Property {name!r} of {self._type.name!r} is a scalar, not a list")
        return prop

    def _read_scalar(self, name: str) -> Number:
        self._scalar(name)
        try:
            return self._values[name]
        except KeyError:
            raise UsageError(f"Property {name!r} of {self._type.name!r} has not been set")

    # -------------------------------------------------------------------------
    # Scalars
    # -------------------------------------------------------------------------

    def get_int(self, name: str) -> int:
        return int(self._read_scalar(name))

    def get_double(self, name: str) -> float:
        return float(self._read_scalar(name))

    def set_int(self, name: str, value: int) -> None:
        prop = self._scalar(name)
        self._values[name] = prop.data_type.coerce(value)

    def set_double(self, name: str, value: float) -> None:
        prop = self._scalar(name)
        self._values[name] = prop.data_type.coerce(value)

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    def get_int_list(self, name: str) -> List[int]:
        self._list(name)
        return [int(v) for v in self._values.get(name, ())]

    def get_double_list(self, name: str) -> List[float]:
        self._list(name)
        return [float(v) for v in self._values.get(name, ())]

    def set_int_list(self, name: str, values: Sequence[int]) -> None:
        prop = self._list(name)
        self._values[name] = [prop.data_type.coerce(v) for v in values]

    def set_double_list(self, name: str, values: Sequence[float]) -> None:
        prop = self._list(name)
        self._values[name] = [prop.data_type.coerce(v) for v in values]

    # -------------------------------------------------------------------------
    # Generic access
    # -------------------------------------------------------------------------

    def __getitem__(self, name: str) -> Union[Number, List[Number]]:
        prop = self._type.get_property(name)
        if prop.is_list:
            return list(self._values.get(name, ()))
        return self._read_scalar(name)

    def __setitem__(self, name: str, value) -> None:
        prop = self._type.get_property(name)
        if prop.is_list:
            if isinstance(value, (int, float)):
                raise UsageError(f"Property {name!r} of {self._type.name!r} expects a sequence")
            self._values[name] = [prop.data_type.coerce(v) for v in value]
        else:
            if not isinstance(value, (int, float)):
                raise UsageError(f"Property {name!r} of {self._type.name!r} expects a number")
            self._values[name] = prop.data_type.coerce(value)

    def is_set(self, name: str) -> bool:
        self._type.get_property(name)
        return name in self._values

    def copy(self, element_type: Optional[ElementType] = None) -> "Element":
        """
        Copy this element, optionally onto another type.

        When a target type is given, values are carried over for every
        property it declares with the same kind; the rest stay unset.
        """
        target = element_type or self._type
        clone = Element(target)
        for name, value in self._values.items():
            prop = target.find_property(name)
            if prop is None or prop.kind != self._type.get_property(name).kind:
                continue
            clone._values[name] = list(value) if prop.is_list else value
        return clone

    def _extend(self, element_type: ElementType) -> None:
        """
        Widen this element to a type that declares every current property.

        Added scalars are set to zero, added lists stay unset (empty).
        Used by BufferedElementReader for schema extension.
        """
        if element_type == self._type:
            return
        for prop in self._type.properties:
            if element_type.find_property(prop.name) != prop:
                raise UsageError(
                    f"Cannot widen {self._type.name!r}: property {prop.name!r} "
                    f"is missing or changed in {element_type!r}"
                )
        for prop in element_type.properties:
            if not prop.is_list and not self._type.has_property(prop.name):
                self._values[prop.name] = prop.data_type.coerce(0)
        self._type = element_type

    def to_dict(self) -> Dict[str, Any]:
        """Values of all set properties, in declaration order."""
        out: Dict[str, Any] = {}
        for prop in self._type.properties:
            if prop.name in self._values:
                value = self._values[prop.name]
                out[prop.name] = list(value) if prop.is_list else value
        return out

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self._type == other._type and self._values == other._values

    def approx_equals(self, other: "Element", epsilon: float) -> bool:
        """
        Equality with an absolute tolerance on floating values.

        Integer values, list lengths and the set/unset state of every
        property must still match exactly.
        """
        if not isinstance(other, Element) or self._type != other._type:
            return False
        if self._values.keys() != other._values.keys():
            return False
        for name, mine in self._values.items():
            theirs = other._values[name]
            if self._type.get_property(name).is_list:
                if len(mine) != len(theirs):
                    return False
                if not all(_close(a, b, epsilon) for a, b in zip(mine, theirs)):
                    return False
            elif not _close(mine, theirs, epsilon):
                return False
        return True

    def __repr__(self):
        return f"Element({self._type.name!r}, {self.to_dict()!r})"


def _close(a: Number, b: Number, epsilon: float) -> bool:
    if isinstance(a, float) or isinstance(b, float):
        return abs(a - b) <= epsilon
    return a == b
