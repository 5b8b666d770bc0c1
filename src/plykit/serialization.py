"""
Serialization helpers for plykit objects (ElementType, Element, element streams).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Tuple

import yaml

from plykit.element import Element
from plykit.errors import UsageError
from plykit.schema import (
    ElementType,
    ListKind,
    PropertyDescriptor,
    ScalarKind,
    ScalarType,
)


def property_to_dict(p: PropertyDescriptor) -> Dict[str, Any]:
    if isinstance(p.kind, ListKind):
        return {
            "name": p.name,
            "kind": "list",
            "count_type": p.kind.count_type.value,
            "item_type": p.kind.item_type.value,
        }
    if isinstance(p.kind, ScalarKind):
        return {"name": p.name, "kind": "scalar", "type": p.kind.data_type.value}
    raise TypeError(f"Unsupported property kind: {type(p.kind)}")


def property_from_dict(d: Dict[str, Any]) -> PropertyDescriptor:
    k = d.get("kind")
    if k == "scalar":
        return PropertyDescriptor(d["name"], ScalarKind(ScalarType.parse(d["type"])))
    if k == "list":
        return PropertyDescriptor(
            d["name"],
            ListKind(ScalarType.parse(d["count_type"]), ScalarType.parse(d["item_type"])),
        )
    raise TypeError(f"Unsupported property dict kind: {k}")


def element_type_to_dict(t: ElementType) -> Dict[str, Any]:
    return {"name": t.name, "properties": [property_to_dict(p) for p in t.properties]}


def element_type_from_dict(d: Dict[str, Any]) -> ElementType:
    return ElementType(d["name"], *(property_from_dict(p) for p in d.get("properties", [])))


def element_to_dict(e: Element) -> Dict[str, Any]:
    return e.to_dict()


def element_from_dict(t: ElementType, d: Dict[str, Any]) -> Element:
    e = Element(t)
    for name, value in d.items():
        e[name] = value
    return e


def elements_to_dict(t: ElementType, elements: Iterable[Element]) -> Dict[str, Any]:
    values = []
    for e in elements:
        if e.element_type != t:
            raise UsageError(f"Element of type {e.element_type.name!r} in a {t.name!r} stream")
        values.append(element_to_dict(e))
    return {"element_type": element_type_to_dict(t), "elements": values}


def elements_from_dict(d: Dict[str, Any]) -> Tuple[ElementType, List[Element]]:
    t = element_type_from_dict(d["element_type"])
    return t, [element_from_dict(t, v) for v in d.get("elements", [])]


def elements_to_json(t: ElementType, elements: Iterable[Element]) -> str:
    return json.dumps(elements_to_dict(t, elements), sort_keys=True)


def elements_from_json(s: str) -> Tuple[ElementType, List[Element]]:
    d = json.loads(s)
    return elements_from_dict(d)


def elements_to_yaml(t: ElementType, elements: Iterable[Element]) -> str:
    return yaml.safe_dump(elements_to_dict(t, elements), sort_keys=False)


def elements_from_yaml(s: str) -> Tuple[ElementType, List[Element]]:
    d = yaml.safe_load(s)
    return elements_from_dict(d)
