"""Decoding of fully resolved WIT descriptions from their JSON form.

The JSON refers to worlds, interfaces, type definitions and packages by
their index in the top-level arrays. References may appear before the
array that defines the item, so items are created on first use and filled
in when their definition is reached. Every reference to the same index
yields the same object.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, TypeVar

from witkit.ident import parse_ident
from witkit.primitives import parse_type
from witkit.resolve import (
    Constructor,
    Freestanding,
    Function,
    Interface,
    Method,
    Package,
    Param,
    Resolve,
    Static,
    TypeDef,
    World,
)
from witkit.text import Docs
from witkit.types import (
    BorrowedHandle,
    Case,
    Enum,
    EnumCase,
    Field,
    Flag,
    Flags,
    Future,
    List,
    Option,
    OwnedHandle,
    Record,
    Resource,
    Result,
    Stream,
    Tuple,
    Variant,
)

T = TypeVar("T")


class DecodeError(ValueError):
    """Raised when a WIT JSON document cannot be decoded."""


def decode_json(source: Any) -> Resolve:
    """Decode a JSON document from a readable file, str or bytes into a Resolve."""
    text = source.read() if hasattr(source, "read") else source
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    return decode(data)


def decode(data: Any) -> Resolve:
    """Decode an already parsed JSON value into a Resolve."""
    return _Decoder().decode(data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"expected an object for {what}, got {value!r}")
    return value


def _objects(value: Any, what: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"expected an array for {what}, got {value!r}")
    return [_object(item, what) for item in value]


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"expected a string for {what}, got {value!r}")
    return value


def _optional_string(value: Any, what: str) -> str | None:
    if value is None:
        return None
    return _string(value, what)


def _docs(value: Any) -> Docs:
    if value is None:
        return Docs()
    obj = _object(value, "docs")
    return Docs(contents=_string(obj.get("contents"), "docs contents"))


def _element(items: list[Any], index: int, factory: Callable[[], T]) -> T | None:
    """Return items[index], growing the list and creating the item if needed."""
    if index < 0:
        return None
    if len(items) <= index:
        items.extend([None] * (index + 1 - len(items)))
    if items[index] is None:
        items[index] = factory()
    return items[index]


class _Decoder:
    def __init__(self) -> None:
        self.res = Resolve()

    def decode(self, data: Any) -> Resolve:
        obj = _object(data, "resolve")
        for key, value in obj.items():
            if key == "worlds":
                self._fill_all(value, key, self._world_at, self._fill_world)
            elif key == "interfaces":
                self._fill_all(value, key, self._interface_at, self._fill_interface)
            elif key == "types":
                self._fill_all(value, key, self._typedef_at, self._fill_typedef)
            elif key == "packages":
                self._fill_all(value, key, self._package_at, self._fill_package)
        return self.res

    @staticmethod
    def _fill_all(
        value: Any,
        what: str,
        at: Callable[[int], Any],
        fill: Callable[[Any, dict[str, Any]], None],
    ) -> None:
        for index, obj in enumerate(_objects(value, what)):
            fill(at(index), obj)

    # Indexed items

    def _world_at(self, index: int) -> World | None:
        return _element(self.res.worlds, index, World)

    def _interface_at(self, index: int) -> Interface | None:
        return _element(self.res.interfaces, index, Interface)

    def _typedef_at(self, index: int) -> TypeDef | None:
        return _element(self.res.type_defs, index, TypeDef)

    def _package_at(self, index: int) -> Package | None:
        return _element(self.res.packages, index, Package)

    @staticmethod
    def _ref(
        value: Any,
        what: str,
        at: Callable[[int], Any],
        factory: Callable[[], Any],
        fill: Callable[[Any, dict[str, Any]], None],
    ) -> Any:
        if value is None:
            return None
        if _is_int(value):
            return at(value)
        if isinstance(value, dict):
            item = factory()
            fill(item, value)
            return item
        raise DecodeError(f"invalid {what} reference: {value!r}")

    def _world_ref(self, value: Any) -> World | None:
        return self._ref(value, "world", self._world_at, World, self._fill_world)

    def _interface_ref(self, value: Any) -> Interface | None:
        return self._ref(
            value, "interface", self._interface_at, Interface, self._fill_interface
        )

    def _typedef_ref(self, value: Any) -> TypeDef | None:
        return self._ref(value, "type", self._typedef_at, TypeDef, self._fill_typedef)

    def _package_ref(self, value: Any) -> Package | None:
        return self._ref(value, "package", self._package_at, Package, self._fill_package)

    @staticmethod
    def _map(value: Any, what: str, decode_item: Callable[[Any], Any]) -> dict[str, Any]:
        if value is None:
            return {}
        return {key: decode_item(item) for key, item in _object(value, what).items()}

    # Structures

    def _fill_world(self, world: World, obj: dict[str, Any]) -> None:
        for key, value in obj.items():
            if key == "name":
                world.name = _string(value, "world name")
            elif key == "imports":
                world.imports = self._map(value, "world imports", self._world_item)
            elif key == "exports":
                world.exports = self._map(value, "world exports", self._world_item)
            elif key == "package":
                world.package = self._package_ref(value)
            elif key == "docs":
                world.docs = _docs(value)

    def _fill_interface(self, iface: Interface, obj: dict[str, Any]) -> None:
        for key, value in obj.items():
            if key == "name":
                iface.name = _optional_string(value, "interface name")
            elif key == "types":
                iface.type_defs = self._map(value, "interface types", self._typedef_ref)
            elif key == "functions":
                iface.functions = self._map(value, "interface functions", self._function)
            elif key == "package":
                iface.package = self._package_ref(value)
            elif key == "docs":
                iface.docs = _docs(value)

    def _fill_typedef(self, td: TypeDef, obj: dict[str, Any]) -> None:
        for key, value in obj.items():
            if key == "kind":
                td.kind = self._kind(value)
            elif key == "name":
                td.name = _optional_string(value, "type name")
            elif key == "owner":
                td.owner = self._owner(value)
            elif key == "docs":
                td.docs = _docs(value)

    def _fill_package(self, pkg: Package, obj: dict[str, Any]) -> None:
        for key, value in obj.items():
            if key == "name":
                try:
                    pkg.name = parse_ident(_string(value, "package name"))
                except DecodeError:
                    raise
                except ValueError as exc:
                    raise DecodeError(f"invalid package name {value!r}: {exc}") from exc
            elif key == "interfaces":
                pkg.interfaces = self._map(value, "package interfaces", self._interface_ref)
            elif key == "worlds":
                pkg.worlds = self._map(value, "package worlds", self._world_ref)
            elif key == "docs":
                pkg.docs = _docs(value)

    # Enumerations

    def _world_item(self, value: Any) -> Any:
        if value is None:
            return None
        item = None
        for key, v in _object(value, "world item").items():
            if key == "interface":
                item = self._interface_ref(v)
            elif key == "function":
                item = self._function(v)
            elif key == "type":
                item = self._typedef_ref(v)
        return item

    def _type(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            try:
                return parse_type(value)
            except ValueError as exc:
                raise DecodeError(str(exc)) from exc
        if _is_int(value):
            return self._typedef_at(value)
        raise DecodeError(f"invalid type: {value!r}")

    def _owner(self, value: Any) -> Any:
        if value is None:
            return None
        owner = None
        for key, v in _object(value, "type owner").items():
            if key == "interface":
                owner = self._interface_ref(v)
            elif key == "world":
                owner = self._world_ref(v)
        return owner

    def _kind(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return Resource() if value == "resource" else None
        kind = None
        for key, v in _object(value, "type kind").items():
            decoded = self._kind_field(key, v)
            if decoded is not _UNKNOWN:
                kind = decoded
        return kind

    def _kind_field(self, key: str, v: Any) -> Any:
        if key == "record":
            obj = _object(v, "record") if v is not None else {}
            return Record(fields=[self._field(f) for f in _objects(obj.get("fields"), "fields")])
        if key == "resource":
            return Resource()
        if key == "handle":
            return self._handle(v)
        if key == "flags":
            obj = _object(v, "flags") if v is not None else {}
            return Flags(
                flags=[
                    Flag(name=_string(f.get("name"), "flag name"), docs=_docs(f.get("docs")))
                    for f in _objects(obj.get("flags"), "flags")
                ]
            )
        if key == "tuple":
            obj = _object(v, "tuple") if v is not None else {}
            types = obj.get("types")
            if types is not None and not isinstance(types, list):
                raise DecodeError(f"expected an array for tuple types, got {types!r}")
            return Tuple(types=[self._type(t) for t in types or []])
        if key == "variant":
            obj = _object(v, "variant") if v is not None else {}
            return Variant(cases=[self._case(c) for c in _objects(obj.get("cases"), "cases")])
        if key == "enum":
            obj = _object(v, "enum") if v is not None else {}
            return Enum(
                cases=[
                    EnumCase(name=_string(c.get("name"), "enum case name"), docs=_docs(c.get("docs")))
                    for c in _objects(obj.get("cases"), "cases")
                ]
            )
        if key == "option":
            return Option(type=self._type(v))
        if key == "result":
            obj = _object(v, "result") if v is not None else {}
            return Result(ok=self._type(obj.get("ok")), err=self._type(obj.get("err")))
        if key == "list":
            return List(type=self._type(v))
        if key == "future":
            return Future(type=self._type(v))
        if key == "stream":
            obj = _object(v, "stream") if v is not None else {}
            return Stream(element=self._type(obj.get("element")), end=self._type(obj.get("end")))
        if key == "type":
            return self._type(v)
        return _UNKNOWN

    def _handle(self, value: Any) -> Any:
        handle = None
        for key, v in _object(value, "handle").items():
            if key == "own":
                handle = OwnedHandle(type=self._typedef_ref(v))
            elif key == "borrow":
                handle = BorrowedHandle(type=self._typedef_ref(v))
        return handle

    def _field(self, obj: dict[str, Any]) -> Field:
        return Field(
            name=_string(obj.get("name"), "field name"),
            type=self._type(obj.get("type")),
            docs=_docs(obj.get("docs")),
        )

    def _case(self, obj: dict[str, Any]) -> Case:
        return Case(
            name=_string(obj.get("name"), "case name"),
            type=self._type(obj.get("type")),
            docs=_docs(obj.get("docs")),
        )

    def _param(self, obj: dict[str, Any]) -> Param:
        return Param(name=_string(obj.get("name"), "param name"), type=self._type(obj.get("type")))

    def _function(self, value: Any) -> Function | None:
        if value is None:
            return None
        f = Function()
        for key, v in _object(value, "function").items():
            if key == "name":
                f.name = _string(v, "function name")
            elif key == "kind":
                f.kind = self._function_kind(v)
            elif key == "params":
                f.params = [self._param(p) for p in _objects(v, "params")]
            elif key == "results":
                f.results = [self._param(p) for p in _objects(v, "results")]
            elif key == "docs":
                f.docs = _docs(v)
        return f

    def _function_kind(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return Freestanding() if value == "freestanding" else None
        kind = None
        for key, v in _object(value, "function kind").items():
            if key == "method":
                kind = Method(type=self._type(v))
            elif key == "static":
                kind = Static(type=self._type(v))
            elif key == "constructor":
                kind = Constructor(type=self._type(v))
        return kind


_UNKNOWN = object()