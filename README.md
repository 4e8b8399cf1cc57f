# witkit

witkit reads fully resolved WIT (WebAssembly Interface Type) descriptions in
the JSON form produced by `wasm-tools component wit -j`. It turns them into a
graph of Python objects that you can walk, measure with the Canonical ABI and
render back to WIT text.

## Installation

```
pip install witkit
```

## Decoding a resolved package

```python
from witkit.codec import decode_json

with open("wasi-clocks.wit.json") as f:
    res = decode_json(f)

print(res.wit(None, ""))   # WIT text for every package in the resolve
```

`decode_json` takes an open text or binary file, or a JSON `str` or `bytes`.
`decode` takes data that has already been parsed, such as a `dict`. Malformed
input raises `witkit.codec.DecodeError`, a subclass of `ValueError`.

Items in the JSON refer to each other by index into the top-level `worlds`,
`interfaces`, `types` and `packages` arrays; every reference to the same index
becomes the same Python object.

## Walking the graph

A `Resolve` (in `witkit.resolve`) holds the lists `worlds`, `interfaces`,
`type_defs` and `packages`, whose `World`, `Interface`, `TypeDef` and
`Package` objects refer to each other.

```python
for world in res.worlds:
    for name, item in world.all_imports():
        print(world.name, "imports", name, item.wit_kind())
    for func in world.all_functions():
        print("function", func.name, func.is_freestanding())
```

`all_imports()` and `all_exports()` yield `(name, item)` pairs in a fixed
order: interfaces first, then types, then functions, each group sorted by the
item's own name and then by its key. `World.all_functions()` yields the
imported functions, then the exported ones.

A resource `TypeDef` finds its functions in its owner through
`constructor()`, `methods()` and `static_functions()`. `root()` follows a
chain of type aliases back to the type it names, and `package()` returns the
package of the type's owner.

## WIT text

Every node has `wit_kind()` and `wit(ctx, name)`. `Resolve.wit(None, "")`
renders every package, separated by blank lines, so the result may stand for
several WIT files. Names that are WIT keywords are escaped with `%`, short
records, flags, variants and enums are written on one line, and `Docs` are
rendered as `///` comments wrapped near 80 columns. The helpers `indent`,
`unwrap` and `escape` live in `witkit.text`.

## Canonical ABI size and alignment

Every type kind has `size()` and `align()` methods:

```python
from witkit.primitives import String, U8, align, discriminant, parse_type
from witkit.types import Record, Field

rec = Record(fields=[Field(name="a", type=U8()), Field(name="b", type=String())])
rec.size(), rec.align()   # (12, 4)
align(5, 4)               # 8
discriminant(300)         # U16()
parse_type("float64")     # Float64()
```

`Tuple`, `Enum`, `Option` and `Result` have a `despecialize()` method that
turns them into a `Record` or `Variant`, and they are sized through it.
`witkit.primitives.despecialize(kind)` calls that method where it exists and
otherwise returns the kind unchanged. `Future` and `Stream` report a size and
alignment of 0.

## Identifiers

```python
from witkit.ident import parse_ident

ident = parse_ident("wasi:io/streams@0.2.0")
ident.namespace, ident.package, ident.extension   # ("wasi", "io", "streams")
str(ident)                                         # "wasi:io/streams@0.2.0"
ident.unversioned_string()                         # "wasi:io/streams"
```

If the namespace or the package name is missing, or the version is not valid
SemVer, `parse_ident` raises `ValueError`.

## What witkit does not do

witkit does not parse WIT source text; it only reads the resolved JSON form,
so another tool has to produce that JSON first. It does not generate bindings
or code for any language, and it has no command-line interface.

## Running the tests

```
pip install -e ".[test]"
pytest
```