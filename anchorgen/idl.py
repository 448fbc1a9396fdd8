"""Data model, JSON loading and naming helpers for Anchor IDL documents."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from itertools import zip_longest
from pathlib import Path
from typing import Any, Iterator, Union


class UnsupportedIdlError(ValueError):
    """Raised when an IDL uses a construct the generator cannot render."""


class TypeKind(Enum):
    """The kinds of type an IDL can describe."""

    BOOL = "bool"
    U8 = "u8"
    I8 = "i8"
    U16 = "u16"
    I16 = "i16"
    U32 = "u32"
    I32 = "i32"
    F32 = "f32"
    U64 = "u64"
    I64 = "i64"
    F64 = "f64"
    U128 = "u128"
    I128 = "i128"
    U256 = "u256"
    I256 = "i256"
    BYTES = "bytes"
    STRING = "string"
    PUBKEY = "pubkey"
    OPTION = "option"
    COPTION = "coption"
    VEC = "vec"
    ARRAY = "array"
    DEFINED = "defined"
    GENERIC = "generic"


_PRIMITIVES = frozenset(
    {
        TypeKind.BOOL,
        TypeKind.U8,
        TypeKind.I8,
        TypeKind.U16,
        TypeKind.I16,
        TypeKind.U32,
        TypeKind.I32,
        TypeKind.F32,
        TypeKind.U64,
        TypeKind.I64,
        TypeKind.F64,
        TypeKind.U128,
        TypeKind.I128,
        TypeKind.U256,
        TypeKind.I256,
        TypeKind.BYTES,
        TypeKind.STRING,
        TypeKind.PUBKEY,
    }
)

_WRAPPERS = frozenset({TypeKind.OPTION, TypeKind.COPTION, TypeKind.VEC})

_RUST_NAMES = {
    TypeKind.BOOL: "bool",
    TypeKind.U8: "u8",
    TypeKind.I8: "i8",
    TypeKind.U16: "u16",
    TypeKind.I16: "i16",
    TypeKind.U32: "u32",
    TypeKind.I32: "i32",
    TypeKind.F32: "f32",
    TypeKind.U64: "u64",
    TypeKind.I64: "i64",
    TypeKind.F64: "f64",
    TypeKind.U128: "u128",
    TypeKind.I128: "i128",
    TypeKind.BYTES: "Vec<u8>",
    TypeKind.STRING: "String",
    TypeKind.PUBKEY: "Pubkey",
}


@dataclass(frozen=True)
class IdlType:
    """A type reference; ``length`` is an int or the name of a generic length."""

    kind: TypeKind
    inner: IdlType | None = None
    length: int | str | None = None
    name: str | None = None
    generics: tuple[Any, ...] = ()


@dataclass(frozen=True)
class IdlField:
    name: str
    ty: IdlType
    docs: tuple[str, ...] = ()


@dataclass(frozen=True)
class NamedFields:
    fields: tuple[IdlField, ...] = ()


@dataclass(frozen=True)
class TupleFields:
    types: tuple[IdlType, ...] = ()


DefinedFields = Union[NamedFields, TupleFields, None]


@dataclass(frozen=True)
class IdlEnumVariant:
    name: str
    fields: DefinedFields = None


@dataclass(frozen=True)
class IdlTypeDef:
    """A user-defined type; ``kind`` is "struct", "enum" or "type"."""

    name: str
    kind: str
    fields: DefinedFields = None
    variants: tuple[IdlEnumVariant, ...] = ()
    alias: IdlType | None = None


@dataclass(frozen=True)
class IdlInstructionAccount:
    name: str
    writable: bool = False
    signer: bool = False
    optional: bool = False


@dataclass(frozen=True)
class IdlInstructionAccounts:
    """A named group of accounts nested inside an instruction."""

    name: str
    accounts: tuple[IdlInstructionAccount | IdlInstructionAccounts, ...] = ()


@dataclass(frozen=True)
class IdlInstruction:
    name: str
    accounts: tuple[IdlInstructionAccount | IdlInstructionAccounts, ...]
    args: tuple[IdlField, ...]
    discriminator: tuple[int, ...]


@dataclass(frozen=True)
class IdlAccount:
    name: str
    discriminator: tuple[int, ...]


@dataclass(frozen=True)
class IdlEvent:
    name: str
    discriminator: tuple[int, ...]


@dataclass(frozen=True)
class IdlMetadata:
    name: str
    version: str
    spec: str
    description: str | None = None


@dataclass(frozen=True)
class Idl:
    address: str
    metadata: IdlMetadata
    instructions: tuple[IdlInstruction, ...]
    accounts: tuple[IdlAccount, ...] = ()
    events: tuple[IdlEvent, ...] = ()
    types: tuple[IdlTypeDef, ...] = ()


def _require(obj: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise ValueError(f"{where}: missing required key {key!r}") from None


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}: expected an object, got {value!r}")
    return value


def _sequence(value: Any, where: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ValueError(f"{where}: expected a list, got {value!r}")
    return value


def _string(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected a string, got {value!r}")
    return value


def _array_length(value: Any) -> int | str:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, Mapping) and set(value) == {"generic"}:
        return _string(value["generic"], "array length")
    raise ValueError(f"malformed array length: {value!r}")


def _generic_arg(value: Any) -> IdlType | str:
    obj = _mapping(value, "generic argument")
    kind = _require(obj, "kind", "generic argument")
    if kind == "type":
        return parse_type(_require(obj, "type", "generic argument"))
    if kind == "const":
        return _string(_require(obj, "value", "generic argument"), "generic argument")
    raise ValueError(f"unknown generic argument kind {kind!r}")


def parse_type(value: Any) -> IdlType:
    """Parse the JSON form of an IDL type."""
    if isinstance(value, str):
        try:
            kind = TypeKind(value)
        except ValueError:
            raise ValueError(f"unknown IDL type {value!r}") from None
        if kind not in _PRIMITIVES:
            raise ValueError(f"IDL type {value!r} needs a parameter")
        return IdlType(kind)
    if isinstance(value, Mapping) and len(value) == 1:
        ((key, body),) = value.items()
        if key in {k.value for k in _WRAPPERS}:
            return IdlType(TypeKind(key), inner=parse_type(body))
        if key == "array":
            items = _sequence(body, "array type")
            if len(items) != 2:
                raise ValueError(f"malformed array type: {value!r}")
            element, length = items
            return IdlType(TypeKind.ARRAY, inner=parse_type(element), length=_array_length(length))
        if key == "defined":
            obj = _mapping(body, "defined type")
            generics = _sequence(obj.get("generics", []), "defined type generics")
            return IdlType(
                TypeKind.DEFINED,
                name=_string(_require(obj, "name", "defined type"), "defined type name"),
                generics=tuple(_generic_arg(arg) for arg in generics),
            )
        if key == "generic":
            return IdlType(TypeKind.GENERIC, name=_string(body, "generic type"))
    raise ValueError(f"malformed IDL type: {value!r}")


def _parse_field(value: Any, where: str) -> IdlField:
    obj = _mapping(value, where)
    return IdlField(
        name=_string(_require(obj, "name", where), where),
        ty=parse_type(_require(obj, "type", where)),
        docs=tuple(obj.get("docs", ())),
    )


def _parse_defined_fields(value: Any, where: str) -> DefinedFields:
    if value is None:
        return None
    items = _sequence(value, where)
    if all(isinstance(item, Mapping) and "name" in item and "type" in item for item in items):
        return NamedFields(tuple(_parse_field(item, where) for item in items))
    return TupleFields(tuple(parse_type(item) for item in items))


def _parse_variant(value: Any) -> IdlEnumVariant:
    obj = _mapping(value, "enum variant")
    name = _string(_require(obj, "name", "enum variant"), "enum variant")
    return IdlEnumVariant(name, _parse_defined_fields(obj.get("fields"), f"variant {name}"))


def _parse_typedef(value: Any) -> IdlTypeDef:
    obj = _mapping(value, "type definition")
    name = _string(_require(obj, "name", "type definition"), "type definition")
    where = f"type {name}"
    body = _mapping(_require(obj, "type", where), where)
    kind = _require(body, "kind", where)
    if kind == "struct":
        return IdlTypeDef(name, "struct", fields=_parse_defined_fields(body.get("fields"), where))
    if kind == "enum":
        variants = _sequence(_require(body, "variants", where), where)
        return IdlTypeDef(name, "enum", variants=tuple(_parse_variant(v) for v in variants))
    if kind == "type":
        return IdlTypeDef(name, "type", alias=parse_type(_require(body, "alias", where)))
    raise ValueError(f"{where}: unknown kind {kind!r}")


def _parse_account_item(value: Any) -> IdlInstructionAccount | IdlInstructionAccounts:
    obj = _mapping(value, "instruction account")
    name = _string(_require(obj, "name", "instruction account"), "instruction account")
    if "accounts" in obj:
        items = _sequence(obj["accounts"], f"account group {name}")
        return IdlInstructionAccounts(name, tuple(_parse_account_item(item) for item in items))
    return IdlInstructionAccount(
        name=name,
        writable=bool(obj.get("writable", False)),
        signer=bool(obj.get("signer", False)),
        optional=bool(obj.get("optional", False)),
    )


def _discriminator(obj: Mapping[str, Any], where: str) -> tuple[int, ...]:
    return tuple(int(b) for b in _sequence(_require(obj, "discriminator", where), where))


def _parse_instruction(value: Any) -> IdlInstruction:
    obj = _mapping(value, "instruction")
    name = _string(_require(obj, "name", "instruction"), "instruction")
    where = f"instruction {name}"
    accounts = _sequence(_require(obj, "accounts", where), where)
    args = _sequence(_require(obj, "args", where), where)
    return IdlInstruction(
        name=name,
        accounts=tuple(_parse_account_item(item) for item in accounts),
        args=tuple(_parse_field(arg, where) for arg in args),
        discriminator=_discriminator(obj, where),
    )


def _parse_named(value: Any, where: str) -> tuple[str, tuple[int, ...]]:
    obj = _mapping(value, where)
    name = _string(_require(obj, "name", where), where)
    return name, _discriminator(obj, f"{where} {name}")


def parse_idl(data: str | bytes | Mapping[str, Any]) -> Idl:
    """Parse an IDL from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    obj = _mapping(data, "IDL")
    meta = _mapping(_require(obj, "metadata", "IDL"), "metadata")
    metadata = IdlMetadata(
        name=_string(_require(meta, "name", "metadata"), "metadata name"),
        version=_string(_require(meta, "version", "metadata"), "metadata version"),
        spec=_string(_require(meta, "spec", "metadata"), "metadata spec"),
        description=meta.get("description"),
    )
    return Idl(
        address=_string(_require(obj, "address", "IDL"), "address"),
        metadata=metadata,
        instructions=tuple(
            _parse_instruction(ix) for ix in _sequence(_require(obj, "instructions", "IDL"), "instructions")
        ),
        accounts=tuple(
            IdlAccount(*_parse_named(a, "account")) for a in _sequence(obj.get("accounts", []), "accounts")
        ),
        events=tuple(IdlEvent(*_parse_named(e, "event")) for e in _sequence(obj.get("events", []), "events")),
        types=tuple(_parse_typedef(t) for t in _sequence(obj.get("types", []), "types")),
    )


def load_idl(path: str | Path) -> Idl:
    """Read and parse an IDL JSON file."""
    return parse_idl(Path(path).read_text(encoding="utf-8"))


_SEPARATORS = re.compile(r"[\W_]+")


def _words(name: str) -> Iterator[str]:
    for word in filter(None, _SEPARATORS.split(name)):
        start = 0
        mode: str | None = None
        for i, (char, following) in enumerate(zip_longest(word, word[1:])):
            if following is None:
                yield word[start:]
                break
            if char.islower():
                next_mode = "lower"
            elif char.isupper():
                next_mode = "upper"
            else:
                next_mode = mode
            if next_mode == "lower" and following.isupper():
                yield word[start : i + 1]
                start, mode = i + 1, None
            elif mode == "upper" and char.isupper() and following.islower():
                yield word[start:i]
                start, mode = i, None
            else:
                mode = next_mode


def to_snake_case(name: str) -> str:
    """Convert an identifier to snake_case."""
    return "_".join(word.lower() for word in _words(name))


def to_pascal_case(name: str) -> str:
    """Convert an identifier to PascalCase."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _words(name))


def ty_to_rust_type(ty: IdlType) -> str:
    """Render an IDL type as Rust source."""
    if ty.kind in _RUST_NAMES:
        return _RUST_NAMES[ty.kind]
    if ty.kind is TypeKind.OPTION:
        return f"Option<{ty_to_rust_type(ty.inner)}>"
    if ty.kind is TypeKind.VEC:
        return f"Vec<{ty_to_rust_type(ty.inner)}>"
    if ty.kind is TypeKind.ARRAY:
        return f"[{ty_to_rust_type(ty.inner)}; {ty.length}]"
    if ty.kind is TypeKind.DEFINED:
        return ty.name
    raise UnsupportedIdlError(f"type {ty.kind.value!r} is not supported")