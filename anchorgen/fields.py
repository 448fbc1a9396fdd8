"""Rendering of struct field lists."""

from __future__ import annotations

from collections.abc import Iterable

from anchorgen.idl import (
    DefinedFields,
    IdlField,
    NamedFields,
    UnsupportedIdlError,
    to_snake_case,
    ty_to_rust_type,
)


def generate_struct_fields_from_list(fields: Iterable[IdlField]) -> str:
    """Render public struct fields, one per line, separated by commas."""
    return ",\n".join(f"pub {to_snake_case(f.name)}: {ty_to_rust_type(f.ty)}" for f in fields)


def defined_fields_as_list(fields: DefinedFields) -> list[IdlField]:
    """Return named fields as a list; no fields give an empty list."""
    if fields is None:
        return []
    if isinstance(fields, NamedFields):
        return list(fields.fields)
    raise UnsupportedIdlError("tuple fields are not supported in structs")


def generate_struct_fields(fields: DefinedFields) -> str:
    """Render the fields of a struct definition."""
    return generate_struct_fields_from_list(defined_fields_as_list(fields))