"""Type properties and generation of user-defined structs and enums."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from anchorgen.fields import defined_fields_as_list, generate_struct_fields
from anchorgen.idl import (
    DefinedFields,
    IdlEnumVariant,
    IdlField,
    IdlType,
    IdlTypeDef,
    NamedFields,
    TupleFields,
    TypeKind,
    UnsupportedIdlError,
    to_snake_case,
    ty_to_rust_type,
)
from anchorgen.options import StructOpts, struct_opts_for


@dataclass(frozen=True)
class FieldListProperties:
    """Which derives a list of fields allows."""

    can_copy: bool = False
    can_derive_default: bool = False


_BOTH = FieldListProperties(can_copy=True, can_derive_default=True)

_PLAIN = frozenset(
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
        TypeKind.PUBKEY,
    }
)

_MAX_DEFAULT_ARRAY_LEN = 32


def _both(a: FieldListProperties, b: FieldListProperties) -> FieldListProperties:
    return FieldListProperties(
        can_copy=a.can_copy and b.can_copy,
        can_derive_default=a.can_derive_default and b.can_derive_default,
    )


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def _find_def(defs: Iterable[IdlTypeDef], name: str | None) -> IdlTypeDef:
    found = next((d for d in defs if d.name == name), None)
    if found is None:
        raise ValueError(f"type {name!r} is not defined in the IDL")
    return found


def get_defined_fields_list_properties(
    defs: Sequence[IdlTypeDef], fields: DefinedFields
) -> FieldListProperties:
    """Properties of named or tuple fields."""
    if isinstance(fields, NamedFields):
        types = [f.ty for f in fields.fields]
    elif isinstance(fields, TupleFields):
        types = list(fields.types)
    else:
        types = []
    return get_type_list_properties(defs, types)


def get_field_list_properties(defs: Sequence[IdlTypeDef], fields: Iterable[IdlField]) -> FieldListProperties:
    """Properties of a list of named fields."""
    return get_type_list_properties(defs, [f.ty for f in fields])


def get_type_list_properties(defs: Sequence[IdlTypeDef], types: Iterable[IdlType]) -> FieldListProperties:
    """Properties shared by every type in the list."""
    result = _BOTH
    for ty in types:
        result = _both(result, get_type_properties(defs, ty))
    return result


def get_variant_list_properties(
    defs: Sequence[IdlTypeDef], variants: Iterable[IdlEnumVariant]
) -> FieldListProperties:
    """Properties shared by the payloads of every enum variant."""
    result = _BOTH
    for variant in variants:
        if isinstance(variant.fields, NamedFields):
            props = get_field_list_properties(defs, variant.fields.fields)
        elif isinstance(variant.fields, TupleFields):
            props = get_type_list_properties(defs, variant.fields.types)
        else:
            continue
        result = _both(result, props)
    return result


def get_type_properties(defs: Sequence[IdlTypeDef], ty: IdlType) -> FieldListProperties:
    """Whether a type can derive Copy and Default."""
    kind = ty.kind
    if kind in _PLAIN:
        return _BOTH
    if kind is TypeKind.BYTES:
        return FieldListProperties(can_copy=False, can_derive_default=False)
    if kind in (TypeKind.STRING, TypeKind.VEC):
        return FieldListProperties(can_copy=False, can_derive_default=True)
    if kind is TypeKind.DEFINED:
        definition = _find_def(defs, ty.name)
        if definition.kind == "struct":
            return get_field_list_properties(defs, defined_fields_as_list(definition.fields))
        if definition.kind == "enum":
            return get_variant_list_properties(defs, definition.variants)
        raise UnsupportedIdlError(f"type alias {definition.name!r} is not supported")
    if kind is TypeKind.OPTION:
        return get_type_properties(defs, ty.inner)
    if kind is TypeKind.ARRAY:
        inner = get_type_properties(defs, ty.inner)
        sized = isinstance(ty.length, int) and ty.length <= _MAX_DEFAULT_ARRAY_LEN
        return FieldListProperties(
            can_copy=inner.can_copy,
            can_derive_default=sized and inner.can_derive_default,
        )
    raise UnsupportedIdlError(f"type {kind.value!r} is not supported")


def generate_enum_fields(fields: Iterable[IdlField]) -> str:
    """Render the named fields of an enum variant."""
    return ",\n".join(f"{to_snake_case(f.name)}: {ty_to_rust_type(f.ty)}" for f in fields)


def generate_enum_tuple_types(types: Iterable[IdlType]) -> str:
    """Render the types of a tuple enum variant."""
    return ", ".join(ty_to_rust_type(ty) for ty in types)


def generate_struct(
    defs: Sequence[IdlTypeDef], struct_name: str, fields: DefinedFields, opts: StructOpts
) -> str:
    """Render a user-defined struct."""
    body = generate_struct_fields(fields)
    props = get_field_list_properties(defs, defined_fields_as_list(fields))

    if opts.zero_copy:
        attrs = [
            "#[derive(::borsh::BorshSerialize, ::borsh::BorshDeserialize)]",
            "#[zero_copy(unsafe)]",
            "#[repr(packed)]" if opts.packed else "#[repr(C)]",
        ]
    else:
        attrs = ["#[derive(AnchorSerialize, AnchorDeserialize, Clone)]"]
        if props.can_copy:
            attrs.append("#[derive(Copy)]")
    attrs.append("#[derive(Debug)]")
    if props.can_derive_default:
        attrs.append("#[derive(Default)]")
    return "\n".join([*attrs, _block(f"pub struct {struct_name}", body)])


def _render_variant(variant: IdlEnumVariant) -> str:
    if isinstance(variant.fields, NamedFields):
        return _block(variant.name, generate_enum_fields(variant.fields.fields))
    if isinstance(variant.fields, TupleFields):
        return f"{variant.name}({generate_enum_tuple_types(variant.fields.types)})"
    return variant.name


def generate_enum(defs: Sequence[IdlTypeDef], enum_name: str, variants: Sequence[IdlEnumVariant]) -> str:
    """Render a user-defined enum, with a Default impl when the first variant has no payload."""
    rendered = [_render_variant(v) for v in variants]
    props = get_variant_list_properties(defs, variants)

    if not variants:
        raise ValueError(f"enum {enum_name!r} has no variants")
    first = variants[0].fields
    has_payload = (isinstance(first, NamedFields) and bool(first.fields)) or (
        isinstance(first, TupleFields) and bool(first.types)
    )

    attrs = ["#[derive(AnchorSerialize, AnchorDeserialize, Clone, Debug)]"]
    if props.can_copy:
        attrs.append("#[derive(Copy)]")
    code = "\n".join([*attrs, _block(f"pub enum {enum_name}", ",\n".join(rendered))])
    if not has_payload:
        default_fn = _block("fn default() -> Self", f"Self::{variants[0].name}")
        code += "\n\n" + _block(f"impl Default for {enum_name}", default_fn)
    return code


def generate_typedefs(typedefs: Sequence[IdlTypeDef], struct_opts: Mapping[str, StructOpts]) -> str:
    """Render every user-defined type that is not skipped."""
    rendered = []
    for definition in typedefs:
        opts = struct_opts_for(struct_opts, definition.name)
        if opts.skip:
            continue
        if definition.kind == "struct":
            rendered.append(generate_struct(typedefs, definition.name, definition.fields, opts))
        elif definition.kind == "enum":
            rendered.append(generate_enum(typedefs, definition.name, definition.variants))
        else:
            raise UnsupportedIdlError(f"type alias {definition.name!r} is not supported")
    return "\n\n".join(rendered)