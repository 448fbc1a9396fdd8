"""Rendering of account state structs."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable, Mapping, Sequence

from anchorgen.fields import defined_fields_as_list, generate_struct_fields_from_list
from anchorgen.idl import IdlAccount, IdlField, IdlTypeDef, UnsupportedIdlError
from anchorgen.options import StructOpts, struct_opts_for
from anchorgen.typedef import get_field_list_properties


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def generate_account(
    defs: Sequence[IdlTypeDef],
    account_name: str,
    fields: Iterable[IdlField],
    opts: StructOpts,
) -> str:
    """Render an account struct with its discriminator and unchecked deserializer."""
    fields = list(fields)
    props = get_field_list_properties(defs, fields)

    if opts.zero_copy:
        attrs = [
            "#[account(zero_copy(unsafe))]",
            "#[repr(packed)]" if opts.packed else "#[repr(C)]",
        ]
    else:
        attrs = ["#[account]"]
    attrs.append(f"/// Account: {account_name}")
    if props.can_copy and not opts.zero_copy:
        attrs.append("#[derive(Copy)]")
    if props.can_derive_default:
        attrs.append("#[derive(Default)]")

    body = "_discriminator: [u8; 8]"
    rendered = generate_struct_fields_from_list(fields)
    if rendered:
        body += ",\n" + rendered
    struct = "\n".join([*attrs, _block(f"pub struct {account_name}", body)])

    method = _block(
        "pub fn deserialize_unchecked(data: &[u8]) -> std::io::Result<Self>",
        f"let mut data_mut = data;\n{account_name}::deserialize(&mut data_mut)",
    )
    return f"{struct}\n\n" + _block(f"impl {account_name}", method)


def _find_def(defs: Iterable[IdlTypeDef], name: str) -> IdlTypeDef:
    found = next((d for d in defs if d.name == name), None)
    if found is None:
        raise ValueError(f"account {name!r} has no type definition in the IDL")
    return found


def generate_accounts(
    typedefs: Sequence[IdlTypeDef],
    account_defs: Iterable[IdlAccount],
    struct_opts: Mapping[str, StructOpts],
) -> str:
    """Render every account struct of the IDL."""
    rendered = []
    for account in account_defs:
        definition = _find_def(typedefs, account.name)
        if definition.kind == "enum":
            raise UnsupportedIdlError(f"unexpected enum account {definition.name!r}")
        if definition.kind != "struct":
            raise UnsupportedIdlError(f"unexpected type account {definition.name!r}")
        rendered.append(
            generate_account(
                typedefs,
                definition.name,
                defined_fields_as_list(definition.fields),
                struct_opts_for(struct_opts, definition.name),
            )
        )
    return "\n\n".join(rendered)