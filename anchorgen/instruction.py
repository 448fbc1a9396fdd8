"""Rendering of instruction handlers and their account structs."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable

from anchorgen.account import generate_account_fields
from anchorgen.idl import IdlInstruction, to_pascal_case, to_snake_case, ty_to_rust_type


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def generate_ix_handler(ix: IdlInstruction, compat_program_result: bool = False) -> str:
    """Render a placeholder handler for one instruction."""
    params = [f"_ctx: Context<{to_pascal_case(ix.name)}>"]
    params.extend(f"_{to_snake_case(arg.name)}: {ty_to_rust_type(arg.ty)}" for arg in ix.args)
    result = "ProgramResult" if compat_program_result else "Result<()>"
    signature = (
        f"pub fn {to_snake_case(ix.name)}(\n"
        + textwrap.indent(",\n".join(params), "    ")
        + f",\n) -> {result}"
    )
    return _block(signature, 'unimplemented!("This program is a wrapper for CPI.")')


def generate_ix_structs(ixs: Iterable[IdlInstruction]) -> str:
    """Render the accounts struct of every instruction."""
    rendered = []
    for ix in ixs:
        accounts_name = to_pascal_case(ix.name)
        structs, fields = generate_account_fields(accounts_name, ix.accounts)
        header = f"pub struct {accounts_name}" if not ix.accounts else f"pub struct {accounts_name}<'info>"
        definition = "#[derive(Accounts)]\n" + _block(header, fields)
        rendered.append(f"{structs}\n\n{definition}" if structs else definition)
    return "\n\n".join(rendered)


def generate_ix_handlers(ixs: Iterable[IdlInstruction], compat_program_result: bool = False) -> str:
    """Render handlers for every instruction."""
    return "\n\n".join(generate_ix_handler(ix, compat_program_result) for ix in ixs)