"""Rendering of instruction account fields and nested account structs."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable

from anchorgen.idl import (
    IdlInstructionAccount,
    IdlInstructionAccounts,
    to_pascal_case,
    to_snake_case,
)


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def _single_field(info: IdlInstructionAccount) -> str:
    ty = "Signer<'info>" if info.signer else "AccountInfo<'info>"
    field = f"pub {to_snake_case(info.name)}: {ty}"
    return f"#[account(mut)]\n{field}" if info.writable else field


def generate_account_fields(
    name: str,
    accounts: Iterable[IdlInstructionAccount | IdlInstructionAccounts],
) -> tuple[str, str]:
    """Render the fields of an accounts struct.

    Returns the nested structs that composite groups need, and the fields
    themselves.
    """
    structs: list[str] = []
    fields: list[str] = []
    for account in accounts:
        if isinstance(account, IdlInstructionAccounts):
            field_name = f"{name}{to_snake_case(account.name)}"
            sub_name = f"{name}{to_pascal_case(account.name)}"
            sub_structs, sub_fields = generate_account_fields(sub_name, account.accounts)
            if sub_structs:
                structs.append(sub_structs)
            structs.append(
                "#[derive(Accounts)]\n" + _block(f"pub struct {sub_name}<'info>", sub_fields)
            )
            fields.append(f"pub {field_name}: {sub_name}<'info>")
        else:
            fields.append(_single_field(account))
    return "\n\n".join(structs), ",\n".join(fields)