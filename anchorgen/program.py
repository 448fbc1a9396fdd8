"""Top-level generation of a CPI interface from an IDL."""

from __future__ import annotations

import json
import textwrap
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from importlib import metadata
from pathlib import Path

from anchorgen.event import generate_events
from anchorgen.idl import Idl, load_idl
from anchorgen.instruction import generate_ix_handlers, generate_ix_structs
from anchorgen.options import StructOpts
from anchorgen.state import generate_accounts
from anchorgen.typedef import generate_typedefs


def _gen_version() -> str:
    try:
        return metadata.version("anchorgen")
    except metadata.PackageNotFoundError:
        return "unknown"


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def _module(name: str, doc: str, body: str) -> str:
    inner = f"//! {doc}\nuse super::*;"
    if body:
        inner += f"\n{body}"
    return _block(f"pub mod {name}", inner)


def _names(names: Iterable[str] | None) -> frozenset[str]:
    return frozenset(names or ())


@dataclass(frozen=True)
class GeneratorOptions:
    """Where to find the IDL and how its types should be generated."""

    idl_path: str | Path
    skip: tuple[str, ...] | None = None
    zero_copy: tuple[str, ...] | None = None
    packed: tuple[str, ...] | None = None
    base_dir: str | Path | None = None
    compat_program_result: bool = False

    def to_generator(self) -> Generator:
        """Load the IDL, resolved against ``base_dir`` (or the working directory)."""
        base = Path(self.base_dir) if self.base_dir is not None else Path.cwd()
        idl = load_idl(base / self.idl_path)
        return Generator.from_idl(
            idl,
            skip=self.skip,
            zero_copy=self.zero_copy,
            packed=self.packed,
            compat_program_result=self.compat_program_result,
        )


@dataclass
class Generator:
    """Renders the CPI interface of one IDL."""

    idl: Idl
    struct_opts: Mapping[str, StructOpts] = field(default_factory=dict)
    compat_program_result: bool = False

    @classmethod
    def from_idl(
        cls,
        idl: Idl,
        skip: Iterable[str] | None = None,
        zero_copy: Iterable[str] | None = None,
        packed: Iterable[str] | None = None,
        compat_program_result: bool = False,
    ) -> Generator:
        """Build a generator, assigning options to every account and type name."""
        skip_set, zero_copy_set, packed_set = _names(skip), _names(zero_copy), _names(packed)
        all_names = {a.name for a in idl.accounts} | {t.name for t in idl.types}
        struct_opts = {
            name: StructOpts(
                skip=name in skip_set,
                packed=name in packed_set,
                zero_copy=name in zero_copy_set,
            )
            for name in sorted(all_names)
        }
        return cls(idl=idl, struct_opts=struct_opts, compat_program_result=compat_program_result)

    def generate_cpi_interface(self) -> str:
        """Render the complete Rust source of the CPI interface."""
        idl = self.idl
        accounts = generate_accounts(idl.types, idl.accounts, self.struct_opts)
        events = generate_events(idl.events, idl.types, self.struct_opts)
        typedefs = generate_typedefs(idl.types, self.struct_opts)
        ix_handlers = generate_ix_handlers(idl.instructions, self.compat_program_result)
        ix_structs = generate_ix_structs(idl.instructions)

        docs = (
            f" Anchor CPI crate generated from {idl.metadata.name} v{idl.metadata.version}"
            f" using anchor-gen v{_gen_version()}."
        )
        program_body = f"#![doc = {json.dumps(docs)}]\n\nuse super::*;"
        if ix_handlers:
            program_body += f"\n{ix_handlers}"

        parts = [
            "use anchor_lang::prelude::*;",
            f"declare_id!({json.dumps(idl.address)});",
            _module("typedefs", "User-defined types.", typedefs),
            _module("state", "Structs of accounts which hold state.", accounts),
            _module("events", "Structs of events generated by program.", events),
            _module("ix_accounts", "Accounts used in instructions.", ix_structs),
            "use ix_accounts::*;\npub use state::*;\npub use typedefs::*;",
            "#[program]\n" + _block(f"pub mod {idl.metadata.name}", program_body),
        ]
        return "\n\n".join(parts) + "\n"