"""Per-type generation options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class StructOpts:
    """How a named type should be generated."""

    skip: bool = False
    packed: bool = False
    zero_copy: bool = False


def struct_opts_for(opts: Mapping[str, StructOpts], name: str) -> StructOpts:
    """Return the options for ``name``, or the defaults when none are set."""
    return opts.get(name, StructOpts())