"""Rendering of event structs."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable, Mapping, Sequence

from anchorgen.fields import defined_fields_as_list, generate_struct_fields
from anchorgen.idl import DefinedFields, IdlEvent, IdlTypeDef
from anchorgen.options import StructOpts, struct_opts_for
from anchorgen.typedef import get_field_list_properties


def _block(header: str, body: str) -> str:
    if not body:
        return f"{header} {{}}"
    return f"{header} {{\n{textwrap.indent(body, '    ')}\n}}"


def generate_event(defs: Sequence[IdlTypeDef], struct_name: str, fields: DefinedFields) -> str:
    """Render an event struct."""
    body = generate_struct_fields(fields)
    props = get_field_list_properties(defs, defined_fields_as_list(fields))
    attrs = ["#[event]", "#[derive(Debug)]"]
    if props.can_derive_default:
        attrs.append("#[derive(Default)]")
    return "\n".join([*attrs, _block(f"pub struct {struct_name}", body)])


def generate_events(
    events: Iterable[IdlEvent],
    typedefs: Sequence[IdlTypeDef],
    struct_opts: Mapping[str, StructOpts],
) -> str:
    """Render every event that is not skipped and is defined as a struct."""
    rendered = []
    for event in events:
        if struct_opts_for(struct_opts, event.name).skip:
            continue
        definition = next((d for d in typedefs if d.name == event.name), None)
        if definition is None:
            raise ValueError(f"event {event.name!r} has no type definition in the IDL")
        if definition.kind == "struct":
            rendered.append(generate_event(typedefs, event.name, definition.fields))
    return "\n\n".join(rendered)