"""Command line entry point and convenience functions for generation."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from anchorgen.presets import preset_names, preset_options
from anchorgen.program import GeneratorOptions


def _tuple(names: Iterable[str] | None) -> tuple[str, ...] | None:
    return None if names is None else tuple(names)


def generate_cpi_crate(idl_path: str | Path, base_dir: str | Path | None = None) -> str:
    """Render the CPI interface of an IDL with default options."""
    return GeneratorOptions(idl_path=idl_path, base_dir=base_dir).to_generator().generate_cpi_interface()


def generate_cpi_interface(
    idl_path: str | Path,
    base_dir: str | Path | None = None,
    skip: Iterable[str] | None = None,
    zero_copy: Iterable[str] | None = None,
    packed: Iterable[str] | None = None,
    compat_program_result: bool = False,
) -> str:
    """Render the CPI interface of an IDL with per-type options."""
    opts = GeneratorOptions(
        idl_path=idl_path,
        base_dir=base_dir,
        skip=_tuple(skip),
        zero_copy=_tuple(zero_copy),
        packed=_tuple(packed),
        compat_program_result=compat_program_result,
    )
    return opts.to_generator().generate_cpi_interface()


def _split(values: list[str] | None) -> list[str]:
    return [name for value in values or () for name in value.split(",") if name.strip()]


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anchorgen", description="Generate an Anchor CPI interface from a JSON IDL."
    )
    parser.add_argument("idl_path", help="path to the JSON IDL")
    parser.add_argument("--base-dir", help="directory the IDL path is relative to")
    parser.add_argument("--preset", choices=preset_names(), help="use the options of a known program")
    parser.add_argument("--skip", action="append", metavar="NAME", help="type to leave out")
    parser.add_argument("--zero-copy", action="append", metavar="NAME", help="zero-copy type")
    parser.add_argument("--packed", action="append", metavar="NAME", help="repr(packed) type")
    parser.add_argument(
        "--compat-program-result", action="store_true", help="handlers return ProgramResult"
    )
    parser.add_argument("-o", "--output", help="file to write instead of standard output")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the generator from the command line."""
    args = _parser().parse_args(argv)
    skip, zero_copy, packed = _split(args.skip), _split(args.zero_copy), _split(args.packed)
    if args.preset:
        preset = preset_options(args.preset)
        skip = [*(preset.skip or ()), *skip]
        zero_copy = [*(preset.zero_copy or ()), *zero_copy]
        packed = [*(preset.packed or ()), *packed]
    try:
        code = generate_cpi_interface(
            args.idl_path,
            base_dir=args.base_dir,
            skip=skip,
            zero_copy=zero_copy,
            packed=packed,
            compat_program_result=args.compat_program_result,
        )
        if args.output:
            Path(args.output).write_text(code, encoding="utf-8")
        else:
            sys.stdout.write(code)
    except (OSError, ValueError) as exc:
        print(f"anchorgen: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())