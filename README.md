# anchorgen

`anchorgen` reads the JSON IDL of an Anchor program and writes the Rust
source of a cross-program-invocation (CPI) client for it. The output holds:

- a `typedefs` module with the user-defined structs and enums,
- a `state` module with one struct per account, each with an
  `_discriminator: [u8; 8]` field and a `deserialize_unchecked` function,
- an `events` module with the event structs,
- an `ix_accounts` module with the accounts context of every instruction,
- a `#[program]` module with one placeholder handler per instruction.

Only current-format IDLs are understood. A legacy IDL must be converted with
`anchor idl convert idl.json` first.

## Installation

From a checkout of the project:

```
pip install .
```

The package has no runtime dependencies. Install the `test` extra
(`pip install .[test]`) to run the test suite with pytest.

## Command line

The `anchorgen` command takes the path of an IDL and writes the generated
Rust source to standard output:

```
anchorgen idl.json
```

Options:

- `--base-dir DIR` – directory the IDL path is relative to (default: the
  working directory).
- `--preset NAME` – start from the options of a known program (see
  *Presets* below).
- `--skip NAME` – type to leave out of the output.
- `--zero-copy NAME` – type to generate as zero-copy.
- `--packed NAME` – zero-copy type to generate with `#[repr(packed)]`.
- `--compat-program-result` – handlers return `ProgramResult` instead of
  `Result<()>`.
- `-o FILE`, `--output FILE` – write to a file instead of standard output.

`--skip`, `--zero-copy` and `--packed` may be repeated, and each takes a
comma-separated list of names. With `--preset`, the names given on the command
line are added to those of the preset. Errors in reading or parsing the IDL are
reported on standard error and the command exits with status 1.

```
anchorgen --help
```

prints the full usage.

## Python API

The simplest entry point generates a complete client with default options:

```python
from anchorgen.cli import generate_cpi_crate

source = generate_cpi_crate("idl.json", base_dir="programs/govern-cpi")
```

`generate_cpi_interface` accepts the per-type options as well:

```python
from anchorgen.cli import generate_cpi_interface

source = generate_cpi_interface(
    "idl.json",
    base_dir="programs/farms",
    skip=[],
    zero_copy=["FarmState", "GlobalConfig", "UserState"],
    packed=[],
    compat_program_result=False,
)
```

- **skip** – type names left out of `typedefs` and `events`; the caller
  provides them.
- **zero_copy** – structs emitted as `#[zero_copy(unsafe)]` (types) or
  `#[account(zero_copy(unsafe))]` (accounts) with `#[repr(C)]`.
- **packed** – zero-copy structs that use `#[repr(packed)]` instead of
  `#[repr(C)]`.
- **compat_program_result** – handlers return `ProgramResult`.

The same choices can be held in an `anchorgen.program.GeneratorOptions`
value, whose `to_generator()` loads the IDL relative to `base_dir`.

For finer control, work with the lower layers directly:

```python
from anchorgen.idl import load_idl
from anchorgen.program import Generator

idl = load_idl("idl.json")
generator = Generator.from_idl(
    idl, skip=[], zero_copy=[], packed=[], compat_program_result=False
)
print(generator.generate_cpi_interface())
```

`anchorgen.idl.parse_idl` accepts JSON text or an already decoded mapping and
returns an `Idl` built from frozen dataclasses. The building blocks are also
available on their own, for example `anchorgen.idl.ty_to_rust_type`,
`anchorgen.idl.to_snake_case`, `anchorgen.idl.to_pascal_case`,
`anchorgen.typedef.generate_typedefs`, `anchorgen.state.generate_accounts`,
`anchorgen.event.generate_events`, `anchorgen.instruction.generate_ix_structs`
and `anchorgen.instruction.generate_ix_handlers`.

## Presets

`anchorgen.presets` carries the option sets used for a few known programs:
`farms`, `govern-cpi`, `kamino-lend` and `marinade-cpi`. `preset_names()`
lists them and `preset_options(name, idl_path="idl.json", base_dir=None)`
returns a `GeneratorOptions` for one of them; an unknown name raises
`ValueError`. The module also defines the `UpdateConfigMode` integer
enumeration, which the `kamino-lend` preset skips and expects the caller to
supply.

## Errors

IDL constructs the generator does not support (256-bit integers, `coption`,
generic types, type aliases, tuple-field structs) raise
`anchorgen.idl.UnsupportedIdlError`, a subclass of `ValueError`. A malformed
IDL, or a reference to a type the IDL does not define, raises `ValueError`.

## What it does not do

`anchorgen` only produces Rust source text. It does not create a crate
manifest, compile the output, or check it against a Rust toolchain; the
generated handlers are placeholders that exist to describe the program's
interface for CPI.