import json

import pytest

from anchorgen.cli import generate_cpi_crate, generate_cpi_interface, main

IDL = {
    "address": "11111111111111111111111111111111",
    "metadata": {"name": "demo", "version": "0.2.0", "spec": "0.1.0"},
    "instructions": [
        {
            "name": "doThing",
            "discriminator": [0, 1, 2, 3, 4, 5, 6, 7],
            "accounts": [{"name": "user", "signer": True}],
            "args": [{"name": "amount", "type": "u64"}],
        }
    ],
    "accounts": [{"name": "Vault", "discriminator": [7, 6, 5, 4, 3, 2, 1, 0]}],
    "types": [
        {"name": "Vault", "type": {"kind": "struct", "fields": [{"name": "total", "type": "u64"}]}},
        {"name": "Mode", "type": {"kind": "enum", "variants": [{"name": "On"}, {"name": "Off"}]}},
    ],
}


@pytest.fixture
def idl_dir(tmp_path):
    (tmp_path / "idl.json").write_text(json.dumps(IDL), encoding="utf-8")
    return tmp_path


def test_crate_equals_interface_with_defaults(idl_dir):
    assert generate_cpi_crate("idl.json", base_dir=idl_dir) == generate_cpi_interface("idl.json", base_dir=idl_dir)


def test_interface_options(idl_dir):
    out = generate_cpi_interface("idl.json", base_dir=idl_dir, skip=["Mode"], compat_program_result=True)
    assert "pub enum Mode" not in out
    assert "ProgramResult" in out
    assert "pub fn do_thing(" in out


def test_main_writes_stdout(idl_dir, capsys):
    assert main(["idl.json", "--base-dir", str(idl_dir)]) == 0
    out = capsys.readouterr().out
    assert out == generate_cpi_crate("idl.json", base_dir=idl_dir)


def test_main_writes_output_file(idl_dir):
    target = idl_dir / "lib.rs"
    assert main([str(idl_dir / "idl.json"), "-o", str(target), "--skip", "Mode", "--zero-copy", "Vault"]) == 0
    text = target.read_text(encoding="utf-8")
    assert "pub enum Mode" not in text
    assert "#[account(zero_copy(unsafe))]" in text


def test_main_comma_separated_lists(idl_dir, capsys):
    assert main(["idl.json", "--base-dir", str(idl_dir), "--zero-copy", "Vault", "--packed", "Vault,Mode"]) == 0
    assert "#[repr(packed)]" in capsys.readouterr().out


def test_main_preset(idl_dir, capsys):
    assert main(["idl.json", "--base-dir", str(idl_dir), "--preset", "govern-cpi"]) == 0
    assert "pub mod demo {" in capsys.readouterr().out


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "error" in capsys.readouterr().err


def test_main_invalid_idl(tmp_path, capsys):
    (tmp_path / "bad.json").write_text(json.dumps({"metadata": {}}), encoding="utf-8")
    assert main([str(tmp_path / "bad.json")]) == 1
    assert "missing required key" in capsys.readouterr().err