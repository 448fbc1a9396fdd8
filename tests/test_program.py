import json

import pytest

from anchorgen.idl import parse_idl
from anchorgen.options import StructOpts
from anchorgen.program import Generator, GeneratorOptions

ADDRESS = "GjphYQcbP1m3FuDyCTUJf2mUMxKPE3j6feWU1rxvC7Ps"


def sample_idl():
    disc = [1, 2, 3, 4, 5, 6, 7, 8]
    return {
        "address": ADDRESS,
        "metadata": {"name": "govern", "version": "0.1.0", "spec": "0.1.0"},
        "instructions": [
            {
                "name": "createGovernor",
                "discriminator": disc,
                "accounts": [
                    {"name": "governor", "writable": True},
                    {"name": "payer", "writable": True, "signer": True},
                ],
                "args": [
                    {"name": "params", "type": {"defined": {"name": "GovernanceParameters"}}}
                ],
            }
        ],
        "accounts": [{"name": "Governor", "discriminator": disc}],
        "events": [{"name": "GovernorCreateEvent", "discriminator": disc}],
        "types": [
            {
                "name": "GovernanceParameters",
                "type": {
                    "kind": "struct",
                    "fields": [
                        {"name": "quorumVotes", "type": "u64"},
                        {"name": "timelockDelaySeconds", "type": "i64"},
                        {"name": "votingPeriod", "type": "u64"},
                        {"name": "votingDelay", "type": "u64"},
                    ],
                },
            },
            {
                "name": "Governor",
                "type": {
                    "kind": "struct",
                    "fields": [
                        {"name": "base", "type": "pubkey"},
                        {"name": "params", "type": {"defined": {"name": "GovernanceParameters"}}},
                    ],
                },
            },
            {
                "name": "GovernorCreateEvent",
                "type": {"kind": "struct", "fields": [{"name": "governor", "type": "pubkey"}]},
            },
            {
                "name": "ProposalState",
                "type": {"kind": "enum", "variants": [{"name": "Draft"}, {"name": "Active"}]},
            },
        ],
    }


@pytest.fixture
def idl_dir(tmp_path):
    (tmp_path / "idl.json").write_text(json.dumps(sample_idl()), encoding="utf-8")
    return tmp_path


def test_to_generator_reads_relative_to_base_dir(idl_dir):
    gen = GeneratorOptions(idl_path="idl.json", base_dir=idl_dir).to_generator()
    assert gen.idl.address == ADDRESS
    assert gen.idl.metadata.name == "govern"


def test_struct_opts_cover_accounts_and_types_sorted():
    gen = Generator.from_idl(parse_idl(sample_idl()), skip=["ProposalState", "Missing"])
    assert list(gen.struct_opts) == sorted(
        ["GovernanceParameters", "Governor", "GovernorCreateEvent", "ProposalState"]
    )
    assert gen.struct_opts["ProposalState"] == StructOpts(skip=True)
    assert gen.struct_opts["Governor"] == StructOpts()


def test_output_declares_id_and_program():
    out = Generator.from_idl(parse_idl(sample_idl())).generate_cpi_interface()
    assert f'declare_id!("{ADDRESS}");' in out
    assert "pub mod govern {" in out
    assert "pub quorum_votes: u64" in out
    assert "pub enum ProposalState" in out
    assert "pub fn create_governor(" in out


def test_module_order():
    out = Generator.from_idl(parse_idl(sample_idl())).generate_cpi_interface()
    positions = [
        out.index("pub mod typedefs"),
        out.index("pub mod state"),
        out.index("pub mod events"),
        out.index("pub mod ix_accounts"),
        out.index("#[program]"),
    ]
    assert positions == sorted(positions)


def test_docs_name_idl_and_version():
    out = Generator.from_idl(parse_idl(sample_idl())).generate_cpi_interface()
    assert "generated from govern v0.1.0" in out


def test_skip_removes_typedef():
    out = Generator.from_idl(parse_idl(sample_idl()), skip=["ProposalState"]).generate_cpi_interface()
    assert "pub enum ProposalState" not in out


def test_zero_copy_and_packed_accounts():
    idl = parse_idl(sample_idl())
    out = Generator.from_idl(idl, zero_copy=["Governor"]).generate_cpi_interface()
    assert "#[account(zero_copy(unsafe))]\n    #[repr(C)]" in out
    packed = Generator.from_idl(idl, zero_copy=["Governor"], packed=["Governor"]).generate_cpi_interface()
    assert "#[repr(packed)]" in packed


def test_compat_program_result():
    idl = parse_idl(sample_idl())
    assert "ProgramResult" in Generator.from_idl(idl, compat_program_result=True).generate_cpi_interface()
    assert "ProgramResult" not in Generator.from_idl(idl).generate_cpi_interface()


def test_options_and_direct_generation_agree(idl_dir):
    from_file = GeneratorOptions(idl_path="idl.json", base_dir=idl_dir, skip=("Governor",)).to_generator()
    direct = Generator.from_idl(parse_idl(sample_idl()), skip=["Governor"])
    assert from_file.generate_cpi_interface() == direct.generate_cpi_interface()


def test_missing_idl_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        GeneratorOptions(idl_path="nope.json", base_dir=tmp_path).to_generator()