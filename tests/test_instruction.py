from anchorgen.idl import (
    IdlField,
    IdlInstruction,
    IdlInstructionAccount,
    IdlInstructionAccounts,
    IdlType,
    TypeKind,
    to_pascal_case,
    to_snake_case,
)
from anchorgen.instruction import generate_ix_handler, generate_ix_handlers, generate_ix_structs


def _ix(name, accounts=(), args=()):
    return IdlInstruction(name=name, accounts=tuple(accounts), args=tuple(args), discriminator=(0,) * 8)


def test_handler_default_result():
    code = generate_ix_handler(_ix("initGovernor"))
    assert "-> Result<()>" in code
    assert "ProgramResult" not in code
    assert 'unimplemented!("This program is a wrapper for CPI.")' in code


def test_handler_compat_program_result():
    code = generate_ix_handler(_ix("initGovernor"), compat_program_result=True)
    assert "-> ProgramResult" in code
    assert "Result<()>" not in code


def test_handler_names():
    code = generate_ix_handler(_ix("initGovernor"))
    assert f"pub fn {to_snake_case('initGovernor')}(" in code
    assert f"_ctx: Context<{to_pascal_case('initGovernor')}>" in code


def test_handler_args_prefixed():
    ix = _ix("deposit", args=[IdlField("amount", IdlType(TypeKind.U64))])
    code = generate_ix_handler(ix)
    assert "_amount: u64" in code
    assert code.index("_ctx") < code.index("_amount")


def test_structs_with_accounts_have_lifetime():
    ix = _ix("deposit", accounts=[IdlInstructionAccount("payer", signer=True)])
    code = generate_ix_structs([ix])
    assert f"pub struct {to_pascal_case('deposit')}<'info>" in code
    assert "Signer<'info>" in code


def test_structs_without_accounts_have_no_lifetime():
    code = generate_ix_structs([_ix("noop")])
    assert "<'info>" not in code
    assert f"pub struct {to_pascal_case('noop')}" in code


def test_struct_derive_count_includes_groups():
    group = IdlInstructionAccounts("extra", (IdlInstructionAccount("a"),))
    ixs = [_ix("first", accounts=[group]), _ix("second")]
    code = generate_ix_structs(ixs)
    assert code.count("#[derive(Accounts)]") == 3
    sub = to_pascal_case("first") + to_pascal_case("extra")
    assert code.index(f"pub struct {sub}") < code.index(f"pub struct {to_pascal_case('first')}<'info>")


def test_handlers_preserve_order_and_flag():
    code = generate_ix_handlers([_ix("alpha"), _ix("beta")], compat_program_result=True)
    assert code.index("pub fn alpha(") < code.index("pub fn beta(")
    assert code.count("-> ProgramResult") == 2


def test_handlers_empty():
    assert generate_ix_handlers([]) == ""