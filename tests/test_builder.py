from aura.ir.builder import IrBuilder
from aura.ir.instr import (
    BinaryOp,
    BinaryOpcode,
    Branch,
    Call,
    Constant,
    IrType,
    Jump,
    Load,
    Parameter,
    Return,
    StackAlloc,
    Store,
    UnaryOp,
    UnaryOpcode,
    Value,
)


def test_fresh_builder_has_empty_entry():
    b = IrBuilder()
    assert [blk.label for blk in b.blocks] == ["entry"]
    assert b.blocks[0].instructions == []
    assert b.current_block == "entry"


def test_registers_are_sequential():
    b = IrBuilder()
    regs = [b.new_reg() for _ in range(3)]
    assert regs == list(range(3))
    assert b.reg_count == len(regs)


def test_labels_share_counter():
    b = IrBuilder()
    assert b.new_label("then") == "L_then_0"
    assert b.new_label("else") == "L_else_1"


def test_binary_returns_dest_register():
    b = IrBuilder()
    result = b.binary(BinaryOpcode.ADD, Constant(1), Parameter(0))
    instr = b.blocks[0].instructions[-1]
    assert isinstance(instr, BinaryOp)
    assert result == Value(instr.dest)
    assert instr.lhs == Constant(1) and instr.rhs == Parameter(0)


def test_unary_returns_dest_register():
    b = IrBuilder()
    result = b.unary(UnaryOpcode.ITOF, Constant(4))
    instr = b.blocks[0].instructions[-1]
    assert instr == UnaryOp(result.id, UnaryOpcode.ITOF, Constant(4))


def test_set_block_creates_once_and_emits_there():
    b = IrBuilder()
    label = b.new_label("then")
    b.set_block(label)
    b.jump("entry")
    b.set_block(label)
    assert [blk.label for blk in b.blocks] == ["entry", label]
    assert b.blocks[1].instructions == [Jump("entry")]
    assert b.blocks[0].instructions == []


def test_emit_returns_to_earlier_block():
    b = IrBuilder()
    b.set_block("other")
    b.set_block("entry")
    b.ret(None)
    assert b.blocks[0].instructions == [Return(None)]
    assert b.blocks[1].instructions == []


def test_memory_and_call_helpers():
    b = IrBuilder()
    slot = b.salloc(8)
    b.store(Parameter(0), slot, 0)
    loaded = b.load(slot, 0)
    out = b.call("print_num", [loaded])
    b.branch(out, "a", "b")
    instrs = b.blocks[0].instructions
    assert instrs == [
        StackAlloc(slot.id, 8),
        Store(Parameter(0), slot, 0),
        Load(loaded.id, slot, 0),
        Call(out.id, "print_num", (loaded,)),
        Branch(out, "a", "b"),
    ]


def test_finish_function_resets_state():
    b = IrBuilder()
    b.new_label("x")
    b.set_block("extra")
    b.mov(Constant(0))
    func = b.finish_function("f", [IrType.I64], IrType.I64)
    assert func.name == "f"
    assert [blk.label for blk in func.blocks] == ["entry", "extra"]
    assert b.reg_count == 0 and b.label_count == 0
    assert [blk.label for blk in b.blocks] == ["entry"]
    assert b.current_block == "entry"
    assert b.new_reg() == 0


def test_finished_function_text():
    b = IrBuilder()
    r = b.binary(BinaryOpcode.ADD, Parameter(0), Parameter(1))
    b.ret(r)
    func = b.finish_function("main", [IrType.I32, IrType.I32], IrType.I32)
    assert str(func) == (
        "func main(i32, i32) -> i32 {\n"
        "entry:\n"
        "  %0 = add param(0), param(1)\n"
        "  ret %0\n"
        "}\n"
    )