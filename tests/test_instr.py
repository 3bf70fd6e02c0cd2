import pytest

from aura.ir.instr import (
    Alloc,
    BasicBlock,
    BinaryOp,
    BinaryOpcode,
    Branch,
    Call,
    CallVirtual,
    Constant,
    FCall,
    FloatingConstant,
    IrFunction,
    IrModule,
    IrType,
    Jump,
    Load,
    Move,
    Parameter,
    Return,
    SetVTable,
    StackAlloc,
    Store,
    UnaryOp,
    UnaryOpcode,
    Value,
    WriteBarrier,
)


def test_ir_text_format():
    module = IrModule(
        globals=[("msg", "Hello World")],
        vtables={},
        functions=[
            IrFunction(
                name="main",
                params=[IrType.I32, IrType.I32],
                return_type=IrType.I32,
                blocks=[
                    BasicBlock(
                        label="entry",
                        instructions=[
                            BinaryOp(1, BinaryOpcode.ADD, Parameter(0), Parameter(1)),
                            Return(Value(1)),
                        ],
                    )
                ],
            )
        ],
    )
    expected = (
        'global msg = "Hello World"\n'
        "\n"
        "func main(i32, i32) -> i32 {\n"
        "entry:\n"
        "  %1 = add param(0), param(1)\n"
        "  ret %1\n"
        "}\n"
        "\n"
    )
    assert str(module) == expected


@pytest.mark.parametrize(
    "ty, text",
    [
        (IrType.I32, "i32"),
        (IrType.I64, "i64"),
        (IrType.F32, "f32"),
        (IrType.F64, "f64"),
        (IrType.POINTER, "ptr"),
        (IrType.ANY, "any"),
        (IrType.VOID, "void"),
    ],
)
def test_type_names(ty, text):
    assert str(ty) == text


@pytest.mark.parametrize(
    "operand, text",
    [
        (Value(3), "%3"),
        (Constant(-7), "const(-7)"),
        (Parameter(2), "param(2)"),
        (FloatingConstant(1.5), "const_f(1.5)"),
        (FloatingConstant(2.0), "const_f(2)"),
    ],
)
def test_operand_text(operand, text):
    assert str(operand) == text


@pytest.mark.parametrize(
    "instr, text",
    [
        (BinaryOp(0, BinaryOpcode.AND, Value(1), Constant(2)), "  %0 = and %1, const(2)"),
        (BinaryOp(4, BinaryOpcode.FGE, Value(1), Value(2)), "  %4 = fge %1, %2"),
        (UnaryOp(2, UnaryOpcode.NOT, Value(1)), "  %2 = not %1"),
        (UnaryOp(2, UnaryOpcode.ITOF, Value(1)), "  %2 = itof %1"),
        (UnaryOp(2, UnaryOpcode.FTOI, Value(1)), "  %2 = ftoi %1"),
        (Jump("L_end_0"), "  jump L_end_0"),
        (Branch(Value(1), "a", "b"), "  br %1, a, b"),
        (Return(), "  ret"),
        (Alloc(5, 16), "  %5 = alloc 16"),
        (Load(2, Value(1), 8), "  %2 = load %1, 8"),
        (Store(Constant(1), Value(0), 0), "  store const(1), %0, 0"),
        (WriteBarrier(Value(0), Value(1)), "  write_barrier %0, %1"),
        (Call(3, "f", (Value(1), Constant(2))), "  %3 = call f %1, const(2)"),
        (CallVirtual(3, Value(0), 1, (Value(0),)), "  %3 = call_virtual %0, 1, %0"),
        (SetVTable(Value(0), "Node"), "  set_vtable %0, Node"),
        (Move(1, Value(0)), "  %1 = move %0"),
        (StackAlloc(0, 8), "  %0 = salloc 8"),
        (FCall(1, "print_float", (Value(0),)), "  %1 = fcall print_float %0"),
    ],
)
def test_instruction_text(instr, text):
    assert str(instr) == text


def test_call_without_args_keeps_trailing_space():
    assert str(Call(0, "aura_now")) == "  %0 = call aura_now "


def test_is_float():
    assert BinaryOpcode.FADD.is_float()
    assert BinaryOpcode.FEQ.is_float()
    assert not BinaryOpcode.ADD.is_float()
    assert not BinaryOpcode.SHL.is_float()


def test_vtables_and_no_globals():
    module = IrModule(vtables={"Animal": ["Animal_speak", "aura_null"]})
    assert str(module) == "vtable Animal {\n  0: Animal_speak\n  1: aura_null\n}\n"