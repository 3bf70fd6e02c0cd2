"""Intermediate representation: types, operands, instructions and containers."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union


class IrType(enum.Enum):
    """Machine-level type of a value in the IR."""

    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    POINTER = "ptr"
    ANY = "any"  # tagged union: 8-byte tag + 8-byte value
    VOID = "void"

    def __str__(self) -> str:
        return self.value


def _format_float(value: float) -> str:
    """Render a float as plain decimal text, dropping a trailing ``.0``."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return format(Decimal(repr(value)), "f")


@dataclass(frozen=True)
class Value:
    """An SSA register."""

    id: int

    def __str__(self) -> str:
        return f"%{self.id}"


@dataclass(frozen=True)
class Constant:
    """An integer constant."""

    value: int

    def __str__(self) -> str:
        return f"const({self.value})"


@dataclass(frozen=True)
class FloatingConstant:
    """A floating-point constant."""

    value: float

    def __str__(self) -> str:
        return f"const_f({_format_float(self.value)})"


@dataclass(frozen=True)
class Parameter:
    """A reference to a function parameter by index."""

    index: int

    def __str__(self) -> str:
        return f"param({self.index})"


Operand = Union[Value, Constant, FloatingConstant, Parameter]


class BinaryOpcode(enum.Enum):
    """Operations taking two operands and producing a register."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    REM = "rem"
    FADD = "fadd"
    FSUB = "fsub"
    FMUL = "fmul"
    FDIV = "fdiv"
    FREM = "frem"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SHL = "shl"
    SHR = "shr"
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    FEQ = "feq"
    FNE = "fne"
    FLT = "flt"
    FLE = "fle"
    FGT = "fgt"
    FGE = "fge"

    def is_float(self) -> bool:
        """Whether the operation works on floating-point operands."""
        return self in _FLOAT_BINARY

    def __str__(self) -> str:
        return self.value


_FLOAT_BINARY = frozenset(
    {
        BinaryOpcode.FADD,
        BinaryOpcode.FSUB,
        BinaryOpcode.FMUL,
        BinaryOpcode.FDIV,
        BinaryOpcode.FREM,
        BinaryOpcode.FEQ,
        BinaryOpcode.FNE,
        BinaryOpcode.FLT,
        BinaryOpcode.FLE,
        BinaryOpcode.FGT,
        BinaryOpcode.FGE,
    }
)


class UnaryOpcode(enum.Enum):
    """Operations taking one operand and producing a register."""

    NOT = "not"
    ITOF = "itof"
    FTOI = "ftoi"

    def __str__(self) -> str:
        return self.value


def _join(args: tuple[Operand, ...]) -> str:
    return ", ".join(str(a) for a in args)


@dataclass(frozen=True)
class BinaryOp:
    dest: int
    opcode: BinaryOpcode
    lhs: Operand
    rhs: Operand

    def __str__(self) -> str:
        return f"  %{self.dest} = {self.opcode} {self.lhs}, {self.rhs}"


@dataclass(frozen=True)
class UnaryOp:
    dest: int
    opcode: UnaryOpcode
    src: Operand

    def __str__(self) -> str:
        return f"  %{self.dest} = {self.opcode} {self.src}"


@dataclass(frozen=True)
class Jump:
    target: str

    def __str__(self) -> str:
        return f"  jump {self.target}"


@dataclass(frozen=True)
class Branch:
    cond: Operand
    then_block: str
    else_block: str

    def __str__(self) -> str:
        return f"  br {self.cond}, {self.then_block}, {self.else_block}"


@dataclass(frozen=True)
class Return:
    value: Optional[Operand] = None

    def __str__(self) -> str:
        if self.value is None:
            return "  ret"
        return f"  ret {self.value}"


@dataclass(frozen=True)
class Alloc:
    dest: int
    size: int

    def __str__(self) -> str:
        return f"  %{self.dest} = alloc {self.size}"


@dataclass(frozen=True)
class Load:
    dest: int
    base: Operand
    offset: int

    def __str__(self) -> str:
        return f"  %{self.dest} = load {self.base}, {self.offset}"


@dataclass(frozen=True)
class Store:
    src: Operand
    base: Operand
    offset: int

    def __str__(self) -> str:
        return f"  store {self.src}, {self.base}, {self.offset}"


@dataclass(frozen=True)
class WriteBarrier:
    obj: Operand
    value: Operand

    def __str__(self) -> str:
        return f"  write_barrier {self.obj}, {self.value}"


@dataclass(frozen=True)
class Call:
    dest: int
    func: str
    args: tuple[Operand, ...] = ()

    def __str__(self) -> str:
        return f"  %{self.dest} = call {self.func} {_join(self.args)}"


@dataclass(frozen=True)
class CallVirtual:
    dest: int
    obj: Operand
    index: int
    args: tuple[Operand, ...] = ()

    def __str__(self) -> str:
        return f"  %{self.dest} = call_virtual {self.obj}, {self.index}, {_join(self.args)}"


@dataclass(frozen=True)
class SetVTable:
    obj: Operand
    class_name: str

    def __str__(self) -> str:
        return f"  set_vtable {self.obj}, {self.class_name}"


@dataclass(frozen=True)
class Move:
    dest: int
    src: Operand

    def __str__(self) -> str:
        return f"  %{self.dest} = move {self.src}"


@dataclass(frozen=True)
class StackAlloc:
    dest: int
    size: int

    def __str__(self) -> str:
        return f"  %{self.dest} = salloc {self.size}"


@dataclass(frozen=True)
class FCall:
    """A call whose arguments and result travel in floating-point registers."""

    dest: int
    name: str
    args: tuple[Operand, ...] = ()

    def __str__(self) -> str:
        return f"  %{self.dest} = fcall {self.name} {_join(self.args)}"


Instruction = Union[
    BinaryOp,
    UnaryOp,
    Jump,
    Branch,
    Return,
    Alloc,
    Load,
    Store,
    WriteBarrier,
    Call,
    CallVirtual,
    SetVTable,
    Move,
    StackAlloc,
    FCall,
]


@dataclass
class BasicBlock:
    label: str
    instructions: list = field(default_factory=list)

    def __str__(self) -> str:
        lines = [f"{self.label}:"]
        lines.extend(str(instr) for instr in self.instructions)
        return "\n".join(lines) + "\n"


@dataclass
class IrFunction:
    name: str
    params: list
    return_type: IrType
    blocks: list = field(default_factory=list)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.params)
        header = f"func {self.name}({params}) -> {self.return_type} {{\n"
        body = "".join(str(block) for block in self.blocks)
        return header + body + "}\n"


@dataclass
class IrModule:
    functions: list = field(default_factory=list)
    globals: list = field(default_factory=list)  # (name, content) pairs
    vtables: dict = field(default_factory=dict)  # class name -> method names

    def __str__(self) -> str:
        parts = [f'global {name} = "{content}"\n' for name, content in self.globals]
        if self.globals:
            parts.append("\n")
        parts.extend(f"{func}\n" for func in self.functions)
        for cls, methods in self.vtables.items():
            parts.append(f"vtable {cls} {{\n")
            parts.extend(f"  {i}: {method}\n" for i, method in enumerate(methods))
            parts.append("}\n")
        return "".join(parts)