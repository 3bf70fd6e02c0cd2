"""Constant folding and propagation over IR functions."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from aura.ir.instr import (
    BinaryOp,
    BinaryOpcode,
    Branch,
    Call,
    CallVirtual,
    Constant,
    FCall,
    IrModule,
    Load,
    Move,
    Operand,
    Return,
    SetVTable,
    Store,
    UnaryOp,
    UnaryOpcode,
    Value,
    WriteBarrier,
)

_I64_MIN = -(1 << 63)
_I64_SPAN = 1 << 64


def _wrap(value: int) -> int:
    """Reduce an integer to the signed 64-bit range with two's-complement wrapping."""
    return (value - _I64_MIN) % _I64_SPAN + _I64_MIN


def _trunc_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


def _shift_in_range(amount: int) -> bool:
    return 0 <= amount < 64


_FOLDERS = {
    BinaryOpcode.ADD: lambda l, r: l + r,
    BinaryOpcode.SUB: lambda l, r: l - r,
    BinaryOpcode.MUL: lambda l, r: l * r,
    BinaryOpcode.DIV: lambda l, r: _trunc_div(l, r) if r != 0 else None,
    BinaryOpcode.REM: lambda l, r: l - r * _trunc_div(l, r) if r != 0 else None,
    BinaryOpcode.EQ: lambda l, r: int(l == r),
    BinaryOpcode.NE: lambda l, r: int(l != r),
    BinaryOpcode.LT: lambda l, r: int(l < r),
    BinaryOpcode.LE: lambda l, r: int(l <= r),
    BinaryOpcode.GT: lambda l, r: int(l > r),
    BinaryOpcode.GE: lambda l, r: int(l >= r),
    BinaryOpcode.AND: lambda l, r: l & r,
    BinaryOpcode.OR: lambda l, r: l | r,
    BinaryOpcode.XOR: lambda l, r: l ^ r,
    BinaryOpcode.SHL: lambda l, r: l << r if _shift_in_range(r) else None,
    BinaryOpcode.SHR: lambda l, r: l >> r if _shift_in_range(r) else None,
}


def fold_binary(opcode: BinaryOpcode, lhs: int, rhs: int) -> Optional[int]:
    """Evaluate an integer operation on constants, or return None if it cannot be folded.

    Floating-point operations, division or remainder by zero and shifts outside
    0..63 are left alone.
    """
    folder = _FOLDERS.get(opcode)
    if folder is None:
        return None
    result = folder(lhs, rhs)
    return None if result is None else _wrap(result)


def fold_unary(opcode: UnaryOpcode, value: int) -> Optional[int]:
    """Evaluate a unary operation on a constant, or return None if it cannot be folded."""
    if opcode is UnaryOpcode.NOT:
        return _wrap(~value)
    return None


class Optimizer:
    """Folds integer constants and propagates them into later uses."""

    def optimize(self, module: IrModule) -> IrModule:
        """Fold constants in every function of ``module`` and return it."""
        for func in module.functions:
            constants: dict[int, int] = {}
            for block in func.blocks:
                block.instructions = list(self._rewrite(block.instructions, constants))
        return module

    def _rewrite(self, instructions, constants: dict[int, int]):
        def resolve(op: Operand) -> Operand:
            if isinstance(op, Value) and op.id in constants:
                return Constant(constants[op.id])
            return op

        for instr in instructions:
            if isinstance(instr, BinaryOp):
                lhs, rhs = resolve(instr.lhs), resolve(instr.rhs)
                if isinstance(lhs, Constant) and isinstance(rhs, Constant):
                    folded = fold_binary(instr.opcode, lhs.value, rhs.value)
                    if folded is not None:
                        constants[instr.dest] = folded
                        continue
                yield replace(instr, lhs=lhs, rhs=rhs)
            elif isinstance(instr, UnaryOp):
                src = resolve(instr.src)
                if isinstance(src, Constant):
                    folded = fold_unary(instr.opcode, src.value)
                    if folded is not None:
                        constants[instr.dest] = folded
                        continue
                yield replace(instr, src=src)
            elif isinstance(instr, (Call, FCall)):
                yield replace(instr, args=tuple(resolve(a) for a in instr.args))
            elif isinstance(instr, CallVirtual):
                yield replace(
                    instr,
                    obj=resolve(instr.obj),
                    args=tuple(resolve(a) for a in instr.args),
                )
            elif isinstance(instr, Return):
                if instr.value is None:
                    yield instr
                else:
                    yield Return(resolve(instr.value))
            elif isinstance(instr, Branch):
                yield replace(instr, cond=resolve(instr.cond))
            elif isinstance(instr, Store):
                yield replace(instr, src=resolve(instr.src), base=resolve(instr.base))
            elif isinstance(instr, WriteBarrier):
                yield replace(instr, obj=resolve(instr.obj), value=resolve(instr.value))
            elif isinstance(instr, Load):
                yield replace(instr, base=resolve(instr.base))
            elif isinstance(instr, SetVTable):
                yield replace(instr, obj=resolve(instr.obj))
            elif isinstance(instr, Move):
                yield replace(instr, src=resolve(instr.src))
            else:
                yield instr