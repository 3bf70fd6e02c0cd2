"""Incremental construction of IR functions."""

from __future__ import annotations

from typing import Iterable, Optional

from aura.ir.instr import (
    BasicBlock,
    BinaryOp,
    BinaryOpcode,
    Branch,
    Call,
    CallVirtual,
    FCall,
    IrFunction,
    IrType,
    Jump,
    Load,
    Move,
    Operand,
    Return,
    SetVTable,
    StackAlloc,
    Store,
    UnaryOp,
    UnaryOpcode,
    Value,
)

_ENTRY = "entry"


class IrBuilder:
    """Emits instructions into labelled blocks of the function being built."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.current_block = _ENTRY
        self.blocks: list[BasicBlock] = [BasicBlock(_ENTRY)]
        self.reg_count = 0
        self.label_count = 0

    def new_reg(self) -> int:
        """Allocate a fresh register number."""
        reg = self.reg_count
        self.reg_count += 1
        return reg

    def new_label(self, prefix: str) -> str:
        """Allocate a fresh block label with the given prefix."""
        label = f"L_{prefix}_{self.label_count}"
        self.label_count += 1
        return label

    def create_block(self, label: str) -> None:
        self.blocks.append(BasicBlock(label))

    def set_block(self, label: str) -> None:
        """Make ``label`` the current block, creating it if needed."""
        if not any(block.label == label for block in self.blocks):
            self.create_block(label)
        self.current_block = label

    def emit(self, instr) -> None:
        """Append an instruction to the current block."""
        block = next((b for b in self.blocks if b.label == self.current_block), None)
        if block is not None:
            block.instructions.append(instr)

    def binary(self, opcode: BinaryOpcode, lhs: Operand, rhs: Operand) -> Value:
        dest = self.new_reg()
        self.emit(BinaryOp(dest, opcode, lhs, rhs))
        return Value(dest)

    def unary(self, opcode: UnaryOpcode, src: Operand) -> Value:
        dest = self.new_reg()
        self.emit(UnaryOp(dest, opcode, src))
        return Value(dest)

    def jump(self, target: str) -> None:
        self.emit(Jump(target))

    def branch(self, cond: Operand, then_block: str, else_block: str) -> None:
        self.emit(Branch(cond, then_block, else_block))

    def ret(self, val: Optional[Operand] = None) -> None:
        self.emit(Return(val))

    def call(self, func: str, args: Iterable[Operand] = ()) -> Value:
        dest = self.new_reg()
        self.emit(Call(dest, func, tuple(args)))
        return Value(dest)

    def call_virtual(self, obj: Operand, idx: int, args: Iterable[Operand] = ()) -> Value:
        dest = self.new_reg()
        self.emit(CallVirtual(dest, obj, idx, tuple(args)))
        return Value(dest)

    def fcall(self, name: str, args: Iterable[Operand] = ()) -> Value:
        dest = self.new_reg()
        self.emit(FCall(dest, name, tuple(args)))
        return Value(dest)

    def mov(self, src: Operand) -> Value:
        dest = self.new_reg()
        self.emit(Move(dest, src))
        return Value(dest)

    def salloc(self, size: int) -> Value:
        dest = self.new_reg()
        self.emit(StackAlloc(dest, size))
        return Value(dest)

    def store(self, src: Operand, base: Operand, offset: int) -> None:
        self.emit(Store(src, base, offset))

    def load(self, base: Operand, offset: int) -> Value:
        dest = self.new_reg()
        self.emit(Load(dest, base, offset))
        return Value(dest)

    def set_vtable(self, obj: Operand, class_name: str) -> None:
        self.emit(SetVTable(obj, class_name))

    def finish_function(self, name: str, params, return_type: IrType) -> IrFunction:
        """Package the built blocks as a function and reset for the next one."""
        func = IrFunction(name, list(params), return_type, self.blocks)
        self._reset()
        return func