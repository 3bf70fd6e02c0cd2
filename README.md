# aura

Building blocks for the Aura programming language toolchain:

- **`aura.ir.instr`**: a small register-based intermediate representation.
  It has operands (`Value`, `Constant`, `FloatingConstant`, `Parameter`),
  instructions (`BinaryOp`, `UnaryOp`, `Jump`, `Branch`, `Return`, `Alloc`,
  `Load`, `Store`, `WriteBarrier`, `Call`, `CallVirtual`, `SetVTable`, `Move`,
  `StackAlloc`, `FCall`) and containers (`BasicBlock`, `IrFunction`,
  `IrModule`). Calling `str()` on any of them gives its text form.
- **`aura.ir.builder`**: `IrBuilder`, which hands out fresh registers and
  labels and emits instructions into labelled basic blocks.
- **`aura.ir.opt`**: `Optimizer`, which folds and propagates integer
  constants. It uses the helpers `fold_binary` and `fold_unary`.
- **`aura.intrinsic`**: native functions for arrays (`array`), strings
  (`strings`) and dates (`date`), plus `registry`, which registers them for
  an interpreter and lists the signatures that a semantic analyzer declares
  for built-in names.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Building IR

```python
from aura.ir.builder import IrBuilder
from aura.ir.instr import BinaryOpcode, IrModule, IrType, Parameter

builder = IrBuilder()
total = builder.binary(BinaryOpcode.ADD, Parameter(0), Parameter(1))
builder.ret(total)
function = builder.finish_function("main", [IrType.I32, IrType.I32], IrType.I32)

module = IrModule(functions=[function], globals=[("msg", "Hello World")])
print(module)
```

This prints:

```
global msg = "Hello World"

func main(i32, i32) -> i32 {
entry:
  %0 = add param(0), param(1)
  ret %0
}
```

`set_block(label)` switches to a block and creates it if it does not exist
yet. `new_label("loop")` returns labels such as `L_loop_0`.
`finish_function` resets the builder's registers, labels and blocks so the
next function can be built.

## Constant folding

```python
from aura.ir.opt import Optimizer

optimized = Optimizer().optimize(module)
```

Inside each function, the optimizer looks at blocks in order. An integer
arithmetic, comparison, bitwise or `not` instruction whose operands are all
known constants is removed, and later uses of its register become the
computed `Constant`. Results wrap to signed 64 bits, and division rounds
toward zero. The optimizer leaves these instructions in place: division or
remainder by zero, shifts outside `0..63`, floating-point operations, and
`itof`/`ftoi`. Known constants are also substituted into the operands of
calls, loads, stores, branches, returns, moves and the other instructions.

## Intrinsics

```python
from aura.intrinsic.registry import analyzer_signatures, register_interpreter_intrinsics

env = {}
register_interpreter_intrinsics(env.__setitem__)
env["__str_toUpper"]("hello")      # "HELLO"
env["__arr_join"](["a", 1], "-")   # "a-1"
env["O_CREAT"]                     # 512

for signature in analyzer_signatures():
    print(signature)               # e.g. "__date_format(i64, string) -> string"
```

Notes on behaviour:

- Array intrinsics work on Python lists in place. `__arr_pop` and `__arr_get`
  return `None` when the array is empty or the index is out of range.
- String lengths, indices and `__str_indexOf` results are measured in UTF-8
  bytes.
- Date timestamps are UTC milliseconds since the epoch.
  `__date_get_part` returns a 0-based month and a weekday in which 0 is
  Sunday. `__date_format` accepts strftime-style specifiers.
  `__date_parse` accepts RFC 3339 text and returns 0 for anything else.
- Calling an array or string intrinsic with the wrong number or type of
  arguments raises `TypeError`. Date intrinsics return `0` or `""` instead.

The interpreter environment also holds the file-flag constants `O_RDONLY`,
`O_WRONLY`, `O_RDWR`, `O_CREAT`, `O_TRUNC` and `O_APPEND`, with macOS values.

## What this package does not do

- It has no lexer, parser, type checker, interpreter or code generator, and
  no command-line tool. It cannot run Aura source files. It only provides
  the IR, the optimizer and the intrinsic functions.
- `analyzer_signatures()` lists signatures for file (`__fs_open`,
  `__fs_close`, `__fs_read`, `__fs_write`) and network (`__net_listen`,
  `__net_accept`, `__net_connect`, `__net_resolve`) intrinsics. The package
  does not implement these, so `register_interpreter_intrinsics` does not
  register them.