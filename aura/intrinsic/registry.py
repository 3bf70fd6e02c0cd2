"""Registration of intrinsics for the interpreter and their signatures for the analyzer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from aura.intrinsic.array import register_array_intrinsics
from aura.intrinsic.date import register_date_intrinsics
from aura.intrinsic.strings import register_string_intrinsics

# File-open flags (macOS values).
OPEN_FLAGS: dict[str, int] = {
    "O_RDONLY": 0,
    "O_WRONLY": 1,
    "O_RDWR": 2,
    "O_CREAT": 512,
    "O_TRUNC": 1024,
    "O_APPEND": 8,
}


@dataclass(frozen=True)
class IntrinsicSignature:
    """The declared type of a built-in name.

    ``params`` is None for a plain value and a tuple of type names for a function.
    """

    name: str
    params: Optional[tuple[str, ...]]
    returns: str
    doc: str
    exported: bool = True

    @property
    def is_function(self) -> bool:
        return self.params is not None

    def __str__(self) -> str:
        if self.params is None:
            return f"{self.name}: {self.returns}"
        return f"{self.name}({', '.join(self.params)}) -> {self.returns}"


_FUNCTIONS = (
    ("__fs_open", ("string", "i32", "i32"), "i32", "Open a file"),
    ("__fs_close", ("i32",), "void", "Close a file"),
    ("__fs_read", ("i32", "i32"), "string", "Read from a file"),
    ("__fs_write", ("i32", "string"), "i32", "Write to a file"),
    ("__net_listen", ("i32",), "i32", "Listen on a TCP port"),
    ("__net_accept", ("i32",), "i32", "Accept a new TCP connection"),
    ("__net_connect", ("string", "i32"), "i32", "Connect to a TCP host"),
    ("__net_resolve", ("string",), "string", "Resolve a hostname to an IP address"),
    ("__date_now", (), "i64", "Get current timestamp in milliseconds"),
    ("__date_get_part", ("i64", "string"), "i32", "Get date part from timestamp"),
    ("__date_format", ("i64", "string"), "string", "Format a timestamp"),
    ("__date_parse", ("string",), "i64", "Parse a date string into a timestamp"),
)


def register_interpreter_intrinsics(register: Callable[[str, Any], Any]) -> None:
    """Hand every intrinsic function and constant to ``register(name, value)``."""
    register_string_intrinsics(register)
    register_array_intrinsics(register)
    register_date_intrinsics(register)
    for name, value in OPEN_FLAGS.items():
        register(name, value)


def analyzer_signatures() -> list[IntrinsicSignature]:
    """Return the signatures the semantic analyzer declares for built-in names."""
    signatures = [
        IntrinsicSignature(name, params, returns, doc)
        for name, params, returns, doc in _FUNCTIONS
    ]
    signatures.extend(
        IntrinsicSignature(name, None, "i32", f"libc constant {name}") for name in OPEN_FLAGS
    )
    return signatures