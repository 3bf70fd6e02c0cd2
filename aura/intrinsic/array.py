"""Array intrinsics available to interpreted programs.

Arrays are Python lists shared by reference, so mutations made by an
intrinsic are visible to every holder of the list.
"""

from __future__ import annotations

from typing import Any, Callable


def _check_arity(name: str, args: tuple, count: int) -> None:
    if len(args) != count:
        noun = "argument" if count == 1 else "arguments"
        raise TypeError(f"{name} expects {count} {noun}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _array(name: str, args: tuple, index: int = 0) -> list:
    value = args[index]
    if not isinstance(value, list):
        raise TypeError(f"{name}: arg {index} must be array")
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if value is None:
        return "Null"
    return repr(value)


def arr_len(*args: Any) -> int:
    """Return the number of elements of an array."""
    _check_arity("__arr_len", args, 1)
    return len(_array("__arr_len", args))


def arr_push(*args: Any) -> None:
    """Append an item to an array in place."""
    _check_arity("__arr_push", args, 2)
    _array("__arr_push", args).append(args[1])


def arr_pop(*args: Any) -> Any:
    """Remove and return the last element, or None when the array is empty."""
    _check_arity("__arr_pop", args, 1)
    items = _array("__arr_pop", args)
    return items.pop() if items else None


def arr_join(*args: Any) -> str:
    """Join the elements of an array with a separator string."""
    _check_arity("__arr_join", args, 2)
    items = _array("__arr_join", args)
    sep = args[1]
    if not isinstance(sep, str):
        raise TypeError("__arr_join: arg 1 must be string")
    return sep.join(_stringify(item) for item in items)


def arr_get(*args: Any) -> Any:
    """Return the element at an index, or None when the index is out of range."""
    _check_arity("__arr_get", args, 2)
    items = _array("__arr_get", args)
    index = args[1]
    if not _is_int(index):
        raise TypeError("__arr_get: arg 1 must be i32")
    if 0 <= index < len(items):
        return items[index]
    return None


_INTRINSICS: dict[str, Callable[..., Any]] = {
    "__arr_len": arr_len,
    "__arr_push": arr_push,
    "__arr_pop": arr_pop,
    "__arr_join": arr_join,
    "__arr_get": arr_get,
}


def register_array_intrinsics(register: Callable[[str, Callable[..., Any]], Any]) -> None:
    """Hand every array intrinsic to ``register(name, function)``."""
    for name, func in _INTRINSICS.items():
        register(name, func)