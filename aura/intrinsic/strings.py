"""String intrinsics available to interpreted programs.

Lengths and indices are measured in UTF-8 bytes, as the language runtime does.
"""

from __future__ import annotations

from typing import Any, Callable

# Characters with the Unicode White_Space property.
_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _check_arity(name: str, args: tuple, count: int) -> None:
    if len(args) != count:
        noun = "argument" if count == 1 else "arguments"
        raise TypeError(f"{name} expects {count} {noun}")


def _string(name: str, args: tuple, index: int) -> str:
    value = args[index]
    if not isinstance(value, str):
        raise TypeError(f"{name}: arg {index} must be string")
    return value


def _int(name: str, args: tuple, index: int) -> int:
    value = args[index]
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name}: arg {index} must be i32")
    return value


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def str_len(*args: Any) -> int:
    """Return the length of a string in UTF-8 bytes."""
    _check_arity("__str_len", args, 1)
    return _byte_len(_string("__str_len", args, 0))


def str_char_at(*args: Any) -> str:
    """Return the character at an index, or an empty string when out of range.

    The index is checked against the byte length but selects a character;
    an index past the last character of a multi-byte string raises IndexError.
    """
    _check_arity("__str_charAt", args, 2)
    text = _string("__str_charAt", args, 0)
    index = _int("__str_charAt", args, 1)
    if index < 0 or index >= _byte_len(text):
        return ""
    if index >= len(text):
        raise IndexError(f"__str_charAt: no character at index {index}")
    return text[index]


def str_substring(*args: Any) -> str:
    """Return the bytes between two clamped indices as a string.

    Raises ValueError when an index falls inside a multi-byte character.
    """
    _check_arity("__str_substring", args, 3)
    text = _string("__str_substring", args, 0)
    start = _int("__str_substring", args, 1)
    end = _int("__str_substring", args, 2)
    data = text.encode("utf-8")
    start = min(max(start, 0), len(data))
    end = min(max(end, 0), len(data))
    if start >= end:
        return ""
    try:
        return data[start:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(
            f"__str_substring: byte range {start}..{end} is not on character boundaries"
        ) from exc


def str_index_of(*args: Any) -> int:
    """Return the byte offset of the first occurrence of a target, or -1."""
    _check_arity("__str_indexOf", args, 2)
    text = _string("__str_indexOf", args, 0)
    target = _string("__str_indexOf", args, 1)
    index = text.find(target)
    if index < 0:
        return -1
    return _byte_len(text[:index])


def str_to_upper(*args: Any) -> str:
    """Return the string in upper case."""
    _check_arity("__str_toUpper", args, 1)
    return _string("__str_toUpper", args, 0).upper()


def str_to_lower(*args: Any) -> str:
    """Return the string in lower case."""
    _check_arity("__str_toLower", args, 1)
    return _string("__str_toLower", args, 0).lower()


def str_trim(*args: Any) -> str:
    """Return the string without leading and trailing whitespace."""
    _check_arity("__str_trim", args, 1)
    return _string("__str_trim", args, 0).strip(_WHITESPACE)


_INTRINSICS: dict[str, Callable[..., Any]] = {
    "__str_len": str_len,
    "__str_charAt": str_char_at,
    "__str_substring": str_substring,
    "__str_indexOf": str_index_of,
    "__str_toUpper": str_to_upper,
    "__str_toLower": str_to_lower,
    "__str_trim": str_trim,
}


def register_string_intrinsics(register: Callable[[str, Callable[..., Any]], Any]) -> None:
    """Hand every string intrinsic to ``register(name, function)``."""
    for name, func in _INTRINSICS.items():
        register(name, func)