from aura.intrinsic.registry import (
    OPEN_FLAGS,
    IntrinsicSignature,
    analyzer_signatures,
    register_interpreter_intrinsics,
)


def _registered():
    table = {}
    register_interpreter_intrinsics(table.__setitem__)
    return table


def test_constants_have_source_values():
    table = _registered()
    assert table["O_RDONLY"] == 0
    assert table["O_WRONLY"] == 1
    assert table["O_RDWR"] == 2
    assert table["O_CREAT"] == 512
    assert table["O_TRUNC"] == 1024
    assert table["O_APPEND"] == 8


def test_interpreter_gets_string_array_and_date_functions():
    table = _registered()
    assert {"__str_len", "__arr_push", "__date_parse"} <= set(table)
    assert table["__str_len"]("abc") == 3
    assert table["__arr_get"](["a"], 0) == "a"


def test_registered_functions_are_callable():
    table = _registered()
    functions = {name for name, value in table.items() if callable(value)}
    assert functions == set(table) - set(OPEN_FLAGS)


def test_analyzer_signatures_order_and_names():
    names = [sig.name for sig in analyzer_signatures()]
    assert names[0] == "__fs_open"
    assert names[-6:] == list(OPEN_FLAGS)
    assert len(names) == len(set(names))


def test_fs_open_signature():
    sig = next(s for s in analyzer_signatures() if s.name == "__fs_open")
    assert sig.params == ("string", "i32", "i32")
    assert sig.returns == "i32"
    assert sig.doc == "Open a file"
    assert str(sig) == "__fs_open(string, i32, i32) -> i32"


def test_constant_signatures_are_values():
    constants = [s for s in analyzer_signatures() if s.name in OPEN_FLAGS]
    assert all(not s.is_function and s.returns == "i32" for s in constants)
    creat = next(s for s in constants if s.name == "O_CREAT")
    assert creat.doc == "libc constant O_CREAT"


def test_all_signatures_exported():
    assert all(sig.exported for sig in analyzer_signatures())


def test_date_signatures_match_interpreter_names():
    table = _registered()
    date_sigs = {s.name for s in analyzer_signatures() if s.name.startswith("__date_")}
    assert date_sigs == {name for name in table if name.startswith("__date_")}


def test_signature_is_function_property():
    sig = IntrinsicSignature("__date_now", (), "i64", "Get current timestamp in milliseconds")
    assert sig.is_function is True
    assert str(sig) == "__date_now() -> i64"