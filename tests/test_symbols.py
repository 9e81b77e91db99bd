import pytest
from errors import AnalysisError, ErrorKind
from symbols import DataType, SymbolTable, combine_types, is_value_compatible


def test_declare_and_lookup_preserve_order_and_ids():
    table = SymbolTable()
    table.declare("a", DataType.INT, "1")
    table.declare("b", DataType.STRING, '"x"')

    assert [s.name for s in table] == ["a", "b"]
    assert table.lookup("a").id == "id1"
    assert table.lookup("b").id == "id2"
    assert table.lookup("b").type == DataType.STRING


def test_duplicate_declaration_fails_and_keeps_first():
    table = SymbolTable()
    table.declare("a", DataType.INT, "1")
    with pytest.raises(AnalysisError) as exc:
        table.declare("a", DataType.FLOAT, "2.0")
    assert exc.value.kind == ErrorKind.DUPLICATE_NAME
    assert table.lookup("a").value == "1"
    assert len(table) == 1

    # the failed declaration did not consume an id
    assert table.declare("b", DataType.INT, "2").id == "id2"


def test_lookup_of_undeclared_name():
    with pytest.raises(AnalysisError) as exc:
        SymbolTable().lookup("missing")
    assert exc.value.kind == ErrorKind.UNDECLARED_VARIABLE


def test_assign_overwrites_in_place():
    table = SymbolTable()
    table.declare("a", DataType.INT, "1")
    table.assign("a", "7")
    assert table.lookup("a").value == "7"
    assert table.lookup("a").id == "id1"


@pytest.mark.parametrize(
    "value,type_,ok",
    [
        ("12", DataType.INT, True),
        ("-12", DataType.INT, True),
        ("1.5", DataType.INT, False),
        ('"a"', DataType.INT, False),
        ("1.5", DataType.FLOAT, True),
        ("-1.5", DataType.FLOAT, True),
        ("3", DataType.FLOAT, True),
        ("1.", DataType.FLOAT, False),
        ('"anything"', DataType.STRING, True),
        ("42", DataType.STRING, True),
        ("1", DataType.UNKNOWN, False),
    ],
)
def test_is_value_compatible(value, type_, ok):
    assert is_value_compatible(value, type_) is ok


def test_int_float_promotes_either_way():
    assert combine_types(DataType.INT, DataType.FLOAT, "*") == DataType.FLOAT
    assert combine_types(DataType.FLOAT, DataType.INT, "-") == DataType.FLOAT


def test_same_types_keep_their_type():
    assert combine_types(DataType.INT, DataType.INT, "/") == DataType.INT
    assert combine_types(DataType.STRING, DataType.STRING, "+") == DataType.STRING


def test_strings_only_allow_plus():
    with pytest.raises(AnalysisError) as exc:
        combine_types(DataType.STRING, DataType.STRING, "*")
    assert exc.value.kind == ErrorKind.TYPE_MISMATCH


def test_string_with_number_is_a_mismatch():
    with pytest.raises(AnalysisError) as exc:
        combine_types(DataType.STRING, DataType.INT, "+")
    assert exc.value.kind == ErrorKind.TYPE_MISMATCH


def test_from_keyword():
    assert DataType.from_keyword("float") == DataType.FLOAT
    assert DataType.from_keyword("bool") == DataType.UNKNOWN
