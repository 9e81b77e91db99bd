"""Each statement recognizer in isolation: outcome, cursor and effects."""

from context import AnalysisContext
from errors import ErrorKind
from parser import Outcome
from symbols import DataType
from tests.utils import parser_for


def _declared(**variables):
    context = AnalysisContext()
    for name, (type_, value) in variables.items():
        context.symbols.declare(name, type_, value)
    return context


def test_declaration_with_literal():
    parser = parser_for("float f = 2.5; write(f);")
    result = parser.recognize_declaration()
    assert result.matched
    symbol = parser.context.symbols.lookup("f")
    assert (symbol.type, symbol.value, symbol.id) == (DataType.FLOAT, "2.5", "id1")
    assert parser.peek().text == "write"


def test_declaration_copies_value_of_same_typed_variable():
    parser = parser_for("int y = x;", _declared(x=(DataType.INT, "4")))
    assert parser.recognize_declaration().matched
    assert parser.context.symbols.lookup("y").value == "4"


def test_declaration_from_other_typed_variable_fails():
    parser = parser_for("float y = x;", _declared(x=(DataType.INT, "4")))
    result = parser.recognize_declaration()
    assert result.outcome == Outcome.FAILED
    assert result.error.kind == ErrorKind.TYPE_MISMATCH
    assert "y" not in parser.context.symbols
    assert parser.pos == 0


def test_declaration_with_incompatible_literal():
    parser = parser_for("int n = 2.5;")
    result = parser.recognize_declaration()
    assert result.error.kind == ErrorKind.TYPE_MISMATCH
    assert len(parser.context.symbols) == 0


def test_string_declaration_accepts_any_literal():
    parser = parser_for('string s = "hi"; string n = 5;')
    assert parser.recognize_declaration().matched
    assert parser.recognize_declaration().matched
    assert parser.context.symbols.lookup("s").value == '"hi"'
    assert parser.context.symbols.lookup("n").value == "5"


def test_declaration_duplicate_name():
    parser = parser_for("int x = 9;", _declared(x=(DataType.INT, "1")))
    result = parser.recognize_declaration()
    assert result.error.kind == ErrorKind.DUPLICATE_NAME
    assert parser.context.symbols.lookup("x").value == "1"


def test_declaration_requires_terminator():
    parser = parser_for("int x = 1 int y = 2;")
    result = parser.recognize_declaration()
    assert result.outcome == Outcome.FAILED
    assert result.error.kind == ErrorKind.SYNTAX_ERROR
    assert parser.pos == 0
    assert "x" not in parser.context.symbols


def test_declaration_with_expression_initializer():
    parser = parser_for("int z = 7 / 2;")
    assert parser.recognize_declaration().matched
    assert parser.context.symbols.lookup("z").value == "3"
    assert parser.context.messages == ["Expression: (7[int] / 2[int])[int]", "Result: 3.5"]


def test_declaration_does_not_match_other_forms():
    parser = parser_for("x = 1;")
    assert parser.recognize_declaration().outcome == Outcome.NO_MATCH
    assert parser.pos == 0


def test_write_reports_argument_text():
    parser = parser_for('write("hi") write(3); write(x);', _declared(x=(DataType.INT, "1")))
    assert parser.recognize_write().matched
    assert parser.recognize_write().matched
    assert parser.recognize_write().matched
    assert parser.at_end()
    assert parser.context.messages == [
        'Value to write: "hi"',
        "Value to write: 3",
        "Value to write: x",
    ]


def test_write_of_undeclared_variable():
    parser = parser_for("write(ghost);")
    result = parser.recognize_write()
    assert result.error.kind == ErrorKind.UNDECLARED_VARIABLE
    assert parser.pos == 0
    assert parser.context.messages == []


def test_write_requires_closing_paren():
    parser = parser_for("write(1;")
    assert parser.recognize_write().error.kind == ErrorKind.SYNTAX_ERROR


def test_read_reports_current_value():
    parser = parser_for("read(x);", _declared(x=(DataType.FLOAT, "1.5")))
    assert parser.recognize_read().matched
    assert parser.context.messages == ["Contents of x: 1.5"]
    assert parser.at_end()


def test_read_requires_a_declared_identifier():
    assert parser_for("read(3);").recognize_read().error.kind == ErrorKind.SYNTAX_ERROR
    assert parser_for("read(y);").recognize_read().error.kind == ErrorKind.UNDECLARED_VARIABLE


def test_if_checks_both_branches_once():
    parser = parser_for(
        "if (x > 10) { x = x + 1; } else { x = x * 2; }",
        _declared(x=(DataType.INT, "3")),
    )
    assert parser.recognize_if().matched
    # both bodies ran, in order, exactly once: (3 + 1) * 2
    assert parser.context.symbols.lookup("x").value == "8"
    assert parser.at_end()


def test_if_without_else():
    parser = parser_for("if (1 == 1) { write(1); } write(2);")
    assert parser.recognize_if().matched
    assert parser.peek().text == "write"


def test_else_requires_a_block():
    parser = parser_for("if (1 < 2) { } else write(1);")
    result = parser.recognize_if()
    assert result.error.kind == ErrorKind.SYNTAX_ERROR
    assert parser.pos == 0


def test_if_condition_with_undeclared_operand():
    parser = parser_for("if (a < 2) { }")
    assert parser.recognize_if().error.kind == ErrorKind.UNDECLARED_VARIABLE


def test_condition_requires_a_comparison():
    parser = parser_for("if (1 + 2) { }")
    assert parser.recognize_if().error.kind == ErrorKind.SYNTAX_ERROR


def test_while_body_is_checked_once():
    parser = parser_for(
        "while (i < 10) { i = i + 1; }", _declared(i=(DataType.INT, "0"))
    )
    assert parser.recognize_while().matched
    assert parser.context.symbols.lookup("i").value == "1"


def test_unclosed_block():
    parser = parser_for("while (1 < 2) { write(1);")
    result = parser.recognize_while()
    assert result.error.kind == ErrorKind.SYNTAX_ERROR
    assert parser.pos == 0


def test_block_failure_fails_the_enclosing_statement():
    parser = parser_for("while (1 < 2) { write(ghost); }")
    result = parser.recognize_while()
    assert result.error.kind == ErrorKind.UNDECLARED_VARIABLE
    assert parser.pos == 0


def test_assignment_evaluates_and_stores():
    parser = parser_for(
        "z = x + y * x;",
        _declared(x=(DataType.INT, "5"), y=(DataType.INT, "3"), z=(DataType.INT, "0")),
    )
    assert parser.recognize_assignment().matched
    assert parser.context.symbols.lookup("z").value == "40"
    assert parser.context.messages == [
        "Expression: ((x[int] + y[int])[int] * x[int])[int]",
        "Result: 40",
    ]
    assert [name for name, _ in parser.context.trees] == ["z"]


def test_assignment_requires_exact_type():
    parser = parser_for("n = 1.5;", _declared(n=(DataType.INT, "0")))
    result = parser.recognize_assignment()
    assert result.error.kind == ErrorKind.TYPE_MISMATCH
    assert parser.pos == 0
    assert parser.context.symbols.lookup("n").value == "0"


def test_float_assignment_from_int_is_a_mismatch():
    parser = parser_for("f = 2;", _declared(f=(DataType.FLOAT, "0.0")))
    assert parser.recognize_assignment().error.kind == ErrorKind.TYPE_MISMATCH


def test_assignment_to_undeclared_target():
    parser = parser_for("q = 1;")
    assert parser.recognize_assignment().error.kind == ErrorKind.UNDECLARED_VARIABLE


def test_assignment_requires_terminator():
    parser = parser_for("n = 1 write(n);", _declared(n=(DataType.INT, "0")))
    result = parser.recognize_assignment()
    assert result.error.kind == ErrorKind.SYNTAX_ERROR
    assert parser.pos == 0
    assert parser.context.symbols.lookup("n").value == "0"


def test_assignment_does_not_match_a_bare_identifier():
    assert parser_for("x;").recognize_assignment().outcome == Outcome.NO_MATCH
