"""
Expression builder and statement recognizers for the mini language.

Overview and approach:
- There is no full-program parse. The driver (`driver.py`) repeatedly asks a
    `Parser` to recognize one statement at the current cursor, trying every
    recognizer in a fixed order; the first one whose form is present
    consumes the statement, checks it and applies its effect on the shared
    `AnalysisContext` right away.

- Expression building:
    - `parse_term()` recognizes a parenthesized sub-expression, a number
        literal or a variable reference.
    - `build_expression()` reads a term followed by any number of
        `(operator, term)` pairs and folds them left to right. All four
        operators share one precedence level: `a + b * c` is `(a + b) * c`.
    - Types are inferred while building: each leaf pushes its type on the
        context's type stack and each operator replaces the two topmost types
        with their combination, so a finished expression leaves exactly one
        type on the stack.

- Statement recognizers (`recognize_*`) each return a `RecognizerResult`:
    `NO_MATCH` when the statement form does not start at the cursor,
    `MATCHED` when the statement was consumed and applied, `FAILED` when
    the form starts here but the statement is malformed or ill-typed. The
    cursor is restored on every outcome except `MATCHED`, and a statement
    only touches the symbol table once all its checks have passed.

- `if` and `while` bodies are parsed and checked once, in order; the
    condition operands are resolved but never compared, so no branch is
    skipped and no body is repeated.

Examples:
    - Declaration: `float f = 2.5;` or `int z = x + y * x;`
    - Assignment: `z = (z + 1) / 2;`
    - Control flow: `if (x > 3) { write(x); } else { read(y); }`
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple
from tokens import Token, TokenType
from ast_nodes import *
from ast_interpreter import Number, evaluate, format_value
from context import AnalysisContext
from errors import AnalysisError, ErrorKind
from pretty_printer import PrettyPrinter
from symbols import DataType, is_value_compatible

logger = logging.getLogger(__name__)


class Outcome(Enum):
    MATCHED = auto()
    NO_MATCH = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.name


@dataclass
class RecognizerResult:
    outcome: Outcome
    error: Optional[AnalysisError] = None

    @property
    def matched(self) -> bool:
        return self.outcome == Outcome.MATCHED

    @classmethod
    def ok(cls) -> RecognizerResult:
        return cls(Outcome.MATCHED)

    @classmethod
    def no_match(cls) -> RecognizerResult:
        return cls(Outcome.NO_MATCH)

    @classmethod
    def failed(cls, error: AnalysisError) -> RecognizerResult:
        return cls(Outcome.FAILED, error)


class Parser:
    def __init__(self, tokens: List[Token], context: Optional[AnalysisContext] = None):
        self.tokens = tokens
        self.pos = 0
        self.context = context if context is not None else AnalysisContext()

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self, offset: int = 0) -> Token:
        """Return a token ahead of the cursor without consuming it."""
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return Token(TokenType.EOF)

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if not self.at_end():
            self.pos += 1
        return token

    def check(self, token_type: TokenType, text: Optional[str] = None) -> bool:
        return self.peek().is_(token_type, text)

    def expect(
        self,
        token_type: TokenType,
        text: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Token:
        """Expect and consume a token of the given category (and text)."""
        if self.check(token_type, text):
            return self.advance()

        wanted = f"'{text}'" if text else str(token_type)
        msg = message or f"Expected {wanted}, got {self._describe(self.peek())}"
        raise AnalysisError(ErrorKind.SYNTAX_ERROR, msg)

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        return f"'{token.text}'"

    # ------------------------------------------------------------------
    # Expression builder
    # ------------------------------------------------------------------

    def parse_term(self) -> ExprNode:
        """Parse a term: '(' expression ')', a number or an identifier."""
        token = self.peek()
        stack = self.context.type_stack

        match token.type:
            case TokenType.PAREN_OPEN:
                self.advance()
                node = self.build_expression()
                if not self.check(TokenType.PAREN_CLOSE):
                    raise AnalysisError(
                        ErrorKind.EXPECTED_CLOSE_PAREN,
                        f"Expected ')', got {self._describe(self.peek())}",
                    )
                self.advance()
                return node

            case TokenType.NUMBER:
                self.advance()
                node = NumberLiteralNode.from_text(token.text)
                stack.push(node.data_type)
                return node

            case TokenType.IDENTIFIER:
                symbol = self.context.symbols.lookup(token.text)
                self.advance()
                stack.push(symbol.type)
                return VariableRefNode(name=token.text)

            case _:
                raise AnalysisError(
                    ErrorKind.UNEXPECTED_FACTOR,
                    f"Unexpected factor: {self._describe(token)}",
                )

    def build_expression(self) -> ExprNode:
        """Parse `term (op term)*`, associating left to right."""
        left = self.parse_term()

        while self.check(TokenType.ARITHMETIC):
            operator = self.advance().text
            right = self.parse_term()
            combined = self.context.type_stack.combine(operator)
            logger.debug(f"Combined operands of '{operator}' into {combined}")
            left = BinaryOpNode(operator=operator, left=left, right=right)

        return left

    def _build_typed_expression(self, target: DataType) -> Tuple[ASTNode, Number, str]:
        """Build, type-check and evaluate the expression that ends a statement.

        The inferred type must equal `target` exactly. Returns the tree, its
        value and the text to store for a `target`-typed variable.
        """
        stack = self.context.type_stack
        depth = len(stack)
        root = self.build_expression()
        if len(stack) != depth + 1:
            left_over = ", ".join(str(t) for t in stack.snapshot()[depth:])
            raise AnalysisError(
                ErrorKind.SYNTAX_ERROR,
                f"Expression left types [{left_over}] on the type stack",
            )

        expr_type = stack.pop()
        if expr_type != target:
            raise AnalysisError(
                ErrorKind.TYPE_MISMATCH,
                f"Cannot assign {expr_type} to variable of type {target}",
            )

        self.expect(TokenType.OPERATOR, ";", "Expected ';' after expression")
        value = evaluate(root, self.context.symbols)
        return root, value, format_value(value, target)

    def _report_evaluation(self, name: str, root: ASTNode, value: Number) -> None:
        table = self.context.symbols
        self.context.report(f"Expression: {PrettyPrinter.print_typed(root, table)}")
        self.context.report(f"Result: {value}")
        self.context.trees.append((name, root))

    # ------------------------------------------------------------------
    # Statement recognizers
    # ------------------------------------------------------------------

    def recognizers(self) -> List[Callable[[], RecognizerResult]]:
        """All statement recognizers, in the order they are tried."""
        return [
            self.recognize_declaration,
            self.recognize_write,
            self.recognize_read,
            self.recognize_if,
            self.recognize_while,
            self.recognize_assignment,
        ]

    def _attempt(self, name: str, match_statement: Callable[[], bool]) -> RecognizerResult:
        """Run one recognizer body with cursor snapshot and restore."""
        start = self.pos
        try:
            if not match_statement():
                self.pos = start
                return RecognizerResult.no_match()
        except AnalysisError as e:
            logger.debug(f"{name} failed at token {start}: {e}; rolling back")
            self.pos = start
            return RecognizerResult.failed(e)

        logger.debug(f"{name} matched tokens {start}..{self.pos - 1}")
        return RecognizerResult.ok()

    def recognize_declaration(self) -> RecognizerResult:
        return self._attempt("declaration", self._declaration)

    def recognize_write(self) -> RecognizerResult:
        return self._attempt("write", self._write)

    def recognize_read(self) -> RecognizerResult:
        return self._attempt("read", self._read)

    def recognize_if(self) -> RecognizerResult:
        return self._attempt("if", self._if)

    def recognize_while(self) -> RecognizerResult:
        return self._attempt("while", self._while)

    def recognize_assignment(self) -> RecognizerResult:
        return self._attempt("assignment", self._assignment)

    def _declaration(self) -> bool:
        """type ID '=' (NUM | STR | ID | expression) ';'"""
        if not (
            self.check(TokenType.VARIABLE)
            and self.peek(1).type == TokenType.IDENTIFIER
            and self.peek(2).is_(TokenType.OPERATOR, "=")
        ):
            return False

        var_type = DataType.from_keyword(self.advance().text)
        name = self.advance().text
        self.advance()  # '='

        symbols = self.context.symbols
        if name in symbols:
            raise AnalysisError(
                ErrorKind.DUPLICATE_NAME, f"Variable '{name}' already declared"
            )

        init = self.peek()
        if init.type in (
            TokenType.NUMBER,
            TokenType.STRING,
            TokenType.IDENTIFIER,
        ) and self.peek(1).is_(TokenType.OPERATOR, ";"):
            value = self._initial_value(init, var_type)
            self.advance()
            self.advance()  # ';'
            symbols.declare(name, var_type, value)
            return True

        root, result, value = self._build_typed_expression(var_type)
        symbols.declare(name, var_type, value)
        self._report_evaluation(name, root, result)
        return True

    def _initial_value(self, init: Token, var_type: DataType) -> str:
        """Resolve a single-token initializer to the text to store."""
        if init.type == TokenType.IDENTIFIER:
            source = self.context.symbols.lookup(init.text)
            if source.type != var_type:
                raise AnalysisError(
                    ErrorKind.TYPE_MISMATCH,
                    f"Cannot assign {source.type} to variable of type {var_type}",
                )
            value = source.value
        else:
            value = init.text

        if not is_value_compatible(value, var_type):
            raise AnalysisError(
                ErrorKind.TYPE_MISMATCH,
                f"Value '{value}' is not compatible with type '{var_type}'",
            )
        return value

    def _skip_terminator(self) -> None:
        if self.check(TokenType.OPERATOR, ";"):
            self.advance()

    def _write(self) -> bool:
        """'write' '(' (ID | NUM | STR) ')' ';'?"""
        if not self.check(TokenType.WRITE):
            return False
        self.advance()
        self.expect(TokenType.PAREN_OPEN)

        arg = self.peek()
        if arg.type == TokenType.IDENTIFIER:
            self.context.symbols.lookup(arg.text)
        elif arg.type not in (TokenType.NUMBER, TokenType.STRING):
            raise AnalysisError(
                ErrorKind.SYNTAX_ERROR,
                f"write expects an identifier, number or string, got {self._describe(arg)}",
            )
        self.advance()
        self.expect(TokenType.PAREN_CLOSE)
        self._skip_terminator()

        self.context.report(f"Value to write: {arg.text}")
        return True

    def _read(self) -> bool:
        """'read' '(' ID ')' ';'?"""
        if not self.check(TokenType.READ):
            return False
        self.advance()
        self.expect(TokenType.PAREN_OPEN)
        name = self.expect(
            TokenType.IDENTIFIER, message="read expects a variable name"
        ).text
        symbol = self.context.symbols.lookup(name)
        self.expect(TokenType.PAREN_CLOSE)
        self._skip_terminator()

        self.context.report(f"Contents of {name}: {symbol.value}")
        return True

    def _operand_type(self) -> DataType:
        """Consume a condition operand and return its type."""
        token = self.peek()
        match token.type:
            case TokenType.NUMBER:
                self.advance()
                return NumberLiteralNode.from_text(token.text).data_type
            case TokenType.IDENTIFIER:
                symbol = self.context.symbols.lookup(token.text)
                self.advance()
                return symbol.type
            case _:
                raise AnalysisError(
                    ErrorKind.SYNTAX_ERROR,
                    f"Expected identifier or number in condition, got {self._describe(token)}",
                )

    def _condition(self) -> None:
        """'(' operand comparison operand ')'; resolved, never evaluated."""
        self.expect(TokenType.PAREN_OPEN)
        left = self._operand_type()
        comparison = self.expect(TokenType.COMPARISON).text
        right = self._operand_type()
        self.expect(TokenType.PAREN_CLOSE)
        logger.debug(f"Condition {left} {comparison} {right} checked")

    def _if(self) -> bool:
        """'if' condition block ('else' block)?"""
        if not self.check(TokenType.CONDITION, "if"):
            return False
        self.advance()
        self._condition()
        self.parse_block()

        if self.check(TokenType.CONDITION, "else"):
            self.advance()
            if not self.check(TokenType.BRACE_OPEN):
                raise AnalysisError(ErrorKind.SYNTAX_ERROR, "Expected '{' after else")
            self.parse_block()
        return True

    def _while(self) -> bool:
        """'while' condition block"""
        if not self.check(TokenType.CYCLE):
            return False
        self.advance()
        self._condition()
        self.parse_block()
        return True

    def _assignment(self) -> bool:
        """ID '=' expression ';'"""
        if not (
            self.check(TokenType.IDENTIFIER)
            and self.peek(1).is_(TokenType.OPERATOR, "=")
        ):
            return False

        name = self.advance().text
        target = self.context.symbols.lookup(name)
        self.advance()  # '='

        root, result, value = self._build_typed_expression(target.type)
        self.context.symbols.assign(name, value)
        self._report_evaluation(name, root, result)
        return True

    # ------------------------------------------------------------------
    # Block dispatcher
    # ------------------------------------------------------------------

    def parse_block(self) -> int:
        """Parse '{' statement* '}' and return the number of statements.

        Statements are dispatched exactly like top-level ones. The first
        failure inside the block is re-raised so the enclosing statement
        fails as a whole.
        """
        self.expect(TokenType.BRACE_OPEN)
        count = 0

        while not self.check(TokenType.BRACE_CLOSE):
            if self.at_end():
                raise AnalysisError(ErrorKind.SYNTAX_ERROR, "Expected '}' before end of input")

            result = self.recognize_statement()
            if result.outcome == Outcome.FAILED:
                raise result.error
            if result.outcome == Outcome.NO_MATCH:
                raise self.unrecognized()
            count += 1

        self.advance()  # '}'
        return count

    def recognize_statement(self) -> RecognizerResult:
        """Try every recognizer in order; return the first that is not NO_MATCH."""
        for recognize in self.recognizers():
            result = recognize()
            if result.outcome != Outcome.NO_MATCH:
                return result
        return RecognizerResult.no_match()

    def unrecognized(self) -> AnalysisError:
        return AnalysisError(
            ErrorKind.SYNTAX_ERROR,
            f"Unrecognized statement at token {self.pos}: {self._describe(self.peek())}",
        )
