from context import AnalysisContext
from driver import run_analysis
from lexer import Lexer
from parser import Parser


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def parser_for(text: str, context: AnalysisContext | None = None) -> Parser:
    """Build a parser positioned at the first token of `text`."""
    return Parser(lex(text), context if context is not None else AnalysisContext())


def run_text(text: str, context: AnalysisContext | None = None):
    """Convenience: lex+analyze a source text; returns (result, context)."""
    context = context if context is not None else AnalysisContext()
    return run_analysis(lex(text), context), context


def value_of(context: AnalysisContext, name: str) -> str:
    return context.symbols.lookup(name).value
