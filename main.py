from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional
from graphviz import ExecutableNotFound
from ast_json import trees_to_json
from ast_viz import write_and_render
from context import AnalysisContext
from driver import AnalysisResult, run_analysis
from errors import AnalysisError, ErrorKind
from lexer import Lexer
from pretty_printer import PrettyPrinter
from tokens import Token

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "source.txt"

EXIT_VALID = 0
EXIT_MISSING_SOURCE = 1
EXIT_INVALID = 2


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def analyze(text: str, context: Optional[AnalysisContext] = None) -> AnalysisResult:
    """Tokenize and analyze a program."""
    return run_analysis(lex(text), context)


def load_source(path: str) -> str:
    """Read a source file, joining its non-empty lines with spaces."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            lines = fh.read().splitlines()
    except FileNotFoundError:
        raise AnalysisError(
            ErrorKind.MISSING_SOURCE_FILE, f"Could not find source file {path}"
        ) from None
    return "".join(f"{line} " for line in lines if line)


def process_program(
    text: str,
    *,
    context: Optional[AnalysisContext] = None,
    print_tokens: bool = True,
    print_symbols: bool = True,
    show_trees: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> AnalysisResult:
    """Process a single program: lex, analyze and print the requested reports.

    Flags control which parts are printed; printing can be toggled separately.
    """
    if context is None:
        context = AnalysisContext()

    tokens = lex(text)
    if print_tokens:
        print(PrettyPrinter.print_tokens(tokens))

    first_message = len(context.messages)
    first_tree = len(context.trees)
    result = run_analysis(tokens, context)

    for message in context.messages[first_message:]:
        print(message)

    if show_trees:
        for target, root in context.trees[first_tree:]:
            print(f"\nTree for {target} = {PrettyPrinter.print_surface(root)}:")
            print(PrettyPrinter.print_ast(root, indent=2))

    print(f"\nValid: {'yes' if result.valid else 'no'}")

    if print_symbols:
        print()
        print(PrettyPrinter.print_symbols(context.symbols))

    if dump_ast_path:
        with open(dump_ast_path, "w", encoding="utf-8") as fh:
            json.dump(trees_to_json(context), fh, indent=2)
        print(f"Wrote expression trees to {dump_ast_path}")

    if viz_path:
        try:
            write_and_render(context.trees, viz_path, context.symbols, fmt=viz_format)
            print(f"Wrote expression tree visualization to {viz_path}.{viz_format}")
        except (ExecutableNotFound, OSError) as e:
            logger.error(f"Failed to render expression trees: {e}")

    return result


def interactive_mode(print_tokens: bool = False, show_trees: bool = False) -> None:
    """Run an interactive session; declarations persist between entries."""
    print("\nInteractive Analyzer Mode (type 'quit' to exit)")
    print("=" * 80)
    context = AnalysisContext()

    while True:
        try:
            text = input("\nEnter statements: ").strip()
            if text.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if not text:
                continue

            process_program(
                text,
                context=context,
                print_tokens=print_tokens,
                show_trees=show_trees,
            )

        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting...")
            break


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Static checker and evaluator for a minimal imperative language"
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=DEFAULT_SOURCE,
        help=f"Source file to analyze (default: {DEFAULT_SOURCE})",
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Run interactive mode"
    )
    parser.add_argument(
        "--no-tokens",
        dest="print_tokens",
        action="store_false",
        help="Do not print the token table",
    )
    parser.add_argument(
        "--no-symbols",
        dest="print_symbols",
        action="store_false",
        help="Do not print the symbol table",
    )
    parser.add_argument(
        "--show-trees",
        dest="show_trees",
        action="store_true",
        help="Print every evaluated expression tree",
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write evaluated trees as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of evaluated trees",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log analysis steps"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.interactive:
        interactive_mode(print_tokens=args.print_tokens, show_trees=args.show_trees)
        return EXIT_VALID

    try:
        text = load_source(args.file)
    except AnalysisError as e:
        print(f"Error: {e.message}")
        return EXIT_MISSING_SOURCE

    result = process_program(
        text,
        print_tokens=args.print_tokens,
        print_symbols=args.print_symbols,
        show_trees=args.show_trees,
        dump_ast_path=args.dump_ast,
        viz_path=args.viz_ast,
        viz_format=args.viz_format,
    )
    return EXIT_VALID if result.valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
