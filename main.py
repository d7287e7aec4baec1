import argparse
import logging
import sys
from typing import List, Optional

from graphviz import ExecutableNotFound

import config
from cst_gen import (
    DepthRangeError,
    DisplayConfig,
    SQLCSTParser,
    SQLParseError,
    cst_to_graph,
    parse_depth_range,
    render_graph,
    write_tokens,
    write_tree,
)

logger = logging.getLogger("sqlcst")


def depth_range_arg(text: str):
    try:
        return parse_depth_range(text)
    except DepthRangeError as e:
        raise argparse.ArgumentTypeError(str(e))


def _add_source_arg(parser: argparse.ArgumentParser):
    parser.add_argument(
        "sql_file",
        nargs="?",
        default=config.STDIN_PLACEHOLDER,
        metavar="FILE",
        help="SQL file to parse (default: read standard input)",
    )


def _add_tree_display_args(parser: argparse.ArgumentParser):
    parser.add_argument("-d", "--depth", type=depth_range_arg, metavar="DEPTH",
                        help="Depth range to show, e.g. 3, 1..3, 1..=3, ..3, ..=3, 3..")
    parser.add_argument("--hide-range", action="store_true", help="Do not show source ranges")
    parser.add_argument("--show-all-text", action="store_true", help="Show the text of every node")
    parser.add_argument("--show-non-token-text", action="store_true",
                        help="Show the text of non-token nodes")
    parser.add_argument("--hide-token-text", action="store_true", help="Do not show token text")
    parser.add_argument("--show-node-type", action="store_true",
                        help="Mark each line as (Node) or (Token)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlcst",
        description="Show the concrete syntax tree of SQL statements.",
    )
    parser.add_argument("--recover", action=argparse.BooleanOptionalAction,
                        default=config.ParserConfig.ERROR_RECOVERY,
                        help="Keep going past SQL syntax errors (--no-recover forces strict mode)")
    parser.add_argument("--dialect", default=config.ParserConfig.DIALECT,
                        help=f"SQL dialect used to check syntax (default: {config.ParserConfig.DIALECT})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    commands = parser.add_subparsers(dest="command", required=True)

    tree = commands.add_parser("tree", help="Print the syntax tree")
    _add_source_arg(tree)
    _add_tree_display_args(tree)
    tree.add_argument("--statement-separator", action="store_true",
                      help="Print a blank line between statements")
    tree.add_argument("--show-statement", action="store_true",
                      help="Print each statement's SQL before its tree")

    tokens = commands.add_parser("tokens", help="Print the token stream")
    _add_source_arg(tokens)
    tokens.add_argument("--hide-range", action="store_true", help="Do not show source ranges")
    tokens.add_argument("--hide-text", action="store_true", help="Do not show token text")

    graph = commands.add_parser("graph", help="Render the syntax tree with Graphviz")
    _add_source_arg(graph)
    _add_tree_display_args(graph)
    graph.add_argument("-o", "--output", metavar="NAME",
                       help="Render to this file instead of printing DOT source")
    graph.add_argument("--format", default=config.GraphConfig.OUTPUT_FORMAT,
                       help=f"Graphviz output format (default: {config.GraphConfig.OUTPUT_FORMAT})")

    return parser


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose or config.AppConfig.DEBUG else config.AppConfig.LOG_LEVEL
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def read_source(path: str) -> str:
    if path == config.STDIN_PLACEHOLDER:
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def run_tree(args, trees, out=None):
    out = out or sys.stdout
    display = DisplayConfig.from_args(args)
    for i, tree in enumerate(trees):
        if i > 0 and display.show_statement_separator:
            out.write("\n")
        if display.show_source_statement:
            out.write(tree.source.strip() + "\n")
        write_tree(tree.root_node(), 0, args.depth, display, out)


def run_tokens(args, trees, out=None):
    out = out or sys.stdout
    for tree in trees:
        write_tokens(tree.root_node(), not args.hide_range, not args.hide_text, out)


def run_graph(args, trees, out=None):
    out = out or sys.stdout
    g = cst_to_graph(trees, args.depth, DisplayConfig.from_args(args), fmt=args.format)
    if args.output:
        out_path = render_graph(g, filename=args.output)
        logger.info("Graph written to %s", out_path)
        out.write(out_path + "\n")
    else:
        out.write(g.source)


COMMANDS = {
    "tree": run_tree,
    "tokens": run_tokens,
    "graph": run_graph,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if getattr(args, "depth", None) is not None:
        logger.debug("Depth range: %s", args.depth)

    try:
        sql = read_source(args.sql_file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Failed to read {args.sql_file}: {e}", file=sys.stderr)
        return 1

    try:
        trees = SQLCSTParser(dialect=args.dialect, recover=args.recover).parse(sql)
    except SQLParseError as e:
        print(f"Failed to parse SQL: {e}", file=sys.stderr)
        return 1

    try:
        COMMANDS[args.command](args, trees)
    except (OSError, ExecutableNotFound) as e:
        print(f"Failed to write output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
