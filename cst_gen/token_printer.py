import io
from typing import TextIO

from .cst_tree import CstNode
from .text_utils import quote_text


def format_token(node: CstNode, show_range: bool, show_text: bool) -> str:
    line = node.kind()
    if show_range:
        line += f"@{node.range()}"
    if show_text:
        line += f" {quote_text(node.text())}"
    return line


def write_tokens(root: CstNode, show_range: bool, show_text: bool, out: TextIO):
    """Write every leaf under ``root`` in source order, one per line.

    Walks with a cursor instead of recursing, so tree depth is not bounded
    by the interpreter's recursion limit.
    """
    cursor = root.walk()
    while True:
        node = cursor.node()
        if node.is_token():
            out.write(format_token(node, show_range, show_text))
            out.write("\n")

        if cursor.goto_first_child():
            continue

        while not cursor.goto_next_sibling():
            if not cursor.goto_parent():
                return


def render_tokens(root: CstNode, show_range: bool = True, show_text: bool = True) -> str:
    output = io.StringIO()
    write_tokens(root, show_range, show_text, output)
    return output.getvalue()
