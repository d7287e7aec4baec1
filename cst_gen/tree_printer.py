"""Depth-filtered rendering of a concrete syntax tree, one node per line.

Indentation is relative to the first depth the range admits, so a range
such as ``3..`` prints its shallowest nodes flush left instead of hanging
them off ancestors that were never printed. Without a range this is the
same as indenting by absolute depth.
"""

import io
from typing import Optional, TextIO

import config
from .cst_tree import CstNode
from .depth_range import DepthRange
from .models import DisplayConfig
from .text_utils import quote_text


def should_print(depth: int, depth_range: Optional[DepthRange]) -> bool:
    if depth_range is None:
        return True
    return depth_range.contains(depth)


def indent_prefix(depth: int, depth_range: Optional[DepthRange]) -> str:
    floor = depth_range.floor if depth_range is not None else 0
    relative_depth = max(depth - floor, 0)
    if relative_depth == 0:
        return ""
    return "-" * ((relative_depth - 1) * config.INDENT_SIZE) + "-+"


def format_node(node: CstNode, display: DisplayConfig) -> str:
    is_token = node.is_token()
    parts = [node.kind()]

    if display.show_node_type:
        parts.append("(Token)" if is_token else "(Node)")

    if display.show_range:
        parts.append(str(node.range()))

    if display.should_show_text(is_token):
        parts.append(quote_text(node.text()))

    return " ".join(parts)


def write_tree(
    node: CstNode,
    depth: int,
    depth_range: Optional[DepthRange],
    display: DisplayConfig,
    out: TextIO,
):
    if should_print(depth, depth_range):
        out.write(indent_prefix(depth, depth_range))
        out.write(format_node(node, display))
        out.write("\n")

    # descend even when this node was hidden: deeper nodes may be in range
    for child in node.children():
        write_tree(child, depth + 1, depth_range, display, out)


def render_tree(
    node: CstNode,
    depth_range: Optional[DepthRange] = None,
    display: Optional[DisplayConfig] = None,
    depth: int = 0,
) -> str:
    output = io.StringIO()
    write_tree(node, depth, depth_range, display or DisplayConfig(), output)
    return output.getvalue()
