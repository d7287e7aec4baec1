from typing import Dict, List, Optional

from graphviz import Digraph

import config
from .cst_tree import CstNode, CstTree
from .depth_range import DepthRange
from .models import DisplayConfig
from .text_utils import quote_text
from .tree_printer import should_print


def _get_label(node: CstNode, display: DisplayConfig) -> str:
    is_token = node.is_token()
    lines = [node.kind()]

    if display.show_node_type:
        lines.append("Token" if is_token else "Node")

    if display.show_range:
        lines.append(str(node.range()))

    if display.should_show_text(is_token):
        lines.append(quote_text(node.text()))

    return "\n".join(lines)


def _build_graph(node: CstNode,
                 depth: int,
                 g: Digraph,
                 parent_id: Optional[str],
                 depth_range: Optional[DepthRange],
                 display: DisplayConfig,
                 counter: Dict[str, int]) -> None:
    node_id = parent_id

    if should_print(depth, depth_range):
        node_id = f"n{counter['i']}"
        counter["i"] += 1
        g.node(node_id, _get_label(node, display))

        if parent_id is not None:
            g.edge(parent_id, node_id)

    # hidden nodes hand their parent id down so shown descendants stay connected
    for child in node.children():
        _build_graph(child, depth + 1, g, node_id, depth_range, display, counter)


def cst_to_graph(trees: List[CstTree],
                 depth_range: Optional[DepthRange] = None,
                 display: Optional[DisplayConfig] = None,
                 fmt: str = config.GraphConfig.OUTPUT_FORMAT) -> Digraph:
    g = Digraph(format=fmt)
    g.attr(rankdir="TB")
    g.attr("node", shape="plaintext")

    counter = {"i": 0}
    for tree in trees:
        _build_graph(tree.root_node(), 0, g, None, depth_range,
                     display or DisplayConfig(), counter)
    return g


def render_graph(g: Digraph,
                 filename: str = config.GraphConfig.OUTPUT_NAME) -> str:
    out_path = g.render(filename=filename, cleanup=True)
    return out_path
