from .depth_range import DepthRange, DepthRangeError, Endpoint, EndpointKind, MAX_DEPTH, parse_depth_range
from .models import DisplayConfig
from .cst_tree import CstNode, CstTree, SourceRange, TreeBuilder, TreeCursor
from .cst_parser import SQLCSTParser, SQLParseError
from .tree_printer import render_tree, write_tree
from .token_printer import render_tokens, write_tokens
from .cst_visualizer import cst_to_graph, render_graph

__all__ = [
    'DepthRange',
    'DepthRangeError',
    'Endpoint',
    'EndpointKind',
    'MAX_DEPTH',
    'parse_depth_range',
    'DisplayConfig',
    'CstNode',
    'CstTree',
    'SourceRange',
    'TreeBuilder',
    'TreeCursor',
    'SQLCSTParser',
    'SQLParseError',
    'render_tree',
    'write_tree',
    'render_tokens',
    'write_tokens',
    'cst_to_graph',
    'render_graph',
]
