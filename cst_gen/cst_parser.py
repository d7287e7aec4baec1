import logging
from typing import List, Optional

import sqlglot
import sqlparse
from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import SqlglotError
from sqlparse import exceptions as sqlparse_exceptions
from sqlparse import lexer, sql

import config
from .cst_tree import CstTree, Point, TreeBuilder

logger = logging.getLogger(__name__)

TOKEN_TYPE_PREFIX = "Token."


class SQLParseError(ValueError):
    pass


def ttype_kind(ttype) -> str:
    kind = str(ttype)
    if kind.startswith(TOKEN_TYPE_PREFIX):
        return kind[len(TOKEN_TYPE_PREFIX):]
    return kind


def token_kind(token) -> str:
    if token.is_group:
        return type(token).__name__
    return ttype_kind(token.ttype)


class SQLCSTParser:
    """
    Turns SQL text into one concrete syntax tree per statement.

    sqlparse does the splitting and grouping and never rejects input, so
    the text is first checked with sqlglot. In recovery mode a failed check
    is only logged and the sqlparse tree is built anyway.
    """

    def __init__(self, dialect: Optional[str] = None, recover: Optional[bool] = None):
        self.dialect = dialect or config.ParserConfig.DIALECT
        self.recover = config.ParserConfig.ERROR_RECOVERY if recover is None else recover

    def parse(self, source: str) -> List[CstTree]:
        self.validate(source)
        statements = self._split(source)

        # sqlparse drops a final whitespace-only statement; it goes on the last tree
        consumed = sum(len(str(statement)) for statement in statements)
        trailing = source[consumed:]

        trees = []
        offset, point = 0, (0, 0)
        for i, statement in enumerate(statements):
            is_last = i == len(statements) - 1
            tree = self._build_statement(statement, offset, point, trailing if is_last else "")
            root = tree.root_node().range()
            offset, point = root.end_offset, root.end_point
            trees.append(tree)

        logger.debug("Parsed %d statement(s) from %d characters", len(trees), len(source))
        return trees

    def validate(self, source: str):
        dialect = self._resolve_dialect()
        try:
            sqlglot.parse(source, read=dialect)
        except (SqlglotError, RecursionError) as e:
            if not self.recover:
                raise SQLParseError(self._describe(e)) from e
            logger.warning("Continuing past SQL syntax error: %s", self._describe(e))

    def _split(self, source: str) -> List[sql.Statement]:
        try:
            return list(sqlparse.parse(source))
        except (sqlparse_exceptions.SQLParseError, RecursionError) as e:
            raise SQLParseError(self._describe(e)) from e

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, RecursionError):
            return "SQL is nested too deeply to parse"
        return str(error)

    def _resolve_dialect(self) -> Dialect:
        try:
            return Dialect.get_or_raise(self.dialect)
        except ValueError as e:
            raise SQLParseError(f"Unknown SQL dialect '{self.dialect}'") from e

    def _build_statement(self, statement: sql.Statement, offset: int, point: Point,
                         trailing: str = "") -> CstTree:
        builder = TreeBuilder(base_offset=offset, base_point=point)
        builder.start_node(token_kind(statement))
        for child in statement.tokens:
            self._add_token(builder, child)
        for ttype, value in lexer.tokenize(trailing):
            builder.token(ttype_kind(ttype), value)
        builder.finish_node()
        return builder.finish()

    def _add_token(self, builder: TreeBuilder, token):
        if not token.is_group:
            builder.token(token_kind(token), token.value)
            return

        builder.start_node(token_kind(token))
        for child in token.tokens:
            self._add_token(builder, child)
        builder.finish_node()
