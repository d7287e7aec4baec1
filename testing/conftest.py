import pytest

from cst_gen.cst_tree import TreeBuilder


@pytest.fixture
def select_tree():
    """Hand-built tree for ``SELECT a,b``.

    Statement                 depth 0
      Keyword.DML "SELECT"    depth 1
      Text.Whitespace " "     depth 1
      IdentifierList          depth 1
        Name "a"              depth 2
        Punctuation ","       depth 2
        Name "b"              depth 2
    """
    return (
        TreeBuilder()
        .start_node("Statement")
        .token("Keyword.DML", "SELECT")
        .token("Text.Whitespace", " ")
        .start_node("IdentifierList")
        .token("Name", "a")
        .token("Punctuation", ",")
        .token("Name", "b")
        .finish_node()
        .finish_node()
        .finish()
    )


@pytest.fixture
def sql_file(tmp_path):
    def write(sql):
        path = tmp_path / "query.sql"
        path.write_text(sql, encoding="utf-8")
        return str(path)
    return write
