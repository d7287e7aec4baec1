import io

import pytest

import main


def test_tree_root_only(sql_file, capsys):
    path = sql_file("SELECT 1")

    assert main.main(["tree", path, "--depth", "0", "--hide-range"]) == 0
    assert capsys.readouterr().out == "Statement\n"


def test_tree_show_all_text(sql_file, capsys):
    path = sql_file("SELECT 1")

    assert main.main(["tree", path, "-d", "0", "--hide-range", "--show-all-text"]) == 0
    assert capsys.readouterr().out == 'Statement "SELECT 1"\n'


def test_tree_node_type_and_hidden_token_text(sql_file, capsys):
    path = sql_file("SELECT 1")

    assert main.main(["tree", path, "-d", "1", "--hide-range", "--hide-token-text",
                      "--show-node-type"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Keyword.DML (Token)"
    assert lines[1] == "Text.Whitespace (Token)"


def test_tree_statement_separator_and_source(sql_file, capsys):
    path = sql_file("SELECT 1;\nSELECT 2;")

    assert main.main(["tree", path, "-d", "0", "--hide-range",
                      "--statement-separator", "--show-statement"]) == 0
    assert capsys.readouterr().out == (
        "SELECT 1;\n"
        "Statement\n"
        "\n"
        "SELECT 2;\n"
        "Statement\n"
    )


def test_tokens_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("SELECT 1"))

    assert main.main(["tokens", "--hide-range"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        'Keyword.DML "SELECT"',
        'Text.Whitespace " "',
        'Literal.Number.Integer "1"',
    ]


def test_tokens_placeholder_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("SELECT 1"))

    assert main.main(["tokens", "-", "--hide-text"]) == 0
    assert capsys.readouterr().out.splitlines()[0] == "Keyword.DML@[0:0-0:6]"


def test_bad_range_fails_before_reading(tmp_path, capsys):
    missing = tmp_path / "missing.sql"

    with pytest.raises(SystemExit) as exc:
        main.main(["tree", str(missing), "--depth", "5..3"])

    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "Start must be less than or equal to end" in err
    assert "Failed to read" not in err


def test_missing_file(tmp_path, capsys):
    assert main.main(["tree", str(tmp_path / "missing.sql")]) == 1
    assert "Failed to read" in capsys.readouterr().err


def test_parse_error_and_recovery(sql_file, capsys):
    path = sql_file("SELECT (1 + 2")

    assert main.main(["tree", path]) == 1
    captured = capsys.readouterr()
    assert "Failed to parse SQL" in captured.err
    assert captured.out == ""

    assert main.main(["--recover", "tree", path, "-d", "0", "--hide-range"]) == 0
    assert capsys.readouterr().out == "Statement\n"


def test_graph_prints_dot_source(sql_file, capsys):
    path = sql_file("SELECT 1")

    assert main.main(["graph", path, "-d", "0", "--hide-range"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("digraph")
    assert "Statement" in out


def test_subcommand_is_required(capsys):
    with pytest.raises(SystemExit) as exc:
        main.main([])

    assert exc.value.code == 2


def test_deeply_nested_sql_reports_parse_failure(sql_file, capsys):
    path = sql_file("SELECT " + "(" * 300 + "1" + ")" * 300)

    assert main.main(["tokens", path]) == 1
    assert "Failed to parse SQL" in capsys.readouterr().err


def test_tokens_keep_final_newline(sql_file, capsys):
    path = sql_file("SELECT 1;\n")

    assert main.main(["tokens", path, "--hide-range"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == 'Text.Whitespace.Newline "\\n"'


def test_no_recover_overrides_environment_default(monkeypatch, sql_file, capsys):
    monkeypatch.setattr(main.config.ParserConfig, "ERROR_RECOVERY", True)
    path = sql_file("SELECT (1 + 2")

    assert main.main(["tree", path, "-d", "0", "--hide-range"]) == 0
    assert capsys.readouterr().out == "Statement\n"

    assert main.main(["--no-recover", "tree", path]) == 1
    assert "Failed to parse SQL" in capsys.readouterr().err
