import json
from pathlib import Path

import pytest

from monkey import monkey_cli
from monkey.monkey_parser import ParseError

SOURCE = "let x = 1 + 2 * 3;"
RENDERED = "let x = (1 + (2 * 3));"


def test_run_monkey_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source=SOURCE, is_string=True)
    out = capsys.readouterr().out.strip()
    assert out == RENDERED


def test_run_monkey_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "input.monkey"
    file_path.write_text(SOURCE)
    monkey_cli.run_monkey(source=str(file_path))
    assert capsys.readouterr().out.strip() == RENDERED


def test_run_monkey_rejects_other_extensions(tmp_path: Path) -> None:
    file_path = tmp_path / "input.txt"
    file_path.write_text(SOURCE)
    with pytest.raises(ValueError, match="Only .monkey files"):
        monkey_cli.run_monkey(source=str(file_path))


def test_run_monkey_json_format(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="-5", is_string=True, fmt="json")
    tree = json.loads(capsys.readouterr().out)
    assert tree["kind"] == "program"
    expr = tree["statements"][0]["expression"]
    assert expr["kind"] == "prefix"
    assert expr["right"]["value"] == 5


def test_run_monkey_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out_path = tmp_path / "out.txt"
    monkey_cli.run_monkey(source=SOURCE, is_string=True, out=str(out_path), pretty=True)
    assert out_path.read_text() == RENDERED
    assert f"(wrote to {out_path})" in capsys.readouterr().out


def test_run_monkey_pretty_banner(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="a", is_string=True, pretty=True)
    out = capsys.readouterr().out
    assert "Parsed program" in out
    assert "=" * 20 in out


def test_run_monkey_raises_on_parse_errors() -> None:
    with pytest.raises(ParseError) as exc_info:
        monkey_cli.run_monkey(source="let x 5;", is_string=True)
    assert exc_info.value.errors == ["expected next token to be =, got INT instead"]


def test_main_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert monkey_cli.main(["-s", "a + b"]) == 0
    assert capsys.readouterr().out.strip() == "(a + b)"


def test_main_reports_parse_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert monkey_cli.main(["-s", "let = 5;"]) == 1
    err = capsys.readouterr().err
    assert "[error] >>>" in err
    assert "expected next token to be IDENT, got = instead" in err
    assert "no prefix parse function for = found" in err


def test_main_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert monkey_cli.main([str(tmp_path / "nope.monkey")]) == 1
    assert "[error] >>>" in capsys.readouterr().err


def test_main_bad_extension(capsys: pytest.CaptureFixture[str]) -> None:
    assert monkey_cli.main(["program.txt"]) == 1
    assert "Only .monkey files are supported." in capsys.readouterr().err


def test_main_launches_repl_without_source(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[bool] = []
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda verbose=False: calls.append(verbose)
    )
    assert monkey_cli.main([]) == 0
    assert monkey_cli.main(["--repl", "--verbose"]) == 0
    assert calls == [False, True]


def test_main_invalid_format_exits() -> None:
    with pytest.raises(SystemExit):
        monkey_cli.main(["-s", "x", "-f", "yaml"])


def test_main_long_prefix_chain(capsys: pytest.CaptureFixture[str]) -> None:
    depth = 1000
    assert monkey_cli.main(["-s", "--", "-" * depth + "x"]) == 0
    assert capsys.readouterr().out.strip() == "(-" * depth + "x" + ")" * depth


def test_main_octal_literal(capsys: pytest.CaptureFixture[str]) -> None:
    assert monkey_cli.main(["-s", "010", "-f", "json"]) == 0
    tree = json.loads(capsys.readouterr().out)
    assert tree["statements"][0]["expression"]["value"] == 8
