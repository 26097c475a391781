# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json

import pytest

from refbind.cli import EvalOptions, TableOptions, main, run_eval, run_table
from refbind.matrix import Question


def test_table_text_prints_both_matrices(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["table"]) == 0
	out = capsys.readouterr().out
	assert "Deduced generic parameter type" in out
	assert "Bound parameter type" in out
	assert out.count("const T&&") == 2


def test_table_single_question_markdown() -> None:
	text = run_table(TableOptions(questions=(Question.BOUND,), fmt="markdown"))
	assert text.startswith("**Bound parameter type")
	assert "Deduced generic parameter type" not in text


def test_table_json(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["table", "--format", "json", "--question", "parameter", "--base", "long"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert len(data["matrices"]) == 1
	matrix = data["matrices"][0]
	assert matrix["base"] == "long"
	assert matrix["cells"][5][1] == "long&"


def test_table_rejects_qualified_base(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["table", "--base", "const int&"]) == 2
	err = capsys.readouterr().err
	assert "must be spelled without const or a reference" in err


def test_table_rejects_param_equal_to_base(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["table", "--base", "T"]) == 2
	assert "same name as base type" in capsys.readouterr().err


def test_eval_valid_cell(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["eval", "T&&", "const int&"]) == 0
	out = capsys.readouterr().out.splitlines()
	assert out[0] == "T = const int&; parameter is const int&"
	assert out[1].startswith("  note: reference collapsing")


def test_eval_invalid_cell_is_not_a_failure(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["eval", "T&", "int&&"]) == 0
	assert capsys.readouterr().out.startswith("cannot bind int&& to T&")


def test_eval_json(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["eval", "const U&&", "Widget&", "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["convention"] == "CONST_BY_RVALUE_REF"
	assert data["form"] == "const U&&"
	assert data["shape"] == "LVALUE_REF"
	assert data["valid"] is False
	assert data["reason"] == "lvalue_to_rvalue_ref"
	assert data["deduced"] is None


def test_run_eval_reports_both_types() -> None:
	report = run_eval(EvalOptions(convention="const T", argument="int&&"))
	assert report["deduced"] == "int"
	assert report["bound"] == "const int"
	assert report["valid"] is True


def test_eval_collects_diagnostics_for_both_inputs(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["eval", "T&&&", "const int const", "--json"]) == 2
	data = json.loads(capsys.readouterr().out)
	assert data["exit_code"] == 2
	assert [d["phase"] for d in data["diagnostics"]] == ["convention", "argument"]
	assert data["diagnostics"][1]["code"] == "parse/duplicate-const"


def test_eval_human_diagnostic_has_caret(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["eval", "T*", "int"]) == 2
	err = capsys.readouterr().err.splitlines()
	assert err[0].startswith("convention: error:")
	assert err[1] == "  T*"
	assert err[2] == "   ^"


def test_names(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["names", "--json", "--param", "X"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert [c["spelling"] for c in data["conventions"]] == ["X", "const X", "X&", "const X&", "const X&&", "X&&"]
	assert data["shapes"][0] == {"shape": "VALUE", "spelling": "int", "name": "value"}


def test_names_human(capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["names"]) == 0
	out = capsys.readouterr().out
	assert "by forwarding reference" in out
	assert "const int&&" in out
