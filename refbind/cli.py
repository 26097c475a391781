# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any

from refbind.core.diagnostics import Diagnostic
from refbind.core.model import ArgumentShape, BaseType, Invalid, Valid
from refbind.core.spelling import CONVENTION_NAMES, DEFAULT_PARAM_NAME, SHAPE_NAMES, SpellingTable
from refbind.deduce import evaluate, explain
from refbind.errors import RefbindError, SpellingError
from refbind.matrix import (
	INVALID_GLYPH,
	TABLE_COLUMNS,
	TABLE_ROWS,
	Question,
	generate_matrices,
	matrix_to_dict,
	render_report,
)
from refbind.parser import parse_argument, parse_convention


@dataclass(frozen=True)
class TableOptions:
	base: str = "int"
	param_name: str = DEFAULT_PARAM_NAME
	questions: tuple[Question, ...] = (Question.PARAMETER, Question.BOUND)
	fmt: str = "text"
	delimiter: str = " | "
	invalid: str = INVALID_GLYPH


@dataclass(frozen=True)
class EvalOptions:
	convention: str
	argument: str
	json: bool = False


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="refbind",
		description="Deduction tables for generic parameters bound by value, by reference and by forwarding reference",
	)
	sub = p.add_subparsers(dest="cmd", required=True)

	table = sub.add_parser("table", help="Print the deduced-parameter and bound-parameter matrices")
	table.add_argument("--base", default="int", help="Base type substituted into every argument (default: int)")
	table.add_argument(
		"--param",
		default=DEFAULT_PARAM_NAME,
		help=f"Generic parameter name used to spell the forms (default: {DEFAULT_PARAM_NAME})",
	)
	table.add_argument(
		"--question",
		choices=["parameter", "bound", "both"],
		default="both",
		help="Which matrix to print (default: both)",
	)
	table.add_argument("--format", dest="fmt", choices=["text", "markdown", "json"], default="text")
	table.add_argument("--delimiter", default=" | ", help="Cell delimiter for text output (default: ' | ')")
	table.add_argument("--invalid", default=INVALID_GLYPH, help=f"Glyph for illegal bindings (default: {INVALID_GLYPH})")

	ev = sub.add_parser("eval", help="Evaluate one parameter form against one argument type")
	ev.add_argument("convention", help="Parameter form, e.g. 'T&&' or 'const T&'")
	ev.add_argument("argument", help="Argument type, e.g. 'const int&' (a trailing & or && gives the value category)")
	ev.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

	names = sub.add_parser("names", help="List the passing conventions and argument shapes with their spellings")
	names.add_argument("--base", default="int", help="Base type used to spell argument shapes (default: int)")
	names.add_argument("--param", default=DEFAULT_PARAM_NAME, help="Generic parameter name used to spell the forms")
	names.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	return p


def _diagnostic_from_error(err: RefbindError, phase: str) -> Diagnostic:
	if isinstance(err, SpellingError):
		return Diagnostic(message=err.message, code=err.reason_code, phase=phase, span=err.span, notes=list(err.notes))
	return Diagnostic(message=err.message, code=err.reason_code, phase=phase, notes=list(err.notes))


def _emit_diagnostics(diagnostics: list[Diagnostic], *, as_json: bool) -> int:
	exit_code = 2 if any(d.severity == "error" for d in diagnostics) else 0
	if as_json:
		payload = {"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}
		print(json.dumps(payload, sort_keys=True))
	else:
		for diag in diagnostics:
			print(diag.format_human(), file=sys.stderr)
	return exit_code


def _parse_base(text: str) -> BaseType:
	"""The base type must be spelled bare: no qualifier, no reference."""
	base, shape = parse_argument(text)
	if shape is not ArgumentShape.VALUE:
		raise SpellingError(
			"parse/qualified-base",
			f"base type '{text}' must be spelled without const or a reference",
			notes=("the table supplies every qualifier and value category itself",),
			text=text,
		)
	return base


def run_table(opts: TableOptions) -> str:
	base = _parse_base(opts.base)
	spellings = SpellingTable.for_base(base, param_name=opts.param_name)
	matrices = generate_matrices(base, opts.questions)
	if opts.fmt == "json":
		return json.dumps({"matrices": [matrix_to_dict(m, spellings) for m in matrices]}, indent=2, sort_keys=True)
	return render_report(matrices, spellings, fmt=opts.fmt, delimiter=opts.delimiter, invalid=opts.invalid)


def run_eval(opts: EvalOptions) -> dict[str, Any]:
	param_name, convention = parse_convention(opts.convention)
	base, shape = parse_argument(opts.argument)
	spellings = SpellingTable.for_base(base, param_name=param_name)
	result = evaluate(convention, shape, base=base)
	message, notes = explain(convention, shape, result, spellings=spellings, base=base)
	out: dict[str, Any] = {
		"convention": convention.name,
		"form": spellings.convention_name(convention),
		"shape": shape.name,
		"argument": spellings.shape_name(shape, base),
		"valid": result.ok,
		"deduced": None,
		"bound": None,
		"reason": None,
		"message": message,
		"notes": notes,
	}
	if isinstance(result, Valid):
		out["deduced"] = spellings.type_name(result.deduced)
		out["bound"] = spellings.type_name(result.bound)
	elif isinstance(result, Invalid):
		out["reason"] = result.reason.value
	return out


def run_names(base_text: str, param_name: str) -> dict[str, Any]:
	base = _parse_base(base_text)
	spellings = SpellingTable.for_base(base, param_name=param_name)
	return {
		"base": base.name,
		"param": spellings.param_name,
		"conventions": [
			{"convention": c.name, "spelling": spellings.convention_name(c), "name": CONVENTION_NAMES[c]}
			for c in TABLE_ROWS
		],
		"shapes": [
			{"shape": s.name, "spelling": spellings.shape_name(s, base), "name": SHAPE_NAMES[s]}
			for s in TABLE_COLUMNS
		],
	}


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	if args.cmd == "table":
		questions = tuple(Question) if args.question == "both" else (Question(args.question),)
		opts = TableOptions(
			base=args.base,
			param_name=args.param,
			questions=questions,
			fmt=args.fmt,
			delimiter=args.delimiter,
			invalid=args.invalid,
		)
		try:
			print(run_table(opts))
		except RefbindError as err:
			return _emit_diagnostics([_diagnostic_from_error(err, "table")], as_json=opts.fmt == "json")
		return 0

	if args.cmd == "eval":
		opts_eval = EvalOptions(convention=args.convention, argument=args.argument, json=bool(args.json))
		diagnostics: list[Diagnostic] = []
		try:
			parse_convention(opts_eval.convention)
		except RefbindError as err:
			diagnostics.append(_diagnostic_from_error(err, "convention"))
		try:
			parse_argument(opts_eval.argument)
		except RefbindError as err:
			diagnostics.append(_diagnostic_from_error(err, "argument"))
		if diagnostics:
			return _emit_diagnostics(diagnostics, as_json=opts_eval.json)
		try:
			report = run_eval(opts_eval)
		except RefbindError as err:
			return _emit_diagnostics([_diagnostic_from_error(err, "eval")], as_json=opts_eval.json)
		if opts_eval.json:
			print(json.dumps(report, sort_keys=True))
			return 0
		# Human mode: one-line summary + notes. Invalid bindings are results, not failures.
		print(report["message"])
		for note in report["notes"]:
			print(f"  note: {note}")
		return 0

	if args.cmd == "names":
		try:
			report = run_names(args.base, args.param)
		except RefbindError as err:
			return _emit_diagnostics([_diagnostic_from_error(err, "names")], as_json=bool(args.json))
		if args.json:
			print(json.dumps(report, sort_keys=True))
			return 0
		width = max(len(entry["spelling"]) for entry in report["conventions"] + report["shapes"])
		print("conventions:")
		for entry in report["conventions"]:
			print(f"  {entry['spelling'].ljust(width)}  {entry['name']}")
		print("argument shapes:")
		for entry in report["shapes"]:
			print(f"  {entry['spelling'].ljust(width)}  {entry['name']}")
		return 0

	raise AssertionError("unreachable")


__all__ = ["TableOptions", "EvalOptions", "run_table", "run_eval", "run_names", "main"]
