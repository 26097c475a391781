# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Matrix generation and rendering.

A Matrix answers one question (what `T` deduces to, or what the bound
parameter's type is) for every (convention, shape) cell, in a fixed row and
column order. Rendering never fails: an Invalid cell is drawn as the invalid
glyph, everything else by its display name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence

from refbind.core.model import (
	ArgumentShape,
	BaseType,
	BindingResult,
	PassingConvention,
	QualifiedType,
	Valid,
)
from refbind.core.spelling import CONVENTION_NAMES, SHAPE_NAMES, SpellingTable, require_exhaustive
from refbind.deduce import DEFAULT_BASE, evaluate

TABLE_ROWS: tuple[PassingConvention, ...] = (
	PassingConvention.BY_VALUE,
	PassingConvention.CONST_BY_VALUE,
	PassingConvention.BY_LVALUE_REF,
	PassingConvention.CONST_BY_LVALUE_REF,
	PassingConvention.CONST_BY_RVALUE_REF,
	PassingConvention.BY_RVALUE_REF,
)

TABLE_COLUMNS: tuple[ArgumentShape, ...] = (
	ArgumentShape.VALUE,
	ArgumentShape.LVALUE_REF,
	ArgumentShape.RVALUE_REF,
	ArgumentShape.CONST_VALUE,
	ArgumentShape.CONST_LVALUE_REF,
	ArgumentShape.CONST_RVALUE_REF,
)

INVALID_GLYPH = "-"


class Question(str, Enum):
	PARAMETER = "parameter"
	BOUND = "bound"

	def answer(self, result: Valid) -> QualifiedType:
		if self is Question.PARAMETER:
			return result.deduced
		return result.bound


QUESTION_TITLES = require_exhaustive(
	Question,
	{
		Question.PARAMETER: "Deduced generic parameter type",
		Question.BOUND: "Bound parameter type",
	},
	what="question",
)


@dataclass(frozen=True)
class Matrix:
	"""Evaluation results for one question, rows x columns."""

	question: Question
	base: BaseType
	rows: tuple[PassingConvention, ...]
	columns: tuple[ArgumentShape, ...]
	results: tuple[tuple[BindingResult, ...], ...]

	def result(self, convention: PassingConvention, shape: ArgumentShape) -> BindingResult:
		return self.results[self.rows.index(convention)][self.columns.index(shape)]

	def cell(self, convention: PassingConvention, shape: ArgumentShape) -> QualifiedType | None:
		"""The answer to this matrix's question, or None for an illegal binding."""
		res = self.result(convention, shape)
		if isinstance(res, Valid):
			return self.question.answer(res)
		return None

	def column(self, shape: ArgumentShape) -> list[QualifiedType | None]:
		return [self.cell(conv, shape) for conv in self.rows]


def _check_domain(rows: Sequence[PassingConvention], columns: Sequence[ArgumentShape]) -> None:
	# Duplicates would make `Matrix.result` ambiguous.
	if len(set(rows)) != len(rows):
		raise ValueError("duplicate convention in matrix rows")
	if len(set(columns)) != len(columns):
		raise ValueError("duplicate argument shape in matrix columns")


def generate_matrix(
	question: Question,
	base: BaseType = DEFAULT_BASE,
	*,
	rows: Sequence[PassingConvention] = TABLE_ROWS,
	columns: Sequence[ArgumentShape] = TABLE_COLUMNS,
) -> Matrix:
	"""Evaluate every (row, column) cell once for `question`."""
	_check_domain(rows, columns)
	results = tuple(tuple(evaluate(conv, shape, base=base) for shape in columns) for conv in rows)
	return Matrix(question=question, base=base, rows=tuple(rows), columns=tuple(columns), results=results)


def generate_matrices(base: BaseType = DEFAULT_BASE, questions: Iterable[Question] = tuple(Question)) -> list[Matrix]:
	return [generate_matrix(q, base) for q in questions]


def _cell_text(matrix: Matrix, conv: PassingConvention, shape: ArgumentShape, spellings: SpellingTable, invalid: str) -> str:
	ty = matrix.cell(conv, shape)
	if ty is None:
		return invalid
	return spellings.type_name(ty)


def _grid(matrix: Matrix, spellings: SpellingTable, invalid: str, corner: str) -> list[list[str]]:
	header = [corner] + [spellings.shape_name(s, matrix.base) for s in matrix.columns]
	body = [
		[spellings.convention_name(conv)] + [_cell_text(matrix, conv, s, spellings, invalid) for s in matrix.columns]
		for conv in matrix.rows
	]
	return [header, *body]


def render_text(
	matrix: Matrix,
	spellings: SpellingTable,
	*,
	delimiter: str = " | ",
	invalid: str = INVALID_GLYPH,
	corner: str = "",
) -> str:
	"""Aligned grid: header row of argument shapes, leading column of conventions."""
	grid = _grid(matrix, spellings, invalid, corner)
	widths = [max(len(row[i]) for row in grid) for i in range(len(grid[0]))]
	lines = [delimiter.join(text.ljust(w) for text, w in zip(row, widths)).rstrip() for row in grid]
	return "\n".join(lines)


def render_markdown(
	matrix: Matrix,
	spellings: SpellingTable,
	*,
	invalid: str = INVALID_GLYPH,
	corner: str = "",
) -> str:
	grid = _grid(matrix, spellings, invalid, corner)
	widths = [max(3, max(len(row[i]) for row in grid)) for i in range(len(grid[0]))]

	def _row(cells: list[str]) -> str:
		return "| " + " | ".join(text.ljust(w) for text, w in zip(cells, widths)) + " |"

	lines = [_row(grid[0]), "|" + "|".join("-" * (w + 2) for w in widths) + "|"]
	lines.extend(_row(row) for row in grid[1:])
	return "\n".join(lines)


def matrix_to_dict(matrix: Matrix, spellings: SpellingTable) -> dict[str, Any]:
	"""JSON-friendly form; Invalid cells are None."""
	cells: list[list[str | None]] = []
	for conv in matrix.rows:
		row: list[str | None] = []
		for shape in matrix.columns:
			ty = matrix.cell(conv, shape)
			row.append(spellings.type_name(ty) if ty is not None else None)
		cells.append(row)
	return {
		"question": matrix.question.value,
		"title": QUESTION_TITLES[matrix.question],
		"base": matrix.base.name,
		"param": spellings.param_name,
		"rows": [
			{"convention": conv.name, "spelling": spellings.convention_name(conv), "name": CONVENTION_NAMES[conv]}
			for conv in matrix.rows
		],
		"columns": [
			{"shape": shape.name, "spelling": spellings.shape_name(shape, matrix.base), "name": SHAPE_NAMES[shape]}
			for shape in matrix.columns
		],
		"cells": cells,
	}


def render_report(
	matrices: Sequence[Matrix],
	spellings: SpellingTable,
	*,
	fmt: str = "text",
	delimiter: str = " | ",
	invalid: str = INVALID_GLYPH,
) -> str:
	"""Titled concatenation of one or more rendered matrices (text or markdown)."""
	blocks: list[str] = []
	for matrix in matrices:
		title = f"{QUESTION_TITLES[matrix.question]} ({spellings.param_name}, argument of type {matrix.base.name}):"
		if fmt == "markdown":
			body = render_markdown(matrix, spellings, invalid=invalid)
			blocks.append(f"**{title}**\n\n{body}")
		elif fmt == "text":
			blocks.append(f"{title}\n{render_text(matrix, spellings, delimiter=delimiter, invalid=invalid)}")
		else:
			raise ValueError(f"unknown report format '{fmt}'")
	return "\n\n".join(blocks)


__all__ = [
	"TABLE_ROWS",
	"TABLE_COLUMNS",
	"INVALID_GLYPH",
	"Question",
	"QUESTION_TITLES",
	"Matrix",
	"generate_matrix",
	"generate_matrices",
	"render_text",
	"render_markdown",
	"matrix_to_dict",
	"render_report",
]
