# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import itertools

import pytest

from refbind.core.model import (
	ArgumentShape,
	BaseType,
	Invalid,
	InvalidReason,
	PassingConvention,
	QualifiedType,
	Qualifier,
	RefKind,
	Valid,
)
from refbind.core.spelling import SpellingTable
from refbind.deduce import evaluate, explain, substitute

C = PassingConvention
S = ArgumentShape
INT = BaseType("int")

ALL_CELLS = list(itertools.product(PassingConvention, ArgumentShape))

ILLEGAL = {
	(C.BY_LVALUE_REF, S.VALUE),
	(C.BY_LVALUE_REF, S.RVALUE_REF),
	(C.CONST_BY_RVALUE_REF, S.LVALUE_REF),
	(C.CONST_BY_RVALUE_REF, S.CONST_LVALUE_REF),
}


def _valid(convention: PassingConvention, shape: ArgumentShape, base: BaseType = INT) -> Valid:
	res = evaluate(convention, shape, base=base)
	assert isinstance(res, Valid), f"{convention.name} x {shape.name} unexpectedly invalid"
	return res


@pytest.mark.parametrize("convention,shape", ALL_CELLS)
def test_evaluate_is_deterministic(convention: PassingConvention, shape: ArgumentShape) -> None:
	assert evaluate(convention, shape) == evaluate(convention, shape)


@pytest.mark.parametrize("convention,shape", ALL_CELLS)
def test_exactly_four_cells_are_illegal(convention: PassingConvention, shape: ArgumentShape) -> None:
	res = evaluate(convention, shape)
	assert res.ok is ((convention, shape) not in ILLEGAL)


def test_illegal_cells_carry_reasons() -> None:
	assert evaluate(C.BY_LVALUE_REF, S.VALUE) == Invalid(InvalidReason.TEMPORARY_TO_LVALUE_REF)
	assert evaluate(C.BY_LVALUE_REF, S.RVALUE_REF) == Invalid(InvalidReason.TEMPORARY_TO_LVALUE_REF)
	assert evaluate(C.CONST_BY_RVALUE_REF, S.LVALUE_REF) == Invalid(InvalidReason.LVALUE_TO_RVALUE_REF)
	assert evaluate(C.CONST_BY_RVALUE_REF, S.CONST_LVALUE_REF) == Invalid(InvalidReason.LVALUE_TO_RVALUE_REF)


def test_forwarding_reference_collapses_for_lvalues() -> None:
	res = _valid(C.BY_RVALUE_REF, S.LVALUE_REF)
	lref = QualifiedType(INT, Qualifier.MUTABLE, RefKind.LVALUE)
	assert res.deduced == lref
	assert res.bound == lref


def test_forwarding_reference_keeps_const_when_collapsing() -> None:
	res = _valid(C.BY_RVALUE_REF, S.CONST_LVALUE_REF)
	assert res.deduced == QualifiedType(INT, Qualifier.CONST, RefKind.LVALUE)
	assert res.bound == QualifiedType(INT, Qualifier.CONST, RefKind.LVALUE)


@pytest.mark.parametrize("shape", [S.VALUE, S.RVALUE_REF, S.CONST_VALUE, S.CONST_RVALUE_REF])
def test_forwarding_reference_binds_rvalues_without_reference_in_t(shape: ArgumentShape) -> None:
	res = _valid(C.BY_RVALUE_REF, shape)
	assert res.deduced == QualifiedType(INT, shape.qualifier)
	assert res.bound == QualifiedType(INT, shape.qualifier, RefKind.RVALUE)


def test_const_rvalue_form_never_collapses() -> None:
	for shape in (S.VALUE, S.RVALUE_REF, S.CONST_VALUE, S.CONST_RVALUE_REF):
		res = _valid(C.CONST_BY_RVALUE_REF, shape)
		assert not res.deduced.is_reference
		assert res.deduced.qualifier is shape.qualifier
		assert res.bound == QualifiedType(INT, Qualifier.CONST, RefKind.RVALUE)


def test_lvalue_ref_propagates_argument_const_into_t() -> None:
	assert _valid(C.BY_LVALUE_REF, S.CONST_VALUE).deduced == QualifiedType(INT, Qualifier.CONST)
	assert _valid(C.BY_LVALUE_REF, S.LVALUE_REF).deduced == QualifiedType(INT)
	assert _valid(C.BY_LVALUE_REF, S.CONST_LVALUE_REF).bound == QualifiedType(INT, Qualifier.CONST, RefKind.LVALUE)


def test_const_lvalue_ref_binds_everything_as_const_reference() -> None:
	for shape in ArgumentShape:
		res = _valid(C.CONST_BY_LVALUE_REF, shape)
		assert res.deduced == QualifiedType(INT, shape.qualifier)
		assert res.bound == QualifiedType(INT, Qualifier.CONST, RefKind.LVALUE)


def test_by_value_convention_const_never_leaks_into_deduction() -> None:
	res = _valid(C.CONST_BY_VALUE, S.VALUE)
	assert res.deduced == QualifiedType(INT)
	assert res.bound == QualifiedType(INT, Qualifier.CONST)


@pytest.mark.parametrize("shape", list(ArgumentShape))
def test_by_value_deduction_ignores_category_and_const(shape: ArgumentShape) -> None:
	assert _valid(C.BY_VALUE, shape).deduced == QualifiedType(INT)
	assert _valid(C.BY_VALUE, shape).bound == QualifiedType(INT)
	assert _valid(C.CONST_BY_VALUE, shape).deduced == QualifiedType(INT)


@pytest.mark.parametrize("convention", list(PassingConvention))
def test_value_and_rvalue_shapes_are_indistinguishable(convention: PassingConvention) -> None:
	assert evaluate(convention, S.VALUE) == evaluate(convention, S.RVALUE_REF)
	assert evaluate(convention, S.CONST_VALUE) == evaluate(convention, S.CONST_RVALUE_REF)


def test_base_type_flows_through_untouched() -> None:
	widget = BaseType("Widget")
	for convention, shape in ALL_CELLS:
		res = evaluate(convention, shape, base=widget)
		if isinstance(res, Valid):
			assert res.deduced.base == widget
			assert res.bound.base == widget


def test_substitute_drops_const_applied_to_a_reference() -> None:
	lref = QualifiedType(INT, Qualifier.MUTABLE, RefKind.LVALUE)
	assert substitute(C.CONST_BY_VALUE, lref) == lref
	assert substitute(C.BY_RVALUE_REF, lref) == lref
	assert substitute(C.CONST_BY_LVALUE_REF, QualifiedType(INT)) == QualifiedType(INT, Qualifier.CONST, RefKind.LVALUE)


def test_explain_valid_collapsing_cell() -> None:
	spellings = SpellingTable.for_base(INT)
	res = evaluate(C.BY_RVALUE_REF, S.LVALUE_REF)
	msg, notes = explain(C.BY_RVALUE_REF, S.LVALUE_REF, res, spellings=spellings)
	assert msg == "T = int&; parameter is int&"
	assert any("reference collapsing" in n for n in notes)


def test_explain_const_by_value_notes_const_source() -> None:
	spellings = SpellingTable.for_base(INT)
	res = evaluate(C.CONST_BY_VALUE, S.VALUE)
	msg, notes = explain(C.CONST_BY_VALUE, S.VALUE, res, spellings=spellings)
	assert msg == "T = int; parameter is const int"
	assert notes == ["const on the parameter comes from 'const T', not from deduction"]


def test_explain_invalid_cells() -> None:
	spellings = SpellingTable.for_base(INT)
	res = evaluate(C.BY_LVALUE_REF, S.VALUE)
	msg, notes = explain(C.BY_LVALUE_REF, S.VALUE, res, spellings=spellings)
	assert msg == "cannot bind int to T&: a temporary cannot bind to a non-const lvalue reference"
	assert notes

	res = evaluate(C.CONST_BY_RVALUE_REF, S.CONST_LVALUE_REF)
	msg, notes = explain(C.CONST_BY_RVALUE_REF, S.CONST_LVALUE_REF, res, spellings=spellings)
	assert msg.startswith("cannot bind const int& to const T&&")
	assert any("pointless" in n for n in notes)
