# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Deduction engine: bind one argument to one generic parameter.

`evaluate` is a pure, total function over the 6x6 domain of
(PassingConvention, ArgumentShape). It answers two questions per cell: what
the generic parameter `T` deduces to, and what type the parameter name has
inside the callee once `T` is substituted into the parameter form.

Deduction rules:
- by-value forms strip const and reference-ness from the argument; any const
  on the parameter comes from the form itself, never from deduction.
- lvalue-reference forms keep the argument's const on `T` and never deduce a
  reference.
- the forwarding form (`T&&`) deduces `T` as an lvalue reference when the
  argument names an existing object; this is the only way `T` itself becomes
  a reference.
- `const T&&` is a plain rvalue reference: no collapsing special case.

The bound type is `T` substituted into the form with reference collapsing.
"""

from __future__ import annotations

from refbind.core.model import (
	ArgumentShape,
	BaseType,
	BindingResult,
	Invalid,
	InvalidReason,
	PassingConvention,
	QualifiedType,
	Qualifier,
	RefKind,
	Valid,
	ValueCategory,
)
from refbind.core.spelling import SpellingTable

DEFAULT_BASE = BaseType("int")


def illegal_reason(convention: PassingConvention, shape: ArgumentShape) -> InvalidReason | None:
	"""Return why `shape` cannot bind to `convention`, or None when it can."""
	if convention is PassingConvention.BY_LVALUE_REF:
		# Only const-lvalue-reference and rvalue-reference forms accept a temporary.
		if shape.category is not ValueCategory.LVALUE_REF and not shape.is_const:
			return InvalidReason.TEMPORARY_TO_LVALUE_REF
	if convention is PassingConvention.CONST_BY_RVALUE_REF:
		if shape.category is ValueCategory.LVALUE_REF:
			return InvalidReason.LVALUE_TO_RVALUE_REF
	return None


def deduce_parameter(convention: PassingConvention, shape: ArgumentShape, base: BaseType) -> QualifiedType:
	"""Type the generic parameter deduces to (assumes the binding is legal)."""
	if convention.ref is RefKind.NONE:
		return QualifiedType(base)
	if convention.is_forwarding and shape.category is ValueCategory.LVALUE_REF:
		return QualifiedType(base, shape.qualifier, RefKind.LVALUE)
	return QualifiedType(base, shape.qualifier)


def substitute(convention: PassingConvention, deduced: QualifiedType) -> QualifiedType:
	"""
	Substitute `deduced` for `T` in the parameter form and collapse references.

	Const on the form applies to the referred-to type unless `T` is itself a
	reference, in which case it would qualify the reference and is dropped.
	"""
	ref = deduced.ref.collapse(convention.ref)
	if deduced.is_reference:
		qualifier = deduced.qualifier
	else:
		qualifier = deduced.qualifier.join(convention.qualifier)
	return QualifiedType(deduced.base, qualifier, ref)


def evaluate(
	convention: PassingConvention,
	shape: ArgumentShape,
	*,
	base: BaseType = DEFAULT_BASE,
) -> BindingResult:
	"""Bind an argument of `shape` to a parameter declared with `convention`."""
	reason = illegal_reason(convention, shape)
	if reason is not None:
		return Invalid(reason)
	deduced = deduce_parameter(convention, shape, base)
	return Valid(deduced=deduced, bound=substitute(convention, deduced))


_REASON_TEXT = {
	InvalidReason.TEMPORARY_TO_LVALUE_REF: "a temporary cannot bind to a non-const lvalue reference",
	InvalidReason.LVALUE_TO_RVALUE_REF: "an rvalue reference cannot bind to an lvalue",
}


def explain(
	convention: PassingConvention,
	shape: ArgumentShape,
	result: BindingResult,
	*,
	spellings: SpellingTable,
	base: BaseType | None = None,
) -> tuple[str, list[str]]:
	"""Summarize one evaluation as a message plus notes."""
	param = spellings.param_name
	form = spellings.convention_name(convention)
	arg = spellings.shape_name(shape, base)
	if isinstance(result, Invalid):
		msg = f"cannot bind {arg} to {form}: {_REASON_TEXT[result.reason]}"
		notes: list[str] = []
		if result.reason is InvalidReason.TEMPORARY_TO_LVALUE_REF:
			notes.append("lifetime extension applies only to const lvalue references and rvalue references")
			notes.append(f"use 'const {param}&' or '{param}&&' to accept temporaries")
		elif shape.is_const:
			notes.append("binding a const lvalue here would not be dangerous, only pointless: nothing can be moved from it")
			notes.append(f"'const {param}&&' is not a forwarding reference; only '{param}&&' collapses")
		else:
			notes.append("binding would allow moving from an object the caller still owns")
		return msg, notes

	deduced = spellings.type_name(result.deduced)
	bound = spellings.type_name(result.bound)
	msg = f"{param} = {deduced}; parameter is {bound}"
	notes = []
	if convention.is_forwarding and result.deduced.is_reference:
		notes.append(f"reference collapsing: {param} = {deduced}, so {form} collapses to {bound}")
	elif convention.is_forwarding:
		notes.append(f"{form} binds an rvalue; {param} deduces without a reference")
	if convention.ref is RefKind.NONE and (shape.is_const or shape.category is not ValueCategory.VALUE):
		notes.append("by-value deduction drops the argument's const and reference")
	if convention.is_const and not result.deduced.is_const and result.bound.is_const:
		notes.append(f"const on the parameter comes from '{form}', not from deduction")
	if (
		convention.ref is RefKind.LVALUE
		and shape.category is ValueCategory.VALUE
		and result.bound.qualifier is Qualifier.CONST
	):
		notes.append("the temporary's lifetime is extended to that of the reference")
	return msg, notes


__all__ = [
	"DEFAULT_BASE",
	"illegal_reason",
	"deduce_parameter",
	"substitute",
	"evaluate",
	"explain",
]
