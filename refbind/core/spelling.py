# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Display names for the binding model.

Every enumerator maps to exactly one stable spelling. The per-enum tables are
checked when this module is imported; a `SpellingTable` then populates the
full (BaseType, Qualifier, RefKind) -> name mapping for the base types of a
run and checks it again. Either check failing raises `RefbindError` before
any matrix is rendered; lookups never fall back to a default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, TypeVar

from refbind.core.model import (
	ArgumentShape,
	BaseType,
	PassingConvention,
	QualifiedType,
	Qualifier,
	RefKind,
	ValueCategory,
)
from refbind.errors import RefbindError

E = TypeVar("E", bound=Enum)
V = TypeVar("V")

DEFAULT_PARAM_NAME = "T"


def require_exhaustive(enum_cls: type[E], mapping: Mapping[E, V], *, what: str) -> dict[E, V]:
	"""
	Check that `mapping` names every member of `enum_cls` exactly once.

	Returns a plain dict copy; raises `RefbindError` on a missing member, a
	stray key, or two members sharing a spelling.
	"""
	missing = [m.name for m in enum_cls if m not in mapping]
	if missing:
		raise RefbindError(
			"model/missing-spelling",
			f"{what}: no display name for {', '.join(missing)}",
		)
	stray = [repr(k) for k in mapping if not isinstance(k, enum_cls)]
	if stray:
		raise RefbindError("model/stray-spelling", f"{what}: unexpected keys {', '.join(stray)}")
	seen: dict[V, E] = {}
	for member in enum_cls:
		name = mapping[member]
		if name in seen:
			raise RefbindError(
				"model/duplicate-spelling",
				f"{what}: '{name}' is used by both {seen[name].name} and {member.name}",
			)
		seen[name] = member
	return {m: mapping[m] for m in enum_cls}


QUALIFIER_PREFIX = require_exhaustive(
	Qualifier,
	{Qualifier.MUTABLE: "", Qualifier.CONST: "const "},
	what="qualifier",
)

REF_SUFFIX = require_exhaustive(
	RefKind,
	{RefKind.NONE: "", RefKind.LVALUE: "&", RefKind.RVALUE: "&&"},
	what="reference kind",
)

# Long-form names, used by `refbind names` and JSON output.
CATEGORY_NAMES = require_exhaustive(
	ValueCategory,
	{
		ValueCategory.VALUE: "value",
		ValueCategory.LVALUE_REF: "lvalue reference",
		ValueCategory.RVALUE_REF: "rvalue reference",
	},
	what="value category",
)

CONVENTION_NAMES = require_exhaustive(
	PassingConvention,
	{
		PassingConvention.BY_VALUE: "by value",
		PassingConvention.CONST_BY_VALUE: "by const value",
		PassingConvention.BY_LVALUE_REF: "by lvalue reference",
		PassingConvention.CONST_BY_LVALUE_REF: "by const lvalue reference",
		PassingConvention.BY_RVALUE_REF: "by forwarding reference",
		PassingConvention.CONST_BY_RVALUE_REF: "by const rvalue reference",
	},
	what="passing convention",
)

SHAPE_NAMES = require_exhaustive(
	ArgumentShape,
	{
		ArgumentShape.VALUE: "value",
		ArgumentShape.LVALUE_REF: "lvalue",
		ArgumentShape.RVALUE_REF: "rvalue reference",
		ArgumentShape.CONST_VALUE: "const value",
		ArgumentShape.CONST_LVALUE_REF: "const lvalue",
		ArgumentShape.CONST_RVALUE_REF: "const rvalue reference",
	},
	what="argument shape",
)


def spell(name: str, qualifier: Qualifier, ref: RefKind) -> str:
	"""`const int&`-style spelling of a (possibly generic) name."""
	return f"{QUALIFIER_PREFIX[qualifier]}{name}{REF_SUFFIX[ref]}"


@dataclass
class SpellingTable:
	"""
	Display names for one table run.

	`bases` are the base types that may appear in cells; `param_name` is the
	generic parameter used to spell conventions (`T&&`, `const T&`, ...).
	"""

	bases: tuple[BaseType, ...]
	param_name: str = DEFAULT_PARAM_NAME
	_types: dict[tuple[BaseType, Qualifier, RefKind], str] = field(default_factory=dict, init=False, repr=False)
	_conventions: dict[PassingConvention, str] = field(default_factory=dict, init=False, repr=False)

	def __post_init__(self) -> None:
		self.bases = tuple(self.bases)
		if not self.bases:
			raise RefbindError("model/no-base-type", "a spelling table needs at least one base type")
		if not self.param_name or not self.param_name.isidentifier():
			raise RefbindError("model/bad-param-name", f"generic parameter name '{self.param_name}' is not an identifier")
		for base in self.bases:
			if base.name == self.param_name:
				raise RefbindError(
					"model/param-shadows-base",
					f"generic parameter '{self.param_name}' has the same name as base type '{base.name}'",
				)
			for qualifier in Qualifier:
				for ref in RefKind:
					self._types[(base, qualifier, ref)] = spell(base.name, qualifier, ref)
		self._conventions = require_exhaustive(
			PassingConvention,
			{conv: spell(self.param_name, conv.qualifier, conv.ref) for conv in PassingConvention},
			what="passing convention spelling",
		)
		self._check_complete()

	@classmethod
	def for_base(cls, base: BaseType, param_name: str = DEFAULT_PARAM_NAME) -> "SpellingTable":
		return cls((base,), param_name=param_name)

	def _check_complete(self) -> None:
		expected = {(b, q, r) for b in self.bases for q in Qualifier for r in RefKind}
		missing = expected - set(self._types)
		if missing:
			labels = sorted(f"({b.name}, {q.name}, {r.name})" for b, q, r in missing)
			raise RefbindError("model/missing-spelling", f"no display name for {', '.join(labels)}")
		seen: dict[str, tuple[BaseType, Qualifier, RefKind]] = {}
		for key, name in self._types.items():
			if name in seen:
				raise RefbindError(
					"model/duplicate-spelling",
					f"'{name}' names two different qualified types",
				)
			seen[name] = key

	def type_name(self, ty: QualifiedType) -> str:
		try:
			return self._types[ty.key()]
		except KeyError:
			raise RefbindError(
				"model/unknown-base-type",
				f"base type '{ty.base.name}' is not part of this table",
				notes=(f"known base types: {', '.join(b.name for b in self.bases)}",),
			) from None

	def convention_name(self, convention: PassingConvention) -> str:
		return self._conventions[convention]

	def shape_name(self, shape: ArgumentShape, base: BaseType | None = None) -> str:
		"""Spelling of the argument's declared type, e.g. `const int&`."""
		return self.type_name(shape.as_type(base if base is not None else self.bases[0]))


__all__ = [
	"DEFAULT_PARAM_NAME",
	"QUALIFIER_PREFIX",
	"REF_SUFFIX",
	"CATEGORY_NAMES",
	"CONVENTION_NAMES",
	"SHAPE_NAMES",
	"require_exhaustive",
	"spell",
	"SpellingTable",
]
