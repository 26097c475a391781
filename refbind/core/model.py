# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Binding model: the closed vocabulary the deduction engine works over.

Everything here is immutable. Enumerations are closed (no subclassing); the
display-name tables in `refbind.core.spelling` are checked against them for
exhaustiveness.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from refbind.errors import RefbindError


@dataclass(frozen=True)
class BaseType:
	"""Opaque underlying type identifier (e.g. `int`), shared by every cell of a table."""

	name: str

	def __post_init__(self) -> None:
		name = self.name.strip() if isinstance(self.name, str) else ""
		if not name:
			raise RefbindError("model/bad-base-type", "base type name must be a non-empty string")
		if "&" in name or name.split()[0] == "const" or name.split()[-1] == "const":
			raise RefbindError(
				"model/bad-base-type",
				f"base type '{name}' must not carry qualifiers or references",
				notes=("qualifiers and references are supplied by the argument shape",),
			)
		object.__setattr__(self, "name", name)


class Qualifier(Enum):
	MUTABLE = "mutable"
	CONST = "const"

	def join(self, other: "Qualifier") -> "Qualifier":
		"""Const wins."""
		if self is Qualifier.CONST or other is Qualifier.CONST:
			return Qualifier.CONST
		return Qualifier.MUTABLE


class ValueCategory(Enum):
	"""What an argument expression denotes."""

	VALUE = "value"  # a temporary
	LVALUE_REF = "lvalue_ref"  # a named, existing object
	RVALUE_REF = "rvalue_ref"  # an object eligible for resource transfer


class RefKind(Enum):
	NONE = "none"
	LVALUE = "lvalue"
	RVALUE = "rvalue"

	def collapse(self, outer: "RefKind") -> "RefKind":
		"""
		Reference collapsing: apply `outer` (the declarator in the parameter form)
		on top of `self` (the reference-ness already in the deduced type).

		Any lvalue reference on either side yields an lvalue reference; two
		rvalue references stay an rvalue reference.
		"""
		if self is RefKind.NONE:
			return outer
		if outer is RefKind.NONE:
			return self
		if self is RefKind.LVALUE or outer is RefKind.LVALUE:
			return RefKind.LVALUE
		return RefKind.RVALUE


_CATEGORY_REF = {
	ValueCategory.VALUE: RefKind.NONE,
	ValueCategory.LVALUE_REF: RefKind.LVALUE,
	ValueCategory.RVALUE_REF: RefKind.RVALUE,
}


@dataclass(frozen=True)
class QualifiedType:
	"""A BaseType with a qualifier and a reference kind attached."""

	base: BaseType
	qualifier: Qualifier = Qualifier.MUTABLE
	ref: RefKind = RefKind.NONE

	@property
	def is_const(self) -> bool:
		return self.qualifier is Qualifier.CONST

	@property
	def is_reference(self) -> bool:
		return self.ref is not RefKind.NONE

	def key(self) -> tuple[BaseType, Qualifier, RefKind]:
		return (self.base, self.qualifier, self.ref)


class ArgumentShape(Enum):
	"""The six argument shapes: a qualifier crossed with a value category."""

	VALUE = (Qualifier.MUTABLE, ValueCategory.VALUE)
	LVALUE_REF = (Qualifier.MUTABLE, ValueCategory.LVALUE_REF)
	RVALUE_REF = (Qualifier.MUTABLE, ValueCategory.RVALUE_REF)
	CONST_VALUE = (Qualifier.CONST, ValueCategory.VALUE)
	CONST_LVALUE_REF = (Qualifier.CONST, ValueCategory.LVALUE_REF)
	CONST_RVALUE_REF = (Qualifier.CONST, ValueCategory.RVALUE_REF)

	@property
	def qualifier(self) -> Qualifier:
		return self.value[0]

	@property
	def category(self) -> ValueCategory:
		return self.value[1]

	@property
	def is_const(self) -> bool:
		return self.qualifier is Qualifier.CONST

	def as_type(self, base: BaseType) -> QualifiedType:
		"""The declared type of an argument expression of this shape."""
		return QualifiedType(base, self.qualifier, _CATEGORY_REF[self.category])

	@classmethod
	def of(cls, qualifier: Qualifier, category: ValueCategory) -> "ArgumentShape":
		return cls((qualifier, category))


class PassingConvention(Enum):
	"""The six parameter forms, as (qualifier, declarator) over the generic parameter."""

	BY_VALUE = (Qualifier.MUTABLE, RefKind.NONE)
	CONST_BY_VALUE = (Qualifier.CONST, RefKind.NONE)
	BY_LVALUE_REF = (Qualifier.MUTABLE, RefKind.LVALUE)
	CONST_BY_LVALUE_REF = (Qualifier.CONST, RefKind.LVALUE)
	BY_RVALUE_REF = (Qualifier.MUTABLE, RefKind.RVALUE)
	CONST_BY_RVALUE_REF = (Qualifier.CONST, RefKind.RVALUE)

	@property
	def qualifier(self) -> Qualifier:
		return self.value[0]

	@property
	def ref(self) -> RefKind:
		return self.value[1]

	@property
	def is_const(self) -> bool:
		return self.qualifier is Qualifier.CONST

	@property
	def is_forwarding(self) -> bool:
		"""Only the unqualified `T&&` form is a forwarding reference; `const T&&` is not."""
		return self is PassingConvention.BY_RVALUE_REF

	@classmethod
	def of(cls, qualifier: Qualifier, ref: RefKind) -> "PassingConvention":
		return cls((qualifier, ref))


class InvalidReason(str, Enum):
	TEMPORARY_TO_LVALUE_REF = "temporary_to_lvalue_ref"
	LVALUE_TO_RVALUE_REF = "lvalue_to_rvalue_ref"


@dataclass(frozen=True)
class Valid:
	deduced: QualifiedType  # what the generic parameter deduces to
	bound: QualifiedType  # the type of the parameter name inside the callee

	@property
	def ok(self) -> bool:
		return True


@dataclass(frozen=True)
class Invalid:
	reason: InvalidReason

	@property
	def ok(self) -> bool:
		return False


BindingResult = Union[Valid, Invalid]


__all__ = [
	"BaseType",
	"Qualifier",
	"ValueCategory",
	"RefKind",
	"QualifiedType",
	"ArgumentShape",
	"PassingConvention",
	"InvalidReason",
	"Valid",
	"Invalid",
	"BindingResult",
]
