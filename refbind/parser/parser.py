# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for single type spellings.

A spelling is `[const] NAME [const] [& | &&]`. The same shape is used for
parameter forms (`const T&`, where NAME is the generic parameter) and for
argument types (`const int&`, where NAME is the base type and the reference
suffix gives the value category).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from refbind.core.model import (
	ArgumentShape,
	BaseType,
	PassingConvention,
	Qualifier,
	RefKind,
	ValueCategory,
)
from refbind.core.span import Span
from refbind.core.spelling import require_exhaustive, spell
from refbind.errors import RefbindError, SpellingError

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	propagate_positions=True,
	maybe_placeholders=False,
)

_REF_RULES = {"lref": RefKind.LVALUE, "rref": RefKind.RVALUE}

_REF_CATEGORY = require_exhaustive(
	RefKind,
	{
		RefKind.NONE: ValueCategory.VALUE,
		RefKind.LVALUE: ValueCategory.LVALUE_REF,
		RefKind.RVALUE: ValueCategory.RVALUE_REF,
	},
	what="argument reference suffix",
)


@dataclass(frozen=True)
class TypeSpelling:
	"""A parsed spelling, before it is interpreted as a parameter form or an argument."""

	name: str
	qualifier: Qualifier = Qualifier.MUTABLE
	ref: RefKind = RefKind.NONE

	def __str__(self) -> str:
		return spell(self.name, self.qualifier, self.ref)


def _name(node: object) -> str:
	if isinstance(node, Tree):
		return node.data if isinstance(node.data, str) else node.data.value
	return ""


def _syntax_error(text: str, err: UnexpectedInput) -> SpellingError:
	if isinstance(err, UnexpectedEOF):
		message = "unexpected end of type spelling"
	elif isinstance(err, UnexpectedToken) and err.token.type == "$END":
		message = "unexpected end of type spelling"
	elif isinstance(err, UnexpectedToken):
		message = f"unexpected '{err.token}' in type spelling"
	elif isinstance(err, UnexpectedCharacters):
		message = f"unexpected character '{text[err.pos_in_stream]}' in type spelling"
	else:
		message = "malformed type spelling"
	return SpellingError(
		"parse/syntax",
		message,
		notes=("expected [const] NAME [const] [& | &&]",),
		text=text,
		span=Span.from_loc(err, text=text),
	)


def parse_type_spelling(text: str) -> TypeSpelling:
	"""Parse `text`; raises SpellingError on malformed input."""
	if not text.strip():
		raise SpellingError("parse/empty", "empty type spelling", text=text, span=Span(text=text))
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as err:
		raise _syntax_error(text, err) from None

	name: Token | None = None
	consts: list[Tree] = []
	ref = RefKind.NONE
	for child in tree.children:
		if isinstance(child, Token) and child.type == "NAME":
			name = child
		elif _name(child) == "const_q":
			consts.append(child)
		elif _name(child) in _REF_RULES:
			ref = _REF_RULES[_name(child)]
	if name is None:
		raise TypeError("spelling tree missing NAME token")
	if len(consts) > 1:
		tok = next((t for t in consts[1].children if isinstance(t, Token)), None)
		raise SpellingError(
			"parse/duplicate-const",
			"'const' given twice",
			text=text,
			span=Span.from_loc(tok, text=text),
		)
	qualifier = Qualifier.CONST if consts else Qualifier.MUTABLE
	return TypeSpelling(name=str(name), qualifier=qualifier, ref=ref)


def parse_convention(text: str, *, param_name: str | None = None) -> tuple[str, PassingConvention]:
	"""
	Parse a parameter form such as `const T&` into its generic parameter name
	and PassingConvention. When `param_name` is given the spelling must use it.
	"""
	ts = parse_type_spelling(text)
	if param_name is not None and ts.name != param_name:
		raise SpellingError(
			"parse/unknown-param",
			f"parameter form must be spelled over '{param_name}', got '{ts.name}'",
			text=text,
			span=Span(text=text, column=text.find(ts.name) + 1, end_column=text.find(ts.name) + 1 + len(ts.name)),
		)
	return ts.name, PassingConvention.of(ts.qualifier, ts.ref)


def parse_argument(text: str) -> tuple[BaseType, ArgumentShape]:
	"""Parse an argument type such as `const int&&` into (base type, shape)."""
	ts = parse_type_spelling(text)
	try:
		base = BaseType(ts.name)
	except RefbindError as err:
		raise SpellingError(err.reason_code, err.message, notes=err.notes, text=text, span=Span(text=text)) from None
	return base, ArgumentShape.of(ts.qualifier, _REF_CATEGORY[ts.ref])


__all__ = [
	"TypeSpelling",
	"parse_type_spelling",
	"parse_convention",
	"parse_argument",
]
