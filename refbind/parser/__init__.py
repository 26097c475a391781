# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Type-spelling parser (lark grammar in grammar.lark)."""

from .parser import TypeSpelling, parse_argument, parse_convention, parse_type_spelling

__all__ = ["TypeSpelling", "parse_type_spelling", "parse_convention", "parse_argument"]
