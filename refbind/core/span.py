# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight span representation used by diagnostics.

Spellings are single-line, so a Span only needs the text it points into plus
an optional column range. The lark error/token object is kept in `raw`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a location inside a type spelling (best-effort column plus raw parser loc)."""

	text: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, text: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a lark token or exception.

		If `loc` is already a Span, it is returned unchanged.
		"""
		if loc is None:
			return cls(text=text)
		if isinstance(loc, cls):
			return loc
		return cls(
			text=text,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def caret(self) -> str | None:
		"""Return a `^` marker line under `text`, or None when the column is unknown."""
		if self.text is None or self.column is None or self.column < 1:
			return None
		width = 1
		if self.end_column is not None and self.end_column > self.column:
			width = self.end_column - self.column
		return " " * (self.column - 1) + "^" * width


__all__ = ["Span"]
