# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from refbind.core.span import Span


@dataclass(frozen=True)
class RefbindError(Exception):
	"""
	A structured, serializable error for refbind.

	Raised for model construction failures (missing/duplicate display names,
	malformed base types). `Invalid` bindings are results, never errors.
	"""

	reason_code: str
	message: str
	notes: tuple[str, ...] = ()

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		for note in self.notes:
			parts.append(f"note: {note}")
		return " ".join(parts)


@dataclass(frozen=True)
class SpellingError(RefbindError):
	"""A type spelling that the parser could not turn into a model value."""

	text: str = ""
	span: Span = field(default_factory=Span)

	def to_dict(self) -> dict[str, Any]:
		out = super().to_dict()
		out["text"] = self.text
		out["column"] = self.span.column
		return out


__all__ = ["RefbindError", "SpellingError"]
