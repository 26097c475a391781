# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the command line front end.

A message plus optional span/notes. Errors raised by the parser are converted
into diagnostics at the CLI boundary so they can be printed as text or JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a user-facing diagnostic (error/warning/note)."""

	message: str
	code: str | None = None
	# Which input the diagnostic is about ("convention", "argument", "base", ...).
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def to_json(self) -> dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"text": self.span.text,
			"column": self.span.column,
			"notes": list(self.notes),
		}

	def format_human(self) -> str:
		head = f"{self.severity}: {self.message}"
		if self.phase:
			head = f"{self.phase}: {head}"
		lines = [head]
		if self.span.text is not None:
			lines.append(f"  {self.span.text}")
			caret = self.span.caret()
			if caret is not None:
				lines.append(f"  {caret}")
		for note in self.notes:
			lines.append(f"  note: {note}")
		return "\n".join(lines)


__all__ = ["Diagnostic"]
