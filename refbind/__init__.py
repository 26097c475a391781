# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
refbind: how a generic parameter binds to an argument.

`evaluate` decides legality and deduces the generic parameter and bound
parameter types for one (passing convention, argument shape) pair;
`generate_matrix` tabulates it over all 36 pairs.
"""

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
from refbind.deduce import evaluate, explain
from refbind.errors import RefbindError
from refbind.matrix import Matrix, Question, generate_matrices, generate_matrix, render_text

__all__ = [
	"ArgumentShape",
	"BaseType",
	"BindingResult",
	"Invalid",
	"InvalidReason",
	"PassingConvention",
	"QualifiedType",
	"Qualifier",
	"RefKind",
	"Valid",
	"ValueCategory",
	"SpellingTable",
	"evaluate",
	"explain",
	"RefbindError",
	"Matrix",
	"Question",
	"generate_matrix",
	"generate_matrices",
	"render_text",
]
