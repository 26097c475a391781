"""
refbind.core: binding vocabulary and the pieces shared across the package.

Modules:
  - model: qualifiers, value categories, conventions, shapes, binding results
  - spelling: exhaustive display-name tables
  - diagnostics: Diagnostic record for user-facing problems
  - span: location inside a type spelling
"""

__all__ = [
    "model",
    "spelling",
    "diagnostics",
    "span",
]
