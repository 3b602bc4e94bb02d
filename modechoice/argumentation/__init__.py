"""Argumentation engine — Dung's AAF for travel-mode reasoning."""
from .builder import FrameworkBuilder
from .engine import ArgumentationEngine
from .models import (
    Argument,
    ArgumentStore,
    ArgumentationFramework,
    Attack,
    Extension,
    Semantics,
    SemanticsResult,
)

__all__ = [
    "ArgumentationEngine",
    "FrameworkBuilder",
    "Argument",
    "ArgumentStore",
    "ArgumentationFramework",
    "Attack",
    "Extension",
    "Semantics",
    "SemanticsResult",
]
