"""Matching services -- field resolution, criterion evaluation, the matching
engine, explanations and the in-memory scheme catalog."""

from __future__ import annotations

from src.services.catalog import CatalogStats, InMemorySchemeCatalog
from src.services.criteria import evaluate_criterion
from src.services.eligibility import BENEFIT_TYPE_NAMES, MatchingEngine, compute_score, priority_for
from src.services.explanation import explain_match
from src.services.field_resolver import resolve_field

__all__ = [
    "BENEFIT_TYPE_NAMES",
    "CatalogStats",
    "InMemorySchemeCatalog",
    "MatchingEngine",
    "compute_score",
    "evaluate_criterion",
    "explain_match",
    "priority_for",
    "resolve_field",
]
