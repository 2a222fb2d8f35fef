"""Declarations module - monthly payroll declarations of teaching hours."""

from declaration_engine.declarations.aggregator import aggregate_declaration, group_items, summarize_items
from declaration_engine.declarations.coefficients import CoefficientTable
from declaration_engine.declarations.matcher import Occurrence, expand_record, matches_pattern
from declaration_engine.declarations.report import RecordReport, summarize_records
from declaration_engine.declarations.types import (
    Declaration,
    DeclarationItem,
    DeclarationResult,
    DeclarationSummary,
    DeclarationValidation,
    declaration_title,
)
from declaration_engine.declarations.validators import validate_declaration_items

__all__ = [
    "CoefficientTable",
    "Declaration",
    "DeclarationItem",
    "DeclarationResult",
    "DeclarationSummary",
    "DeclarationValidation",
    "Occurrence",
    "RecordReport",
    "aggregate_declaration",
    "declaration_title",
    "expand_record",
    "group_items",
    "matches_pattern",
    "summarize_items",
    "summarize_records",
    "validate_declaration_items",
]
