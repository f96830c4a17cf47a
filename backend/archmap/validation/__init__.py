"""
Validation module for extracted architecture models.
"""

from archmap.validation.diagram_validator import (
    DiagramValidator,
    DiagramValidationResult,
    ValidationIssue,
    ValidationSeverity,
    validate_model,
    raise_on_errors,
)

__all__ = [
    "DiagramValidator",
    "DiagramValidationResult",
    "ValidationIssue",
    "ValidationSeverity",
    "validate_model",
    "raise_on_errors",
]
