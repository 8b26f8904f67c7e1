"""Namespace validation of built bundles.

Checks exported packages, the bundle symbolic name and DS component
services and properties against configured allowed patterns.
"""

from .framework import (
    Diagnostic,
    LoggingReporter,
    Reporter,
    Severity,
    ValidationResult,
    ValidationRule,
)
from .evaluator import ComponentEvaluator
from .rules import BundleSymbolicNameRule, ComponentDescriptorRule, ExportPackageRule
from .validator import NamespaceValidator

__all__ = [
    "Diagnostic",
    "LoggingReporter",
    "Reporter",
    "Severity",
    "ValidationResult",
    "ValidationRule",
    "ComponentEvaluator",
    "BundleSymbolicNameRule",
    "ComponentDescriptorRule",
    "ExportPackageRule",
    "NamespaceValidator",
]
