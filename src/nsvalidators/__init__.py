"""nsvalidators - Build-time namespace compliance checks for OSGi bundles.

nsvalidators verifies exported packages, the bundle symbolic name and the
services and web-handling properties declared by Declarative Services
components against organization-supplied naming patterns.
"""

__version__ = "0.1.0"
__author__ = "nsvalidators contributors"
__description__ = "Build-time namespace compliance checks for OSGi bundles"

from nsvalidators.config import PatternRuleSet, parse_rule_properties
from nsvalidators.validation import NamespaceValidator, ValidationResult

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "NamespaceValidator",
    "PatternRuleSet",
    "ValidationResult",
    "parse_rule_properties",
]
