"""Top-level verification of a built bundle."""

import logging

from ..bundle import BundleView
from ..config import PatternRuleSet, effective_service_patterns
from ..parser.component import ComponentParser
from .framework import Reporter, ValidationResult, ValidationRule
from .rules import BundleSymbolicNameRule, ComponentDescriptorRule, ExportPackageRule

logger = logging.getLogger(__name__)


class NamespaceValidator:
    """Verifies bundles against one immutable rule set.

    Effective service patterns and the hardened descriptor parser are built
    once here; ``verify`` keeps all per-run state in the ValidationResult it
    returns, so repeated runs on the same bundle give the same diagnostics.
    """

    def __init__(self, rule_set: PatternRuleSet, reporter: Reporter | None = None):
        self.rule_set = rule_set
        self.reporter = reporter
        self.service_patterns = effective_service_patterns(rule_set)
        self.parser = ComponentParser()
        self.rules: list[ValidationRule] = [
            ExportPackageRule(rule_set),
            BundleSymbolicNameRule(rule_set),
            ComponentDescriptorRule(rule_set, self.service_patterns, self.parser),
        ]

    def verify(self, bundle: BundleView) -> ValidationResult:
        """Run every rule against the bundle.

        Args:
            bundle: Read-only view of the built bundle

        Returns:
            ValidationResult with diagnostics in emission order

        Raises:
            ParserSetupError: If the hardened XML parser is unavailable
            DescriptorPatternError: If a Service-Component glob is not a valid regex
        """
        result = ValidationResult(sink=self.reporter)

        logger.info(f"Running {len(self.rules)} namespace rules")
        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            rule.validate(bundle, result)

        logger.info(
            f"Namespace validation finished: {len(result.errors)} errors, "
            f"{len(result.warnings)} warnings"
        )
        return result
