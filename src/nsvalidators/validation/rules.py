"""Bundle-level validation rules.

Each rule checks one namespace of a built bundle and reports violations to
the run's ValidationResult. Rules never raise for policy violations.
"""

import logging
from re import Pattern

from ..bundle import BundleView, Resource
from ..config import DESCRIPTOR_SLOTS, PatternRuleSet
from ..constants import BUNDLE_SYMBOLIC_NAME, SERVICE_COMPONENT
from ..exceptions import ParserSetupError
from ..parser.component import ComponentParser
from ..parser.locator import DescriptorLocator, descriptor_entries
from ..parser.models import ComponentDescriptor
from .evaluator import ComponentEvaluator, join_patterns, matches_any
from .framework import ValidationResult, ValidationRule

logger = logging.getLogger(__name__)


class ExportPackageRule(ValidationRule):
    """Validate exported package names."""

    def __init__(self, rule_set: PatternRuleSet):
        self.patterns = rule_set.export_package

    @property
    def name(self) -> str:
        return "export_package"

    def validate(self, bundle: BundleView, result: ValidationResult) -> None:
        if not self.patterns:
            return

        for package in bundle.exported_packages():
            result.increment_counter("packages_checked")
            if not matches_any(package, self.patterns):
                result.error(
                    "Exported package \"%s\" does not match any of the allowed patterns [%s]",
                    package,
                    join_patterns(self.patterns),
                    rule=self.name,
                )


class BundleSymbolicNameRule(ValidationRule):
    """Validate the Bundle-SymbolicName header, ignoring its parameters."""

    def __init__(self, rule_set: PatternRuleSet):
        self.patterns = rule_set.bundle_symbolic_name

    @property
    def name(self) -> str:
        return "bundle_symbolic_name"

    def validate(self, bundle: BundleView, result: ValidationResult) -> None:
        if not self.patterns:
            return

        header = bundle.header(BUNDLE_SYMBOLIC_NAME)
        if header is None or not header.strip():
            result.warning("Bundle-SymbolicName header is missing or empty", rule=self.name)
            return

        # e.g. "com.example.bundle;singleton:=true"
        symbolic_name = header.split(";")[0].strip()
        if not matches_any(symbolic_name, self.patterns):
            result.error(
                "Bundle-SymbolicName \"%s\" does not match any of the allowed patterns [%s]",
                symbolic_name,
                join_patterns(self.patterns),
                rule=self.name,
            )


class ComponentDescriptorRule(ValidationRule):
    """Validate DS components listed in the Service-Component header."""

    def __init__(
        self,
        rule_set: PatternRuleSet,
        service_patterns: tuple[Pattern, ...] | None,
        parser: ComponentParser,
    ):
        self.rule_set = rule_set
        self.parser = parser
        self.evaluator = ComponentEvaluator(rule_set, service_patterns)

    @property
    def name(self) -> str:
        return "component_descriptor"

    def is_enabled(self) -> bool:
        return any(self.rule_set.is_enabled(slot) for slot in DESCRIPTOR_SLOTS)

    def validate(self, bundle: BundleView, result: ValidationResult) -> None:
        if not self.is_enabled():
            return

        header = bundle.header(SERVICE_COMPONENT)
        if header is None or not header.strip():
            logger.debug("No Service-Component header, skipping component validation")
            return

        locator = DescriptorLocator(result)
        resources = bundle.resources()
        for entry in descriptor_entries(header):
            for path, resource in locator.resolve_entry(entry, resources):
                descriptor = self._read(path, resource, result)
                if descriptor is None:
                    continue
                result.increment_counter("descriptors_validated")
                for diagnostic in self.evaluator.evaluate(descriptor):
                    result.report(diagnostic)

    def _read(self, path: str, resource: Resource, result: ValidationResult) -> ComponentDescriptor | None:
        """Parse one descriptor; failures become a warning for that resource only."""
        try:
            with resource.open() as stream:
                return self.parser.parse(path, stream)
        except ParserSetupError:
            raise
        except Exception as e:
            logger.debug(f"Failed to parse {path}: {e}")
            result.warning(
                "Failed to parse DS component XML file \"%s\": %s",
                path,
                str(e),
                rule=self.name,
            )
            return None
