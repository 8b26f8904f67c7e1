"""Pattern checks for a single parsed component descriptor."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from re import Pattern

from ..config import PatternRuleSet
from ..constants import (
    AUTH_HANDLER_PATH,
    AUTHENTICATION_HANDLER_INTERFACE,
    FILTER_INTERFACES,
    HTTP_WHITEBOARD_FILTER_PATTERN,
    HTTP_WHITEBOARD_SERVLET_PATTERN,
    SERVLET_INTERFACES,
    SLING_FILTER_PATTERN,
    SLING_FILTER_RESOURCE_TYPES,
    SLING_SERVLET_PATHS,
    SLING_SERVLET_RESOURCE_SUPER_TYPE,
    SLING_SERVLET_RESOURCE_TYPES,
)
from ..parser.models import ComponentDescriptor
from .framework import Diagnostic, Severity

logger = logging.getLogger(__name__)

SERVICE_TEMPLATE = (
    "DS component \"%s\" provides service \"%s\" which does not match any of the allowed patterns [%s]"
)


def matches_any(value: str, patterns: Iterable[Pattern]) -> bool:
    """Full-string match against at least one pattern."""
    return any(pattern.fullmatch(value) for pattern in patterns)


def join_patterns(patterns: Iterable[Pattern]) -> str:
    return ",".join(pattern.pattern for pattern in patterns)


@dataclass(frozen=True)
class PropertyCheck:
    """One component property governed by one rule slot."""
    slot: str
    property_name: str
    label: str

    def template(self, kind: str) -> str:
        return (
            f"{kind} component \"%s\" has {self.label} \"%s\" "
            "which does not match any of the allowed patterns [%s]"
        )


@dataclass(frozen=True)
class ComponentKind:
    """A family of components recognized by the interfaces they provide."""
    name: str
    interfaces: frozenset[str]
    checks: tuple[PropertyCheck, ...]


SERVLET = ComponentKind(
    name="Servlet",
    interfaces=SERVLET_INTERFACES,
    checks=(
        PropertyCheck("servlet_paths", SLING_SERVLET_PATHS, "Sling servlet path"),
        PropertyCheck("servlet_resource_types", SLING_SERVLET_RESOURCE_TYPES, "Sling servlet resource type"),
        PropertyCheck(
            "servlet_resource_super_type", SLING_SERVLET_RESOURCE_SUPER_TYPE, "Sling servlet resource super type"
        ),
        PropertyCheck(
            "whiteboard_servlet_pattern",
            HTTP_WHITEBOARD_SERVLET_PATTERN,
            "OSGi HTTP/Servlet whiteboard servlet pattern",
        ),
    ),
)

FILTER = ComponentKind(
    name="Filter",
    interfaces=FILTER_INTERFACES,
    checks=(
        PropertyCheck("filter_pattern", SLING_FILTER_PATTERN, "Sling filter pattern"),
        PropertyCheck("filter_resource_types", SLING_FILTER_RESOURCE_TYPES, "Sling filter resource type"),
        PropertyCheck(
            "whiteboard_filter_pattern",
            HTTP_WHITEBOARD_FILTER_PATTERN,
            "OSGi HTTP/Servlet whiteboard filter pattern",
        ),
    ),
)

AUTHENTICATION_HANDLER = ComponentKind(
    name="AuthenticationHandler",
    interfaces=frozenset({AUTHENTICATION_HANDLER_INTERFACE}),
    checks=(PropertyCheck("auth_handler_path", AUTH_HANDLER_PATH, "path"),),
)

COMPONENT_KINDS = (SERVLET, FILTER, AUTHENTICATION_HANDLER)


class ComponentEvaluator:
    """Checks provided services and web-handling properties of components.

    A component can be a servlet, a filter and an authentication handler at
    the same time; every kind it matches is checked.
    """

    def __init__(self, rule_set: PatternRuleSet, service_patterns: tuple[Pattern, ...] | None):
        self.rule_set = rule_set
        self.service_patterns = service_patterns

    def kinds_of(self, descriptor: ComponentDescriptor) -> list[ComponentKind]:
        return [kind for kind in COMPONENT_KINDS if descriptor.provides(*kind.interfaces)]

    def evaluate(self, descriptor: ComponentDescriptor) -> list[Diagnostic]:
        """All violations of one component, in check order."""
        diagnostics = self._check_services(descriptor)
        for kind in self.kinds_of(descriptor):
            logger.debug(f"Component {descriptor.name} is a {kind.name} component")
            for check in kind.checks:
                diagnostics.extend(self._check_property(descriptor, kind, check))
        return diagnostics

    def _check_services(self, descriptor: ComponentDescriptor) -> list[Diagnostic]:
        if not self.service_patterns:
            return []
        joined = join_patterns(self.service_patterns)
        return [
            Diagnostic(
                Severity.ERROR,
                SERVICE_TEMPLATE,
                (descriptor.name, interface, joined),
                rule="service_interface",
            )
            for interface in descriptor.service_interfaces
            if not matches_any(interface, self.service_patterns)
        ]

    def _check_property(
        self, descriptor: ComponentDescriptor, kind: ComponentKind, check: PropertyCheck
    ) -> list[Diagnostic]:
        patterns = getattr(self.rule_set, check.slot)
        if not patterns or check.property_name not in descriptor.properties:
            return []

        diagnostics = []
        for value in descriptor.properties[check.property_name]:
            value = value.strip()
            if not matches_any(value, patterns):
                diagnostics.append(
                    Diagnostic(
                        Severity.ERROR,
                        check.template(kind.name),
                        (descriptor.name, value, join_patterns(patterns)),
                        rule=check.slot,
                    )
                )
        return diagnostics
