"""Resolution of Service-Component header entries to bundle resources."""

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from ..constants import DESCRIPTOR_ROOT, GLOB_WILDCARDS
from ..exceptions import DescriptorPatternError
from ..validation.framework import Reporter
from .glob import glob_to_regex

if TYPE_CHECKING:
    from ..bundle import Resource

logger = logging.getLogger(__name__)

RULE = "component_descriptor"


def descriptor_entries(header_value: str | None) -> list[str]:
    """Trimmed, non-blank header entries, each prefixed with OSGI-INF/."""
    if not header_value:
        return []

    entries = []
    for entry in header_value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if not entry.startswith(DESCRIPTOR_ROOT):
            entry = DESCRIPTOR_ROOT + entry
        entries.append(entry)
    return entries


def is_glob(entry: str) -> bool:
    return any(wildcard in entry for wildcard in GLOB_WILDCARDS)


class DescriptorLocator:
    """Finds the descriptor resources named by a Service-Component header.

    Exact entries that are missing produce a warning. Glob entries that
    match nothing only produce a trace, since a pattern does not promise
    that a descriptor exists.
    """

    def __init__(self, reporter: Reporter):
        self.reporter = reporter

    def resolve(
        self, header_value: str | None, resources: Mapping[str, "Resource"]
    ) -> list[tuple[str, "Resource"]]:
        """Resource paths and resources in header order.

        Raises:
            DescriptorPatternError: If a glob entry does not compile
        """
        located: list[tuple[str, "Resource"]] = []
        for entry in descriptor_entries(header_value):
            located.extend(self.resolve_entry(entry, resources))
        return located

    def resolve_entry(
        self, entry: str, resources: Mapping[str, "Resource"]
    ) -> list[tuple[str, "Resource"]]:
        """Resources for one already prefixed header entry."""
        if is_glob(entry):
            return self._resolve_glob(entry, resources)
        return self._resolve_exact(entry, resources)

    def _resolve_glob(
        self, pattern: str, resources: Mapping[str, "Resource"]
    ) -> list[tuple[str, "Resource"]]:
        regex = glob_to_regex(pattern)
        try:
            compiled = re.compile(regex)
        except re.error as e:
            raise DescriptorPatternError(pattern, regex, e) from e

        matches = [(path, resource) for path, resource in resources.items() if compiled.fullmatch(path)]
        logger.debug(f"Pattern {pattern} matched {len(matches)} resources")

        if not matches:
            self.reporter.trace(
                "DS component pattern \"%s\" referenced in Service-Component header "
                "but no matching files found in bundle",
                pattern,
                rule=RULE,
            )
        return matches

    def _resolve_exact(
        self, path: str, resources: Mapping[str, "Resource"]
    ) -> list[tuple[str, "Resource"]]:
        resource = resources.get(path)
        if resource is None:
            self.reporter.warning(
                "DS component XML file \"%s\" referenced in Service-Component header "
                "but not found in bundle",
                path,
                rule=RULE,
            )
            return []
        return [(path, resource)]
