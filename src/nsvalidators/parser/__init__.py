"""Parsers for bundle manifests and Declarative Services descriptors."""

from .component import ComponentParser
from .glob import glob_to_regex
from .locator import DescriptorLocator
from .manifest import HeaderClause, parse_header_clauses, parse_manifest
from .models import ComponentDescriptor

__all__ = [
    "ComponentDescriptor",
    "ComponentParser",
    "DescriptorLocator",
    "HeaderClause",
    "glob_to_regex",
    "parse_header_clauses",
    "parse_manifest",
]
