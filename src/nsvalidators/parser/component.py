"""Hardened parser for Declarative Services component descriptors."""

import logging
import re
from typing import BinaryIO
from xml.etree.ElementTree import Element

from defusedxml.ElementTree import DefusedXMLParser
from defusedxml.ElementTree import parse as defused_parse

from ..constants import (
    DS_COMPONENT_ELEMENT,
    DS_INTERFACE_ATTRIBUTE,
    DS_NAME_ATTRIBUTE,
    DS_PROPERTY_ELEMENT,
    DS_PROPERTY_NAME_ATTRIBUTE,
    DS_PROPERTY_VALUE_ATTRIBUTE,
    DS_PROVIDE_ELEMENT,
    DS_SERVICE_ELEMENT,
)
from ..exceptions import DescriptorError, ParserSetupError
from .models import ComponentDescriptor

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r"[\r\n]+")


def local_name(element: Element) -> str:
    """Element tag without its ``{namespace}`` prefix."""
    return element.tag.rsplit("}", 1)[-1]


def _iter_local(element: Element, name: str):
    for child in element.iter():
        if local_name(child) == name:
            yield child


class ComponentParser:
    """Extracts provided services and properties from DS component XML.

    Every document is parsed with DTDs, entity declarations and external
    references forbidden. The constructor fails with ParserSetupError when
    such a parser cannot be built; validation must not run without it.
    """

    def __init__(self):
        self._new_parser()

    def _new_parser(self) -> DefusedXMLParser:
        try:
            return DefusedXMLParser(forbid_dtd=True, forbid_entities=True, forbid_external=True)
        except Exception as e:
            raise ParserSetupError(f"Failed to configure XML parser for secure processing: {e}") from e

    def parse(self, path: str, stream: BinaryIO) -> ComponentDescriptor | None:
        """Parse one descriptor document.

        Args:
            path: Resource path, used as fallback component name
            stream: Binary content of the resource

        Returns:
            ComponentDescriptor, or None if the root element is not a component

        Raises:
            DescriptorError: If a property has no name
            xml.etree.ElementTree.ParseError: For malformed XML
            defusedxml.DefusedXmlException: For forbidden DTD or entity content
        """
        root = defused_parse(stream, parser=self._new_parser()).getroot()

        if local_name(root) != DS_COMPONENT_ELEMENT:
            logger.debug(f"Skipping {path}: root element is {root.tag}")
            return None

        name = root.get(DS_NAME_ATTRIBUTE) or ""
        return ComponentDescriptor(
            name=name if name.strip() else path,
            path=path,
            service_interfaces=self._extract_service_interfaces(root),
            properties=self._extract_properties(root, path),
        )

    def _extract_service_interfaces(self, root: Element) -> list[str]:
        interfaces: list[str] = []
        for service in _iter_local(root, DS_SERVICE_ELEMENT):
            for provide in _iter_local(service, DS_PROVIDE_ELEMENT):
                interface = provide.get(DS_INTERFACE_ATTRIBUTE)
                if interface and interface not in interfaces:
                    interfaces.append(interface)
        return interfaces

    def _extract_properties(self, root: Element, path: str) -> dict[str, list[str]]:
        """Property name to values.

        A ``value`` attribute wins, even when empty. Otherwise the text
        content holds one value per non-blank line.
        """
        properties: dict[str, list[str]] = {}
        for element in _iter_local(root, DS_PROPERTY_ELEMENT):
            name = element.get(DS_PROPERTY_NAME_ATTRIBUTE)
            if name is None:
                raise DescriptorError(f"Property name in DS component {path} cannot be null")

            if DS_PROPERTY_VALUE_ATTRIBUTE in element.attrib:
                values = [element.attrib[DS_PROPERTY_VALUE_ATTRIBUTE]]
            else:
                text = "".join(element.itertext())
                values = [line.strip() for line in _LINE_BREAKS.split(text) if line.strip()]

            properties[name] = values
        return properties
