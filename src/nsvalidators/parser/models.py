"""Data models for parsed Declarative Services component descriptors."""

from dataclasses import dataclass, field


@dataclass
class ComponentDescriptor:
    """Structural summary of one DS component XML file.

    Holds no reference to the archive it was read from.
    """
    name: str                                                  # Declared name, else resource path
    path: str                                                  # Resource path inside the bundle
    service_interfaces: list[str] = field(default_factory=list)  # Provided interfaces, declaration order
    properties: dict[str, list[str]] = field(default_factory=dict)  # Property name -> values

    def provides(self, *interfaces: str) -> bool:
        """Whether any of the given interfaces is provided."""
        return any(interface in self.service_interfaces for interface in interfaces)
