"""Shared fixtures for nsvalidators tests."""

import pytest

DS_NAMESPACE = "http://www.osgi.org/xmlns/scr/v1.1.0"


def _component_xml(name="MyComponent", interfaces=(), properties=None, raw_properties=""):
    """Build DS component XML.

    properties maps name -> value (value attribute) or list (text content).
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<scr:component xmlns:scr="{DS_NAMESPACE}" name="{name}">',
        '    <implementation class="com.mycompany.impl.Impl"/>',
    ]
    for prop_name, value in (properties or {}).items():
        if isinstance(value, list):
            lines.append(f'    <property name="{prop_name}" type="String">')
            lines.extend(f"        {v}" for v in value)
            lines.append("    </property>")
        else:
            lines.append(f'    <property name="{prop_name}" type="String" value="{value}"/>')
    if raw_properties:
        lines.append(raw_properties)
    if interfaces:
        lines.append("    <service>")
        lines.extend(f'        <provide interface="{i}"/>' for i in interfaces)
        lines.append("    </service>")
    lines.append("</scr:component>")
    return "\n".join(lines).encode("utf-8")


@pytest.fixture
def component_xml():
    """Factory for DS component descriptor bytes."""
    return _component_xml
