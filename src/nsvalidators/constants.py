"""Constants for OSGi manifest headers and Declarative Services descriptors.

Interface names, property keys and configuration keys are centralized here
so the parser, the evaluator and the CLI agree on them.
"""

from typing import Dict, FrozenSet, Tuple

# Manifest headers
BUNDLE_SYMBOLIC_NAME = "Bundle-SymbolicName"
SERVICE_COMPONENT = "Service-Component"
EXPORT_PACKAGE = "Export-Package"
MANIFEST_PATH = "META-INF/MANIFEST.MF"

# Service-Component entries are resolved relative to this folder
DESCRIPTOR_ROOT = "OSGI-INF/"
GLOB_WILDCARDS: Tuple[str, ...] = ("*", "?")

# DS component XML
DS_COMPONENT_ELEMENT = "component"
DS_SERVICE_ELEMENT = "service"
DS_PROVIDE_ELEMENT = "provide"
DS_PROPERTY_ELEMENT = "property"
DS_NAME_ATTRIBUTE = "name"
DS_INTERFACE_ATTRIBUTE = "interface"
DS_PROPERTY_NAME_ATTRIBUTE = "name"
DS_PROPERTY_VALUE_ATTRIBUTE = "value"

SERVLET_INTERFACES: FrozenSet[str] = frozenset({
    "javax.servlet.Servlet",
    "jakarta.servlet.Servlet",
})
FILTER_INTERFACES: FrozenSet[str] = frozenset({
    "javax.servlet.Filter",
    "jakarta.servlet.Filter",
})
AUTHENTICATION_HANDLER_INTERFACE = "org.apache.sling.auth.core.spi.AuthenticationHandler"

# Component properties
SLING_SERVLET_PATHS = "sling.servlet.paths"
SLING_SERVLET_RESOURCE_TYPES = "sling.servlet.resourceTypes"
SLING_SERVLET_RESOURCE_SUPER_TYPE = "sling.servlet.resourceSuperType"
SLING_FILTER_PATTERN = "sling.filter.pattern"
SLING_FILTER_RESOURCE_TYPES = "sling.filter.resourceTypes"
HTTP_WHITEBOARD_SERVLET_PATTERN = "osgi.http.whiteboard.servlet.pattern"
HTTP_WHITEBOARD_FILTER_PATTERN = "osgi.http.whiteboard.filter.pattern"
AUTH_HANDLER_PATH = "path"

# Services which support multi-tenancy through their properties or are
# known to almost never clash between tenants. Order is reporting order.
TENANT_SAFE_SERVICES: Tuple[str, ...] = (
    "javax.servlet.Servlet",
    "jakarta.servlet.Servlet",
    "javax.servlet.Filter",
    "jakarta.servlet.Filter",
    "org.apache.sling.api.adapter.AdapterFactory",
    "org.apache.sling.rewriter.TransformerFactory",
    "com.adobe.granite.workflow.exec.WorkflowProcess",
    "com.day.cq.workflow.exec.WorkflowProcess",
    AUTHENTICATION_HANDLER_INTERFACE,
)

# Configuration keys (alias) -> what the rule constrains
RULE_DESCRIPTIONS: Dict[str, str] = {
    "allowedExportPackagePatterns": "Exported package names (Export-Package)",
    "allowedBundleSymbolicNamePatterns": "Bundle-SymbolicName, without parameters",
    "allowedServiceClassPatterns": "Service interfaces provided by DS components",
    "allowedSlingServletPathsPatterns": f"Servlet property {SLING_SERVLET_PATHS}",
    "allowedSlingServletResourceTypesPatterns": f"Servlet property {SLING_SERVLET_RESOURCE_TYPES}",
    "allowedSlingServletResourceSuperTypePatterns": f"Servlet property {SLING_SERVLET_RESOURCE_SUPER_TYPE}",
    "allowedSlingFilterPatternPatterns": f"Filter property {SLING_FILTER_PATTERN}",
    "allowedSlingFilterResourceTypesPatterns": f"Filter property {SLING_FILTER_RESOURCE_TYPES}",
    "allowedHttpWhiteboardServletPatternPatterns": f"Servlet property {HTTP_WHITEBOARD_SERVLET_PATTERN}",
    "allowedHttpWhiteboardFilterPatternPatterns": f"Filter property {HTTP_WHITEBOARD_FILTER_PATTERN}",
    "allowedSlingAuthenticationHandlerPathPatterns": f"AuthenticationHandler property {AUTH_HANDLER_PATH}",
}

CONFIG_FILE_NAME = ".nsvalidators.json"
