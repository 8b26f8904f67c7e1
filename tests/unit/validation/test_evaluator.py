"""Tests for per-component pattern evaluation."""

import pytest

from nsvalidators.config import PatternRuleSet, effective_service_patterns
from nsvalidators.parser.models import ComponentDescriptor
from nsvalidators.validation.evaluator import ComponentEvaluator
from nsvalidators.validation.framework import Severity

SERVLET = "javax.servlet.Servlet"
FILTER = "jakarta.servlet.Filter"
AUTH_HANDLER = "org.apache.sling.auth.core.spi.AuthenticationHandler"


def _evaluate(rules: dict, descriptor: ComponentDescriptor):
    rule_set = PatternRuleSet.model_validate(rules)
    return ComponentEvaluator(rule_set, effective_service_patterns(rule_set)).evaluate(descriptor)


def _descriptor(interfaces=(), **properties):
    return ComponentDescriptor(
        name="MyComponent",
        path="OSGI-INF/MyComponent.xml",
        service_interfaces=list(interfaces),
        properties={name.replace("_", "."): values for name, values in properties.items()},
    )


class TestServiceInterfaceCheck:
    """Test provided service validation."""

    def test_invalid_service(self):
        diagnostics = _evaluate(
            {"allowedServiceClassPatterns": [r"com\.mycompany\..*"]},
            _descriptor(["org.apache.sling.api.SlingService"]),
        )

        assert len(diagnostics) == 1
        diagnostic = diagnostics[0]
        assert diagnostic.severity == Severity.ERROR
        assert diagnostic.params[:2] == ("MyComponent", "org.apache.sling.api.SlingService")
        assert diagnostic.params[2].startswith(r"com\.mycompany\..*,")
        assert "MyComponent" in diagnostic.message

    def test_every_interface_is_checked(self):
        diagnostics = _evaluate(
            {"allowedServiceClassPatterns": [r"com\.mycompany\..*"]},
            _descriptor(["org.a.One", "com.mycompany.Ok", "org.a.Two"]),
        )
        assert [d.params[1] for d in diagnostics] == ["org.a.One", "org.a.Two"]

    @pytest.mark.parametrize("interface", [
        SERVLET,
        "jakarta.servlet.Servlet",
        "javax.servlet.Filter",
        "org.apache.sling.api.adapter.AdapterFactory",
        "com.adobe.granite.workflow.exec.WorkflowProcess",
        "com.day.cq.workflow.exec.WorkflowProcess",
        AUTH_HANDLER,
    ])
    def test_tenant_safe_services_are_exempt(self, interface):
        diagnostics = _evaluate({"allowedServiceClassPatterns": [r"com\.mycompany\..*"]}, _descriptor([interface]))
        assert diagnostics == []

    def test_exempt_names_are_matched_literally(self):
        diagnostics = _evaluate(
            {"allowedServiceClassPatterns": [r"com\.mycompany\..*"]},
            _descriptor(["javaxXservlet.Servlet"]),
        )
        assert len(diagnostics) == 1

    @pytest.mark.parametrize("rules", [{}, {"allowedServiceClassPatterns": []}])
    def test_disabled_service_check(self, rules):
        assert _evaluate(rules, _descriptor(["org.apache.Anything"])) == []


class TestPropertyChecks:
    """Test servlet, filter and authentication handler properties."""

    def test_servlet_path_violation(self):
        diagnostics = _evaluate(
            {"allowedSlingServletPathsPatterns": ["/bin/mycompany/.*"]},
            _descriptor([SERVLET], sling_servlet_paths=["/bin/mycompany/ok", "/bin/other"]),
        )

        assert len(diagnostics) == 1
        assert diagnostics[0].params == ("MyComponent", "/bin/other", "/bin/mycompany/.*")
        assert "Sling servlet path" in diagnostics[0].message
        assert diagnostics[0].rule == "servlet_paths"

    def test_servlet_resource_type_violation(self):
        diagnostics = _evaluate(
            {"allowedSlingServletResourceTypesPatterns": ["mycompany/.*"]},
            _descriptor([SERVLET], sling_servlet_resourceTypes=["mycompany/page", "other/page"]),
        )

        assert [d.params[1] for d in diagnostics] == ["other/page"]
        assert diagnostics[0].rule == "servlet_resource_types"
        assert diagnostics[0].message == (
            "Servlet component \"MyComponent\" has Sling servlet resource type \"other/page\" "
            "which does not match any of the allowed patterns [mycompany/.*]"
        )

    def test_values_are_trimmed(self):
        diagnostics = _evaluate(
            {"allowedSlingServletResourceSuperTypePatterns": ["mycompany/.*"]},
            _descriptor([SERVLET], sling_servlet_resourceSuperType=["  mycompany/base  "]),
        )
        assert diagnostics == []

    def test_servlet_properties_ignored_for_non_servlets(self):
        diagnostics = _evaluate(
            {"allowedSlingServletPathsPatterns": ["/bin/mycompany/.*"]},
            _descriptor(["com.mycompany.Other"], sling_servlet_paths=["/bin/other"]),
        )
        assert diagnostics == []

    def test_absent_property_is_compliant(self):
        diagnostics = _evaluate({"allowedSlingServletPathsPatterns": ["/bin/mycompany/.*"]}, _descriptor([SERVLET]))
        assert diagnostics == []

    def test_whiteboard_servlet_pattern(self):
        diagnostics = _evaluate(
            {"allowedHttpWhiteboardServletPatternPatterns": ["/mycompany/.*"]},
            _descriptor(["jakarta.servlet.Servlet"], osgi_http_whiteboard_servlet_pattern=["/other/*"]),
        )
        assert [d.rule for d in diagnostics] == ["whiteboard_servlet_pattern"]

    def test_filter_properties(self):
        diagnostics = _evaluate(
            {
                "allowedSlingFilterPatternPatterns": ["/content/mycompany/.*"],
                "allowedSlingFilterResourceTypesPatterns": ["mycompany/.*"],
                "allowedHttpWhiteboardFilterPatternPatterns": ["/mycompany/.*"],
            },
            _descriptor(
                [FILTER],
                sling_filter_pattern=["/content/other/.*"],
                sling_filter_resourceTypes=["mycompany/page", "other/page"],
                osgi_http_whiteboard_filter_pattern=["/mycompany/x"],
            ),
        )

        assert [(d.rule, d.params[1]) for d in diagnostics] == [
            ("filter_pattern", "/content/other/.*"),
            ("filter_resource_types", "other/page"),
        ]

    def test_auth_handler_multiple_paths(self):
        diagnostics = _evaluate(
            {"allowedSlingAuthenticationHandlerPathPatterns": ["/content/mycompany(/.*)?"]},
            _descriptor([AUTH_HANDLER], path=["/content/mycompany", "/content/other", "/"]),
        )
        assert [d.params[1] for d in diagnostics] == ["/content/other", "/"]

    def test_servlet_and_filter_at_once(self):
        diagnostics = _evaluate(
            {
                "allowedSlingServletPathsPatterns": ["/bin/mycompany/.*"],
                "allowedSlingFilterPatternPatterns": ["/content/mycompany/.*"],
            },
            _descriptor([SERVLET, FILTER], sling_servlet_paths=["/bin/x"], sling_filter_pattern=["/x"]),
        )
        assert [d.rule for d in diagnostics] == ["servlet_paths", "filter_pattern"]

    def test_empty_slot_disables_property_check(self):
        diagnostics = _evaluate(
            {"allowedSlingServletResourceTypesPatterns": []},
            _descriptor([SERVLET], sling_servlet_resourceTypes=["anything"]),
        )
        assert diagnostics == []
