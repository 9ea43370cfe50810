"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application
- Application services don't depend on adapters
- Only the application context wires adapters to application services
- Upstream adapters don't know about the web layer
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should only import the standard library, pydantic and themselves."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("fine_dust.domain.models*")
        .should_not_import("fine_dust.adapters*")
        .should_not_import("fine_dust.application*")
        .should_not_import("fine_dust.domain.contracts*")
        .should_not_import("fine_dust.domain.ports*")
        .may_import("fine_dust.domain.models*")
        .check("fine_dust")
    )


def test_domain_contracts_and_ports_have_no_dependencies() -> None:
    """Domain contracts and ports should not import adapters or application."""
    (
        archrule("domain interfaces", comment="Domain protocols should be independent")
        .match("fine_dust.domain.contracts*")
        .match("fine_dust.domain.ports*")
        .should_not_import("fine_dust.adapters*")
        .should_not_import("fine_dust.application*")
        .may_import("fine_dust.domain*")
        .check("fine_dust")
    )


def test_no_outward_dependencies_in_domain() -> None:
    """Domain layer should not depend on outer layers."""
    (
        archrule("domain independence", comment="Domain layer is the innermost layer")
        .match("fine_dust.domain*")
        .should_not_import("fine_dust.adapters*")
        .should_not_import("fine_dust.application*")
        .may_import("fine_dust.domain*")
        .check("fine_dust", only_direct_imports=True)
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("fine_dust.application*")
        .should_not_import("fine_dust.adapters*")
        .may_import("fine_dust.domain*")
        .may_import("fine_dust.application*")
        .check("fine_dust")
    )


def test_adapters_dont_import_application() -> None:
    """Only the application context may import application services."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("fine_dust.adapters*")
        .exclude("fine_dust.adapters.app_context")
        .should_not_import("fine_dust.application*")
        .may_import("fine_dust.domain*")
        .may_import("fine_dust.adapters*")
        .check("fine_dust", only_direct_imports=True)
    )


def test_upstream_adapters_dont_import_web() -> None:
    """Upstream API adapters should not know about the HTTP server."""
    (
        archrule("upstream adapters", comment="API clients must work without the web layer")
        .match("fine_dust.adapters.airkorea_api*")
        .match("fine_dust.adapters.openweather_api*")
        .match("fine_dust.adapters.http*")
        .should_not_import("fine_dust.adapters.web*")
        .should_not_import("starlette*")
        .check("fine_dust")
    )


def test_cli_dont_import_web_adapters() -> None:
    """CLI should not import web adapters to allow running CLI without web server."""
    (
        archrule("CLI independence", comment="CLI should not depend on web adapters")
        .match("fine_dust.cli")
        .should_not_import("fine_dust.adapters.web*")
        .may_import("fine_dust.domain*")
        .may_import("fine_dust.application*")
        .may_import("fine_dust.adapters*")
        .check("fine_dust")
    )
