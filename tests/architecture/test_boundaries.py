from pytest_archon import archrule


def test_primitives_isolation() -> None:
    """
    Primitives (exceptions) sit at the bottom of the package.
    They must not import any other layer.
    """
    (
        archrule("primitives_isolation")
        .match("onion_core.primitives*")
        .should_not_import("onion_core.middleware*")
        .should_not_import("onion_core.ports*")
        .should_not_import("onion_core.onion")
        .check("onion_core")
    )


def test_ports_isolation() -> None:
    """
    Ports only describe protocols; they do not depend on implementations.
    """
    (
        archrule("ports_isolation")
        .match("onion_core.ports*")
        .should_not_import("onion_core.middleware*")
        .should_not_import("onion_core.onion")
        .check("onion_core")
    )


def test_middleware_does_not_depend_on_orchestrator() -> None:
    """
    Composition and dispatch must stay usable without the Onion orchestrator.
    """
    (
        archrule("middleware_layering")
        .match("onion_core.middleware*")
        .should_not_import("onion_core.onion")
        .check("onion_core")
    )
