"""🧪 Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from crddoc.source.declarations import (
    ArrayType,
    DeclaredField,
    DeclaredType,
    Ident,
    SourcePackage,
)


@pytest.fixture(scope="session")
def project_root():
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def testdata_dir(project_root):
    """Get test data directory."""
    return project_root / "tests" / "testdata"


@pytest.fixture(scope="session")
def api_dir(testdata_dir):
    """Go API package with widgets and gadgets."""
    return testdata_dir / "api" / "v1"


def make_field(name, type_expr, tag=None, doc=""):
    """Build a declared field; tag defaults to json:"<lower name>"."""
    if tag is None:
        tag = f'json:"{name[0].lower()}{name[1:]}"'
    if isinstance(type_expr, str):
        type_expr = Ident(type_expr)
    return DeclaredField(type_expr=type_expr, name=name, tag=tag, doc=doc)


@pytest.fixture
def simple_package():
    """A small in-memory package: one namespaced resource and two sub-objects."""
    return SourcePackage(
        name="v1alpha1",
        doc="Package v1alpha1 holds the shop API.\n+groupName=shop.example.com\n",
        types=[
            DeclaredType(
                name="Order",
                doc="Order is a customer order.\n+kubebuilder:object:root=true\n",
                fields=[
                    make_field("Spec", "OrderSpec", 'json:"spec"'),
                ],
            ),
            DeclaredType(
                name="OrderList",
                doc="+kubebuilder:object:root=true\n",
                fields=[make_field("Items", ArrayType(Ident("Order")), 'json:"items"')],
            ),
            DeclaredType(
                name="OrderSpec",
                doc="OrderSpec describes the order.\n",
                fields=[
                    make_field("Customer", "string", doc="Customer name.\n"),
                    make_field("Lines", ArrayType(Ident("Line"))),
                    make_field("Express", "bool", 'json:"express,omitempty"'),
                ],
            ),
            DeclaredType(
                name="Line",
                doc="Line is one ordered item.\n",
                fields=[
                    make_field("SKU", "string", 'json:"sku"'),
                    make_field("Quantity", "int32"),
                ],
            ),
        ],
    )


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Keep the developer's CRDDOC_* environment out of tests."""
    from crddoc.config import get_settings

    monkeypatch.delenv("CRDDOC_TEMPLATE", raising=False)
    monkeypatch.delenv("CRDDOC_OUTPUT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
