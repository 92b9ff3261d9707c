"""Shared pytest fixtures for the order reconciler test suite."""

import pytest

from application.services import ImpactResolver, OrderReconciler
from domain.entities import OrderItem, OrderItemFactory
from domain.models import ReconciliationPolicy
from integration.models import OrderItemDto
from integration.repositories import InMemoryOrderRepository, InMemoryTokenOwnershipRepository
from integration.services import InMemoryIdentityResolver
from tests.fixtures.factories import fixed_clock


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without external dependencies")
    config.addinivalue_line("markers", "integration: tests exercising repository implementations")


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def ownership_repository() -> InMemoryTokenOwnershipRepository:
    return InMemoryTokenOwnershipRepository()


@pytest.fixture
def identity_resolver() -> InMemoryIdentityResolver:
    return InMemoryIdentityResolver({"0xb": "bob", "0xc": "carol"})


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def policy() -> ReconciliationPolicy:
    return ReconciliationPolicy(owner_inherits_offers=True)


@pytest.fixture
def item_factory(identity_resolver: InMemoryIdentityResolver, policy: ReconciliationPolicy) -> OrderItemFactory:
    """Build order items pinned to the fixed test clock."""

    def create(record: OrderItemDto) -> OrderItem:
        return OrderItem(record, identity_resolver, policy, clock=fixed_clock)

    return create


@pytest.fixture
def order_reconciler(order_repository: InMemoryOrderRepository, policy: ReconciliationPolicy, item_factory: OrderItemFactory) -> OrderReconciler:
    return OrderReconciler(order_repository, ImpactResolver(policy), item_factory)
