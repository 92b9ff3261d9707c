"""Domain repositories package.

Contains abstract interfaces for the collaborators the reconciler depends on.
Implementations are in src/integration/.
"""

from .identity_resolver import IdentityResolver
from .order_repository import OrderRepository, OrderWriteBatch
from .token_ownership_repository import TokenOwnershipRepository

__all__: list[str] = [
    "IdentityResolver",
    "OrderRepository",
    "OrderWriteBatch",
    "TokenOwnershipRepository",
]
