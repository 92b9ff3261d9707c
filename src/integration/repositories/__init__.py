"""Integration layer repositories package.

Contains MongoDB and in-memory implementations of the abstract interfaces
defined in domain/repositories/.
"""

from .in_memory_order_repository import InMemoryOrderRepository, InMemoryOrderWriteBatch
from .in_memory_token_ownership_repository import InMemoryTokenOwnershipRepository
from .motor_order_repository import MotorOrderRepository, MotorOrderWriteBatch
from .motor_token_ownership_repository import MotorTokenOwnershipRepository

__all__ = [
    "MotorOrderRepository",
    "MotorOrderWriteBatch",
    "MotorTokenOwnershipRepository",
    "InMemoryOrderRepository",
    "InMemoryOrderWriteBatch",
    "InMemoryTokenOwnershipRepository",
]
