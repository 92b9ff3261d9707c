"""Abstract address to display-name resolution."""

from abc import ABC, abstractmethod
from typing import Optional


class IdentityResolver(ABC):
    """Resolves a wallet address to the username shown in the marketplace."""

    @abstractmethod
    async def resolve_username_async(self, address: str) -> Optional[str]:
        """Return the username for ``address``.

        Returns None (or an empty string) when the address has no username;
        raises only when the lookup itself failed.
        """
        pass
