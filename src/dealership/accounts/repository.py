from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import AccountType
from .model import Account


class AccountRepository(Protocol):
    """Repository interface for Account.

    Implementations raise ConflictError when the store's unique email index
    rejects a write.
    """

    def get_by_id(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        """Case-insensitive lookup."""
        raise NotImplementedError

    def create_account(
        self,
        *,
        firstname: str,
        lastname: str,
        email: str,
        password_hash: str,
        account_type: AccountType = AccountType.CLIENT,
    ) -> int:
        raise NotImplementedError

    def update_profile(self, *, account_id: int, firstname: str, lastname: str, email: str) -> bool:
        raise NotImplementedError

    def update_password(self, *, account_id: int, password_hash: str) -> bool:
        raise NotImplementedError
