from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_many(self, user_ids: Iterable[int]) -> Sequence[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def list_active_by_role(self, role: Role, *, region: Optional[str] = None) -> Sequence[User]:
        """Active users with ``role``; ``region`` matches case-insensitively when given."""

        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        role: Role,
        phone_number: Optional[str] = None,
        reporting_manager: Optional[str] = None,
        region: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
