from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a field engineer or an administrator.

    Plain data object, no DB access code here.
    """

    user_id: int
    email: str
    password_hash: str
    full_name: str
    role: Role
    phone_number: Optional[str] = None
    reporting_manager: Optional[str] = None
    region: Optional[str] = None
    is_active: bool = True

    def profile(self) -> dict:
        """Public fields joined into roster and report rows."""
        return {
            "user_id": self.user_id,
            "email": self.email,
            "full_name": self.full_name,
            "phone_number": self.phone_number,
            "reporting_manager": self.reporting_manager,
            "region": self.region,
        }
