from dataclasses import dataclass
from typing import Optional

ADMIN_ROLE = "admin"
SYSTEM_ROLE = "system"


@dataclass(frozen=True)
class Actor:
    """Хто виконує операцію: user_id і роль із сесії."""

    user_id: Optional[int]
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def is_system(self) -> bool:
        return self.role == SYSTEM_ROLE

    @property
    def is_privileged(self) -> bool:
        return self.is_admin or self.is_system

    def owns(self, guest_id: int) -> bool:
        return self.user_id is not None and self.user_id == guest_id


# від імені системи леджер платежів підтверджує повністю оплачені бронювання
SYSTEM_ACTOR = Actor(user_id=None, role=SYSTEM_ROLE)
