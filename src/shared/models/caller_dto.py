from pydantic import BaseModel, Field

from src.shared.models.enums import UserRole


class CallerIdentity(BaseModel):
    """Аутентифицированный вызывающий, как его передал Request Gateway."""

    user_id: str = Field(..., min_length=1)
    role: UserRole = UserRole.CLIENT

    @property
    def is_privileged(self) -> bool:
        """Водители и администраторы работают с чужими отправлениями."""
        return self.role in (UserRole.DRIVER, UserRole.ADMIN)
