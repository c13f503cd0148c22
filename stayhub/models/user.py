"""User model: authentication and role."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from stayhub.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

ROLE_OWNER = "owner"
ROLE_USER = "user"


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Account of a property owner or a guest (``role="user"``)."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role: Mapped[str] = mapped_column(String(50), default=ROLE_USER, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
