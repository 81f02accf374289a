from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class Church(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "churches"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    public_token: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True, index=True)
