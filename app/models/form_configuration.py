from __future__ import annotations

import uuid

from sqlalchemy import JSON, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base
from app.models.common import TimestampMixin, UUIDMixin


class FormConfiguration(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "form_configurations"
    __table_args__ = (
        UniqueConstraint("church_id", "form_type", name="uq_form_configurations_church_form_type"),
    )

    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    form_type: Mapped[str] = mapped_column(String(30), nullable=False)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    hero_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Stored in wire shape (camelCase keys), ordered.
    field_config: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    custom_fields: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
