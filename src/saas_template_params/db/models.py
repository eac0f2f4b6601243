"""
saas_template_params.db.models

Persistence schema for subscription template parameters.

Responsibilities:
- Define `SubscriptionTemplateParameterRow`: one row per (subscription, parameter name).
- Enforce name uniqueness per subscription at the database level.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Index, Integer, String, Text, UniqueConstraint, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from saas_template_params.db.base import Base
from saas_template_params.domain import MAX_PARAMETER_NAME_LENGTH


def _utcnow() -> datetime:
    # Stored naive in UTC; SQLite drops tzinfo anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class SubscriptionTemplateParameterRow(Base):
    __tablename__ = "subscription_template_parameters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subscription_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), nullable=False, index=True
    )
    # Plan active when the parameter was recorded.
    plan_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False)

    parameter_name: Mapped[str] = mapped_column(String(MAX_PARAMETER_NAME_LENGTH), nullable=False)
    parameter_value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint(
            "subscription_id",
            "parameter_name",
            name="uq_subscription_template_parameter_name",
        ),
        Index("ix_template_parameters_subscription_plan", "subscription_id", "plan_id"),
    )


# --- Module Notes -----------------------------------------------------------
# Keep this table aligned with alembic/versions/*_create_subscription_template_parameters.py.
