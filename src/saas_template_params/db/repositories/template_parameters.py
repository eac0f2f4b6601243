"""
saas_template_params.db.repositories.template_parameters

Repository for `SubscriptionTemplateParameterRow` entities.

Responsibilities:
- Query parameter rows by subscription, by (subscription, plan) and by name.
- Insert single rows and delete a subscription's full set.
"""

from __future__ import annotations

import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from saas_template_params.db.models import SubscriptionTemplateParameterRow
from saas_template_params.domain import StoredTemplateParameter, TemplateParameter


def to_domain(row: SubscriptionTemplateParameterRow) -> StoredTemplateParameter:
    return StoredTemplateParameter(
        id=row.id,
        subscription_id=row.subscription_id,
        plan_id=row.plan_id,
        parameter_name=row.parameter_name,
        parameter_value=row.parameter_value,
        created_at=row.created_at,
    )


class TemplateParameterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_subscription(
        self, subscription_id: uuid.UUID
    ) -> list[SubscriptionTemplateParameterRow]:
        stmt = select(SubscriptionTemplateParameterRow).where(
            SubscriptionTemplateParameterRow.subscription_id == subscription_id
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_for_plan(
        self, subscription_id: uuid.UUID, plan_id: uuid.UUID
    ) -> list[SubscriptionTemplateParameterRow]:
        stmt = (
            select(SubscriptionTemplateParameterRow)
            .where(
                SubscriptionTemplateParameterRow.subscription_id == subscription_id,
                SubscriptionTemplateParameterRow.plan_id == plan_id,
            )
            .order_by(SubscriptionTemplateParameterRow.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get_by_name(
        self, subscription_id: uuid.UUID, parameter_name: str
    ) -> SubscriptionTemplateParameterRow | None:
        stmt = select(SubscriptionTemplateParameterRow).where(
            SubscriptionTemplateParameterRow.subscription_id == subscription_id,
            SubscriptionTemplateParameterRow.parameter_name == parameter_name,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def add(self, parameter: TemplateParameter) -> SubscriptionTemplateParameterRow:
        row = SubscriptionTemplateParameterRow(
            subscription_id=parameter.subscription_id,
            plan_id=parameter.plan_id,
            parameter_name=parameter.parameter_name,
            parameter_value=parameter.parameter_value,
        )
        self._session.add(row)
        # Flush so the unique constraint fires here and the id is populated.
        await self._session.flush()
        return row

    async def add_many(
        self, parameters: list[TemplateParameter]
    ) -> list[SubscriptionTemplateParameterRow]:
        rows = [
            SubscriptionTemplateParameterRow(
                subscription_id=p.subscription_id,
                plan_id=p.plan_id,
                parameter_name=p.parameter_name,
                parameter_value=p.parameter_value,
            )
            for p in parameters
        ]
        self._session.add_all(rows)
        await self._session.flush()
        return rows

    async def delete_for_subscription(self, subscription_id: uuid.UUID) -> int:
        stmt = delete(SubscriptionTemplateParameterRow).where(
            SubscriptionTemplateParameterRow.subscription_id == subscription_id
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0


# --- Module Notes -----------------------------------------------------------
# Subscription-wide delete is the only removal path; rows are never updated in place.
