"""
saas_template_params.api.routers.template_parameters

Endpoints used by the deployment orchestrator.

Responsibilities:
- Read a subscription's parameters (optionally scoped to a plan).
- Read parameters as a name -> value mapping for template substitution.
- Save a single parameter and replace the subscription's full set.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from saas_template_params.api.deps import store_dep
from saas_template_params.domain import (
    MAX_PARAMETER_NAME_LENGTH,
    ParameterStore,
    StoredTemplateParameter,
    TemplateParameter,
    parameter_values,
)

router = APIRouter(
    prefix="/v1/subscriptions/{subscription_id}/template-parameters",
    tags=["template-parameters"],
)
# Separate segment so every parameter name stays addressable under `router`.
values_router = APIRouter(
    prefix="/v1/subscriptions/{subscription_id}/template-parameter-values",
    tags=["template-parameters"],
)


class TemplateParameterIn(BaseModel):
    plan_id: uuid.UUID
    parameter_name: str = Field(min_length=1, max_length=MAX_PARAMETER_NAME_LENGTH)
    parameter_value: str


class TemplateParameterOut(BaseModel):
    id: int
    subscription_id: uuid.UUID
    plan_id: uuid.UUID
    parameter_name: str
    parameter_value: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: StoredTemplateParameter) -> TemplateParameterOut:
        return cls(
            id=record.id,
            subscription_id=record.subscription_id,
            plan_id=record.plan_id,
            parameter_name=record.parameter_name,
            parameter_value=record.parameter_value,
            created_at=record.created_at,
        )


class SaveResponse(BaseModel):
    id: int


async def _fetch(
    store: ParameterStore, subscription_id: uuid.UUID, plan_id: uuid.UUID | None
) -> list[StoredTemplateParameter]:
    if plan_id is None:
        return await store.fetch_by_subscription(subscription_id)
    return await store.fetch_by_plan(subscription_id, plan_id)


@router.get("", response_model=list[TemplateParameterOut])
async def list_parameters(
    subscription_id: uuid.UUID,
    plan_id: uuid.UUID | None = None,
    store: ParameterStore = Depends(store_dep),
) -> list[TemplateParameterOut]:
    records = await _fetch(store, subscription_id, plan_id)
    return [TemplateParameterOut.from_record(r) for r in records]


@values_router.get("")
async def parameter_value_map(
    subscription_id: uuid.UUID,
    plan_id: uuid.UUID | None = None,
    store: ParameterStore = Depends(store_dep),
) -> dict[str, str]:
    return parameter_values(await _fetch(store, subscription_id, plan_id))


@router.get("/{parameter_name:path}", response_model=TemplateParameterOut)
async def get_parameter(
    subscription_id: uuid.UUID,
    parameter_name: str,
    store: ParameterStore = Depends(store_dep),
) -> TemplateParameterOut:
    record = await store.get_parameter(subscription_id, parameter_name)
    return TemplateParameterOut.from_record(record)


@router.post("", response_model=SaveResponse, status_code=HTTP_201_CREATED)
async def save_parameter(
    subscription_id: uuid.UUID,
    body: TemplateParameterIn,
    store: ParameterStore = Depends(store_dep),
) -> SaveResponse:
    new_id = await store.save(
        TemplateParameter(
            subscription_id=subscription_id,
            plan_id=body.plan_id,
            parameter_name=body.parameter_name,
            parameter_value=body.parameter_value,
        )
    )
    return SaveResponse(id=new_id)


@router.put("", status_code=HTTP_204_NO_CONTENT)
async def replace_parameters(
    subscription_id: uuid.UUID,
    body: list[TemplateParameterIn],
    store: ParameterStore = Depends(store_dep),
) -> Response:
    # The body is the complete new set; anything not listed is superseded.
    await store.replace_all(
        subscription_id,
        [
            TemplateParameter(
                subscription_id=subscription_id,
                plan_id=item.plan_id,
                parameter_name=item.parameter_name,
                parameter_value=item.parameter_value,
            )
            for item in body
        ],
    )
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# The subscription id always comes from the path, so a PUT body cannot mix subscriptions.
