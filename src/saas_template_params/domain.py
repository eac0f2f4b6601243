"""
saas_template_params.domain

Domain types for subscription template parameters.

Responsibilities:
- Define the write-side record (`TemplateParameter`) and the stored record
  (`StoredTemplateParameter`).
- Define the `ParameterStore` contract consumed by deployment orchestration.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from saas_template_params.errors import InvalidParameters

# Matches the parameter_name column width.
MAX_PARAMETER_NAME_LENGTH = 256


@dataclass(frozen=True, slots=True)
class TemplateParameter:
    """
    A parameter to be written. It carries no identifier; the store assigns one
    and returns it from `save`.
    """

    subscription_id: uuid.UUID
    plan_id: uuid.UUID
    parameter_name: str
    parameter_value: str

    def __post_init__(self) -> None:
        for field in ("subscription_id", "plan_id"):
            if not isinstance(getattr(self, field), uuid.UUID):
                raise InvalidParameters(f"{field} must be a UUID")
        if not isinstance(self.parameter_name, str) or not self.parameter_name.strip():
            raise InvalidParameters("parameter_name must be a non-empty string")
        if len(self.parameter_name) > MAX_PARAMETER_NAME_LENGTH:
            raise InvalidParameters(
                f"parameter_name exceeds {MAX_PARAMETER_NAME_LENGTH} characters",
                details={"parameter_name": self.parameter_name[:MAX_PARAMETER_NAME_LENGTH]},
            )
        # Empty values are legal, missing ones are not.
        if not isinstance(self.parameter_value, str):
            raise InvalidParameters(
                "parameter_value must be a string",
                details={"parameter_name": self.parameter_name},
            )


@dataclass(frozen=True, slots=True)
class StoredTemplateParameter:
    id: int
    subscription_id: uuid.UUID
    plan_id: uuid.UUID
    parameter_name: str
    parameter_value: str
    created_at: datetime


class ParameterStore(Protocol):
    async def fetch_by_subscription(
        self, subscription_id: uuid.UUID
    ) -> list[StoredTemplateParameter]: ...

    async def fetch_by_plan(
        self, subscription_id: uuid.UUID, plan_id: uuid.UUID
    ) -> list[StoredTemplateParameter]: ...

    async def get_parameter(
        self, subscription_id: uuid.UUID, parameter_name: str
    ) -> StoredTemplateParameter: ...

    async def save(self, parameter: TemplateParameter) -> int: ...

    async def replace_all(
        self, subscription_id: uuid.UUID, parameters: Sequence[TemplateParameter]
    ) -> None: ...


def parameter_values(records: Iterable[StoredTemplateParameter]) -> dict[str, str]:
    # Shape consumed by template rendering: parameter name -> substitution value.
    return {r.parameter_name: r.parameter_value for r in records}


# --- Module Notes -----------------------------------------------------------
# Both dataclasses are frozen: identifier assignment never mutates caller input.
