"""
saas_template_params.services.parameter_store

Subscription template parameter store (transaction + persistence owner).

Responsibilities:
- Fetch parameter sets by subscription and by (subscription, plan).
- Save single parameters and return the storage-assigned id.
- Replace a subscription's full parameter set under the configured policy.
- Translate SQLAlchemy failures into the store's error kinds.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from saas_template_params.db.repositories.template_parameters import (
    TemplateParameterRepo,
    to_domain,
)
from saas_template_params.domain import StoredTemplateParameter, TemplateParameter
from saas_template_params.errors import (
    ConstraintViolation,
    InvalidParameters,
    NotFound,
    PartialFailure,
    StorageUnavailable,
)
from saas_template_params.observability.logging import get_logger
from saas_template_params.settings import ReplacePolicy

log = get_logger(__name__)


@contextmanager
def _storage_errors(operation: str, subscription_id: uuid.UUID) -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        log.info(
            "template_parameters.constraint_violation",
            operation=operation,
            subscription_id=str(subscription_id),
        )
        raise ConstraintViolation(
            "write violates parameter name uniqueness for this subscription",
            details={"subscription_id": str(subscription_id)},
        ) from exc
    except DataError as exc:
        # Value rejected by the column type (width, encoding).
        raise InvalidParameters(
            f"storage rejected a value during {operation}",
            details={"subscription_id": str(subscription_id)},
        ) from exc
    except (OperationalError, InterfaceError, PoolTimeoutError) as exc:
        log.warning(
            "template_parameters.storage_unavailable",
            operation=operation,
            subscription_id=str(subscription_id),
            error=type(exc).__name__,
        )
        raise StorageUnavailable(f"storage unavailable during {operation}") from exc


def _require_uuid(name: str, value: object) -> None:
    if not isinstance(value, uuid.UUID):
        raise InvalidParameters(f"{name} must be a UUID")


class SqlAlchemyParameterStore:
    """
    ParameterStore backed by an async SQLAlchemy sessionmaker.

    Each call opens and closes its own session; the store keeps no state
    between calls. Nothing is retried: failures propagate with their kind.

    `replace_all` semantics depend on `policy`:

    - `ReplacePolicy.atomic`: delete + insert run in one transaction. On any
      failure the previous set is left untouched. Never raises PartialFailure.
    - `ReplacePolicy.delete_then_insert`: not atomic. The delete commits
      first and each record commits on its own. A failed insert raises
      `PartialFailure`; rows written before it remain.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        policy: ReplacePolicy = ReplacePolicy.atomic,
    ) -> None:
        self._session_factory = session_factory
        self._policy = policy

    @property
    def policy(self) -> ReplacePolicy:
        return self._policy

    async def fetch_by_subscription(
        self, subscription_id: uuid.UUID
    ) -> list[StoredTemplateParameter]:
        _require_uuid("subscription_id", subscription_id)
        with _storage_errors("fetch_by_subscription", subscription_id):
            async with self._session_factory() as session:
                rows = await TemplateParameterRepo(session).list_for_subscription(
                    subscription_id
                )
        return [to_domain(r) for r in rows]

    async def fetch_by_plan(
        self, subscription_id: uuid.UUID, plan_id: uuid.UUID
    ) -> list[StoredTemplateParameter]:
        _require_uuid("subscription_id", subscription_id)
        _require_uuid("plan_id", plan_id)
        with _storage_errors("fetch_by_plan", subscription_id):
            async with self._session_factory() as session:
                rows = await TemplateParameterRepo(session).list_for_plan(
                    subscription_id, plan_id
                )
        return [to_domain(r) for r in rows]

    async def get_parameter(
        self, subscription_id: uuid.UUID, parameter_name: str
    ) -> StoredTemplateParameter:
        _require_uuid("subscription_id", subscription_id)
        with _storage_errors("get_parameter", subscription_id):
            async with self._session_factory() as session:
                row = await TemplateParameterRepo(session).get_by_name(
                    subscription_id, parameter_name
                )
        if row is None:
            raise NotFound(
                f"template parameter {parameter_name!r} not found",
                details={
                    "subscription_id": str(subscription_id),
                    "parameter_name": parameter_name,
                },
            )
        return to_domain(row)

    async def save(self, parameter: TemplateParameter) -> int:
        with _storage_errors("save", parameter.subscription_id):
            async with self._session_factory() as session, session.begin():
                row = await TemplateParameterRepo(session).add(parameter)
                new_id = row.id

        log.info(
            "template_parameters.saved",
            subscription_id=str(parameter.subscription_id),
            plan_id=str(parameter.plan_id),
            parameter_name=parameter.parameter_name,
            parameter_id=new_id,
        )
        return new_id

    async def replace_all(
        self, subscription_id: uuid.UUID, parameters: Sequence[TemplateParameter]
    ) -> None:
        _require_uuid("subscription_id", subscription_id)
        parameters = list(parameters)
        mismatched = [
            p.parameter_name for p in parameters if p.subscription_id != subscription_id
        ]
        if mismatched:
            raise InvalidParameters(
                "all parameters must belong to the subscription being replaced",
                details={"subscription_id": str(subscription_id), "mismatched": mismatched},
            )

        if self._policy is ReplacePolicy.atomic:
            removed = await self._replace_atomic(subscription_id, parameters)
        else:
            removed = await self._replace_delete_then_insert(subscription_id, parameters)

        log.info(
            "template_parameters.replaced",
            subscription_id=str(subscription_id),
            policy=self._policy.value,
            removed=removed,
            written=len(parameters),
        )

    async def _replace_atomic(
        self, subscription_id: uuid.UUID, parameters: list[TemplateParameter]
    ) -> int:
        with _storage_errors("replace_all", subscription_id):
            async with self._session_factory() as session, session.begin():
                repo = TemplateParameterRepo(session)
                removed = await repo.delete_for_subscription(subscription_id)
                await repo.add_many(parameters)
        return removed

    async def _replace_delete_then_insert(
        self, subscription_id: uuid.UUID, parameters: list[TemplateParameter]
    ) -> int:
        async with self._session_factory() as session:
            repo = TemplateParameterRepo(session)
            with _storage_errors("replace_all", subscription_id):
                async with session.begin():
                    removed = await repo.delete_for_subscription(subscription_id)

            # The previous set is gone from here on; failures are partial.
            written: list[int] = []
            for parameter in parameters:
                try:
                    async with session.begin():
                        row = await repo.add(parameter)
                except SQLAlchemyError as exc:
                    log.warning(
                        "template_parameters.replace_partial_failure",
                        subscription_id=str(subscription_id),
                        failed_parameter=parameter.parameter_name,
                        written=len(written),
                        expected=len(parameters),
                        error=type(exc).__name__,
                    )
                    raise PartialFailure(
                        f"replaced {len(written)} of {len(parameters)} parameters",
                        written_ids=written,
                        failed_parameter=parameter.parameter_name,
                    ) from exc
                written.append(row.id)
        return removed


# --- Module Notes -----------------------------------------------------------
# Replacement is subscription-wide: rows recorded under any plan are superseded.
