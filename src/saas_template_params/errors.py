"""
saas_template_params.errors

Error taxonomy for the parameter store.

Every failure raised by the store is one of these kinds. The API layer maps
`code`/`status_code` onto HTTP responses (see `api.errors`).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ParameterStoreError(Exception):
    code = "parameter_store_error"
    status_code = 500

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidParameters(ParameterStoreError):
    """Caller supplied a malformed record or a set that mixes subscriptions."""

    code = "invalid_parameters"
    status_code = 422


class NotFound(ParameterStoreError):
    code = "not_found"
    status_code = 404


class ConstraintViolation(ParameterStoreError):
    """A write would duplicate (subscription_id, parameter_name)."""

    code = "constraint_violation"
    status_code = 409


class StorageUnavailable(ParameterStoreError):
    code = "storage_unavailable"
    status_code = 503


class PartialFailure(ParameterStoreError):
    """
    A non-atomic replacement deleted the previous set but could not write all
    of the new records. `written_ids` lists what did land.
    """

    code = "partial_failure"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        written_ids: list[int],
        failed_parameter: str,
    ) -> None:
        super().__init__(
            message,
            details={"written_ids": list(written_ids), "failed_parameter": failed_parameter},
        )
        self.written_ids = list(written_ids)
        self.failed_parameter = failed_parameter
