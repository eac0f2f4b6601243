"""
tests.test_error_translation

Which SQLAlchemy failures become which store error kinds.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import (
    DataError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    ProgrammingError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from saas_template_params.errors import (
    ConstraintViolation,
    InvalidParameters,
    StorageUnavailable,
)
from saas_template_params.services.parameter_store import _storage_errors


def _dbapi(cls):
    return cls("INSERT INTO subscription_template_parameters ...", {}, Exception("driver"))


@pytest.mark.parametrize(
    ("raised", "expected"),
    [
        (_dbapi(IntegrityError), ConstraintViolation),
        (_dbapi(DataError), InvalidParameters),
        (_dbapi(OperationalError), StorageUnavailable),
        (_dbapi(InterfaceError), StorageUnavailable),
        (PoolTimeoutError("pool exhausted"), StorageUnavailable),
    ],
)
def test_translation(raised: Exception, expected: type[Exception]) -> None:
    with pytest.raises(expected) as excinfo:
        with _storage_errors("save", uuid.uuid4()):
            raise raised
    assert excinfo.value.__cause__ is raised


def test_input_errors_are_not_reported_as_outages() -> None:
    # A value the column rejects must not look retryable.
    with pytest.raises(InvalidParameters):
        with _storage_errors("save", uuid.uuid4()):
            raise _dbapi(DataError)


def test_programming_errors_propagate_unchanged() -> None:
    err = _dbapi(ProgrammingError)
    with pytest.raises(ProgrammingError) as excinfo:
        with _storage_errors("save", uuid.uuid4()):
            raise err
    assert excinfo.value is err
