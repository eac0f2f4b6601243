"""
saas_template_params.api.errors

Maps the store's error kinds onto JSON HTTP responses.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from saas_template_params.errors import ParameterStoreError
from saas_template_params.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ParameterStoreError)
    async def handle_store_error(request: Request, exc: ParameterStoreError) -> JSONResponse:
        log.info(
            "store_error_handled",
            code=exc.code,
            status_code=exc.status_code,
            message=exc.message,
        )
        payload: dict[str, object] = {"code": exc.code, "message": exc.message}
        if exc.details is not None:
            payload["details"] = dict(exc.details)
        return JSONResponse(status_code=exc.status_code, content=payload)
