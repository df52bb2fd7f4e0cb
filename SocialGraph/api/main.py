"""
HTTP surface for the SocialGraph account & graph store.

A single entry point runs named operations against the process-wide store:

- POST /query {"operation": "createUser", "variables": {...}}
- GET  /query?operation=getFeed&variables={"userId": "1"}   (queries only)
- GET  /health

Operation failures come back with HTTP 200 and an `errors` list next to
`data`; unknown operations and malformed requests are HTTP 4xx.

Run with: `python -m SocialGraph.api` or `uvicorn SocialGraph.api.main:app`
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from SocialGraph.core.config import get_settings
from SocialGraph.core.passwords import PasswordHasher
from SocialGraph.core.store import AccountGraphStore

from . import operations
from .schemas import OperationError, OperationRequest

settings = get_settings()
logger = logging.getLogger("socialgraph")
logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")

store = AccountGraphStore(PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS))
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    docs_url="/docs" if settings.ENABLE_EXPLORER else None,
    redoc_url=None,
)


def _envelope(data: Optional[Dict[str, Any]], errors: List[OperationError]) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = [error.model_dump() for error in errors]
    return body


def _request_error(status_code: int, message: str, code: str) -> JSONResponse:
    error = OperationError(message=message, code=code)
    return JSONResponse(status_code=status_code, content=_envelope(None, [error]))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _request_error(status.HTTP_400_BAD_REQUEST, problems or "malformed request", "BAD_REQUEST")


def _run(name: str, variables: Optional[Dict[str, Any]]) -> JSONResponse:
    try:
        data, errors = operations.execute(store, name, variables)
    except operations.UnknownOperationError as exc:
        return _request_error(status.HTTP_400_BAD_REQUEST, str(exc), "UNKNOWN_OPERATION")
    return JSONResponse(content=_envelope(data, errors))


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("Server is running on port %s (explorer=%s)", settings.PORT, settings.ENABLE_EXPLORER)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "service": settings.APP_NAME, "version": settings.VERSION}


@app.post("/query")
def run_operation(payload: OperationRequest) -> JSONResponse:
    return _run(payload.operation, payload.variables)


@app.get("/query")
def run_query(
    operation: str = Query(..., min_length=1),
    variables: Optional[str] = None,
) -> JSONResponse:
    parsed: Dict[str, Any] = {}
    if variables:
        try:
            parsed = json.loads(variables)
        except json.JSONDecodeError as exc:
            return _request_error(status.HTTP_400_BAD_REQUEST, f"variables are not valid JSON: {exc}", "BAD_REQUEST")
        if not isinstance(parsed, dict):
            return _request_error(status.HTTP_400_BAD_REQUEST, "variables must be a JSON object", "BAD_REQUEST")

    op = operations.OPERATIONS.get(operation)
    if op is not None and op.kind != operations.QUERY:
        return _request_error(
            status.HTTP_405_METHOD_NOT_ALLOWED,
            f"{operation} is a command and can only be sent with POST",
            "METHOD_NOT_ALLOWED",
        )
    return _run(operation, parsed)
