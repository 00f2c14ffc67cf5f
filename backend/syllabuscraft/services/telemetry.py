"""One telemetry line per API call.

An instrumented route emits a single ``api_call`` event when it finishes,
carrying latency, outcome, HTTP status and whatever the handler attached
with ``record()`` (upload kind, unit and topic counts).
"""
import time
import json
import logging
from contextvars import ContextVar
from typing import Optional
from functools import wraps

logger = logging.getLogger("syllabuscraft.telemetry")

# Fields attached by the handler currently running under @instrument
_call_fields: ContextVar[Optional[dict]] = ContextVar("syllabuscraft_call_fields", default=None)


def emit_event(event: str, *, route: str, version: str, file_kind: Optional[str] = None,
               units: Optional[int] = None, topics: Optional[int] = None,
               status_code: Optional[int] = None, error_type: Optional[str] = None,
               latency_ms: Optional[int] = None, ok: Optional[bool] = None) -> dict:
    payload = {
        "event": event,
        "route": route,
        "version": version,
        "file_kind": file_kind,
        "units": units,
        "topics": topics,
        "status_code": status_code,
        "error_type": error_type,
        "latency_ms": latency_ms,
        "ok": ok,
        "ts": time.time(),
    }
    # single-line JSON so log shippers can parse it
    logger.info("telemetry=%s", json.dumps(payload, separators=(",", ":")))
    return payload


def record(**fields) -> None:
    """Attach fields to the api_call event of the running instrumented route.

    No-op outside @instrument (CLI, tests calling services directly).
    """
    current = _call_fields.get()
    if current is not None:
        current.update(fields)


def instrument(route: str, version: str):
    def deco(fn):
        @wraps(fn)
        async def wrapped(*args, **kwargs):
            t0 = time.time()
            fields: dict = {}
            token = _call_fields.set(fields)
            ok = True
            err = None
            status = 200
            try:
                return await fn(*args, **kwargs)
            except Exception as e:
                ok = False
                err = e.__class__.__name__
                # HTTPException carries the status the client sees
                status = getattr(e, "status_code", 500)
                raise
            finally:
                _call_fields.reset(token)
                dt = int((time.time() - t0) * 1000)
                emit_event("api_call", route=route, version=version, latency_ms=dt, ok=ok,
                           status_code=status, error_type=err, **fields)
        return wrapped
    return deco
