"""
FastAPI application for the sandbox execution service.

This module is the caller‑facing layer in front of the executors: it
validates the requested language against the closed ``Language`` set,
dispatches to the matching executor and returns its output.  Execution
is blocking, so the route is a plain function and FastAPI runs
concurrent requests on its worker threadpool.
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI, HTTPException

from ..config import Config
from ..executor import ExecutionRequest, ExecutorRegistry
from ..models import ExecuteRequest, ExecuteResponse, LanguagesResponse


logger = logging.getLogger("sandboxexec")


def _install_log_handler(level: str) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[sandboxexec] %(levelname)s - %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


config = Config.from_env()
_install_log_handler(config.log_level)

logger.info(
    "Loaded config: cpu=%ss, memory=%sMB, deadline=%ss, workspace=%s, network_disabled=%s",
    config.max_cpu_secs,
    config.max_memory_mb,
    config.max_execution_seconds,
    config.workspace_dir,
    config.disable_network,
)

config.workspace_dir.mkdir(parents=True, exist_ok=True)

registry = ExecutorRegistry(config)


app = FastAPI(title="Sandbox Execution Service", version="0.1.0")


@app.middleware("http")
async def log_requests(request, call_next):
    """Log every request and the status it was answered with."""
    route = f"{request.method} {request.url.path}"
    peer = request.client.host if request.client else "unknown"
    logger.info("%s from %s", route, peer)
    response = await call_next(request)
    logger.info("%s -> %s", route, response.status_code)
    return response


@app.get("/health")
async def health() -> Dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}


@app.get("/languages", response_model=LanguagesResponse)
async def languages() -> LanguagesResponse:
    """List the supported language identifiers."""
    return LanguagesResponse(languages=registry.languages)


@app.post("/exec", response_model=ExecuteResponse)
def exec_code(req: ExecuteRequest) -> ExecuteResponse:
    """Run the submitted code and return its output."""
    logger.info("[/exec] Received %s submission (%d chars)", req.language.value, len(req.code))

    try:
        executor = registry.resolve(req.language)
        result = executor.execute(ExecutionRequest(code=req.code, stdin=req.stdin))
    except Exception as exc:
        logger.exception("[/exec] Unhandled error during execution: %s", exc)
        raise HTTPException(status_code=500, detail="Execution error")

    logger.info(
        "[/exec] Execution finished: exit_code=%s, duration_ms=%s",
        result.exit_code,
        result.duration_ms,
    )
    return ExecuteResponse(
        stdout=result.stdout,
        stderr=result.stderr,
        exit_code=result.exit_code,
        duration_ms=result.duration_ms,
    )
