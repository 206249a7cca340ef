# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""SiteDock API Server.

Main entry point for the SiteDock control plane. Initializes the FastAPI
application, reconciles site state at startup and runs the deployment
worker for the lifetime of the process.

Usage:
    uvicorn main:app --host 127.0.0.1 --port $PORT
"""

import logging
import os
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.errors import build_error_response
from api.router import api_router
from container import container

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

logger.info("Using container: %s", container.__class__.__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=unused-argument
    """Manage application lifecycle events.

    On startup, live container state is reconciled into the site records,
    jobs left running by a previous process are failed, and the deployment
    worker and certificate sweeper are started. Both are stopped on shutdown.
    """
    reconciled = await container.reconcile_status_use_case().execute()
    logger.info("Reconciled %d site(s) with live container state", reconciled)

    worker = container.deployment_worker()
    recovered = worker.recover_interrupted()
    if recovered:
        logger.warning("Failed %d deployment(s) interrupted by restart", recovered)
    await worker.start()

    sweeper = container.certificate_sweeper()
    await sweeper.start()
    logger.info("Application startup complete")

    yield

    await sweeper.stop()
    await worker.stop()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="SiteDock API",
    description="Control plane for hosting uploaded web applications in isolated containers",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.container = container

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get(
    "/health",
    summary="Health check",
    description="Returns the health status of the API server and worker.",
    status_code=status.HTTP_200_OK,
)
async def health_check() -> dict:
    """Health check endpoint."""
    worker = container.deployment_worker()
    return {
        "status": "healthy",
        "worker_running": worker.is_running,
        "current_job_id": worker.current_job_id,
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):  # pylint: disable=unused-argument
    """Report malformed request bodies in the standard error shape."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    body = build_error_response("VALIDATION_ERROR", message, str(uuid.uuid4()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": body.model_dump()},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):  # pylint: disable=unused-argument
    """Global exception handler for unhandled exceptions."""
    logger.exception("Unhandled exception occurred")
    body = build_error_response(
        "INTERNAL_ERROR", "An internal server error occurred", str(uuid.uuid4())
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": body.model_dump()},
    )


def get_server_config():
    """Get server host and port configuration with proper validation."""
    host = os.getenv("HOST", "127.0.0.1")

    if not host or host.strip() == "":
        raise ValueError("HOST environment variable cannot be empty")

    port_env = os.getenv("PORT", "8000")
    try:
        port = int(port_env)
    except ValueError as exc:
        raise ValueError(f"PORT environment variable must be a valid integer, got: {port_env}") from exc
    if not 1 <= port <= 65535:
        raise ValueError(f"Port {port} is not in valid range 1-65535")

    return host.strip(), port


if __name__ == "__main__":
    import uvicorn

    try:
        server_host, server_port = get_server_config()
        logger.info("Starting SiteDock API server on %s:%d", server_host, server_port)
        uvicorn.run("main:app", host=server_host, port=server_port)
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        raise
