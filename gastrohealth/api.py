# -*- coding: utf-8 -*-
"""
GastroHealth API

Symptom logging, profile storage and Gemini-backed meal plans, food checks,
trigger analysis and recipe suggestions for people with gastric conditions.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .assistant.api import router as assistant_router
from .config import settings
from .recipes.api import router as recipes_router
from .reports.api import router as reports_router
from .store import read_db
from .users.api import router as users_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="GastroHealth AI",
    description="Symptom tracking and AI diet guidance for reflux and ulcer patients",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_store() -> None:
    read_db(settings.db_path)


@app.middleware("http")
async def _limit_body_size(request: Request, call_next):
    max_bytes = int(settings.max_body_mb) * 1024 * 1024
    length = request.headers.get("content-length")
    if length and length.isdigit() and int(length) > max_bytes:
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large: {length} bytes > {max_bytes}"},
        )
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def _validation_error_as_400(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg") or "Invalid request"
    detail = f"{loc}: {message}" if loc else message
    logger.info("rejected %s %s: %s", request.method, request.url.path, detail)
    return JSONResponse(status_code=400, content={"detail": detail})


app.include_router(users_router)
app.include_router(assistant_router)
app.include_router(recipes_router)
app.include_router(reports_router)


@app.get("/api/health")
def health() -> dict:
    return {"ok": True}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("gastrohealth.api:app", host=settings.host, port=settings.port, reload=False)
