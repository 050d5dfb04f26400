from __future__ import annotations

from fastapi import APIRouter, Response

from underwriting.core.metrics import render_metrics_text
from underwriting.core.settings import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/version")
def version() -> dict[str, str]:
    settings = get_settings()
    return {
        "app_name": settings.app_name,
        "app_env": settings.app_env,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
        "build_time": settings.build_time,
    }


@router.get("/metrics")
def metrics() -> Response:
    return Response(
        content=render_metrics_text(),
        media_type="text/plain; version=0.0.4",
    )
