from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from underwriting.core.deps_health import check_jsonl_path, check_postgres
from underwriting.core.settings import VALID_APP_ENVS, get_settings

router = APIRouter()


@router.get("/ready")
def ready(request: Request) -> JSONResponse:
    settings = get_settings()
    api_key_required = settings.app_env != "local"

    if settings.record_store == "jsonl":
        store_ok, store_detail = check_jsonl_path(settings.records_jsonl_path)
    else:
        store_ok, store_detail = check_postgres(settings.postgres_dsn)

    startup_status = getattr(request.app.state, "startup_store_status", {})
    schema_ready = bool(startup_status.get("ready", False))

    checks = {
        "env_loaded": True,
        "api_key_set": bool(settings.api_key.strip()) or not api_key_required,
        "app_env_valid": settings.app_env in VALID_APP_ENVS,
        "record_store_ok": store_ok,
        "schema_ready": schema_ready,
    }

    all_checks_passed = all(checks.values())
    payload: dict[str, object] = {
        "status": "ready" if all_checks_passed else "not_ready",
        "checks": checks,
    }

    if not all_checks_passed:
        if not checks["record_store_ok"]:
            payload["reason"] = (
                f"record_store_not_ready: {store_detail or 'unknown'}"
            )
        elif not checks["schema_ready"]:
            detail = startup_status.get("detail")
            payload["reason"] = (
                f"schema_not_ready: {detail}" if detail else "schema_not_ready"
            )
        elif not checks["api_key_set"]:
            payload["reason"] = "api_key_not_set"
        else:
            payload["reason"] = "readiness_checks_failed"

    return JSONResponse(
        status_code=(
            status.HTTP_200_OK
            if all_checks_passed
            else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content=payload,
    )
