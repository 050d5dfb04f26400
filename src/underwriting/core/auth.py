from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from underwriting.core.settings import get_settings

api_key_header = APIKeyHeader(
    name="X-API-Key",
    auto_error=False,
    scheme_name="ApiKeyAuth",
)


def require_api_key(provided_api_key: str | None = Security(api_key_header)) -> None:
    settings = get_settings()

    # A local instance without a configured key serves history openly.
    if settings.app_env == "local" and not settings.api_key.strip():
        return

    if not provided_api_key or provided_api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
