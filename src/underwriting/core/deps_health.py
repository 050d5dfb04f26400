from __future__ import annotations

from pathlib import Path


def check_postgres(postgres_dsn: str) -> tuple[bool, str | None]:
    try:
        import psycopg
    except ImportError:
        return False, "psycopg_not_installed"

    try:
        with psycopg.connect(postgres_dsn, connect_timeout=2) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 FROM loan_records LIMIT 1")
                cur.fetchone()
    except Exception as exc:
        return False, str(exc).strip() or "postgres_connection_failed"

    return True, None


def check_jsonl_path(records_path: str) -> tuple[bool, str | None]:
    path = Path(records_path)
    if path.exists() and not path.is_file():
        return False, f"not_a_file: {path}"
    if not path.parent.is_dir():
        return False, f"missing_directory: {path.parent}"
    return True, None
