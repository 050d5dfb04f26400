import pytest

from underwriting.core.metrics import clear_metrics
from underwriting.core.settings import clear_settings_cache
from underwriting.repo.loan_records_repo import clear_record_store_cache


@pytest.fixture(autouse=True)
def default_safe_test_env(monkeypatch, tmp_path):
    clear_settings_cache()
    clear_record_store_cache()
    clear_metrics()
    monkeypatch.setenv("APP_ENV", "local")
    monkeypatch.setenv("API_KEY", "test-key")
    monkeypatch.setenv("RECORD_STORE", "jsonl")
    monkeypatch.setenv("RECORDS_JSONL_PATH", str(tmp_path / "loan_records.jsonl"))
    monkeypatch.delenv("STRICT_OCCUPANCY", raising=False)

    yield

    clear_settings_cache()
    clear_record_store_cache()
