from __future__ import annotations

from underwriting.core.logging import configure_logging
from underwriting.core.settings import get_settings
from underwriting.repo.loan_records_repo import PostgresLoanRecordStore


def main() -> None:
    configure_logging()
    PostgresLoanRecordStore(settings=get_settings()).ensure_schema()
    print("db init complete: loan_records table is ready")


if __name__ == "__main__":
    main()
