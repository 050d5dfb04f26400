from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Protocol

from underwriting.core.db import get_conn
from underwriting.core.settings import Settings, get_settings
from underwriting.domain.mortgage.records import LoanRecord, NewLoanRecord

logger = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS loan_records (
    id SERIAL PRIMARY KEY,
    borrower_name VARCHAR(100) NOT NULL,
    monthly_income NUMERIC NOT NULL,
    monthly_debts NUMERIC NOT NULL,
    loan_amount NUMERIC NOT NULL,
    property_value NUMERIC NOT NULL,
    credit_score INT NOT NULL,
    occupancy VARCHAR(50) NOT NULL,
    decision VARCHAR(10) NOT NULL,
    dti NUMERIC NOT NULL,
    ltv NUMERIC NOT NULL,
    reason TEXT,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""

_COLUMNS = (
    "id",
    "borrower_name",
    "monthly_income",
    "monthly_debts",
    "loan_amount",
    "property_value",
    "credit_score",
    "occupancy",
    "decision",
    "dti",
    "ltv",
    "reason",
    "created_at",
)


class LoanRecordStore(Protocol):
    def ensure_schema(self) -> None: ...

    def append(self, record: NewLoanRecord) -> LoanRecord: ...

    def list_all(self) -> list[LoanRecord]: ...


def _record_from_row(row: tuple) -> LoanRecord:
    values = dict(zip(_COLUMNS, row))
    values["name"] = values.pop("borrower_name")
    values["reason"] = values["reason"] or ""
    return LoanRecord.model_validate(values)


@dataclass
class PostgresLoanRecordStore:
    settings: Settings | None = None

    def ensure_schema(self) -> None:
        with get_conn(self.settings) as conn:
            with conn.cursor() as cur:
                cur.execute(DDL)

    def append(self, record: NewLoanRecord) -> LoanRecord:
        with get_conn(self.settings) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO loan_records (
                        borrower_name,
                        monthly_income,
                        monthly_debts,
                        loan_amount,
                        property_value,
                        credit_score,
                        occupancy,
                        decision,
                        dti,
                        ltv,
                        reason
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id, created_at
                    """,
                    (
                        record.name,
                        record.monthly_income,
                        record.monthly_debts,
                        record.loan_amount,
                        record.property_value,
                        record.credit_score,
                        record.occupancy,
                        record.decision,
                        record.dti,
                        record.ltv,
                        record.reason,
                    ),
                )
                row = cur.fetchone()

        if row is None:
            raise RuntimeError("INSERT into loan_records returned no row")
        return LoanRecord(**record.model_dump(), id=row[0], created_at=row[1])

    def list_all(self) -> list[LoanRecord]:
        with get_conn(self.settings) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    SELECT {", ".join(_COLUMNS)}
                    FROM loan_records
                    ORDER BY created_at DESC, id DESC
                    """
                )
                rows = cur.fetchall()

        return [_record_from_row(row) for row in rows]


@dataclass
class JsonlLoanRecordStore:
    path: Path
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def ensure_schema(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)

    def _read_records(self) -> list[LoanRecord]:
        if not self.path.is_file():
            return []

        records: list[LoanRecord] = []
        for line_number, line in enumerate(
            self.path.read_text(encoding="utf-8").splitlines(), start=1
        ):
            if not line.strip():
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(
                    f"Invalid loan record JSON at {self.path}:{line_number}"
                ) from exc
            records.append(LoanRecord.model_validate(payload))
        return records

    def append(self, record: NewLoanRecord) -> LoanRecord:
        with self._lock:
            existing = self._read_records()
            next_id = max((item.id for item in existing), default=0) + 1
            stored = LoanRecord(
                **record.model_dump(),
                id=next_id,
                created_at=datetime.now(timezone.utc),
            )
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as records_file:
                records_file.write(
                    json.dumps(stored.model_dump(mode="json"), separators=(",", ":"))
                    + "\n"
                )
        return stored

    def list_all(self) -> list[LoanRecord]:
        with self._lock:
            records = self._read_records()
        return sorted(
            records, key=lambda item: (item.created_at, item.id), reverse=True
        )


_record_store: LoanRecordStore | None = None


def get_record_store() -> LoanRecordStore:
    global _record_store
    if _record_store is not None:
        return _record_store

    settings = get_settings()
    if settings.record_store == "jsonl":
        _record_store = JsonlLoanRecordStore(path=Path(settings.records_jsonl_path))
    else:
        _record_store = PostgresLoanRecordStore(settings=settings)

    logger.info(
        "record store selected",
        extra={"event": "record_store_selected", "record_store": settings.record_store},
    )
    return _record_store


def clear_record_store_cache() -> None:
    global _record_store
    _record_store = None
