"""SQLite-backed audit log of executed action plans."""

from __future__ import annotations

import uuid
from pathlib import Path

import aiosqlite

from cfai.memory.migrations import TABLES
from cfai.memory.models import OutcomeRecord, RunRecord
from cfai.models.action import ActionPlan
from cfai.models.report import ExecutionReport


class AuditStore:
    def __init__(self, db_path: Path | str = ":memory:") -> None:
        self.db_path = str(db_path)
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self.db_path)
        for table_sql in TABLES:
            await self._db.execute(table_sql)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    def _get_db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("AuditStore not initialized — call initialize() first")
        return self._db

    async def log_run(
        self,
        zone_id: str,
        query: str,
        plan: ActionPlan,
        report: ExecutionReport,
    ) -> str:
        db = self._get_db()
        record = RunRecord(
            id=uuid.uuid4().hex,
            zone_id=zone_id,
            query=query,
            explanation=plan.explanation or "",
            succeeded=report.succeeded,
            failed=report.failed,
            skipped=report.skipped,
            total=report.total,
        )
        await db.execute(
            "INSERT INTO runs (id, zone_id, query, explanation, succeeded, failed, skipped, total, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                record.id,
                record.zone_id,
                record.query,
                record.explanation,
                record.succeeded,
                record.failed,
                record.skipped,
                record.total,
                record.created_at.isoformat(),
            ),
        )
        await db.executemany(
            "INSERT INTO outcomes (run_id, position, kind, description, risk, status, detail) "
            "VALUES (?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    record.id,
                    o.index,
                    o.kind.value,
                    o.description,
                    o.risk.value,
                    o.status.value,
                    o.detail,
                )
                for o in report.outcomes
            ],
        )
        await db.commit()
        return record.id

    async def get_run(self, run_id: str) -> RunRecord | None:
        db = self._get_db()
        cursor = await db.execute(
            "SELECT id, zone_id, query, explanation, succeeded, failed, skipped, total, created_at "
            "FROM runs WHERE id = ?",
            (run_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return RunRecord(
            id=row[0],
            zone_id=row[1],
            query=row[2],
            explanation=row[3],
            succeeded=row[4],
            failed=row[5],
            skipped=row[6],
            total=row[7],
            created_at=row[8],
        )

    async def get_run_outcomes(self, run_id: str) -> list[OutcomeRecord]:
        db = self._get_db()
        cursor = await db.execute(
            "SELECT run_id, position, kind, description, risk, status, detail "
            "FROM outcomes WHERE run_id = ? ORDER BY position",
            (run_id,),
        )
        rows = await cursor.fetchall()
        return [
            OutcomeRecord(
                run_id=r[0],
                position=r[1],
                kind=r[2],
                description=r[3],
                risk=r[4],
                status=r[5],
                detail=r[6],
            )
            for r in rows
        ]

    async def get_history(self, limit: int = 20) -> list[dict]:
        db = self._get_db()
        cursor = await db.execute(
            "SELECT r.id, r.zone_id, r.query, r.created_at, "
            "       o.position, o.kind, o.description, o.risk, o.status, o.detail "
            "FROM runs r LEFT JOIN outcomes o ON o.run_id = r.id "
            "ORDER BY r.created_at DESC, o.position ASC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
        results: list[dict] = []
        for r in rows:
            results.append(
                {
                    "run_id": r[0],
                    "zone_id": r[1],
                    "query": r[2],
                    "created_at": r[3],
                    "position": r[4],
                    "kind": r[5],
                    "description": r[6],
                    "risk": r[7],
                    "status": r[8],
                    "detail": r[9],
                }
            )
        return results
