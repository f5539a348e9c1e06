"""SQL DDL for the audit log tables."""

from __future__ import annotations

CREATE_RUNS = """\
CREATE TABLE IF NOT EXISTS runs (
    id TEXT PRIMARY KEY,
    zone_id TEXT NOT NULL,
    query TEXT NOT NULL DEFAULT '',
    explanation TEXT NOT NULL DEFAULT '',
    succeeded INTEGER NOT NULL DEFAULT 0,
    failed INTEGER NOT NULL DEFAULT 0,
    skipped INTEGER NOT NULL DEFAULT 0,
    total INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
)"""

CREATE_OUTCOMES = """\
CREATE TABLE IF NOT EXISTS outcomes (
    run_id TEXT NOT NULL REFERENCES runs(id),
    position INTEGER NOT NULL,
    kind TEXT NOT NULL,
    description TEXT NOT NULL,
    risk TEXT NOT NULL,
    status TEXT NOT NULL,
    detail TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (run_id, position)
)"""

TABLES: list[str] = [CREATE_RUNS, CREATE_OUTCOMES]
