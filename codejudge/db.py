"""SQLite storage for problems and their test cases."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from .models import Problem, TestCase

_SCHEMA = """
CREATE TABLE IF NOT EXISTS problems (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT, description TEXT, hader_file TEXT, func_body TEXT, main_func TEXT
);
CREATE TABLE IF NOT EXISTS test_cases (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    input TEXT, expected_output TEXT,
    problem_id INTEGER NOT NULL REFERENCES problems(id)
);
"""


def load_env(path=None) -> None:
    """Load a dotenv file, which must exist."""
    env_path = Path(path or ".env")
    if not env_path.is_file():
        raise FileNotFoundError(f"Error loading {env_path} file")
    load_dotenv(env_path)


def connect(path=None) -> Database:
    """Open the database; without a path, take DB_PATH from .env."""
    if path is None:
        load_env()
        path = os.environ.get("DB_PATH") or "codejudge.db"
    return Database(path)


def _case(row: sqlite3.Row) -> TestCase:
    return TestCase(row["input"], row["expected_output"], row["problem_id"], row["id"])


def _problem(row: sqlite3.Row, cases: list[TestCase]) -> Problem:
    return Problem(
        row["title"],
        row["description"],
        row["hader_file"],
        row["func_body"],
        row["main_func"],
        cases,
        row["id"],
    )


class Database:
    """A connection to the problem store."""

    def __init__(self, path=":memory:") -> None:
        self.path = str(path)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self.migrate()

    def migrate(self) -> None:
        self._conn.executescript(_SCHEMA)

    def count_problems(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM problems").fetchone()[0]

    def add_problem(self, problem: Problem) -> Problem:
        """Store a problem with its test cases; return it with ids assigned."""
        with self._conn:
            problem_id = self._conn.execute(
                "INSERT INTO problems (title, description, hader_file, func_body,"
                " main_func) VALUES (?, ?, ?, ?, ?)",
                (
                    problem.title,
                    problem.description,
                    problem.header_file,
                    problem.func_body,
                    problem.main_func,
                ),
            ).lastrowid
            cases = [
                replace(
                    case,
                    problem_id=problem_id,
                    id=self._conn.execute(
                        "INSERT INTO test_cases (input, expected_output, problem_id)"
                        " VALUES (?, ?, ?)",
                        (case.input, case.expected_output, problem_id),
                    ).lastrowid,
                )
                for case in problem.test_cases
            ]
        return replace(problem, id=problem_id, test_cases=cases)

    def list_problems(self) -> list[Problem]:
        rows = self._conn.execute("SELECT * FROM problems ORDER BY id").fetchall()
        return [_problem(row, self.get_test_cases(row["id"])) for row in rows]

    def get_problem(self, problem_id: int) -> Problem:
        """The problem with this id; LookupError if absent."""
        row = self._conn.execute(
            "SELECT * FROM problems WHERE id = ?", (problem_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"problem {problem_id} not found")
        return _problem(row, self.get_test_cases(problem_id))

    def get_test_cases(self, problem_id: int) -> list[TestCase]:
        rows = self._conn.execute(
            "SELECT * FROM test_cases WHERE problem_id = ? ORDER BY id", (problem_id,)
        )
        return [_case(row) for row in rows]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()