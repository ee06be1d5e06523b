"""HTTP routes for listing problems and judging submissions."""

from __future__ import annotations

import json
import logging
import re
import sqlite3
from typing import Any

from flask import Flask, Response, request

from .db import Database
from .judge import JudgeError, judge_code

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


class _BadRequest(ValueError):
    """The request could not be understood."""


def _error(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def _parse_id(raw: str) -> int:
    if not _ID_PATTERN.fullmatch(raw):
        raise _BadRequest("Invalid problem ID")
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise _BadRequest("Invalid problem ID")
    return value


def _parse_submission(body: bytes) -> str:
    """Extract the submitted code from a JSON request body."""
    try:
        text = body.decode("utf-8")
        value, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except (UnicodeDecodeError, ValueError) as exc:
        raise _BadRequest("Invalid request body") from exc
    if value is None:
        return ""
    if not isinstance(value, dict):
        raise _BadRequest("Invalid request body")
    if "code" in value:
        code = value["code"]
    else:
        code = next(
            (item for key, item in value.items() if key.lower() == "code"), None
        )
    if code is None:
        return ""
    if not isinstance(code, str):
        raise _BadRequest("Invalid request body")
    return code


def create_app(database: Database) -> Flask:
    """Build the web application serving problems from the given database."""
    app = Flask(__name__)

    def _json(value: Any) -> Response:
        return app.json.response(value)

    @app.before_request
    def _preflight() -> Response | None:
        if request.method == "OPTIONS":
            return Response(status=200)
        return None

    @app.after_request
    def _cors(response: Response) -> Response:
        response.headers.update(CORS_HEADERS)
        return response

    @app.get("/problems")
    def list_problems() -> Response:
        try:
            problems = database.list_problems()
        except sqlite3.Error:
            return _error("Failed to fetch problems", 500)
        return _json([problem.summary() for problem in problems] or None)

    @app.get("/problems/<problem_id>")
    def show_problem(problem_id: str) -> Response:
        try:
            number = _parse_id(problem_id)
        except _BadRequest as exc:
            return _error(str(exc), 400)
        try:
            problem = database.get_problem(number)
        except LookupError:
            return _error("Problem not found", 404)
        except sqlite3.Error:
            return _error("Failed to fetch test cases", 500)
        return _json(problem.detail())

    @app.post("/submit/<problem_id>")
    def submit(problem_id: str) -> Response:
        try:
            number = _parse_id(problem_id)
            code = _parse_submission(request.get_data())
        except _BadRequest as exc:
            return _error(str(exc), 400)
        if code == "":
            return _error("Code cannot be empty", 400)
        try:
            problem = database.get_problem(number)
        except (LookupError, sqlite3.Error):
            return _error("Problem not found", 404)

        logger.info("Judging submission for problem #%d", number)
        try:
            result = judge_code(problem, code)
        except JudgeError as exc:
            return _error(f"Error while judging: {exc}", 500)

        return _json(
            {
                "success": result.success(),
                "passed": result.passed,
                "total": result.total,
                "failed_cases": result.failed_cases or None,
            }
        )

    return app