"""Problem and test-case records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TestCase:
    __test__ = False

    input: str
    expected_output: str
    problem_id: int | None = None
    id: int | None = None


@dataclass
class Problem:
    title: str
    description: str
    header_file: str = ""
    func_body: str = ""
    main_func: str = ""
    test_cases: list[TestCase] = field(default_factory=list)
    id: int | None = None

    def summary(self) -> dict[str, Any]:
        """Listing view: the number of test cases, not their contents."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "test_cases": len(self.test_cases),
        }

    def detail(self) -> dict[str, Any]:
        """Single-problem view with scaffolding and the first two cases as samples."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "samples": [
                {"input": case.input, "output": case.expected_output}
                for case in self.test_cases[:2]
            ],
            "func_body": self.func_body,
            "hader_file": self.header_file,
            "main_func": self.main_func,
        }