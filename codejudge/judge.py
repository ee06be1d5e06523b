"""Compile and run C++ submissions inside a container and grade them."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from .models import Problem

logger = logging.getLogger(__name__)

IMAGE = "gcc:latest"
SOURCE_NAME = "submission.cpp"
BINARY_NAME = "submission.out"
INPUT_NAME = "input.txt"
OUTPUT_NAME = "output.txt"
EXPECTED_NAME = "expected.txt"
RUN_TIMEOUT_SECONDS = 2
MEMORY_LIMIT = "128m"
CPU_LIMIT = "0.5"


class JudgeError(Exception):
    """The submission could not be judged (setup or compilation failed)."""


@dataclass
class JudgeResult:
    passed: int
    total: int
    failed_cases: list[int] = field(default_factory=list)

    def success(self) -> bool:
        return self.passed == self.total


def build_source(problem: Problem, code: str) -> str:
    """Join the problem's header, the submitted code and its main function."""
    return f"{problem.header_file}\n{code}\n{problem.main_func}"


def outputs_match(actual: str, expected: str) -> bool:
    """Compare program output ignoring leading and trailing whitespace."""
    return actual.strip() == expected.strip()


def _docker(workdir: Path, *args: str) -> list[str]:
    return ["docker", "run", "--rm", "-v", f"{workdir}:/code", "-w", "/code", *args]


def _compile(workdir: Path) -> None:
    command = _docker(
        workdir, IMAGE, "g++", "-o", BINARY_NAME, SOURCE_NAME, "-std=c++17"
    )
    try:
        completed = subprocess.run(
            command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT
        )
    except OSError as exc:
        raise JudgeError(f"compilation failed: {exc}") from exc
    if completed.returncode != 0:
        output = (completed.stdout or b"").decode("utf-8", errors="replace")
        raise JudgeError(f"compilation failed: {output}")


def _run_case(workdir: Path) -> str | None:
    """Run the compiled binary on input.txt; None if the run failed."""
    command = _docker(
        workdir,
        f"--memory={MEMORY_LIMIT}",
        f"--cpus={CPU_LIMIT}",
        IMAGE,
        "timeout",
        str(RUN_TIMEOUT_SECONDS),
        "sh",
        "-c",
        f"./{BINARY_NAME} < {INPUT_NAME} > {OUTPUT_NAME}",
    )
    try:
        completed = subprocess.run(
            command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
        )
    except OSError as exc:
        logger.info("execution error: %s", exc)
        return None
    if completed.returncode != 0:
        logger.info("execution exited with status %d", completed.returncode)
        return None
    try:
        return (workdir / OUTPUT_NAME).read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        logger.info("failed to read output: %s", exc)
        return None


def judge_code(problem: Problem, code: str) -> JudgeResult:
    """Compile the submission for a problem and run it on every test case."""
    with tempfile.TemporaryDirectory(prefix="submission_") as tmp:
        workdir = Path(tmp)
        try:
            (workdir / SOURCE_NAME).write_bytes(
                build_source(problem, code).encode("utf-8")
            )
        except OSError as exc:
            raise JudgeError(f"failed to write the source file: {exc}") from exc

        logger.info("Compiling code...")
        _compile(workdir)

        cases = problem.test_cases
        passed = 0
        failed: list[int] = []
        logger.info("Running %d test cases...", len(cases))
        for number, case in enumerate(cases, start=1):
            try:
                (workdir / INPUT_NAME).write_bytes(case.input.encode("utf-8"))
                (workdir / EXPECTED_NAME).write_bytes(
                    case.expected_output.encode("utf-8")
                )
                (workdir / OUTPUT_NAME).unlink(missing_ok=True)
            except OSError as exc:
                raise JudgeError(f"failed to write test files: {exc}") from exc

            actual = _run_case(workdir)
            if actual is None:
                logger.info("Test case %d: FAILED (execution error)", number)
                failed.append(number)
            elif outputs_match(actual, case.expected_output):
                logger.info("Test case %d: PASSED", number)
                passed += 1
            else:
                logger.info(
                    "Test case %d: FAILED expected %r, actual %r",
                    number,
                    case.expected_output.strip(),
                    actual.strip(),
                )
                failed.append(number)

        return JudgeResult(passed=passed, total=len(cases), failed_cases=failed)