import subprocess
from pathlib import Path
from unittest import mock

import pytest

from codejudge.judge import (
    JudgeError,
    JudgeResult,
    build_source,
    judge_code,
    outputs_match,
)
from codejudge.models import Problem, TestCase

HEADER = "#include <bits/stdc++.h>\nusing namespace std;"
MAIN = "int main() { int a, b; cin >> a >> b; cout << sum(a, b); return 0; }"
CODE = "int sum(int num1, int num2){ return num1 + num2; }"


def _sum_problem():
    return Problem(
        title="Sum of Two Numbers",
        description="Add two integers.",
        header_file=HEADER,
        main_func=MAIN,
        test_cases=[
            TestCase("1 2", "3"),
            TestCase("10 5", "15"),
            TestCase("-3 3", "0"),
            TestCase("100 -50", "50"),
        ],
    )


def _fake_docker(solve, compile_rc=0, compile_output=b""):
    seen = {"sources": [], "commands": []}

    def run(command, *args, **kwargs):
        seen["commands"].append(command)
        mount = command[command.index("-v") + 1]
        workdir = Path(mount.rsplit(":/code", 1)[0])
        if "g++" in command:
            seen["sources"].append((workdir / "submission.cpp").read_text())
            return subprocess.CompletedProcess(command, compile_rc, stdout=compile_output)
        result = solve((workdir / "input.txt").read_text())
        if result is None:
            return subprocess.CompletedProcess(command, 124)
        (workdir / "output.txt").write_text(result)
        return subprocess.CompletedProcess(command, 0)

    return run, seen


def _add(text):
    a, b = text.split()
    return f"{int(a) + int(b)}\n"


def test_build_source_joins_parts():
    problem = Problem("t", "d", header_file=HEADER, main_func=MAIN)
    assert build_source(problem, CODE) == HEADER + "\n" + CODE + "\n" + MAIN


def test_outputs_match_ignores_surrounding_whitespace():
    assert outputs_match("  olleh\n", "olleh")
    assert outputs_match("Not Prime\r\n", "\tNot Prime")
    assert not outputs_match("Not  Prime", "Not Prime")


def test_result_success():
    assert JudgeResult(passed=4, total=4).success()
    assert not JudgeResult(passed=3, total=4, failed_cases=[2]).success()


def test_all_cases_pass():
    run, seen = _fake_docker(_add)
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        result = judge_code(_sum_problem(), CODE)
    assert result == JudgeResult(passed=4, total=4, failed_cases=[])
    assert result.success()
    assert seen["sources"] == [HEADER + "\n" + CODE + "\n" + MAIN]


def test_wrong_answers_are_reported_by_number():
    def wrong_on_negative(text):
        return "0" if "-" in text else _add(text)

    run, _ = _fake_docker(wrong_on_negative)
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        result = judge_code(_sum_problem(), CODE)
    # "-3 3" really is 0, so only the last case fails
    assert result.failed_cases == [4]
    assert result.passed == 3
    assert not result.success()


def test_runtime_failure_counts_as_failed():
    def crash_on_first(text):
        return None if text == "1 2" else _add(text)

    run, _ = _fake_docker(crash_on_first)
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        result = judge_code(_sum_problem(), CODE)
    assert result.failed_cases == [1]
    assert result.passed + len(result.failed_cases) == result.total


def test_run_commands_carry_limits():
    run, seen = _fake_docker(_add)
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        judge_code(_sum_problem(), CODE)
    compile_cmd, *run_cmds = seen["commands"]
    assert compile_cmd[:3] == ["docker", "run", "--rm"]
    assert "gcc:latest" in compile_cmd and "-std=c++17" in compile_cmd
    assert len(run_cmds) == len(_sum_problem().test_cases)
    for command in run_cmds:
        assert "--memory=128m" in command
        assert "--cpus=0.5" in command
        assert command[-1] == "./submission.out < input.txt > output.txt"


def test_compile_failure_raises_with_output():
    run, seen = _fake_docker(_add, compile_rc=1, compile_output=b"error: expected ';'")
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        with pytest.raises(JudgeError, match="compilation failed: error: expected ';'"):
            judge_code(_sum_problem(), "int sum(")
    assert len(seen["commands"]) == 1


def test_missing_docker_raises_judge_error():
    with mock.patch(
        "codejudge.judge.subprocess.run", side_effect=FileNotFoundError("docker")
    ):
        with pytest.raises(JudgeError, match="compilation failed"):
            judge_code(_sum_problem(), CODE)


def test_problem_without_cases():
    run, _ = _fake_docker(_add)
    problem = Problem("t", "d", header_file=HEADER, main_func=MAIN)
    with mock.patch("codejudge.judge.subprocess.run", side_effect=run):
        result = judge_code(problem, CODE)
    assert result == JudgeResult(passed=0, total=0, failed_cases=[])
    assert result.success()