"""Command that seeds the problem store and serves the judge over HTTP."""

from __future__ import annotations

import argparse
import logging

from .db import Database, connect
from .handlers import create_app
from .models import Problem, TestCase

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

_HEADER = "#include <bits/stdc++.h> \n\t\t\t              using namespace std;"


def sample_problems() -> list[Problem]:
    """The starter problems stored in an empty database."""
    return [
        Problem(
            title="Sum of Two Numbers",
            description=(
                "Write a program that reads two integers from standard input and "
                "outputs their sum.\n\n**Input**: Two integers a and b (separated "
                "by a space)\n**Output**: The sum of a and b"
            ),
            header_file=_HEADER,
            func_body="int sum(int num1, int num2){ \n\n}",
            main_func=(
                "int main() {\n"
                "                            int a, b;\n"
                "                            cin >> a >> b;\n"
                "                            cout << sum(a, b);\n"
                "                            return 0;\n"
                "                        }"
            ),
            test_cases=[
                TestCase(input="1 2", expected_output="3"),
                TestCase(input="10 5", expected_output="15"),
                TestCase(input="-3 3", expected_output="0"),
                TestCase(input="100 -50", expected_output="50"),
            ],
        ),
        Problem(
            title="Reverse String",
            description=(
                "Write a program that reads a string from standard input and "
                "outputs the string in reverse order.\n\n**Input**: A string (up "
                "to 100 characters)\n**Output**: The string in reverse order"
            ),
            header_file=_HEADER,
            func_body=(
                "string reverseString(string s) {\n"
                "\t\t\t            \n"
                "\t\t\t             }"
            ),
            main_func=(
                "int main() {\n"
                "                               string s;\n"
                "                               cin >> s;\n"
                "                               cout << reverseString(s);\n"
                "                               return 0;\n"
                "                           }"
            ),
            test_cases=[
                TestCase(input="hello", expected_output="olleh"),
                TestCase(input="algorithm", expected_output="mhtirogla"),
                TestCase(input="a", expected_output="a"),
                TestCase(input="12345", expected_output="54321"),
            ],
        ),
        Problem(
            title="Check Prime Number",
            description=(
                "Write a program that determines if a given number is a prime "
                "number.\n\n**Input**: An integer n\n**Output**: 'Prime' if n is "
                "a prime number, 'Not Prime' otherwise"
            ),
            header_file=_HEADER,
            func_body="int isPrime(int n) {\n\t\t\t\n\t\t\t           }",
            main_func=(
                "int main() {\n"
                "                             int n;\n"
                "                             cin >> n;\n"
                "                             cout << isPrime(n);\n"
                "                             return 0;\n"
                "                         }"
            ),
            test_cases=[
                TestCase(input="7", expected_output="Prime"),
                TestCase(input="15", expected_output="Not Prime"),
                TestCase(input="2", expected_output="Prime"),
                TestCase(input="1", expected_output="Not Prime"),
                TestCase(input="97", expected_output="Prime"),
            ],
        ),
    ]


def seed_problems(database: Database) -> list[Problem]:
    """Store the sample problems if the database has none; return what was stored."""
    if database.count_problems() != 0:
        logger.info("Database already contains problems. Skipping sample insertion.")
        return []
    stored = []
    for number, problem in enumerate(sample_problems(), start=1):
        try:
            stored.append(database.add_problem(problem))
        except Exception as exc:  # noqa: BLE001 - one bad insert must not stop the rest
            logger.error("Failed to insert problem %d: %s", number, exc)
    logger.info("Sample coding problems inserted successfully.")
    return stored


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="codejudge", description="Serve coding problems and judge submissions."
    )
    parser.add_argument(
        "--db", help="database file; without it DB_PATH is read from .env"
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help="port to listen on"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Seed the database and run the HTTP server."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    database = connect(args.db)
    try:
        seed_problems(database)
        app = create_app(database)
        logger.info("Server is listening on http://localhost:%d", args.port)
        app.run(host=args.host, port=args.port)
    finally:
        database.close()


if __name__ == "__main__":
    main()