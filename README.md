# codejudge

A small HTTP service for practising coding problems. It stores problems and
their test cases in an SQLite database, shows them over a JSON API, and judges
C++ submissions by compiling and running them inside Docker containers.

## Requirements

- Python 3.10 or later
- Docker on the `PATH`, with the `gcc:latest` image available. Each submission
  is compiled with `g++ -std=c++17`. Each test case then runs under
  `timeout 2`, with `--memory=128m` and `--cpus=0.5`.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
codejudge --db problems.db
```

Options:

- `--db PATH`: the SQLite database file. Without it, a `.env` file in the
  current directory is loaded (it must exist, otherwise start-up fails) and the
  database path is taken from `DB_PATH`, falling back to `codejudge.db`.
- `--host HOST`: address to listen on, default `0.0.0.0`.
- `--port PORT`: port to listen on, default `8080`.

On start-up the tables are created if needed. If the database holds no problems
yet, three sample problems are added: "Sum of Two Numbers", "Reverse String"
and "Check Prime Number". The Flask application is then served with
`app.run`. Progress is logged at INFO level.

## HTTP API

Every response carries permissive CORS headers
(`Access-Control-Allow-Origin: *`). `OPTIONS` requests are answered with
`200 OK` and an empty body. Errors are plain-text bodies.

### `GET /problems`

Lists all problems in id order. Each entry has `id`, `title`, `description`
and `test_cases`, which is the number of test cases; expected outputs are not
shown. When there are no problems the body is `null`.

### `GET /problems/<id>`

Returns one problem with `id`, `title`, `description`, `func_body` (the
function stub to fill in), `hader_file` (the code placed before the
submission), `main_func` (the code placed after it), and `samples`: the first
two test cases, each given as `input` and `output`.

Returns `400` if the id is not an integer and `404` if there is no such problem.

### `POST /submit/<id>`

The request body is JSON:

```json
{"code": "int sum(int num1, int num2) { return num1 + num2; }"}
```

The submission is placed between the problem's header code and its `main`
function, compiled, and run against every test case. The program's output is
compared with the expected output after leading and trailing whitespace is
removed from both. The response:

```json
{"success": false, "passed": 3, "total": 4, "failed_cases": [2]}
```

`failed_cases` lists the 1-based numbers of the failed test cases, or is
`null` when none failed. A test case fails on a wrong answer, a non-zero exit
(including a runtime error or the timeout), or missing output.

Returns `400` for a bad id, a body that is not a JSON object, a `code` that is
not a string, or an empty or missing `code`; `404` for an unknown problem; and
`500` (`Error while judging: ...`) if the submission fails to compile or the
judge could not set up its files or start Docker.

## Using it as a library

```python
from codejudge.app import seed_problems
from codejudge.db import Database
from codejudge.handlers import create_app

with Database("problems.db") as database:
    seed_problems(database)
    app = create_app(database)
    app.run(port=8080)
```

- `codejudge.models`: the `Problem` and `TestCase` dataclasses.
  `Problem.summary()` and `Problem.detail()` give the listing and single-problem
  views used by the API.
- `codejudge.db`: `Database(path=":memory:")` with `migrate`, `count_problems`,
  `add_problem` (returns the problem with ids assigned), `list_problems`,
  `get_problem` (raises `LookupError` if absent), `get_test_cases` and `close`;
  it is also a context manager. `connect(path=None)` and `load_env(path=None)`
  handle the `.env` lookup described above.
- `codejudge.judge`: `judge_code(problem, code)` judges a submission against
  the problem's test cases and returns a `JudgeResult` with `passed`, `total`,
  `failed_cases` and `success()`. Compilation and setup failures raise
  `JudgeError`. `build_source(problem, code)` and `outputs_match(actual,
  expected)` are the joining and comparison steps on their own.
- `codejudge.app`: `sample_problems()`, `seed_problems(database)` and
  `main(argv=None)`, the entry point of the `codejudge` command.

## What it does not do

There is no HTTP endpoint for adding or editing problems and no user accounts
or authentication; problems are added through `Database.add_problem` or the
built-in samples. Only C++ submissions are judged, and only through Docker.