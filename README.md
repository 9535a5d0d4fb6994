# judgerun

judgerun is a small HTTP service that compiles and runs submitted programs
inside an nsjail sandbox. GNU `time` measures each program's peak memory and
wall-clock time. The service reports the outcome as a structured verdict.

The supported languages are listed in `judgerun.language.Language`:

| Member                  | Wire value | Variant name |
|-------------------------|-----------:|--------------|
| `Language.RUST1_82`     | 1          | `rust1_82`   |
| `Language.GO1_23`       | 2          | `go1_23`     |
| `Language.PYTHON3_13`   | 3          | `python3_13` |

Rust and Go are compiled before they run. Python runs directly.

## Installing

```sh
pip install .
pip install ".[test]"   # with pytest, to run the test suite
```

## Running the server

The server reads two required settings from the environment:

- `COMPILE_TIME_LIMIT_SECONDS`: the wall-clock limit for compilation, in whole seconds.
- `COMPILE_MEMORY_LIMIT_MEGABYTES`: the memory limit for compilation, in megabytes.

```sh
COMPILE_TIME_LIMIT_SECONDS=10 COMPILE_MEMORY_LIMIT_MEGABYTES=1024 judgerun-server
```

The server exits with an error if either setting is missing or is not an
unsigned integer. By default it listens on `0.0.0.0:3000`. Use `--host` and
`--port` to listen somewhere else. It stops on Ctrl+C or SIGTERM.

The server accepts `POST /run` with `Content-Type: application/json`:

```json
{
  "lang": 3,
  "code": "print(input())",
  "ms_time_limit": 2000,
  "memory_limit": "256M",
  "stdin": "hello\n"
}
```

The response holds a `state`. A state with fields is an object keyed by the
name of its variant. `InternalError` has no fields and is a bare string.

| Variant         | Fields                                                       |
|-----------------|--------------------------------------------------------------|
| `Success`       | `stdout`, `max_memory_usage`, `ms_time_elapsed`              |
| `RuntimeError`  | `stderr`, `exit_code`, `max_memory_usage`, `ms_time_elapsed` |
| `Timeout`       | `ms_time_elapsed`                                            |
| `MemoryLimit`   | `max_memory_usage`                                           |
| `CompileError`  | `stderr`                                                     |
| `InternalError` | (none)                                                       |

```json
{"state": {"Success": {"stdout": "hello\n", "max_memory_usage": "9M", "ms_time_elapsed": 20}}}
```

Memory values are strings with a `B`, `K` or `M` suffix, such as `"512K"`.
Times are integer milliseconds.

The server answers with the following statuses:

| Status | When                                                                 |
|--------|----------------------------------------------------------------------|
| 400    | The body is not valid JSON                                           |
| 422    | The body is JSON but not a valid request                             |
| 415    | The content type is not JSON                                         |
| 404    | The path is not `/run`                                               |
| 405    | The path is `/run` but the method is other than POST                 |
| 200    | `InternalError` state: an I/O failure while preparing or running     |

The run's verdict is decided in this order:

1. A failed compile gives `CompileError`.
2. A time above `ms_time_limit` gives `Timeout`.
3. Memory above `memory_limit` gives `MemoryLimit`.
4. A non-zero exit gives `RuntimeError`. A process killed by a signal is reported with exit code 137.
5. Otherwise the verdict is `Success`.

## Generating the image build step

```sh
judgerun-dockerfile                 # writes Dockerfile.build
judgerun-dockerfile path/to/file    # writes to another path
```

This writes a `RUN` step to the file. The step creates `/running` and
`/runner`, and builds each language toolchain with
`nix-build /default.nix -A <variant name>`. The file is left untouched when its
content is already current.

## Using the library

```python
from judgerun.env import RunnerOption
from judgerun.language import Language
from judgerun.memory import Memory
from judgerun.mstime import MsTime
from judgerun.runner import run
from judgerun.web import RunnerRequest

request = RunnerRequest(
    lang=Language.PYTHON3_13,
    code="print(sum(map(int, input().split())))",
    ms_time_limit=MsTime.from_seconds(2),
    memory_limit=Memory.parse("256M"),
    stdin="1 2\n",
)
response = run(request, RunnerOption.load())
print(response.to_json())
```

`run` raises `judgerun.errors.RunnerError` when an I/O step fails.
`judgerun.server.handle_run` turns that failure into an `InternalError`
response.

Other useful pieces:

- `Memory.parse` and `MsTime.parse_mm_ss_ms` read limits and timings.
  - `Memory.parse` raises `InvalidSuffixError`, `InvalidNumberError` or `ShortLengthError` on bad input.
- `judgerun.state.state_from_json` reads a state back from JSON.
- `RunnerRequest.from_json` and `RunnerResponse.from_json` read request and response bodies.
- `judgerun.nsjail.NsJailBuilder` builds the sandboxed command line.
- `judgerun.gtime.read_usage` reads the memory and time that GNU `time` recorded.
- `judgerun.lang_runner.runner_for` gives each language's source file, compile command and run command.

## Limitations

Running submissions needs the environment that the generated build step sets
up:

- nsjail, GNU `time` and `sh` in `/global/bin`;
- the toolchains under `/runner`;
- a writable `/running`.

Each run gets a fresh directory under `/running`, which is handed to user and
group 99999. The service must therefore run with permission to change
ownership. The limits given for compilation are passed to the sandbox, but a
compile is not checked against them afterwards. There is no queue, no
persistent storage and no authentication. Each request is run as it arrives.