import json
import os
import subprocess
import threading
import urllib.error
import urllib.request
from http import HTTPStatus
from pathlib import Path

import pytest

from judgerun import runner as runner_module
from judgerun.env import RunnerOption
from judgerun.language import Language
from judgerun.memory import Memory
from judgerun.mstime import MsTime
from judgerun.server import handle_run, main, make_server
from judgerun.state import InternalError, Success
from judgerun.web import RunnerRequest, RunnerResponse

OPTION = RunnerOption(MsTime.from_seconds(10), Memory.from_megabytes(512))


def request_body(stdin="hi\n"):
    return RunnerRequest(
        lang=Language.PYTHON3_13,
        code="print(input())",
        ms_time_limit=MsTime.from_ms(2000),
        memory_limit=Memory.from_megabytes(256),
        stdin=stdin,
    ).to_json()


@pytest.fixture
def missing_running_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(runner_module, "RUNNING_PATH", str(tmp_path / "missing"))


@pytest.fixture
def echo_sandbox(monkeypatch, tmp_path):
    monkeypatch.setattr(runner_module, "RUNNING_PATH", str(tmp_path))
    monkeypatch.setattr(os, "chown", lambda path, uid, gid: None)

    def fake_run(argv, input=None, stdout=None, stderr=None, cwd=None, check=False):
        (Path(cwd) / "time.txt").write_text("1024\n0:00.100\n")
        return subprocess.CompletedProcess(argv, 0, input, b"")

    monkeypatch.setattr(subprocess, "run", fake_run)


@pytest.fixture
def base_url():
    server = make_server(OPTION, "127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()
    thread.join()


def post(url, data, content_type="application/json"):
    req = urllib.request.Request(
        url, data=data, headers={"Content-Type": content_type}, method="POST"
    )
    with urllib.request.urlopen(req, timeout=10) as resp:
        return resp.status, resp.read()


def test_handle_run_success(echo_sandbox):
    response = handle_run(request_body("echo me"), OPTION)
    assert response.state == Success(
        stdout="echo me",
        max_memory_usage=Memory.from_kilobytes(1024),
        ms_time_elapsed=MsTime.from_ms(100),
    )


def test_handle_run_internal_error(missing_running_dir):
    response = handle_run(request_body().encode(), OPTION)
    assert response == RunnerResponse(InternalError())
    assert response.to_dict() == {"state": "InternalError"}


def test_handle_run_rejects_bad_json():
    with pytest.raises(ValueError):
        handle_run("{not json", OPTION)


def test_handle_run_rejects_missing_field():
    body = json.dumps({"lang": 3, "code": "x"})
    with pytest.raises(ValueError):
        handle_run(body, OPTION)


def test_http_run_internal_error(base_url, missing_running_dir):
    status, body = post(f"{base_url}/run", request_body().encode())
    assert status == HTTPStatus.OK
    assert json.loads(body) == {"state": "InternalError"}


def test_http_run_success_round_trip(base_url, echo_sandbox):
    status, body = post(f"{base_url}/run", request_body("round trip").encode())
    assert status == HTTPStatus.OK
    response = RunnerResponse.from_json(body)
    assert response.state.stdout == "round trip"


def test_http_unknown_path(base_url):
    with pytest.raises(urllib.error.HTTPError) as info:
        post(f"{base_url}/other", request_body().encode())
    assert info.value.code == HTTPStatus.NOT_FOUND


def test_http_bad_json(base_url, missing_running_dir):
    with pytest.raises(urllib.error.HTTPError) as info:
        post(f"{base_url}/run", b"{oops")
    assert info.value.code == 400
    status, body = post(f"{base_url}/run", request_body().encode())
    assert status == 200
    assert json.loads(body) == {"state": "InternalError"}


def test_http_wrong_content_type(base_url):
    with pytest.raises(urllib.error.HTTPError) as info:
        post(f"{base_url}/run", request_body().encode(), content_type="text/plain")
    assert info.value.code == HTTPStatus.UNSUPPORTED_MEDIA_TYPE


def test_main_fails_without_environment(monkeypatch):
    monkeypatch.delenv("COMPILE_TIME_LIMIT_SECONDS", raising=False)
    monkeypatch.delenv("COMPILE_MEMORY_LIMIT_MEGABYTES", raising=False)
    with pytest.raises(SystemExit) as info:
        main(["--port", "0"])
    assert info.value.code == 1