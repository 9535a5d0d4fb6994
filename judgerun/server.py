"""HTTP service that accepts run requests."""

from __future__ import annotations

import argparse
import json
import logging
import signal
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

from .env import RunnerOption
from .errors import RunnerError
from .runner import run
from .state import InternalError
from .web import RunnerRequest, RunnerResponse

_log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def handle_run(body: str | bytes, option: RunnerOption) -> RunnerResponse:
    """Run a JSON request body; run failures become an internal-error response.

    A body that is not a valid request raises ValueError.
    """
    request = RunnerRequest.from_json(body)
    try:
        return run(request, option)
    except RunnerError as err:
        _log.error("Internal Error: %s", err)
        return RunnerResponse(InternalError())


class _RunHandler(BaseHTTPRequestHandler):
    option: RunnerOption

    def _send(self, status: HTTPStatus, body: str, content_type: str) -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def _send_error(self, status: HTTPStatus, message: str) -> None:
        self._send(status, message, "text/plain; charset=utf-8")

    def do_POST(self) -> None:  # noqa: N802
        if self.path != "/run":
            self._send_error(HTTPStatus.NOT_FOUND, "not found")
            return
        content_type = self.headers.get("Content-Type", "")
        if content_type.split(";")[0].strip().lower() != "application/json":
            self._send_error(
                HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
                "expected request with `Content-Type: application/json`",
            )
            return
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            self._send_error(HTTPStatus.BAD_REQUEST, "invalid Content-Length")
            return
        body = self.rfile.read(length)
        try:
            response = handle_run(body, self.option)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self._send_error(HTTPStatus.BAD_REQUEST, f"invalid JSON: {exc}")
            return
        except (ValueError, TypeError) as exc:
            self._send_error(HTTPStatus.UNPROCESSABLE_ENTITY, f"invalid request: {exc}")
            return
        self._send(HTTPStatus.OK, response.to_json(), "application/json")

    def _other_method(self) -> None:
        if self.path == "/run":
            self._send_error(HTTPStatus.METHOD_NOT_ALLOWED, "method not allowed")
        else:
            self._send_error(HTTPStatus.NOT_FOUND, "not found")

    do_GET = _other_method  # noqa: N815
    do_PUT = _other_method  # noqa: N815
    do_DELETE = _other_method  # noqa: N815

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        _log.info("%s - %s", self.address_string(), format % args)


def make_server(
    option: RunnerOption, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> ThreadingHTTPServer:
    """Create (but do not start) a server with ``POST /run``."""

    class Handler(_RunHandler):
        pass

    Handler.option = option
    return ThreadingHTTPServer((host, port), Handler)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve sandboxed code runs over HTTP.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    _log.info("Starting runner...")

    try:
        option = RunnerOption.load()
    except ValueError as exc:
        parser.exit(1, f"Failed to load environment variables: {exc}\n")

    server = make_server(option, args.host, args.port)

    def _terminate(signum, frame) -> None:
        _log.info("Runner terminate signal received")
        threading.Thread(target=server.shutdown, daemon=True).start()

    signal.signal(signal.SIGTERM, _terminate)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        _log.info("Runner shutdown signal received")
    finally:
        server.server_close()
    return 0