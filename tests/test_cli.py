"""Tests for the waypoint CLI — routes listing and event replay."""

import json
import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest

from waypoint.cli import main
from waypoint.cli._resolve import resolve_router
from waypoint.routing.router import Router

_APP = textwrap.dedent(
    """
    from waypoint import Router, json
    from waypoint.middleware import RequestIdMiddleware

    router = Router()
    router.use(RequestIdMiddleware())

    @router.get("/users/:id")
    def show_user(request, context, params):
        return json({"id": params["id"]})

    def create_router():
        return router

    not_a_router = 42
    """
)


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    (tmp_path / "cli_app.py").write_text(_APP)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "cli_app"
    sys.modules.pop("cli_app", None)


class TestResolve:
    def test_default_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_router(app_module), Router)

    def test_factory(self, app_module: str) -> None:
        assert isinstance(resolve_router(f"{app_module}:create_router"), Router)

    def test_wrong_type(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a waypoint.Router"):
            resolve_router(f"{app_module}:not_a_router")

    def test_missing_attribute(self, app_module: str) -> None:
        with pytest.raises(AttributeError):
            resolve_router(f"{app_module}:nope")


class TestRoutesCommand:
    def test_lists_routes_and_middleware(
        self, app_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", app_module])
        out = capsys.readouterr().out
        assert "METHOD" in out
        assert "/users/:id" in out
        assert "show_user" in out
        assert "RequestIdMiddleware" in out

    def test_unknown_module_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "no_such_module_here"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err


class TestInvokeCommand:
    def test_replays_event_file(
        self, app_module: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        event = tmp_path / "event.json"
        event.write_text(json.dumps({"httpMethod": "GET", "path": "/api/users/7"}))

        main(["invoke", app_module, str(event)])

        reply = json.loads(capsys.readouterr().out)
        assert reply["statusCode"] == 200
        assert json.loads(reply["body"]) == {"id": "7"}
        assert reply["headers"]["x-request-id"].startswith("req_")

    def test_invalid_event_exits(
        self, app_module: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        event = tmp_path / "event.json"
        event.write_text("[1, 2]")
        with pytest.raises(SystemExit) as exc_info:
            main(["invoke", app_module, str(event)])
        assert exc_info.value.code == 1
        assert "JSON object" in capsys.readouterr().err

    def test_missing_event_file_exits(self, app_module: str, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["invoke", app_module, str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage" in capsys.readouterr().out
