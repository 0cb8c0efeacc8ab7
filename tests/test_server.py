"""Launcher tests."""

import pytest

from todolist import server


def test_port_and_workers_defaults(monkeypatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("WEB_CONCURRENCY", raising=False)

    assert server.get_port() == 8080
    assert server.get_workers() == 1


def test_port_and_workers_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("WEB_CONCURRENCY", "0")

    assert server.get_port() == 9000
    assert server.get_workers() == 1


def test_help_mode(monkeypatch, capsys) -> None:
    monkeypatch.setattr(server.sys, "argv", ["todolist-server", "help"])

    server.main()

    assert "todolist-server [command]" in capsys.readouterr().out


def test_unknown_mode_exits(monkeypatch, capsys) -> None:
    monkeypatch.setattr(server.sys, "argv", ["todolist-server", "bogus"])

    with pytest.raises(SystemExit) as exc_info:
        server.main()

    assert exc_info.value.code == 1
    assert "Unknown mode: bogus" in capsys.readouterr().out
