# tests/test_cli.py
import os
from unittest.mock import patch

import pytest

from slp_core import Chat, PingConfig, Player, Response, SlpProtocol, TransportError
from slp_core.__main__ import format_response, main


@pytest.fixture
def response():
    return Response(
        version="1.20.4",
        protocol=765,
        max_players=20,
        online_players=2,
        description=Chat(text="A", extra=(Chat(text=" Server"),)),
        sample=(Player(name="Alice", id="a"), Player(name="Bob", id="b")),
        favicon=b"\x89PNG",
    )


@pytest.fixture
def mock_ping():
    with patch("slp_core.__main__.ping_server") as ping_server:
        yield ping_server


def test_format_response(response):
    text = format_response(response)

    assert "版本: 1.20.4 (协议 765)" in text
    assert "玩家: 2/20" in text
    assert "描述: A Server" in text
    assert "在线: Alice, Bob" in text
    assert "图标: 4 字节" in text


def test_main_success(mock_ping, response, capsys):
    mock_ping.return_value = response

    assert main(["mc.example.com:25570", "-t", "2", "-p", "legacy"]) == 0

    mock_ping.assert_called_once_with(
        PingConfig(
            host="mc.example.com", port=25570, timeout=2.0, protocols=(SlpProtocol.LEGACY,)
        )
    )
    assert "玩家: 2/20" in capsys.readouterr().out


def test_main_config_error(mock_ping):
    assert main(["mc.example.com", "--timeout", "0"]) == 2
    mock_ping.assert_not_called()


def test_main_ping_failure(mock_ping, capsys):
    mock_ping.side_effect = TransportError("连接失败")

    assert main(["mc.example.com"]) == 1
    assert capsys.readouterr().out == ""


def test_main_toml_config(mock_ping, response, tmp_path):
    path = tmp_path / "slp.toml"
    path.write_text('[profile.lobby]\nhost = "lobby.example.com"\n', encoding="utf-8")
    mock_ping.return_value = response

    assert main(["-c", str(path), "--profile", "lobby"]) == 0
    assert mock_ping.call_args.args[0].host == "lobby.example.com"


def test_main_env_config(mock_ping, response, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SLP_HOST", "env.example.com")
    mock_ping.return_value = response

    assert main([]) == 0
    assert mock_ping.call_args.args[0].host == "env.example.com"


def test_main_dotenv_config(mock_ping, response, monkeypatch, tmp_path):
    for suffix in ("HOST", "PORT", "TIMEOUT", "PROTOCOLS"):
        monkeypatch.delenv(f"SLP_{suffix}", raising=False)
    (tmp_path / ".env").write_text("SLP_HOST=dotenv.example.com\nSLP_PORT=25580\n")
    monkeypatch.chdir(tmp_path)
    mock_ping.return_value = response

    # load_dotenv 直接写入 os.environ
    with patch.dict(os.environ):
        assert main([]) == 0

    config = mock_ping.call_args.args[0]
    assert (config.host, config.port) == ("dotenv.example.com", 25580)


def test_main_no_config(mock_ping, monkeypatch, tmp_path):
    for suffix in ("HOST", "PORT", "TIMEOUT", "PROTOCOLS"):
        monkeypatch.delenv(f"SLP_{suffix}", raising=False)
    monkeypatch.chdir(tmp_path)

    assert main([]) == 2


def test_main_non_finite_timeout_from_env(mock_ping, monkeypatch, tmp_path):
    """环境变量中的 nan 超时在配置阶段被拒绝，不会进入网络层。"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SLP_HOST", "env.example.com")
    monkeypatch.setenv("SLP_TIMEOUT", "nan")

    assert main([]) == 2
    mock_ping.assert_not_called()
