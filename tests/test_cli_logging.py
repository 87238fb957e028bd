from pathlib import Path

from loguru import logger

from aria2rpc.cli.shared import logging_utils
from aria2rpc.config.loader import get_config_path, get_data_dir


def test_data_dir_holds_config_and_logs(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    assert get_data_dir() == tmp_path / ".aria2rpc"
    assert get_config_path() == tmp_path / ".aria2rpc" / "config.json"
    assert logging_utils.get_log_path("aria2rpc") == tmp_path / ".aria2rpc" / "logs" / "aria2rpc.log"
    assert not get_data_dir().exists()


def test_rotating_log_file_is_added_once(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.setattr(logging_utils, "_FILE_SINKS", {})

    path = logging_utils.ensure_rotating_log_file("cli-test", level="DEBUG")
    try:
        assert logging_utils.ensure_rotating_log_file("cli-test") == path
        assert list(logging_utils._FILE_SINKS) == [path]
        logger.info("written to file")
    finally:
        logger.remove(logging_utils._FILE_SINKS[path])
    assert "written to file" in path.read_text(encoding="utf-8")
