import logging

from config import Config, config
from logging_config import setup_logging


def test_validate_file():
    assert Config.validate_file("statement.PDF", 1024) == (True, None)

    ok, error = Config.validate_file("statement.docx", 1024)
    assert not ok and "Invalid file type" in error

    ok, error = Config.validate_file("statement.pdf", 0)
    assert not ok and error == "File is empty"

    ok, error = Config.validate_file("statement.pdf", Config.MAX_FILE_SIZE_BYTES + 1)
    assert not ok and "too large" in error


def test_output_path_creates_directories(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(Config, "LOG_DIR", tmp_path / "logs")

    path = config.get_output_path("july.json")

    assert path == tmp_path / "output" / "july.json"
    assert (tmp_path / "logs").is_dir()


def test_to_dict():
    settings = config.to_dict()
    assert settings["app_name"] == Config.APP_NAME
    assert settings["parse_timeout_seconds"] == Config.PARSE_TIMEOUT_SECONDS


def test_setup_logging_with_file(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(Config, "OUTPUT_DIR", tmp_path / "output")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        setup_logging(log_level="debug", log_file="test.log", console_output=False)
        logging.getLogger("extractors").debug("ผ่าน")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "ผ่าน" in (tmp_path / "logs" / "test.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_setup_logging_defaults_to_configured_log_file(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(Config, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(Config, "LOG_FILE", "from_env.log")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        setup_logging(console_output=False)
        logging.getLogger("loaders").warning("configured file")
        for handler in root.handlers:
            handler.flush()

        assert "configured file" in (tmp_path / "logs" / "from_env.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
