from loguru import logger

from skyrim_planner.logging_config import configure_logging


def test_file_sink_records_debug(tmp_path):
    log_file = tmp_path / "planner.log"
    configure_logging("ERROR", log_file)
    logger.debug("decoded test build")
    logger.remove()
    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in text
    assert "decoded test build" in text


def test_level_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("LOG_LEVEL", "info")
    configure_logging()
    logger.info("visible")
    logger.debug("hidden")
    logger.remove()
    err = capsys.readouterr().err
    assert "visible" in err
    assert "hidden" not in err
