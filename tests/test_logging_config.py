import logging

from ColorimeterTool import setup_logging


def test_setup_logging_writes_package_messages(tmp_path):
    log_file = tmp_path / "colorimeter.log"
    setup_logging(logging.DEBUG, str(log_file))
    logger = logging.getLogger("ColorimeterTool")
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("ColorimeterTool.Bleaching").debug("tick")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "ColorimeterTool.Bleaching - DEBUG - tick" in text
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_setup_logging_does_not_duplicate_handlers():
    setup_logging()
    setup_logging()
    logger = logging.getLogger("ColorimeterTool")
    try:
        assert len(logger.handlers) == 1
    finally:
        logger.handlers.clear()


def test_setup_logging_accepts_level_names():
    logger = setup_logging("debug", console=False)
    try:
        assert logger is logging.getLogger("ColorimeterTool")
        assert logger.level == logging.DEBUG
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
    finally:
        logger.handlers.clear()


def test_setup_logging_closes_previous_file_handler(tmp_path):
    logger = setup_logging(log_file=str(tmp_path / "first.log"), console=False)
    first = logger.handlers[0]
    try:
        setup_logging(log_file=str(tmp_path / "second.log"), console=False)
        assert first not in logger.handlers
        assert first.stream is None
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
