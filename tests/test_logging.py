import logging

from pagebuilder.logging import configure_logging, get_logger, target_logger


def test_target_logger_prefixes_messages(caplog) -> None:
    get_logger().propagate = True
    with caplog.at_level(logging.INFO, logger="pagebuilder.pipeline"):
        target_logger("pipeline", "bricks").info("Compiled %d components", 3)
    assert "[bricks] Compiled 3 components" in caplog.text


def test_configure_logging_replaces_handlers(tmp_path) -> None:
    log_file = tmp_path / "run.log"
    configure_logging(verbose=True, log_file=log_file)
    logger = configure_logging(verbose=False)
    try:
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
