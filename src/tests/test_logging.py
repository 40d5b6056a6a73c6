import logging
import pytest

from reseller_hub.core.logging_config import NamespaceFilter, configure_logging


class RecordingHandler(logging.Handler):
    """Keeps every record that passes the handler's filters."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [f"{r.name}:{r.levelname}:{r.getMessage()}" for r in self.records]


LOGGERS_TO_MANAGE = [
    "reseller_hub", "reseller_hub.features.analytics", "reseller_hub.features.stores",
    "reseller_hub.features.analytics.service", "reseller_hub.features.stores.service",
    "reseller_hub.main",
]


def _reset_loggers(saved_handlers=None):
    for logger_name in LOGGERS_TO_MANAGE:
        logger = logging.getLogger(logger_name)
        logger.handlers = []
        logger.filters = []
        logger.setLevel(logging.NOTSET)
    if saved_handlers is not None:
        logging.getLogger("reseller_hub").handlers = saved_handlers


@pytest.fixture
def logging_env():
    """
    Gives each test clean package loggers and a recording handler, and puts
    the package logger back the way it was afterwards.
    """
    app_logger = logging.getLogger("reseller_hub")
    saved_handlers = list(app_logger.handlers)
    saved_level = app_logger.level
    _reset_loggers()

    yield RecordingHandler()

    _reset_loggers(saved_handlers)
    app_logger.setLevel(saved_level)


def _setup_logger(name, level, handler_to_add):
    """Helper function to configure a logger for testing."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = [handler_to_add]
    logger.propagate = True
    return logger


def test_default_level_propagation(logging_env):
    _setup_logger("reseller_hub", logging.INFO, logging_env)

    analytics_logger = logging.getLogger("reseller_hub.features.analytics")
    stores_logger = logging.getLogger("reseller_hub.features.stores")

    analytics_logger.debug("Analytics debug message")
    analytics_logger.info("Analytics info message")
    stores_logger.warning("Stores warning message")

    assert "reseller_hub.features.analytics:DEBUG:Analytics debug message" not in logging_env.messages
    assert "reseller_hub.features.analytics:INFO:Analytics info message" in logging_env.messages
    assert "reseller_hub.features.stores:WARNING:Stores warning message" in logging_env.messages


def test_namespace_specific_level(logging_env):
    _setup_logger("reseller_hub", logging.INFO, logging_env)
    logging.getLogger("reseller_hub.features.analytics").setLevel(logging.DEBUG)

    logging.getLogger("reseller_hub.features.analytics.service").debug("Analytics debug specific")
    logging.getLogger("reseller_hub.features.stores.service").debug("Stores debug specific")

    assert "reseller_hub.features.analytics.service:DEBUG:Analytics debug specific" in logging_env.messages
    assert "reseller_hub.features.stores.service:DEBUG:Stores debug specific" not in logging_env.messages


def test_namespace_filter_allow(logging_env):
    _setup_logger("reseller_hub", logging.DEBUG, logging_env)
    logging_env.addFilter(NamespaceFilter(allowed_namespaces=["reseller_hub.features.analytics"]))

    logging.getLogger("reseller_hub.features.analytics.service").info("Analytics message")
    logging.getLogger("reseller_hub.features.stores.service").info("Stores message")
    logging.getLogger("reseller_hub.main").info("Main message")

    assert logging_env.messages == ["reseller_hub.features.analytics.service:INFO:Analytics message"]


def test_namespace_filter_allow_all_if_empty(logging_env):
    _setup_logger("reseller_hub", logging.DEBUG, logging_env)
    logging_env.addFilter(NamespaceFilter(allowed_namespaces=[]))

    logging.getLogger("reseller_hub.features.analytics").info("Analytics message")
    logging.getLogger("reseller_hub.features.stores").info("Stores message")

    assert len(logging_env.messages) == 2


def test_configure_logging_writes_to_stdout(logging_env, capsys):
    logger = configure_logging(level="DEBUG", namespaces=["reseller_hub.features.stores"])

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    logging.getLogger("reseller_hub.features.stores.service").info("Updated settings")
    logging.getLogger("reseller_hub.main").info("Filtered out")

    out = capsys.readouterr().out
    assert "reseller_hub.features.stores.service" in out
    assert "INFO - Updated settings" in out
    assert "Filtered out" not in out


def test_configure_logging_does_not_stack_handlers(logging_env):
    configure_logging()
    logger = configure_logging()

    assert len(logger.handlers) == 1
