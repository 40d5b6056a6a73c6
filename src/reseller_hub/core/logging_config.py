import logging
import sys

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def configure_logging(level: str = LOG_LEVEL, namespaces=None) -> logging.Logger:
    """Attach the console handler to the package logger.

    Modules log through ``logging.getLogger(__name__)`` so their records
    propagate up to ``reseller_hub``. Calling this more than once replaces the
    handler instead of stacking duplicates.
    """
    app_logger = logging.getLogger("reseller_hub")
    app_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    allowed = LOG_NAMESPACES if namespaces is None else namespaces
    if allowed:
        console_handler.addFilter(NamespaceFilter(allowed))

    app_logger.handlers = [console_handler]
    return app_logger

# To see the SQL Tortoise sends, raise its client logger:
# logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)
