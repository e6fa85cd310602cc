"""Logger for key, CSR, and certificate operations, emitting one JSON object per line."""

import logging

from pythonjsonlogger import jsonlogger

LOG_FIELDS = frozenset({"timestamp", "level", "message", "exc_info", "funcName", "lineno"})


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that keeps only the fields in LOG_FIELDS.

    Artifact paths and domains are already in the message, so logger name,
    process, and thread data are left out.
    """

    def add_fields(self, log_record, record, message_dict):
        """Fill log_record, rename levelname to level, and drop other fields.

        Args:
            log_record: JSON payload under construction
            record: Source LogRecord
            message_dict: Extra fields parsed from the message
        """
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")

        for key in set(log_record) - LOG_FIELDS:
            del log_record[key]


def _setup_logger() -> logging.Logger:
    """Return the 'local_tls' logger writing JSON to stderr at INFO.

    The handler is attached once; later calls return the same logger.
    """
    logger = logging.getLogger("local_tls")
    if any(isinstance(h.formatter, CustomJsonFormatter) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )

    logger.setLevel(logging.INFO)
    logger.addHandler(handler)
    # Stays off the root logger so CLI output is JSON only
    logger.propagate = False

    return logger


# Shared by every lifecycle component and the CLI
LOGGER = _setup_logger()
