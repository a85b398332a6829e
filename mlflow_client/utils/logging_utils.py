import logging
import logging.config
import sys

from mlflow_client.environment_variables import MLFLOW_LOGGING_LEVEL

# 2024/05/20 12:36:37 INFO mlflow_client.tracking.run_builder: Logging 3 metrics to run 1a2b
LOGGING_LINE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOGGING_DATETIME_FORMAT = "%Y/%m/%d %H:%M:%S"


class _SwitchableStderr:
    """
    Stream of the client's log handler. Writes go to whatever ``sys.stderr`` is at the time
    of the write, and are dropped while the stream is disabled.
    """

    def __init__(self):
        self.enabled = True

    def write(self, text):
        if self.enabled:
            sys.stderr.write(text)

    def flush(self):
        if self.enabled:
            sys.stderr.flush()


MLFLOW_LOGGING_STREAM = _SwitchableStderr()


def disable_logging():
    """Silence the ``mlflow_client`` log handler until :py:func:`enable_logging` is called."""
    MLFLOW_LOGGING_STREAM.enabled = False


def enable_logging():
    MLFLOW_LOGGING_STREAM.enabled = True


def _configure_loggers(root_module_name):
    level = (MLFLOW_LOGGING_LEVEL.get() or "INFO").upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "mlflow_client_formatter": {
                    "format": LOGGING_LINE_FORMAT,
                    "datefmt": LOGGING_DATETIME_FORMAT,
                },
            },
            "handlers": {
                "mlflow_client_handler": {
                    "class": "logging.StreamHandler",
                    "formatter": "mlflow_client_formatter",
                    "stream": MLFLOW_LOGGING_STREAM,
                },
            },
            "loggers": {
                root_module_name: {
                    "handlers": ["mlflow_client_handler"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
