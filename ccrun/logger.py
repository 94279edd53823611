from typing import Optional
from loguru import logger
import sys
import os

from ccrun.const import DEFAULT_LOG_LEVEL, DEFAULT_LOGS_DIR

STDERR_FORMAT = "<level>{level: <8}</level> | {message}"

class Logger:
    def __init__(self, logs_dir :Optional[str]=None, level :str=DEFAULT_LOG_LEVEL):
        """
        Initialize the logger object.
        :param logs_dir: Directory where log files will be stored. No file sink when None.
        :param level: Minimum level written to stderr.
        """
        self.logs_dir = logs_dir
        self.level = level.upper()
        self._stderr_sink_id = None
        self._file_sink_id = None

        logger.remove()  # Remove default logging to stderr
        self._stderr_sink_id = logger.add(
            sys.stderr,
            level=self.level,
            format=STDERR_FORMAT,
            colorize=None,
        )

        if self.logs_dir:
            os.makedirs(self.logs_dir, exist_ok=True)
            log_file_path = os.path.join(self.logs_dir, "{time:YYYY-MM-DD}.log")
            self._file_sink_id = logger.add(
                log_file_path,
                level="DEBUG",
                format="{time} {level} {message}",
                rotation="00:00",
                retention="7 days",
                serialize=False,
            )

    @property
    def logger(self):
        return logger

    def set_level(self, level :str):
        """
        Replace the stderr sink with one at the requested level.
        :param level: loguru level name (DEBUG, INFO, WARNING, ERROR).
        """
        self.level = level.upper()
        if self._stderr_sink_id is not None:
            logger.remove(self._stderr_sink_id)
        self._stderr_sink_id = logger.add(
            sys.stderr,
            level=self.level,
            format=STDERR_FORMAT,
            colorize=None,
        )

_logger = Logger(logs_dir=DEFAULT_LOGS_DIR)
