import logging

from issue_mirror.constants import LOG_DATE_FORMAT

LOG_FORMAT = "%(asctime)s %(message)s"


class BufferedLogHandler(logging.Handler):
    """Keeps every formatted record of a run in memory.

    ``logging.Handler.handle`` holds the handler lock around ``emit``, so
    concurrent writers append one whole message at a time.
    """

    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self.messages: list[str] = []
        self.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.messages.append(self.format(record))
        except Exception:
            self.handleError(record)

    def getvalue(self) -> str:
        self.acquire()
        try:
            return "\n".join(self.messages)
        finally:
            self.release()


def create_run_logger(
    level: int | str = logging.DEBUG, name: str = "issue_mirror.run"
) -> tuple[logging.Logger, BufferedLogHandler]:
    """Returns a logger whose records only land in a fresh in-memory buffer."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        if isinstance(handler, BufferedLogHandler):
            logger.removeHandler(handler)
    handler = BufferedLogHandler()
    logger.addHandler(handler)
    return logger, handler
