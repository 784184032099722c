"""Parse bracketed-prefix log lines: '[<timestamp>] [<level>]: <message>'."""

from src.models import LogRecord

MESSAGE_SEPARATOR = ": "
BRACKET_DELIMITER = "] ["


class FormatError(Exception):
    """Raised when a line does not follow the two-bracket prefix format."""

    def __init__(self, reason: str, line: str = ""):
        super().__init__(reason)
        self.reason = reason
        self.line = line


def parse_record(line: str, application_id: str) -> LogRecord:
    """Split a raw line into a LogRecord tagged with *application_id*.

    Only the first ': ' and the first '] [' are significant. Surrounding
    '[' / ']' characters are trimmed from the timestamp and level; neither
    is validated, so any text (including an empty string) is accepted.

    Raises:
        FormatError: if either delimiter is missing.
    """
    meta, sep, message = line.partition(MESSAGE_SEPARATOR)
    if not sep:
        raise FormatError("missing separator", line)

    timestamp, delim, level = meta.partition(BRACKET_DELIMITER)
    if not delim:
        raise FormatError("missing bracket delimiter", line)

    return LogRecord(
        application_id=application_id,
        level=level.strip("[]"),
        timestamp=timestamp.strip("[]"),
        message=message,
    )
