"""Process one log file: scan, parse, and upload each line in order."""

import logging

from src.models import FileResult
from src.parser import FormatError, parse_record
from src.uploader import SerializationError, UploadError, Uploader

logger = logging.getLogger(__name__)


class FileOpenError(Exception):
    """Raised when a log file cannot be opened for reading."""


def open_log_file(path: str):
    """Open *path* as text; undecodable bytes are replaced, not fatal."""
    try:
        return open(path, "r", encoding="utf-8", errors="replace", newline="\n")
    except OSError as e:
        raise FileOpenError(str(e)) from e


def iter_lines(f):
    """Yield each non-empty line without its '\\n' or '\\r\\n' terminator."""
    for raw in f:
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        if line:
            yield line


def process_file(path: str, application_id: str, uploader: Uploader) -> FileResult:
    """Parse and upload every line of *path*. Never raises.

    Format and upload failures skip the line; an open failure skips the
    file; a read failure stops the file where it is.
    """
    result = FileResult(path=path)

    try:
        f = open_log_file(path)
    except FileOpenError as e:
        logger.error("failed to open file %s: %s", path, e)
        result.error = str(e)
        return result

    with f:
        try:
            for line in iter_lines(f):
                _process_line(path, line, application_id, uploader, result)
        except OSError as e:
            logger.error("error reading file %s: %s", path, e)
            result.error = str(e)

    logger.debug(
        "Finished %s: uploaded=%d, failed=%d, malformed=%d",
        path, result.uploaded, result.failed, result.malformed,
    )
    return result


def _process_line(path: str, line: str, application_id: str,
                  uploader: Uploader, result: FileResult):
    try:
        record = parse_record(line, application_id)
    except FormatError:
        logger.warning("invalid log format in file %s: %s", path, line)
        result.malformed += 1
        return

    try:
        uploader.upload(record)
    except (UploadError, SerializationError) as e:
        logger.warning("failed to upload log from file %s: %s", path, e)
        result.failed += 1
        return

    logger.info("successfully uploaded log from file %s: %s", path, record.message)
    result.uploaded += 1
