"""Walk a log directory and fan out one processing unit per regular file."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed

from src.file_processor import process_file
from src.models import FileResult, RunSummary
from src.uploader import Uploader

logger = logging.getLogger(__name__)


class DirectoryListError(Exception):
    """Raised when the log directory cannot be listed. Fatal for the run."""


def list_log_files(dir_path: str) -> list[str]:
    """Return sorted paths of regular files directly inside *dir_path*.

    Symlinks are followed. Subdirectories (and links to them) are skipped,
    not descended into; FIFOs, sockets and device nodes are skipped too.
    """
    try:
        with os.scandir(dir_path) as it:
            entries = [e for e in it if e.is_file()]
    except OSError as e:
        raise DirectoryListError(f"failed to read directory {dir_path}: {e}") from e
    return sorted(e.path for e in entries)


def _process_one(path: str, application_id: str, upload_url: str) -> FileResult:
    with Uploader(upload_url) as uploader:
        return process_file(path, application_id, uploader)


def upload_directory(
    dir_path: str,
    application_id: str,
    upload_url: str,
    max_workers: int = 0,
) -> RunSummary:
    """Upload every log file in *dir_path* and wait for all of them.

    Each file is one unit of work with its own Uploader. ``max_workers <= 0``
    starts one worker per file; a positive value bounds the pool.

    Raises:
        DirectoryListError: if the directory cannot be listed.
    """
    paths = list_log_files(dir_path)
    summary = RunSummary()
    if not paths:
        logger.info("No log files found in %s", dir_path)
        return summary

    workers = len(paths) if max_workers <= 0 else min(max_workers, len(paths))
    logger.info(
        "Uploading %d file(s) from %s to %s with %d worker(s)",
        len(paths), dir_path, upload_url, workers,
    )

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_process_one, path, application_id, upload_url): path
            for path in paths
        }
        for future in as_completed(futures):
            summary.add(future.result())

    summary.results.sort(key=lambda r: r.path)
    logger.info(
        "Run finished: files=%d, uploaded=%d, failed=%d, malformed=%d, file_errors=%d",
        summary.files, summary.uploaded, summary.failed,
        summary.malformed, summary.file_errors,
    )
    return summary
