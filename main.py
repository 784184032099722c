"""Entry point: upload every log file in a directory to the collector."""

import logging
import sys
import time

from src.config import load_config
from src.walker import DirectoryListError, upload_directory


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = load_config(argv)
    logging.getLogger().setLevel(config.log_level)
    logger = logging.getLogger(__name__)
    logger.info(
        "Starting log uploader: dir=%s, app_id=%s, url=%s",
        config.log_dir, config.application_id, config.upload_url,
    )

    start = time.perf_counter()
    try:
        upload_directory(
            config.log_dir,
            config.application_id,
            config.upload_url,
            max_workers=config.max_workers,
        )
    except DirectoryListError as e:
        logger.critical("%s", e)
        return 1

    print(f"Finished uploading logs in {time.perf_counter() - start:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
