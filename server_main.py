"""Entry point for the local log collector."""

import logging

from src.collector import RecordStore, create_app
from src.config import load_collector_config


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_collector_config()
    logging.getLogger(__name__).info(
        "Starting collector on %s:%d%s", config.host, config.port, config.path
    )
    app = create_app(path=config.path, store=RecordStore(max_size=config.max_records))
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
