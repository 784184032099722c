"""Configuration: frozen dataclasses built from defaults, YAML, env vars, and CLI args."""

import argparse
import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    log_dir: str = "test"
    application_id: str = "seata"
    upload_url: str = "http://localhost:8080/upload"
    max_workers: int = 8
    log_level: str = "INFO"


@dataclass(frozen=True)
class CollectorConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    path: str = "/upload"
    max_records: int = 10000


_CONVERTERS = {
    "log_dir": str,
    "application_id": str,
    "upload_url": str,
    "max_workers": int,
    "log_level": lambda v: str(v).upper(),
}

_ENV_VARS = {
    "log_dir": "LOG_DIR",
    "application_id": "APPLICATION_ID",
    "upload_url": "UPLOAD_URL",
    "max_workers": "MAX_WORKERS",
    "log_level": "LOG_LEVEL",
}


def load_yaml_config(path: str | None) -> dict:
    """Load config overrides from a YAML file. Returns empty dict if no path.

    Raises:
        ValueError: if the file is not valid YAML or not a mapping.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(Config)}
    for key in sorted(set(data) - known):
        logger.warning("Ignoring unknown config key %r in %s", key, path)
    logger.info("Loaded YAML config from %s", path)
    return {k: v for k, v in data.items() if k in known}


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Upload log files from a directory to an HTTP collector",
    )
    parser.add_argument("--config", default=None,
                        help="Path to a YAML config file")
    parser.add_argument("--log-dir", dest="log_dir", default=None,
                        help="Directory holding the log files")
    parser.add_argument("--app-id", dest="application_id", default=None,
                        help="Application identifier attached to every record")
    parser.add_argument("--upload-url", dest="upload_url", default=None,
                        help="Collector URL receiving one POST per record")
    parser.add_argument("--max-workers", dest="max_workers", type=int, default=None,
                        help="Files processed concurrently (0 = one per file)")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        type=str.upper, choices=LOG_LEVELS)
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority).

    Pass argv for testability; when None, argparse reads sys.argv.
    """
    args = build_cli_parser().parse_args(argv)

    kwargs: dict = {}
    yaml_path = args.config or os.environ.get("CONFIG_PATH")
    for key, value in load_yaml_config(yaml_path).items():
        kwargs[key] = _CONVERTERS[key](value)

    for key, env_name in _ENV_VARS.items():
        value = os.environ.get(env_name)
        if value is not None and value != "":
            kwargs[key] = _CONVERTERS[key](value)

    for key in _ENV_VARS:
        value = getattr(args, key)
        if value is not None:
            kwargs[key] = value

    config = Config(**kwargs)
    if config.log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {config.log_level}")
    return config


def load_collector_config() -> CollectorConfig:
    """Build CollectorConfig from environment variables with sensible defaults."""
    return CollectorConfig(
        host=os.environ.get("COLLECTOR_HOST", CollectorConfig.host),
        port=int(os.environ.get("COLLECTOR_PORT", CollectorConfig.port)),
        path=os.environ.get("COLLECTOR_PATH", CollectorConfig.path),
        max_records=int(
            os.environ.get("COLLECTOR_MAX_RECORDS", CollectorConfig.max_records)
        ),
    )
