"""
Configuration management.

All configuration keys are defined here; no other module should invent config
keys or defaults.

Key invariants:
- Relative paths in the config file (db_path, logging.file) are resolved
  against the directory holding the config file, so the index lives next to
  the program configuration no matter which working directory a spreadsheet
  shell call starts in.
- Environment variables win over file values.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigValidationError

DEFAULT_CONFIG_NAME = "config.yaml"
CONFIG_ENV_VAR = "ARTICLE_LOCATOR_CONFIG"


@dataclass
class IndexConfig:
    """Index location and scan settings."""

    # Directory tree that holds the article folders
    root_directory: Path = field(default_factory=lambda: Path("."))
    # SQLite index file
    db_path: Path = field(default_factory=lambda: Path("articles.db"))
    # Document extensions picked up by the scan (lower case, with dot)
    extensions: list[str] = field(default_factory=lambda: [".pdf"])
    # Upper bound for the extraction thread pool
    max_workers: int = 8


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    # Log file next to the config; None disables file logging
    file: Path | None = field(default_factory=lambda: Path("log.txt"))


@dataclass
class MacroConfig:
    """Spreadsheet macro settings."""

    # Command the double-click macro shells out to
    executable: str = "article-locator"


@dataclass
class Config:
    """Application configuration.

    All configuration is centralized here. No other module should define
    configuration keys or defaults.
    """

    index: IndexConfig = field(default_factory=IndexConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    macro: MacroConfig = field(default_factory=MacroConfig)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if self.index.max_workers < 1:
            errors.append("index.max_workers must be >= 1")
        if not self.index.extensions:
            errors.append("index.extensions must list at least one extension")
        for ext in self.index.extensions:
            if not ext.startswith("."):
                errors.append(f"index.extensions entry {ext!r} must start with '.'")

        return errors

    def raise_for_errors(self) -> None:
        """Raise ConfigValidationError if validate() reports anything."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError(errors)


def default_config_path() -> Path:
    """Config path from ARTICLE_LOCATOR_CONFIG, else ./config.yaml."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME))


def _resolve(base_dir: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    A missing file yields the defaults. Environment variables can override
    config values:
    - ARTICLE_LOCATOR_ROOT
    - ARTICLE_LOCATOR_DB
    - ARTICLE_LOCATOR_LOG_LEVEL
    - ARTICLE_LOCATOR_LOG_FILE (empty string disables file logging)
    """
    config_path = Path(config_path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    base_dir = config_path.resolve().parent

    # Index config
    index_data = data.get("index", {}) or {}
    root = os.environ.get("ARTICLE_LOCATOR_ROOT", index_data.get("root_directory", "."))
    db_path = os.environ.get("ARTICLE_LOCATOR_DB", index_data.get("db_path", "articles.db"))
    raw_extensions = index_data.get("extensions")

    # Checked before resolving: _resolve turns a blank path into the config dir
    errors: list[str] = []
    if root is None or not str(root).strip():
        errors.append("index.root_directory is required")
    if db_path is None or not str(db_path).strip():
        errors.append("index.db_path is required")
    if raw_extensions is not None and not isinstance(raw_extensions, list):
        errors.append("index.extensions must be a list, e.g. [\".pdf\"]")
    if errors:
        raise ConfigValidationError(errors)

    extensions = [str(ext).lower() for ext in (raw_extensions or [".pdf"])]
    index = IndexConfig(
        root_directory=_resolve(base_dir, root),
        db_path=_resolve(base_dir, db_path),
        extensions=extensions,
        max_workers=int(index_data.get("max_workers", 8)),
    )

    # Logging config
    logging_data = data.get("logging", {}) or {}
    log_file = os.environ.get("ARTICLE_LOCATOR_LOG_FILE", logging_data.get("file", "log.txt"))
    logging_config = LoggingConfig(
        level=str(
            os.environ.get("ARTICLE_LOCATOR_LOG_LEVEL", logging_data.get("level", "INFO"))
        ).upper(),
        file=_resolve(base_dir, log_file) if log_file else None,
    )

    # Macro config
    macro_data = data.get("macro", {}) or {}
    macro = MacroConfig(
        executable=macro_data.get("executable", "article-locator"),
    )

    return Config(index=index, logging=logging_config, macro=macro)


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Article Locator configuration
#
# Relative paths are resolved against the directory of this file.

index:
  root_directory: "."                    # Tree holding the <article>/<file>.pdf folders
  db_path: "articles.db"                 # SQLite index (rebuilt automatically on a miss)
  extensions: [".pdf"]                   # Document types picked up by the scan
  max_workers: 8                         # Threads used to parse paths during a rebuild

logging:
  level: "INFO"
  file: "log.txt"                        # null disables the log file

# Spreadsheet double-click macro (see: article-locator macro)
macro:
  executable: "article-locator"          # Full path to the executable if not on PATH
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(default_config)
