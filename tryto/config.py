import os
import tomllib
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any
from typing import Self

from .log import get_logger
from .result import Try
from .result import to

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUTHY = frozenset({"1", "true", "yes", "on"})

logger = get_logger(__name__)


def parse_flag(value: object, name: str) -> bool:
    """Read an on/off setting from TOML or from an environment variable."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    raise ValueError(f"Invalid {name} {value!r}, expected a boolean")


def find_pyproject(start: Path | None = None) -> Path | None:
    """Find the nearest pyproject.toml at or above ``start``."""
    for path in [cwd := (start or Path.cwd()).resolve(), *cwd.parents]:
        candidate = path / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def read_pyproject(path: Path) -> Try[dict[str, Any]]:
    """Read the ``[tool.tryto]`` table of a pyproject.toml file."""
    return (
        to(partial(path.open, "rb"))
        .flat_map(lambda f: to(partial(tomllib.load, f), on_finally=f.close))
        .map(lambda document: document.get("tool", {}).get("tryto", {}))
    )


@dataclass(frozen=True, kw_only=True)
class Config:
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self):
        level = self.log_level
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level {level!r}, "
                f"expected one of: {', '.join(LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level.upper())

    @classmethod
    def load(cls, start: Path | None = None) -> Self:
        """Load configuration, preferring TRYTO_* env vars over pyproject.toml."""
        table: dict[str, Any] = {}
        if pyproject := find_pyproject(start):
            table = (
                read_pyproject(pyproject)
                .on_exception(
                    lambda error: logger.warning(
                        "unreadable pyproject.toml",
                        path=str(pyproject),
                        error=str(error),
                    )
                )
                .get_or_else({})
            )

        log_level = os.environ.get("TRYTO_LOG_LEVEL") or table.get("log_level", "INFO")

        json_logs = os.environ.get("TRYTO_JSON_LOGS") or table.get("json_logs", False)

        return cls(log_level=log_level, json_logs=parse_flag(json_logs, "json_logs"))


def load_config(start: Path | None = None) -> Config:
    return Config.load(start)
