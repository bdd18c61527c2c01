"""Configuration for the issues CLI."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "issues-cli (python)"
DEFAULT_COUNT = 4
DEFAULT_COLUMNS = ["number", "created_at", "title"]
TOKEN_ENV = "GITHUB_TOKEN"


def _default_config_candidates() -> list[Path]:
    return [
        Path(".issues.json"),  # Per-directory override
        Path.home() / ".config" / "issues" / "config.json",
    ]


def _expect(data: dict, key: str, kind: type | tuple[type, ...], config_file: Path):
    """Return data[key] after checking its type. Raises ValueError naming the key."""
    value = data[key]
    # bool is an int subclass; reject it where a number is expected
    if isinstance(value, bool) and kind is int:
        raise ValueError(f"{config_file}: {key!r} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise ValueError(f"{config_file}: {key!r} has wrong type {type(value).__name__}: {value!r}")
    return value


@dataclass
class Config:
    """Issues CLI configuration with sensible defaults."""

    api_url: str = DEFAULT_API_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 10
    default_count: int = DEFAULT_COUNT
    columns: list[str] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    fit_headers: bool = False  # Widen columns to fit their header labels
    verbose: bool = False  # Log raw response bodies

    # Read from the environment only, never from the config file
    token: str | None = None

    # CLI options
    config_file: Path | None = None

    def load_config(self) -> None:
        """Load settings from the JSON config file, then the environment.

        A missing file leaves the defaults in place.
        """
        self.token = os.environ.get(TOKEN_ENV) or None

        if self.config_file is None:
            for candidate in _default_config_candidates():
                if candidate.exists():
                    self.config_file = candidate
                    break
            else:
                return

        if not self.config_file.exists():
            return

        with open(self.config_file) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"{self.config_file}: invalid JSON - {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"{self.config_file}: expected a JSON object, got {type(data).__name__}")

        path = self.config_file
        if "apiUrl" in data:
            self.api_url = _expect(data, "apiUrl", str, path)
        if "userAgent" in data:
            self.user_agent = _expect(data, "userAgent", str, path)
        if "timeoutSecs" in data:
            timeout = _expect(data, "timeoutSecs", (int, float), path)
            if isinstance(timeout, bool) or timeout <= 0:
                raise ValueError(f"{path}: 'timeoutSecs' must be a positive number, got {timeout!r}")
            self.timeout = timeout
        if "defaultCount" in data:
            count = _expect(data, "defaultCount", int, path)
            if count < 0:
                raise ValueError(f"{path}: 'defaultCount' must be >= 0, got {count}")
            self.default_count = count
        if "columns" in data:
            columns = _expect(data, "columns", list, path)
            if not all(isinstance(c, str) for c in columns):
                raise ValueError(f"{path}: 'columns' must be a list of field names")
            self.columns = list(columns)
        if "fitHeaders" in data:
            self.fit_headers = _expect(data, "fitHeaders", bool, path)
        if "verbose" in data:
            self.verbose = _expect(data, "verbose", bool, path)
