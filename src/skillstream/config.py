"""Runtime settings for the SkillShare provider.

Settings are assembled from three layers, lowest precedence first:

1. the defaults declared on :class:`Settings`
2. an optional YAML file (see :meth:`Settings.from_yaml`)
3. ``SKILLSTREAM_*`` environment variables, including those in a ``.env`` file
"""

import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import yaml
from dotenv import load_dotenv
from loguru import logger


def _default_cursor_state_path() -> Path:
    """Get the platform-appropriate default path for the cursor state file."""
    cache_dir = Path(platformdirs.user_cache_dir("skillstream"))
    return cache_dir / "skillshare_cursors.json"


# Environment variable -> Settings field
ENV_VARS = {
    "SKILLSTREAM_MAIN_URL": "main_url",
    "SKILLSTREAM_API_URL": "api_url",
    "SKILLSTREAM_BYPASS_URL": "bypass_url",
    "SKILLSTREAM_BYPASS_FALLBACK_URL": "bypass_fallback_url",
    "SKILLSTREAM_TIMEOUT": "timeout",
    "SKILLSTREAM_CURSOR_STATE": "cursor_state_path",
}


@dataclass(frozen=True)
class Settings:
    """Endpoints and limits used by the SkillShare provider.

    Attributes:
        main_url: Public site URL, also sent as the referer.
        api_url: GraphQL endpoint used for listings and search.
        bypass_url: Primary mirror that serves lesson data per course.
        bypass_fallback_url: Secondary mirror tried when the primary fails.
        timeout: Request timeout in seconds.
        cursor_state_path: Where the CLI keeps listing cursors between runs.
    """

    main_url: str = "https://www.skillshare.com"
    api_url: str = "https://www.skillshare.com/api/graphql"
    bypass_url: str = "https://skillshare.techtanic.xyz/id"
    bypass_fallback_url: str = "https://skillshare-api.heckernohecking.repl.co"
    timeout: float = 30.0
    cursor_state_path: Path = field(default_factory=_default_cursor_state_path)

    @property
    def referer(self) -> str:
        return f"{self.main_url}/"

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Validate keys and convert raw values to the field types."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        coerced = dict(values)
        if "timeout" in coerced:
            try:
                coerced["timeout"] = float(coerced["timeout"])
            except (TypeError, ValueError):
                raise ValueError(f"Invalid timeout: {coerced['timeout']!r}")
        if "cursor_state_path" in coerced:
            coerced["cursor_state_path"] = Path(coerced["cursor_state_path"]).expanduser()
        for name in ("main_url", "api_url", "bypass_url", "bypass_fallback_url"):
            if name in coerced:
                coerced[name] = str(coerced[name]).rstrip("/")
        return coerced

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML mapping.

        Args:
            path: Path to a YAML file whose top-level keys are field names.

        Returns:
            Settings with the file's values applied over the defaults.

        Raises:
            ValueError: If the file is not a mapping or names an unknown field.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")
        logger.debug(f"Loaded settings from {path}")
        return cls(**cls._coerce(data))

    def with_env(self, environ: dict[str, str] | None = None) -> "Settings":
        """Return a copy with ``SKILLSTREAM_*`` environment overrides applied."""
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)
        overrides = {
            name: environ[var] for var, name in ENV_VARS.items() if environ.get(var)
        }
        if not overrides:
            return self
        return dataclasses.replace(self, **self._coerce(overrides))

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Build settings from defaults, an optional YAML file and the environment."""
        base = cls.from_yaml(config_path) if config_path is not None else cls()
        return base.with_env()
