"""Run configuration.

Command-line flags end up in an immutable :class:`RefreshConfig`. Settings
that are not exposed as flags are read from the environment and can be set
in a ``.env`` file placed in the working directory:

```env
# .env
CDN77_API_URL=https://api.cdn77.com/v2.0
REQUEST_TIMEOUT_SECONDS=30
EMAIL=webmaster@example.com
```

The variables are loaded via *python-dotenv*.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .errors import ConfigError

# --- Environment configuration ------------------------------------------------

# Load variables from .env if present; a missing file is not an error
load_dotenv()

DEFAULT_API_URL = os.getenv("CDN77_API_URL", "https://api.cdn77.com/v2.0")
_DEFAULT_EMAIL = os.getenv("EMAIL", "contact@example.com")
DEFAULT_USER_AGENT = f"cdn77-refresh (+{_DEFAULT_EMAIL})"


def _read_timeout() -> float:
    raw = os.getenv("REQUEST_TIMEOUT_SECONDS", "30")
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ConfigError(f"REQUEST_TIMEOUT_SECONDS is not a number: {raw!r}") from e
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"REQUEST_TIMEOUT_SECONDS must be a positive number, got {raw!r}")
    return timeout


@dataclass(frozen=True)
class RefreshConfig:
    """Configuration of a single refresh run."""

    login: str
    token: str
    site: str
    sitemap: str = ""
    purge_all: bool = False
    verbose: bool = False
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        # presence is the only check, formats are left to the API
        for name in ("login", "token", "site"):
            if not getattr(self, name):
                raise ConfigError(f"Missing required setting: {name}")

    @classmethod
    def from_args(cls, args) -> "RefreshConfig":
        """Build the configuration from parsed ``argparse`` arguments."""
        return cls(
            login=args.login,
            token=args.token,
            site=args.site,
            sitemap=args.sitemap or "",
            purge_all=args.purge_all,
            verbose=args.verbose,
            timeout=_read_timeout(),
        )
