"""Client configuration and credential resolution."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .rate_limit import DEFAULT_MIN_INTERVAL

DEFAULT_HOST = "https://coinbase.com"
DEFAULT_BASE_PATH = "/api/v3/brokerage"
DEFAULT_TIMEOUT_SECS = 60

ENV_KEY = "COINBASE_KEY"
ENV_SECRET = "COINBASE_SECRET"
ENV_HOST = "COINBASE_HOST"
ENV_PATH = "COINBASE_PATH"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a :class:`CoinbaseTradeClient`.

    Empty credential fields are filled by :meth:`resolve`.
    """

    key: str = ""
    secret: str = ""
    host: str = ""
    base_path: str = ""
    timeout: float = DEFAULT_TIMEOUT_SECS
    min_interval: float = DEFAULT_MIN_INTERVAL

    @property
    def has_credentials(self) -> bool:
        return bool(self.key) and bool(self.secret)

    @classmethod
    def resolve(
        cls,
        config: Optional["ClientConfig"] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ClientConfig":
        """Fill empty fields from the environment, then from defaults.

        Explicit values take precedence over ``COINBASE_*`` environment
        variables, which take precedence over the production defaults.
        """
        config = config or cls()
        env = os.environ if environ is None else environ
        return replace(
            config,
            key=config.key or env.get(ENV_KEY, ""),
            secret=config.secret or env.get(ENV_SECRET, ""),
            host=(config.host or env.get(ENV_HOST, "") or DEFAULT_HOST).rstrip("/"),
            base_path=config.base_path or env.get(ENV_PATH, "") or DEFAULT_BASE_PATH,
        )
