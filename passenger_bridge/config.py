"""
Runtime configuration for the passenger bridge.

The handler never reads the environment itself; a ``BridgeConfig`` is built
once (normally with ``BridgeConfig.from_env()``) and handed to it.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_ALLOWED_ORIGINS = ("http://localhost:8888",)


def _split_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_ALLOWED_ORIGINS
    origins = tuple(o.strip().rstrip("/") for o in raw.split(",") if o.strip())
    return origins or DEFAULT_ALLOWED_ORIGINS


@dataclass(frozen=True)
class BridgeConfig:
    """
    Odoo credentials plus the few knobs of the HTTP surface.

    The four credential fields are mandatory for any request that reaches
    Odoo, but a config without them can still be built: the handler answers
    500 for such deployments instead of failing at import time. Environment
    values that cannot be parsed are listed in ``invalid`` and get the same
    500.
    """

    url: Optional[str] = None
    db: Optional[str] = None
    username: Optional[str] = None
    api_key: Optional[str] = None
    allowed_origins: Tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    timeout: Optional[float] = None
    log_level: str = "INFO"
    invalid: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        """
        Create BridgeConfig from environment variables.

        Returns:
            BridgeConfig: Configuration instance with values from environment
        """
        invalid = []
        timeout = os.getenv("ODOO_TIMEOUT") or None
        if timeout is not None:
            try:
                timeout = float(timeout)
            except ValueError:
                invalid.append("ODOO_TIMEOUT")
                timeout = None

        return cls(
            url=os.getenv("ODOO_URL") or None,
            db=os.getenv("ODOO_DB") or None,
            username=os.getenv("ODOO_USERNAME") or None,
            api_key=os.getenv("ODOO_API_KEY") or None,
            allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS")),
            timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            invalid=tuple(invalid),
        )

    def is_complete(self) -> bool:
        if self.invalid:
            return False
        return all((self.url, self.db, self.username, self.api_key))

    @property
    def default_origin(self) -> str:
        return self.allowed_origins[0]

    def resolve_origin(self, origin: Optional[str]) -> str:
        """Echo ``origin`` back when it is allowed, else the default origin."""
        if origin and origin.rstrip("/") in self.allowed_origins:
            return origin.rstrip("/")
        return self.default_origin
