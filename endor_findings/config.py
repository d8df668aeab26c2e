import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from endor_findings.errors import ConfigError

DEFAULT_BASE_URL = "https://api.endorlabs.com/v1"
DEFAULT_TIMEOUT = 60.0

REQUIRED_VARIABLES = ("ENDOR_API_KEY", "ENDOR_API_SECRET", "ENDOR_API_NAMESPACE")


@dataclass(frozen=True)
class Config:
    """Credentials and endpoint settings, built once at startup"""
    api_key: str
    api_secret: str
    namespace: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


def load_config(environ: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None) -> Config:
    """
    Build a Config from environment variables

    When no mapping is passed the process environment is used, after loading
    a .env file (like the other scripts in this repo do with load_dotenv).
    """
    if environ is None:
        # .env is looked up from the working directory, not from this package
        if not load_dotenv(dotenv_path or find_dotenv(usecwd=True)):
            print("Warning: .env file not found or could not be loaded")
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        lines = ["Please set the following environment variables:"]
        lines += [f"  {name}" for name in REQUIRED_VARIABLES]
        raise ConfigError("\n".join(lines))

    raw_timeout = environ.get("ENDOR_API_TIMEOUT")
    timeout = DEFAULT_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"ENDOR_API_TIMEOUT must be a number of seconds, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"ENDOR_API_TIMEOUT must be positive, got {raw_timeout!r}")

    return Config(
        api_key=environ["ENDOR_API_KEY"],
        api_secret=environ["ENDOR_API_SECRET"],
        namespace=environ["ENDOR_API_NAMESPACE"],
        base_url=(environ.get("ENDOR_API_URL") or DEFAULT_BASE_URL).rstrip('/'),
        timeout=timeout,
    )
