import sys
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from assistant_runner.errors import ConfigurationError

DEFAULT_MODEL = "gpt-3.5-turbo"  # gpt-4
DEFAULT_MAX_RETRIES = 2
DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_WAIT = 600.0
DEFAULT_OUTPUT_DIR = "output"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    model: str = DEFAULT_MODEL
    assistant_id: Optional[str] = None
    thread_id: Optional[str] = None
    max_retries: int = DEFAULT_MAX_RETRIES
    poll_interval: float = DEFAULT_POLL_INTERVAL
    max_wait: float = DEFAULT_MAX_WAIT
    output_dir: str = DEFAULT_OUTPUT_DIR
    log_level: str = "INFO"


def _env_number(name, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if not value >= 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """
    Read settings from the environment, after loading a local .env file.
    Empty strings count as unset.
    """
    if dotenv:
        load_dotenv()

    return Settings(
        api_key=os.getenv("OPENAI_API_KEY") or None,
        model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
        assistant_id=os.getenv("OPENAI_ASSISTANT_ID") or None,
        thread_id=os.getenv("OPENAI_THREAD_ID") or None,
        max_retries=_env_number("OPENAI_MAX_RETRIES", DEFAULT_MAX_RETRIES, int),
        poll_interval=_env_number(
            "ASSISTANT_POLL_INTERVAL", DEFAULT_POLL_INTERVAL, float
        ),
        max_wait=_env_number("ASSISTANT_MAX_WAIT", DEFAULT_MAX_WAIT, float),
        output_dir=os.getenv("ASSISTANT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
