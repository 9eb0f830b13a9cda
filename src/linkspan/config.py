"""Library configuration — reads env vars and exposes a singleton.

Loads the clipboard command, browser name, local link domains and log level
from environment variables (with .env support).
.env loading priority: local .env (cwd) > $LINKSPAN_DIR/.env (default ~/.linkspan).
Nothing is required: every setting has a working default, so importing
the handlers never fails on a bare machine.

Key class: Config (singleton instantiated as `config`).
"""

import logging
import os
import shlex
from pathlib import Path

from dotenv import load_dotenv

from .utils import linkspan_dir

logger = logging.getLogger(__name__)

# Hosts whose username links are rewritten to tg://resolve deep links
DEFAULT_LOCAL_DOMAINS = ("t.me", "telegram.me", "telegram.dog")


class Config:
    """Library configuration loaded from environment variables."""

    def __init__(self) -> None:
        self.config_dir = linkspan_dir()

        # Load .env: local (cwd) takes priority over config_dir
        # load_dotenv default override=False means first-loaded wins
        local_env = Path(".env")
        global_env = self.config_dir / ".env"
        if local_env.is_file():
            load_dotenv(local_env)
            logger.debug("Loaded env from %s", local_env.resolve())
        if global_env.is_file():
            load_dotenv(global_env)
            logger.debug("Loaded env from %s", global_env)

        # Command that receives clipboard text on stdin; empty = autodetect
        clipboard_raw = os.getenv("LINKSPAN_CLIPBOARD_COMMAND", "")
        try:
            self.clipboard_command: list[str] = shlex.split(clipboard_raw)
        except ValueError as e:
            raise ValueError(
                f"LINKSPAN_CLIPBOARD_COMMAND is not a valid command line: {e}"
            ) from e

        # webbrowser controller name; None means the platform default
        self.browser: str | None = os.getenv("LINKSPAN_BROWSER") or None

        domains_raw = os.getenv("LINKSPAN_LOCAL_DOMAINS")
        if domains_raw is None:
            self.local_domains: tuple[str, ...] = DEFAULT_LOCAL_DOMAINS
        else:
            self.local_domains = tuple(
                d.strip().lower() for d in domains_raw.split(",") if d.strip()
            )

        # Validated by the CLI, the only consumer
        self.log_level = os.getenv("LINKSPAN_LOG_LEVEL", "INFO").upper()

        logger.debug(
            "Config initialized: dir=%s, clipboard=%s, browser=%s, local_domains=%s",
            self.config_dir,
            self.clipboard_command or "(auto)",
            self.browser or "(default)",
            ",".join(self.local_domains) or "(none)",
        )


config = Config()
