"""Guestlist Server Configuration."""

import logging
from datetime import timedelta
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    app_name: str = "Guestlist"
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Paths
    data_dir: Path = Path.home() / "guestlist" / "data"

    # Database
    db_path: Path = Path.home() / "guestlist" / "data" / "guestlist.db"

    # Sessions
    session_ttl_days: int = 7
    session_cookie_name: str = "session"
    cookie_secure: bool = True

    # Invite codes
    invite_code_length: int = 6
    invite_code_alphabet: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I

    # Admin credentials
    min_password_length: int = 8
    generated_password_length: int = 16

    # Dashboard
    recent_rsvps_limit: int = 5

    model_config = {"env_prefix": "GUESTLIST_"}

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(days=self.session_ttl_days)

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        for d in [self.data_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
settings.ensure_dirs()
