import logging
import os
from functools import lru_cache
from typing import Dict, List, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, ValidationError, model_validator

from metrics_snapshot.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"
DEFAULT_REPORTS_DIR = "reports"


def _load_environment(env_file: Optional[str]) -> Dict[str, str]:
    """
    Merge the optional dotenv file with the process environment.

    Values already present in the process environment win over the file, and
    os.environ itself is left untouched.
    """
    values: Dict[str, str] = {}
    if env_file:
        if os.path.isfile(env_file):
            try:
                file_values = dotenv_values(env_file)
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigurationError(f"Could not read env file {env_file}: {exc}") from exc
            for key, value in file_values.items():
                if value is not None:
                    values[key] = value
        else:
            logger.info("No env file found at %s, using process environment only", env_file)
    values.update(os.environ)
    return values


def _get(env: Dict[str, str], key: str) -> Optional[str]:
    value = env.get(key, "").strip()
    return value or None


class Settings(BaseModel):
    # SMTP
    smtp_host: Optional[str] = Field(
        default=None,
        description="SMTP server hostname; mailing is disabled when unset",
    )
    smtp_port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="SMTP server port, e.g. 587 (STARTTLS) or 465 (implicit TLS)",
    )
    smtp_user: Optional[str] = Field(
        default=None,
        description="Username for SMTP authentication (login is skipped when unset)",
    )
    smtp_password: Optional[str] = Field(
        default=None,
        description="Password for SMTP authentication",
    )
    smtp_from: Optional[str] = Field(
        default=None,
        description="Sender address used in the From header",
    )
    smtp_to: List[str] = Field(
        default_factory=list,
        description="Recipient addresses, taken from the comma-separated SMTP_TO",
    )
    smtp_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Connection timeout in seconds for the SMTP dial",
    )

    # Reports
    reports_dir: str = Field(
        default=DEFAULT_REPORTS_DIR,
        description="Directory the CSV snapshots are written to",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level, e.g. DEBUG or INFO",
    )

    @model_validator(mode="after")
    def _check_smtp_complete(self) -> "Settings":
        if self.smtp_host is not None:
            if self.smtp_port is None:
                raise ValueError("SMTP_PORT is required when SMTP_HOST is set")
            if not self.smtp_to:
                raise ValueError("SMTP_TO is required when SMTP_HOST is set")
        return self

    @property
    def mail_enabled(self) -> bool:
        return self.smtp_host is not None

    @classmethod
    def from_env(cls, env_file: Optional[str] = DEFAULT_ENV_FILE) -> "Settings":
        env = _load_environment(env_file)

        raw_to = env.get("SMTP_TO", "")
        smtp_to = [addr.strip() for addr in raw_to.split(",") if addr.strip()]

        values = {
            "smtp_host": _get(env, "SMTP_HOST"),
            "smtp_port": _get(env, "SMTP_PORT"),
            "smtp_user": _get(env, "SMTP_USER"),
            "smtp_password": env.get("SMTP_PASSWORD") or None,
            "smtp_from": _get(env, "SMTP_FROM"),
            "smtp_to": smtp_to,
            "reports_dir": _get(env, "DIRECTORY_PATH") or DEFAULT_REPORTS_DIR,
            "log_level": (_get(env, "LOG_LEVEL") or "INFO").upper(),
        }
        timeout = _get(env, "SMTP_TIMEOUT")
        if timeout is not None:
            values["smtp_timeout"] = timeout

        if not isinstance(logging.getLevelName(values["log_level"]), int):
            raise ConfigurationError(f"Unknown LOG_LEVEL {values['log_level']!r}")

        try:
            settings = cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc

        return settings


@lru_cache(maxsize=1)
def get_settings(env_file: Optional[str] = DEFAULT_ENV_FILE) -> Settings:
    return Settings.from_env(env_file)
