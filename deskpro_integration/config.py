from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppSettings:
    root_url: str
    api_key: str
    sso_secret: str
    timeout_seconds: int
    loginkey_db_path: str
    loginkey_ttl_seconds: int
    sso_max_age_seconds: int
    log_level: str
    log_file: str

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        root_url = os.getenv("DESKPRO_ROOT_URL", "").strip().rstrip("/")
        api_key = os.getenv("DESKPRO_API_KEY", "").strip()
        sso_secret = os.getenv("DESKPRO_SSO_SECRET", "").strip()

        timeout_seconds = int(os.getenv("DESKPRO_TIMEOUT_SECONDS", "30"))
        loginkey_ttl_seconds = int(os.getenv("DESKPRO_LOGINKEY_TTL_SECONDS", "900"))
        sso_max_age_seconds = int(os.getenv("DESKPRO_SSO_MAX_AGE_SECONDS", "30000"))

        default_db_path = os.path.join(os.getcwd(), "deskpro_loginkeys.db")
        loginkey_db_path = os.getenv("DESKPRO_LOGINKEY_DB_PATH", default_db_path).strip()

        log_level = os.getenv("DESKPRO_LOG_LEVEL", "INFO").strip().upper()
        log_file = os.getenv("DESKPRO_LOG_FILE", "").strip()

        settings = AppSettings(
            root_url=root_url,
            api_key=api_key,
            sso_secret=sso_secret,
            timeout_seconds=timeout_seconds,
            loginkey_db_path=loginkey_db_path,
            loginkey_ttl_seconds=loginkey_ttl_seconds,
            sso_max_age_seconds=sso_max_age_seconds,
            log_level=log_level,
            log_file=log_file,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        missing = []
        if not self.root_url:
            missing.append("DESKPRO_ROOT_URL")
        if not self.api_key:
            missing.append("DESKPRO_API_KEY")

        if missing:
            raise ConfigurationError(
                "Missing required settings: " + ", ".join(missing)
            )

        if not self.root_url.startswith(("http://", "https://")):
            raise ConfigurationError("DESKPRO_ROOT_URL must be an http:// or https:// URL")

        if ":" not in self.api_key:
            raise ConfigurationError("DESKPRO_API_KEY must use the id:secret format")

        if self.timeout_seconds <= 0:
            raise ConfigurationError("DESKPRO_TIMEOUT_SECONDS must be greater than 0")

        if self.loginkey_ttl_seconds <= 0:
            raise ConfigurationError("DESKPRO_LOGINKEY_TTL_SECONDS must be greater than 0")

        if self.sso_max_age_seconds <= 0:
            raise ConfigurationError("DESKPRO_SSO_MAX_AGE_SECONDS must be greater than 0")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ConfigurationError(
                "DESKPRO_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
            )


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []

    explicit = os.getenv("DESKPRO_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())

    candidates.append(Path.cwd() / file_name)
    candidates.append(Path(__file__).resolve().parent.parent / file_name)

    unique_candidates: list[Path] = []
    seen: set[str] = set()
    for path in candidates:
        normalized = str(path.resolve()) if path.exists() else str(path)
        if normalized in seen:
            continue
        seen.add(normalized)
        unique_candidates.append(path)
    return unique_candidates


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return

    try:
        with path.open("r", encoding="utf-8") as env_file:
            for raw_line in env_file:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")

                if key and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        return
