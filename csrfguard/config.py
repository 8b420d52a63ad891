from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

PRODUCTION_ENV = "production"


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing"""
    pass


class Settings(BaseSettings):
    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    LOG_JSON: bool = True
    # CSRF
    CSRF_TOKEN_SECRET: str = ""  # Hashed into the AES key
    CSRF_ISSUER_SECRET: str = ""  # Shared secret for token issuance
    CSRF_EXCLUDED_PATHS: str = ""  # Comma-separated list of exempt paths
    CSRF_COOKIE_FALLBACK: bool = False  # Read raw value from cookie if header absent

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == PRODUCTION_ENV

    @property
    def csrf_excluded_paths(self) -> list[str]:
        paths = []
        for path in self.CSRF_EXCLUDED_PATHS.split(","):
            path = path.strip()
            if path and path not in paths:
                paths.append(path)
        return paths

    def validate_secrets(self) -> None:
        """Raise ConfigurationError if a required secret is not configured."""
        for name in ("CSRF_TOKEN_SECRET", "CSRF_ISSUER_SECRET"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must be set")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
