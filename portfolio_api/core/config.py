from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, model_validator
from typing import List, Optional
import json
import ipaddress


class Settings(BaseSettings):
    # Project Info
    PROJECT_NAME: str = "Portfolio API"
    API_PREFIX: str = "/api"
    API_V1_STR: str = "/api/v1"

    # Database
    DATABASE_URL: str
    DB_POOL_TIMEOUT: int = 2
    DB_POOL_RECYCLE: int = 1800

    # Security
    JWT_SECRET: str = Field(min_length=32)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    ADMIN_API_KEY: str = Field(min_length=32)
    ADMIN_PASSWORD: str = Field(min_length=8)
    ADMIN_USERNAME: str = "admin"
    BCRYPT_ROUNDS: int = 12
    LOGIN_FAILURE_DELAY_SECONDS: float = 1.0
    AUTH_COOKIE_NAME: str = "auth_token"
    API_KEY_HEADER: str = "X-API-Key"

    # Rate limiting / revocation storage ("memory://" or "redis://host:port/db")
    API_RATE_LIMIT: str = "100 per 15 minutes"
    LOGIN_RATE_LIMIT: str = "5 per 15 minutes"
    CONTACT_RATE_LIMIT: str = "5 per 15 minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    REVOCATION_STORE_URL: str = "memory://"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:4173",
    ]
    FRONTEND_URL: str = ""

    # Email
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    EMAILS_FROM_EMAIL: str = ""
    EMAILS_FROM_NAME: str = "Portfolio"
    ADMIN_EMAIL: str = ""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Monitoring (Optional - Add to .env for production)
    SENTRY_DSN: str = ""

    # Celery & Redis (Task Queue)
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"

    # Proxies
    TRUST_PROXY_HEADERS: bool = True
    TRUSTED_PROXY_IPS: str = "127.0.0.1,::1"

    @field_validator("ENVIRONMENT")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        value = value.lower().strip()
        if value not in {"development", "production", "test"}:
            raise ValueError("ENVIRONMENT must be one of development, production, test")
        return value

    @classmethod
    def _parse_ip_list(cls, value) -> List[str]:
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                    if isinstance(parsed, list):
                        return parsed
                except json.JSONDecodeError as exc:
                    raise ValueError("TRUSTED_PROXY_IPS must be valid JSON or comma-separated IPs") from exc
            return [ip.strip() for ip in raw.split(",")]
        if isinstance(value, list):
            return [str(ip).strip() for ip in value if str(ip).strip()]
        return value

    @field_validator("TRUSTED_PROXY_IPS")
    @classmethod
    def validate_trusted_proxy_ip_format(cls, value: str) -> str:
        normalized = cls._parse_ip_list(value)
        for ip in normalized:
            try:
                ipaddress.ip_address(ip)
            except ValueError as exc:
                raise ValueError(f"Invalid proxy IP address: {ip}") from exc
        return ",".join(normalized)

    @model_validator(mode="after")
    def validate_production_secrets(self):
        if self.ENVIRONMENT == "production":
            normalized_secret = self.JWT_SECRET.strip().lower()
            if "change-me" in normalized_secret or "secret-key-here" in normalized_secret:
                raise ValueError("JWT_SECRET must not use placeholder values in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def db_pool_size(self) -> int:
        return 20 if self.is_production else 5

    @property
    def trusted_proxy_ips(self) -> List[str]:
        return self._parse_ip_list(self.TRUSTED_PROXY_IPS)

    @property
    def cors_origins(self) -> List[str]:
        origins = list(self.BACKEND_CORS_ORIGINS)
        # The configured frontend origin must match exactly for cookies.
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins

    def is_trusted_proxy(self, ip: Optional[str]) -> bool:
        if not ip:
            return False
        if ip in {"127.0.0.1", "::1"}:
            return True
        return ip in self.trusted_proxy_ips

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
    }


settings = Settings()
