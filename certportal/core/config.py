# certportal/core/config.py
import os
import re
from datetime import timedelta
from functools import lru_cache
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_DURATION = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> timedelta:
    """Converte "2h", "30m", "45s", "1d" ou segundos puros em timedelta."""
    match = _DURATION.match(str(value))
    if not match:
        raise ValueError(f"Duração inválida: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'certificados.db')}")


class Settings(BaseModel):
    # construído uma vez no startup e repassado via app.state
    model_config = ConfigDict(frozen=True, validate_default=True)

    MIN_SECRET_LENGTH: ClassVar[int] = 16

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    JWT_SECRET: str = Field(default_factory=lambda: os.getenv("JWT_SECRET", ""), min_length=MIN_SECRET_LENGTH)
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = Field(default_factory=lambda: os.getenv("JWT_EXPIRES_IN", "2h"))
    BCRYPT_SALT_ROUNDS: int = Field(default_factory=lambda: os.getenv("BCRYPT_SALT_ROUNDS", "12"), ge=4, le=31)
    ADMIN_EMAIL: str = Field(default_factory=lambda: os.getenv("ADMIN_EMAIL", "admin@certificados.com"))
    ADMIN_PASSWORD: str = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "Admin@123"))
    FRONTEND_URL: str = Field(default_factory=lambda: os.getenv("FRONTEND_URL", "http://localhost:5173"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    AUTO_MIGRATE: bool = Field(default_factory=lambda: os.getenv("AUTO_MIGRATE", "true"))
    METRICS_ENABLED: bool = Field(default_factory=lambda: os.getenv("METRICS_ENABLED", "true"))

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def _check_expires_in(cls, value: str) -> str:
        parse_duration(value)
        return value

    @property
    def access_token_ttl(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Lê o ambiente (e o .env, se houver). Falha no startup se JWT_SECRET for curto."""
    load_dotenv()
    return Settings()
