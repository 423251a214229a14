"""
Runtime configuration, read from the environment.

    DATABASE_URL                 required by the CLI
    SEED_BATCH_SIZE              upsert batch size (default 100)
    TENANT_BUSINESS_NAME         required
    TENANT_CURRENCY              default COP
    TENANT_LOCALE                default es-CO
    TENANT_TIMEZONE              default America/Bogota
    TENANT_QUOTE_VALIDITY_DAYS   default 15
    TENANT_CONTACT_EMAIL / TENANT_CONTACT_PHONE / TENANT_BUSINESS_ADDRESS  optional
"""
import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from glasify.services.exceptions import ConfigError

TENANT_CONFIG_ID = "1"
DEFAULT_BATCH_SIZE = 100

DEFAULT_CURRENCY = "COP"
DEFAULT_LOCALE = "es-CO"
DEFAULT_TIMEZONE = "America/Bogota"
DEFAULT_QUOTE_VALIDITY_DAYS = 15

# env var -> TenantSettings field
_TENANT_ENV = {
    "TENANT_BUSINESS_NAME": "business_name",
    "TENANT_CURRENCY": "currency",
    "TENANT_LOCALE": "locale",
    "TENANT_TIMEZONE": "timezone",
    "TENANT_QUOTE_VALIDITY_DAYS": "quote_validity_days",
    "TENANT_CONTACT_EMAIL": "contact_email",
    "TENANT_CONTACT_PHONE": "contact_phone",
    "TENANT_BUSINESS_ADDRESS": "business_address",
}


class TenantSettings(BaseModel):
    """Singleton business configuration persisted as TenantConfig id "1"."""
    business_name: str = Field(..., min_length=2, max_length=100)
    currency: str = Field(DEFAULT_CURRENCY, pattern=r"^[A-Z]{3}$", description="ISO 4217 code")
    locale: str = Field(DEFAULT_LOCALE, pattern=r"^[a-z]{2}-[A-Z]{2}$")
    timezone: str = Field(DEFAULT_TIMEZONE, pattern=r"^[A-Za-z]+(/[A-Za-z0-9_+-]+)*$", description="IANA tz id")
    quote_validity_days: int = Field(DEFAULT_QUOTE_VALIDITY_DAYS, gt=0, le=365)
    contact_email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    contact_phone: Optional[str] = Field(None, max_length=30)
    business_address: Optional[str] = Field(None, max_length=200)


def tenant_env_values(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect the non-empty TENANT_* variables keyed by TenantSettings field."""
    env = os.environ if environ is None else environ
    values: Dict[str, str] = {}
    for var, field_name in _TENANT_ENV.items():
        raw = env.get(var, "")
        if raw and raw.strip():
            values[field_name] = raw.strip()
    return values


def load_tenant_settings(environ: Optional[Mapping[str, str]] = None) -> TenantSettings:
    values = tenant_env_values(environ)
    try:
        return TenantSettings.model_validate(values)
    except PydanticValidationError as exc:
        field_to_var = {v: k for k, v in _TENANT_ENV.items()}
        bad = sorted({field_to_var.get(str(e["loc"][0]), str(e["loc"][0])) for e in exc.errors() if e.get("loc")})
        raise ConfigError(f"Invalid tenant configuration: {', '.join(bad)}", variables=bad) from exc


def normalize_database_url(url: str) -> str:
    """Force the async driver onto plain postgres URLs."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://") and "+asyncpg" not in url:
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://") and "+aiosqlite" not in url:
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def get_database_url(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    url = env.get("DATABASE_URL", "").strip()
    if not url:
        raise ConfigError("DATABASE_URL is not set", variables=["DATABASE_URL"])
    return normalize_database_url(url)


def get_batch_size(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    raw = env.get("SEED_BATCH_SIZE", "").strip()
    if not raw:
        return DEFAULT_BATCH_SIZE
    try:
        size = int(raw)
    except ValueError:
        raise ConfigError(f"SEED_BATCH_SIZE must be an integer, got {raw!r}", variables=["SEED_BATCH_SIZE"])
    if size <= 0:
        raise ConfigError("SEED_BATCH_SIZE must be positive", variables=["SEED_BATCH_SIZE"])
    return size
