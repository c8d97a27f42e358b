from typing import Literal, Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr, field_validator, model_validator

MediaPolicy = Literal["public", "signed"]

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    APP_NAME: str = "Expense Tracker API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["local", "dev", "staging", "prod"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "*"      # CSV or '*'
    LOG_LEVEL: str = "INFO"

    # DB
    DATABASE_URL: SecretStr
    DATABASE_SSL: bool = True
    DB_CREATE_ALL: bool = False

    # Auth (identity provider)
    AUTH_ISSUER: Optional[str] = None
    AUTH_AUDIENCE: Optional[str] = None
    AUTH_JWT_SECRET: SecretStr = SecretStr("")

    # AWS (S3 receipts, DynamoDB preferences)
    S3_ENDPOINT_URL: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: SecretStr = SecretStr("")
    AWS_SECRET_ACCESS_KEY: SecretStr = SecretStr("")
    S3_BUCKET: str = "expense-receipts"
    S3_PREFIX: str = ""

    # Media
    MEDIA_POLICY: MediaPolicy = "signed"      # public|signed
    MEDIA_PUBLIC_BASE: Optional[str] = None   # required when policy=public
    MEDIA_GET_TTL_SEC: int = 604800           # 7 days
    RECEIPT_MAX_BYTES: int = 5 * 1024 * 1024

    # DynamoDB (preferences)
    DYNAMODB_ENDPOINT_URL: Optional[str] = None
    PREFERENCES_TABLE: str = "UserPreferences"

    # -------- validators (presence, format) --------
    @field_validator("DATABASE_URL")
    @classmethod
    def _required_secret(cls, v, info):
        if v is None or (hasattr(v, "get_secret_value") and v.get_secret_value() == ""):
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("S3_BUCKET", "PREFERENCES_TABLE")
    @classmethod
    def _required_plain(cls, v, info):
        if not v:
            raise ValueError(f"{info.field_name} is required (set it in .env)")
        return v

    @field_validator("S3_PREFIX")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        return (v or "").strip().strip("/")

    @field_validator("API_PREFIX")
    @classmethod
    def _normalize_api_prefix(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if v and not v.startswith("/"):
            v = f"/{v}"
        return v

    @field_validator("AUTH_ISSUER", "S3_ENDPOINT_URL", "DYNAMODB_ENDPOINT_URL")
    @classmethod
    def _strip_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip().rstrip("/") or None

    @field_validator("MEDIA_GET_TTL_SEC", "RECEIPT_MAX_BYTES")
    @classmethod
    def _positive(cls, v: int, info):
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    # -------- cross-field checks --------
    @model_validator(mode="after")
    def _cross_checks(self):
        if self.MEDIA_POLICY == "public" and not self.MEDIA_PUBLIC_BASE:
            raise ValueError("MEDIA_PUBLIC_BASE is required when MEDIA_POLICY=public")
        return self

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return ["*"] if self.CORS_ORIGINS.strip() == "*" else [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def MEDIA_PUBLIC_BASE_STRICT(self) -> Optional[str]:
        return self.MEDIA_PUBLIC_BASE.rstrip("/") if self.MEDIA_PUBLIC_BASE else None

    @property
    def JWKS_URL(self) -> Optional[str]:
        if not self.AUTH_ISSUER:
            return None
        return f"{self.AUTH_ISSUER}/.well-known/jwks.json"

settings = Settings()
