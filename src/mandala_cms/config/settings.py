# src/mandala_cms/config/settings.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]
VALID_DATABASE_BACKENDS = ["sqlite", "mongo"]

MOTO_SERVER_URL = "http://localhost:5000"


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from mandala_cms.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="mandala-cms",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # Document store
    database_backend: str = Field(
        default="sqlite",
        description="Document store backend: sqlite or mongo"
    )

    sqlite_path: str = Field(
        default="mandala_cms.db",
        description="SQLite database file for the local document store"
    )

    mongodb_uri: Optional[str] = Field(
        default=None,
        alias="MONGODB_URI",
        description="MongoDB connection string"
    )

    mongodb_database: str = Field(
        default="mandala_cms",
        description="MongoDB database name when the URI does not name one"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # Media storage
    s3_bucket_name: str = Field(
        default="mandala-cms-media",
        description="S3 bucket holding uploaded media"
    )

    media_public_base_url: Optional[str] = Field(
        default=None,
        description="Public base URL media is served from (CDN or bucket website)"
    )

    # Site content
    company_profile_id: str = Field(
        default="4f0BUdgkIKlNvWuufql8",
        description="Document id of the company profile singleton"
    )

    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode aliases."""
        if v:
            mode_mapping = {
                "local": "local-dev",
                "mock": "aws-mock",
                "prod": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator('database_backend')
    @classmethod
    def validate_database_backend(cls, v):
        """Validate the document store backend name."""
        v = v.lower()
        if v not in VALID_DATABASE_BACKENDS:
            raise ValueError(f"Invalid database_backend: {v}. Must be one of {VALID_DATABASE_BACKENDS}")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @model_validator(mode='after')
    def apply_mode_defaults(self):
        """Fill endpoint and mock credentials for aws-mock, require a URI for mongo."""
        if self.deployment_mode == "aws-mock":
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = MOTO_SERVER_URL
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        if self.database_backend == "mongo" and not self.mongodb_uri:
            raise ValueError("MONGODB_URI must be set when database_backend is 'mongo'")
        return self

    def get_environment_dict(self) -> dict:
        """Get configuration as environment variables, in the form `show-config --env` prints.

        Returns:
            Dictionary of environment variables
        """
        return {
            'DEPLOYMENT_MODE': self.deployment_mode,
            'DATABASE_BACKEND': self.database_backend,
            'SQLITE_PATH': self.sqlite_path,
            'MONGODB_URI': self.mongodb_uri or '',
            'S3_BUCKET_NAME': self.s3_bucket_name,
            'AWS_DEFAULT_REGION': self.aws_region,
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'MEDIA_PUBLIC_BASE_URL': self.media_public_base_url or '',
            'COMPANY_PROFILE_ID': self.company_profile_id,
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
