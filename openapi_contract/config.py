"""Configuration management for OpenAPI contract testing"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Contract testing settings, read from OPENAPI_CONTRACT_* variables"""

    model_config = SettingsConfigDict(
        env_prefix="OPENAPI_CONTRACT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Contract location
    spec_base_path: Optional[str] = None
    strip_prefixes_str: str = Field(default="", validation_alias="OPENAPI_CONTRACT_STRIP_PREFIXES")
    default_spec: str = ""

    # Validation
    max_errors: int = Field(default=20, ge=0)

    # Logging Configuration
    log_level: str = "WARNING"
    log_format: str = "console"

    def get_strip_prefixes(self) -> List[str]:
        """Parse comma-separated request path prefixes"""
        return [prefix.strip() for prefix in self.strip_prefixes_str.split(",") if prefix.strip()]


settings = Settings()
