"""Application configuration using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from anc_search.models.forms import DEFAULT_FORM_CODES, FormCodeMap


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    All settings are validated at startup. Invalid values cause the
    application to fail fast with clear error messages.
    """

    # Search engine (couchdb-lucene) settings
    couchdb_url: str = Field(
        default="http://localhost:5984",
        description="Base URL of the CouchDB server proxying couchdb-lucene",
    )
    couchdb_database: str = Field(
        default="medic",
        min_length=1,
        description="Database holding the data records",
    )
    fti_design_doc: str = Field(
        default="medic",
        min_length=1,
        description="Design document declaring the full-text index",
    )
    fti_index: str = Field(
        default="data_records",
        min_length=1,
        description="Name of the full-text index",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="Search request timeout in seconds",
    )

    # Query settings
    # Lucene allows a maximum of 1024 boolean conditions per query
    lucene_conditional_limit: int = Field(
        default=1000,
        ge=1,
        le=1024,
        description="Maximum patient ids OR-ed into a single search query",
    )
    max_weeks_pregnant: int = Field(
        default=42,
        ge=0,
        description="Upper bound of the default registration window, in weeks",
    )
    min_weeks_pregnant: int = Field(
        default=0,
        ge=0,
        description="Lower bound of the default registration window, in weeks",
    )

    # Form codes, keyed by logical form name
    anc_forms: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FORM_CODES),
        description="Logical form name to form code mapping",
    )

    # Logging Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("couchdb_url")
    @classmethod
    def validate_couchdb_url(cls, v: str) -> str:
        """Ensure the URL has a scheme and no trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"couchdb_url must start with 'http://' or 'https://', got '{v}'"
            )
        return v.rstrip("/")

    @field_validator("anc_forms")
    @classmethod
    def validate_anc_forms(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject blank form codes."""
        blank = sorted(name for name, code in v.items() if not code or not code.strip())
        if blank:
            raise ValueError(f"anc_forms has empty codes for: {', '.join(blank)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"log_level must be one of {valid_levels}, got '{v}'"
            )
        return v_upper

    def model_post_init(self, __context) -> None:
        """Additional validation after model initialization."""
        if self.min_weeks_pregnant > self.max_weeks_pregnant:
            raise ValueError(
                f"min_weeks_pregnant ({self.min_weeks_pregnant}) must be <= "
                f"max_weeks_pregnant ({self.max_weeks_pregnant})"
            )

    def form_code_map(self) -> FormCodeMap:
        """Build the immutable form code lookup table."""
        return FormCodeMap(codes=self.anc_forms)


# Global settings instance, created on first access
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Settings: The application settings

    Raises:
        ValidationError: If settings validation fails
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Convenience function to reload settings (useful for testing)
def reload_settings() -> Settings:
    """Reload settings from environment.

    Returns:
        Settings: The reloaded application settings
    """
    global _settings
    _settings = Settings()
    return _settings
