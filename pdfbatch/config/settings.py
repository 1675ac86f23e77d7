"""Configuration settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource

from pdfbatch.config.constants import (
    DEFAULT_ADOBE_API_BASE_URL,
    DEFAULT_ADOBE_ENV_FILE,
    DEFAULT_ADOBE_MAX_POLLS,
    DEFAULT_ADOBE_POLL_INTERVAL,
    DEFAULT_ADOBE_SCOPE,
    DEFAULT_ADOBE_TIMEOUT,
    DEFAULT_ADOBE_TOKEN_URL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CONFIG_FILE,
    DEFAULT_EXTENSIONS,
    DEFAULT_INPUT_DIR,
    DEFAULT_LOG_DIR,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGE_FORMAT,
    DEFAULT_PAGE_MARGIN,
    DEFAULT_PAGE_TIMEOUT_MS,
    PAGE_SIZES_INCHES,
    SUPPORTED_EXTENSIONS,
    USER_CONFIG_FILE,
)

RenderMethodName = Literal["playwright", "adobe"]


class InputConfig(BaseModel):
    """Input scanning configuration."""

    default_dir: str = DEFAULT_INPUT_DIR
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    follow_symlinks: bool = False

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = []
        for ext in value:
            ext = ext.lower()
            if not ext.startswith("."):
                ext = f".{ext}"
            if ext not in SUPPORTED_EXTENSIONS:
                raise ValueError(
                    f"Unsupported extension '{ext}'. "
                    f"Options: {', '.join(SUPPORTED_EXTENSIONS)}"
                )
            normalized.append(ext)
        return normalized


class OutputConfig(BaseModel):
    """Output configuration."""

    default_dir: str = DEFAULT_OUTPUT_DIR
    on_existing: Literal["skip", "overwrite", "newer"] = "skip"


class ConcurrencyConfig(BaseModel):
    """Concurrency configuration."""

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)


class RenderConfig(BaseModel):
    """PDF rendering configuration."""

    methods: list[RenderMethodName] = Field(default_factory=lambda: ["playwright", "adobe"])
    page_format: str = DEFAULT_PAGE_FORMAT
    margin: str = DEFAULT_PAGE_MARGIN
    timeout_ms: int = Field(default=DEFAULT_PAGE_TIMEOUT_MS, ge=1)

    @field_validator("methods")
    @classmethod
    def _at_least_one_method(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one rendering method is required")
        # Drop duplicates, keep priority order
        return list(dict.fromkeys(value))

    @field_validator("page_format")
    @classmethod
    def _known_page_format(cls, value: str) -> str:
        if value not in PAGE_SIZES_INCHES:
            raise ValueError(
                f"Unsupported page format: {value}. Options: {', '.join(PAGE_SIZES_INCHES)}"
            )
        return value


class AdobeConfig(BaseModel):
    """Adobe PDF Services configuration (credentials come from the environment)."""

    env_file: str = DEFAULT_ADOBE_ENV_FILE
    token_url: str = DEFAULT_ADOBE_TOKEN_URL
    api_base_url: str = DEFAULT_ADOBE_API_BASE_URL
    scope: str = DEFAULT_ADOBE_SCOPE
    poll_interval: float = Field(default=DEFAULT_ADOBE_POLL_INTERVAL, ge=0)
    max_polls: int = Field(default=DEFAULT_ADOBE_MAX_POLLS, ge=1)
    timeout: float = Field(default=DEFAULT_ADOBE_TIMEOUT, gt=0)


class PdfBatchSettings(BaseSettings):
    """Main configuration class for pdfbatch."""

    model_config = SettingsConfigDict(
        env_prefix="PDFBATCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings sources to include YAML file."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            # Later files win: the project file overrides the user file
            YamlConfigSettingsSource(
                settings_cls, yaml_file=[USER_CONFIG_FILE, Path(DEFAULT_CONFIG_FILE)]
            ),
            file_secret_settings,
        )

    # Sub-configurations
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    concurrency: ConcurrencyConfig = Field(default_factory=ConcurrencyConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    adobe: AdobeConfig = Field(default_factory=AdobeConfig)

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_dir: str = DEFAULT_LOG_DIR

    def get_input_dir(self, base_path: Path | None = None) -> Path:
        """Get the input directory path."""
        if base_path:
            return base_path / self.input.default_dir
        return Path(self.input.default_dir)

    def get_output_dir(self, base_path: Path | None = None) -> Path:
        """Get the output directory path."""
        if base_path:
            return base_path / self.output.default_dir
        return Path(self.output.default_dir)


@lru_cache
def get_settings() -> PdfBatchSettings:
    """Get cached settings instance."""
    return PdfBatchSettings()


def reload_settings() -> PdfBatchSettings:
    """Force reload settings (clear cache)."""
    get_settings.cache_clear()
    return get_settings()
