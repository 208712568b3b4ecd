"""
Configuration management for translate-text-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from translate_text_ai.exceptions import ConfigurationError
from translate_text_ai.languages import Language

# Load .env file if present (before Settings initialization)
load_dotenv()


class LLMProviderType(str, Enum):
    """Available LLM providers."""

    OPENROUTER = "openrouter"
    GEMINI = "gemini"


# Environment variable holding each provider's credential
API_KEY_ENV_VARS = {
    LLMProviderType.OPENROUTER: "OPENROUTER_API_KEY",
    LLMProviderType.GEMINI: "GEMINI_API_KEY",
}


class PageFormat(str, Enum):
    """Export page sizes."""

    A4 = "a4"
    LETTER = "letter"


class OverflowPolicy(str, Enum):
    """What to do when the rendered output is taller than one page."""

    SLICE = "slice"  # one page per horizontal band
    SHRINK = "shrink"  # downscale onto a single page


class TranslationConfig(BaseModel):
    """Configuration for translation."""

    provider: LLMProviderType = Field(default=LLMProviderType.OPENROUTER)
    # Model alias ("default", "fast", ...) or a full model name
    model: str = Field(default="default")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=256, le=32000)
    timeout_seconds: float = Field(default=120.0, ge=5.0, le=600.0)
    max_retries: int = Field(default=3, ge=1, le=10)
    default_source_language: Language = Field(default=Language.AUTO_DETECT)
    default_target_language: Language = Field(default=Language.ENGLISH)
    # Clear a previous result as soon as the input text is edited
    clear_output_on_edit: bool = Field(default=False)
    openrouter_api_key: str = Field(default="")
    gemini_api_key: str = Field(default="")

    @field_validator("default_target_language")
    @classmethod
    def target_not_auto(cls, v: Language) -> Language:
        """AUTO_DETECT is a source-only value."""
        if v is Language.AUTO_DETECT:
            raise ValueError("default_target_language cannot be 'auto'")
        return v

    def api_key(self) -> str:
        """API key for the selected provider ('' when unset)."""
        if self.provider == LLMProviderType.GEMINI:
            return self.gemini_api_key
        return self.openrouter_api_key

    def require_api_key(self) -> str:
        """
        Return the selected provider's API key.

        Raises:
            ConfigurationError: If the key is missing.
        """
        key = self.api_key()
        if not key:
            env_var = API_KEY_ENV_VARS[self.provider]
            raise ConfigurationError(
                f"{self.provider.value} API key not configured. "
                f"Set the {env_var} environment variable or add it to the config file.",
                code="missing_api_key",
                details={"provider": self.provider.value, "env_var": env_var},
            )
        return key


class ExportConfig(BaseModel):
    """Configuration for PDF export."""

    filename: str = Field(default="translation.pdf")
    output_dir: Path = Field(default=Path("."))
    title: str = Field(default="Translation Result")
    page_format: PageFormat = Field(default=PageFormat.A4)
    margin_mm: float = Field(default=10.0, ge=0.0, le=50.0)
    header_height_mm: float = Field(default=30.0, ge=10.0, le=100.0)
    bottom_margin_mm: float = Field(default=10.0, ge=0.0, le=50.0)
    # Capture resolution relative to logical pixels
    render_scale: float = Field(default=2.0, ge=2.0, le=6.0)
    # Logical width of the rendered output region
    render_width: int = Field(default=640, ge=200, le=2000)
    font_size: float = Field(default=14.0, ge=6.0, le=48.0)
    overflow_policy: OverflowPolicy = Field(default=OverflowPolicy.SLICE)

    @field_validator("output_dir")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory."""
        return Path(v).expanduser()


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=Path("./logs/translate_text.log"))
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for simpler env vars
        env_nested_delimiter="__",
        extra="ignore",
    )

    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for API keys."""
        super().__init__(**data)
        if not self.translation.openrouter_api_key:
            self.translation.openrouter_api_key = os.getenv("OPENROUTER_API_KEY", "")
        if not self.translation.gemini_api_key:
            self.translation.gemini_api_key = os.getenv("GEMINI_API_KEY", "")

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid config file {path}: {e}", code="invalid_config"
            ) from e

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(
                f"Invalid config file {path}: expected a mapping", code="invalid_config"
            )

        yaml_config = _substitute_env_vars(yaml_config)
        return cls(**yaml_config)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            result[key] = os.getenv(value[2:-1], "")
        else:
            result[key] = value
    return result


DEFAULT_CONFIG_PATHS = (
    Path("config.yaml"),
    Path("config.yml"),
    Path(".translate-text.yaml"),
)


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for a config file in
            the current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        for p in DEFAULT_CONFIG_PATHS:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


DEFAULT_CONFIG = """# translate-text-ai configuration

translation:
  # Provider: "openrouter" or "gemini"
  provider: openrouter
  # Model alias (default, fast, quality) or a full model name
  model: default
  temperature: 0.3
  default_source_language: auto
  default_target_language: en
  # Clear the previous result as soon as the input is edited
  clear_output_on_edit: false
  # openrouter_api_key: ${OPENROUTER_API_KEY}
  # gemini_api_key: ${GEMINI_API_KEY}

export:
  filename: translation.pdf
  output_dir: .
  page_format: a4
  margin_mm: 10
  header_height_mm: 30
  # Capture resolution (>= 2x keeps text legible after placement)
  render_scale: 2
  # "slice" paginates long output, "shrink" squeezes it onto one page
  overflow_policy: slice

logging:
  level: INFO
  file: ./logs/translate_text.log
"""


def create_default_config(path: Path | str = "config.yaml") -> Path:
    """Create a default configuration file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    return path
