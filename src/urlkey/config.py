"""
Configuration management for urlkey.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserConfig(BaseSettings):
    """Configuration for the URL parser."""

    suppress_transcoding: bool = Field(
        default=False,
        description="Never pass domain labels through the IDNA transcoder",
    )

    model_config = SettingsConfigDict(env_prefix="URLKEY_PARSER_")


class SuffixConfig(BaseSettings):
    """Configuration for public suffix resolution."""

    psl_file: Optional[Path] = Field(
        default=None,
        description=(
            "Path to a public_suffix_list.dat file. "
            "Uses the list bundled with publicsuffixlist when unset."
        ),
    )

    model_config = SettingsConfigDict(env_prefix="URLKEY_SUFFIX_")


class OutputConfig(BaseSettings):
    """Configuration for fingerprint output."""

    default_space: str = Field(
        default="xxh64", description="Hash space for CLI output: 'xxh64' or 'sha256'"
    )
    compression: str = Field(default="zstd", description="Parquet compression codec")
    compression_level: int = Field(
        default=6, description="Compression level (1-22 for zstd)"
    )

    model_config = SettingsConfigDict(env_prefix="URLKEY_OUTPUT_")


class Config(BaseSettings):
    """Main configuration."""

    # Sub-configs
    parser: ParserConfig = Field(default_factory=ParserConfig)
    suffix: SuffixConfig = Field(default_factory=SuffixConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Global settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="URLKEY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
