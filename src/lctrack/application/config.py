from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from lctrack.domain.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_DB_FILENAME,
    DEFAULT_INTERVAL_DAYS,
    ENV_PREFIX,
)


def config_file_candidates() -> list[Path]:
    return [
        Path.home() / ".config" / CONFIG_DIR_NAME / "config.toml",
        Path.home() / f".{CONFIG_DIR_NAME}.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for lctrack.
    Supports loading from:
    1. Config file (~/.config/lctrack/config.toml or ~/.lctrack.toml)
    2. Environment variables (LCTRACK_*)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
    )

    # Storage
    db_path: Path = Path(DEFAULT_DB_FILENAME)

    # Scheduling
    interval_days: int = Field(default=DEFAULT_INTERVAL_DAYS, ge=1)

    # Output
    verbose: int = 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Earlier sources win: CLI overrides, then env, then the first existing TOML file
        toml_file = next((f for f in config_file_candidates() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("db_path", mode="before")
    @classmethod
    def resolve_db_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lctrack/config.toml (if exists)
    3. Environment variables (LCTRACK_*)
    4. cli_overrides (passed from Typer); None values are dropped
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
