"""Application configuration contract."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from json_repeaters.repeaters.declaration import RepeaterNameDeclaration, parse_declaration


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(alias="APP_ENV", default="dev")
    log_level: str = Field(alias="LOG_LEVEL", default="INFO")

    # JSON text: either ["name", ...] or {"publicKey": "underlyingName", ...}
    json_repeaters: str = Field(alias="JSON_REPEATERS", default="[]")
    repeater_definitions_path: str = Field(alias="REPEATER_DEFINITIONS_PATH", default="")
    dynamic_repeaters_dir: str = Field(alias="DYNAMIC_REPEATERS_DIR", default="")


def load_declaration(settings: Settings) -> RepeaterNameDeclaration:
    """Parse JSON_REPEATERS into its declaration variant.

    Raises DeclarationError (a ConfigError) when the value is not valid JSON
    or is neither a plain list of names nor an alias map.
    """
    return parse_declaration(settings.json_repeaters)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
