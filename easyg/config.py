from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/easyg"
    database_echo: bool = False
    api_key: str | None = None

    # Import path of the pattern oracle, "package.module" or "package.module:attr".
    pattern_oracle: str | None = None

    # Questionnaire parsing
    questionnaire_schema: Literal["v1", "v2"] = "v1"  # v1 = Foreplay/Midway/End, v2 = Start/Midway/End
    tag_match: Literal["contains", "exact"] = "contains"

    # Firmware wire format: emit key "10" (reserved constant)
    wire_include_reserved: bool = True

    auto_create_schema: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
