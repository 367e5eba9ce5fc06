from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="REVTRACK_", extra="ignore")

    db_backend: str = "sqlite"
    db_path: str = "revtrack.db"
    db_url: str = ""

    log_level: str = "INFO"
    log_json: bool = False

    # "total" rounds each monthly sum once, "item" rounds every contribution
    rounding_policy: str = "total"
    default_mode: str = "cash"


settings = Settings()
