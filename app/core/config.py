from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="EVAL_STORE_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "eval-run-store"
    environment: str = "local"
    log_level: str = "INFO"
    store_log_level: str = "INFO"

    # Storage (root is resolved against the working directory at open time)
    eval_store_root: str = ".genkit/evals"
    index_file_name: str = "index.txt"

settings = Settings()
