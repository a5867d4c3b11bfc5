from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Document store
    data_file: str = "data/db.json"

    # Auth / JWT
    secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    refresh_token_expire_days: int = 7
    bcrypt_rounds: int = 10

    # Display
    currency_symbol: str = "₺"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
