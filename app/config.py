from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "local"

    database_url: str = "sqlite:///./agrimart.db"

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # pricing
    free_shipping_threshold: float = 10000
    flat_shipping_fee: float = 500

    order_id_prefix: str = "ORD"
    recently_viewed_limit: int = 6

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
