from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    # Claim carrying the caller identity; session tokens put it in "sub"
    jwt_identity_claim: str = "sub"
    session_cookie_name: str = "__session"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/api"
    frontend_url: str = "http://localhost:5173"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_schema: str = "public"
    port: int = 8000

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False


settings = Settings()
