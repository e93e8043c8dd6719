from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"
    database_url: str = "sqlite://"

    # --- CORS ---
    cors_mode: str = "any"  # any, disabled, reflect, fixed, list
    cors_fixed_origin: str = ""
    allowed_origins: str = ""
    allowed_origin_patterns: str = ""
    cors_log_origins: bool = True
    cors_resolve_timeout: float = 5.0  # segundos, 0 = sin límite

    seed_demo_messages: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins(self) -> tuple[list[str], list[str]]:
        """Retorna (literales, patrones) a partir de ALLOWED_ORIGINS y ALLOWED_ORIGIN_PATTERNS."""
        literals = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        patterns = [p.strip() for p in self.allowed_origin_patterns.split(",") if p.strip()]
        return literals, patterns


@lru_cache
def get_settings() -> Settings:
    return Settings()
