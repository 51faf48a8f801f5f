# agilesync/config.py

from functools import lru_cache
from typing import List, Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central application settings (Pydantic v2).

    - Field names match the .env keys one-to-one.
    - Superadmin credentials are optional at load time; a missing pair is
      reported when the admin path is used, not at import.
    """

    # ------------------------------------------------------------------------------------
    # App / API
    # ------------------------------------------------------------------------------------
    APP_NAME: str = Field(default="agilesync-identity")
    ENVIRONMENT: str = Field(default="local")  # local|dev|staging|prod
    PROJECT_VERSION: str = Field(default="1.0.0")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: Optional[str] = Field(default=None)  # json|console; derived from ENVIRONMENT when unset

    # ------------------------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------------------------
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./agilesync.db",
        description="Async SQLAlchemy URL (sqlite+aiosqlite or postgresql+asyncpg)",
    )
    DATABASE_POOL_SIZE: int = Field(default=5)
    DATABASE_MAX_OVERFLOW: int = Field(default=10)
    AUTO_CREATE_SCHEMA: bool = Field(default=True)

    # ------------------------------------------------------------------------------------
    # Sessions / Superadmin
    # ------------------------------------------------------------------------------------
    SESSION_TTL_HOURS: float = Field(default=8, gt=0)
    SUPERADMIN_USERNAME: Optional[str] = Field(default=None)
    SUPERADMIN_PASSWORD: Optional[str] = Field(default=None)
    SUPERADMIN_EMAIL: str = Field(default="admin@agilesync.local")
    SUPERADMIN_DISPLAY_NAME: str = Field(default="Super Admin")

    # ------------------------------------------------------------------------------------
    # CORS / Web
    # ------------------------------------------------------------------------------------
    BACKEND_CORS_ORIGINS: Union[List[str], str] = Field(
        default_factory=lambda: [
            "http://localhost:5001",
            "http://127.0.0.1:5001",
        ]
    )

    # ------------------------------------------------------------------------------------
    # Feature Flags / Misc
    # ------------------------------------------------------------------------------------
    TESTING: bool = Field(default=False)

    # ------------------------------------------------------------------------------------
    # Helper properties
    # ------------------------------------------------------------------------------------
    @property
    def is_dev(self) -> bool:
        return self.ENVIRONMENT.lower() in {"dev", "development", "local"}

    @property
    def is_staging(self) -> bool:
        return self.ENVIRONMENT.lower() in {"stage", "staging"}

    @property
    def is_prod(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    @property
    def superadmin_configured(self) -> bool:
        return bool(self.SUPERADMIN_USERNAME) and bool(self.SUPERADMIN_PASSWORD)

    def cors_origins(self) -> List[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, list):
            return self.BACKEND_CORS_ORIGINS
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            return [o.strip() for o in self.BACKEND_CORS_ORIGINS.split(",") if o.strip()]
        return []

    # ------------------------------------------------------------------------------------
    # Pydantic v2 settings config
    # ------------------------------------------------------------------------------------
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",          # don't crash on unrelated env keys
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
