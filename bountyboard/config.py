"""
BountyBoard - Configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "BountyBoard"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/bountyboard.db"

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # Access
    # Comma-separated GitHub organizations allowed to sign in; "all" disables the check
    ALLOWED_ORGANIZATIONS: str = ""

    # Rewards
    DEFAULT_REWARD_CURRENCY: str = "TON"

    # Repository list cache (30 minutes)
    REPO_CACHE_TTL_SECONDS: int = 1800

    # CORS
    CORS_ORIGINS: list = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
