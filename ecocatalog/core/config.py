# ecocatalog/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # --- API Info ---
    API_TITLE: str = "EcoCatalog API"
    API_DESCRIPTION: str = "Product catalog with eco-score ranking, demographic recommendations, cart, wishlist and view history."
    API_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ecocatalog.db")
    SQL_ECHO: bool = os.getenv("SQL_ECHO", "0") == "1"

    # --- Auth tokens ---
    SECRET_KEY: str = os.getenv("ENCODING_SECRET_KEY") or "dev-secret-change-me"
    ALGORITHM: str = os.getenv("ENCODING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

    # Token denylist used on logout
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # --- Catalog paging ---
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    # --- CORS ---
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if origin.strip()
    ]

    # --- Logging ---
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_CONFIG: str = os.getenv(
        "LOG_CONFIG",
        os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logging.conf"),
    )


settings = Settings()
