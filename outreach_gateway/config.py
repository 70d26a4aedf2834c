from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Environment
    FRONTEND_URL: str = "http://localhost:5173"  # Vite dev server
    BACKEND_URL: str = "http://localhost:5000"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Auth strategy: "unipile" (hosted connect relay) or "linkedin" (direct OAuth)
    AUTH_STRATEGY: str = "unipile"

    # JWT Settings (session tokens minted by the linkedin strategy)
    SECRET_KEY: str = "supersecretkey"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    OAUTH_STATE_EXPIRE_MINUTES: int = 10

    # Unipile Settings
    UNIPILE_API_KEY: str = ""
    UNIPILE_BASE_URL: str = "https://api.unipile.com/v1"
    UNIPILE_ACCOUNT_ID: Optional[str] = None  # Fixed account to look up instead of /users/me
    REDIRECT_URI: str = "http://localhost:5000/auth/callback"

    # LinkedIn OAuth Settings
    LINKEDIN_CLIENT_ID: str = ""
    LINKEDIN_CLIENT_SECRET: str = ""
    LINKEDIN_CALLBACK_URL: str = "http://localhost:5000/auth/linkedin/callback"

    # Gemini Settings
    GEMINI_API_KEY: Optional[str] = None
    AI_MODEL: str = "gemini-pro"

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"

settings = Settings()
