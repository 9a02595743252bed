from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Nefer"
    ENV: str = "development"

    # -------------------------------------------------
    # Supabase (Auth + Database)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(
        None,
        description="Service role key (required for auth.admin.*)",
    )

    # -------------------------------------------------
    # Admin credentials (all four → non-interactive mode)
    # -------------------------------------------------
    ADMIN1_EMAIL: Optional[str] = None
    ADMIN1_PASSWORD: Optional[str] = None
    ADMIN2_EMAIL: Optional[str] = None
    ADMIN2_PASSWORD: Optional[str] = None

    # -------------------------------------------------
    # Tables
    # -------------------------------------------------
    USERS_TABLE: str = Field("users", description="Profile documents, keyed by auth user id")
    ADMIN_LOGS_TABLE: str = Field("admin_logs", description="Append-only admin audit log")

    # -------------------------------------------------
    # Post-setup instructions
    # -------------------------------------------------
    ADMIN_DASHBOARD_URL: str = "https://your-app.web.app/admin"

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True
        # No env_file: the script reads REAL environment variables


# Instantiate settings
settings = Settings()
