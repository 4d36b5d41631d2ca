"""
Configuration settings for the Sarkari Yojana Eligibility Engine
"""
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_db_name: str = Field(default="SarkariYojanaProDB")
    mongodb_timeout_ms: int = Field(default=5000, ge=1)
    
    # Gemini API Configuration (process-level default credential)
    gemini_api_key: str = Field(default="")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    gemini_model: str = Field(default="gemini-2.5-pro")
    reasoning_timeout_seconds: float = Field(default=120.0, gt=0)
    reasoning_use_search: bool = Field(default=True)
    reasoning_structured_output: bool = Field(default=False)
    
    # Admin panel credential pair
    admin_email: str = Field(default="admin@sarkari-yojana.local")
    admin_password: str = Field(default="change-me")
    
    # Application Configuration
    app_name: str = Field(default="Sarkari Yojana Eligibility Engine")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    bookmarks_path: str = Field(default="bookmarks.json")
    
    # State whose districts drive the tribal-sub-plan flag
    tsp_state: str = Field(default="Rajasthan")
    
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")
    
    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list"""
        if ',' in self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(',')]
        return [self.cors_origins.strip()]
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()
