"""Configuration and settings"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Place details endpoint (called as GET <endpoint>?placeId=<id>)
    place_details_endpoint: str = Field(
        default="https://us-central1-kundeportal-online.cloudfunctions.net/Google-Business-profil-v1/getPlaceDetails"
    )
    fetch_timeout_seconds: float = Field(default=20.0)

    # Source locale: hours text that marks a closed day, and the label shown for it
    closed_token: str = Field(default="stengt")
    closed_label: str = Field(default="Stengt")

    # Structured data
    schema_default_type: str = Field(default="LocalBusiness")

    # Reviews
    review_photo_limit: int = Field(default=3)

    # Logging
    log_level: str = Field(default="INFO")

    # Server
    backend_host: str = Field(default="localhost")
    backend_port: int = Field(default=8000)

    # Frontend (CORS origin)
    frontend_url: str = Field(default="http://localhost:5173")

    # API Configuration
    api_title: str = "Review Embed API"
    api_version: str = "0.1.0"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
