"""Application configuration."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings."""
    
    # App
    APP_NAME: str = "Production_Status_Reports"
    ENV: str = "development"
    DEBUG: bool = True
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./production_reports.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 10
    
    # Workflow constants
    # Process whose completion marks a catch as fully done (dispatch-eligible).
    TERMINAL_PROCESS_ID: int = 12
    COMPLETED_STATUS_CODE: int = 2
    # QuantitySheet.status value for catches that are still open.
    OPEN_CATCH_STATUS: int = 1
    STATUS_UPDATED_EVENT: str = "Status updated"
    PRODUCTION_EVENT_CATEGORY: str = "Production"
    
    # Reports
    REPORT_DATE_FORMAT: str = "%d-%m-%Y"  # dd-MM-yyyy
    QUICK_COMPLETION_WINDOW_MINUTES: int = 5
    DEFAULT_PAGE_SIZE: int = 10
    SEARCH_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 500
    
    class Config:
        env_file = ".env"
        case_sensitive = True
    
    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
