from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Taskboard"
    API_V1_STR: str = "/api/v1"

    MONGODB_URL: str
    DATABASE_NAME: str = "taskboard"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Outgoing mail (team invitations)
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    EMAILS_FROM_EMAIL: str = "noreply@taskboard.local"
    EMAILS_FROM_NAME: str = "Taskboard"

    # Frontend
    FRONTEND_BASE_URL: str = "http://localhost:3000"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
