from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', extra='ignore')

    DATABASE_URL: str = 'sqlite:///./parking.db'

    SECRET_KEY: str = 'change-me'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    PARKING_CAPACITY: int = 50
    CORS_ORIGINS: list[str] = ['*']
    LOG_LEVEL: str = 'INFO'

    HOST: str = '127.0.0.1'
    PORT: int = 8000


settings = Settings()
