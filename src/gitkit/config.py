# src/gitkit/config.py
'''
Import configuration using .env
'''
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# from src/gitkit/config.py up to project root (where .env lives)
BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=BASE_DIR / ".env")

SENSITIVE_FIELDS = {
    "GITKIT_SERVICE_ACCOUNT_FILE",
    "GITKIT_PRIVATE_KEY_FILE",
}


class Settings(BaseSettings):
    '''
    Project Settings class
    Values can be set in the environment or in the .env file.
    The service account is left unset here; see api_clients.get_assertion
    '''
    GITKIT_API_URL: str = 'https://www.googleapis.com/identitytoolkit/v3/relyingparty/'
    GITKIT_TOKEN_URI: str = 'https://oauth2.googleapis.com/token'
    GITKIT_SCOPE: str = 'https://www.googleapis.com/auth/identitytoolkit'

    # Either a JSON key file, or an email plus a PEM private key file
    GITKIT_SERVICE_ACCOUNT_FILE: str | None = None
    GITKIT_SERVICE_ACCOUNT_EMAIL: str | None = None
    GITKIT_PRIVATE_KEY_FILE: str | None = None

    HTTP_TIMEOUT: float = 10.0
    TOKEN_REFRESH_SKEW_SECONDS: float = 0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/gitkit.log"

    class Config:
        '''
        Config for Settings
        '''
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def masked_settings_dump(settings: BaseSettings) -> dict:
    data = settings.model_dump()
    for key in SENSITIVE_FIELDS:
        if key in data and data[key]:
            data[key] = "********"
    return data


@lru_cache()
def get_settings():
    '''
    Get settings for something like singleton
    '''
    return Settings()


config = get_settings()
