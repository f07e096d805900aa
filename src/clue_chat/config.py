import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Settings(BaseSettings):
    # Stream pacing (milliseconds)
    initial_delay_ms: int = int(os.getenv("INITIAL_DELAY_MS", "500"))
    min_unit_delay_ms: int = int(os.getenv("MIN_UNIT_DELAY_MS", "20"))
    max_unit_delay_ms: int = int(os.getenv("MAX_UNIT_DELAY_MS", "70"))
    newline_delay_ms: int = int(os.getenv("NEWLINE_DELAY_MS", "100"))

    # Client
    server_url: str = os.getenv("SERVER_URL", "http://localhost:8000")
    search_path: str = "/api/v1/search"
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "60"))

    # Durable storage
    storage_path: str = os.getenv("STORAGE_PATH", "./clue_chat_storage.json")
    history_key: str = "clue-ai-chat-history"
    bookmarks_key: str = "clue-ai-bookmarks"
    history_limit: int = 50
    title_max_chars: int = 50

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "app.log")

    class Config:
        env_file = '.env'
        env_file_encoding = 'utf-8'
        extra = 'ignore'

# Create a single settings instance for the application
settings = Settings()
