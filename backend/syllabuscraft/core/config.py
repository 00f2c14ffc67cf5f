from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    app_name: str = "SyllabusCraft"
    debug: bool = False

    # OpenAI (image OCR)
    openai_api_key: str = ""
    ocr_model: str = "gpt-4o-mini"

    # Uploads
    max_upload_mb: int = 2
    # PDFs whose text layer is this short are treated as scans
    min_pdf_text_chars: int = 200

    # CORS
    frontend_url: str = "http://localhost:5173"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
