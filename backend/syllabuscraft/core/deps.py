from functools import lru_cache
from openai import OpenAI
from syllabuscraft.core.config import get_settings


@lru_cache
def get_openai_client() -> OpenAI:
    settings = get_settings()
    return OpenAI(api_key=settings.openai_api_key)
