import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    cloudflare_account_id: str | None = Field(None, alias="CLOUDFLARE_ACCOUNT_ID")
    cloudflare_api_token: str | None = Field(None, alias="CLOUDFLARE_API_TOKEN")
    cloudflare_ai_model: str = Field(
        "@cf/meta/llama-3.3-70b-instruct-fp8-fast", alias="CLOUDFLARE_AI_MODEL"
    )
    gemini_api_key: str | None = Field(None, alias="GEMINI_API_KEY")
    gemini_model: str = Field("gemini-2.0-flash", alias="GEMINI_MODEL")
    rapidapi_key: str | None = Field(None, alias="RAPIDAPI_KEY")
    firecrawl_api_key: str | None = Field(None, alias="FIRECRAWL_API_KEY")
    llm_timeout_seconds: float = Field(6.0, alias="LLM_TIMEOUT_SECONDS")
    video_fetch_timeout_seconds: float = Field(5.0, alias="VIDEO_FETCH_TIMEOUT_SECONDS")
    page_fetch_timeout_seconds: float = Field(8.0, alias="PAGE_FETCH_TIMEOUT_SECONDS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
