#File: services/llm_factory.py
import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from utils.settings import GEMINI_OPENAI_BASE_URL

logger = logging.getLogger(__name__)


class LLMProvider:
    GEMINI = "gemini"


class LLMFactory:
    """
    Creates and caches OpenAI-compatible clients.
    Gemini is reached through its OpenAI-compatible endpoint.
    """

    _instances: Dict[Any, OpenAI] = {}

    @staticmethod
    def get_client(
        provider: str = LLMProvider.GEMINI,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 0,
    ) -> OpenAI:
        if provider == LLMProvider.GEMINI:
            base_url = base_url or GEMINI_OPENAI_BASE_URL
        else:
            raise ValueError(f"Unknown LLM provider: {provider}")

        if not api_key:
            raise ValueError(f"API key for provider '{provider}' is not set")

        cache_key = (provider, api_key, base_url, float(timeout), int(max_retries))
        if cache_key in LLMFactory._instances:
            return LLMFactory._instances[cache_key]

        logger.info(f"Initializing LLM Client for provider: {provider} (Config Key: {hash(cache_key)})")

        client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )
        LLMFactory._instances[cache_key] = client
        return client
