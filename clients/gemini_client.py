# clients/gemini_client.py
import logging
from typing import Optional

from openai import OpenAI, APIConnectionError, APIStatusError

from services.errors import UpstreamError, UpstreamEmptyResponseError
from services.prompts import PROMPT_TEMPLATES, SYSTEM_PROMPTS

logger = logging.getLogger(__name__)


class GeminiAnalysisClient:
    """
    One-shot prompt completion against Gemini.

    Every call performs exactly one request. Retries are disabled on the
    underlying client, so a failure surfaces to the caller immediately.
    """

    def __init__(self, client: Optional[OpenAI], model: str = "gemini-2.0-flash"):
        self.client = client
        self.model = model

    def analyze_experiment(self, link: str, title: str, authors: str) -> str:
        prompt = PROMPT_TEMPLATES["experiment_analysis"].format(
            title=title or "",
            authors=authors or "",
            link=link or "",
        )
        return self._complete(
            prompt,
            system_prompt=SYSTEM_PROMPTS["analysis"],
            temperature=0.8,
            top_p=0.95,
            max_tokens=8192,
        )

    def quick_summary(self, title: str, authors: str) -> str:
        prompt = PROMPT_TEMPLATES["quick_summary"].format(title=title or "", authors=authors or "")
        text = self._complete(
            prompt,
            system_prompt=SYSTEM_PROMPTS["quick_summary"],
            temperature=0.5,
            max_tokens=200,
        )
        return text.strip()

    def _complete(
        self,
        prompt: str,
        system_prompt: str = "",
        temperature: float = 0.7,
        top_p: Optional[float] = None,
        max_tokens: int = 1024,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if top_p is not None:
            kwargs["top_p"] = top_p

        if self.client is None:
            logger.error("Gemini API key is not configured")
            raise UpstreamError(None, "GEMINI_API_KEY is not configured")

        try:
            response = self.client.chat.completions.create(**kwargs)
        except APIStatusError as e:
            body = e.response.text if e.response is not None else str(e)
            logger.error(f"Gemini API returned {e.status_code}: {body}")
            raise UpstreamError(e.status_code, body) from e
        except APIConnectionError as e:
            logger.error(f"Gemini API unreachable: {e}")
            raise UpstreamError(None, str(e)) from e

        if not response.choices:
            logger.error("Gemini returned no candidates")
            raise UpstreamEmptyResponseError()

        content = response.choices[0].message.content
        if not content:
            logger.error("Gemini returned an empty candidate")
            raise UpstreamEmptyResponseError()

        return content
