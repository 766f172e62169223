"""
Sentinel Grid - Google Gemini Client

Thin REST client for the Gemini generateContent endpoint, used for
tactical briefings and commander chat.

Features:
- API key and model from environment (GEMINI_API_KEY, GEMINI_MODEL)
- System instructions
- Retries with backoff on rate limiting and server errors
- Token usage tracking
"""

import os
import logging
import time
from typing import Optional, Dict
from dataclasses import dataclass, field

import requests

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass
class GeminiConfig:
    """Configuration for Gemini API client."""
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = 1024
    temperature: float = 0.4
    timeout: int = 30
    max_retries: int = 3
    retry_delay: float = 1.0


@dataclass
class GeminiResponse:
    """Response from Gemini API."""
    text: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    finish_reason: str = "STOP"
    latency_ms: float = 0.0
    raw_response: Dict = field(default_factory=dict)


class GeminiError(Exception):
    """Base exception for Gemini API errors."""
    pass


class GeminiAPIError(GeminiError):
    """API-level error from Gemini."""
    def __init__(self, message: str, status_code: int = 0, response: Dict = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response or {}


def load_gemini_config() -> GeminiConfig:
    """
    Load client configuration from environment variables.

    Raises:
        GeminiError: If GEMINI_API_KEY is not set
    """
    api_key = os.getenv("GEMINI_API_KEY", "")
    if not api_key:
        raise GeminiError("GEMINI_API_KEY not set. Please set it in .env file.")

    return GeminiConfig(
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
    )


class GeminiClient:
    """
    Google Gemini API client.

    Example:
        >>> client = GeminiClient(GeminiConfig(api_key="..."))
        >>> response = client.generate("Summarize sector 0-2")
        >>> print(response.text)
    """

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, config: Optional[GeminiConfig] = None):
        """
        Initialize Gemini client.

        Args:
            config: Optional GeminiConfig, loads from env if not provided
        """
        self.config = config or load_gemini_config()
        if not self.config.api_key:
            raise GeminiError("Gemini API key is empty")

        self._total_tokens_used = 0
        self._request_count = 0

        logger.info(f"GeminiClient initialized with model: {self.config.model}")

    def _get_endpoint(self, action: str = "generateContent") -> str:
        return f"{self.BASE_URL}/{self.config.model}:{action}"

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> GeminiResponse:
        """
        Generate text.

        Args:
            prompt: User prompt
            system_prompt: Optional system instructions
            temperature: Override default temperature
            max_tokens: Override max output tokens

        Returns:
            GeminiResponse with generated text

        Raises:
            GeminiError: On transport failure or exhausted retries
            GeminiAPIError: On a non-retryable API error
        """
        start_time = time.time()

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature if temperature is not None else self.config.temperature,
                "maxOutputTokens": max_tokens or self.config.max_tokens,
            }
        }
        if system_prompt:
            body["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        data = self._make_request(body)

        latency = (time.time() - start_time) * 1000
        self._request_count += 1
        return self._parse_response(data, latency)

    def _make_request(self, body: Dict) -> Dict:
        """Make HTTP request with retry logic."""
        endpoint = self._get_endpoint()

        for attempt in range(self.config.max_retries):
            try:
                response = requests.post(
                    endpoint,
                    json=body,
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.config.api_key
                    },
                    timeout=self.config.timeout
                )
            except requests.exceptions.Timeout:
                logger.warning(f"Request timeout, attempt {attempt + 1}/{self.config.max_retries}")
                if attempt == self.config.max_retries - 1:
                    raise GeminiError("Request timed out after all retries")
                time.sleep(self.config.retry_delay)
                continue
            except requests.exceptions.RequestException as e:
                logger.error(f"Request failed: {e}")
                raise GeminiError(f"Request failed: {e}") from e

            if response.status_code == 200:
                return response.json()

            if response.status_code == 429 or response.status_code >= 500:
                wait_time = self.config.retry_delay * (2 ** attempt)
                logger.warning(
                    f"Gemini returned {response.status_code}, retrying in {wait_time}s"
                )
                time.sleep(wait_time)
                continue

            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            error_msg = error_data.get("error", {}).get("message", response.text)
            raise GeminiAPIError(
                f"API error: {error_msg}",
                status_code=response.status_code,
                response=error_data
            )

        raise GeminiError("Max retries exceeded")

    def _parse_response(self, data: Dict, latency: float) -> GeminiResponse:
        """Parse Gemini API response."""
        candidates = data.get("candidates", [])
        if not candidates:
            raise GeminiError("No response candidates returned")

        candidate = candidates[0]
        parts = candidate.get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in parts)

        usage = data.get("usageMetadata", {})
        total_tokens = usage.get("totalTokenCount", 0)
        self._total_tokens_used += total_tokens

        return GeminiResponse(
            text=text.strip(),
            model=self.config.model,
            prompt_tokens=usage.get("promptTokenCount", 0),
            completion_tokens=usage.get("candidatesTokenCount", 0),
            total_tokens=total_tokens,
            finish_reason=candidate.get("finishReason", "STOP"),
            latency_ms=latency,
            raw_response=data
        )

    def get_stats(self) -> Dict:
        """Get client usage statistics."""
        return {
            "model": self.config.model,
            "total_tokens_used": self._total_tokens_used,
            "request_count": self._request_count,
        }
