"""Cohere text-generation client used to produce raw name candidates."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from namegen.config import settings
from namegen.errors import ServiceUnavailableError
from namegen.services.logger import log_llm_call

STOP_SEQUENCES = ["\n\n", "Here", "here", "Suggest", "suggest"]


@dataclass
class GenerationRequest:
    model: str
    prompt: str
    max_tokens: int = 15
    temperature: float = 0.8
    stop_sequences: list[str] = field(default_factory=lambda: list(STOP_SEQUENCES))

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.prompt,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "k": 0,
            "stop_sequences": self.stop_sequences,
            "return_likelihoods": "NONE",
        }


def extract_generation_text(payload: dict[str, Any]) -> str:
    """Return the first generation's text, or an empty string when absent."""
    generations = payload.get("generations")
    if not isinstance(generations, list) or not generations:
        return ""
    first = generations[0]
    if not isinstance(first, dict):
        return ""
    text = first.get("text")
    if not isinstance(text, str):
        return ""
    return text.strip()


class CohereGenerateClient:
    """Thin async wrapper over ``POST /generate``."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    async def _post(self, client: httpx.AsyncClient, request: GenerationRequest) -> dict[str, Any]:
        response = await client.post(
            f"{self.base_url}/generate",
            json=request.to_payload(),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Generation response is not a JSON object")
        return payload

    async def generate(self, request: GenerationRequest, *, caller: str = "pipeline") -> str:
        """Run one generation call and return the raw candidate block.

        Raises ``ServiceUnavailableError`` for transport errors, non-2xx
        statuses and malformed payloads.
        """
        if not self.api_key:
            raise ServiceUnavailableError("COHERE_API_KEY not configured")

        started = time.monotonic()
        try:
            if self._http_client is None:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    payload = await self._post(client, request)
            else:
                payload = await self._post(self._http_client, request)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            log_llm_call(
                model=request.model,
                caller=caller,
                prompt_chars=len(request.prompt),
                duration_ms=int((time.monotonic() - started) * 1000),
                status="error",
                error=str(exc),
            )
            raise ServiceUnavailableError(
                "Generation service call failed",
                context={"model": request.model, "caller": caller},
                original_error=exc,
            ) from exc

        text = extract_generation_text(payload)
        log_llm_call(
            model=request.model,
            caller=caller,
            prompt_chars=len(request.prompt),
            response_chars=len(text),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return text


def get_client() -> CohereGenerateClient:
    return CohereGenerateClient(
        api_key=settings.cohere_api_key,
        base_url=settings.cohere_base_url.strip() or "https://api.cohere.ai/v1",
        timeout=float(settings.generation_timeout_seconds),
    )


def get_model() -> str:
    """Get the configured generation model id."""
    return settings.generation_model or "command"


def build_request(prompt: str, model: str | None = None) -> GenerationRequest:
    return GenerationRequest(
        model=model or get_model(),
        prompt=prompt,
        max_tokens=int(settings.generation_max_tokens),
        temperature=float(settings.generation_temperature),
    )


_client: CohereGenerateClient | None = None


def client() -> CohereGenerateClient:
    """Get or create the generation client."""
    global _client
    if _client is None:
        _client = get_client()
    return _client
