from __future__ import annotations

import time
from datetime import datetime
from typing import AsyncGenerator, AsyncIterator, Callable

from loguru import logger

from namegen.config import settings
from namegen.errors import ServiceUnavailableError
from namegen.llm_client import CohereGenerateClient, build_request, client as llm_client, get_model
from namegen.models.candidate import Candidate, GenerationParams, new_candidate_id, utc_now
from namegen.models.events import SSEEvent
from namegen.services import streaming
from namegen.services.logger import log_generation_step
from namegen.services.prompt_store import build_fallback_prompt, build_primary_prompt
from namegen.tools.domain_prober import DomainProber
from namegen.tools.name_sanitizer import clean_line, rejection_reason, split_response

PRIMARY_ROUND = "primary"
FALLBACK_ROUND = "fallback"


class NameGenerationPipeline:
    """Generates one batch of name candidates.

    Flow:
      1. Build the primary prompt from the caller's parameters
      2. Call the generation service (failure aborts the whole run)
      3. Split the response, keep the first few non-empty lines
      4. Sanitize each line and probe domains for every survivor, one at a time
      5. If too few survived, run exactly one fallback round with a simpler
         prompt and append its candidates
      6. Return the batch in generation order

    A failed fallback call is logged and reported as a ``fallback_failed``
    event; the primary candidates are still returned.
    """

    def __init__(
        self,
        model: str | None = None,
        *,
        client: CohereGenerateClient | None = None,
        prober: DomainProber | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_candidate_id,
    ):
        self.model = model or get_model()
        self.client = client or llm_client()
        self.prober = prober or DomainProber()
        self.clock = clock
        self.id_factory = id_factory
        self.min_candidates = max(int(settings.min_candidates), 0)
        self.max_lines_per_round = max(int(settings.max_lines_per_round), 1)

    async def generate(self, params: GenerationParams) -> list[Candidate]:
        """Return the full batch, raising ``ServiceUnavailableError`` if the primary call fails."""
        batch: list[Candidate] = []
        async for _ in self._stream(params, batch):
            pass
        return batch

    async def run(self, params: GenerationParams) -> AsyncGenerator[SSEEvent, None]:
        """Yield progress events; a primary failure becomes a final ``error`` event."""
        batch: list[Candidate] = []
        try:
            async for event in self._stream(params, batch):
                yield event
        except ServiceUnavailableError as exc:
            logger.error(f"Generation failed: {exc}")
            yield streaming.error(exc.message)

    async def _stream(
        self, params: GenerationParams, batch: list[Candidate]
    ) -> AsyncGenerator[SSEEvent, None]:
        started = time.monotonic()
        yield streaming.generation_started(
            params.category_label,
            style=params.style,
            length=params.length,
            keyword=params.keyword.strip(),
        )

        raw = await self._call_service(build_primary_prompt(params), PRIMARY_ROUND)
        async for candidate in self._candidates_from(raw, params, PRIMARY_ROUND):
            batch.append(candidate)
            yield streaming.candidate_ready(candidate, PRIMARY_ROUND)

        if len(batch) < self.min_candidates:
            logger.info(
                f"Primary round produced {len(batch)} candidates (< {self.min_candidates}), trying fallback"
            )
            yield streaming.fallback_started(len(batch))
            try:
                raw = await self._call_service(build_fallback_prompt(params), FALLBACK_ROUND)
            except ServiceUnavailableError as exc:
                logger.warning(f"Fallback round failed, keeping primary batch: {exc}")
                log_generation_step(FALLBACK_ROUND, "call", "error", {"error": exc.message})
                yield streaming.fallback_failed(exc.message)
            else:
                added = 0
                async for candidate in self._candidates_from(raw, params, FALLBACK_ROUND):
                    batch.append(candidate)
                    added += 1
                    yield streaming.candidate_ready(candidate, FALLBACK_ROUND)
                yield streaming.fallback_completed(added)

        runtime_ms = int((time.monotonic() - started) * 1000)
        log_generation_step("batch", "complete", "completed", {"count": len(batch), "runtime_ms": runtime_ms})
        yield streaming.generation_complete(batch, runtime_ms)

    async def _call_service(self, prompt: str, round_name: str) -> str:
        log_generation_step(round_name, "call", "started", {"prompt_chars": len(prompt)})
        request = build_request(prompt, self.model)
        text = await self.client.generate(request, caller=round_name)
        logger.debug(f"Raw {round_name} response: {text!r}")
        return text

    async def _candidates_from(
        self, raw: str, params: GenerationParams, round_name: str
    ) -> AsyncIterator[Candidate]:
        lines = split_response(raw, self.max_lines_per_round)
        rejected = 0
        for line in lines:
            cleaned = clean_line(line)
            reason = rejection_reason(cleaned)
            if reason is not None:
                rejected += 1
                logger.debug(f"Filtered out {cleaned!r} ({reason})")
                continue

            domains = await self.prober.probe(cleaned)
            yield Candidate(
                id=self.id_factory(),
                name=cleaned,
                category=params.category_label,
                created_at=self.clock(),
                is_favorite=False,
                rating=0,
                rating_comment="",
                domains=domains,
            )

        log_generation_step(
            round_name,
            "sanitize",
            "completed",
            {"lines": len(lines), "rejected": rejected},
        )
