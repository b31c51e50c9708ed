from __future__ import annotations

import asyncio
import re
from typing import Awaitable, Callable

from loguru import logger

from namegen.config import settings
from namegen.models.candidate import EXTENSIONS, DomainStatus
from namegen.tools import domain_estimator

DelayFn = Callable[[float], Awaitable[None]]
EstimatorFn = Callable[[str], DomainStatus]

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def clean_domain_label(name: str) -> str:
    """Lowercase ``name`` and drop everything outside ``[a-z0-9]``."""
    return _NON_ALNUM.sub("", name.lower())


async def no_delay(_seconds: float) -> None:
    return None


class DomainProber:
    """Runs the estimator over every configured extension for one name.

    Probes are sequential with a pacing delay after each one. The delay is a
    throttle only; pass ``no_delay`` to run without waiting.
    """

    def __init__(
        self,
        *,
        delay: DelayFn | None = None,
        delay_seconds: float | None = None,
        estimator: EstimatorFn | None = None,
        extensions: tuple[str, ...] = EXTENSIONS,
    ):
        self.delay = delay or asyncio.sleep
        if delay_seconds is None:
            delay_seconds = max(int(settings.probe_delay_ms), 0) / 1000
        self.delay_seconds = delay_seconds
        self.estimator = estimator or domain_estimator.estimate
        self.extensions = extensions

    def _estimate(self, domain: str) -> DomainStatus:
        try:
            return DomainStatus(self.estimator(domain))
        except Exception as exc:
            logger.warning(f"Domain probe failed for {domain}: {exc}")
            return DomainStatus.UNKNOWN

    async def probe(self, name: str) -> dict[str, DomainStatus]:
        label = clean_domain_label(name)
        results: dict[str, DomainStatus] = {}

        for extension in self.extensions:
            domain = f"{label}{extension}"
            results[extension] = self._estimate(domain)
            logger.debug(f"{domain} status: {results[extension].value}")
            await self.delay(self.delay_seconds)

        return results

    def check_single(self, name: str, extension: str = ".com") -> tuple[str, DomainStatus]:
        """Estimate one ``name + extension`` pair, e.g. for a quick lookup."""
        if not extension.startswith("."):
            extension = f".{extension}"
        domain = f"{clean_domain_label(name)}{extension.lower()}"
        return domain, self._estimate(domain)
