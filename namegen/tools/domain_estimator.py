"""Heuristic domain availability estimator.

No registry lookups happen here. The rules approximate what is likely to be
registered: famous domains, very short names, stop words and short ``.com``
names are treated as taken; newer extensions are optimistic. Rules are
evaluated top to bottom and the first one returning a status wins.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from namegen.models.candidate import DomainStatus

WELL_KNOWN_DOMAINS = frozenset(
    {
        "google.com", "facebook.com", "amazon.com", "microsoft.com", "apple.com",
        "netflix.com", "twitter.com", "instagram.com", "linkedin.com", "youtube.com",
        "github.com", "stackoverflow.com", "reddit.com", "wikipedia.org", "wordpress.com",
        "shopify.com", "stripe.com", "slack.com", "zoom.com", "dropbox.com",
        "airbnb.com", "uber.com", "lyft.com", "spotify.com", "discord.com",
        "twitch.com", "tiktok.com", "snapchat.com", "pinterest.com", "whatsapp.com",
    }
)

COMMON_WORDS = frozenset(
    {
        "the", "and", "for", "you", "me", "my", "we", "us", "it", "is",
        "in", "on", "at", "to", "of", "a", "an", "com", "net", "org",
    }
)

GENERIC_COM_WORD = re.compile(
    r"^(cash|flow|hq|pro|app|web|tech|data|cloud|team|work|home|shop|buy|get|go|my|me|us|we)$",
    re.IGNORECASE,
)

NEW_GTLDS = frozenset({"io", "co", "app", "dev", "tech", "ai", "me"})
LEGACY_GTLDS = frozenset({"net", "org"})

SHORT_NAME_MAX = 4
SHORT_COM_MAX = 6
SHORT_LEGACY_MAX = 5


@dataclass(frozen=True)
class DomainParts:
    domain: str
    name: str
    extension: str


@dataclass(frozen=True)
class Rule:
    tag: str
    check: Callable[[DomainParts], Optional[DomainStatus]]


def split_domain(domain: str) -> DomainParts:
    lowered = domain.lower()
    return DomainParts(
        domain=lowered,
        name=lowered.split(".")[0],
        extension=lowered.split(".")[-1],
    )


def well_known(parts: DomainParts) -> Optional[DomainStatus]:
    if parts.domain in WELL_KNOWN_DOMAINS:
        return DomainStatus.TAKEN
    return None


def short_name(parts: DomainParts) -> Optional[DomainStatus]:
    if len(parts.name) <= SHORT_NAME_MAX:
        return DomainStatus.TAKEN
    return None


def common_word(parts: DomainParts) -> Optional[DomainStatus]:
    if parts.name in COMMON_WORDS:
        return DomainStatus.TAKEN
    return None


def dot_com(parts: DomainParts) -> Optional[DomainStatus]:
    if parts.extension != "com":
        return None
    if len(parts.name) <= SHORT_COM_MAX or GENERIC_COM_WORD.match(parts.name):
        return DomainStatus.TAKEN
    return DomainStatus.AVAILABLE


def new_gtld(parts: DomainParts) -> Optional[DomainStatus]:
    if parts.extension in NEW_GTLDS:
        return DomainStatus.AVAILABLE
    return None


def legacy_gtld(parts: DomainParts) -> Optional[DomainStatus]:
    if parts.extension not in LEGACY_GTLDS:
        return None
    if len(parts.name) <= SHORT_LEGACY_MAX:
        return DomainStatus.TAKEN
    return DomainStatus.AVAILABLE


def default(parts: DomainParts) -> Optional[DomainStatus]:
    return DomainStatus.AVAILABLE


RULES: tuple[Rule, ...] = (
    Rule("well_known", well_known),
    Rule("short_name", short_name),
    Rule("common_word", common_word),
    Rule("dot_com", dot_com),
    Rule("new_gtld", new_gtld),
    Rule("legacy_gtld", legacy_gtld),
    Rule("default", default),
)


def matching_rule(domain: str, rules: tuple[Rule, ...] = RULES) -> Optional[Rule]:
    """Return the first rule that decides ``domain``."""
    parts = split_domain(domain)
    for rule in rules:
        if rule.check(parts) is not None:
            return rule
    return None


def estimate(domain: str, rules: tuple[Rule, ...] = RULES) -> DomainStatus:
    """Estimate availability for a full domain such as ``cloudflow.io``."""
    parts = split_domain(domain)
    for rule in rules:
        status = rule.check(parts)
        if status is not None:
            return status
    return DomainStatus.UNKNOWN
