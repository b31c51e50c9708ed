from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote

from namegen.tools.domain_prober import clean_domain_label

_DOMAIN_PATTERN = re.compile(r"^(.+?)(\.[a-z]{2,})$")


@dataclass
class RegistrarLink:
    name: str
    url: str
    description: str


def normalize_domain(domain: str) -> str:
    """Clean ``name.ext`` input, defaulting to ``.com`` when no extension is given."""
    match = _DOMAIN_PATTERN.match(domain.strip().lower())
    if match:
        name, extension = match.group(1), match.group(2)
    else:
        name, extension = domain, ".com"
    return f"{clean_domain_label(name)}{extension}"


def registrar_links(domain: str) -> list[RegistrarLink]:
    full_domain = normalize_domain(domain)
    encoded = quote(full_domain, safe="")
    return [
        RegistrarLink(
            name="Namecheap",
            url=f"https://www.namecheap.com/domains/registration/results/?domain={encoded}",
            description="Popular choice with great prices",
        ),
        RegistrarLink(
            name="Squarespace",
            url=f"https://www.squarespace.com/domains?domain={encoded}",
            description="Professional hosting & domains",
        ),
        RegistrarLink(
            name="GoDaddy",
            url=f"https://www.godaddy.com/domainsearch/find?domainToCheck={encoded}",
            description="World's largest domain registrar",
        ),
        RegistrarLink(
            name="Cloudflare",
            url="https://www.cloudflare.com/products/registrar/",
            description="Fast & secure domain registration",
        ),
        RegistrarLink(
            name="Google Domains",
            url=f"https://domains.google.com/registrar/search?searchTerm={encoded}",
            description="Simple & reliable (now Squarespace)",
        ),
        RegistrarLink(
            name="Hover",
            url=f"https://www.hover.com/domains/search?q={encoded}",
            description="Clean & simple domain management",
        ),
    ]
