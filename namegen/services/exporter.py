"""Text exports of candidate lists (CSV, plain text, printable text)."""
from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Literal, Sequence

from namegen.errors import EmptyExportError
from namegen.models.candidate import Candidate, DomainStatus, utc_now
from namegen.tools.domain_prober import clean_domain_label

ExportFormat = Literal["csv", "txt", "pdf"]

CSV_HEADERS = [
    "Name",
    "Category",
    "Generated Date",
    "Favorite",
    "Available Domains",
    "Taken Domains",
    "Unknown Domains",
    "Total Domains Checked",
]

MIME_TYPES = {"csv": "text/csv", "txt": "text/plain", "pdf": "text/plain"}


def _format_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def partition_domains(candidate: Candidate) -> dict[DomainStatus, list[str]]:
    """Group ``candidate``'s full domains by status, keeping probe order."""
    label = clean_domain_label(candidate.name)
    groups: dict[DomainStatus, list[str]] = {status: [] for status in DomainStatus}
    for extension, status in candidate.domains.items():
        groups[DomainStatus(status)].append(f"{label}{extension}")
    return groups


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def to_csv(names: Sequence[Candidate]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for name in names:
        groups = partition_domains(name)
        writer.writerow(
            [
                name.name,
                name.category,
                _format_time(name.created_at),
                _yes_no(name.is_favorite),
                "; ".join(groups[DomainStatus.AVAILABLE]),
                "; ".join(groups[DomainStatus.TAKEN]),
                "; ".join(groups[DomainStatus.UNKNOWN]),
                len(name.domains),
            ]
        )
    return buffer.getvalue()


def to_text(names: Sequence[Candidate], generated_at: datetime) -> str:
    lines = [
        "SaaS Name Generator Export",
        f"Generated on: {_format_time(generated_at)}",
        f"Total names exported: {len(names)}",
        "==========================================",
        "",
    ]
    for index, name in enumerate(names, 1):
        groups = partition_domains(name)
        lines.append(f"{index}. {name.name}")
        lines.append(f"   Category: {name.category}")
        lines.append(f"   Generated: {_format_time(name.created_at)}")
        lines.append(f"   Favorite: {_yes_no(name.is_favorite)}")
        lines.append("   Domain Status:")
        for label, status in (
            ("Available", DomainStatus.AVAILABLE),
            ("Taken", DomainStatus.TAKEN),
            ("Unknown", DomainStatus.UNKNOWN),
        ):
            if groups[status]:
                lines.append(f"     {label}: {', '.join(groups[status])}")
        lines.append("")
    return "\n".join(lines) + "\n"


def to_printable(names: Sequence[Candidate], generated_at: datetime) -> str:
    # Condensed layout meant for printing; lists available domains only.
    lines = [
        "SaaS Name Generator Export",
        f"Generated on: {_format_time(generated_at)}",
        f"Total names exported: {len(names)}",
        "",
    ]
    for index, name in enumerate(names, 1):
        available = partition_domains(name)[DomainStatus.AVAILABLE]
        lines.append(f"{index}. {name.name} ({name.category})")
        lines.append(f"   Generated: {_format_time(name.created_at)}")
        lines.append(f"   Favorite: {_yes_no(name.is_favorite)}")
        if available:
            lines.append(f"   Available Domains: {', '.join(available)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def export_names(
    names: Sequence[Candidate],
    fmt: ExportFormat,
    *,
    generated_at: datetime | None = None,
) -> str:
    if not names:
        raise EmptyExportError("No names to export")
    generated_at = generated_at or utc_now()
    if fmt == "csv":
        return to_csv(names)
    if fmt == "txt":
        return to_text(names, generated_at)
    if fmt == "pdf":
        return to_printable(names, generated_at)
    raise ValueError(f"Unsupported export format: {fmt}")


def export_filename(fmt: ExportFormat, generated_at: datetime | None = None) -> str:
    stamp = (generated_at or utc_now()).strftime("%Y-%m-%dT%H-%M-%S")
    return f"saas-names-export-{stamp}.{fmt}"
