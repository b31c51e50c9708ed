"""BrandSaaS - SaaS name generator

Simple CLI for generating names and managing the local history.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from namegen.agents.orchestrator import NameGenerationPipeline
from namegen.errors import EmptyExportError
from namegen.models.candidate import (
    AUDIENCES,
    CATEGORIES,
    LENGTHS,
    STYLES,
    TONES,
    Candidate,
    GenerationParams,
    random_parameters,
)
from namegen.services import exporter, history
from namegen.services.state_store import StateStore
from namegen.tools.domain_prober import DomainProber


def _print_candidate(record: dict) -> None:
    domains = record.get("domains", {})
    available = [ext for ext, status in domains.items() if status == "available"]
    print(f"  [+] {record['name']}  available: {' '.join(available) or '-'}")


async def run_generation(params: GenerationParams, store: StateStore) -> int:
    """Generate one batch, print progress and merge it into the stored history."""
    print(f"Generating {params.style} names for {params.category_label}")
    print("-" * 50)

    pipeline = NameGenerationPipeline()

    async for event in pipeline.run(params):
        event_type = event.event.value
        data = event.data

        if event_type == "candidate_ready":
            _print_candidate(data["candidate"])

        elif event_type == "fallback_started":
            print(f"\n[~] Only {data.get('primary_count')} usable names, trying a simpler prompt...")

        elif event_type == "fallback_failed":
            print(f"[!] Fallback failed: {data.get('message')}")

        elif event_type == "generation_complete":
            batch = [Candidate.model_validate(r) for r in data.get("candidates", [])]
            store.save(history.merge_batch(store.load(), batch))
            if batch:
                print(f"\n[*] Generated {len(batch)} names in {data.get('runtime_ms')}ms")
            else:
                print("\n[*] The model returned no usable names. Try different settings.")
            return 0

        elif event_type == "error":
            print(f"\n[!] Error: {data.get('message', 'Unknown error')}")
            return 1

    return 1


def check_domain(domain: str) -> None:
    name, _, extension = domain.partition(".")
    full, status = DomainProber().check_single(name, f".{extension or 'com'}")
    print(f"{full}: {status.value}")


def export(store: StateStore, fmt: str, view: str, output: str | None) -> int:
    names = history.filter_names(store.load(), view=view)
    try:
        content = exporter.export_names(names, fmt)
    except EmptyExportError as exc:
        print(f"[!] {exc.message}")
        return 1
    path = Path(output or exporter.export_filename(fmt))
    path.write_text(content, encoding="utf-8")
    print(f"{len(names)} names exported to {path}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="BrandSaaS name generator")
    parser.add_argument("--category", "-c", default="tech", choices=sorted(CATEGORIES))
    parser.add_argument("--style", "-s", default="modern", choices=STYLES)
    parser.add_argument("--length", "-l", default="medium", choices=LENGTHS)
    parser.add_argument("--tone", default="professional", choices=TONES)
    parser.add_argument("--audience", default="startups", choices=AUDIENCES)
    parser.add_argument("--keyword", "-k", default="", help="Optional keyword one name should include")
    parser.add_argument("--random", action="store_true", help="Randomize every parameter")
    parser.add_argument("--check", metavar="DOMAIN", help="Estimate availability for one domain and exit")
    parser.add_argument("--export", choices=("csv", "txt", "pdf"), help="Export stored names and exit")
    parser.add_argument("--view", default="active", choices=("active", "favorites", "archived"))
    parser.add_argument("--output", "-o", help="Export file path")
    parser.add_argument("--state", help="State file path (default: from config)")

    args = parser.parse_args()
    store = StateStore(args.state)

    if args.check:
        check_domain(args.check)
        return

    if args.export:
        sys.exit(export(store, args.export, args.view, args.output))

    if args.random:
        params = random_parameters()
    else:
        params = GenerationParams(
            category=args.category,
            style=args.style,
            length=args.length,
            tone=args.tone,
            audience=args.audience,
            keyword=args.keyword,
        )

    sys.exit(asyncio.run(run_generation(params, store)))


if __name__ == "__main__":
    main()
