from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sse_starlette.sse import EventSourceResponse
from starlette.background import BackgroundTask

from namegen.agents.orchestrator import NameGenerationPipeline
from namegen.api.deps import GenerationGuard, get_guard, get_pipeline, get_prober, get_store
from namegen.errors import CandidateNotFoundError, EmptyExportError, ServiceUnavailableError
from namegen.models.candidate import Candidate, GenerationParams, random_parameters
from namegen.models.events import EventType
from namegen.models.schemas import GenerateRequest, GenerateResponse, NamesResponse, RatingRequest
from namegen.models.state import AppState
from namegen.services import exporter, history, streaming
from namegen.services import logger as log_service
from namegen.services.state_store import StateStore
from namegen.tools.domain_prober import DomainProber

router = APIRouter(prefix="/api/names", tags=["names"])


def _names_response(state: AppState, names: list[Candidate]) -> NamesResponse:
    counts = history.domain_counts(state)
    return NamesResponse(
        names=[n.to_record() for n in names],
        favorites=list(state.favorites),
        available_count=counts.available,
        taken_count=counts.taken,
        dark_mode=state.dark_mode,
    )


def _resolve_params(request: GenerateRequest) -> GenerationParams:
    if request.random:
        return random_parameters()
    return GenerationParams(**request.model_dump(exclude={"random"}))


async def _apply(store: StateStore, transition, *args) -> AppState:
    async with store.lock:
        try:
            state = transition(store.load(), *args)
        except CandidateNotFoundError as exc:
            raise HTTPException(status_code=404, detail=exc.message) from exc
        store.save(state)
    return state


async def _merge(store: StateStore, batch: list[Candidate]) -> None:
    async with store.lock:
        store.save(history.merge_batch(store.load(), batch))


@router.post("/generate", response_model=GenerateResponse)
async def generate_names(
    request: GenerateRequest,
    store: StateStore = Depends(get_store),
    pipeline: NameGenerationPipeline = Depends(get_pipeline),
    guard: GenerationGuard = Depends(get_guard),
):
    """Generate a batch of names and prepend it to the stored history."""
    params = _resolve_params(request)
    if not guard.acquire():
        raise HTTPException(status_code=409, detail="A generation is already in progress")
    try:
        batch = await pipeline.generate(params)
    except ServiceUnavailableError as exc:
        log_service.log_event("generation_failed", str(exc), category=params.category)
        raise HTTPException(status_code=502, detail="Failed to generate names. Please try again.") from exc
    finally:
        guard.release()

    await _merge(store, batch)
    log_service.log_event("generation_completed", f"Generated {len(batch)} names", category=params.category)
    return GenerateResponse(candidates=[c.to_record() for c in batch], count=len(batch))


@router.get("/generate/stream")
async def stream_generation(
    params: GenerationParams = Depends(),
    store: StateStore = Depends(get_store),
    pipeline: NameGenerationPipeline = Depends(get_pipeline),
    guard: GenerationGuard = Depends(get_guard),
):
    """SSE endpoint streaming generation progress; the final batch is merged on completion."""
    if not guard.acquire():
        raise HTTPException(status_code=409, detail="A generation is already in progress")

    async def event_generator():
        try:
            async for event in pipeline.run(params):
                if event.event == EventType.GENERATION_COMPLETE:
                    batch = [Candidate.model_validate(r) for r in event.data.get("candidates", [])]
                    await _merge(store, batch)
                yield event.to_message()
        except Exception as e:
            log_service.log_event(
                event_type="stream_error",
                message="Unhandled error in generation stream",
                error=str(e),
                category=params.category,
            )
            yield streaming.error("Generation stream failed unexpectedly.").to_message()

    # Released after the response finishes, even if the stream never started
    return EventSourceResponse(event_generator(), background=BackgroundTask(guard.release))


@router.get("", response_model=NamesResponse)
async def list_names(
    view: Literal["active", "favorites", "archived"] = "active",
    length: Literal["all", "short", "medium", "long"] = "all",
    availability: Literal["all", "available", "taken", "unknown"] = "all",
    min_rating: int = Query(default=0, ge=0, le=5),
    store: StateStore = Depends(get_store),
):
    state = store.load()
    names = history.filter_names(
        state, view=view, length=length, availability=availability, min_rating=min_rating
    )
    return _names_response(state, names)


@router.get("/export")
async def export_names(
    fmt: Literal["csv", "txt", "pdf"] = Query(default="csv", alias="format"),
    view: Literal["active", "favorites", "archived"] = "active",
    store: StateStore = Depends(get_store),
):
    names = history.filter_names(store.load(), view=view)
    try:
        content = exporter.export_names(names, fmt)
    except EmptyExportError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    filename = exporter.export_filename(fmt)
    return PlainTextResponse(
        content,
        media_type=exporter.MIME_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/archived/recheck", response_model=NamesResponse)
async def recheck_archived(
    store: StateStore = Depends(get_store),
    prober: DomainProber = Depends(get_prober),
):
    async with store.lock:
        state = store.load()
        if not state.archived_names:
            raise HTTPException(status_code=400, detail="No archived names to recheck")
        state = await history.recheck_archived(state, prober)
        store.save(state)
    return _names_response(state, list(state.archived_names))


@router.post("/{name_id}/favorite", response_model=NamesResponse)
async def toggle_favorite(name_id: str, store: StateStore = Depends(get_store)):
    state = await _apply(store, history.toggle_favorite, name_id)
    return _names_response(state, list(state.generated_names))


@router.post("/{name_id}/rating", response_model=NamesResponse)
async def rate_name(name_id: str, request: RatingRequest, store: StateStore = Depends(get_store)):
    state = await _apply(store, history.rate_name, name_id, request.rating, request.comment)
    return _names_response(state, list(state.generated_names))


@router.post("/{name_id}/archive", response_model=NamesResponse)
async def archive_name(name_id: str, store: StateStore = Depends(get_store)):
    state = await _apply(store, history.archive_name, name_id)
    return _names_response(state, list(state.generated_names))


@router.post("/{name_id}/restore", response_model=NamesResponse)
async def restore_name(name_id: str, store: StateStore = Depends(get_store)):
    state = await _apply(store, history.restore_name, name_id)
    return _names_response(state, list(state.generated_names))


@router.delete("/{name_id}", response_model=NamesResponse)
async def delete_name(name_id: str, store: StateStore = Depends(get_store)):
    state = await _apply(store, history.delete_name, name_id)
    return _names_response(state, list(state.generated_names))


@router.delete("", response_model=NamesResponse)
async def clear_names(
    scope: Literal["history", "searches", "archived"] = "history",
    store: StateStore = Depends(get_store),
):
    transitions = {
        "history": history.clear_history,
        "searches": history.clear_searches,
        "archived": history.clear_archived,
    }
    state = await _apply(store, transitions[scope])
    return _names_response(state, list(state.generated_names))
