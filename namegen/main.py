from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from namegen.api.routes import domains, names, preferences
from namegen.config import settings
from namegen.services.logger import log_event


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_event("startup", "BrandSaaS API starting", model=settings.generation_model)
    if not settings.cohere_api_key:
        logger.warning("COHERE_API_KEY is not set; generation requests will fail with 502")
    yield
    log_event("shutdown", "BrandSaaS API stopped")


app = FastAPI(
    title="BrandSaaS",
    description="SaaS name generator with heuristic domain availability",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

for router in (names.router, domains.router, preferences.router):
    app.include_router(router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "namegen"}
