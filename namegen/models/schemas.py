from __future__ import annotations

from pydantic import BaseModel, Field

from namegen.models.candidate import GenerationParams


# --- Requests ---


class GenerateRequest(GenerationParams):
    random: bool = False


class RatingRequest(BaseModel):
    rating: int = Field(ge=0, le=5)
    comment: str = ""


# --- Responses ---


class CategoryInfo(BaseModel):
    id: str
    name: str


class CategoriesResponse(BaseModel):
    categories: list[CategoryInfo]


class GenerateResponse(BaseModel):
    candidates: list[dict]
    count: int


class NamesResponse(BaseModel):
    names: list[dict]
    favorites: list[str]
    available_count: int
    taken_count: int
    dark_mode: bool


class DomainCheckResponse(BaseModel):
    domain: str
    status: str


class RegistrarInfo(BaseModel):
    name: str
    url: str
    description: str


class RegistrarsResponse(BaseModel):
    domain: str
    registrars: list[RegistrarInfo]
