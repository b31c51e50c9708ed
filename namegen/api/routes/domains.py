from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from namegen.api.deps import get_prober
from namegen.models.schemas import DomainCheckResponse, RegistrarInfo, RegistrarsResponse
from namegen.tools.domain_prober import DomainProber
from namegen.tools.registrars import normalize_domain, registrar_links

router = APIRouter(prefix="/api/domains", tags=["domains"])


@router.get("/check", response_model=DomainCheckResponse)
async def check_domain(
    name: str = Query(min_length=1),
    extension: str = ".com",
    prober: DomainProber = Depends(get_prober),
):
    """Estimate availability for a single name on one extension."""
    domain, status = prober.check_single(name, extension)
    return DomainCheckResponse(domain=domain, status=status.value)


@router.get("/registrars", response_model=RegistrarsResponse)
async def list_registrars(domain: str = Query(min_length=1)):
    links = registrar_links(domain)
    return RegistrarsResponse(
        domain=normalize_domain(domain),
        registrars=[RegistrarInfo(name=link.name, url=link.url, description=link.description) for link in links],
    )
