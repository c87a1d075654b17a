"""Stateful listing views.

A client mounts a view once, then changes its filters; each response says
whether the visible list just changed so the page can animate it.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from ....application.dtos import ListingCriteriaDTO, ListingViewResponseDTO
from ....application.services import ListingView, ListingViewRegistry
from ....application.services.listing_view_service import to_criteria
from ....infrastructure.adapters import RestCertificationRepository
from ..dependencies import get_certification_repository, get_listing_views

router = APIRouter(prefix="/listing-views", tags=["listing"])

Registry = Annotated[ListingViewRegistry, Depends(get_listing_views)]


def _get_view(view_id: str, registry: ListingViewRegistry) -> ListingView:
    view = registry.get(view_id)
    if view is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Listing view not found",
        )
    return view


@router.post("", response_model=ListingViewResponseDTO, status_code=status.HTTP_201_CREATED)
async def mount_listing_view(
    registry: Registry,
    repository: Annotated[RestCertificationRepository, Depends(get_certification_repository)],
) -> ListingViewResponseDTO:
    view = registry.add(ListingView(repository, registry.new_animator()))
    await view.mount()
    return view.snapshot()


@router.get("/{view_id}", response_model=ListingViewResponseDTO)
async def get_listing_view(view_id: str, registry: Registry) -> ListingViewResponseDTO:
    return _get_view(view_id, registry).snapshot()


@router.put("/{view_id}/criteria", response_model=ListingViewResponseDTO)
async def apply_listing_criteria(
    view_id: str,
    criteria: ListingCriteriaDTO,
    registry: Registry,
) -> ListingViewResponseDTO:
    view = _get_view(view_id, registry)
    view.apply(to_criteria(criteria))
    return view.snapshot()


@router.post("/{view_id}/refresh", response_model=ListingViewResponseDTO)
async def refresh_listing_view(view_id: str, registry: Registry) -> ListingViewResponseDTO:
    view = _get_view(view_id, registry)
    await view.refresh()
    return view.snapshot()


@router.delete("/{view_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unmount_listing_view(view_id: str, registry: Registry) -> None:
    if not registry.remove(view_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Listing view not found",
        )
