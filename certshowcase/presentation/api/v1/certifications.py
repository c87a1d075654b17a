"""Public certification listing endpoints (no auth required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ....application.dtos import ListingCriteriaDTO, ListingResponseDTO, SkillListDTO
from ....application.ports.inbound import BrowseCertificationsUseCase
from ..dependencies import get_listing_service

router = APIRouter(prefix="/certifications", tags=["certifications"])


@router.get("", response_model=ListingResponseDTO)
async def list_certifications(
    criteria: Annotated[ListingCriteriaDTO, Query()],
    use_case: BrowseCertificationsUseCase = Depends(get_listing_service),
) -> ListingResponseDTO:
    """Fetch every certification and return the filtered, sorted subset."""
    return await use_case.browse(criteria)


@router.get("/{certification_id}/skills", response_model=SkillListDTO)
async def list_certification_skills(
    certification_id: str,
    use_case: BrowseCertificationsUseCase = Depends(get_listing_service),
) -> SkillListDTO:
    """Skill tags of one certification, alphabetical."""
    return await use_case.skills_for(certification_id)
