"""Admin panel endpoints.

Security: every route requires a signed-in session (and the admin profile
flag when ``require_admin_profile`` is on). Backend calls are made with the
user's own access token so row-level policies apply.

Action outcomes are reported as notifications in a 200 response; only
malformed requests and rejected uploads are answered with an error status.
"""

import os
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from ....application.dtos import AddSkillDTO, AdminResultDTO, CertificationFormDTO
from ....application.ports.outbound import Attachment
from ....application.services import AdminService
from ....config import settings
from ..dependencies import get_admin_service

logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin"])

Admin = Annotated[AdminService, Depends(get_admin_service)]


def certification_form(
    title: Annotated[str, Form()],
    issuer: Annotated[str, Form()],
    type: Annotated[str, Form()] = "certification",
    status_: Annotated[str, Form(alias="status")] = "completed",
    issued_date: Annotated[str | None, Form()] = None,
    expires_date: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    official_link: Annotated[str | None, Form()] = None,
) -> CertificationFormDTO:
    """Multipart form fields parsed into a validated form DTO."""
    try:
        return CertificationFormDTO(
            title=title,
            issuer=issuer,
            type=type,
            status=status_,
            issued_date=issued_date,
            expires_date=expires_date,
            description=description,
            official_link=official_link,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=jsonable_encoder(
                e.errors(include_url=False, include_context=False, include_input=False)
            ),
        ) from e


async def read_attachment(upload: UploadFile | None) -> Attachment | None:
    """Validate and read an uploaded certificate file.

    Security: only document and image extensions are accepted and the size
    is capped independently of the request size limit.
    """
    if upload is None or not upload.filename:
        return None

    filename = os.path.basename(upload.filename)
    extension = os.path.splitext(filename)[1].lower()
    if extension not in settings.allowed_attachment_extensions:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type: {extension or 'none'}. "
            f"Allowed: {', '.join(settings.allowed_attachment_extensions)}",
        )

    content = await upload.read(settings.max_upload_size + 1)
    if len(content) > settings.max_upload_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {settings.max_upload_size} bytes",
        )

    logger.debug("Attachment received", filename=filename, size=len(content))
    return Attachment(filename=filename, content=content, content_type=upload.content_type)


CertificationForm = Annotated[CertificationFormDTO, Depends(certification_form)]
CertificateFile = Annotated[UploadFile | None, File()]


@router.get("/certifications", response_model=AdminResultDTO)
async def list_admin_certifications(service: Admin) -> AdminResultDTO:
    """Every certification, newest row first."""
    return await service.load()


@router.post("/certifications", response_model=AdminResultDTO)
async def create_certification(
    service: Admin,
    form: CertificationForm,
    certificate_file: CertificateFile = None,
) -> AdminResultDTO:
    attachment = await read_attachment(certificate_file)
    return await service.create(form, attachment)


@router.put("/certifications/{certification_id}", response_model=AdminResultDTO)
async def update_certification(
    certification_id: str,
    service: Admin,
    form: CertificationForm,
    certificate_file: CertificateFile = None,
) -> AdminResultDTO:
    """Replace the editable fields; the stored file is kept unless a new one is sent."""
    attachment = await read_attachment(certificate_file)
    return await service.update(certification_id, form, attachment)


@router.delete("/certifications/{certification_id}", response_model=AdminResultDTO)
async def delete_certification(certification_id: str, service: Admin) -> AdminResultDTO:
    return await service.delete(certification_id)


@router.get("/certifications/{certification_id}/skills", response_model=AdminResultDTO)
async def list_skills(certification_id: str, service: Admin) -> AdminResultDTO:
    return await service.list_skills(certification_id)


@router.post("/certifications/{certification_id}/skills", response_model=AdminResultDTO)
async def add_skill(certification_id: str, dto: AddSkillDTO, service: Admin) -> AdminResultDTO:
    return await service.add_skill(certification_id, dto.skill_name)


@router.delete(
    "/certifications/{certification_id}/skills/{skill_name:path}",
    response_model=AdminResultDTO,
)
async def remove_skill(certification_id: str, skill_name: str, service: Admin) -> AdminResultDTO:
    """Remove every tag with this name from the certification.

    The name may contain slashes (e.g. "CI/CD"), so it is matched as a path.
    """
    return await service.remove_skill(certification_id, skill_name)
