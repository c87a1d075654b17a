from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator

from ...domain.entities import (
    Certification,
    CertificationDraft,
    CertificationStatus,
    CertificationType,
)
from ...domain.value_objects import ALL, SortOption


class CertificationFormDTO(BaseModel):
    """Admin form for creating or editing a certification.

    Empty optional fields are treated as absent and stored as null.
    """

    title: str = Field(..., min_length=1, max_length=200)
    issuer: str = Field(..., min_length=1, max_length=200)
    type: CertificationType = CertificationType.CERTIFICATION
    status: CertificationStatus = CertificationStatus.COMPLETED
    issued_date: date | None = None
    expires_date: date | None = None
    description: str | None = Field(None, max_length=5000)
    official_link: HttpUrl | None = None

    @field_validator(
        "issued_date", "expires_date", "description", "official_link", mode="before"
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("title", "issuer", mode="after")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        """Stored as typed, not HTML-escaped."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("description", mode="after")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    def to_draft(self) -> CertificationDraft:
        return CertificationDraft(
            title=self.title,
            issuer=self.issuer,
            type=self.type,
            status=self.status,
            issued_date=self.issued_date,
            expires_date=self.expires_date,
            description=self.description,
            official_link=str(self.official_link) if self.official_link else None,
        )


class CertificationResponseDTO(BaseModel):
    id: str
    title: str
    issuer: str
    type: CertificationType
    status: CertificationStatus
    issued_date: date | None = None
    expires_date: date | None = None
    description: str | None = None
    official_link: str | None = None
    certificate_file_url: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, certification: Certification) -> "CertificationResponseDTO":
        return cls(
            id=certification.id,
            title=certification.title,
            issuer=certification.issuer,
            type=certification.type,
            status=certification.status,
            issued_date=certification.issued_date,
            expires_date=certification.expires_date,
            description=certification.description,
            official_link=certification.official_link,
            certificate_file_url=certification.certificate_file_url,
            created_at=certification.created_at,
            updated_at=certification.updated_at,
        )


class ListingCriteriaDTO(BaseModel):
    search: str = Field("", max_length=200)
    issuer: str = Field(ALL, min_length=1)
    type: Literal["all", "certification", "badge", "qualification"] = ALL
    status: Literal["all", "completed", "in_progress"] = ALL
    sort_by: SortOption = SortOption.NEWEST


class NotificationDTO(BaseModel):
    """Transient message shown to the user after an action."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"

    @classmethod
    def success(cls, description: str) -> "NotificationDTO":
        return cls(title="Success", description=description)

    @classmethod
    def error(cls, description: str) -> "NotificationDTO":
        return cls(title="Error", description=description, variant="destructive")


class ListingResponseDTO(BaseModel):
    items: list[CertificationResponseDTO]
    issuers: list[str]
    total: int
    criteria: ListingCriteriaDTO
    notifications: list[NotificationDTO] = []


class ListingViewResponseDTO(ListingResponseDTO):
    view_id: str
    transition: Literal["steady", "transitioning"]
    transition_remaining_ms: int = 0


class SkillListDTO(BaseModel):
    certification_id: str
    skills: list[str]


class AddSkillDTO(BaseModel):
    skill_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("skill_name", mode="after")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class AdminResultDTO(BaseModel):
    """Outcome of an admin action plus the data refetched after it."""

    notifications: list[NotificationDTO] = []
    certifications: list[CertificationResponseDTO] | None = None
    skills: SkillListDTO | None = None

    @property
    def succeeded(self) -> bool:
        return not any(n.variant == "destructive" for n in self.notifications)
