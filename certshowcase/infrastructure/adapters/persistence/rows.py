"""Typed row shapes for the backend tables.

Rows are validated here before they become domain entities, so a payload
with a missing column or an unknown enum value surfaces as
``BackendResponseError`` instead of travelling further untyped.
"""

from datetime import date, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ....application.ports.outbound.errors import BackendResponseError
from ....domain.entities import (
    Certification,
    CertificationStatus,
    CertificationType,
    Profile,
    Skill,
)

RowT = TypeVar("RowT", bound=BaseModel)


class CertificationRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    issuer: str
    type: CertificationType = CertificationType.CERTIFICATION
    status: CertificationStatus = CertificationStatus.COMPLETED
    issued_date: date | None = None
    expires_date: date | None = None
    description: str | None = None
    official_link: str | None = None
    certificate_file_url: str | None = None
    created_at: datetime
    updated_at: datetime

    def to_entity(self) -> Certification:
        return Certification(**self.model_dump())


class SkillRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    certification_id: str
    skill_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_entity(self) -> Skill:
        return Skill(**self.model_dump())


class ProfileRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    username: str
    is_admin: bool = False
    totp_secret: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_entity(self) -> Profile:
        return Profile(**self.model_dump())


def parse_row(model: type[RowT], row: dict[str, Any], table: str) -> RowT:
    try:
        return model.model_validate(row)
    except ValidationError as e:
        raise BackendResponseError(
            f"Unexpected row shape from {table}: {e.error_count()} invalid field(s)"
        ) from e


def to_certification(row: dict[str, Any], table: str) -> Certification:
    parsed = parse_row(CertificationRow, row, table)
    try:
        return parsed.to_entity()
    except ValueError as e:
        raise BackendResponseError(f"Invalid certification row from {table}: {e}") from e
