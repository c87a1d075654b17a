from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from enum import Enum


class CertificationType(str, Enum):
    CERTIFICATION = "certification"
    BADGE = "badge"
    QUALIFICATION = "qualification"


class CertificationStatus(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"


@dataclass
class Certification:
    """A certification record as stored by the backend."""

    id: str
    title: str
    issuer: str
    created_at: datetime
    updated_at: datetime
    type: CertificationType = CertificationType.CERTIFICATION
    status: CertificationStatus = CertificationStatus.COMPLETED
    issued_date: date | None = None
    expires_date: date | None = None
    description: str | None = None
    official_link: str | None = None
    certificate_file_url: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Certification title cannot be empty")
        if not self.issuer or not self.issuer.strip():
            raise ValueError("Certification issuer cannot be empty")
        self.type = CertificationType(self.type)
        self.status = CertificationStatus(self.status)

    @property
    def effective_date(self) -> datetime:
        """Issued date when known, otherwise the creation timestamp.

        Issued dates are calendar dates and are placed at midnight UTC so they
        compare against creation timestamps.
        """
        if self.issued_date is not None:
            return datetime.combine(self.issued_date, time.min, tzinfo=UTC)
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=UTC)
        return self.created_at


@dataclass
class CertificationDraft:
    """Editable fields of a certification, as submitted from the admin form."""

    title: str
    issuer: str
    type: CertificationType = CertificationType.CERTIFICATION
    status: CertificationStatus = CertificationStatus.COMPLETED
    issued_date: date | None = None
    expires_date: date | None = None
    description: str | None = None
    official_link: str | None = None
    certificate_file_url: str | None = None

    def to_row(self, include_file_url: bool = True) -> dict:
        """Row payload for the backend.

        When ``include_file_url`` is False the file column is left out so an
        update keeps whatever URL is already stored.
        """
        row = {
            "title": self.title,
            "issuer": self.issuer,
            "type": CertificationType(self.type).value,
            "status": CertificationStatus(self.status).value,
            "issued_date": self.issued_date.isoformat() if self.issued_date else None,
            "expires_date": self.expires_date.isoformat() if self.expires_date else None,
            "description": self.description or None,
            "official_link": self.official_link or None,
        }
        if include_file_url:
            row["certificate_file_url"] = self.certificate_file_url or None
        return row
