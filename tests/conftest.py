from datetime import UTC, date, datetime

import pytest

from certshowcase.domain.entities import (
    AuthSession,
    AuthUser,
    Certification,
    CertificationStatus,
    CertificationType,
    Skill,
)


def make_certification(
    id: str,
    title: str,
    issuer: str,
    issued_date: date | None = None,
    created_at: datetime | None = None,
    type: CertificationType = CertificationType.CERTIFICATION,
    status: CertificationStatus = CertificationStatus.COMPLETED,
    **extra,
) -> Certification:
    created = created_at or datetime(2024, 1, 1, tzinfo=UTC)
    return Certification(
        id=id,
        title=title,
        issuer=issuer,
        type=type,
        status=status,
        issued_date=issued_date,
        created_at=created,
        updated_at=created,
        **extra,
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def aws_cert() -> Certification:
    return make_certification(
        "c1",
        "AWS Solutions Architect",
        "Amazon",
        issued_date=date(2023, 5, 1),
    )


@pytest.fixture
def docker_badge() -> Certification:
    return make_certification(
        "c2",
        "Docker Basics",
        "Docker",
        issued_date=date(2024, 2, 1),
        type=CertificationType.BADGE,
    )


@pytest.fixture
def k8s_in_progress() -> Certification:
    return make_certification(
        "c3",
        "Kubernetes Administrator",
        "CNCF",
        created_at=datetime(2022, 3, 1, tzinfo=UTC),
        status=CertificationStatus.IN_PROGRESS,
    )


@pytest.fixture
def sample_records(aws_cert, docker_badge) -> list[Certification]:
    return [aws_cert, docker_badge]


@pytest.fixture
def sample_skills() -> list[Skill]:
    return [
        Skill(id="s1", certification_id="c1", skill_name="EC2"),
        Skill(id="s2", certification_id="c1", skill_name="S3"),
    ]


@pytest.fixture
def sample_session() -> AuthSession:
    return AuthSession(
        user=AuthUser(id="user-123", email="admin@example.com"),
        access_token="access-abc",  # noqa: S106
        refresh_token="refresh-xyz",  # noqa: S106
        expires_in=3600,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


def certification_row(id: str = "c1", **overrides) -> dict:
    row = {
        "id": id,
        "title": "AWS Solutions Architect",
        "issuer": "Amazon",
        "type": "certification",
        "status": "completed",
        "issued_date": "2023-05-01",
        "expires_date": None,
        "description": None,
        "official_link": None,
        "certificate_file_url": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


@pytest.fixture
def certification_factory():
    return make_certification


@pytest.fixture
def row_factory():
    return certification_row
