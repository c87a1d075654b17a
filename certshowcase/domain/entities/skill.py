from dataclasses import dataclass
from datetime import datetime


@dataclass
class Skill:
    """A skill tag owned by exactly one certification.

    Names are not unique per certification; the backend accepts duplicates.
    """

    id: str
    certification_id: str
    skill_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
