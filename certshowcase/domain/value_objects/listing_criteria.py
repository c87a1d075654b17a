from dataclasses import dataclass
from enum import Enum

from ..entities.certification import CertificationStatus, CertificationType

ALL = "all"


class SortOption(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    TITLE = "title"
    ISSUER = "issuer"


@dataclass(frozen=True)
class ListingCriteria:
    """Immutable filter and sort selection for the public listing."""

    search: str = ""
    issuer: str = ALL
    type: str = ALL
    status: str = ALL
    sort_by: SortOption = SortOption.NEWEST

    def __post_init__(self) -> None:
        if self.type != ALL and self.type not in {t.value for t in CertificationType}:
            raise ValueError(f"Unknown type filter: {self.type}")
        if self.status != ALL and self.status not in {s.value for s in CertificationStatus}:
            raise ValueError(f"Unknown status filter: {self.status}")
        if not self.issuer:
            raise ValueError("Issuer filter cannot be empty")
        object.__setattr__(self, "sort_by", SortOption(self.sort_by))
        object.__setattr__(self, "search", self.search or "")
