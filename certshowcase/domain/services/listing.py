"""Filter and sort pipeline for the public certification listing.

Everything here is pure: the same records and criteria always give the same
ordered result. Sorting relies on ``sorted`` being stable, so records with
equal keys keep the order they were fetched in.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime

from ..entities.certification import Certification
from ..value_objects.listing_criteria import ALL, ListingCriteria, SortOption


def matches(record: Certification, criteria: ListingCriteria) -> bool:
    """True when the record satisfies every filter of ``criteria``."""
    term = criteria.search.lower()
    if term and term not in record.title.lower() and term not in record.issuer.lower():
        return False
    if criteria.issuer != ALL and record.issuer != criteria.issuer:
        return False
    if criteria.type != ALL and record.type.value != criteria.type:
        return False
    if criteria.status != ALL and record.status.value != criteria.status:
        return False
    return True


def _by_effective_date(record: Certification) -> datetime:
    return record.effective_date


def _by_title(record: Certification) -> str:
    return record.title


def _by_issuer(record: Certification) -> str:
    return record.issuer


# sort option -> (key, descending)
_ORDERINGS: dict[SortOption, tuple[Callable[[Certification], object], bool]] = {
    SortOption.NEWEST: (_by_effective_date, True),
    SortOption.OLDEST: (_by_effective_date, False),
    SortOption.TITLE: (_by_title, False),
    SortOption.ISSUER: (_by_issuer, False),
}


def filter_and_sort(
    records: Sequence[Certification],
    criteria: ListingCriteria,
) -> list[Certification]:
    """Return the records matching ``criteria`` in the requested order."""
    key, descending = _ORDERINGS[criteria.sort_by]
    filtered = [record for record in records if matches(record, criteria)]
    # reverse=True keeps equal keys in their original order
    return sorted(filtered, key=key, reverse=descending)


def list_issuers(records: Iterable[Certification]) -> list[str]:
    """Sorted distinct issuers, used as the issuer filter options."""
    return sorted({record.issuer for record in records})
