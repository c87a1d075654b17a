from datetime import UTC, date, datetime

import pytest

from certshowcase.domain.entities import CertificationType
from certshowcase.domain.services import filter_and_sort, list_issuers
from certshowcase.domain.value_objects import ALL, ListingCriteria, SortOption


def ids(records):
    return [r.id for r in records]


class TestListingCriteria:
    def test_defaults_show_everything_newest_first(self):
        criteria = ListingCriteria()

        assert criteria.search == ""
        assert criteria.issuer == ALL
        assert criteria.type == ALL
        assert criteria.status == ALL
        assert criteria.sort_by is SortOption.NEWEST

    def test_sort_option_coerced_from_string(self):
        assert ListingCriteria(sort_by="title").sort_by is SortOption.TITLE

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            ListingCriteria(type="diploma")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            ListingCriteria(status="expired")

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValueError):
            ListingCriteria(sort_by="random")

    def test_criteria_is_immutable(self):
        criteria = ListingCriteria()

        with pytest.raises(AttributeError):
            criteria.search = "aws"


class TestFilterAndSort:
    def test_newest_first_by_issued_date(self, sample_records):
        result = filter_and_sort(sample_records, ListingCriteria())

        assert [r.title for r in result] == ["Docker Basics", "AWS Solutions Architect"]

    def test_oldest_first(self, sample_records):
        result = filter_and_sort(sample_records, ListingCriteria(sort_by=SortOption.OLDEST))

        assert ids(result) == ["c1", "c2"]

    def test_search_matches_title_or_issuer_case_insensitively(self, sample_records):
        result = filter_and_sort(sample_records, ListingCriteria(search="docker"))

        assert [r.title for r in result] == ["Docker Basics"]

        result = filter_and_sort(sample_records, ListingCriteria(search="AMAZON"))

        assert ids(result) == ["c1"]

    def test_search_matches_punctuation_literally(self, certification_factory):
        records = [
            certification_factory("c1", "C++ & Go", "AT&T"),
            certification_factory("c2", "Go Basics", "Google"),
        ]

        assert ids(filter_and_sort(records, ListingCriteria(search="c++ & go"))) == ["c1"]
        assert ids(filter_and_sort(records, ListingCriteria(search="at&t"))) == ["c1"]

    def test_search_with_no_match_returns_empty(self, sample_records):
        assert filter_and_sort(sample_records, ListingCriteria(search="azure")) == []

    def test_issuer_filter_is_exact(self, sample_records):
        assert ids(filter_and_sort(sample_records, ListingCriteria(issuer="Amazon"))) == ["c1"]
        assert filter_and_sort(sample_records, ListingCriteria(issuer="amazon")) == []

    def test_type_filter(self, sample_records):
        result = filter_and_sort(sample_records, ListingCriteria(type="badge"))

        assert ids(result) == ["c2"]
        assert all(r.type is CertificationType.BADGE for r in result)

    def test_status_filter(self, sample_records, k8s_in_progress):
        records = [*sample_records, k8s_in_progress]

        result = filter_and_sort(records, ListingCriteria(status="in_progress"))

        assert ids(result) == ["c3"]

    def test_filters_combine(self, sample_records, k8s_in_progress):
        records = [*sample_records, k8s_in_progress]
        criteria = ListingCriteria(search="a", issuer="Amazon", type="certification")

        assert ids(filter_and_sort(records, criteria)) == ["c1"]

    def test_title_sort_ascending(self, sample_records, k8s_in_progress):
        records = [k8s_in_progress, *sample_records]

        result = filter_and_sort(records, ListingCriteria(sort_by=SortOption.TITLE))

        assert [r.title for r in result] == [
            "AWS Solutions Architect",
            "Docker Basics",
            "Kubernetes Administrator",
        ]

    def test_issuer_sort_ascending(self, sample_records, k8s_in_progress):
        records = [*sample_records, k8s_in_progress]

        result = filter_and_sort(records, ListingCriteria(sort_by=SortOption.ISSUER))

        assert [r.issuer for r in result] == ["Amazon", "CNCF", "Docker"]

    def test_missing_issued_date_uses_created_at(self, certification_factory):
        undated = certification_factory(
            "c9", "Recent", "X", created_at=datetime(2025, 1, 1, tzinfo=UTC)
        )
        dated = certification_factory("c8", "Older", "X", issued_date=date(2024, 6, 1))

        result = filter_and_sort([dated, undated], ListingCriteria())

        assert ids(result) == ["c9", "c8"]

    @pytest.mark.parametrize("sort_by", list(SortOption))
    def test_equal_keys_keep_fetch_order(self, certification_factory, sort_by):
        records = [
            certification_factory(f"c{i}", "Same", "Same", issued_date=date(2024, 1, 1))
            for i in range(5)
        ]

        result = filter_and_sort(records, ListingCriteria(sort_by=sort_by))

        assert ids(result) == ["c0", "c1", "c2", "c3", "c4"]

    def test_result_is_idempotent(self, sample_records, k8s_in_progress):
        records = [*sample_records, k8s_in_progress]
        criteria = ListingCriteria(sort_by=SortOption.ISSUER)

        once = filter_and_sort(records, criteria)

        assert ids(filter_and_sort(once, criteria)) == ids(once)

    def test_input_not_mutated(self, sample_records):
        before = list(sample_records)

        filter_and_sort(sample_records, ListingCriteria(sort_by=SortOption.TITLE))

        assert sample_records == before

    def test_result_is_subset_satisfying_every_filter(self, sample_records, k8s_in_progress):
        records = [*sample_records, k8s_in_progress]
        criteria = ListingCriteria(status="completed")

        result = filter_and_sort(records, criteria)

        assert set(ids(result)) <= set(ids(records))
        assert all(r.status.value == "completed" for r in result)


class TestListIssuers:
    def test_distinct_sorted(self, sample_records, certification_factory):
        records = [*sample_records, certification_factory("c5", "ECS", "Amazon")]

        assert list_issuers(records) == ["Amazon", "Docker"]

    def test_empty(self):
        assert list_issuers([]) == []
