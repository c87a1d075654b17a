"""Public listing: one-shot queries and per-visitor listing views.

A ``ListingView`` is the server-side counterpart of the listing page. It holds
the records it fetched, the visitor's filter selection and a transition
animator. Records are only ever replaced by a full refetch.
"""

from collections import OrderedDict
from collections.abc import Callable, Sequence
from uuid import uuid4

import structlog

from ...domain.entities import Certification
from ...domain.services import TransitionAnimator, filter_and_sort, list_issuers
from ...domain.value_objects import ListingCriteria
from ..dtos.certification_dto import (
    CertificationResponseDTO,
    ListingCriteriaDTO,
    ListingResponseDTO,
    ListingViewResponseDTO,
    NotificationDTO,
    SkillListDTO,
)
from ..ports.inbound import BrowseCertificationsUseCase
from ..ports.outbound import BackendError, CertificationRepository, SkillRepository

logger = structlog.get_logger()

FETCH_FAILED = "Failed to fetch certifications"


def to_criteria(dto: ListingCriteriaDTO) -> ListingCriteria:
    return ListingCriteria(**dto.model_dump())


def to_criteria_dto(criteria: ListingCriteria) -> ListingCriteriaDTO:
    return ListingCriteriaDTO(
        search=criteria.search,
        issuer=criteria.issuer,
        type=criteria.type,
        status=criteria.status,
        sort_by=criteria.sort_by,
    )


def _items(records: Sequence[Certification]) -> list[CertificationResponseDTO]:
    return [CertificationResponseDTO.from_entity(r) for r in records]


class ListingService(BrowseCertificationsUseCase):
    """Stateless listing: fetch, filter and sort on every call."""

    def __init__(self, certifications: CertificationRepository, skills: SkillRepository):
        self._certifications = certifications
        self._skills = skills

    async def browse(self, criteria: ListingCriteriaDTO) -> ListingResponseDTO:
        try:
            records = await self._certifications.list_all()
        except BackendError as e:
            logger.error(
                "Listing fetch failed",
                error=str(e),
                error_type=type(e).__name__,
                status_code=e.status_code,
            )
            return ListingResponseDTO(
                items=[],
                issuers=[],
                total=0,
                criteria=criteria,
                notifications=[NotificationDTO.error(FETCH_FAILED)],
            )

        visible = filter_and_sort(records, to_criteria(criteria))
        return ListingResponseDTO(
            items=_items(visible),
            issuers=list_issuers(records),
            total=len(records),
            criteria=criteria,
        )

    async def skills_for(self, certification_id: str) -> SkillListDTO:
        try:
            skills = await self._skills.list_for(certification_id)
        except BackendError as e:
            # Cards render without tags when skills cannot be loaded
            logger.warning(
                "Skill fetch failed",
                certification_id=certification_id,
                error=str(e),
            )
            skills = []
        return SkillListDTO(
            certification_id=certification_id,
            skills=[s.skill_name for s in skills],
        )


class ListingView:
    """Listing page state for one visitor."""

    def __init__(
        self,
        repository: CertificationRepository,
        animator: TransitionAnimator,
        view_id: str | None = None,
    ) -> None:
        self.id = view_id or uuid4().hex
        self._repository = repository
        self._animator = animator
        self._criteria = ListingCriteria()
        self._records: list[Certification] = []
        self._visible: list[Certification] = []
        self._issuers: list[str] = []
        self._notifications: list[NotificationDTO] = []

    @property
    def criteria(self) -> ListingCriteria:
        return self._criteria

    @property
    def visible(self) -> list[Certification]:
        return list(self._visible)

    @property
    def issuers(self) -> list[str]:
        return list(self._issuers)

    @property
    def animator(self) -> TransitionAnimator:
        return self._animator

    async def mount(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        """Refetch every record. On failure the previous list stays in place."""
        try:
            records = await self._repository.list_all()
        except BackendError as e:
            logger.error(
                "Listing view refresh failed",
                view_id=self.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._notifications.append(NotificationDTO.error(FETCH_FAILED))
            return

        self._records = records
        self._issuers = list_issuers(records)
        self._recompute()

    def apply(self, criteria: ListingCriteria) -> None:
        self._criteria = criteria
        self._recompute()

    def _recompute(self) -> None:
        self._visible = filter_and_sort(self._records, self._criteria)
        self._animator.observe([r.id for r in self._visible])

    def snapshot(self) -> ListingViewResponseDTO:
        """Current page state. Pending notifications are delivered once."""
        notifications, self._notifications = self._notifications, []
        return ListingViewResponseDTO(
            view_id=self.id,
            items=_items(self._visible),
            issuers=self._issuers,
            total=len(self._records),
            criteria=to_criteria_dto(self._criteria),
            notifications=notifications,
            transition=self._animator.state.value,
            transition_remaining_ms=round(self._animator.remaining * 1000),
        )


class ListingViewRegistry:
    """Mounted listing views, keyed by id. The oldest view is dropped when full."""

    def __init__(
        self,
        animator_factory: Callable[[], TransitionAnimator] = TransitionAnimator,
        max_views: int = 500,
    ) -> None:
        if max_views < 1:
            raise ValueError("max_views must be at least 1")
        self._views: OrderedDict[str, ListingView] = OrderedDict()
        self._animator_factory = animator_factory
        self._max_views = max_views

    def __len__(self) -> int:
        return len(self._views)

    def new_animator(self) -> TransitionAnimator:
        return self._animator_factory()

    def add(self, view: ListingView) -> ListingView:
        self._views[view.id] = view
        while len(self._views) > self._max_views:
            evicted_id, _ = self._views.popitem(last=False)
            logger.debug("Listing view evicted", view_id=evicted_id)
        return view

    def get(self, view_id: str) -> ListingView | None:
        return self._views.get(view_id)

    def remove(self, view_id: str) -> bool:
        return self._views.pop(view_id, None) is not None
