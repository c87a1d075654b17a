from .listing import filter_and_sort, list_issuers, matches
from .transition import DEFAULT_TRANSITION_WINDOW, TransitionAnimator, TransitionState

__all__ = [
    "DEFAULT_TRANSITION_WINDOW",
    "TransitionAnimator",
    "TransitionState",
    "filter_and_sort",
    "list_issuers",
    "matches",
]
