from .auth_state import AuthEvent, GateState
from .listing_criteria import ALL, ListingCriteria, SortOption

__all__ = ["ALL", "AuthEvent", "GateState", "ListingCriteria", "SortOption"]
