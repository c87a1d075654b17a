from .admin_service import AdminService
from .auth_gate import AuthGate, SessionStore, SignInError
from .listing_view_service import ListingService, ListingView, ListingViewRegistry

__all__ = [
    "AdminService",
    "AuthGate",
    "ListingService",
    "ListingView",
    "ListingViewRegistry",
    "SessionStore",
    "SignInError",
]
