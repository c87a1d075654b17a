from .backend_auth_provider import BackendAuthProvider, session_from_payload

__all__ = ["BackendAuthProvider", "session_from_payload"]
