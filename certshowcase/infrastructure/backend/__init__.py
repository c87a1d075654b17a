from .auth import AuthApi
from .client import BackendClient
from .storage import StorageBucket
from .tables import Table

__all__ = ["AuthApi", "BackendClient", "StorageBucket", "Table"]
