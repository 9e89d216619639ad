from .auth_client import SupabaseAuthClient
from .rest_client import SupabaseRestGateway

__all__ = ["SupabaseAuthClient", "SupabaseRestGateway"]
