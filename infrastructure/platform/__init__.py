from infrastructure.platform.supabase_auth import SupabaseAuthProvider, SupabaseFileStorage

__all__ = [
    "SupabaseAuthProvider",
    "SupabaseFileStorage",
]
