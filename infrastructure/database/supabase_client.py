"""
Supabase client for the club database and storage.
Imported once; every repository shares the same service-role client.
"""

from supabase import create_client, Client
import asyncio
import concurrent.futures
import sys
import os
from functools import wraps

# Read straight from env so scripts work without the full Settings object
_url = os.environ.get("SUPABASE_URL", "")
_service_key = os.environ.get("SUPABASE_SERVICE_KEY", "")
_anon_key = os.environ.get("SUPABASE_KEY", "")

if not _url or not (_service_key or _anon_key):
    print("ERROR: Board FC cannot reach Supabase, credentials are missing")
    print(f"   SUPABASE_URL: {'set' if _url else 'MISSING'}")
    print(f"   SUPABASE_SERVICE_KEY: {'set' if _service_key else 'MISSING'}")
    print(f"   SUPABASE_KEY: {'set' if _anon_key else 'MISSING'}")
    sys.exit(1)

_schema = os.environ.get("DB_SCHEMA", "public")


def _connect(key: str) -> Client:
    if _schema == "public":
        return create_client(_url, key)
    from supabase.lib.client_options import ClientOptions
    return create_client(_url, key, options=ClientOptions(schema=_schema))


# Writes to players/fixtures/news bypass row-level security with the service key
supabase: Client = _connect(_service_key or _anon_key)

# Bounded pool so a burst of page loads cannot starve the default executor
_db_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=10,
    thread_name_prefix="board-db",
)


def run_sync(func):
    """
    Run a blocking supabase-py call on the database pool.
    The SDK is synchronous; handlers and services stay async.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_db_executor, lambda: func(*args, **kwargs))
    return wrapper


def anon_client() -> Client:
    """Fresh client with the public anon key, one per sign-in/sign-up call"""
    return _connect(_anon_key or _service_key)
