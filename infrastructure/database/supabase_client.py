"""
Supabase client initialization.
Single point of database connection.
"""

from supabase import create_client, Client
import asyncio
import concurrent.futures
import logging
import sys
import os
from functools import wraps

logger = logging.getLogger(__name__)

# Credentials come straight from env so scripts work without the web settings
_supabase_url = os.environ.get("SUPABASE_URL", "")
_supabase_key = os.environ.get("SUPABASE_SERVICE_KEY") or os.environ.get("SUPABASE_KEY", "")

if not _supabase_url or not _supabase_key:
    logger.error(
        "Supabase credentials not configured! Required env vars: SUPABASE_URL, "
        "SUPABASE_SERVICE_KEY (or SUPABASE_KEY). SUPABASE_URL: %s, SUPABASE_KEY: %s",
        "set" if _supabase_url else "MISSING",
        "set" if _supabase_key else "MISSING",
    )
    sys.exit(1)

# Optional schema isolation (e.g. a staging schema next to public)
_schema = os.environ.get("DB_SCHEMA", "public")

if _schema != "public":
    from supabase.lib.client_options import ClientOptions
    supabase: Client = create_client(
        _supabase_url, _supabase_key,
        options=ClientOptions(schema=_schema)
    )
else:
    supabase: Client = create_client(_supabase_url, _supabase_key)


# Bounded pool for DB calls so a burst of page loads can't exhaust the default executor
_db_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=int(os.environ.get("DB_POOL_SIZE", "8")),
    thread_name_prefix="caminera-db",
)


def run_sync(func):
    """
    Decorator to run synchronous Supabase operations in async context.
    The Supabase Python SDK is synchronous, so every repository call goes
    through the bounded pool above.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_db_executor, lambda: func(*args, **kwargs))
    return wrapper
