import logging
from typing import Optional

from supabase import Client, create_client

from config import Settings

logger = logging.getLogger("order-relay")


def build_supabase_client(app_settings: Settings) -> Optional[Client]:
    if not app_settings.store_configured:
        logger.warning("Supabase credentials not configured; order storage is unavailable.")
        return None
    return create_client(app_settings.supabase_url, app_settings.supabase_service_key)
