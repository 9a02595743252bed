# core/supabase_client.py

from typing import Optional

from supabase import create_client, Client
from core.config import Settings, settings as default_settings
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

def get_supabase_client(settings: Optional[Settings] = None) -> Optional[Client]:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.admin.create_user
        - auth.admin.update_user_by_id (app_metadata claims)
        - auth.admin.get_user_by_id
        - writes to the users / admin_logs tables
    Returns None when not configured; callers decide whether that is fatal.
    """
    settings = settings or default_settings

    try:
        supabase_url = settings.SUPABASE_URL
        supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY  # MUST be service-role

        if not supabase_url or not supabase_key:
            logger.error("Missing Supabase credentials")
            logger.error(f"   URL: {supabase_url}")
            logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
            return None

        return create_client(supabase_url, supabase_key)

    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None
