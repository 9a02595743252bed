# services/identity_service.py

from typing import Any, Dict

from supabase import Client

from models.admin_user import AccountHandle


# ============================================================
# Helpers
# ============================================================

def to_account_handle(user) -> AccountHandle:
    """
    Normalize a supabase-py User into an AccountHandle.
    Custom claims live in app_metadata; Supabase also keeps
    its own provider keys there, which are left untouched.
    """
    return AccountHandle(
        id=str(user.id),
        email=getattr(user, "email", None),
        email_verified=getattr(user, "email_confirmed_at", None) is not None,
        claims=dict(getattr(user, "app_metadata", None) or {}),
    )


# ============================================================
# Supabase Auth Admin — identity operations
# ============================================================

class SupabaseIdentityService:
    """
    Account creation, claim attachment and lookup through auth.admin.
    Supabase errors propagate unchanged; the caller decides how to report them.
    """

    def __init__(self, client: Client):
        self.client = client

    def create_account(
        self,
        email: str,
        password: str,
        display_name: str,
        email_pre_verified: bool = True,
    ) -> AccountHandle:
        result = self.client.auth.admin.create_user(
            {
                "email": email,
                "password": password,
                "email_confirm": email_pre_verified,
                "user_metadata": {"displayName": display_name},
            }
        )
        return to_account_handle(result.user)

    def set_claims(self, account_id: str, claims: Dict[str, Any]) -> None:
        self.client.auth.admin.update_user_by_id(
            account_id,
            {"app_metadata": claims},
        )

    def get_account(self, account_id: str) -> AccountHandle:
        result = self.client.auth.admin.get_user_by_id(account_id)
        if result is None or result.user is None:
            raise LookupError(f"User {account_id} not found")
        return to_account_handle(result.user)
