# models/admin_user.py

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from core.permissions import (
    ADMIN_LEVEL,
    ADMIN_PERMISSIONS,
    ADMIN_ROLE,
    ADMIN_ROLE_LABELS,
)


# PostgreSQL resolves the 'now' literal to the transaction time,
# so timestamps are assigned by the database, not this machine.
SERVER_TIMESTAMP = "now"


class StoredModel(BaseModel):
    """
    Snake_case attributes in Python, camelCase keys in Supabase.
    Dump with model_dump(by_alias=True) before writing.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===============================================================
# INPUT
# ===============================================================

class AdminCredentialInput(BaseModel):
    """
    One admin to provision. Lives only for the duration of the setup run.
    """
    email: EmailStr
    password: str
    display_name: str = ""


# ===============================================================
# SUPABASE AUTH (app_metadata claims / account reads)
# ===============================================================

class AuthorizationClaims(StoredModel):
    """
    Claims stored in auth.users.app_metadata.
    Identical for every admin created by the setup flow.
    """
    role: str = ADMIN_ROLE
    level: int = ADMIN_LEVEL
    is_admin: bool = True
    permissions: List[str] = Field(default_factory=lambda: list(ADMIN_PERMISSIONS))


class AccountHandle(BaseModel):
    """
    Reference to a Supabase Auth user, normalized from the SDK's User object.
    """
    id: str
    email: Optional[str] = None
    email_verified: bool = False
    claims: Dict[str, Any] = Field(default_factory=dict)


# ===============================================================
# USERS TABLE — profile document
# ===============================================================

class RoleInfo(StoredModel):
    """Denormalized copy of the claims plus display labels."""
    id: str = ADMIN_ROLE
    name: str = ADMIN_ROLE
    display_name: str = ADMIN_ROLE_LABELS["display_name"]
    display_name_ar: str = ADMIN_ROLE_LABELS["display_name_ar"]
    permissions: List[str] = Field(default_factory=lambda: list(ADMIN_PERMISSIONS))
    level: int = ADMIN_LEVEL
    is_active: bool = True


class Verification(StoredModel):
    email_verified: bool = True
    phone_verified: bool = False
    identity_verified: bool = True


class ProfileInfo(StoredModel):
    first_name: str = "Admin"
    last_name: str = "User"
    verification: Verification = Field(default_factory=Verification)


class Preferences(StoredModel):
    language: str = "en"
    currency: str = "USD"
    theme: str = "system"
    push_notifications: bool = True
    email_notifications: bool = True
    sms_notifications: bool = False
    marketing_emails: bool = False
    order_updates: bool = True
    promotional_offers: bool = False


class AccountStatus(StoredModel):
    status: str = "active"
    flags: List[str] = Field(default_factory=lambda: ["admin_user", "verified"])


class UserProfileRecord(StoredModel):
    """
    Row written to the users table once per account.
    Never updated by the setup flow after creation.
    """
    uid: str
    email: str
    display_name: str = ""
    role: RoleInfo = Field(default_factory=RoleInfo)
    profile: ProfileInfo = Field(default_factory=ProfileInfo)
    preferences: Preferences = Field(default_factory=Preferences)
    status: AccountStatus = Field(default_factory=AccountStatus)
    email_verified: bool = True
    phone_verified: bool = False
    created_at: str = SERVER_TIMESTAMP
    updated_at: str = SERVER_TIMESTAMP
    last_login_at: Optional[str] = None

    @classmethod
    def for_admin(cls, uid: str, email: str, display_name: str, claims: AuthorizationClaims) -> "UserProfileRecord":
        """
        Build the profile document for a freshly created admin.
        "Jane van Dijk" → first_name "Jane", last_name "van Dijk".
        """
        parts = (display_name or "").split()
        first_name = parts[0] if parts else "Admin"
        last_name = " ".join(parts[1:]) or "User"

        return cls(
            uid=uid,
            email=email,
            display_name=display_name,
            role=RoleInfo(permissions=list(claims.permissions), level=claims.level),
            profile=ProfileInfo(first_name=first_name, last_name=last_name),
        )


# ===============================================================
# ADMIN_LOGS TABLE — audit entries
# ===============================================================

class AuditDetails(StoredModel):
    new_admin_id: str
    email: str
    display_name: str = ""


class AuditLogEntry(StoredModel):
    """Append-only; one entry per account created."""
    id: str
    admin_id: str = "system"
    action: str = "create_admin_user"
    details: AuditDetails
    timestamp: str = SERVER_TIMESTAMP
