# -------------------------
# Admin Setup Models
# -------------------------
from .admin_user import (
    AdminCredentialInput,
    AuthorizationClaims,
    AccountHandle,
    UserProfileRecord,
    AuditLogEntry,
    SERVER_TIMESTAMP,
)

# -------------------------
# Enums
# -------------------------
from .enums import (
    ProvisioningStep,
    AccountState,
    CreationFailureReason,
)

__all__ = [
    # admin setup
    "AdminCredentialInput",
    "AuthorizationClaims",
    "AccountHandle",
    "UserProfileRecord",
    "AuditLogEntry",
    "SERVER_TIMESTAMP",

    # enums
    "ProvisioningStep",
    "AccountState",
    "CreationFailureReason",
]
