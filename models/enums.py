from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for summaries and CLI help.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# PROVISIONING STEP
# -----------------------------------------------------
class ProvisioningStep(BaseStrEnum):
    """Tag identifying which remote call of the setup flow failed."""

    create_account = "create_account"
    attach_claims = "attach_claims"
    persist_profile = "persist_profile"
    append_audit = "append_audit"
    verify = "verify"


# -----------------------------------------------------
# ACCOUNT STATE
# -----------------------------------------------------
class AccountState(BaseStrEnum):
    """
    Furthest point an account reached.
    absent → created → claimed → profiled → logged → verified
    There is no transition back to absent (no delete on failure).
    """

    absent = "absent"
    created = "created"
    claimed = "claimed"
    profiled = "profiled"
    logged = "logged"
    verified = "verified"


# -----------------------------------------------------
# ACCOUNT CREATION FAILURE REASON
# -----------------------------------------------------
class CreationFailureReason(BaseStrEnum):
    """Why Supabase Auth refused to create the account."""

    email_exists = "email_exists"
    weak_password = "weak_password"
    service_error = "service_error"
