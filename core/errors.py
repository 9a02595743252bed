# core/errors.py

from typing import Optional

from models.enums import CreationFailureReason, ProvisioningStep


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • GoTrue (Auth) errors
      • PostgREST errors
      • Generic Python exceptions
    """

    # Case 1 — Supabase Auth / GoTrue errors (and PostgREST APIError)
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2 — Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3 — Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def classify_creation_error(error: Exception) -> CreationFailureReason:
    """
    Map an auth.admin.create_user failure onto a reason.
    Newer Auth servers send a machine-readable `code`; older ones only a message.
    """
    code = str(getattr(error, "code", "") or "").lower()
    detail = extract_supabase_error(error).lower()

    if code in ("email_exists", "user_already_exists") or "already been registered" in detail \
            or "already registered" in detail or "already exists" in detail:
        return CreationFailureReason.email_exists

    if code == "weak_password" or "password should" in detail or "weak password" in detail:
        return CreationFailureReason.weak_password

    return CreationFailureReason.service_error


# =================================================================
#  PROVISIONING ERRORS
# =================================================================

class ProvisioningError(Exception):
    """Base class for every failure of the admin setup flow."""

    step: Optional[ProvisioningStep] = None

    def __init__(self, message: str, *, email: Optional[str] = None, account_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.email = email
        self.account_id = account_id


class AccountCreationError(ProvisioningError):
    step = ProvisioningStep.create_account

    def __init__(
        self,
        message: str,
        *,
        email: Optional[str] = None,
        reason: CreationFailureReason = CreationFailureReason.service_error,
    ):
        super().__init__(message, email=email)
        self.reason = reason


class ClaimsAssignmentError(ProvisioningError):
    step = ProvisioningStep.attach_claims


class ProfilePersistError(ProvisioningError):
    step = ProvisioningStep.persist_profile


class AuditWriteError(ProvisioningError):
    step = ProvisioningStep.append_audit


class VerificationLookupError(ProvisioningError):
    step = ProvisioningStep.verify
