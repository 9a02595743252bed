# services/provisioning.py

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from core.errors import (
    AccountCreationError,
    AuditWriteError,
    ClaimsAssignmentError,
    ProfilePersistError,
    ProvisioningError,
    VerificationLookupError,
    classify_creation_error,
    extract_supabase_error,
)
from core.logging_config import logger
from models.admin_user import (
    AccountHandle,
    AdminCredentialInput,
    AuditDetails,
    AuditLogEntry,
    AuthorizationClaims,
    UserProfileRecord,
)
from models.enums import AccountState, ProvisioningStep


# ============================================================
# Per-account outcome + run report
# ============================================================

@dataclass
class AccountOutcome:
    email: str
    display_name: str = ""
    state: AccountState = AccountState.absent
    account: Optional[AccountHandle] = None
    error: Optional[ProvisioningError] = None

    @property
    def failed_step(self) -> Optional[ProvisioningStep]:
        return self.error.step if self.error else None

    @property
    def created(self) -> bool:
        """All four write steps went through."""
        return self.state in (AccountState.logged, AccountState.verified)

    @property
    def ok(self) -> bool:
        return self.state == AccountState.verified


@dataclass
class ProvisioningReport:
    outcomes: List[AccountOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[AccountOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[AccountOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def errored(self) -> List[AccountOutcome]:
        """Outcomes that stopped at a step error (not merely unverified)."""
        return [o for o in self.outcomes if o.error is not None]

    @property
    def ok(self) -> bool:
        return bool(self.outcomes) and not self.failed

    def summary_lines(self) -> List[str]:
        lines = []
        for o in self.outcomes:
            uid = o.account.id if o.account else "-"
            if o.ok:
                lines.append(f"✅ {o.email} ({o.display_name}) UID: {uid}")
            elif o.error:
                lines.append(
                    f"❌ {o.email} failed at {o.failed_step} (state: {o.state}, UID: {uid}): {o.error.message}"
                )
            else:
                lines.append(f"⚠️ {o.email} created but not verified (UID: {uid})")
        return lines


# ============================================================
# Orchestrator
# ============================================================

class AdminProvisioner:
    """
    Creates admin accounts: account → claims → profile row → audit entry.

    Each step must succeed before the next starts. Nothing is rolled back:
    an account whose later step failed stays in Supabase Auth as-is.
    """

    def __init__(
        self,
        identity,
        store,
        users_table: str = "users",
        logs_table: str = "admin_logs",
        claims: Optional[AuthorizationClaims] = None,
    ):
        self.identity = identity
        self.store = store
        self.users_table = users_table
        self.logs_table = logs_table
        self.claims = claims or AuthorizationClaims()

    # -----------------------------------------------------
    # Single account
    # -----------------------------------------------------
    def provision_admin(self, email: str, password: str, display_name: str) -> AccountHandle:
        """Run the four steps for one admin. Raises a ProvisioningError subclass on failure."""
        outcome = AccountOutcome(email=email, display_name=display_name)
        return self._provision(email, password, display_name, outcome)

    def _provision(self, email: str, password: str, display_name: str, outcome: AccountOutcome) -> AccountHandle:
        logger.info(f"🔄 Creating admin user: {email}")

        try:
            # 1️⃣ Auth account
            try:
                account = self.identity.create_account(
                    email, password, display_name, email_pre_verified=True
                )
            except Exception as e:
                raise AccountCreationError(
                    f"Failed to create account for {email}: {extract_supabase_error(e)}",
                    email=email,
                    reason=classify_creation_error(e),
                ) from e

            outcome.account = account
            outcome.state = AccountState.created
            logger.info(f"✅ User account created with UID: {account.id}")

            # 2️⃣ Admin claims (app_metadata)
            try:
                self.identity.set_claims(account.id, self.claims.model_dump(by_alias=True))
            except Exception as e:
                raise ClaimsAssignmentError(
                    f"Failed to set admin claims: {extract_supabase_error(e)}",
                    email=email,
                    account_id=account.id,
                ) from e

            account.claims = {**account.claims, **self.claims.model_dump(by_alias=True)}
            outcome.state = AccountState.claimed
            logger.info("✅ Admin custom claims set")

            # 3️⃣ Profile row
            record = UserProfileRecord.for_admin(account.id, email, display_name, self.claims)
            try:
                self.store.write(f"{self.users_table}/{account.id}", record.model_dump(by_alias=True))
            except Exception as e:
                raise ProfilePersistError(
                    f"Failed to save user profile: {extract_supabase_error(e)}",
                    email=email,
                    account_id=account.id,
                ) from e

            outcome.state = AccountState.profiled
            logger.info("✅ User data saved to database")

            # 4️⃣ Audit entry
            try:
                log_ref = self.store.append_log(self.logs_table)
                entry = AuditLogEntry(
                    id=log_ref.key,
                    details=AuditDetails(
                        new_admin_id=account.id,
                        email=email,
                        display_name=display_name,
                    ),
                )
                self.store.write(log_ref.path, entry.model_dump(by_alias=True))
            except Exception as e:
                raise AuditWriteError(
                    f"Failed to write admin log entry: {extract_supabase_error(e)}",
                    email=email,
                    account_id=account.id,
                ) from e

            outcome.state = AccountState.logged

        except ProvisioningError as e:
            logger.error(f"❌ Error creating admin user: {e.message}")
            raise

        logger.info("✅ Admin user created successfully!")
        logger.info(f"   UID: {account.id}")
        logger.info(f"   Email: {email}")
        logger.info(f"   Display Name: {display_name}")

        return account

    # -----------------------------------------------------
    # Read-back
    # -----------------------------------------------------
    def _lookup(self, account_id: str) -> AccountHandle:
        try:
            return self.identity.get_account(account_id)
        except Exception as e:
            raise VerificationLookupError(
                f"Failed to look up user {account_id}: {extract_supabase_error(e)}",
                account_id=account_id,
            ) from e

    def verify_admin(self, account_id: str) -> bool:
        """
        True only if the account's current claims say role == "admin" and isAdmin is True.
        Lookup failures are logged and reported as False, never raised.
        """
        try:
            account = self._lookup(account_id)
        except VerificationLookupError as e:
            logger.warning(f"❌ Error verifying admin user: {e.message}")
            return False

        claims = account.claims or {}

        logger.info(f"🔍 Verifying admin user: {account.email}")
        logger.info(f"   Role: {claims.get('role')}")
        logger.info(f"   Is Admin: {claims.get('isAdmin')}")
        logger.info(f"   Level: {claims.get('level')}")
        logger.info(f"   Email Verified: {account.email_verified}")

        if claims.get("role") == "admin" and claims.get("isAdmin") is True:
            logger.info("✅ Admin verification successful")
            return True

        logger.warning(f"❌ Admin verification failed for {account.email}")
        return False

    # -----------------------------------------------------
    # Batch
    # -----------------------------------------------------
    def run(self, credentials: Iterable[AdminCredentialInput], fail_fast: bool = True) -> ProvisioningReport:
        """
        Provision every admin in order, then verify each one that was created.

        fail_fast=True: the first error propagates and later admins are never attempted.
        fail_fast=False: every admin is attempted; failures are recorded on the report.
        """
        report = ProvisioningReport()

        for credential in credentials:
            outcome = AccountOutcome(email=str(credential.email), display_name=credential.display_name)
            report.outcomes.append(outcome)
            try:
                self._provision(outcome.email, credential.password, credential.display_name, outcome)
            except ProvisioningError as e:
                outcome.error = e
                if fail_fast:
                    raise

        for outcome in report.outcomes:
            if outcome.created and self.verify_admin(outcome.account.id):
                outcome.state = AccountState.verified

        return report
