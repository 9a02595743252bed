# jobs/setup_admin_users.py

"""
Create the two initial admin users (Supabase Auth + users table + admin_logs).

Usage:
    python -m jobs.setup_admin_users [--continue-on-error] [--interactive]

Environment variables:
    SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY   (required)
    ADMIN1_EMAIL, ADMIN1_PASSWORD,
    ADMIN2_EMAIL, ADMIN2_PASSWORD             (optional; prompts if any is missing)
"""

import argparse
import sys
from typing import List, Optional

from core.config import Settings, settings as default_settings
from core.config_validator import validate_config_on_startup
from core.errors import ProvisioningError
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from services.identity_service import SupabaseIdentityService
from services.input_provider import select_input_provider
from services.profile_store import SupabaseProfileStore
from services.provisioning import AdminProvisioner, ProvisioningReport

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create the initial admin users")
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Attempt every admin even if an earlier one fails, then report per-account results",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for admin details even when ADMIN1_*/ADMIN2_* are set",
    )
    return parser


def next_steps(settings: Settings) -> List[str]:
    return [
        "1. Apply database policies: supabase db push",
        "2. Deploy Edge Functions: supabase functions deploy",
        "3. Test admin login in your app",
        f"4. Access admin dashboard at: {settings.ADMIN_DASHBOARD_URL}",
    ]


def print_report(report: ProvisioningReport) -> None:
    print("\n📋 Summary:")
    for line in report.summary_lines():
        print(f"   {line}")


def main(
    argv: Optional[List[str]] = None,
    *,
    settings: Optional[Settings] = None,
    client=None,
    input_provider=None,
) -> int:
    """
    CLI entry point. Returns the process exit code.
    `client` / `input_provider` may be injected (tests, other jobs).
    """
    args = build_parser().parse_args(argv)
    settings = settings or default_settings

    title = f"🏛️  {settings.PROJECT_NAME} Admin Users Setup"
    print(title)
    print("=" * len(title) + "\n")

    try:
        if client is None:
            validate_config_on_startup(settings)
            client = get_supabase_client(settings)
            if not client:
                raise RuntimeError("Supabase not configured")

        provider = input_provider or select_input_provider(settings, force_interactive=args.interactive)
        if provider.interactive:
            print("Environment variables not found. Please enter admin details manually.\n")
        else:
            print("Using environment variables for admin setup.\n")

        credentials = provider.credentials()

        provisioner = AdminProvisioner(
            SupabaseIdentityService(client),
            SupabaseProfileStore(client),
            users_table=settings.USERS_TABLE,
            logs_table=settings.ADMIN_LOGS_TABLE,
        )
        report = provisioner.run(credentials, fail_fast=not args.continue_on_error)

    except KeyboardInterrupt:
        logger.error("Setup cancelled by user")
        return EXIT_INTERRUPTED
    except ProvisioningError as e:
        logger.error(f"❌ Setup failed: {e.message}")
        return EXIT_FAILED
    except Exception as e:
        logger.error(f"❌ Setup failed: {e}")
        return EXIT_FAILED

    print_report(report)

    if report.errored:
        logger.error(f"❌ Setup finished with {len(report.errored)} failed admin(s)")
        return EXIT_FAILED

    if not report.ok:
        # Verification problems are reported, never fatal
        logger.warning("⚠️ Some admins could not be verified; check their claims in the dashboard")

    print("\n🎉 Admin setup completed successfully!")
    print("\nNext steps:")
    for step in next_steps(settings):
        print(step)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
