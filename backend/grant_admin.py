#!/usr/bin/env python
"""
Grant or revoke back-office admin verification from the command line.

Bootstraps the first admin, who has nobody to verify them through the
API: by default the principal is recorded as having verified itself.

Usage:
    python grant_admin.py --email admin@example.com --notes "initial setup"
    python grant_admin.py 3f1c...-uuid --by 9a2b...-uuid
    python grant_admin.py --email former@example.com --revoke
"""

import argparse
import asyncio
import sys
from typing import Optional

from rich.console import Console

from modules.admin_auth.exceptions import IdentityLookupFailed
from modules.admin_auth.identity import SupabaseIdentityStore
from modules.admin_auth.repository import ProfileRepository
from modules.admin_auth.service import AdminAuthorizer, create_admin_authorizer
from shared.config import get_settings
from shared.database import get_supabase_client
from shared.exceptions import BackofficeError

console = Console()


def resolve_principal_id(identity: SupabaseIdentityStore, email: str, page_size: int) -> Optional[str]:
    """Find a principal ID by exact email among the first identity page."""
    for principal in identity.list_principals(page_size):
        if principal.email == email:
            return principal.id
    return None


async def run(
    authorizer: AdminAuthorizer,
    profiles: ProfileRepository,
    principal_id: str,
    revoke: bool,
    notes: Optional[str],
    acting_id: Optional[str],
) -> None:
    if not revoke and profiles.get_admin_flag(principal_id) is None:
        console.print(f"[yellow]No profile row for {principal_id}, creating one[/yellow]")
        profiles.create_profile({"id": principal_id})

    await authorizer.set_verification(
        principal_id,
        not revoke,
        notes=notes,
        acting_principal_id=acting_id,
    )


def main():
    parser = argparse.ArgumentParser(description="Grant or revoke back-office admin verification")
    parser.add_argument("principal_id", nargs="?", help="Principal UUID")
    parser.add_argument("--email", help="Resolve the principal by email instead")
    parser.add_argument("--revoke", action="store_true", help="Revoke instead of grant")
    parser.add_argument("--notes", help="Verification notes")
    parser.add_argument("--by", dest="acting_id", help="Verifier principal UUID (default: self)")
    args = parser.parse_args()

    settings = get_settings()
    db = get_supabase_client()
    identity = SupabaseIdentityStore(db)
    profiles = ProfileRepository(db, table=settings.profiles_table)

    principal_id = args.principal_id
    if args.email:
        try:
            principal_id = resolve_principal_id(identity, args.email, settings.identity_page_size)
        except IdentityLookupFailed as e:
            console.print(f"[red]Error:[/red] {e.message}")
            sys.exit(1)
    if not principal_id:
        parser.error("a principal ID or a known --email is required")

    try:
        asyncio.run(
            run(
                create_admin_authorizer(),
                profiles,
                principal_id,
                args.revoke,
                args.notes,
                args.acting_id or principal_id,
            )
        )
    except BackofficeError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(1)

    action = "revoked from" if args.revoke else "granted to"
    console.print(f"[green]✓[/green] Admin verification {action} {principal_id}")


if __name__ == "__main__":
    main()
