#!/usr/bin/env python
"""
Start the admin back-office API.

Checks the Supabase service-role credentials before binding, so a
misconfigured deployment exits with a readable message instead of a
lifespan traceback.

Usage:
    python run_api.py
    python run_api.py --reload                      # Development mode
    python run_api.py --mode allowlist              # Override ADMIN_VERIFICATION_MODE
"""

import argparse
import os
import sys

import uvicorn
from rich.console import Console

from shared.config import VerificationMode, get_settings
from shared.database import ensure_supabase_configured

console = Console()


def main():
    parser = argparse.ArgumentParser(description="Start the admin back-office API")
    parser.add_argument("--reload", action="store_true", help="Reload on source changes")
    parser.add_argument("--host", type=str, help="Interface to bind (default: HOST)")
    parser.add_argument("--port", type=int, help="Port to bind (default: PORT)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in VerificationMode],
        help="Admin verification source (default: ADMIN_VERIFICATION_MODE)",
    )
    args = parser.parse_args()

    if args.mode:
        # Reload workers re-read settings from the environment
        os.environ["ADMIN_VERIFICATION_MODE"] = args.mode
        get_settings.cache_clear()

    try:
        ensure_supabase_configured()
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    settings = get_settings()
    console.print(
        f"Admin verification mode: [bold]{settings.admin_verification_mode.value}[/bold], "
        f"{len(settings.admin_allowed_emails)} allow-listed email(s)"
    )

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
