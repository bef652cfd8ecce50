"""
Simple script to check the Bixo API connection and the stored session.

Usage:
    python scripts/check_api.py
    python scripts/check_api.py --email me@example.com --password secret
    python scripts/check_api.py --logout
"""
import sys
import os
import argparse
import logging

# Root project -> sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dotenv import load_dotenv
load_dotenv()

from bixo.core.api import ApiClient
from bixo.core.auth import AuthService
from bixo.core.config import get_settings


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check the Bixo API session")
    parser.add_argument("--email", help="Sign in with this email")
    parser.add_argument("--password", help="Password for --email")
    parser.add_argument("--logout", action="store_true", help="Clear the stored session and exit")
    parser.add_argument("--verbose", action="store_true", help="Log every request")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.LOG_LEVEL),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    # -- 1. Show settings --------------------------------------------------
    print("=" * 60)
    print("  BIXO API CHECK")
    print("=" * 60)
    print(f"  API_URL:          {settings.API_URL}")
    print(f"  TOKEN_STORE_PATH: {settings.TOKEN_STORE_PATH or '[MEMORY ONLY]'}")
    print(f"  REQUEST_TIMEOUT:  {settings.REQUEST_TIMEOUT}")
    print("=" * 60)

    auth = AuthService(ApiClient())

    if args.logout:
        auth.logout()
        print("\n[OK] Session cleared.")
        return 0

    # -- 2. Sign in (optional) ---------------------------------------------
    if args.email:
        if not args.password:
            print("\n[ERROR] --password is required with --email")
            return 1
        print(f"\n[...] Signing in as {args.email}...")
        result = auth.login(args.email, args.password)
        if not result.success:
            print(f"\n[ERROR] {result.error}")
            return 1
        print(f"[OK] Signed in. Home page: {result.redirect}")

    # -- 3. Current user ---------------------------------------------------
    user = auth.check_auth()
    if user is None:
        print("\n[INFO] Not signed in. Use --email/--password to sign in.")
        return 1

    print("\n[USER]")
    print("-" * 60)
    print(f"  Id:        {user.id}")
    print(f"  Email:     {user.email}")
    print(f"  Type:      {user.user_type.name.lower()}")
    print(f"  Active:    {user.is_active}")
    if user.candidate_id:
        print(f"  Candidate: {user.candidate_id}")
    if user.company_id:
        print(f"  Company:   {user.company_id}")
    print("-" * 60)
    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
