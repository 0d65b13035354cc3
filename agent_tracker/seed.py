#!/usr/bin/env python3
"""
Database Seeding for Agent Tracker

Usage:
    python -m agent_tracker.seed

Behavior:
    - Creates missing tables and the default activity catalog
    - Creates the office admin account if it does not exist
    - Creates the administrator's personal agent account if it does not exist
    - Safe to run multiple times (idempotent)

Accounts are configured through environment variables:
    SEED_ADMIN_USERNAME, SEED_ADMIN_PASSWORD, SEED_ADMIN_EMAIL, SEED_ADMIN_FULL_NAME
    SEED_PERSONAL_USERNAME, SEED_PERSONAL_PASSWORD, SEED_PERSONAL_EMAIL, SEED_PERSONAL_FULL_NAME

An account whose password variable is unset is skipped.
"""

import os
import sys

from agent_tracker.auth.utils import get_password_hash
from agent_tracker.database import SessionLocal, init_db
from agent_tracker.repositories import UserRepository


# =============================================================================
# ACCOUNT CONFIGURATION
# =============================================================================

ACCOUNTS = [
    {
        "label": "Office admin",
        "username": os.getenv("SEED_ADMIN_USERNAME", "office-admin"),
        "email": os.getenv("SEED_ADMIN_EMAIL", "office@agent-tracker.local"),
        "full_name": os.getenv("SEED_ADMIN_FULL_NAME", "Office Admin"),
        "role": "admin",
        "password_env": "SEED_ADMIN_PASSWORD",
    },
    {
        "label": "Personal agent",
        "username": os.getenv("SEED_PERSONAL_USERNAME", "office-personal"),
        "email": os.getenv("SEED_PERSONAL_EMAIL", "personal@agent-tracker.local"),
        "full_name": os.getenv("SEED_PERSONAL_FULL_NAME", "Office Admin - Personal"),
        "role": "agent",
        "password_env": "SEED_PERSONAL_PASSWORD",
    },
]


# =============================================================================
# SEEDING FUNCTIONS
# =============================================================================


def seed_account(users: UserRepository, account: dict) -> bool:
    """
    Create one account if it doesn't exist.
    Returns True if the account was created.
    """
    if users.get_by_username(account["username"]):
        print(f"  [SKIP] {account['label']} exists: {account['username']}")
        return False

    password = os.getenv(account["password_env"])
    if not password:
        print(f"  [SKIP] {account['label']}: {account['password_env']} is not set")
        return False

    users.create(
        username=account["username"],
        email=account["email"],
        password_hash=get_password_hash(password),
        full_name=account["full_name"],
        role=account["role"],
    )
    print(f"  [CREATE] {account['label']}: {account['username']} ({account['role']})")
    return True


def main():
    """Main seeding entry point."""
    print("=" * 60)
    print("AGENT TRACKER - DATABASE SEEDING")
    print("=" * 60)

    print("Phase 1: Schema and activity catalog")
    inserted = init_db(SessionLocal)
    print(f"  {inserted} catalog activities added")

    print("\nPhase 2: Accounts")
    db = SessionLocal()
    try:
        users = UserRepository(db)
        created = sum(1 for account in ACCOUNTS if seed_account(users, account))
    except Exception as e:
        print(f"\n[ERROR] Seeding failed: {e}")
        raise
    finally:
        db.close()

    print("\n" + "=" * 60)
    print("SEEDING COMPLETE")
    print("=" * 60)
    if created:
        print(f"Created {created} account(s). Change these passwords after first login.")
    else:
        print("No accounts created")
    return 0


if __name__ == "__main__":
    sys.exit(main())
