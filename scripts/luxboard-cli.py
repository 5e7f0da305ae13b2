#!/usr/bin/env python3
"""
Luxboard management CLI

- Seed the plan catalog
- List stored plans
- Create an administrator account
"""

import sys
import argparse
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from app.db import GetDB, crud, init_db
from app.models.account import AccountCreate, Role
from app.models.plan import PlanKey
from app.services import plan_catalog


def cmd_seed_plans(args):
    """Create every catalog plan that is not stored yet"""
    init_db()
    with GetDB() as db:
        plans = plan_catalog.provision_plans(db)
        for plan in plans:
            print(f"✅ {plan.key}: {plan.name}")


def cmd_list_plans(args):
    """Print the stored plans and their quotas"""
    init_db()
    with GetDB() as db:
        plans = plan_catalog.list_plans(db)
        if not plans:
            print("No plans stored, run seed-plans first")
            return
        for plan in plans:
            print(
                f"{plan.key:<14} ia_search={plan.ia_search_quota:<5} "
                f"suggestion={plan.suggestion_quota:<5} users={plan.users}"
            )


def cmd_create_admin(args):
    """Create an account with the admin role"""
    init_db()
    try:
        new_account = AccountCreate(
            email=args.email,
            password=args.password,
            firstName=args.first_name,
            lastName=args.last_name,
            plan=args.plan,
        )
    except ValidationError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    with GetDB() as db:
        plan = plan_catalog.get_or_create(db, new_account.plan or PlanKey.enterprise)
        try:
            dbaccount = crud.create_account(db, new_account, plan, role=Role.admin)
        except IntegrityError:
            print(f"❌ Error: {new_account.email} is already registered")
            sys.exit(1)
        print(f"✅ Admin account #{dbaccount.id} created for {dbaccount.email}")


def main():
    parser = argparse.ArgumentParser(description="Luxboard management CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    seed_parser = subparsers.add_parser("seed-plans", help="Create the plan catalog in the database")
    seed_parser.set_defaults(func=cmd_seed_plans)

    list_parser = subparsers.add_parser("list-plans", help="List stored plans")
    list_parser.set_defaults(func=cmd_list_plans)

    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("email", help="Email of the administrator")
    admin_parser.add_argument("password", help="Password, at least 8 characters")
    admin_parser.add_argument("first_name", help="First name")
    admin_parser.add_argument("last_name", help="Last name")
    admin_parser.add_argument("--plan", choices=[key.value for key in PlanKey], help="Plan key (default: enterprise)")
    admin_parser.set_defaults(func=cmd_create_admin)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
