"""CLI for Servis: initialise the database and seed users and orders."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys


async def cmd_init_db(args):
    """Create all tables."""
    from servis.db.engine import create_all

    await create_all()
    print("Database initialised")


async def cmd_create_user(args):
    """Create a user; technicians also get a technician profile."""
    from servis.db import crud
    from servis.db.engine import async_session_factory, create_all
    from servis.models.user import ROLES, ROLE_TECHNICIAN
    from servis.services.auth import hash_password

    if args.role not in ROLES:
        print(f"Role must be one of: {', '.join(ROLES)}")
        sys.exit(1)

    password = args.password
    if not password:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    if len(password) < 8:
        print("Password must be at least 8 characters")
        sys.exit(1)

    await create_all()
    email = args.email.strip().lower()
    async with async_session_factory() as db:
        if await crud.get_user_by_email(db, email):
            print(f"User already exists: {email}")
            sys.exit(1)

        user = await crud.create_user(
            db,
            email=email,
            password_hash=hash_password(password),
            role=args.role,
            display_name=args.name or "",
        )
        print(f"User created: {user.email} (id={user.id}, role={user.role})")

        if args.role == ROLE_TECHNICIAN:
            tech = await crud.create_technician(db, user.id, name=args.name or email, phone=args.phone or "")
            print(f"Technician profile: {tech.id}")


async def cmd_create_order(args):
    """Create an order for a customer, optionally assigned to a technician."""
    from servis.db import crud
    from servis.db.engine import async_session_factory, create_all

    await create_all()
    async with async_session_factory() as db:
        customer = await crud.get_user_by_email(db, args.customer_email.strip().lower())
        if not customer:
            print(f"Customer not found: {args.customer_email}")
            sys.exit(1)

        technician_id = None
        if args.technician_email:
            tech_user = await crud.get_user_by_email(db, args.technician_email.strip().lower())
            tech = await crud.get_technician_for_user(db, tech_user.id) if tech_user else None
            if not tech:
                print(f"Technician not found: {args.technician_email}")
                sys.exit(1)
            technician_id = tech.id

        order = await crud.create_order(
            db, customer_id=customer.id, technician_id=technician_id, description=args.description or "",
        )
        print(f"Order created: {order.id}")


def main():
    parser = argparse.ArgumentParser(prog="servis", description="Servis payment service management")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("init-db", help="Create database tables")

    p_user = sub.add_parser("create-user", help="Create a customer, technician or admin")
    p_user.add_argument("--email", required=True)
    p_user.add_argument("--role", required=True, help="customer | technician | admin")
    p_user.add_argument("--name", default="")
    p_user.add_argument("--password", default="")
    p_user.add_argument("--phone", default="")

    p_order = sub.add_parser("create-order", help="Create an order")
    p_order.add_argument("--customer-email", required=True)
    p_order.add_argument("--technician-email", default="")
    p_order.add_argument("--description", default="")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))
    elif args.command == "create-order":
        asyncio.run(cmd_create_order(args))


if __name__ == "__main__":
    main()
