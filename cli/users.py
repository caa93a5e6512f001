#!/usr/bin/env python3

from getpass import getpass
from logger import get_logger

logger = get_logger()


def cmd_register(args, services):
    """Interactively register a new user."""
    print("\nRegister New User")
    print("=" * 80)

    form_data = {
        "email": args.email or input("Email: ").strip(),
        "first_name": args.first_name or input("First name: ").strip(),
        "last_name": args.last_name or input("Last name: ").strip(),
        "password": getpass("Password: "),
        "confirm_password": getpass("Confirm password: "),
    }

    user = services.users.register(form_data)

    logger.info(f"\n✓ User registered successfully with ID: {user.id}")
    logger.info(f"  Email: {user.email}")
    logger.info(f"  Name: {user.full_name}")


def setup_parser(subparsers):
    """Setup users subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "users",
        help="Manage users",
        description="Register users",
    )

    users_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available user commands",
        dest="subcommand",
        required=True,
    )

    # users register
    register_parser = users_subparsers.add_parser(
        "register", help="Register a new user (prompts for the password)"
    )
    register_parser.add_argument("--email", help="Email address")
    register_parser.add_argument("--first-name", dest="first_name", help="First name")
    register_parser.add_argument("--last-name", dest="last_name", help="Last name")
    register_parser.set_defaults(func=cmd_register)
