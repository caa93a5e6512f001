#!/usr/bin/env python3
"""
Monthwise CLI - Personal finance tracking from the command line.

Usage:
    python -m cli [--user EMAIL] <command> <subcommand> [options]

Commands:
    users        Register users
    categories   Manage categories
    transactions Record and manage transactions
    budgets      Manage monthly budgets
    dashboard    Monthly statistics, reports and trends
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli users register --email me@example.com
    python -m cli --user me@example.com categories seed
    python -m cli --user me@example.com transactions add --title Lunch \\
        --amount 12.50 --type expense --category-id 4
    python -m cli --user me@example.com dashboard show --month 3 --year 2024
"""

import sys
import argparse
from cli import budgets, categories, dashboard, migrate, transactions, users
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Monthwise - Personal finance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--user",
        help="Email of the acting user (default: session.default_user in the config)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    users.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    budgets.setup_parser(subparsers)
    dashboard.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            services = Services(config)
            setup_logging(config, services.today())

            # Migrate commands need db_manager for raw database operations
            if args.command == "migrate":
                args.func(args, services.db_manager)
            else:
                args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
