#!/usr/bin/env python3

import sys

from cli.session import (
    add_period_arguments,
    current_user,
    form_from_args,
    format_money,
    selected_month,
)
from logger import get_logger
from models.transaction import EXPENSE
from tools.periods import month_bounds

logger = get_logger()

_TRANSACTION_FIELDS = (
    "title",
    "amount",
    "type",
    "transaction_date",
    "category_id",
    "description",
    "payment_method",
    "notes",
)


def cmd_list(args, services):
    """List a month's transactions with totals and the expense breakdown."""
    user = current_user(args, services)
    year, month = selected_month(args, services)
    start, end = month_bounds(year, month)

    transactions = services.transactions.find_by_user_and_date_range(
        user.id, start, end
    )
    statistics = services.statistics.compute_monthly_statistics(user, start, end)

    logger.info(f"\nTransactions for {year:04d}-{month:02d}")
    logger.info("=" * 80)

    if not transactions:
        logger.info("No transactions found.")
    for t in transactions:
        sign = "+" if t.is_income else "-"
        logger.info(
            f"[{t.id}] {t.transaction_date.isoformat()}  {sign}{format_money(t.amount):>12}  "
            f"{t.title} ({t.category_name})"
        )

    logger.info("-" * 80)
    logger.info(f"Income:  {format_money(statistics.balance.income)}")
    logger.info(f"Expense: {format_money(statistics.balance.expense)}")
    logger.info(f"Balance: {format_money(statistics.balance.balance)}")

    breakdown = services.statistics.category_totals(user, start, end, EXPENSE)
    if breakdown:
        logger.info("\nExpenses by category:")
        for entry in breakdown:
            color = f" {entry.color}" if entry.color else ""
            logger.info(f"  {entry.name:<30} {format_money(entry.total):>12}{color}")


def cmd_add(args, services):
    """Record a new transaction."""
    user = current_user(args, services)
    form_data = form_from_args(args, _TRANSACTION_FIELDS)
    form_data.setdefault("transaction_date", services.today().isoformat())

    transaction = services.transactions.create(user, form_data)

    logger.info(f"\n✓ Transaction created successfully with ID: {transaction.id}")
    logger.info(f"  {transaction.title}: {transaction.type} {transaction.amount}")


def cmd_edit(args, services):
    """Edit a transaction; options not given keep their current value."""
    user = current_user(args, services)
    transaction = services.transactions.get_owned(args.transaction_id, user)

    current = {field: getattr(transaction, field) for field in _TRANSACTION_FIELDS}
    updated = services.transactions.update(
        transaction.id, user, form_from_args(args, _TRANSACTION_FIELDS, current)
    )

    logger.info(
        f"✓ Transaction {updated.id} updated: {updated.title} "
        f"{updated.type} {updated.amount}"
    )


def cmd_delete(args, services):
    """Delete a transaction by ID."""
    user = current_user(args, services)
    transaction = services.transactions.get_owned(args.transaction_id, user)

    logger.info("\nTransaction to delete:")
    logger.info(f"  ID: {transaction.id}")
    logger.info(f"  Title: {transaction.title}")
    logger.info(f"  Amount: {transaction.amount} ({transaction.type})")
    logger.info(f"  Date: {transaction.transaction_date.isoformat()}")

    confirm = (
        input("\nAre you sure you want to delete this transaction? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    if services.transactions.delete(transaction.id, user):
        logger.info("✓ Transaction deleted successfully.")
    else:
        logger.error("Failed to delete transaction.")
        sys.exit(1)


def _add_transaction_options(parser, required: bool):
    parser.add_argument("--title", required=required, help="Short title")
    parser.add_argument("--amount", required=required, help="Amount, e.g. 12.50")
    parser.add_argument(
        "--type", required=required, choices=["income", "expense"], help="Type"
    )
    parser.add_argument(
        "--date",
        dest="transaction_date",
        help="Transaction date (YYYY-MM-DD), default today",
    )
    parser.add_argument(
        "--category-id", dest="category_id", type=int, required=required,
        help="Category ID",
    )
    parser.add_argument("--description", help="Optional description")
    parser.add_argument(
        "--payment-method", dest="payment_method", help="e.g. card, cash"
    )
    parser.add_argument("--notes", help="Optional notes")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Record, list, edit and delete income and expenses",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List a month's transactions"
    )
    add_period_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    # transactions add
    add_parser = transactions_subparsers.add_parser("add", help="Add a transaction")
    _add_transaction_options(add_parser, required=True)
    add_parser.set_defaults(func=cmd_add)

    # transactions edit
    edit_parser = transactions_subparsers.add_parser(
        "edit", help="Edit a transaction"
    )
    edit_parser.add_argument("transaction_id", type=int, help="ID of the transaction")
    _add_transaction_options(edit_parser, required=False)
    edit_parser.set_defaults(func=cmd_edit)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument(
        "transaction_id", type=int, help="ID of the transaction to delete"
    )
    delete_parser.set_defaults(func=cmd_delete)
