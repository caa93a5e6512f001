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
from tools.periods import month_bounds

logger = get_logger()

_BUDGET_FIELDS = ("name", "amount", "month", "year", "category_name", "description")


def cmd_list(args, services):
    """List budgets for a month, with how much of each has been spent."""
    user = current_user(args, services)

    if args.all:
        budgets = services.budgets.find_by_user(user.id)
        if not budgets:
            logger.info("No budgets found.")
            return
        for budget in budgets:
            logger.info(
                f"[{budget.id}] {budget.period}  {budget.name:<30} "
                f"{format_money(budget.amount):>12}  {budget.category_name or '-'}"
            )
        logger.info(f"\nTotal budgets: {len(budgets)}")
        return

    year, month = selected_month(args, services)
    start, end = month_bounds(year, month)
    statistics = services.statistics.compute_monthly_statistics(user, start, end)

    logger.info(f"\nBudgets for {year:04d}-{month:02d}")
    logger.info("=" * 80)

    if not statistics.budget_usage:
        logger.info("No budgets found.")
        return

    for usage in statistics.budget_usage:
        budget = usage.budget
        logger.info(f"[{budget.id}] {budget.name} ({budget.category_name or '-'})")
        logger.info(
            f"  Spent {format_money(usage.spent)} of {format_money(budget.amount)} "
            f"({usage.percentage}%), remaining {format_money(usage.remaining)}"
        )
        if not usage.category_found:
            logger.warning("  No category with this name exists")


def cmd_create(args, services):
    """Create a budget, defaulting to the current month."""
    user = current_user(args, services)
    year, month = selected_month(args, services)

    form_data = form_from_args(args, _BUDGET_FIELDS)
    form_data.update(year=year, month=month)
    budget = services.budgets.create(user, form_data)

    logger.info(f"\n✓ Budget created successfully with ID: {budget.id}")
    logger.info(f"  {budget.name}: {format_money(budget.amount)} for {budget.period}")


def cmd_edit(args, services):
    """Edit a budget; options not given keep their current value."""
    user = current_user(args, services)
    budget = services.budgets.get_owned(args.budget_id, user)

    current = {field: getattr(budget, field) for field in _BUDGET_FIELDS}
    updated = services.budgets.update(
        budget.id, user, form_from_args(args, _BUDGET_FIELDS, current)
    )

    logger.info(f"✓ Budget {updated.id} updated: {updated.name} ({updated.period})")


def cmd_delete(args, services):
    """Delete a budget by ID."""
    user = current_user(args, services)
    budget = services.budgets.get_owned(args.budget_id, user)

    logger.info("\nBudget to delete:")
    logger.info(f"  ID: {budget.id}")
    logger.info(f"  Name: {budget.name}")
    logger.info(f"  Period: {budget.period}")
    logger.info(f"  Amount: {format_money(budget.amount)}")

    confirm = (
        input("\nAre you sure you want to delete this budget? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    if services.budgets.delete(budget.id, user):
        logger.info(f"✓ Budget '{budget.name}' deleted successfully.")
    else:
        logger.error("Failed to delete budget.")
        sys.exit(1)


def _add_budget_options(parser, required: bool):
    parser.add_argument("--name", required=required, help="Budget name")
    parser.add_argument("--amount", required=required, help="Limit, e.g. 300.00")
    parser.add_argument(
        "--category", dest="category_name", help="Category name the budget tracks"
    )
    parser.add_argument("--description", help="Optional description")
    add_period_arguments(parser)


def setup_parser(subparsers):
    """Setup budgets subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budgets",
        help="Manage budgets",
        description="Create, list, edit and delete monthly budgets",
    )

    budgets_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    # budgets list
    list_parser = budgets_subparsers.add_parser("list", help="List budgets")
    add_period_arguments(list_parser)
    list_parser.add_argument(
        "--all", action="store_true", help="List every budget, newest period first"
    )
    list_parser.set_defaults(func=cmd_list)

    # budgets create
    create_parser = budgets_subparsers.add_parser("create", help="Create a budget")
    _add_budget_options(create_parser, required=True)
    create_parser.set_defaults(func=cmd_create)

    # budgets edit
    edit_parser = budgets_subparsers.add_parser("edit", help="Edit a budget")
    edit_parser.add_argument("budget_id", type=int, help="ID of the budget")
    _add_budget_options(edit_parser, required=False)
    edit_parser.set_defaults(func=cmd_edit)

    # budgets delete
    delete_parser = budgets_subparsers.add_parser(
        "delete", help="Delete a budget by ID"
    )
    delete_parser.add_argument("budget_id", type=int, help="ID of the budget to delete")
    delete_parser.set_defaults(func=cmd_delete)
