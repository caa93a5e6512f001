#!/usr/bin/env python3

from cli.session import add_period_arguments, current_user, format_money, selected_month
from logger import get_logger
from tools.periods import month_bounds

logger = get_logger()


def _log_statistics(statistics):
    balance = statistics.balance
    logger.info(f"Income:  {format_money(balance.income)}")
    logger.info(f"Expense: {format_money(balance.expense)}")
    logger.info(f"Balance: {format_money(balance.balance)}")

    if statistics.expenses_by_category:
        logger.info("\nExpenses by category:")
        for name, amount in statistics.expenses_by_category.items():
            logger.info(f"  {name:<30} {format_money(amount):>12}")

    if statistics.incomes_by_category:
        logger.info("\nIncome by category:")
        for name, amount in statistics.incomes_by_category.items():
            logger.info(f"  {name:<30} {format_money(amount):>12}")

    if statistics.budget_usage:
        logger.info("\nBudgets:")
        for usage in statistics.budget_usage:
            flag = " OVER" if usage.over_budget else ""
            logger.info(
                f"  {usage.budget.name:<30} {format_money(usage.spent):>12} / "
                f"{format_money(usage.budget.amount)} ({usage.percentage}%){flag}"
            )


def _log_trend(trend):
    logger.info(f"{'Month':<10}{'Income':>14}{'Expense':>14}{'Balance':>14}")
    for point in trend:
        logger.info(
            f"{point.month:<10}{format_money(point.income):>14}"
            f"{format_money(point.expense):>14}{format_money(point.balance):>14}"
        )


def cmd_show(args, services):
    """Show the monthly dashboard."""
    user = current_user(args, services)
    year, month = selected_month(args, services)

    dashboard = services.statistics.dashboard(
        user, year, month, services.config.recent_limit
    )

    logger.info(f"\nDashboard for {user.full_name} - {year:04d}-{month:02d}")
    logger.info("=" * 80)
    _log_statistics(dashboard.statistics)

    if dashboard.recent_transactions:
        logger.info("\nRecent transactions:")
        for t in dashboard.recent_transactions:
            sign = "+" if t.is_income else "-"
            logger.info(
                f"  {t.transaction_date.isoformat()}  {sign}{format_money(t.amount):>12}  {t.title}"
            )

    logger.info("\nLast 12 months:")
    _log_trend(dashboard.trend)


def cmd_report(args, services):
    """Show the monthly report."""
    user = current_user(args, services)
    year, month = selected_month(args, services)
    start, end = month_bounds(year, month)

    report = services.statistics.generate_monthly_report(user, start, end)
    metrics = report.metrics

    logger.info(f"\nMonthly report - {year:04d}-{month:02d}")
    logger.info("=" * 80)
    _log_statistics(report.statistics)

    logger.info("\nMetrics:")
    logger.info(f"  Transactions:    {metrics.total_transactions}")
    logger.info(f"  Average expense: {format_money(metrics.average_expense)}")
    if metrics.top_expense_category:
        logger.info(
            f"  Top expense:     {metrics.top_expense_category} "
            f"({format_money(metrics.top_expense_amount)})"
        )
    else:
        logger.info("  Top expense:     -")

    if report.transactions:
        logger.info("\nTransactions:")
        for t in report.transactions:
            logger.info(
                f"  {t.transaction_date.isoformat()}  {t.type:<8} "
                f"{format_money(t.amount):>12}  {t.title} ({t.category_name})"
            )


def cmd_trend(args, services):
    """Show income, expense and balance for the 12 months ending at a month."""
    user = current_user(args, services)
    year, month = selected_month(args, services)
    start, _ = month_bounds(year, month)

    logger.info(f"\n12-month trend ending {year:04d}-{month:02d}")
    logger.info("=" * 80)
    _log_trend(services.statistics.get_monthly_trend(user, start))


def setup_parser(subparsers):
    """Setup dashboard subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "dashboard",
        help="Monthly statistics",
        description="Show the dashboard, monthly report and 12-month trend",
    )

    dashboard_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available dashboard commands",
        dest="subcommand",
        required=True,
    )

    show_parser = dashboard_subparsers.add_parser("show", help="Monthly dashboard")
    add_period_arguments(show_parser)
    show_parser.set_defaults(func=cmd_show)

    report_parser = dashboard_subparsers.add_parser("report", help="Monthly report")
    add_period_arguments(report_parser)
    report_parser.set_defaults(func=cmd_report)

    trend_parser = dashboard_subparsers.add_parser("trend", help="12-month trend")
    add_period_arguments(trend_parser)
    trend_parser.set_defaults(func=cmd_trend)
