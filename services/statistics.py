"""Monthly statistics, reports and trends computed from transactions and budgets.

Nothing here is stored or cached: every call re-reads the transaction and
budget services and aggregates with exact Decimal arithmetic.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from dateutil.relativedelta import relativedelta

from logger import get_logger
from models.budget import Budget
from models.money import ZERO, to_money
from models.statistics import (
    Balance,
    BudgetUsage,
    CategoryTotal,
    Dashboard,
    MonthPoint,
    Report,
    ReportMetrics,
    Statistics,
)
from models.transaction import EXPENSE, INCOME, Transaction
from tools.periods import month_bounds, month_key, trailing_months

logger = get_logger()

TREND_MONTHS = 12


def _sum_by_type(transactions: Iterable[Transaction]) -> Tuple[Decimal, Decimal]:
    income = ZERO
    expense = ZERO
    for transaction in transactions:
        if transaction.type == INCOME:
            income += transaction.amount
        else:
            expense += transaction.amount
    return to_money(income), to_money(expense)


def budget_usage(
    budget: Budget,
    expenses_by_category: Dict[str, Decimal],
    category_names: Optional[Set[str]] = None,
) -> BudgetUsage:
    """Measure a budget against expenses grouped by category name.

    The budget's category is matched by exact name. A budget whose amount is
    zero or negative reports a percentage of 0.

    Args:
        budget: The budget to measure.
        expenses_by_category: Expense totals keyed by category name.
        category_names: The user's current category names; when given,
            `category_found` records whether the budget's name still
            resolves to one of them. A budget without a category name
            spends nothing and is never reported as orphaned.
    """
    spent = expenses_by_category.get(budget.category_name, ZERO)
    remaining = to_money(budget.amount - spent)

    if budget.amount > 0:
        percentage = to_money(spent / budget.amount * 100)
    else:
        percentage = ZERO

    category_found = True
    if category_names is not None and budget.category_name is not None:
        category_found = budget.category_name in category_names

    return BudgetUsage(
        budget=budget,
        spent=spent,
        remaining=remaining,
        percentage=percentage,
        category_found=category_found,
    )


class StatisticsService:
    """Aggregates a user's transactions and budgets over date ranges.

    The caller is trusted to pass a user it has already authenticated.
    Store failures propagate unchanged.

    Args:
        transactions: TransactionService.
        budgets: BudgetService.
        categories: CategoryService, used to resolve budget category names.
    """

    def __init__(self, transactions, budgets, categories):
        self.transactions = transactions
        self.budgets = budgets
        self.categories = categories

    def compute_monthly_statistics(self, user, start: date, end: date) -> Statistics:
        """Compute balances, category sums and budget usage for [start, end).

        Args:
            user: The user whose data is aggregated.
            start: First date included.
            end: First date excluded.

        Returns:
            Statistics. An empty range yields all-zero figures, empty
            category maps and no budget usage.
        """
        transactions = self.transactions.find_by_user_and_date_range(
            user.id, start, end
        )
        return self._build_statistics(user, transactions, start, end)

    def generate_monthly_report(self, user, start: date, end: date) -> Report:
        """Compute statistics for [start, end) plus report metrics.

        Metrics:
            total_transactions: Number of transactions in the range.
            average_expense: Expense total divided by the number of expense
                transactions, or 0 when there are none.
            top_expense_category: Category with the largest expense total;
                on a tie the first one encountered wins. None without
                expenses.
            top_expense_amount: That category's total, or 0.

        Returns:
            Report carrying the statistics, the transactions (newest first)
            and the metrics.
        """
        transactions = self.transactions.find_by_user_and_date_range(
            user.id, start, end
        )
        statistics = self._build_statistics(user, transactions, start, end)

        expense_count = sum(1 for t in transactions if t.type == EXPENSE)
        if expense_count:
            average_expense = to_money(statistics.balance.expense / expense_count)
        else:
            average_expense = ZERO

        top_category = None
        top_amount = ZERO
        for name, amount in statistics.expenses_by_category.items():
            if amount > top_amount:
                top_category = name
                top_amount = amount

        metrics = ReportMetrics(
            total_transactions=len(transactions),
            average_expense=average_expense,
            top_expense_category=top_category,
            top_expense_amount=top_amount,
        )
        logger.debug(f"Report for user {user.id} in [{start}, {end}): {metrics}")

        return Report(statistics=statistics, transactions=transactions, metrics=metrics)

    def iter_monthly_trend(self, user, reference_month: date) -> Iterator[MonthPoint]:
        """Yield one MonthPoint per month, oldest first, ending at reference_month.

        Each month is queried separately; months without data yield zeros.
        """
        for first_day in trailing_months(reference_month, TREND_MONTHS):
            last_day = first_day + relativedelta(months=1)
            transactions = self.transactions.find_by_user_and_date_range(
                user.id, first_day, last_day
            )
            income, expense = _sum_by_type(transactions)
            yield MonthPoint(
                month=month_key(first_day),
                income=income,
                expense=expense,
                balance=to_money(income - expense),
            )

    def get_monthly_trend(self, user, reference_month: date) -> List[MonthPoint]:
        """Get the 12-month income/expense series ending at reference_month.

        Returns:
            Exactly 12 MonthPoints keyed 'YYYY-MM', consecutive and ascending.
        """
        points: Dict[str, MonthPoint] = {}
        for point in self.iter_monthly_trend(user, reference_month):
            points[point.month] = point
        return list(points.values())

    def category_totals(
        self, user, start: date, end: date, transaction_type: str
    ) -> List[CategoryTotal]:
        """Total one transaction type per category, largest first.

        Args:
            user: The user whose data is aggregated.
            start: First date included.
            end: First date excluded.
            transaction_type: 'income' or 'expense'.

        Returns:
            CategoryTotal list with each category's color, sorted by total
            descending, then by name.
        """
        transactions = self.transactions.find_by_user_and_date_range(
            user.id, start, end
        )
        totals: Dict[str, CategoryTotal] = {}
        for transaction in transactions:
            if transaction.type != transaction_type:
                continue
            entry = totals.setdefault(
                transaction.category_name,
                CategoryTotal(
                    name=transaction.category_name,
                    total=ZERO,
                    color=transaction.category_color,
                ),
            )
            entry.total += transaction.amount

        return sorted(totals.values(), key=lambda c: (-c.total, c.name))

    def dashboard(self, user, year: int, month: int, recent_limit: int = 5) -> Dashboard:
        """Collect everything the monthly dashboard shows."""
        start, end = month_bounds(year, month)
        return Dashboard(
            year=year,
            month=month,
            statistics=self.compute_monthly_statistics(user, start, end),
            recent_transactions=self.transactions.find_recent_by_user(
                user.id, recent_limit
            ),
            trend=self.get_monthly_trend(user, start),
        )

    def _build_statistics(
        self, user, transactions: List[Transaction], start: date, end: date
    ) -> Statistics:
        income = ZERO
        expense = ZERO
        incomes_by_category: Dict[str, Decimal] = {}
        expenses_by_category: Dict[str, Decimal] = {}

        # Partitioned by the transaction's type, not the category's
        for transaction in transactions:
            name = transaction.category_name
            if transaction.type == INCOME:
                income += transaction.amount
                incomes_by_category[name] = (
                    incomes_by_category.get(name, ZERO) + transaction.amount
                )
            else:
                expense += transaction.amount
                expenses_by_category[name] = (
                    expenses_by_category.get(name, ZERO) + transaction.amount
                )

        budgets = self.budgets.find_by_user_and_date_range(user.id, start, end)
        category_names = None
        if budgets:
            category_names = {c.name for c in self.categories.find_all(user.id)}

        usage = []
        for budget in budgets:
            entry = budget_usage(budget, expenses_by_category, category_names)
            if not entry.category_found:
                logger.warning(
                    f"Budget '{budget.name}' ({budget.period}) refers to unknown "
                    f"category '{budget.category_name}'"
                )
            usage.append(entry)

        income = to_money(income)
        expense = to_money(expense)
        logger.debug(
            f"Statistics for user {user.id} in [{start}, {end}): "
            f"income={income} expense={expense} budgets={len(usage)}"
        )

        return Statistics(
            balance=Balance(
                income=income, expense=expense, balance=to_money(income - expense)
            ),
            expenses_by_category=expenses_by_category,
            incomes_by_category=incomes_by_category,
            budget_usage=usage,
        )
