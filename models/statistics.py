"""Result types produced by the statistics service."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

from models.budget import Budget
from models.money import ZERO
from models.transaction import Transaction


@dataclass
class Balance:
    income: Decimal = ZERO
    expense: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass
class BudgetUsage:
    """How much of a budget has been consumed.

    Attributes:
        budget: The budget being measured.
        spent: Expenses recorded under the budget's category name.
        remaining: budget.amount - spent (negative when overspent).
        percentage: spent / amount * 100, or 0 when amount is not positive.
        category_found: False when no current category carries the budget's
            category name.
    """

    budget: Budget
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    category_found: bool = True

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


@dataclass
class Statistics:
    balance: Balance = field(default_factory=Balance)
    expenses_by_category: Dict[str, Decimal] = field(default_factory=dict)
    incomes_by_category: Dict[str, Decimal] = field(default_factory=dict)
    budget_usage: List[BudgetUsage] = field(default_factory=list)


@dataclass
class ReportMetrics:
    total_transactions: int = 0
    average_expense: Decimal = ZERO
    top_expense_category: Optional[str] = None
    top_expense_amount: Decimal = ZERO


@dataclass
class Report:
    statistics: Statistics
    transactions: List[Transaction]
    metrics: ReportMetrics


@dataclass
class MonthPoint:
    """Aggregated figures for one month of the trend series.

    Attributes:
        month: 'YYYY-MM' key identifying the month.
        income: Total income for the month.
        expense: Total expense for the month.
        balance: income - expense.
    """

    month: str
    income: Decimal = ZERO
    expense: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass
class CategoryTotal:
    name: str
    total: Decimal
    color: Optional[str] = None


@dataclass
class Dashboard:
    year: int
    month: int
    statistics: Statistics
    recent_transactions: List[Transaction]
    trend: List[MonthPoint]
