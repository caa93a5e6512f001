from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


@dataclass
class Transaction:
    id: int
    user_id: int
    category_id: int
    title: str
    amount: Decimal  # always positive, two decimals
    type: str  # 'income' or 'expense'
    transaction_date: date
    created_at: datetime
    updated_at: Optional[datetime] = None
    description: Optional[str] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    category_name: Optional[str] = None  # joined from categories
    category_color: Optional[str] = None  # joined from categories

    @property
    def is_income(self) -> bool:
        return self.type == INCOME
