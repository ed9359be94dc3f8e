from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str            # symbolic icon name, e.g. "Utensils"
    user_id: str = ""


@dataclass(frozen=True)
class Expense:
    id: str
    category_id: str     # which category
    amount: Decimal
    date: datetime
    description: str = ""
    user_id: str = ""


# Spending allocation for one category
@dataclass(frozen=True)
class Budget:
    id: str
    category_id: str
    amount: Decimal
    user_id: str = ""


@dataclass(frozen=True)
class CategorySpending:
    name: str
    spent: Decimal


@dataclass(frozen=True)
class CategoryWithDetails:
    id: str
    name: str
    icon: str
    spent: Decimal
    budget: Decimal
    user_id: str = ""


@dataclass(frozen=True)
class DashboardView:
    total_spent: Decimal
    total_budget: Decimal
    remaining_budget: Decimal
    spending_by_category: tuple[CategorySpending, ...]
    categories_with_details: tuple[CategoryWithDetails, ...]
    sorted_expenses: tuple[Expense, ...]

    @property
    def over_budget(self) -> bool:
        return self.remaining_budget < 0


# Form payload for a new expense, before the backend assigns an id
@dataclass(frozen=True)
class ExpenseDraft:
    description: str
    amount: Decimal
    category_id: str
    date: datetime


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str
