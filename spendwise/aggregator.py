from decimal import Decimal
from functools import reduce
from typing import Iterable

from spendwise.domain import (
    Budget,
    Category,
    CategorySpending,
    CategoryWithDetails,
    DashboardView,
    Expense,
)
from spendwise.transforms import to_naive_utc

ZERO = Decimal(0)


def _sum_amounts(records: Iterable) -> Decimal:
    return reduce(lambda acc, r: acc + r.amount, records, ZERO)


def total_spent(expenses: Iterable[Expense]) -> Decimal:
    return _sum_amounts(expenses)


def total_budget(budgets: Iterable[Budget]) -> Decimal:
    """Sum of every budget row, including rows whose category no longer exists."""
    return _sum_amounts(budgets)


def remaining_budget(expenses: Iterable[Expense], budgets: Iterable[Budget]) -> Decimal:
    return total_budget(budgets) - total_spent(expenses)


def is_over_budget(expenses: Iterable[Expense], budgets: Iterable[Budget]) -> bool:
    return remaining_budget(expenses, budgets) < 0


def _spent_by_category_id(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for e in expenses:
        totals[e.category_id] = totals.get(e.category_id, ZERO) + e.amount
    return totals


def _budget_by_category_id(budgets: Iterable[Budget]) -> dict[str, Decimal]:
    amounts: dict[str, Decimal] = {}
    for b in budgets:
        # first matching row wins
        amounts.setdefault(b.category_id, b.amount)
    return amounts


def spending_by_category(
    categories: Iterable[Category], expenses: Iterable[Expense]
) -> tuple[CategorySpending, ...]:
    spent = _spent_by_category_id(expenses)
    return tuple(CategorySpending(name=c.name, spent=spent.get(c.id, ZERO)) for c in categories)


def categories_with_details(
    categories: Iterable[Category],
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
) -> tuple[CategoryWithDetails, ...]:
    spent = _spent_by_category_id(expenses)
    budget = _budget_by_category_id(budgets)
    return tuple(
        CategoryWithDetails(
            id=c.id,
            name=c.name,
            icon=c.icon,
            spent=spent.get(c.id, ZERO),
            budget=budget.get(c.id, ZERO),
            user_id=c.user_id,
        )
        for c in categories
    )


def sorted_expenses_by_date_desc(expenses: Iterable[Expense]) -> tuple[Expense, ...]:
    # sorted() is stable with reverse=True, so equal dates keep input order
    return tuple(sorted(expenses, key=lambda e: to_naive_utc(e.date), reverse=True))


def recent_expenses(expenses: Iterable[Expense], limit: int = 5) -> tuple[Expense, ...]:
    return sorted_expenses_by_date_desc(expenses)[: max(0, limit)]


def budget_progress_raw(detail: CategoryWithDetails) -> float:
    if detail.budget <= 0:
        return 0.0
    return float(detail.spent / detail.budget * 100)


def budget_progress(detail: CategoryWithDetails) -> float:
    """Percentage of the category budget used, capped at 100 for progress bars."""
    return min(100.0, budget_progress_raw(detail))


def build_dashboard(
    categories: tuple[Category, ...],
    expenses: tuple[Expense, ...],
    budgets: tuple[Budget, ...],
) -> DashboardView:
    spent = total_spent(expenses)
    budgeted = total_budget(budgets)
    return DashboardView(
        total_spent=spent,
        total_budget=budgeted,
        remaining_budget=budgeted - spent,
        spending_by_category=spending_by_category(categories, expenses),
        categories_with_details=categories_with_details(categories, expenses, budgets),
        sorted_expenses=sorted_expenses_by_date_desc(expenses),
    )
