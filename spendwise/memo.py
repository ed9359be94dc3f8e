from functools import lru_cache

from spendwise.aggregator import build_dashboard
from spendwise.domain import Budget, Category, DashboardView, Expense


@lru_cache(maxsize=32)
def cached_dashboard(
    categories: tuple[Category, ...],
    expenses: tuple[Expense, ...],
    budgets: tuple[Budget, ...],
) -> DashboardView:
    return build_dashboard(categories, expenses, budgets)
