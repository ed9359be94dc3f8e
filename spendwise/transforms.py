import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Tuple
from uuid import uuid4

from spendwise.domain import Budget, Category, CategoryWithDetails, Expense

Snapshot = Tuple[Tuple[Category, ...], Tuple[Expense, ...], Tuple[Budget, ...]]

DEFAULT_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("Food", "Utensils"),
    ("Transportation", "BusFront"),
    ("Housing", "Home"),
    ("Shopping", "ShoppingCart"),
    ("Health", "HeartPulse"),
    ("Entertainment", "Film"),
)

# keyed by lowercased category name
DEFAULT_BUDGETS: Mapping[str, Decimal] = {
    "food": Decimal(500),
    "transportation": Decimal(100),
    "housing": Decimal(1200),
    "shopping": Decimal(250),
    "health": Decimal(100),
    "entertainment": Decimal(80),
}


def parse_amount(value) -> Decimal:
    return Decimal(str(value))


def to_naive_utc(value: datetime) -> datetime:
    """Expense dates are naive and read as UTC; aware values are converted."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date(value) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(text))


def category_from_dict(d: Mapping) -> Category:
    return Category(
        id=d["id"],
        name=d["name"],
        icon=d.get("icon", ""),
        user_id=d.get("user_id", ""),
    )


def expense_from_dict(d: Mapping) -> Expense:
    return Expense(
        id=d["id"],
        category_id=d["category_id"],
        amount=parse_amount(d["amount"]),
        date=parse_date(d["date"]),
        description=d.get("description", ""),
        user_id=d.get("user_id", ""),
    )


def budget_from_dict(d: Mapping) -> Budget:
    return Budget(
        id=d["id"],
        category_id=d["category_id"],
        amount=parse_amount(d["amount"]),
        user_id=d.get("user_id", ""),
    )


def category_to_dict(c: Category) -> dict:
    return {"id": c.id, "name": c.name, "icon": c.icon, "user_id": c.user_id}


def expense_to_dict(e: Expense) -> dict:
    return {
        "id": e.id,
        "category_id": e.category_id,
        "amount": str(e.amount),
        "date": e.date.isoformat(),
        "description": e.description,
        "user_id": e.user_id,
    }


def budget_to_dict(b: Budget) -> dict:
    return {"id": b.id, "category_id": b.category_id, "amount": str(b.amount), "user_id": b.user_id}


def snapshot_from_dict(data: Mapping) -> Snapshot:
    categories = tuple(category_from_dict(c) for c in data.get("categories", ()))
    expenses = tuple(expense_from_dict(e) for e in data.get("expenses", ()))
    budgets = tuple(budget_from_dict(b) for b in data.get("budgets", ()))
    return categories, expenses, budgets


def load_seed(path: str) -> Snapshot:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return snapshot_from_dict(data)


def add_expense(expenses: Tuple[Expense, ...], e: Expense) -> Tuple[Expense, ...]:
    return expenses + (e,)


def set_budget_amounts(
    budgets: Tuple[Budget, ...], amounts: Mapping[str, Decimal]
) -> Tuple[Budget, ...]:
    """Return budgets with amounts replaced for the given budget ids."""
    return tuple(
        Budget(
            id=b.id,
            category_id=b.category_id,
            amount=amounts.get(b.id, b.amount),
            user_id=b.user_id,
        )
        for b in budgets
    )


def changed_budget_amounts(
    budgets: Iterable[Budget],
    details: Iterable[CategoryWithDetails],
    new_amounts: Mapping[str, Decimal],
) -> dict[str, Decimal]:
    """Map budget id -> new amount for edited categories that already own a budget row.

    Categories without a budget row are skipped, as are values equal to the
    current budget or that are not finite numbers.
    """
    budget_by_category: dict[str, Budget] = {}
    for b in budgets:
        budget_by_category.setdefault(b.category_id, b)

    changes: dict[str, Decimal] = {}
    for detail in details:
        row = budget_by_category.get(detail.id)
        amount = new_amounts.get(detail.id)
        if row is None or amount is None or not amount.is_finite():
            continue
        if amount != detail.budget:
            changes[row.id] = amount
    return changes


def update_budget_amounts(
    budgets: Tuple[Budget, ...],
    details: Iterable[CategoryWithDetails],
    new_amounts: Mapping[str, Decimal],
) -> Tuple[Tuple[Budget, ...], Tuple[str, ...]]:
    changes = changed_budget_amounts(budgets, details, new_amounts)
    return set_budget_amounts(budgets, changes), tuple(changes)


def seed_user_data(
    user_id: str, id_factory: Callable[[], str] = lambda: uuid4().hex
) -> Tuple[Tuple[Category, ...], Tuple[Budget, ...]]:
    """Default categories and their starting budgets for a newly created account."""
    categories = tuple(
        Category(id=id_factory(), name=name, icon=icon, user_id=user_id)
        for name, icon in DEFAULT_CATEGORIES
    )
    budgets = tuple(
        Budget(
            id=id_factory(),
            category_id=c.id,
            amount=DEFAULT_BUDGETS[c.name.lower()],
            user_id=user_id,
        )
        for c in categories
        if c.name.lower() in DEFAULT_BUDGETS
    )
    return categories, budgets
