from datetime import date, datetime, timezone
from decimal import Decimal

from spendwise.aggregator import (
    budget_progress,
    budget_progress_raw,
    build_dashboard,
    categories_with_details,
    is_over_budget,
    recent_expenses,
    remaining_budget,
    sorted_expenses_by_date_desc,
    spending_by_category,
    total_budget,
    total_spent,
)
from spendwise.domain import Budget, Category, CategorySpending, CategoryWithDetails, Expense
from spendwise.functional import validate_expense_form
from spendwise.store import SnapshotStore
from spendwise.transforms import parse_date


def make_exp(id, cat_id, amount, date="2024-01-01", description=""):
    return Expense(
        id=id,
        category_id=cat_id,
        amount=Decimal(str(amount)),
        date=datetime.fromisoformat(date),
        description=description,
    )


FOOD = Category("c1", "Food", "Utensils")
TRANSPORT = Category("c2", "Transportation", "BusFront")


def test_food_scenario():
    categories = (FOOD,)
    expenses = (make_exp("e1", "c1", 20), make_exp("e2", "c1", 30))
    budgets = (Budget("b1", "c1", Decimal(100)),)

    assert total_spent(expenses) == Decimal(50)
    assert total_budget(budgets) == Decimal(100)
    assert spending_by_category(categories, expenses) == (CategorySpending("Food", Decimal(50)),)
    assert categories_with_details(categories, expenses, budgets) == (
        CategoryWithDetails("c1", "Food", "Utensils", spent=Decimal(50), budget=Decimal(100)),
    )


def test_empty_expenses_and_budgets():
    details = categories_with_details((FOOD,), (), ())

    assert total_spent(()) == 0
    assert total_budget(()) == 0
    assert details[0].spent == 0
    assert details[0].budget == 0


def test_spending_by_category_keeps_order_and_zero_rows():
    categories = (TRANSPORT, FOOD, Category("c3", "Health", "HeartPulse"))
    expenses = (make_exp("e1", "c1", 10), make_exp("e2", "c1", 5))

    result = spending_by_category(categories, expenses)

    assert [r.name for r in result] == ["Transportation", "Food", "Health"]
    assert [r.spent for r in result] == [0, 15, 0]


def test_dangling_references_count_only_in_totals():
    categories = (FOOD,)
    expenses = (make_exp("e1", "c1", 10), make_exp("e2", "gone", 40))
    budgets = (Budget("b1", "c1", Decimal(100)), Budget("b2", "gone", Decimal(60)))

    per_category = sum(s.spent for s in spending_by_category(categories, expenses))

    assert total_spent(expenses) == 50
    assert per_category == 10
    assert total_spent(expenses) >= per_category
    assert total_budget(budgets) == 160
    assert categories_with_details(categories, expenses, budgets)[0].budget == 100


def test_total_spent_matches_category_sum_without_dangling():
    categories = (FOOD, TRANSPORT)
    expenses = (make_exp("e1", "c1", "12.30"), make_exp("e2", "c2", "7.70"), make_exp("e3", "c1", 1))

    assert total_spent(expenses) == sum(s.spent for s in spending_by_category(categories, expenses))
    assert total_spent(expenses) == Decimal("21.00")


def test_category_without_budget_gets_zero():
    details = categories_with_details(
        (FOOD, TRANSPORT), (), (Budget("b1", "c1", Decimal(500)),)
    )
    assert details[0].budget == 500
    assert details[1].budget == 0


def test_first_budget_row_wins():
    budgets = (Budget("b1", "c1", Decimal(100)), Budget("b2", "c1", Decimal(999)))
    assert categories_with_details((FOOD,), (), budgets)[0].budget == 100


def test_remaining_budget_can_be_negative():
    expenses = (make_exp("e1", "c1", 150),)
    budgets = (Budget("b1", "c1", Decimal(100)),)

    assert remaining_budget(expenses, budgets) == Decimal(-50)
    assert is_over_budget(expenses, budgets)
    assert not is_over_budget((), budgets)


def test_sorted_expenses_by_date_desc():
    expenses = (
        make_exp("jan", "c1", 5, "2024-01-01"),
        make_exp("mar", "c1", 5, "2024-03-01"),
        make_exp("feb", "c1", 5, "2024-02-01"),
    )

    result = sorted_expenses_by_date_desc(expenses)

    assert [e.id for e in result] == ["mar", "feb", "jan"]
    assert [e.id for e in expenses] == ["jan", "mar", "feb"]


def test_sort_handles_stored_utc_and_form_dates_together():
    stored = Expense("stored", "c1", Decimal(5), parse_date("2024-03-01T10:00:00.000Z"))
    aware = Expense("aware", "c1", Decimal(5), datetime(2024, 3, 3, tzinfo=timezone.utc))
    entered = validate_expense_form("Lunch", "12", "c1", date(2024, 3, 2), (FOOD,)).get_or_else(None)
    store = SnapshotStore((FOOD,), (stored, aware), ())

    store.add_expense(Expense("entered", entered.category_id, entered.amount, entered.date))
    view = build_dashboard(*store.snapshot)

    assert [e.id for e in view.sorted_expenses] == ["aware", "entered", "stored"]
    assert view.total_spent == 22


def test_sort_is_stable_for_equal_dates():
    expenses = (
        make_exp("a", "c1", 1, "2024-02-01"),
        make_exp("b", "c1", 2, "2024-03-01"),
        make_exp("c", "c1", 3, "2024-02-01"),
        make_exp("d", "c1", 4, "2024-03-01"),
    )
    assert [e.id for e in sorted_expenses_by_date_desc(expenses)] == ["b", "d", "a", "c"]


def test_recent_expenses_limit():
    expenses = tuple(make_exp(f"e{i}", "c1", 1, f"2024-01-{i + 1:02d}") for i in range(8))

    latest = recent_expenses(expenses)

    assert len(latest) == 5
    assert latest[0].id == "e7"
    assert recent_expenses(expenses, 0) == ()


def test_budget_progress():
    half = CategoryWithDetails("c1", "Food", "Utensils", spent=Decimal(50), budget=Decimal(100))
    over = CategoryWithDetails("c1", "Food", "Utensils", spent=Decimal(150), budget=Decimal(100))
    no_budget = CategoryWithDetails("c1", "Food", "Utensils", spent=Decimal(10), budget=Decimal(0))

    assert budget_progress(half) == 50.0
    assert budget_progress(over) == 100.0
    assert budget_progress_raw(over) == 150.0
    assert budget_progress(no_budget) == 0.0


def test_build_dashboard_is_idempotent():
    categories = (FOOD, TRANSPORT)
    expenses = (make_exp("e1", "c1", 20, "2024-01-02"), make_exp("e2", "c2", 30, "2024-01-05"))
    budgets = (Budget("b1", "c1", Decimal(100)),)

    first = build_dashboard(categories, expenses, budgets)
    second = build_dashboard(categories, expenses, budgets)

    assert first == second
    assert first.total_spent == 50
    assert first.remaining_budget == 50
    assert not first.over_budget
    assert first.sorted_expenses[0].id == "e2"
    assert len(first.categories_with_details) == 2
