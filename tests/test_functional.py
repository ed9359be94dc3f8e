from datetime import date, datetime
from decimal import Decimal

from spendwise.domain import Category
from spendwise.functional import (
    Left,
    Nothing,
    Right,
    Some,
    parse_budget_edits,
    safe_category,
    to_decimal,
    validate_credentials,
    validate_expense_form,
    validate_total_budget,
)

CATEGORIES = (
    Category("cat1", "Food", "Utensils"),
    Category("cat2", "Transportation", "BusFront"),
)


def test_maybe_map():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0
    assert Nothing().is_none()


def test_either_bind():
    def half(x):
        return Left("odd") if x % 2 else Right(x // 2)

    assert Right(4).bind(half) == Right(2)
    assert Right(3).bind(half).get_error() == "odd"
    assert Left("original").bind(half).get_error() == "original"


def test_safe_category():
    assert safe_category(CATEGORIES, "cat1").get_or_else(None).name == "Food"
    assert safe_category(CATEGORIES, "missing").is_none()


def test_to_decimal():
    assert to_decimal("12.50") == Some(Decimal("12.50"))
    assert to_decimal(3) == Some(Decimal(3))
    assert to_decimal("abc").is_none()
    assert to_decimal("").is_none()
    assert to_decimal(None).is_none()
    assert to_decimal("NaN").is_none()


def test_validate_expense_success():
    result = validate_expense_form("  Lunch  ", "12.5", "cat1", date(2024, 3, 1), CATEGORIES)

    assert result.is_right()
    draft = result.get_or_else(None)
    assert draft.description == "Lunch"
    assert draft.amount == Decimal("12.5")
    assert draft.date == datetime(2024, 3, 1)


def test_validate_expense_description_bounds():
    short = validate_expense_form("a", "5", "cat1", date.today(), CATEGORIES)
    long = validate_expense_form("x" * 101, "5", "cat1", date.today(), CATEGORIES)

    assert short.get_error()["error"] == "description_too_short"
    assert long.get_error()["error"] == "description_too_long"


def test_validate_expense_amount_must_be_positive():
    zero = validate_expense_form("Coffee", "0", "cat1", date.today(), CATEGORIES)
    text = validate_expense_form("Coffee", "lots", "cat1", date.today(), CATEGORIES)

    assert zero.get_error()["error"] == "amount_not_positive"
    assert zero.get_error()["field"] == "amount"
    assert text.get_error()["error"] == "invalid_amount"


def test_validate_expense_category():
    missing = validate_expense_form("Coffee", "3", "", date.today(), CATEGORIES)
    unknown = validate_expense_form("Coffee", "3", "nope", date.today(), CATEGORIES)

    assert missing.get_error()["error"] == "category_required"
    assert unknown.get_error()["error"] == "category_not_found"
    assert "nope" in unknown.get_error()["message"]


def test_validate_expense_requires_date():
    result = validate_expense_form("Coffee", "3", "cat1", None, CATEGORIES)
    assert result.get_error()["error"] == "date_required"


def test_validate_credentials():
    ok = validate_credentials(" user@example.com ", "secret1")
    bad_email = validate_credentials("not-an-email", "secret1")
    weak = validate_credentials("user@example.com", "12345")

    assert ok.get_or_else(None).email == "user@example.com"
    assert bad_email.get_error()["error"] == "invalid_email"
    assert weak.get_error()["error"] == "weak_password"


def test_validate_total_budget():
    assert validate_total_budget("2000") == Right(Decimal(2000))
    error = validate_total_budget("0").get_error()
    assert error["message"] == "Please enter a budget greater than 0."
    assert error["field"] == "total_budget"


def test_parse_budget_edits_drops_unparseable_values():
    parsed = parse_budget_edits({"c1": "650", "c2": "", "c3": "abc", "c4": "0"})
    assert parsed == {"c1": Decimal(650), "c4": Decimal(0)}
