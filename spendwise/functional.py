import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from spendwise.domain import Category, Credentials, ExpenseDraft

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
MIN_DESCRIPTION_LENGTH = 2
MAX_DESCRIPTION_LENGTH = 100


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _error(code: str, message: str, field: str) -> Left:
    return Left({"error": code, "message": message, "field": field})


def safe_category(cats: Iterable[Category], cat_id: str) -> Maybe[Category]:
    for cat in cats:
        if cat.id == cat_id:
            return Some(cat)
    return Nothing()


def to_decimal(value) -> Maybe[Decimal]:
    """Coerce form input (str, int, float, Decimal) to a finite Decimal."""
    if value is None or isinstance(value, bool):
        return Nothing()
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Nothing()
    if not parsed.is_finite():
        return Nothing()
    return Some(parsed)


def validate_amount(value, field: str = "amount") -> Either[dict, Decimal]:
    parsed = to_decimal(value)
    if parsed.is_none():
        return _error("invalid_amount", "Amount must be a number.", field)
    amount = parsed.get_or_else(None)
    if amount <= 0:
        return _error("amount_not_positive", "Amount must be a positive number.", field)
    return Right(amount)


def validate_expense_form(
    description: str,
    amount,
    category_id: str,
    when,
    categories: Iterable[Category],
) -> Either[dict, ExpenseDraft]:
    text = (description or "").strip()
    if len(text) < MIN_DESCRIPTION_LENGTH:
        return _error(
            "description_too_short",
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters.",
            "description",
        )
    if len(text) > MAX_DESCRIPTION_LENGTH:
        return _error(
            "description_too_long",
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters.",
            "description",
        )

    checked_amount = validate_amount(amount)
    if checked_amount.is_left():
        return checked_amount

    if not category_id:
        return _error("category_required", "Please select a category.", "category_id")
    if safe_category(categories, category_id).is_none():
        return _error(
            "category_not_found",
            f"Category with ID {category_id} does not exist",
            "category_id",
        )

    if when is None:
        return _error("date_required", "Please pick a date.", "date")
    if isinstance(when, date) and not isinstance(when, datetime):
        when = datetime(when.year, when.month, when.day)

    return Right(ExpenseDraft(
        description=text,
        amount=checked_amount.get_or_else(None),
        category_id=category_id,
        date=when,
    ))


def validate_credentials(email: str, password: str) -> Either[dict, Credentials]:
    address = (email or "").strip()
    if not EMAIL_RE.match(address):
        return _error("invalid_email", "Please enter a valid email.", "email")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return _error(
            "weak_password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
            "password",
        )
    return Right(Credentials(email=address, password=password))


def validate_total_budget(value) -> Either[dict, Decimal]:
    checked = validate_amount(value, field="total_budget")
    if checked.is_left():
        return Left({**checked.get_error(), "message": "Please enter a budget greater than 0."})
    return checked


def parse_budget_edits(edits: Mapping[str, object]) -> dict[str, Decimal]:
    """Keep only the edited budget values that parse as numbers."""
    parsed: dict[str, Decimal] = {}
    for category_id, raw in edits.items():
        amount = to_decimal(raw)
        if amount.is_some():
            parsed[category_id] = amount.get_or_else(None)
    return parsed
