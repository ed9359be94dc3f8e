"""Persistence and authentication backend.

The dashboard only talks to the ``Backend`` protocol. ``JsonFileBackend``
keeps everything in a single JSON document and is what the app uses
locally; a managed service can be plugged in behind the same methods.
"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Callable, Mapping, Protocol, Tuple, Union
from uuid import uuid4

from werkzeug.security import check_password_hash, generate_password_hash

from spendwise.domain import Expense, ExpenseDraft
from spendwise.functional import validate_credentials
from spendwise.transforms import (
    Snapshot,
    budget_to_dict,
    category_to_dict,
    expense_to_dict,
    seed_user_data,
    snapshot_from_dict,
)

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "auth/email-already-in-use"
USER_NOT_FOUND = "auth/user-not-found"
WRONG_PASSWORD = "auth/wrong-password"
INVALID_CREDENTIAL = "auth/invalid-credential"
INVALID_EMAIL = "auth/invalid-email"
WEAK_PASSWORD = "auth/weak-password"

_AUTH_MESSAGES = {
    EMAIL_IN_USE: "This email is already in use. Please log in.",
    USER_NOT_FOUND: "Invalid email or password. Please try again.",
    WRONG_PASSWORD: "Invalid email or password. Please try again.",
    INVALID_CREDENTIAL: "Invalid email or password. Please try again.",
    INVALID_EMAIL: "Please enter a valid email address.",
    WEAK_PASSWORD: "The password must be at least 6 characters long.",
}


class BackendError(Exception):
    """Raised when the backing store cannot be read or written."""


class AuthError(Exception):

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code


def describe_auth_error(error: Exception) -> str:
    code = getattr(error, "code", None)
    if code is None:
        return "An unexpected error occurred. Please try again."
    return _AUTH_MESSAGES.get(code, str(error))


class Backend(Protocol):

    def sign_up(self, email: str, password: str) -> str: ...

    def sign_in(self, email: str, password: str) -> str: ...

    def snapshot(self, user_id: str) -> Snapshot: ...

    def add_expense(self, user_id: str, draft: ExpenseDraft) -> Expense: ...

    def update_budget_amounts(self, user_id: str, amounts: Mapping[str, Decimal]) -> Tuple[str, ...]: ...


class JsonFileBackend:

    def __init__(self, path: Union[str, Path], id_factory: Callable[[], str] = lambda: uuid4().hex):
        self.path = Path(path)
        self.id_factory = id_factory

    def _read(self) -> dict:
        if not self.path.exists():
            return {"users": {}, "data": {}}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.exception("failed to read store %s", self.path)
            raise BackendError(f"Cannot read {self.path}: {e}") from e

    def _write(self, doc: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(doc, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            logger.exception("failed to write store %s", self.path)
            raise BackendError(f"Cannot write {self.path}: {e}") from e

    def _user_data(self, doc: dict, user_id: str) -> dict:
        data = doc["data"].get(user_id)
        if data is None:
            raise BackendError(f"Unknown user {user_id}")
        return data

    def sign_up(self, email: str, password: str) -> str:
        checked = validate_credentials(email, password)
        if checked.is_left():
            err = checked.get_error()
            code = WEAK_PASSWORD if err["error"] == "weak_password" else INVALID_EMAIL
            raise AuthError(code, err["message"])
        creds = checked.get_or_else(None)
        key = creds.email.lower()

        doc = self._read()
        if key in doc["users"]:
            raise AuthError(EMAIL_IN_USE)

        user_id = self.id_factory()
        doc["users"][key] = {
            "id": user_id,
            "email": creds.email,
            "username": creds.email.split("@")[0],
            "password_hash": generate_password_hash(creds.password),
        }
        categories, budgets = seed_user_data(user_id, self.id_factory)
        doc["data"][user_id] = {
            "categories": [category_to_dict(c) for c in categories],
            "expenses": [],
            "budgets": [budget_to_dict(b) for b in budgets],
        }
        self._write(doc)
        logger.info("created account %s", user_id)
        return user_id

    def sign_in(self, email: str, password: str) -> str:
        user = self._read()["users"].get((email or "").strip().lower())
        if user is None:
            raise AuthError(USER_NOT_FOUND)
        if not check_password_hash(user["password_hash"], password or ""):
            raise AuthError(INVALID_CREDENTIAL)
        return user["id"]

    def snapshot(self, user_id: str) -> Snapshot:
        return snapshot_from_dict(self._user_data(self._read(), user_id))

    def add_expense(self, user_id: str, draft: ExpenseDraft) -> Expense:
        doc = self._read()
        data = self._user_data(doc, user_id)
        expense = Expense(
            id=self.id_factory(),
            category_id=draft.category_id,
            amount=draft.amount,
            date=draft.date,
            description=draft.description,
            user_id=user_id,
        )
        data["expenses"].append(expense_to_dict(expense))
        self._write(doc)
        return expense

    def update_budget_amounts(self, user_id: str, amounts: Mapping[str, Decimal]) -> Tuple[str, ...]:
        """Write new amounts keyed by budget id; returns the ids that were updated."""
        doc = self._read()
        data = self._user_data(doc, user_id)
        updated = []
        for row in data["budgets"]:
            if row["id"] in amounts:
                row["amount"] = str(amounts[row["id"]])
                updated.append(row["id"])
        if updated:
            self._write(doc)
        return tuple(updated)
