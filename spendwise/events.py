import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = ['EXPENSE_ADDED', 'BUDGETS_UPDATED', 'BUDGET_ALERT', 'Event', 'EventBus', 'check_budget_handler']

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = list(self._subscribers.get(name, ()))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("publishing %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]

    def is_subscribed(self, name: str, handler: Handler) -> bool:
        return handler in self._subscribers.get(name, ())

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, ()):
            self._subscribers[name].remove(handler)


EXPENSE_ADDED = "EXPENSE_ADDED"
BUDGETS_UPDATED = "BUDGETS_UPDATED"
BUDGET_ALERT = "BUDGET_ALERT"


def check_budget_handler(event: Event, payload: dict) -> dict:
    """Flag a category whose spending has gone past its budget.

    payload: category_name, spent, budget. A zero budget never alerts.
    """
    spent = payload.get("spent", 0)
    budget = payload.get("budget", 0)
    name = payload.get("category_name", payload.get("category_id", ""))

    if budget > 0 and spent > budget:
        return {
            "alert": f"Budget exceeded for {name}: {spent} / {budget}",
            "category_name": name,
            "spent": spent,
            "budget": budget,
            "over_budget": spent - budget,
        }
    return {}
