import logging
from decimal import Decimal
from typing import Callable, List, Mapping, Optional

from spendwise.aggregator import categories_with_details
from spendwise.domain import Budget, Category, Expense
from spendwise.events import (
    BUDGET_ALERT,
    BUDGETS_UPDATED,
    EXPENSE_ADDED,
    EventBus,
    check_budget_handler,
)
from spendwise.transforms import Snapshot, add_expense, set_budget_amounts

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


class SnapshotStore:
    """Holds the current immutable snapshot of a user's collections.

    Every change swaps in new tuples and notifies listeners; nothing ever
    writes through a snapshot that was already handed out.
    """

    def __init__(
        self,
        categories: tuple[Category, ...] = (),
        expenses: tuple[Expense, ...] = (),
        budgets: tuple[Budget, ...] = (),
        bus: Optional[EventBus] = None,
    ):
        self._snapshot: Snapshot = (tuple(categories), tuple(expenses), tuple(budgets))
        self._listeners: List[SnapshotListener] = []
        self.bus = bus if bus is not None else EventBus()
        if not self.bus.is_subscribed(BUDGET_ALERT, check_budget_handler):
            self.bus.subscribe(BUDGET_ALERT, check_budget_handler)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._snapshot[0]

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._snapshot[1]

    @property
    def budgets(self) -> tuple[Budget, ...]:
        return self._snapshot[2]

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def replace(self, snapshot: Snapshot) -> None:
        categories, expenses, budgets = snapshot
        self._set((tuple(categories), tuple(expenses), tuple(budgets)))

    def add_expense(self, expense: Expense) -> List[str]:
        """Append an expense and return any budget alerts it triggers."""
        categories, expenses, budgets = self._snapshot
        self._set((categories, add_expense(expenses, expense), budgets))
        self.bus.publish(EXPENSE_ADDED, {"expense": expense})
        return self._budget_alerts(expense.category_id)

    def update_budgets(self, amounts: Mapping[str, Decimal]) -> None:
        """Apply new amounts keyed by budget id."""
        if not amounts:
            return
        categories, expenses, budgets = self._snapshot
        self._set((categories, expenses, set_budget_amounts(budgets, amounts)))
        self.bus.publish(BUDGETS_UPDATED, {"budget_ids": tuple(amounts)})

    def _set(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _budget_alerts(self, category_id: str) -> List[str]:
        categories, expenses, budgets = self._snapshot
        alerts = []
        for detail in categories_with_details(categories, expenses, budgets):
            if detail.id != category_id:
                continue
            payload = {"category_name": detail.name, "spent": detail.spent, "budget": detail.budget}
            for result in self.bus.publish(BUDGET_ALERT, payload):
                if "alert" in result:
                    logger.info(result["alert"])
                    alerts.append(result["alert"])
        return alerts
