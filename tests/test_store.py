from datetime import datetime
from decimal import Decimal

from spendwise.domain import Budget, Category, Expense
from spendwise.events import (
    BUDGET_ALERT,
    BUDGETS_UPDATED,
    EXPENSE_ADDED,
    EventBus,
    check_budget_handler,
)
from spendwise.store import SnapshotStore


def make_store(bus=None):
    return SnapshotStore(
        categories=(Category("c1", "Food", "Utensils"), Category("c2", "Health", "HeartPulse")),
        expenses=(Expense("e1", "c1", Decimal(80), datetime(2024, 1, 1)),),
        budgets=(Budget("b1", "c1", Decimal(100)),),
        bus=bus,
    )


def test_event_bus_publish_and_unsubscribe():
    bus = EventBus()

    def handler(event, payload):
        return {"seen": event.name, "n": payload["n"]}

    bus.subscribe("PING", handler)
    assert bus.publish("PING", {"n": 1}) == [{"seen": "PING", "n": 1}]

    bus.unsubscribe("PING", handler)
    assert bus.publish("PING", {"n": 2}) == []
    assert bus.publish("UNKNOWN", {}) == []


def test_check_budget_handler():
    over = check_budget_handler(None, {"category_name": "Food", "spent": 120, "budget": 100})
    under = check_budget_handler(None, {"category_name": "Food", "spent": 90, "budget": 100})
    no_budget = check_budget_handler(None, {"category_name": "Food", "spent": 90, "budget": 0})

    assert "Food" in over["alert"]
    assert over["over_budget"] == 20
    assert under == {}
    assert no_budget == {}


def test_add_expense_swaps_snapshot_and_notifies():
    store = make_store()
    before = store.snapshot
    seen = []
    store.subscribe(seen.append)

    alerts = store.add_expense(Expense("e2", "c2", Decimal(5), datetime(2024, 1, 2)))

    assert alerts == []
    assert len(store.expenses) == 2
    assert len(before[1]) == 1
    assert seen == [store.snapshot]


def test_add_expense_reports_budget_alert():
    store = make_store()

    alerts = store.add_expense(Expense("e2", "c1", Decimal(30), datetime(2024, 1, 2)))

    assert len(alerts) == 1
    assert "Food" in alerts[0]


def test_update_budgets_publishes_event():
    bus = EventBus()
    events = []
    bus.subscribe(BUDGETS_UPDATED, lambda event, payload: events.append(payload) or {})
    bus.subscribe(EXPENSE_ADDED, lambda event, payload: events.append(payload) or {})
    store = make_store(bus)

    store.update_budgets({"b1": Decimal(250)})
    store.update_budgets({})

    assert store.budgets[0].amount == 250
    assert events == [{"budget_ids": ("b1",)}]


def test_unsubscribe_listener():
    store = make_store()
    seen = []
    stop = store.subscribe(seen.append)
    stop()

    store.replace(((), (), ()))

    assert seen == []
    assert store.snapshot == ((), (), ())


def test_stores_sharing_a_bus_alert_once():
    bus = EventBus()
    make_store(bus)
    second = make_store(bus)

    alerts = second.add_expense(Expense("e2", "c1", Decimal(30), datetime(2024, 1, 2)))

    assert len(alerts) == 1
    assert bus.is_subscribed(BUDGET_ALERT, check_budget_handler)
