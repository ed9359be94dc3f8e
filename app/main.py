import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging
from uuid import uuid4

import streamlit as st
import pandas as pd
import plotly.express as px

from spendwise import config
from spendwise.aggregator import budget_progress, recent_expenses
from spendwise.ai import (
    AIServiceError,
    BudgetAdvisor,
    plan_input,
    plan_total,
    suggestions_by_category,
    suggestions_input,
)
from spendwise.backend import AuthError, BackendError, JsonFileBackend, describe_auth_error
from spendwise.domain import Expense
from spendwise.functional import (
    parse_budget_edits,
    safe_category,
    validate_credentials,
    validate_expense_form,
    validate_total_budget,
)
from spendwise.memo import cached_dashboard
from spendwise.settings import CURRENCIES, LANGUAGES, SettingsStore
from spendwise.store import SnapshotStore
from spendwise.transforms import changed_budget_amounts, load_seed

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("spendwise.app")

DEMO_USER = "demo"

ICONS = {
    "Utensils": "🍽️",
    "BusFront": "🚌",
    "Home": "🏠",
    "ShoppingCart": "🛒",
    "HeartPulse": "❤️",
    "Film": "🎬",
}

st.set_page_config(page_title="Spend Wise", page_icon="🐷", layout="wide")

config.ensure_data_dir()
backend = JsonFileBackend(config.STORE_PATH)

if "settings_store" not in st.session_state:
    st.session_state.settings_store = SettingsStore(config.SETTINGS_PATH)
settings = st.session_state.settings_store.settings
t = settings.t


def label(name: str) -> str:
    translated = t(name.lower())
    return name if translated == name.lower() else translated


def open_session(user_id: str) -> None:
    if user_id == DEMO_USER:
        snapshot = load_seed(str(config.SEED_PATH))
    else:
        snapshot = backend.snapshot(user_id)
    st.session_state.user_id = user_id
    st.session_state.store = SnapshotStore(*snapshot)
    st.session_state.suggestions = None
    st.session_state.plan = None
    st.session_state.editing_budgets = False


def close_session() -> None:
    for key in ("user_id", "store", "suggestions", "plan", "editing_budgets"):
        st.session_state.pop(key, None)


def auth_page() -> None:
    st.title(f"🐷 {t('appName')}")
    login_tab, signup_tab = st.tabs([t("login"), t("signup")])

    for tab, mode in ((login_tab, "login"), (signup_tab, "signup")):
        with tab:
            with st.form(f"{mode}_form"):
                email = st.text_input(t("email"), key=f"{mode}_email")
                password = st.text_input(t("password"), type="password", key=f"{mode}_password")
                submitted = st.form_submit_button(t(mode))

            if not submitted:
                continue
            checked = validate_credentials(email, password)
            if checked.is_left():
                st.error(checked.get_error()["message"])
                continue
            creds = checked.get_or_else(None)
            try:
                if mode == "signup":
                    user_id = backend.sign_up(creds.email, creds.password)
                    st.toast("Account created! You have been successfully signed up.")
                else:
                    user_id = backend.sign_in(creds.email, creds.password)
                    st.toast("Logged in! You have been successfully logged in.")
                open_session(user_id)
            except AuthError as e:
                logger.warning("authentication failed: %s", e.code)
                st.error(f"Authentication Failed: {describe_auth_error(e)}")
                continue
            except BackendError as e:
                st.error(f"Authentication Failed: {e}")
                continue
            st.rerun()

    st.divider()
    if st.button("👀 Explore with demo data"):
        open_session(DEMO_USER)
        st.rerun()


def settings_sidebar() -> None:
    store = st.session_state.settings_store
    st.sidebar.markdown(f"### ⚙️ {t('settings')}")
    st.sidebar.caption(t("customizeYourExperience"))

    dark = st.sidebar.toggle(t("darkMode"), value=settings.theme == "dark")
    language = st.sidebar.selectbox(
        t("language"), LANGUAGES, index=LANGUAGES.index(settings.language),
        format_func=lambda code: {"en": "English", "hi": "हिन्दी"}[code],
    )
    currency = st.sidebar.selectbox(t("currency"), CURRENCIES, index=CURRENCIES.index(settings.currency))

    changes = {}
    if ("dark" if dark else "light") != settings.theme:
        changes["theme"] = "dark" if dark else "light"
    if language != settings.language:
        changes["language"] = language
    if currency != settings.currency:
        changes["currency"] = currency
    if changes:
        store.update(**changes)
        st.rerun()

    st.sidebar.divider()
    if st.sidebar.button(f"🚪 {t('logout')}"):
        close_session()
        st.rerun()


def add_expense_form(store: SnapshotStore) -> None:
    with st.expander(f"➕ {t('addExpense')}"):
        st.caption(t("enterTransactionDetails"))
        with st.form("add_expense_form", clear_on_submit=True):
            description = st.text_input(t("description"), placeholder=t("egCoffeeWithFriend"))
            amount = st.number_input(t("amount"), min_value=0.0, step=0.01, format="%.2f")
            category_id = st.selectbox(
                t("category"),
                [c.id for c in store.categories],
                index=None,
                placeholder=t("selectACategory"),
                format_func=lambda cid: safe_category(store.categories, cid)
                .map(lambda c: f"{ICONS.get(c.icon, '')} {label(c.name)}")
                .get_or_else(cid),
            )
            when = st.date_input(t("date"))
            submitted = st.form_submit_button(t("addExpense"))

        if not submitted:
            return
        checked = validate_expense_form(description, str(amount), category_id, when, store.categories)
        if checked.is_left():
            st.error(checked.get_error()["message"])
            return
        draft = checked.get_or_else(None)
        try:
            if st.session_state.user_id == DEMO_USER:
                expense = Expense(
                    id=str(uuid4()),
                    category_id=draft.category_id,
                    amount=draft.amount,
                    date=draft.date,
                    description=draft.description,
                )
            else:
                expense = backend.add_expense(st.session_state.user_id, draft)
        except BackendError as e:
            st.error(f"{t('error')}: {e}")
            return
        for alert in store.add_expense(expense):
            st.warning(alert)
        st.success("Expense added successfully!")


def overview(view) -> None:
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric(t("totalSpent"), settings.money(view.total_spent))
        st.caption(t("inTheCurrentMonth"))
    with k2:
        st.metric(t("totalBudget"), settings.money(view.total_budget))
        st.caption(t("forThisMonth"))
    with k3:
        st.metric(t("remainingBudget"), settings.money(view.remaining_budget))
        if view.over_budget:
            st.error(t("youAreOverBudget"))
        else:
            st.caption(t("remainingForThisMonth"))


def spending_chart(view) -> None:
    st.subheader(t("spendingByCategory"))
    df = pd.DataFrame(
        [{"Category": label(s.name), "Spent": float(s.spent)} for s in view.spending_by_category]
    )
    if df.empty:
        st.info(t("noExpenses"))
        return
    fig = px.bar(
        df,
        x="Category",
        y="Spent",
        labels={"Spent": f"{t('amount')} ({settings.currency})", "Category": t("category")},
        template="plotly_dark" if settings.theme == "dark" else "plotly_white",
    )
    fig.update_layout(margin=dict(t=10, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)


def recent_expenses_table(view, store: SnapshotStore) -> None:
    st.subheader(t("recentExpenses"))
    st.caption(t("last5Transactions"))
    latest = recent_expenses(view.sorted_expenses, config.RECENT_EXPENSES_LIMIT)
    if not latest:
        st.info(t("noExpenses"))
        return
    rows = []
    for e in latest:
        category = safe_category(store.categories, e.category_id)
        rows.append({
            t("date"): e.date.strftime("%b %d, %Y"),
            t("description"): e.description,
            t("category"): category.map(lambda c: f"{ICONS.get(c.icon, '')} {label(c.name)}").get_or_else("-"),
            t("amount"): settings.money(e.amount),
        })
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)


def budget_planner(store: SnapshotStore) -> None:
    st.subheader(f"✨ {t('aiBudgetPlanner')}")
    st.caption(t("enterTotalBudgetSuggestion"))
    with st.form("budget_planner_form"):
        total = st.number_input(t("totalBudget"), min_value=0.0, step=50.0)
        submitted = st.form_submit_button(t("generatePlan"))

    if submitted:
        checked = validate_total_budget(str(total))
        if checked.is_left():
            st.error(checked.get_error()["message"])
        else:
            st.session_state.plan = None
            with st.spinner(f"{t('generating')}..."):
                try:
                    request = plan_input(checked.get_or_else(None), store.categories, t)
                    st.session_state.plan = asyncio.run(BudgetAdvisor().generate_budget_plan(request))
                except AIServiceError:
                    st.error("Failed to generate budget plan. Please try again.")

    plan = st.session_state.get("plan")
    if plan:
        df = pd.DataFrame(
            [{t("category"): item.category_name, t("amount"): settings.money(item.amount)} for item in plan.plan]
        )
        st.dataframe(df, hide_index=True, use_container_width=True)
        st.caption(f"{t('totalBudget')}: {settings.money(plan_total(plan))}")


def budget_goals(view, store: SnapshotStore) -> None:
    head, edit_col, ai_col = st.columns([4, 1, 1])
    with head:
        st.subheader(f"🎯 {t('budgetGoals')}")
    with edit_col:
        editing = st.session_state.get("editing_budgets", False)
        if st.button(t("cancel") if editing else t("editBudgets")):
            st.session_state.editing_budgets = not editing
            st.rerun()
    with ai_col:
        if st.button(f"💡 {t('getAISuggestions')}", disabled=st.session_state.get("editing_budgets", False)):
            st.session_state.suggestions = None
            with st.spinner(f"{t('generating')}..."):
                try:
                    result = asyncio.run(
                        BudgetAdvisor().get_budget_suggestions(suggestions_input(view.categories_with_details))
                    )
                    st.session_state.suggestions = suggestions_by_category(result)
                except AIServiceError:
                    st.error("Failed to get AI suggestions. Please try again.")

    editing = st.session_state.get("editing_budgets", False)
    suggestions = st.session_state.get("suggestions") or {}
    edits = {}
    for detail in view.categories_with_details:
        name_col, value_col = st.columns([3, 2])
        with name_col:
            st.markdown(f"**{ICONS.get(detail.icon, '')} {label(detail.name)}**")
        with value_col:
            if editing:
                edits[detail.id] = st.text_input(
                    "Budget", value=str(detail.budget), key=f"budget_{detail.id}", label_visibility="collapsed"
                )
            else:
                st.write(f"{settings.money(detail.spent, 0)} / {settings.money(detail.budget, 0)}")
        st.progress(budget_progress(detail) / 100)
        if detail.name in suggestions and not editing:
            st.info(f"**{t('suggestion')}:** {suggestions[detail.name]}")

    if editing and st.button(t("saveChanges"), type="primary"):
        changes = changed_budget_amounts(store.budgets, view.categories_with_details, parse_budget_edits(edits))
        try:
            if st.session_state.user_id != DEMO_USER:
                backend.update_budget_amounts(st.session_state.user_id, changes)
        except BackendError:
            st.error("Failed to update budgets.")
            return
        store.update_budgets(changes)
        st.session_state.editing_budgets = False
        st.toast("Budgets updated successfully!")
        st.rerun()


if "store" not in st.session_state:
    auth_page()
    st.stop()

store = st.session_state.store
settings_sidebar()

title_col, _ = st.columns([3, 1])
with title_col:
    st.title(f"🐷 {t('appName')}")

add_expense_form(store)

view = cached_dashboard(*store.snapshot)

overview(view)
chart_col, recent_col = st.columns([4, 3])
with chart_col:
    spending_chart(view)
with recent_col:
    recent_expenses_table(view, store)

st.divider()
budget_planner(store)
st.divider()
budget_goals(view, store)
