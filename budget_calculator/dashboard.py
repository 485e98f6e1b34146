"""Streamlit page for the budget calculator.

Run with ``streamlit run budget_calculator/Home.py`` or the launcher script
in the project root.
"""

from __future__ import annotations

from typing import Any, Dict

import pandas as pd
import streamlit as st

# Import our custom modules
try:
    from . import config
    from . import session
    from .allocator import CATEGORIES, Category
    from .formatting import escape_dollar_for_markdown, format_currency, parse_currency
    from .income import frequency_options
    from .summary import budget_summary
    from .visualization import create_allocated_vs_spent_chart, create_allocation_donut
except ImportError:
    # Fallback for direct execution
    from budget_calculator import config
    from budget_calculator import session
    from budget_calculator.allocator import CATEGORIES, Category
    from budget_calculator.formatting import escape_dollar_for_markdown, format_currency, parse_currency
    from budget_calculator.income import frequency_options
    from budget_calculator.summary import budget_summary
    from budget_calculator.visualization import create_allocated_vs_spent_chart, create_allocation_donut


def main() -> None:
    """Main entry point for the budget calculator page."""
    st.set_page_config(page_title="Budget Calculator", page_icon="💰", layout="wide")
    config.configure_logging()
    config.ensure_data_directories()
    session.ensure_state(st.session_state)

    st.title("💰 Budget Calculator")
    income = _render_income_section()
    st.divider()
    _render_breakdown(income)


# ---------------------------------------------------------------------------
# Income
# ---------------------------------------------------------------------------


def _render_income_section():
    settings = session.get_income(st.session_state)
    options = frequency_options()
    values = [value for value, _ in options]
    labels = dict(options)

    col1, col2 = st.columns(2)
    with col1:
        frequency = st.selectbox(
            "How often are you paid?",
            values,
            index=values.index(settings.frequency),
            format_func=lambda value: labels[value],
        )
    with col2:
        raw_amount = st.text_input(
            "Amount per paycheck",
            value=format_currency(settings.pay_amount) if settings.pay_amount else "",
            placeholder="$0",
        )
    settings = session.update_income(st.session_state, parse_currency(raw_amount), frequency)
    income = settings.monthly_income()
    st.metric("Estimated Monthly Income", format_currency(income))
    return income


# ---------------------------------------------------------------------------
# Allocation + expenses
# ---------------------------------------------------------------------------


def _slider_key(category: Category) -> str:
    return f"slider_{category.value}"


def _lock_key(category: Category) -> str:
    return f"lock_{category.value}"


def _on_slide(category: Category) -> None:
    allocator = session.get_allocator(st.session_state)
    allocator.rebalance(category, st.session_state[_slider_key(category)])


def _on_toggle_lock(category: Category) -> None:
    session.get_allocator(st.session_state).toggle_lock(category)


def _on_reset() -> None:
    session.get_allocator(st.session_state).reset()
    session.get_entry(st.session_state).cancel()


def _render_breakdown(income) -> None:
    allocator = session.get_allocator(st.session_state)
    ledger = session.get_ledger(st.session_state)

    header, reset_col = st.columns([4, 1])
    with header:
        st.subheader("Budget Breakdown")
    with reset_col:
        st.button("Reset to 50/30/20", on_click=_on_reset, use_container_width=True)

    # Widgets mirror the allocator, which is the source of truth.
    for category in CATEGORIES:
        st.session_state[_slider_key(category)] = allocator.percents[category]
        st.session_state[_lock_key(category)] = allocator.locks[category]

    summary = budget_summary(allocator.percents, income, ledger.totals())
    columns = st.columns(len(CATEGORIES))
    for column, category in zip(columns, CATEGORIES):
        with column:
            _render_category_card(category, summary.loc[category.label].to_dict())

    chart_left, chart_right = st.columns(2)
    with chart_left:
        st.plotly_chart(create_allocation_donut(summary), use_container_width=True)
    with chart_right:
        st.plotly_chart(create_allocated_vs_spent_chart(summary), use_container_width=True)


def _render_category_card(category: Category, row: Dict[str, Any]) -> None:
    allocator = session.get_allocator(st.session_state)
    locked = allocator.locks[category]

    with st.container(border=True):
        title_col, lock_col = st.columns([3, 1])
        with title_col:
            st.markdown(f"**{category.label}**")
        with lock_col:
            st.toggle(
                "🔒" if locked else "🔓",
                key=_lock_key(category),
                on_change=_on_toggle_lock,
                args=(category,),
                help="Unlock" if locked else "Lock",
            )
        st.slider(
            f"{category.label} percentage",
            min_value=0,
            max_value=100,
            step=1,
            key=_slider_key(category),
            on_change=_on_slide,
            args=(category,),
            disabled=locked,
            label_visibility="collapsed",
        )
        _render_percent_entry(category, allocator.percents[category], locked)

        st.caption(escape_dollar_for_markdown(f"Allocated: {format_currency(row['Allocated'])}"))
        st.caption(escape_dollar_for_markdown(f"Spent: {format_currency(row['Spent'])}"))
        st.progress(int(round(row['Progress %'])))
        remaining = row['Remaining']
        if row['Over Budget']:
            st.markdown(f":red[**Remaining: {escape_dollar_for_markdown(format_currency(remaining))}**]")
            message = f"Over budget by {format_currency(abs(remaining))}"
            if pd.notna(row['Over By %']):
                message += f" ({int(row['Over By %'])}%)"
            st.error(message)
        else:
            st.markdown(f"**Remaining: {escape_dollar_for_markdown(format_currency(remaining))}**")

        _render_expense_editor(category)


def _render_percent_entry(category: Category, current: int, locked: bool) -> None:
    entry = session.get_entry(st.session_state)
    draft_key = f"pct_draft_{category.value}"
    if entry.category is not category:
        if st.button(f"{current}%", key=f"edit_pct_{category.value}", disabled=locked,
                     help="Click to type a percentage"):
            entry.begin(category, current)
            st.session_state.pop(draft_key, None)
            st.rerun()
        return

    st.number_input(
        "Percentage",
        min_value=0,
        max_value=100,
        step=1,
        value=entry.draft,
        key=draft_key,
    )
    entry.update(st.session_state.get(draft_key, entry.draft))
    apply_col, cancel_col = st.columns(2)
    with apply_col:
        if st.button("Apply", key=f"apply_pct_{category.value}"):
            entry.commit(session.get_allocator(st.session_state))
            st.rerun()
    with cancel_col:
        if st.button("Cancel", key=f"cancel_pct_{category.value}"):
            entry.cancel()
            st.rerun()


def _render_expense_editor(category: Category) -> None:
    ledger = session.get_ledger(st.session_state)
    items = ledger.entries(category)
    if not items:
        st.caption("No expenses yet. Add one to get started.")

    changed = False
    for item in items:
        name_col, amount_col, remove_col = st.columns([3, 2, 1])
        with name_col:
            name = st.text_input(
                "Item",
                value=item.name,
                placeholder="e.g., Rent, Groceries",
                key=f"exp_name_{item.id}",
            )
        with amount_col:
            raw_amount = st.text_input(
                "Amount",
                value=format_currency(item.amount) if item.amount else "",
                placeholder="$0.00",
                key=f"exp_amount_{item.id}",
            )
        with remove_col:
            if st.button("Remove", key=f"exp_remove_{item.id}"):
                ledger.remove(category, item.id)
                session.persist_ledger(st.session_state)
                st.rerun()
        amount = parse_currency(raw_amount)
        if name != item.name or amount != item.amount:
            ledger.rename(category, item.id, name)
            ledger.set_amount(category, item.id, amount)
            changed = True

    if st.button("Add Expense", key=f"exp_add_{category.value}"):
        ledger.add(category)
        changed = True
    if changed:
        session.persist_ledger(st.session_state)
        st.rerun()


if __name__ == '__main__':
    main()
