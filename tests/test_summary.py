"""Tests for the per-category budget summary and its charts."""

from __future__ import annotations

import math
from decimal import Decimal

import plotly.graph_objects as go

from budget_calculator.allocator import Category, PercentVector
from budget_calculator.summary import allocated_amounts, budget_summary
from budget_calculator.visualization import create_allocated_vs_spent_chart, create_allocation_donut


def _summary():
    return budget_summary(
        PercentVector(50, 30, 20),
        Decimal('1000'),
        {Category.NEEDS: Decimal('600'), Category.WANTS: Decimal('100')},
    )


def test_allocated_amounts() -> None:
    amounts = allocated_amounts(PercentVector(70, 18, 12), '2,000')
    assert amounts == {
        Category.NEEDS: Decimal('1400'),
        Category.WANTS: Decimal('360'),
        Category.SAVINGS: Decimal('240'),
    }


def test_summary_values() -> None:
    frame = _summary()
    assert list(frame.index) == ['Needs', 'Wants', 'Savings / Debt']

    needs = frame.loc['Needs']
    assert needs['Allocated'] == 500.0
    assert needs['Remaining'] == -100.0
    assert bool(needs['Over Budget'])
    assert needs['Progress %'] == 100.0
    assert needs['Over By %'] == 20

    wants = frame.loc['Wants']
    assert wants['Remaining'] == 200.0
    assert not bool(wants['Over Budget'])
    assert math.isclose(wants['Progress %'], 100 / 3)
    assert math.isnan(wants['Over By %'])

    savings = frame.loc['Savings / Debt']
    assert savings['Spent'] == 0.0
    assert savings['Progress %'] == 0.0
    assert savings['Fraction'] == 0.2


def test_summary_with_no_income() -> None:
    frame = budget_summary(PercentVector.default(), 0, {Category.NEEDS: 10})
    needs = frame.loc['Needs']
    assert needs['Allocated'] == 0.0
    assert bool(needs['Over Budget'])
    assert needs['Progress %'] == 0.0
    assert math.isnan(needs['Over By %'])


def test_allocation_donut() -> None:
    fig = create_allocation_donut(_summary())
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert list(fig.data[0].values) == [50, 30, 20]


def test_allocated_vs_spent_chart_marks_overspend() -> None:
    fig = create_allocated_vs_spent_chart(_summary())
    assert [trace.name for trace in fig.data] == ['Allocated', 'Spent']
    colors = list(fig.data[1].marker.color)
    assert colors[0] == '#d32f2f'
    assert colors[1] != '#d32f2f'


def test_empty_summary_charts() -> None:
    empty = _summary().iloc[0:0]
    assert create_allocation_donut(empty).layout.title.text == "No data to display"
    assert create_allocated_vs_spent_chart(empty).layout.title.text == "No data to display"
