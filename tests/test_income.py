"""Tests for income settings and currency text helpers."""

from __future__ import annotations

from decimal import Decimal

from budget_calculator.formatting import escape_dollar_for_markdown, format_currency, parse_currency
from budget_calculator.income import IncomeSettings, frequency_options, monthly_income


def test_monthly_income_by_frequency() -> None:
    assert monthly_income(500, 'weekly') == Decimal('1900.00')
    assert monthly_income(1000, 'biweekly') == Decimal('2000.00')
    assert monthly_income('3,250.10', 'monthly') == Decimal('3250.10')


def test_monthly_income_rounds_to_cents() -> None:
    assert monthly_income(Decimal('10.01'), 'weekly') == Decimal('38.04')


def test_monthly_income_bad_input() -> None:
    assert monthly_income(-100, 'monthly') == Decimal('0.00')
    assert monthly_income(float('inf'), 'monthly') == Decimal('0.00')
    # Unknown frequency falls back to weekly.
    assert monthly_income(100, 'fortnightly') == Decimal('380.00')


def test_frequency_options_order() -> None:
    assert frequency_options() == [
        ('weekly', 'Weekly'),
        ('biweekly', 'Bi-Weekly'),
        ('monthly', 'Monthly'),
    ]


def test_income_settings_from_dict() -> None:
    settings = IncomeSettings.from_dict({'pay_amount': 1200, 'frequency': 'MONTHLY'})
    assert settings.frequency == 'monthly'
    assert settings.monthly_income() == Decimal('1200.00')
    assert IncomeSettings.from_dict({'frequency': 42}) == IncomeSettings()
    assert IncomeSettings.from_dict(None) == IncomeSettings()
    assert IncomeSettings.from_dict([1]) == IncomeSettings()


def test_parse_currency() -> None:
    assert parse_currency('$1,234.56') == Decimal('1234.56')
    assert parse_currency('12.345') == Decimal('12.34')
    assert parse_currency('1.2.3') == Decimal('1.2')
    assert parse_currency('-45') == Decimal('45')
    assert parse_currency('') == Decimal(0)
    assert parse_currency('abc') == Decimal(0)
    assert parse_currency('.') == Decimal(0)
    assert parse_currency(None) == Decimal(0)


def test_format_currency() -> None:
    assert format_currency(1234.5) == '$1,234.50'
    assert format_currency(Decimal('0')) == '$0.00'
    assert format_currency(-12) == '$0.00'
    assert format_currency(float('nan')) == '$0.00'
    assert format_currency(99, include_sign=False) == '99.00'
    assert escape_dollar_for_markdown('Spent: $5.00') == 'Spent: \\$5.00'
