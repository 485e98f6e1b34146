"""Tests for the per-category expense ledger."""

from __future__ import annotations

from decimal import Decimal

from budget_calculator.allocator import Category
from budget_calculator.ledger import ExpenseItem, ExpenseLedger


def test_add_creates_blank_item_with_unique_id() -> None:
    ledger = ExpenseLedger()
    first = ledger.add(Category.NEEDS)
    second = ledger.add(Category.NEEDS)
    assert first.name == ''
    assert first.amount == Decimal(0)
    assert first.id != second.id
    assert ledger.entries('needs') == [first, second]


def test_rename_and_set_amount_edit_in_place() -> None:
    ledger = ExpenseLedger()
    item = ledger.add(Category.WANTS)
    ledger.rename(Category.WANTS, item.id, 'Dining out')
    ledger.set_amount(Category.WANTS, item.id, '$1,234.567')
    assert ledger.entries(Category.WANTS)[0].name == 'Dining out'
    assert ledger.total(Category.WANTS) == Decimal('1234.56')


def test_invalid_amounts_become_zero() -> None:
    ledger = ExpenseLedger()
    item = ledger.add(Category.SAVINGS, 'Emergency fund', 100)
    ledger.set_amount(Category.SAVINGS, item.id, -50)
    assert item.amount == Decimal(0)
    ledger.set_amount(Category.SAVINGS, item.id, float('nan'))
    assert item.amount == Decimal(0)


def test_remove_and_unknown_ids() -> None:
    ledger = ExpenseLedger()
    keep = ledger.add(Category.NEEDS, 'Rent', 1000)
    drop = ledger.add(Category.NEEDS, 'Gym', 40)
    assert ledger.remove(Category.NEEDS, drop.id) is True
    assert ledger.remove(Category.NEEDS, drop.id) is False
    # Edits against a missing id or the wrong category are ignored.
    ledger.rename(Category.WANTS, keep.id, 'Oops')
    ledger.set_amount(Category.NEEDS, 'missing', 5)
    assert ledger.entries(Category.NEEDS) == [keep]
    assert keep.name == 'Rent'


def test_totals_per_category() -> None:
    ledger = ExpenseLedger()
    ledger.add(Category.NEEDS, 'Rent', 1000)
    ledger.add(Category.NEEDS, 'Groceries', '250.25')
    ledger.add(Category.WANTS, 'Movies', 20)
    assert ledger.totals() == {
        Category.NEEDS: Decimal('1250.25'),
        Category.WANTS: Decimal('20'),
        Category.SAVINGS: Decimal(0),
    }


def test_to_dataframe() -> None:
    ledger = ExpenseLedger()
    ledger.add(Category.SAVINGS, 'IRA', 300)
    ledger.add(Category.NEEDS, 'Rent', 1000)
    frame = ledger.to_dataframe()
    assert list(frame.columns) == ['Category', 'Item', 'Amount']
    assert list(frame['Category']) == ['Needs', 'Savings / Debt']
    assert frame['Amount'].sum() == 1300.0
    assert ExpenseLedger().to_dataframe().empty


def test_from_dict_skips_malformed_entries() -> None:
    raw = {
        'needs': [
            {'id': 'a1', 'name': 'Rent', 'amount': 900},
            {'name': 'no id', 'amount': 5},
            'junk',
        ],
        'wants': 'not a list',
        'savings': [{'id': 'b2', 'name': None, 'amount': 'abc'}],
    }
    ledger = ExpenseLedger.from_dict(raw)
    assert [item.id for item in ledger.entries('needs')] == ['a1']
    assert ledger.entries('wants') == []
    assert ledger.entries('savings') == [ExpenseItem(id='b2', name='', amount=Decimal(0))]
    assert ExpenseLedger.from_dict('nope').totals()[Category.NEEDS] == Decimal(0)
