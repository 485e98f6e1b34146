"""Top-level package for the Budget Calculator.

The primary modules are:

* ``allocator`` – the needs/wants/savings split and its rebalancing rules
* ``ledger`` – expense line items per category
* ``income`` – monthly income from paycheck amount and pay frequency
* ``storage`` – JSON persistence with per-record default fallback
* ``summary`` / ``visualization`` – tables and Plotly figures
* ``dashboard`` – the Streamlit page that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_calculator/Home.py
```
"""

from .allocator import Allocator, Category, LockVector, PercentVector  # noqa: F401

__all__ = ["Allocator", "Category", "LockVector", "PercentVector"]
