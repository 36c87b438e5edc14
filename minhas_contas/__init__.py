"""Top-level package for Minhas Contas, a personal finance panel.

The primary modules are:

* ``models`` – transactions, savings goals and the panel snapshot
* ``ledger`` – add, edit and delete operations returning new snapshots
* ``analytics`` – totals, category aggregation and monthly history
* ``advisory`` – rule-based tips rendered as Markdown
* ``savings`` – quick savings suggestions
* ``storage`` – JSON persistence of the snapshot
* ``export`` – PDF summary report

To run the dashboard from the command line you can execute:

```bash
streamlit run minhas_contas/Home.py
```

or use ``run_dashboard.py`` at the project root.
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import ledger  # noqa: F401  # re-exported for convenience
from .models import PersonData, SavingsGoal, Transaction, TransactionType  # noqa: F401

__all__ = ["analytics", "ledger", "PersonData", "SavingsGoal", "Transaction", "TransactionType"]
