"""Feature modules: accounts, transfers, transactions, notifications, payees."""
