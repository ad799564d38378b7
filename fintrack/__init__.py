"""Personal finance tracker with Budgets and Transactions screens.

Modules:
- config: INI configuration and store path persistence
- db: key-value store connection helpers
- models: Budget / Transaction records
- repository: ledger store (load/save JSON lists by key)
- aggregator: per-category spent totals and chart series
- forms: form validation and submission
- ui, style, app: PyQt6 screens
"""
