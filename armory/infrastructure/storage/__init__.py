"""Storage adapters: SQLite for deployment, in-memory for tests and demos."""
