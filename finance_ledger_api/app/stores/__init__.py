"""
Persistence adapters.

Each store wraps one SQLite table and speaks in domain records from
``app.models``.  Services receive stores through their constructors,
so tests and alternative backends can pass their own implementations
of the abstract interfaces.
"""
