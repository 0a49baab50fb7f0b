"""Database Layer: declarative Base and a standalone session factory.

Invariants:
    - Single async engine per process for the API (infrastructure/database.py)
    - All sessions are async (AsyncSession)
"""
