"""Car Dealer Application Package: REST backend for cars, dealers, orders and users.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
