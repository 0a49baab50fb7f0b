"""Route Modules: one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Literal sub-paths (/bulk, /filter, /by-brand) are declared before /{id}
"""
