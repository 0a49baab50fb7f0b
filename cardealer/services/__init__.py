"""Services Layer: entity services, association maintenance and API record assembly.

Invariants:
    - One service instance per request, bound to that request's AsyncSession
    - Mutating service calls commit exactly once, at the end; any raise before
      that leaves the unit of work uncommitted (rolled back by the session owner)
    - Business rules live here and in core/, never in api/routes
"""
