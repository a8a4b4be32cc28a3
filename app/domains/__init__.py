"""Domain modules - Business logic organized by bounded contexts.

Note: Domain modules are imported lazily to avoid circular imports.
Import them directly where needed:

    from app.domains.trip.models import TripPlanRecord
    from app.domains.trip.repository import TripPlanRepository
    from app.domains.trip.schemas import TripPlan, TripPreferences
"""
