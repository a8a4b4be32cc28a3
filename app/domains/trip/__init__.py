"""Trip domain module.

This module contains the trip-plan generation pipeline:
- Season resolution and the landmark/theme catalog
- AI and rule-based plan generators behind an orchestrator
- Storage of generated plans with expiring share links

Note: Use direct imports to avoid circular dependencies:

    from app.domains.trip.schemas import TripPreferences, TripPlan
    from app.domains.trip.seasons import resolve_season
    from app.domains.trip.services.orchestrator import TripPlanOrchestrator
    from app.domains.trip.services.trip_service import TripService
"""
