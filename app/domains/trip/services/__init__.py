"""
Tripplan Backend - Trip Services
Plan generation, orchestration and storage services
"""

from app.domains.trip.services.ai_generator import AIPlanGenerator
from app.domains.trip.services.orchestrator import (
    GenerationOutcome,
    TripPlanOrchestrator,
    generate_trip_plan,
)
from app.domains.trip.services.rule_based import generate_rule_based
from app.domains.trip.services.trip_service import TripService

__all__ = [
    "AIPlanGenerator",
    "GenerationOutcome",
    "TripPlanOrchestrator",
    "TripService",
    "generate_rule_based",
    "generate_trip_plan",
]
