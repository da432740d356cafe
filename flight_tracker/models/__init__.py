"""
SQLAlchemy models for the Flight Price Tracker.
Import all models here to ensure they are registered with SQLAlchemy.
"""

from flight_tracker.models.base import Base
from flight_tracker.models.flight import Flight
from flight_tracker.models.observation import Observation

__all__ = [
    "Base",
    "Flight",
    "Observation",
]
