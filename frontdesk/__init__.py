"""
Hotel front desk core.

Booking lifecycle, room availability and stay pricing over a SQL store,
exposed as a FastAPI service.
"""

__version__ = "1.0.0"
