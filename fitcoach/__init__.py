"""Fitness-coaching API: trainers create and assign workouts, clients view them."""

__version__ = "1.0.0"
