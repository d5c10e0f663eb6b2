"""WodTimer — interval training timer for CrossFit-style workouts."""

__version__ = "0.1.0"
