"""Browse airport schedules and flight workload from a bookings database."""

__version__ = "0.1.0"

__all__ = ["database", "timer", "statistic", "app"]