"""chatdo: turns chat-extracted tasks into dated, recurring schedules."""

__version__ = "0.1.0"
