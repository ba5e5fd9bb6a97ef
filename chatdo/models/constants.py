"""Constants for chatdo.

This module centralizes the magic numbers and calendar anchors used by the engine.
"""


# Occurrence generation
DEFAULT_OCCURRENCE_COUNT = 5

# Seasonal anchors as (month, day), always in the reference year
SUMMER_START = (6, 1)
SPRING_START = (3, 20)

# Text used when an occurrence is moved
DELAY_REASON_TEMPLATE = "Rescheduled from {original:%Y-%m-%d}"

# Heuristic extraction (no LLM available)
TODO_KEYWORDS = ("need to", "should", "have to", "want to", "remind me", "schedule")
MIN_TODO_MESSAGE_LENGTH = 10
DEFAULT_HEURISTIC_CATEGORY = "general"
