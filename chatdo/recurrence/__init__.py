"""Recurrence and scheduling engine for chatdo."""

from chatdo.recurrence.date_resolver import resolve_relative_date
from chatdo.recurrence.pattern_parser import parse_recurrence_pattern
from chatdo.recurrence.calculator import calculate_next_due_date
from chatdo.recurrence.instances import generate_occurrences
from chatdo.recurrence.reschedule import reschedule_occurrence

__all__ = [
    "resolve_relative_date",
    "parse_recurrence_pattern",
    "calculate_next_due_date",
    "generate_occurrences",
    "reschedule_occurrence",
]
