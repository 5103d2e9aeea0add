"""Room domain services: registry, phases, evidence and voting, scoring.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics. Functions here validate first and mutate
second, raising ``verdict.errors.GameError`` subclasses on failure.
"""
