"""Stateful creature registry: mint, merge and metadata."""

from .registry import EventCallback, Registry, SeedSource, clock_seed

__all__ = [
    "Registry",
    "EventCallback",
    "SeedSource",
    "clock_seed",
]
