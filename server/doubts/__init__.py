"""Doubt creation, listing and acceptance."""
from .service import (
    accept_doubt,
    can_accept,
    create_doubt,
    get_doubt,
    list_doubts,
    list_learner_doubts,
)

__all__ = [
    "accept_doubt",
    "can_accept",
    "create_doubt",
    "get_doubt",
    "list_doubts",
    "list_learner_doubts",
]
