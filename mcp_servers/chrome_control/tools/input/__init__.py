"""
Input tools for element interaction.

Provides:
- Executors: click and type into a resolved selector (trusted -> simulated)
- DOM primitives: simulated click, focus, clear, native value set, commit
"""

from .actions import click_resolved, type_resolved
from .dom import (
    SIMULATED_CLICK_SEQUENCE,
    commit_value,
    focus_element,
    prepare_value,
    scroll_into_view,
    set_value_simulated,
    simulated_click,
)

__all__ = [
    # Executors
    "click_resolved",
    "type_resolved",
    # DOM
    "SIMULATED_CLICK_SEQUENCE",
    "commit_value",
    "focus_element",
    "prepare_value",
    "scroll_into_view",
    "set_value_simulated",
    "simulated_click",
]
