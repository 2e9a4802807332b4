"""
Element interaction tools organized by stage.

Each module provides focused functionality:
- base: Errors, selector validation, the per-call interaction scope
- types: Value types passed between stages
- js_helpers: Reusable in-page JavaScript helpers
- strategies: Ordered fallback runner shared by the stages
- selectors: Hint -> CSS selector resolution
- wait: Visibility wait and existence check
- coordinates: Clickable point for a node
- input: Trusted and simulated click/type
- forms: Form inspection
- elements: The element tools (click, type, exists, text, form)
- page: Navigation, history, content, script execution
"""

from .base import (
    ElementNotFound,
    EvaluationError,
    InteractionFailed,
    InvalidSelector,
    SmartToolError,
    TabNotFound,
    get_session,
    truncate_text,
    validate_selector,
    with_scope,
)
from .coordinates import locate
from .elements import analyze_form, click_element, element_exists, get_element_text, resolve_hint, type_text
from .page import execute_javascript, get_page_content, go_back, go_forward, navigate_to, reload_tab
from .selectors import DEFAULT_TABLES, PageProbe, SelectorTables, resolve_selector
from .strategies import Strategy, first_success
from .types import Coordinate, ElementSnapshot, InteractionResult, ResolvedSelector
from .wait import check_element, wait_for_visible

__all__ = [
    # Errors
    "ElementNotFound",
    "EvaluationError",
    "InteractionFailed",
    "InvalidSelector",
    "SmartToolError",
    "TabNotFound",
    # Scope
    "get_session",
    "with_scope",
    "validate_selector",
    "truncate_text",
    # Stages
    "DEFAULT_TABLES",
    "PageProbe",
    "SelectorTables",
    "resolve_selector",
    "check_element",
    "wait_for_visible",
    "locate",
    "Strategy",
    "first_success",
    # Types
    "Coordinate",
    "ElementSnapshot",
    "InteractionResult",
    "ResolvedSelector",
    # Element tools
    "analyze_form",
    "click_element",
    "element_exists",
    "get_element_text",
    "resolve_hint",
    "type_text",
    # Page tools
    "execute_javascript",
    "get_page_content",
    "go_back",
    "go_forward",
    "navigate_to",
    "reload_tab",
]
