"""
Selector resolution: hint -> CSS selector.

A hint is either a CSS selector or a short description ("submit button",
"email field"). Resolution cascades from the most trustworthy source to the
least, stopping at the first hit:

1. exact          the hint itself, when it looks like CSS and matches a node;
                  a well-formed selector that matches nothing stops here
2. text-match     element text / placeholder / aria-label containing the hint
                  (only when the hint names no known category)
3. pattern-match  the category's priority list of selectors, first one with a
                  visible match wins

Author-written selectors and explicit semantic attributes outrank text
heuristics, and generic tag patterns sit at the bottom of each list to avoid
false positives.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..errors import ElementNotFound
from .js_helpers import iife
from .strategies import Strategy, first_success
from .types import ElementType, ResolvedSelector

if TYPE_CHECKING:
    from ..browser_session import BrowserSession

logger = logging.getLogger("mcp.chrome_control.selectors")

_SELECTOR_MARKERS = (".", "#", "[", ":", ">", "+", "~")
_BARE_TAG_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")


def is_selector_like(hint: str) -> bool:
    """Syntactic check only: does the hint contain CSS punctuation or a combinator?"""
    return any(marker in hint for marker in _SELECTOR_MARKERS)


@dataclass(slots=True, frozen=True)
class SelectorPattern:
    selector: str
    kind: ElementType


def _clickable(*selectors: str) -> tuple[SelectorPattern, ...]:
    return tuple(SelectorPattern(s, "clickable") for s in selectors)


def _input(*selectors: str) -> tuple[SelectorPattern, ...]:
    return tuple(SelectorPattern(s, "input") for s in selectors)


@dataclass(slots=True, frozen=True)
class SelectorTables:
    """Keyword classification and per-category selector priority lists."""

    keywords: tuple[tuple[str, tuple[str, ...]], ...]
    patterns: Mapping[str, tuple[SelectorPattern, ...]]

    def classify(self, hint: str) -> str | None:
        lowered = hint.lower()
        for category, words in self.keywords:
            if any(word in lowered for word in words):
                return category
        return None

    def patterns_for(self, category: str, element_type: ElementType | None = None) -> list[str]:
        patterns = self.patterns.get(category, ())
        if element_type is None:
            return [p.selector for p in patterns]
        preferred = [p.selector for p in patterns if p.kind == element_type]
        rest = [p.selector for p in patterns if p.kind != element_type]
        return preferred + rest


DEFAULT_TABLES = SelectorTables(
    keywords=(
        ("submit", ("submit", "send", "confirm", "continue", "proceed")),
        ("search", ("search", "find", "query", "lookup")),
        ("login", ("login", "log in", "sign in", "signin", "email", "e-mail", "username", "user", "@")),
        ("password", ("password", "passwd", "pwd", "pass")),
        ("button", ("button", "btn", "click")),
        ("link", ("link", "href", "anchor")),
        ("input", ("input", "field", "textbox", "text box", "textarea", "type here")),
    ),
    patterns=MappingProxyType(
        {
            "submit": _clickable(
                'button[type="submit"]',
                'input[type="submit"]',
                'button.btn-primary',
                'button.submit',
                '[role="button"][aria-label*="submit" i]',
                'form button:not([type="button"]):not([type="reset"])',
                "form button",
            ),
            "search": _input(
                'input[type="search"]',
                'input[name="q"]',
                'input[name*="search" i]',
                'input[placeholder*="search" i]',
                'input[aria-label*="search" i]',
                '[role="search"] input',
            )
            + _clickable(
                'button[aria-label*="search" i]',
                'button[type="submit"][class*="search" i]',
                '[role="search"] button',
            ),
            "login": _input(
                'input[type="email"]',
                'input[autocomplete="username"]',
                'input[autocomplete="email"]',
                'input[name*="email" i]',
                'input[name*="login" i]',
                'input[name*="user" i]',
                'input[id*="email" i]',
                'input[id*="user" i]',
                'input[placeholder*="email" i]',
            )
            + _clickable(
                'button[name*="login" i]',
                'button[id*="login" i]',
                'a[href*="login" i]',
            ),
            "password": _input(
                'input[type="password"]',
                'input[autocomplete="current-password"]',
                'input[name*="pass" i]',
            ),
            "button": _clickable(
                "button.btn-primary",
                'button[type="button"]',
                "button:not([disabled])",
                'input[type="button"]',
                '[role="button"]',
                "button",
            ),
            "link": _clickable(
                'a[href]:not([href="#"]):not([href^="javascript"])',
                "a[href]",
                '[role="link"]',
            ),
            "input": _input(
                'input[type="text"]',
                'input:not([type="hidden"]):not([type="submit"]):not([type="button"]):not([type="checkbox"]):not([type="radio"])',
                "textarea",
                '[contenteditable="true"]',
            ),
        }
    ),
)


_COUNT_JS = """
const nodes = __ccQueryAll(SELECTOR);
if (nodes === null) return { valid: false, count: 0 };
return { valid: true, count: nodes.length };
"""

_FIRST_VISIBLE_JS = """
for (const selector of SELECTORS) {
  const nodes = __ccQueryAll(selector);
  if (nodes && nodes.some(__ccIsVisible)) return selector;
}
return null;
"""

_TEXT_MATCH_JS = r"""
const needle = String(HINT).replace(/\s+/g, ' ').trim().toLowerCase();
const norm = (s) => String(s || '').replace(/\s+/g, ' ').trim().toLowerCase();
const scans = {
  clickable: {
    selector: 'button, input[type="submit"], input[type="button"], input[type="reset"], a, [role="button"], [role="link"]',
    fields: (el) => [el.innerText || el.textContent, el.value],
  },
  input: {
    selector: 'input:not([type="hidden"]), textarea, select',
    fields: (el) => [el.getAttribute('placeholder'), el.getAttribute('aria-label'), el.getAttribute('title')],
  },
};
if (!needle) return null;
for (const kind of ORDER) {
  const scan = scans[kind];
  if (!scan) continue;
  let fallback = null;
  for (const el of document.querySelectorAll(scan.selector)) {
    const hit = scan.fields(el).some((v) => {
      const text = norm(v);
      return text && text.includes(needle);
    });
    if (!hit) continue;
    if (__ccIsVisible(el)) return __ccBestSelector(el);
    if (!fallback) fallback = el;
  }
  if (fallback) return __ccBestSelector(fallback);
}
return null;
"""


class PageProbe:
    """Read-only page queries the resolver needs. Tests substitute a fake."""

    def __init__(self, session: BrowserSession) -> None:
        self.session = session

    def count(self, selector: str) -> int | None:
        """Number of nodes matching ``selector``; None when it is not valid CSS."""
        res = self.session.eval_js(iife(_COUNT_JS, SELECTOR=selector))
        if not isinstance(res, dict) or not res.get("valid"):
            return None
        return int(res.get("count") or 0)

    def first_visible(self, selectors: Sequence[str]) -> str | None:
        """First selector (in the given order) that matches a visible node."""
        if not selectors:
            return None
        res = self.session.eval_js(iife(_FIRST_VISIBLE_JS, SELECTORS=list(selectors)))
        return res if isinstance(res, str) and res else None

    def find_by_text(self, hint: str, order: Sequence[ElementType]) -> str | None:
        res = self.session.eval_js(iife(_TEXT_MATCH_JS, HINT=hint, ORDER=list(order)))
        return res if isinstance(res, str) and res else None


def _text_match(probe: PageProbe, element_type: ElementType | None) -> Callable[[str], ResolvedSelector | None]:
    order: list[ElementType] = ["input", "clickable"] if element_type == "input" else ["clickable", "input"]

    def attempt(hint: str) -> ResolvedSelector | None:
        found = probe.find_by_text(hint, order)
        return ResolvedSelector(found, "text-match", hint) if found else None

    return attempt


def _pattern_match(
    probe: PageProbe, tables: SelectorTables, category: str, element_type: ElementType | None
) -> Callable[[str], ResolvedSelector | None]:
    def attempt(hint: str) -> ResolvedSelector | None:
        found = probe.first_visible(tables.patterns_for(category, element_type))
        return ResolvedSelector(found, "pattern-match", hint, category) if found else None

    return attempt


def _not_found(hint: str, category: str | None, *, literal: bool) -> ElementNotFound:
    return ElementNotFound(
        tool="selectors",
        action="resolve",
        reason=f"No element matches '{hint}'",
        suggestion="Use a CSS selector, or inspect the form to list available elements",
        details={"state": "not-found", "hint": hint, "category": category, "literal": literal},
    )


def resolve_selector(
    probe: PageProbe,
    hint: str,
    element_type: ElementType | None = None,
    *,
    tables: SelectorTables = DEFAULT_TABLES,
) -> ResolvedSelector:
    """Resolve ``hint`` to a selector that matches at least one node right now.

    A selector-like hint that is valid CSS is never replaced by a heuristic
    match: when it matches nothing, resolution fails with ``details["literal"]``
    set so the caller can keep the selector and wait for it. Hints that only
    look like CSS but do not parse ("Sign up now.") are treated as text.

    Raises:
        ElementNotFound: state "not-found" when every strategy came up empty.
    """
    if is_selector_like(hint):
        matched = probe.count(hint)
        if matched:
            logger.debug("resolved hint=%r via=exact", hint)
            return ResolvedSelector(hint, "exact", hint)
        if matched is not None:
            raise _not_found(hint, None, literal=True)

    category = tables.classify(hint)
    if category is None:
        strategies = [Strategy("text-match", _text_match(probe, element_type))]
    else:
        strategies = [Strategy("pattern-match", _pattern_match(probe, tables, category, element_type))]

    outcome = first_success(strategies, hint)
    if outcome is None:
        raise _not_found(hint, category, literal=bool(_BARE_TAG_RE.match(hint.strip())))
    resolved = outcome.value
    logger.debug("resolved hint=%r selector=%r via=%s", hint, resolved.selector, resolved.provenance)
    return resolved


__all__ = [
    "DEFAULT_TABLES",
    "PageProbe",
    "SelectorPattern",
    "SelectorTables",
    "is_selector_like",
    "resolve_selector",
]
