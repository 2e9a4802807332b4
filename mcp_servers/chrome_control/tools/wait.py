"""
Visibility wait engine.

One awaited in-page promise per wait: check immediately, then re-check on
every DOM mutation (plus a coarse interval for CSS transitions, which do not
mutate the DOM) until the node is visible or the deadline passes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import ElementNotFound, InvalidSelector
from .js_helpers import async_iife
from .types import ElementSnapshot

if TYPE_CHECKING:
    from ..browser_session import BrowserSession

logger = logging.getLogger("mcp.chrome_control.wait")

# Extra seconds on top of the in-page deadline for the CDP round-trip.
WAIT_SLACK_S = 2.0
RECHECK_INTERVAL_MS = 100

_WAIT_JS = """
if (__ccQueryAll(SELECTOR) === null) return { invalid: true, exists: false, visible: false };
const read = () => __ccSnapshot(__ccQuery(SELECTOR));
const initial = read();
if (initial.visible || TIMEOUT_MS <= 0) return initial;

return await new Promise((resolve) => {
  let done = false;
  let observer = null;
  let interval = null;
  let deadline = null;
  const finish = (snapshot) => {
    if (done) return;
    done = true;
    if (observer) observer.disconnect();
    if (interval) clearInterval(interval);
    if (deadline) clearTimeout(deadline);
    resolve(snapshot);
  };
  const check = () => {
    const snapshot = read();
    if (snapshot.visible) finish(snapshot);
  };
  observer = new MutationObserver(check);
  observer.observe(document.documentElement || document, {
    childList: true,
    subtree: true,
    attributes: true,
    attributeFilter: ['style', 'class', 'hidden'],
  });
  interval = setInterval(check, RECHECK_MS);
  deadline = setTimeout(() => finish(read()), TIMEOUT_MS);
});
"""


def await_state(session: BrowserSession, selector: str, timeout_ms: int) -> ElementSnapshot:
    """Run the in-page wait and return the final three-state snapshot."""
    timeout_ms = max(0, int(timeout_ms))
    raw = session.eval_js(
        async_iife(_WAIT_JS, SELECTOR=selector, TIMEOUT_MS=timeout_ms, RECHECK_MS=RECHECK_INTERVAL_MS),
        timeout=timeout_ms / 1000.0 + WAIT_SLACK_S,
    )
    if isinstance(raw, dict) and raw.get("invalid"):
        raise InvalidSelector(
            tool="wait",
            action="query",
            reason=f"Not a valid CSS selector: {selector}",
            suggestion="Fix the selector syntax",
            details={"selector": selector},
        )
    snapshot = ElementSnapshot.from_page(raw)
    logger.debug("wait selector=%r timeout_ms=%s state=%s", selector, timeout_ms, snapshot.state)
    return snapshot


def wait_for_visible(session: BrowserSession, selector: str, timeout_ms: int) -> ElementSnapshot:
    """Wait until ``selector`` matches a visible node.

    A node that exists but stays hidden is not an error: the returned snapshot
    has ``exists=True, visible=False`` and the caller decides.

    Raises:
        ElementNotFound: state "timeout" when nothing matched by the deadline.
        InvalidSelector: the selector does not parse.
    """
    snapshot = await_state(session, selector, timeout_ms)
    if snapshot.state == "not-found":
        raise ElementNotFound(
            tool="wait",
            action="wait_for_visible",
            reason=f"Element '{selector}' did not appear within {int(timeout_ms)}ms",
            suggestion="Increase timeout_ms or check that the page finished loading",
            details={"state": "timeout", "selector": selector, "timeout_ms": int(timeout_ms)},
        )
    return snapshot


def check_element(session: BrowserSession, selector: str, timeout_ms: int) -> ElementSnapshot:
    """Existence check: same engine, but "not-found" is a result, not an error."""
    return await_state(session, selector, timeout_ms)


__all__ = ["RECHECK_INTERVAL_MS", "WAIT_SLACK_S", "await_state", "check_element", "wait_for_visible"]
