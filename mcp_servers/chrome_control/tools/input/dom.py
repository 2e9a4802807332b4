"""
DOM-side input primitives.

Programmatic events and value updates executed from page script. These are
the simulated-event path used when trusted CDP input is unavailable or fails,
plus the pieces both paths share (scrolling, focus, clearing, committing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...errors import InteractionFailed
from ..js_helpers import iife

if TYPE_CHECKING:
    from ...browser_session import BrowserSession

SIMULATED_CLICK_SEQUENCE = ("pointerover", "pointerdown", "mousedown", "mouseup", "click", "pointerup")

_SCROLL_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return false;
try {
  el.scrollIntoView({ block: 'center', inline: 'center', behavior: 'instant' });
} catch (e) {
  el.scrollIntoView();
}
return true;
"""

_CLICK_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return { ok: false, reason: 'element not found' };
try {
  el.scrollIntoView({ block: 'center', inline: 'center', behavior: 'instant' });
} catch (e) {
  // ignore
}
const r = el.getBoundingClientRect();
const init = {
  bubbles: true,
  cancelable: true,
  view: window,
  clientX: r.left + r.width / 2,
  clientY: r.top + r.height / 2,
  button: 0,
};
for (const type of SEQUENCE) {
  const ev = type.startsWith('pointer')
    ? new PointerEvent(type, { ...init, pointerId: 1, pointerType: 'mouse', isPrimary: true })
    : new MouseEvent(type, init);
  el.dispatchEvent(ev);
}
return { ok: true, tag: String(el.tagName || '').toLowerCase() };
"""

_FOCUS_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return false;
if (document.activeElement !== el && typeof el.focus === 'function') el.focus();
return document.activeElement === el;
"""

_NATIVE_SETTER_JS = """
const __ccSetValue = (el, value) => {
  const proto = el instanceof HTMLTextAreaElement
    ? HTMLTextAreaElement.prototype
    : el instanceof HTMLSelectElement
      ? HTMLSelectElement.prototype
      : HTMLInputElement.prototype;
  const desc = Object.getOwnPropertyDescriptor(proto, 'value');
  if (desc && desc.set) desc.set.call(el, value);
  else el.value = value;
};
const __ccIsEditableHost = (el) => !!el.isContentEditable && !('value' in el);
"""

_PREPARE_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return { ok: false, reason: 'element not found' };
if (CLEAR) {
  if (__ccIsEditableHost(el)) el.textContent = '';
  else __ccSetValue(el, '');
  el.dispatchEvent(new Event('input', { bubbles: true }));
} else if (__ccIsEditableHost(el)) {
  const range = document.createRange();
  range.selectNodeContents(el);
  range.collapse(false);
  const sel = window.getSelection();
  sel.removeAllRanges();
  sel.addRange(range);
} else {
  const end = String(el.value || '').length;
  try {
    el.setSelectionRange(end, end);
  } catch (e) {
    // email/number inputs have no selection API; insertion lands at the end anyway.
  }
}
return { ok: true };
"""

_SET_VALUE_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return { ok: false, reason: 'element not found' };
if (__ccIsEditableHost(el)) {
  el.textContent = String(el.textContent || '') + TEXT;
} else {
  __ccSetValue(el, String(el.value || '') + TEXT);
}
el.dispatchEvent(new InputEvent('input', { bubbles: true, data: TEXT, inputType: 'insertText' }));
el.dispatchEvent(new Event('change', { bubbles: true }));
const key = TEXT ? TEXT.slice(-1) : '';
el.dispatchEvent(new KeyboardEvent('keyup', { bubbles: true, key }));
return { ok: true };
"""

_COMMIT_JS = """
const el = __ccQuery(SELECTOR);
if (!el) return { ok: false, reason: 'element not found' };
el.dispatchEvent(new Event('change', { bubbles: true }));
el.dispatchEvent(new FocusEvent('blur', { bubbles: false }));
el.dispatchEvent(new FocusEvent('focusout', { bubbles: true }));
const value = __ccIsEditableHost(el) ? el.textContent : el.value;
return { ok: true, value: value == null ? '' : String(value) };
"""


def _run(session: BrowserSession, body: str, action: str, selector: str, **params: Any) -> dict[str, Any]:
    res = session.eval_js(iife(_NATIVE_SETTER_JS + body, SELECTOR=selector, **params))
    if not isinstance(res, dict) or not res.get("ok"):
        reason = res.get("reason") if isinstance(res, dict) else None
        raise InteractionFailed(
            tool="input",
            action=action,
            reason=str(reason or "DOM action did not complete"),
            suggestion="The element may have been removed; retry after the page settles",
            details={"selector": selector, "method": "simulated"},
        )
    return res


def scroll_into_view(session: BrowserSession, selector: str) -> bool:
    return bool(session.eval_js(iife(_SCROLL_JS, SELECTOR=selector)))


def simulated_click(session: BrowserSession, selector: str) -> dict[str, Any]:
    """Dispatch the bubbling pointer/mouse sequence on the node."""
    return _run(session, _CLICK_JS, "click", selector, SEQUENCE=list(SIMULATED_CLICK_SEQUENCE))


def focus_element(session: BrowserSession, selector: str) -> bool:
    return bool(session.eval_js(iife(_FOCUS_JS, SELECTOR=selector)))


def prepare_value(session: BrowserSession, selector: str, *, clear: bool) -> None:
    """Clear the current value, or park the caret at its end so typing appends."""
    _run(session, _PREPARE_JS, "prepare", selector, CLEAR=bool(clear))


def set_value_simulated(session: BrowserSession, selector: str, text: str) -> None:
    """Append ``text`` via the native value setter and fire input/change/keyup."""
    _run(session, _SET_VALUE_JS, "type", selector, TEXT=str(text))


def commit_value(session: BrowserSession, selector: str) -> str:
    """Fire change + blur so framework-bound state picks up the value. Returns the final value."""
    res = _run(session, _COMMIT_JS, "commit", selector)
    return str(res.get("value") or "")


__all__ = [
    "SIMULATED_CLICK_SEQUENCE",
    "commit_value",
    "focus_element",
    "prepare_value",
    "scroll_into_view",
    "set_value_simulated",
    "simulated_click",
]
