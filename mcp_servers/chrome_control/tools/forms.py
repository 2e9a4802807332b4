"""
Form inspector.

Read-only listing of a form's interactive descendants, with a suggested
selector per element so an agent can follow up with click/type calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..errors import InvalidSelector
from .js_helpers import iife

if TYPE_CHECKING:
    from ..browser_session import BrowserSession

FORM_FIELDS_SELECTOR = "input, button, textarea, select"
MAX_FORM_ELEMENTS = 200

_ANALYZE_JS = """
const nodes = __ccQueryAll(SELECTOR);
if (nodes === null) return { invalid: true };
const form = nodes[0];
if (!form) return null;
const text = (el) => String(el.innerText || el.textContent || '').replace(/\\s+/g, ' ').trim().slice(0, 200);
const all = Array.from(form.querySelectorAll(FIELDS));
const elements = all.slice(0, LIMIT).map((el) => ({
  tag: String(el.tagName || '').toLowerCase(),
  type: el.getAttribute('type') || (el.type ? String(el.type) : null),
  name: el.getAttribute('name'),
  id: el.id || null,
  class: typeof el.className === 'string' && el.className ? el.className : null,
  value: el.type === 'password' ? (el.value ? '***' : '') : (el.value == null ? null : String(el.value)),
  placeholder: el.getAttribute('placeholder'),
  text: text(el) || null,
  visible: __ccIsVisible(el),
  selector: __ccBestSelector(el),
}));
return {
  form: {
    id: form.id || null,
    class: typeof form.className === 'string' && form.className ? form.className : null,
    action: form.getAttribute('action'),
    method: (form.getAttribute('method') || 'get').toLowerCase(),
    selector: __ccBestSelector(form),
  },
  elements,
  total: all.length,
  truncated: all.length > elements.length,
};
"""


def analyze_form(session: BrowserSession, form_selector: str) -> dict[str, Any] | None:
    """Describe the form matched by ``form_selector``.

    Returns None when nothing matches; the caller decides whether that is an
    error. Password values are masked.
    """
    res = session.eval_js(iife(_ANALYZE_JS, SELECTOR=form_selector, FIELDS=FORM_FIELDS_SELECTOR, LIMIT=MAX_FORM_ELEMENTS))
    if res is None:
        return None
    if isinstance(res, dict) and res.get("invalid"):
        raise InvalidSelector(
            tool="analyze_form",
            action="query",
            reason=f"Not a valid CSS selector: {form_selector}",
            suggestion="Fix the selector syntax",
            details={"selector": form_selector},
        )
    if not isinstance(res, dict):
        return None
    elements = res.get("elements") if isinstance(res.get("elements"), list) else []
    return {
        "form": res.get("form") or {},
        "elements": elements,
        "count": len(elements),
        "total": int(res.get("total") or len(elements)),
        "truncated": bool(res.get("truncated")),
    }


__all__ = ["FORM_FIELDS_SELECTOR", "MAX_FORM_ELEMENTS", "analyze_form"]
