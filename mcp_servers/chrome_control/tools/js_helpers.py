"""Shared in-page JavaScript helpers.

Every snippet is a set of ``const`` declarations meant to be pasted at the top
of an IIFE, so they never leak into the page's global scope.
"""

from __future__ import annotations

import json

QUERY_JS = r"""
const __ccQueryAll = (selector) => {
  try {
    return Array.from(document.querySelectorAll(selector));
  } catch (e) {
    // SyntaxError: not a valid CSS selector.
    return null;
  }
};
const __ccQuery = (selector) => {
  const nodes = __ccQueryAll(selector);
  return nodes && nodes.length ? nodes[0] : null;
};
"""

VISIBILITY_JS = r"""
const __ccIsVisible = (el) => {
  try {
    if (!el || !el.getBoundingClientRect) return false;
    const r = el.getBoundingClientRect();
    if (r.width <= 0 || r.height <= 0) return false;
    const style = window.getComputedStyle(el);
    if (style.display === 'none' || style.visibility === 'hidden') return false;
    if (Number(style.opacity || '1') === 0) return false;
    return true;
  } catch (e) {
    return false;
  }
};
const __ccSnapshot = (el) => {
  if (!el) return { exists: false, visible: false };
  const r = el.getBoundingClientRect();
  const style = window.getComputedStyle(el);
  return {
    exists: true,
    visible: __ccIsVisible(el),
    bounds: { x: r.x, y: r.y, width: r.width, height: r.height, top: r.top, left: r.left },
    styles: { display: style.display, visibility: style.visibility, opacity: style.opacity },
  };
};
"""

BEST_SELECTOR_JS = r"""
const __ccEscape = (value) => {
  try {
    if (globalThis.CSS && typeof globalThis.CSS.escape === 'function') return globalThis.CSS.escape(String(value));
  } catch (e) {
    // ignore
  }
  return String(value).replace(/[^a-zA-Z0-9_-]/g, (c) => `\\${c}`);
};
const __ccBestSelector = (el) => {
  const tag = String(el.tagName || '').toLowerCase();
  if (el.id) return '#' + __ccEscape(el.id);
  const name = el.getAttribute ? el.getAttribute('name') : null;
  if (name) return tag + '[name="' + String(name).replace(/["\\]/g, '\\$&') + '"]';
  const cls = typeof el.className === 'string' ? el.className.trim().split(/\s+/)[0] : '';
  if (cls) return tag + '.' + __ccEscape(cls);
  return tag;
};
"""

ALL_HELPERS_JS = QUERY_JS + VISIBILITY_JS + BEST_SELECTOR_JS


def iife(body: str, **params: object) -> str:
    """Wrap ``body`` in an IIFE with all helpers and JSON-encoded constants."""
    consts = "\n".join(f"const {name} = {json.dumps(value)};" for name, value in params.items())
    return f"(() => {{\n{ALL_HELPERS_JS}\n{consts}\n{body}\n}})()"


def async_iife(body: str, **params: object) -> str:
    """Like iife() but ``body`` may use await; the caller must await the promise."""
    consts = "\n".join(f"const {name} = {json.dumps(value)};" for name, value in params.items())
    return f"(async () => {{\n{ALL_HELPERS_JS}\n{consts}\n{body}\n}})()"
