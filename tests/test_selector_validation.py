from __future__ import annotations

import pytest

from mcp_servers.chrome_control.errors import InvalidSelector
from mcp_servers.chrome_control.tools.base import MAX_SELECTOR_LENGTH, truncate_text, validate_selector


@pytest.mark.parametrize("bad", ["", "   ", None, 42])
def test_empty_or_non_string_selectors_are_rejected(bad) -> None:  # noqa: ANN001
    with pytest.raises(InvalidSelector):
        validate_selector(bad)


@pytest.mark.parametrize("bad", ["javascript:void(0)", "<SCRIPT>x</script>", "a[onclick='eval(1)']"])
def test_script_bearing_selectors_are_rejected(bad: str) -> None:
    with pytest.raises(InvalidSelector) as exc:
        validate_selector(bad, tool="click_element")
    assert exc.value.tool == "click_element"
    assert exc.value.error_type == "InvalidSelector"


def test_length_limit() -> None:
    assert validate_selector("a" * MAX_SELECTOR_LENGTH)
    with pytest.raises(InvalidSelector):
        validate_selector("a" * (MAX_SELECTOR_LENGTH + 1))


def test_hints_pass_validation_unchanged() -> None:
    assert validate_selector("submit button") == "submit button"


def test_truncate_text() -> None:
    assert truncate_text("short") == "short"
    assert truncate_text("x" * 101) == "x" * 100 + "..."
    assert truncate_text(12345, 3) == "123..."
