"""Rendering of assertion message templates.

Templates use three placeholders:
- #{this}: the assertion subject
- #{act}: the reported actual value (defaults to the subject)
- #{exp}: the reported expected value
"""

from __future__ import annotations

from typing import Any

from expect_bn.config import get_config


def display(value: Any) -> str:
    """Render a value for a failure message.

    Strings are always shown in full. Other values are truncated per config.
    """
    text = repr(value)
    if isinstance(value, str):
        return text
    threshold = get_config().truncate_threshold
    if threshold and len(text) > threshold:
        return text[: max(threshold - 3, 1)] + "..."
    return text


def render(template: str, subject: Any, actual: Any, expected: Any) -> str:
    """Fill #{this}, #{act} and #{exp} placeholders."""
    return (
        template.replace("#{this}", display(subject))
        .replace("#{act}", display(actual))
        .replace("#{exp}", display(expected))
    )
