"""Known Acrolinx style guide names and their remote identifiers."""

from __future__ import annotations

from typing import Final

STYLE_GUIDE_IDS: Final[dict[str, str]] = {
    "ap": "01971e03-dd27-75ee-9044-b48e654848cf",
    "chicago": "01971e03-dd27-77d8-a6fa-5edb6a1f4ad2",
    "microsoft": "01971e03-dd27-779f-b3ec-b724a2cf809f",
    "proofpoint": "01971e03-dd27-7dfa-8d96-d48c8cf5e4fe",
}


def domain_resolve_style_guide_id(style_guide: str) -> str:
    """Resolve a style guide name to its remote id.

    Unknown values are returned unchanged so custom style guide ids work
    without a code change.

    Args:
        style_guide: Style guide name or custom id.

    Returns:
        str: Remote style guide id.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return STYLE_GUIDE_IDS.get(style_guide, style_guide)
