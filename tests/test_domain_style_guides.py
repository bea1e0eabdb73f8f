"""Tests for style guide name resolution."""

from __future__ import annotations

from acrolinx_mcp.domain import STYLE_GUIDE_IDS, domain_resolve_style_guide_id


def test_domain_resolve_style_guide_id_maps_known_names() -> None:
    """Map every known style guide name to its remote id."""

    assert domain_resolve_style_guide_id("microsoft") == "01971e03-dd27-779f-b3ec-b724a2cf809f"
    assert domain_resolve_style_guide_id("ap") == "01971e03-dd27-75ee-9044-b48e654848cf"
    assert set(STYLE_GUIDE_IDS) == {"ap", "chicago", "microsoft", "proofpoint"}


def test_domain_resolve_style_guide_id_passes_custom_ids_through() -> None:
    """Return unknown values unchanged so custom ids can be used."""

    assert domain_resolve_style_guide_id("custom-guide-uuid") == "custom-guide-uuid"
