"""
Root conftest.py for the eke-kubectl test suite.

Pytest plugin enforcing responsibility (TRA) and tier markers.
- Every test declares exactly one @tra anchor and exactly one @tier level
- Each tier carries a timeout, applied through pytest-timeout
- Violations fail collection; set MARKER_ENFORCE=warn to only print them

Usage:
    @pytest.mark.tier(1)
    @pytest.mark.tra("UseCase.VersionResolver")
    def test_something():
        ...

Configuration:
    MARKER_ENFORCE=warn          report violations without failing
    TIER_TIMEOUT_MULTIPLIER=2.0  stretch tier timeouts on slow machines
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


# ============================================================================
# Marker Configuration
# ============================================================================

VALID_TRA_PREFIXES = frozenset(
    [
        "Domain.Invariant.",
        "Domain.Policy.",
        "UseCase.",
        "Port.",
        "Adapter.",
        "Contract.",
    ]
)

# Tier timeout limits in seconds, 0 means no limit
TIER_TIMEOUTS: dict[int, float] = {
    0: 0.1,
    1: 2.0,
    2: 30.0,
    3: 300.0,
    4: 0,
}

TIER_NAMES: dict[int, str] = {
    0: "instant",
    1: "fast",
    2: "standard",
    3: "slow",
    4: "manual",
}

# nodeid to tier, filled at collection for the terminal summary
_COLLECTED_TIERS: dict[str, int | None] = {}


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Register TRA and tier markers."""
    config.addinivalue_line(
        "markers",
        "tra(anchor): responsibility this test protects. "
        "Must start with one of: Domain.Invariant, Domain.Policy, UseCase, Port, Adapter, Contract",
    )
    config.addinivalue_line(
        "markers",
        "tier(level): 0=instant, 1=fast, 2=standard (spawns processes), 3=slow, 4=manual. "
        "Sets the test timeout.",
    )


def _get_tier(item: Item) -> int | None:
    for marker in item.iter_markers(name="tier"):
        if marker.args:
            tier = marker.args[0]
            if isinstance(tier, int) and tier in TIER_TIMEOUTS:
                return tier
    return None


def _check_markers(item: Item) -> list[str]:
    errors = []
    test_id = item.nodeid

    tra_markers = list(item.iter_markers(name="tra"))
    if len(tra_markers) != 1:
        errors.append(f"{test_id}: expected exactly one @tra marker, found {len(tra_markers)}")
    else:
        anchor = tra_markers[0].args[0] if tra_markers[0].args else None
        if not isinstance(anchor, str) or not any(
            anchor.startswith(prefix) for prefix in VALID_TRA_PREFIXES
        ):
            valid = ", ".join(sorted(VALID_TRA_PREFIXES))
            errors.append(f"{test_id}: invalid TRA anchor {anchor!r}, must start with one of: {valid}")

    tier_markers = list(item.iter_markers(name="tier"))
    if len(tier_markers) != 1:
        errors.append(f"{test_id}: expected exactly one @tier marker, found {len(tier_markers)}")
    elif _get_tier(item) is None:
        errors.append(f"{test_id}: invalid tier value {tier_markers[0].args!r}")

    return errors


def _apply_tier_timeouts(items: list[Item]) -> None:
    multiplier = float(os.environ.get("TIER_TIMEOUT_MULTIPLIER", "1.0"))

    for item in items:
        tier = _get_tier(item)
        if tier is None or any(item.iter_markers(name="timeout")):
            continue

        timeout = TIER_TIMEOUTS[tier]
        if timeout > 0:
            item.add_marker(pytest.mark.timeout(timeout * multiplier))


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Enforce TRA and tier markers at collection time."""
    errors = [error for item in items for error in _check_markers(item)]

    if errors:
        if os.environ.get("MARKER_ENFORCE") == "warn":
            print("\nTRA/Tier marker warnings:")
            for error in errors:
                print(f"  {error}")
        else:
            pytest.fail(
                "TRA/Tier marker errors:\n" + "\n".join(f"  - {e}" for e in errors),
                pytrace=False,
            )

    _apply_tier_timeouts(items)
    _COLLECTED_TIERS.update((item.nodeid, _get_tier(item)) for item in items)


# ============================================================================
# Reporting
# ============================================================================


@pytest.hookimpl(trylast=True)
def pytest_report_header(config: Config) -> str:
    return f"TRA/Tier enforcement: {os.environ.get('MARKER_ENFORCE', 'strict')}"


def pytest_terminal_summary(terminalreporter: object, exitstatus: int, config: Config) -> None:
    """Print test counts per tier."""
    by_tier: dict[int, int] = {}
    stats = getattr(terminalreporter, "stats", {})
    for outcome in ("passed", "failed"):
        for report in stats.get(outcome, []):
            if getattr(report, "when", None) != "call":
                continue
            tier = _COLLECTED_TIERS.get(getattr(report, "nodeid", ""))
            if tier is not None:
                by_tier[tier] = by_tier.get(tier, 0) + 1

    if not by_tier:
        return

    write_sep = getattr(terminalreporter, "write_sep")
    write_line = getattr(terminalreporter, "write_line")
    write_sep("=", "Tier summary")
    for tier in sorted(by_tier):
        write_line(f"  tier({tier}) [{TIER_NAMES[tier]}]: {by_tier[tier]}")

