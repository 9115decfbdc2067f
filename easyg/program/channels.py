"""Per-step effective channel enablement."""

from __future__ import annotations

from easyg.program.models import Channels, OrderChoice

# 0-based step index at which the sequenced orders switch to both channels.
ORDER_SWITCH_STEP = 40

_EARLY_CHANNELS: dict[OrderChoice, Channels] = {
    OrderChoice.internal_then_external: (True, False),
    OrderChoice.external_then_internal: (False, True),
    OrderChoice.combined_from_start: (True, True),
}


def resolve_channels(step_index: int, base: Channels, order: OrderChoice | None) -> Channels:
    """Effective (internal, external) enablement for a 0-based step index.

    The order choice only applies when both channels are enabled; otherwise
    `base` holds for every step.
    """
    if base != (True, True) or order is None:
        return base
    if step_index < ORDER_SWITCH_STEP:
        return _EARLY_CHANNELS[order]
    return True, True
