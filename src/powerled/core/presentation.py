"""Mapping from boot/power flags to LED group assignments."""

from powerled.models import BootPowerState, LedPresentation, PowerLedConfig


def resolve_presentation(state: BootPowerState) -> LedPresentation:
    """
    Pick the LED presentation for a state snapshot.

    Rules are evaluated in order; the first match wins:

    1. Host off, or POST not started -> STANDBY
    2. Host on, POST started, not ended -> POST_ACTIVE
    3. Host on, POST started and ended -> POWERED_ON_COMPLETE
    """
    if not state.host_power_on or not state.boot_started:
        return LedPresentation.STANDBY
    if not state.boot_ended:
        return LedPresentation.POST_ACTIVE
    return LedPresentation.POWERED_ON_COMPLETE


def group_assignments(
    presentation: LedPresentation, config: PowerLedConfig
) -> list[tuple[str, bool]]:
    """
    Asserted state for every LED group under `presentation`.

    Always returns all three groups, exactly one of them asserted. Groups
    being turned off come first so two indicators are never lit together.
    """
    lit = {
        LedPresentation.STANDBY: 0,
        LedPresentation.POST_ACTIVE: 1,
        LedPresentation.POWERED_ON_COMPLETE: 2,
    }[presentation]

    assignments = [(group, index == lit) for index, group in enumerate(config.groups)]
    return sorted(assignments, key=lambda assignment: assignment[1])
