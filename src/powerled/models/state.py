"""Boot/power state snapshot."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BootPowerState:
    """
    Snapshot of the boot/power flags.

    Attributes:
        host_power_on: Host is currently powered on
        boot_started: The POST start code was seen during this boot cycle
        boot_ended: The POST end code was seen during this boot cycle
    """

    host_power_on: bool = False
    boot_started: bool = False
    boot_ended: bool = False
