"""Enumerations for the power LED controller."""

from enum import Enum


class LedPresentation(str, Enum):
    """Mutually exclusive power LED presentations."""

    STANDBY = "standby"  # Host off or POST not started: only the BMC-booted group lit
    POST_ACTIVE = "post_active"  # POST start seen, end not yet: only the POST-active group lit
    POWERED_ON_COMPLETE = "powered_on_complete"  # POST end seen: only the fully-on group lit
