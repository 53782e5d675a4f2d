"""Origin of an effective plan's limits."""

from enum import Enum


class PlanSource(str, Enum):
    """Where the limits of an EffectivePlan come from.

    BASE: the subscribed plan's own limits (or the default plan when the
        user has no current subscription).
    TRIAL_OVERRIDE: the trial plan's features with the reduced trial
        quantities (domains, SMS) applied on top.
    """

    BASE = "base"
    TRIAL_OVERRIDE = "trial_override"
