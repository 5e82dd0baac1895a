"""Exception hierarchy for the combat simulator."""


class EclipseCombatError(Exception):
    """Base exception for the eclipse_combat package."""


class ConfigurationError(EclipseCombatError):
    """Raised when fleets, ships or simulation settings are unusable
    (e.g., a gauntlet with fewer than two fleets)."""
