"""Health probe resources."""

from cspwarden.api.health.resources import HealthResource

__all__ = ["HealthResource"]
