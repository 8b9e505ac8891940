from functools import lru_cache

from saferoute.core.config import get_settings
from saferoute.schemas.route import Coordinate
from saferoute.services.navigation_session import SessionStore
from saferoute.services.risk_zones import RiskZoneRegistry


@lru_cache()
def get_zone_registry() -> RiskZoneRegistry:
    settings = get_settings()
    if not settings.SEED_MOCK_ZONES:
        return RiskZoneRegistry()
    return RiskZoneRegistry.seeded(
        Coordinate(lat=settings.DEFAULT_CENTER_LAT, lng=settings.DEFAULT_CENTER_LNG)
    )


@lru_cache()
def get_session_store() -> SessionStore:
    return SessionStore()
