import pytest
from fastapi.testclient import TestClient

from saferoute.core.dependencies import get_session_store, get_zone_registry
from saferoute.main import app
from saferoute.schemas.route import Coordinate
from saferoute.services.navigation_session import SessionStore
from saferoute.services.risk_zones import RiskZoneRegistry

# One degree of latitude on the Haversine sphere used by saferoute.services.geo
METERS_PER_DEG_LAT = 111_194.93


class FakeSpeech:
    """Records what would have been spoken."""

    def __init__(self):
        self.spoken = []
        self.cancels = 0
        self._speaking = False

    @property
    def is_speaking(self):
        return self._speaking

    def speak(self, text):
        self.spoken.append(text)
        self._speaking = True

    def cancel(self):
        self.cancels += 1
        self._speaking = False


class FakeHaptics:
    def __init__(self):
        self.patterns = []

    def vibrate(self, pattern):
        self.patterns.append(list(pattern))


def north_of(point: Coordinate, meters: float) -> Coordinate:
    return Coordinate(lat=point.lat + meters / METERS_PER_DEG_LAT, lng=point.lng)


@pytest.fixture
def origin():
    return Coordinate(lat=40.0, lng=-73.0)


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def haptics():
    return FakeHaptics()


@pytest.fixture
def registry():
    return RiskZoneRegistry()


@pytest.fixture
def client(registry):
    store = SessionStore()
    app.dependency_overrides[get_zone_registry] = lambda: registry
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
