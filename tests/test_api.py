from saferoute.core.dependencies import get_zone_registry
from saferoute.main import app
from saferoute.schemas.route import Coordinate
from saferoute.services.risk_zones import RiskZoneRegistry
from saferoute.services.voice_guidance import ARRIVAL_TEXT, START_TEXT

ORIGIN = {"lat": 40.0, "lng": -73.0}
DESTINATION = {"lat": 40.01, "lng": -73.0}


def zone_payload(zone_id="z1", lat=40.005, lng=-73.0, level="high"):
    return {
        "id": zone_id,
        "center": {"lat": lat, "lng": lng},
        "radius": 100,
        "risk_level": level,
        "reason": "Reported assault",
    }


def fetch_routes(client, **extra):
    body = {"origin": ORIGIN, "destination": DESTINATION, "hour": 12, "seed": 3}
    body.update(extra)
    resp = client.post("/api/routes", json=body)
    assert resp.status_code == 200
    return resp.json()["routes"]


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "SafeRoute" in resp.json()["message"]


def test_routes_endpoint(client):
    routes = fetch_routes(client)
    assert [r["type"] for r in routes] == ["safest", "balanced", "fastest"]
    assert [r["safety_score"] for r in routes] == [98, 85, 90]
    assert routes[0]["coordinates"][0] == ORIGIN
    assert routes[2]["coordinates"][-1] == DESTINATION


def test_routes_are_scored_against_registered_zones(client):
    assert client.post("/api/risk-zones", json=zone_payload()).status_code == 201
    routes = fetch_routes(client)
    assert routes[2]["warnings"] == ["Reported assault"]
    assert routes[0]["warnings"] == []


def test_seeded_balanced_route_repeats(client):
    assert fetch_routes(client, seed=42)[1] == fetch_routes(client, seed=42)[1]


def test_routes_reject_bad_input(client):
    late = client.post("/api/routes", json={"origin": ORIGIN, "destination": DESTINATION, "hour": 24})
    assert late.status_code == 422
    missing = client.post("/api/routes", json={"origin": ORIGIN})
    assert missing.status_code == 422


def test_routes_for_same_origin_and_destination(client):
    resp = client.post("/api/routes", json={"origin": ORIGIN, "destination": ORIGIN, "hour": 12})
    assert resp.status_code == 200
    routes = resp.json()["routes"]
    assert [r["type"] for r in routes] == ["safest", "balanced", "fastest"]
    assert routes[2]["distance"] == 0
    assert routes[2]["duration"] == 0


def test_risk_zone_lifecycle(client):
    client.post("/api/risk-zones", json=zone_payload("a"))
    client.post("/api/risk-zones", json=zone_payload("b", level="medium"))

    duplicate = client.post("/api/risk-zones", json=zone_payload("a"))
    assert duplicate.status_code == 409

    replaced = client.put("/api/risk-zones/a", json=zone_payload("ignored", level="low"))
    assert replaced.status_code == 200
    assert replaced.json()["id"] == "a"
    assert replaced.json()["risk_level"] == "low"

    listed = client.get("/api/risk-zones").json()
    assert [z["id"] for z in listed] == ["a", "b"]

    assert client.put("/api/risk-zones/zzz", json=zone_payload()).status_code == 404


def test_incident_report_adds_zone_and_warns(client):
    location = {"lat": 40.7, "lng": -74.0}
    resp = client.post("/api/incidents", json={"type": "broken_light", "location": location})
    assert resp.status_code == 201
    zone = resp.json()["zone"]
    assert zone["risk_level"] == "medium"
    assert zone["radius"] == 50
    assert zone["reason"] == "Broken Streetlight"

    incidents = client.get("/api/incidents").json()
    assert [i["id"] for i in incidents] == [resp.json()["incident"]["id"]]

    warning = client.post("/api/proximity", json={"position": location, "hour": 12}).json()["warning"]
    assert warning["id"] == zone["id"]

    dismissed = client.post(
        "/api/proximity", json={"position": location, "hour": 12, "dismissed": [zone["id"]]}
    ).json()
    assert dismissed["warning"] is None


def test_locate_moves_default_zones(client):
    seeded = RiskZoneRegistry.seeded(Coordinate(lat=40.7484, lng=-73.9857))
    app.dependency_overrides[get_zone_registry] = lambda: seeded

    zones = client.post("/api/risk-zones/locate", json={"location": ORIGIN}).json()

    assert [z["id"] for z in zones] == ["1", "2", "3", "4"]
    assert abs(zones[0]["center"]["lat"] - 40.003) < 1e-9


def test_navigation_flow(client):
    fastest = fetch_routes(client)[2]

    started = client.post("/api/navigation", json={"route": fastest})
    assert started.status_code == 201
    session = started.json()
    assert session["state"] == "navigating"
    assert session["spoken"] == [START_TEXT]
    session_id = session["session_id"]

    moved = client.post(f"/api/navigation/{session_id}/position", json={"position": DESTINATION, "hour": 12})
    assert moved.status_code == 200
    assert moved.json()["state"] == "arrived"
    assert moved.json()["spoken"] == [ARRIVAL_TEXT]

    muted = client.post(f"/api/navigation/{session_id}/voice")
    assert muted.json()["voice_enabled"] is False

    assert client.get(f"/api/navigation/{session_id}").json()["state"] == "arrived"
    assert client.delete(f"/api/navigation/{session_id}").status_code == 204
    assert client.get(f"/api/navigation/{session_id}").status_code == 404


def test_navigation_warning_and_dismissal(client):
    client.post("/api/risk-zones", json=zone_payload())
    fastest = fetch_routes(client)[2]
    session_id = client.post("/api/navigation", json={"route": fastest}).json()["session_id"]

    near = {"position": {"lat": 40.005, "lng": -73.0}, "hour": 12}
    first = client.post(f"/api/navigation/{session_id}/position", json=near).json()
    assert first["warning"]["id"] == "z1"
    assert first["vibrate"] == [100, 50, 100]

    status = client.post(f"/api/navigation/{session_id}/dismiss").json()
    assert status["active_warning"] is None

    again = client.post(f"/api/navigation/{session_id}/position", json=near).json()
    assert again["warning"] is None
    assert again["vibrate"] == []


def test_unknown_session(client):
    assert client.post("/api/navigation/missing/position", json={"position": ORIGIN}).status_code == 404
    assert client.delete("/api/navigation/missing").status_code == 404
