from fastapi import APIRouter, Depends, HTTPException
from saferoute.core.dependencies import get_session_store, get_zone_registry
from saferoute.schemas.navigation import (
    NavigationStatus,
    PositionRequest,
    PositionUpdateResponse,
    StartNavigationRequest,
)
from saferoute.services.navigation_session import NavigationSession, SessionStore
from saferoute.services.risk_zones import RiskZoneRegistry

router = APIRouter()


def _get_session(session_id: str, store: SessionStore) -> NavigationSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Navigation session '{session_id}' not found.")
    return session


@router.post("/navigation", response_model=NavigationStatus, status_code=201)
def start_navigation(
    request: StartNavigationRequest,
    store: SessionStore = Depends(get_session_store),
):
    """
    Start guiding along the selected route.
    The response carries the opening announcement in 'spoken'.
    """
    session = store.create(request.route)
    spoken = session.start()
    return session.status().model_copy(update={"spoken": spoken})


@router.get("/navigation/{session_id}", response_model=NavigationStatus)
def navigation_status(session_id: str, store: SessionStore = Depends(get_session_store)):
    return _get_session(session_id, store).status()


@router.post("/navigation/{session_id}/position", response_model=PositionUpdateResponse)
def update_position(
    session_id: str,
    request: PositionRequest,
    store: SessionStore = Depends(get_session_store),
    registry: RiskZoneRegistry = Depends(get_zone_registry),
):
    """
    Feed one location sample.
    Duplicate samples are harmless: nothing is announced or vibrated twice.
    """
    session = _get_session(session_id, store)
    return session.update_position(request.position, registry.all(), hour=request.hour)


@router.post("/navigation/{session_id}/dismiss", response_model=NavigationStatus)
def dismiss_warning(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Silence the current risk warning for the rest of this session."""
    session = _get_session(session_id, store)
    session.dismiss_warning()
    return session.status()


@router.post("/navigation/{session_id}/voice", response_model=NavigationStatus)
def toggle_voice(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = _get_session(session_id, store)
    session.toggle_voice()
    return session.status()


@router.delete("/navigation/{session_id}", status_code=204)
def stop_navigation(session_id: str, store: SessionStore = Depends(get_session_store)):
    if not store.end(session_id):
        raise HTTPException(status_code=404, detail=f"Navigation session '{session_id}' not found.")
