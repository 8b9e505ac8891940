import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from saferoute.routers import navigation, risk_zones, route
from saferoute.core.config import get_settings

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="SafeRoute Backend", version="1.0.0")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(route.router, prefix="/api", tags=["Routes"])
app.include_router(risk_zones.router, prefix="/api", tags=["Risk Zones"])
app.include_router(navigation.router, prefix="/api", tags=["Navigation"])

@app.get("/")
def read_root():
    return {"message": "Welcome to SafeRoute Backend API"}
