# API routers package

from app.routers.auth import router as auth_router
from app.routers.status import router as status_router
from app.routers.weather import router as weather_router

# Re-export for easy importing
auth = auth_router
status = status_router
weather = weather_router
