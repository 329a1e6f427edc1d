from typing import Optional
import logging

from fastapi import FastAPI, Depends, Query
from fastapi.middleware.cors import CORSMiddleware

from diet.api.deps import get_current_user
from diet.domain.Profile import Profile
from diet.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from diet.api.api_ai import router as ai_router
from diet.api.routes import auth, goals, history

# Logging
logger = logging.getLogger("diet_app")

# Initialize FastAPI app
app = FastAPI(title="Diet Planner & Weight Tracker API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Include routers
app.include_router(ai_router)
app.include_router(auth.router)
app.include_router(goals.router)
app.include_router(history.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for activity events when the app starts."""
    start_event_observers()
    logger.info("Web observers for goal events started")


@app.get("/")
async def root():
    return {"message": "Diet Planner API is running"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# -------------------- API: Activity events (polling) --------------------
@app.get('/api/events')
def api_events(since: Optional[int] = Query(default=None), user: Profile = Depends(get_current_user)):
    """Return the caller's activity events newer than 'since'.

    Response JSON structure:
        {
          "events": [ { id, type, ts, user_id, goal_id, ... } ],
          "next_cursor": <int>
        }
    """
    return get_web_events(user.user_id, since)
