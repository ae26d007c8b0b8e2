"""FastAPI app, CORS, and route registration."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spotifyquery.api.routes import playback

__all__ = ["app"]

app = FastAPI(
    title="spotifyquery API",
    description="Local REST API exposing the Spotify desktop player state",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(playback.router, prefix="/api/playback", tags=["playback"])
