from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.auth.routes import router as auth_router
from app.api.health import router as health_router
from app.api.spotify.playlists import router as playlist_router
from app.core import configure_logging, log_error
from app.spotify import PlaylistError

configure_logging()

app = FastAPI(
    title="Spotify Playlist Lister API",
    version="0.1.0",
    description="Fetch the full track list of a Spotify playlist.",
)

# Browsers call /playlist cross-origin with an Authorization header
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# /playlist answers carry the CORS headers even without an Origin header
PLAYLIST_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": "Authorization, Content-Type",
}


@app.middleware("http")
async def playlist_cors_headers(request: Request, call_next):
    response = await call_next(request)
    if request.url.path.startswith("/playlist"):
        for name, value in PLAYLIST_CORS_HEADERS.items():
            response.headers.setdefault(name, value)
    return response


@app.exception_handler(PlaylistError)
async def playlist_error_handler(request: Request, exc: PlaylistError) -> JSONResponse:
    log_error(
        f"{request.method} {request.url.path} -> {exc.status_code} "
        f"{type(exc).__name__}: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(health_router, tags=["health"])
app.include_router(playlist_router, tags=["playlist"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
