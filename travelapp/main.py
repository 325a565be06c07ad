import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import init_db
from .errors import register_exception_handlers
from .limiter import limiter
from .routers import auth, users, destinations, long_term_stays, reviews, bookings, amenities

# --- Logging configuration ---
_level = logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("travelapp.startup")
logger.info("Starting %s (ENVIRONMENT=%s, DEBUG=%s)", settings.APP_NAME, settings.ENVIRONMENT, settings.DEBUG)

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=(
        f"{settings.APP_NAME}: users, long-term stays, bookings, reviews, "
        "amenities and destinations for a travel rental marketplace."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def startup_event():
    logger.info("Running startup tasks...")
    init_db()
    logger.info("Startup tasks complete.")


app.state.limiter = limiter
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(destinations.router)
app.include_router(long_term_stays.router)
app.include_router(reviews.router)
app.include_router(bookings.router)
app.include_router(amenities.router)


@app.get("/")
@limiter.exempt
def root(request: Request):
    return {"message": "Travel App Backend is Running!"}


@app.get("/health")
@limiter.exempt
def health(request: Request):
    return {"status": "OK", "message": "Server is healthy"}


def run():
    import uvicorn

    logger.info("API Base URL: http://localhost:%s/api", settings.PORT)
    uvicorn.run("travelapp.main:app", host="0.0.0.0", port=settings.PORT, log_level=logging.getLevelName(_level).lower())
