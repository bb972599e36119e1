import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from livingbook.core.config import settings
from livingbook.core.exception_handlers import register_exception_handlers
from livingbook.db.session import init_models, dispose_engine
from livingbook.api.routers import (
    auth as auth_router,
    users as users_router,
    properties as properties_router,
    featured as featured_router,
    bookings as bookings_router,
)

logger = logging.getLogger("uvicorn.error")

# ---------------------------
# Startup / shutdown
# ---------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await init_models()
    except Exception:
        # no store, no server
        logger.exception("could not connect to the store, aborting start")
        raise
    logger.info("%s ready", settings.PROJECT_NAME)
    yield
    await dispose_engine()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# ---------------------------
# CORS (credentials on: the session lives in a cookie)
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# ---------------------------
# Routers
# ---------------------------
app.include_router(auth_router.router, tags=["auth"])
app.include_router(users_router.router, tags=["users"])
app.include_router(properties_router.router, tags=["properties"])
app.include_router(featured_router.router, tags=["featured"])
app.include_router(bookings_router.router, tags=["bookings"])

# ---------------------------
# Liveness / health check
# ---------------------------
@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Living Book server is running"


@app.get("/ping")
async def ping():
    return {"status": "ok"}

# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("livingbook.main:app", host=settings.HOST, port=settings.PORT, reload=True)
