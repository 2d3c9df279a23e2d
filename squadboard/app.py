from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from squadboard.config import config, environment
from squadboard.database import database
from squadboard.routes import auth, listings, play_style_tags, profiles, result_notices, users
from squadboard.utils.alembic import alembic_run_migrations
from squadboard.utils.db_init import create_admin_user_if_configured
from squadboard.utils.logging import logger
from squadboard.utils.rate_limit import RateLimiter
from squadboard.utils.stat_source import HttpStatSource


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if config.auto_run_migrations:
        alembic_run_migrations()

    await database.connect()
    await create_admin_user_if_configured()

    app.state.stat_source = HttpStatSource(
        config.stat_source_base_url,
        api_key=config.stat_source_api_key,
        timeout_s=config.stat_source_timeout_s,
    )
    app.state.rate_limiter = RateLimiter(
        config.stat_source_rate_limit_max_requests,
        config.stat_source_rate_limit_window_s,
    )
    logger.info(f"Started squadboard in {environment.value} mode")

    yield

    await app.state.stat_source.aclose()
    await database.disconnect()


routers = {
    "Auth": auth.router,
    "Users": users.router,
    "Listings": listings.router,
    "Profiles": profiles.router,
    "Play style tags": play_style_tags.router,
    "Result notices": result_notices.router,
}

app = FastAPI(
    title="Squadboard API",
    docs_url="/docs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in config.cors_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for tag, router in routers.items():
    app.include_router(router, tags=[tag])
