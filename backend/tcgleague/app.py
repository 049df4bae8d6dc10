from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from tcgleague.config import config
from tcgleague.database import database
from tcgleague.routes import decks, events, news, players, users
from tcgleague.utils.alembic import alembic_run_migrations
from tcgleague.utils.logging import logger


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if config.auto_run_migrations:
        alembic_run_migrations()

    await database.connect()
    logger.info("Connected to database")
    yield
    await database.disconnect()


app = FastAPI(
    title="TCG League API",
    docs_url="/docs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

routers = {
    "Events": events.router,
    "Players": players.router,
    "Users": users.router,
    "Decks": decks.router,
    "News": news.router,
}

for tag, router in routers.items():
    app.include_router(router, tags=[tag])
