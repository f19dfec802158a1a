import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blogmart.repos.items_store import ItemsStore
from blogmart.routers import images, items, posts
from blogmart.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.items_store = ItemsStore()
    logger.info(f"Serving posts from {settings.posts_root}")

    try:
        yield
    finally:
        app.state.items_store.clear()
        logger.info("Items store cleared")


app = FastAPI(
    title="Blogmart API",
    description="Markdown blog and marketplace items",
    lifespan=lifespan,
)

app.include_router(images.router)
app.include_router(posts.router)
app.include_router(items.router)


@app.get("/")
async def root():
    return {"message": "Blogmart API is running"}
