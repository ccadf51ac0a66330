import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from relay_bundle.api.graphql.router import graphql_router
from relay_bundle.core.config import get_settings
from relay_bundle.db.base import create_tables

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

origins = [
    "http://localhost:3001",
    "http://127.0.0.1:3001",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graphql_router, prefix=settings.GRAPHQL_PATH, tags=["graphql"])

@app.get("/", tags=["Root"])
async def read_root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME} API", "graphql": settings.GRAPHQL_PATH}

# Optional: Add logic to run the server directly for development
if __name__ == "__main__":
    uvicorn.run("relay_bundle.server:app", host="0.0.0.0", port=8000, reload=True)
