from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import config
from backend.maps import load_default_map, map_registry
from backend.routers import datasets, maps, queries


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_default_map(map_registry)
    yield


app = FastAPI(
    title="StreetSampler API",
    description="Point datasets and spatial queries over street maps",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(maps.router)
app.include_router(datasets.router)
app.include_router(queries.router)


@app.get("/")
async def root():
    return {"status": "ok", "service": "StreetSampler API"}
