"""
Hadith Reader: API Server
=========================

HTTP surface over the query layer and the per-user side stores.

Endpoints:
- GET    /api/collections[/{id}]
- GET    /api/hadiths[/{id}]        -> filter by collectionId, search, limit, offset
- GET    /api/search?q=&collection=
- GET    /api/daily-hadith
- GET    /api/bookmarks, POST /api/bookmarks, DELETE /api/bookmarks/{hadithId}
- GET    /api/preferences, PUT /api/preferences
- POST   /api/visitors/track
- GET    /api/stats

Usage:
    uvicorn backend.api.server:app --reload
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..contracts import DEFAULT_USER_ID
from ..engine import HadithReaderBackend, BackendConfig
from ..query import HadithFilter
from .mapper import (
    map_collection, map_hadith, map_bookmark, map_preferences, map_stats
)
from .schemas import BookmarkCreate, PreferencesUpdate, VisitorTrack


logger = logging.getLogger(__name__)

# Route-specific messages for request body validation failures.
VALIDATION_MESSAGES = {
    ("POST", "/api/bookmarks"): "Invalid bookmark data",
    ("PUT", "/api/preferences"): "Invalid preferences data",
    ("POST", "/api/visitors/track"): "Visitor ID is required",
}


# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(backend: Optional[HadithReaderBackend] = None) -> FastAPI:
    """
    Build the FastAPI app.

    With no `backend`, one is built from the environment during startup.
    Passing one in (tests, embedding) skips that step.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "backend", None) is None:
            config = BackendConfig.from_env()
            logger.info("Initializing backend, data dirs: %s", config.loader.data_dirs)
            app.state.backend = HadithReaderBackend(config)
        yield
        logger.info("Shutting down backend.")
        app.state.backend = None

    app = FastAPI(
        title="Hadith Reader API",
        version="0.1.0",
        description="Read-only browsing and search over bundled hadith collections",
        lifespan=lifespan
    )
    app.state.backend = backend

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    _register_routes(app)
    return app


def get_backend(request: Request) -> HadithReaderBackend:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise HTTPException(status_code=503, detail="Backend not initialized")
    return backend


# =============================================================================
# ERRORS
# =============================================================================

def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "message": VALIDATION_MESSAGES.get((request.method, request.url.path), "Invalid request"),
                "errors": jsonable_errors(exc)
            }
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


# =============================================================================
# ENDPOINTS
# =============================================================================

def _register_routes(app: FastAPI) -> None:

    @app.get("/health")
    async def health_check(backend: HadithReaderBackend = Depends(get_backend)):
        """System status."""
        return {
            "status": "online",
            "hadiths": backend.store.hadith_count,
            "collections": backend.store.collection_count,
        }

    # -------------------- Collections --------------------

    @app.get("/api/collections")
    async def list_collections(backend: HadithReaderBackend = Depends(get_backend)):
        return [map_collection(c) for c in backend.query.list_collections()]

    @app.get("/api/collections/{collection_id}")
    async def get_collection(collection_id: str, backend: HadithReaderBackend = Depends(get_backend)):
        collection = backend.query.get_collection(collection_id)
        if not collection:
            raise HTTPException(status_code=404, detail="Collection not found")
        return map_collection(collection)

    # -------------------- Hadiths --------------------

    @app.get("/api/hadiths")
    async def list_hadiths(
        collection_id: Optional[str] = Query(None, alias="collectionId"),
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        backend: HadithReaderBackend = Depends(get_backend)
    ):
        hadiths = backend.query.list_hadiths(HadithFilter(
            collection_id=collection_id,
            search=search,
            limit=limit,
            offset=offset
        ))
        return [map_hadith(h) for h in hadiths]

    @app.get("/api/hadiths/{hadith_id}")
    async def get_hadith(hadith_id: str, backend: HadithReaderBackend = Depends(get_backend)):
        hadith = backend.query.get_hadith(hadith_id)
        if not hadith:
            raise HTTPException(status_code=404, detail="Hadith not found")
        return map_hadith(hadith)

    @app.get("/api/search")
    async def search_hadiths(
        q: Optional[str] = None,
        collection: Optional[str] = None,
        backend: HadithReaderBackend = Depends(get_backend)
    ):
        if not q:
            raise HTTPException(status_code=400, detail="Search query is required")
        return [map_hadith(h) for h in backend.query.search_hadiths(q, collection)]

    @app.get("/api/daily-hadith")
    async def daily_hadith(backend: HadithReaderBackend = Depends(get_backend)):
        return map_hadith(backend.query.daily_hadith())

    # -------------------- Bookmarks --------------------

    @app.get("/api/bookmarks")
    async def list_bookmarks(backend: HadithReaderBackend = Depends(get_backend)):
        return [map_bookmark(b) for b in backend.bookmarks.list_for_user(DEFAULT_USER_ID)]

    @app.post("/api/bookmarks")
    async def create_bookmark(body: BookmarkCreate, backend: HadithReaderBackend = Depends(get_backend)):
        bookmark = backend.bookmarks.create(DEFAULT_USER_ID, body.hadith_id)
        return map_bookmark(bookmark)

    @app.delete("/api/bookmarks/{hadith_id}")
    async def delete_bookmark(hadith_id: str, backend: HadithReaderBackend = Depends(get_backend)):
        if not backend.bookmarks.delete(DEFAULT_USER_ID, hadith_id):
            raise HTTPException(status_code=404, detail="Bookmark not found")
        return {"success": True}

    # -------------------- Preferences --------------------

    @app.get("/api/preferences")
    async def get_preferences(backend: HadithReaderBackend = Depends(get_backend)):
        return map_preferences(backend.preferences.get(DEFAULT_USER_ID))

    @app.put("/api/preferences")
    async def update_preferences(body: PreferencesUpdate, backend: HadithReaderBackend = Depends(get_backend)):
        changes = body.model_dump(exclude_none=True)
        return map_preferences(backend.preferences.update(DEFAULT_USER_ID, **changes))

    # -------------------- Visitors & Stats --------------------

    @app.post("/api/visitors/track")
    def track_visitor(body: Optional[VisitorTrack] = None, backend: HadithReaderBackend = Depends(get_backend)):
        if body is None or not body.visitor_id:
            raise HTTPException(status_code=400, detail="Visitor ID is required")
        return {"count": backend.visitors.track(body.visitor_id)}

    @app.get("/api/stats")
    def get_stats(backend: HadithReaderBackend = Depends(get_backend)):
        return map_stats(backend.query.stats(backend.visitors.count))


app = create_app()
