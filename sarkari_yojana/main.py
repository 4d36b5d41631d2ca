import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import YojanaError
from .routes import admin_router, eligibility_router, profile_router, schemes_router
from .routes.deps import to_http_exception
from .services.eligibility_service import EligibilityService
from .services.reasoning_service import ReasoningClient
from .services.store_service import LocalStore
from .utils.bookmarks import BookmarkList

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


def create_app(
    store: Optional[LocalStore] = None,
    reasoning_client: Optional[ReasoningClient] = None,
    bookmarks: Optional[BookmarkList] = None
) -> FastAPI:
    """Build the API; handles not given are created from settings at startup"""
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        app_store = store or LocalStore()
        await app_store.init()
        client = reasoning_client or ReasoningClient(app_store)
        app.state.store = app_store
        app.state.reasoning_client = client
        app.state.eligibility_service = EligibilityService(app_store, client)
        app.state.bookmarks = bookmarks or BookmarkList(settings.bookmarks_path)
        logger.info("Local store initialized")
        yield
        # Shutdown
        await client.close()
        app_store.close()
        logger.info("Local store closed")
    
    app = FastAPI(
        title=settings.app_name,
        description="Welfare scheme eligibility backed by a local scheme catalog and cached AI analysis",
        version=settings.app_version,
        lifespan=lifespan
    )
    
    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(schemes_router)
    app.include_router(eligibility_router)
    app.include_router(profile_router)
    app.include_router(admin_router)
    
    @app.exception_handler(YojanaError)
    async def yojana_error_handler(request: Request, exc: YojanaError):
        """Errors not handled by a route, e.g. the store going away mid-request"""
        logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc}")
        error = to_http_exception(exc)
        return JSONResponse(status_code=error.status_code, content={"detail": error.detail})
    
    @app.get("/")
    async def root():
        return {"message": f"{settings.app_name} is running", "version": settings.app_version}
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "sarkari-yojana"}
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("sarkari_yojana.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
