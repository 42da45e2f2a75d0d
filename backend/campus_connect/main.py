import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from campus_connect.core.config import Settings, settings as default_settings
from campus_connect.core.errors import register_error_handlers
from campus_connect.core.security import AuthProvider
from campus_connect.db.database import Base, make_engine, make_session_factory
from campus_connect.routers import auth, feed, tutor

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = make_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Base.metadata.create_all(bind=engine)
        logger.info("Campus Connect API started")
        yield
        engine.dispose()

    app = FastAPI(title="Campus Connect API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.SessionLocal = make_session_factory(engine)
    app.state.auth = AuthProvider(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(feed.router)
    app.include_router(tutor.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Campus Connect API is running!"

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        return "Health UP"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)
