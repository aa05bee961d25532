import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from .config import settings
from .db import create_db_and_tables, engine
from .errors import ClassPetError
from .routers import auth, classrooms, pet_types, pets, points, public, shop, students
from .services.pets import decay_all_pets

log = logging.getLogger(__name__)


def decay_hunger_job() -> None:
    with Session(engine) as session:
        count = decay_all_pets(session, settings.HUNGER_DECAY_AMOUNT)
    log.info("Hunger decay applied to %s pets", count)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    scheduler = None
    if settings.HUNGER_DECAY_INTERVAL_MINUTES > 0:
        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            decay_hunger_job,
            "interval",
            minutes=settings.HUNGER_DECAY_INTERVAL_MINUTES,
            id="hunger-decay",
        )
        scheduler.start()
        log.info("Hunger decay every %s minutes", settings.HUNGER_DECAY_INTERVAL_MINUTES)
    try:
        yield
    finally:
        if scheduler:
            scheduler.shutdown()
        log.info("Stop server")


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ClassPetError)
    async def classpet_error_handler(request: Request, exc: ClassPetError):
        log.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message, **exc.extra})

    for module in (auth, classrooms, students, pet_types, pets, points, shop, public):
        app.include_router(module.router, prefix="/api")
    app.include_router(public.tv_router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"app": settings.APP_NAME, "version": settings.APP_VERSION}

    return app


app = create_app()
