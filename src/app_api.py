# src/app_api.py
"""ASGI entry point: `uvicorn app_api:app` or `python src/app_api.py --port 8000`."""

from __future__ import annotations

import argparse
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

# Credentials and the mock flag may live in .env; load before settings are read.
load_dotenv()

from chemgpt_core import __version__
from chemgpt_core.brain.registry import model_registry
from chemgpt_core.config import Settings, get_settings
from chemgpt_core.logging_utils import LEVELS, log_event, setup_logging
from chemgpt_engines.ketcher.router import router as assistant_router

setup_logging()


def _split_origins(raw: str | None) -> list[str]:
    return sorted({origin.strip() for origin in (raw or "").split(",") if origin.strip()})


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings
    app.state.assistants = {}
    logger.info(
        log_event(
            "app.startup",
            version=__version__,
            models=len(model_registry.list_models()),
            default_model=model_registry.resolve_default(config.CHEMGPT_DEFAULT_MODEL),
            mock=config.CHEMGPT_USE_MOCK_AI,
        )
    )
    try:
        yield
    finally:
        sessions = len(app.state.assistants)
        app.state.assistants.clear()
        logger.info(log_event("app.shutdown", sessions=sessions))


def create_app(config: Settings | None = None) -> FastAPI:
    config = config or get_settings()
    application = FastAPI(
        title="ChemGPT Assistant",
        description="Chemistry assistant orchestration for structure editors",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings = config
    application.add_middleware(
        CORSMiddleware,
        allow_origins=_split_origins(config.CHEMGPT_FRONTEND_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )
    application.include_router(assistant_router, prefix="/api/assistant")

    @application.get("/api/health")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()


def main(argv: list[str] | None = None) -> None:
    import uvicorn

    cli = argparse.ArgumentParser(description="Serve the ChemGPT assistant API.")
    cli.add_argument("--host", default="127.0.0.1")
    cli.add_argument("--port", type=int, default=8000)
    cli.add_argument("--reload", action="store_true")
    cli.add_argument("--log-level", type=str.upper, choices=LEVELS, default=None)
    args = cli.parse_args(argv)

    level = setup_logging(levels={"app": args.log_level} if args.log_level else None)
    logger.info(log_event("server.run", host=args.host, port=args.port, reload=args.reload, level=level))
    uvicorn.run("app_api:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
