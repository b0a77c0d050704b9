"""
FastAPI entrypoint.

- create_app(): app factory; wires Settings -> GeminiClient -> AnalysisOrchestrator
  and mounts the static front end (if present) behind the API routes.
- run(): process bootstrap. Missing configuration is fatal and the process
  exits before listening.

Run with either:
    sldc-tools
    uvicorn --factory sldc_tools.app.main:create_app
"""

import os
import sys
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .analyzer import AnalysisOrchestrator
from .config import ConfigError, Settings, load_settings
from .llm_client import CompletionProvider, GeminiClient
from .routes import router

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[CompletionProvider] = None,
) -> FastAPI:
    if settings is None:
        settings = load_settings()
    if provider is None:
        provider = GeminiClient.from_settings(settings)

    app = FastAPI(title="SLDC Tools", description="Explain, test and security-review code snippets")
    app.state.settings = settings
    app.state.orchestrator = AnalysisOrchestrator(provider, timeout=settings.request_timeout)

    app.include_router(router)

    # Mounted last so /api/* routes take precedence
    if settings.static_dir and os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
        logger.info(f"Serving front end from {os.path.abspath(settings.static_dir)}")
    else:
        logger.warning(f"Static directory not found, front end disabled: {settings.static_dir}")

    return app


def run() -> None:
    # Fixed level until LOG_LEVEL has been validated by load_settings()
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"ERROR: {e}")
        logger.error("Please create a .env file with: GEMINI_API_KEY=your-actual-key-here")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level.upper())

    app = create_app(settings)
    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
