"""
CLI entry point — runs the mock market data server under uvicorn.

Command-line flags override the environment (PORT, HOST, DELIVERY_MODE, LOG_LEVEL):

    python -m market_pulse.infrastructure.entrypoints.server --port 3001 --mode push
"""

import argparse
import os
from typing import Optional, Sequence

import uvicorn
from dotenv import load_dotenv
from loguru import logger

from market_pulse.infrastructure.config.settings import DELIVERY_MODES, Settings
from market_pulse.infrastructure.entrypoints.fastapi_app import create_app
from market_pulse.infrastructure.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="market-pulse",
        description="Serve mock stock, index, currency, crypto and news data.",
    )
    parser.add_argument("--host", help="Listen address (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: $PORT or 3001)")
    parser.add_argument(
        "--mode",
        choices=DELIVERY_MODES,
        help="push: timers + WebSocket broadcast; pull: refresh on every request",
    )
    parser.add_argument("--log-level", help="Log level (default: $LOG_LEVEL or INFO)")
    return parser


def resolve_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """Apply CLI flags on top of the environment, then validate once."""
    args = build_parser().parse_args(argv)
    load_dotenv()
    env = dict(os.environ)
    overrides = {
        "HOST": args.host,
        "PORT": None if args.port is None else str(args.port),
        "DELIVERY_MODE": args.mode,
        "LOG_LEVEL": args.log_level,
    }
    env.update({name: value for name, value in overrides.items() if value is not None})
    return Settings.from_env(env)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = resolve_settings(argv)
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.service_name} on http://{settings.host}:{settings.port}")
    if settings.push:
        logger.info(f"WebSocket feed at ws://{settings.host}:{settings.port}/ws")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
