"""
Main entry point for GOCO.

Builds every component from one Settings instance and runs the loop.
GOCO_ENV=hardware binds the GPIO header; anything else runs without
physical I/O.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from goco.config.settings import Settings, get_settings
from goco.core.events import EventBus
from goco.core.state import StateMachine
from goco.engine.supervisor import EngineSupervisor
from goco.errors import UnsupportedPlatformError
from goco.hardware import create_io
from goco.library.volume import VolumeLocator
from goco.runner import Runner
from goco.session.controller import SessionController


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def build_controller(settings: Settings) -> SessionController:
    """Wire the session controller and its collaborators."""
    return SessionController(
        settings=settings,
        volume=VolumeLocator(settings),
        engine=EngineSupervisor.from_settings(settings),
        io=create_io(settings),
        event_bus=EventBus(),
        state_machine=StateMachine(),
    )


async def run(settings: Settings) -> None:
    controller = build_controller(settings)
    runner = Runner(settings, controller)
    await runner.run()


def main() -> None:
    """Main entry point."""
    load_dotenv()

    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    setup_logging(settings.debug)

    logger.info("Booting up goco ...")
    logger.info(f"Running in {settings.env} mode")

    try:
        asyncio.run(run(settings))
    except UnsupportedPlatformError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("GOCO stopped")


if __name__ == "__main__":
    main()
