"""
Main entry point for RODA.

Usage: ``roda [SHARE_URL]``. A share URL (``...?lista=Ana,Bruno``) takes
precedence over the stored list; ``RODA_ENTRANTS`` takes precedence over
both.
"""

from typing import List, Optional
import asyncio
import logging
import sys

from roda.animation.scheduler import FrameScheduler
from roda.audio.engine import get_audio_engine
from roda.audio.feedback import attach_feedback
from roda.config.settings import Settings, get_settings
from roda.core.events import EventBus
from roda.entrants import EntrantList
from roda.graphics.renderer import WheelRenderer, WheelStyle
from roda.storage import EntrantStore, parse_names
from roda.wheel.engine import SpinEngine


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def load_entrants(settings: Settings, store: EntrantStore, url: Optional[str] = None) -> EntrantList:
    """Initial list: RODA_ENTRANTS, else the share URL, else the state file."""
    if settings.entrants.strip():
        return EntrantList(parse_names(settings.entrants))
    return EntrantList(store.load(url))


async def run_window(settings: Settings, url: Optional[str] = None) -> None:
    """Build the components and run the window until it is closed."""
    from roda.simulator.window import SpinWindow, WindowConfig

    logger = logging.getLogger(__name__)

    event_bus = EventBus()
    scheduler = FrameScheduler()
    engine = SpinEngine(scheduler, event_bus=event_bus, settings=settings.spin)

    store = EntrantStore(settings.storage_path, settings.share_base_url)
    entrants = load_entrants(settings, store, url)
    logger.info(f"Starting with {len(entrants)} entrants")

    config = WindowConfig(
        width=settings.window_width,
        height=settings.window_height,
        title=settings.window_title,
        fullscreen=settings.fullscreen,
        fps=settings.fps,
    )
    renderer = WheelRenderer(settings=settings.wheel, style=WheelStyle(background=config.bg_color))

    audio = get_audio_engine(settings.audio)
    attach_feedback(event_bus, audio if audio.init() else None)

    window = SpinWindow(
        entrants=entrants,
        engine=engine,
        scheduler=scheduler,
        renderer=renderer,
        store=store,
        audio=audio,
        event_bus=event_bus,
        config=config,
    )
    try:
        await window.run()
    finally:
        audio.cleanup()


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("RODA starting...")

    args = sys.argv[1:] if argv is None else argv
    url = args[0] if args else None

    try:
        asyncio.run(run_window(settings, url))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("RODA stopped")


if __name__ == "__main__":
    main()
