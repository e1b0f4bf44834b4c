"""
Board FC site - Main entry point.

Public club website (roster, fixtures, news, contact) plus the admin
dashboard, served by aiohttp on top of Supabase.
"""

import asyncio
import logging
import secrets
import signal
import sys
from aiohttp import web
from adapters.web.loader import site
from adapters.web.app import create_app
from config.settings import settings
from config.features import features

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("site.log", encoding="utf-8"),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if features.DEBUG_MODE:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Silence noisy HTTP debug logs
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)


async def main():
    """Main function - serves the site until interrupted."""

    # Log feature status
    logger.info("=== Board FC Site Starting ===")
    logger.info("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.info(f"  {key}: {value}")

    cookie_secret = settings.cookie_secret
    if not cookie_secret:
        cookie_secret = secrets.token_urlsafe(32)
        logger.warning("COOKIE_SECRET not set - sessions will not survive a restart")

    app = create_app(
        site,
        cookie_secret,
        contact_rate_limit=features.CONTACT_RATE_LIMIT,
        sign_in_rate_limit=features.SIGN_IN_RATE_LIMIT,
    )
    runner = web.AppRunner(app)
    await runner.setup()
    tcp_site = web.TCPSite(runner, settings.host, settings.port)
    await tcp_site.start()
    logger.info(f"Site running on http://{settings.host}:{settings.port}")

    # Idle session sweeper
    sweeper_task = asyncio.create_task(site.sessions.run())

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops
            pass

    try:
        await stop_event.wait()
    finally:
        await site.sessions.stop()
        sweeper_task.cancel()
        await runner.cleanup()
        logger.info("Site stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Site stopped by user (Ctrl+C)")
    except SystemExit as e:
        sys.exit(e.code)
