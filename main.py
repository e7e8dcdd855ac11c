"""
Toma Caminera - Main entry point.

Registration platform for the walking event: public pages, the access-code
registration wizard and the admin panel, served by aiohttp.
"""

import asyncio
import logging
import sys
from aiohttp import web
from dotenv import load_dotenv

load_dotenv()

from config.features import features
from config.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("app.log", encoding="utf-8"),
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

# Imported after logging so the Supabase client can report missing credentials
from adapters.web.loader import services
from adapters.web.app import create_app


async def main():
    """Main function - starts the web server and waits until stopped."""

    # Log feature status
    logger.info(f"=== {settings.event_name} Starting ===")
    logger.info("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.info(f"  {key}: {value}")
    if not settings.admin_token:
        logger.warning("ADMIN_TOKEN is not set: the admin panel is disabled")

    app = create_app(services, settings, features)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)
    await site.start()
    logger.info(f"Web server running on {settings.host}:{settings.port} (admin: /admin?token=...)")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
        logger.info("Web server stopped.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
    except SystemExit as e:
        sys.exit(e.code)
