"""
Main application orchestrator.

Handles:
- HTTP session, token source and API client lifetime
- Collector and metrics endpoint wiring
- Graceful shutdown
"""

import asyncio
import signal

import aiohttp

from .api.auth import ClientCredentialsTokenSource
from .api.client import AirthingsClient
from .collectors.airthings import AirthingsCollector
from .config.schema import Config
from .const import APP_NAME, APP_VERSION
from .logging import get_logger
from .metrics.exposition import MetricsExposition
from .web.server import MetricsServer, create_web_app


logger = get_logger("app")


class Application:
    """
    Main application class.

    Owns the shared aiohttp session and serves scrapes until a
    shutdown signal arrives.
    """

    def __init__(self, config: Config):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        self.config = config

        self.session: aiohttp.ClientSession | None = None
        self.collector: AirthingsCollector | None = None
        self.server: MetricsServer | None = None

        self._shutdown_event = asyncio.Event()

    def _create_collector(self, session: aiohttp.ClientSession) -> AirthingsCollector:
        """Create token source, API client and collector on a session."""
        auth = self.config.auth
        token_source = ClientCredentialsTokenSource(
            session,
            client_id=auth.client_id,
            client_secret=auth.client_secret,
            scopes=auth.scopes,
            token_url=auth.token_url,
            timeout=self.config.api.timeout,
        )
        client = AirthingsClient(
            session,
            base_url=self.config.api.base_url,
            timeout=self.config.api.timeout,
        )
        return AirthingsCollector(client, token_source)

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._signal_handler)

    def _signal_handler(self) -> None:
        """Handle shutdown signals."""
        logger.info("Received shutdown signal")
        self._shutdown_event.set()

    async def start(self) -> None:
        """
        Start serving.

        The HTTP session is closed again if any step fails.

        Raises:
            OSError: If the listen address cannot be bound
        """
        logger.info(f"Starting {APP_NAME} {APP_VERSION}")

        self.session = aiohttp.ClientSession()
        try:
            self.collector = self._create_collector(self.session)
            logger.debug(f"Exporting {len(self.collector.describe())} reading metrics")

            web_app = create_web_app(MetricsExposition(self.collector))
            self.server = MetricsServer(web_app, self.config.web.host, self.config.web.port)
            await self.server.start()
        except Exception:
            await self.session.close()
            self.session = None
            raise

        logger.info(f"{APP_NAME} started successfully")

    async def stop(self) -> None:
        """Stop the application."""
        logger.info(f"Stopping {APP_NAME}")

        if self.server is not None:
            await self.server.stop()

        if self.session is not None:
            await self.session.close()
            self.session = None

        logger.info(f"{APP_NAME} stopped")

    async def run(self) -> None:
        """Run the application until shutdown."""
        await self.start()
        self._setup_signal_handlers()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.stop()

    def request_shutdown(self) -> None:
        """Ask run() to return."""
        self._shutdown_event.set()


async def run_app(config: Config) -> None:
    """
    Run the exporter with a loaded configuration.

    Args:
        config: Validated configuration
    """
    logger.debug(f"API: {config.api.base_url}")
    logger.debug(f"Token URL: {config.auth.token_url} (scopes: {','.join(config.auth.scopes)})")

    app = Application(config)
    await app.run()
