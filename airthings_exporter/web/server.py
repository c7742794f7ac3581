"""
aiohttp web server exposing the landing page and /metrics.
"""

from aiohttp import web

from ..const import APP_NAME, METRICS_PATH
from ..logging import get_logger
from ..metrics.exposition import MetricsExposition


logger = get_logger("web.server")

EXPOSITION_KEY = web.AppKey("exposition", MetricsExposition)

LANDING_PAGE = f"""<html>
<head><title>{APP_NAME}</title></head>
<body>
<h1>{APP_NAME}</h1>
<p><a href="{METRICS_PATH}">Metrics</a></p>
</body>
</html>
"""


async def handle_root(request: web.Request) -> web.Response:
    return web.Response(text=LANDING_PAGE, content_type="text/html")


async def handle_metrics(request: web.Request) -> web.Response:
    exposition = request.app[EXPOSITION_KEY]
    body, content_type = await exposition.render(request.headers.get("Accept"))

    # Includes version and charset parameters, so set the raw header
    return web.Response(body=body, headers={"Content-Type": content_type})


def create_web_app(exposition: MetricsExposition) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        exposition: Renders the metrics payload for each scrape

    Returns:
        Application with routes for / and the metrics path
    """
    app = web.Application()
    app[EXPOSITION_KEY] = exposition
    app.router.add_get("/", handle_root)
    app.router.add_get(METRICS_PATH, handle_metrics)
    return app


class MetricsServer:
    """Runs the web application on a TCP address."""

    def __init__(self, app: web.Application, host: str | None, port: int):
        """
        Initialize server.

        Args:
            app: Web application to serve
            host: Bind address (None for all interfaces)
            port: TCP port
        """
        self.app = app
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """
        Bind and start serving.

        Raises:
            OSError: If the address cannot be bound
        """
        runner = web.AppRunner(self.app)
        await runner.setup()

        site = web.TCPSite(runner, self.host, self.port)
        try:
            await site.start()
        except OSError:
            await runner.cleanup()
            raise

        self._runner = runner
        logger.info(f"Listening on {self.host or '*'}:{self.port}")

    async def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("HTTP server stopped")
