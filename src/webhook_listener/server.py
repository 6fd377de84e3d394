"""
aiohttp-backed listener factory.

Builds the HTTP endpoint that receives webhook requests and hands each
decoded payload to the registered consumer.
"""

import hmac
import inspect
from typing import Any, Dict, List, Mapping, Optional

import structlog
from aiohttp import BasicAuth, hdrs, web

from .config.settings import ListenerConfig
from .config.validation import is_port_number
from .errors import BindError
from .registry import Consumer

logger = structlog.get_logger(__name__)


def _json_response(
    status: int, message: str, headers: Optional[Dict[str, str]] = None
) -> web.Response:
    return web.json_response({"message": message}, status=status, headers=headers)


class ListenerServer:
    """Handle for a running listener, owned by the caller of ``start``."""

    def __init__(self, runner: web.AppRunner, site: web.TCPSite, host: str, port: int, endpoint: str):
        self._runner = runner
        self._site = site
        self.host = host
        self.port = port
        self.endpoint = endpoint

    @property
    def addresses(self) -> List[Any]:
        """Socket addresses the server is bound to."""
        return list(self._runner.addresses)

    @property
    def bound_port(self) -> int:
        """Actual bound port; differs from ``port`` when binding port 0."""
        addresses = self.addresses
        return addresses[0][1] if addresses else self.port

    async def stop(self) -> None:
        """Stop accepting requests and release the socket."""
        await self._runner.cleanup()
        logger.info("Webhook listener stopped", host=self.host, port=self.port)


class HttpListener:
    """
    HTTP endpoint serving a single webhook path.

    Only ``POST`` requests carrying a JSON body reach the consumer; the
    consumer is invoked exactly once per accepted request.
    """

    def __init__(self, config: Mapping[str, Any], consumer: Consumer):
        listener = dict(config.get("listener") or {})
        if is_port_number(listener.get("port")):
            listener["port"] = int(listener["port"])
        self.settings = ListenerConfig(**listener)
        self.consumer = consumer
        self.app = web.Application(client_max_size=self.settings.max_body_size)
        self.app.router.add_route("*", self.settings.endpoint, self.handle_request)

    async def listen(self, port: int) -> ListenerServer:
        """
        Bind the endpoint to ``port``.

        Raises:
            BindError: If the socket cannot be bound
        """
        runner = web.AppRunner(self.app)
        await runner.setup()

        site = web.TCPSite(runner, self.settings.host, int(port))
        try:
            await site.start()
        except OSError as e:
            await runner.cleanup()
            raise BindError(
                f"Failed to bind webhook listener on {self.settings.host}:{port}: {e}",
                details={"host": self.settings.host, "port": port, "errno": e.errno},
            ) from e

        return ListenerServer(runner, site, self.settings.host, int(port), self.settings.endpoint)

    async def handle_request(self, request: web.Request) -> web.Response:
        """Authenticate, decode and dispatch one webhook request."""
        if request.method != hdrs.METH_POST:
            return _json_response(405, "Method not allowed", headers={hdrs.ALLOW: hdrs.METH_POST})

        if self.settings.basic_auth is not None and not self._is_authorized(request):
            logger.warning("Rejected unauthorized webhook request", remote=request.remote)
            return _json_response(
                401, "Unauthorized", headers={hdrs.WWW_AUTHENTICATE: 'Basic realm="webhook"'}
            )

        try:
            payload = await request.json()
        except ValueError as e:
            logger.warning("Invalid JSON in webhook request", error=str(e))
            return _json_response(400, "Request body must be valid JSON")

        try:
            result = self.consumer(payload)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error("Webhook consumer failed", error=str(e), exc_info=True)
            return _json_response(500, "Webhook consumer failed")

        logger.debug("Webhook notification dispatched", path=request.path)
        return _json_response(200, "Webhook notification received")

    def _is_authorized(self, request: web.Request) -> bool:
        header = request.headers.get(hdrs.AUTHORIZATION)
        if not header:
            return False
        try:
            credentials = BasicAuth.decode(header)
        except ValueError:
            return False

        expected = self.settings.basic_auth
        user_ok = hmac.compare_digest(credentials.login.encode(), expected.user.encode())
        password_ok = hmac.compare_digest(credentials.password.encode(), expected.password.encode())
        return user_ok and password_ok


def create_listener(config: Mapping[str, Any], consumer: Consumer) -> HttpListener:
    """Default listener factory used by ``WebhookListener``."""
    return HttpListener(config, consumer)
