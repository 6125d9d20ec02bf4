from __future__ import annotations

import asyncio
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_ERROR, EVENT_HELLO

from .config import BREAK_PATH, HEALTHZ_PATH, INDEX_PATH, ROOT_PATH, UIServerConfig
from .events import StickyEventStore, make_event
from .static_files import load_static_file

CommandSink = Callable[[dict[str, Any]], None]


class UIServer:
    """Threaded asyncio server for the static UI and websocket timer events.

    Commands received from views are handed to `command_sink` on the server
    thread; the sink must only enqueue them, never touch timer state.
    """

    def __init__(
        self,
        config: UIServerConfig,
        command_sink: Optional[CommandSink] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._command_sink = command_sink
        self._logger = logger or logging.getLogger("ui_server")
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._shutdown: Optional[asyncio.Event] = None
        self._started = threading.Event()
        self._startup_error: Optional[Exception] = None
        self._connected_clients: set[ServerConnection] = set()
        self._sticky = StickyEventStore()
        self._ui_root = Path(self._config.ui_root)
        self._index_html = self._config.index_file.read_bytes()
        self._break_html = self._config.break_file.read_bytes()

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

    @property
    def break_url(self) -> str:
        return self._config.break_url

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and self._startup_error is None

    def set_command_sink(self, command_sink: Optional[CommandSink]) -> None:
        self._command_sink = command_sink

    def start(self, timeout_seconds: float = 5.0) -> None:
        """Serve on a daemon thread; blocks until the socket is bound."""
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        self._startup_error = None
        self._started.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="ui-server")
        self._thread.start()

        if not self._started.wait(timeout_seconds):
            raise RuntimeError(f"UI server did not start within {timeout_seconds:.1f}s")
        if self._startup_error is not None:
            raise RuntimeError(f"UI server startup failed: {self._startup_error}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        thread, loop, shutdown = self._thread, self._loop, self._shutdown
        if thread is None:
            return
        if loop is not None and shutdown is not None:
            loop.call_soon_threadsafe(shutdown.set)

        thread.join(timeout=timeout_seconds)
        if thread.is_alive():
            self._logger.error("UI server thread did not stop within %.1fs", timeout_seconds)
        self._thread = None

    def publish(self, event_type: str, **payload: Any) -> None:
        """Remember sticky state and broadcast to connected views, if serving."""
        message = make_event(event_type, **payload)
        self._sticky.remember(event_type, message)

        loop = self._loop
        if loop is None or not self.is_running:
            return
        try:
            future = asyncio.run_coroutine_threadsafe(self._broadcast(message), loop)
        except RuntimeError:
            # Loop already closed.
            return
        future.add_done_callback(self._log_broadcast_failure)

    def _log_broadcast_failure(self, future) -> None:
        if not future.cancelled() and future.exception() is not None:
            self._logger.debug("Broadcast failed: %s", future.exception())

    def _run(self) -> None:
        try:
            asyncio.run(self._serve())
        except Exception as error:  # pragma: no cover - depends on host sockets
            self._startup_error = error
            self._logger.error("UI server failed: %s", error, exc_info=True)
        finally:
            self._loop = None
            self._shutdown = None
            self._started.set()

    async def _serve(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._shutdown = asyncio.Event()
        async with websockets.serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server running at %s (websocket: %s)",
                self._config.base_url,
                self._config.websocket_path,
            )
            self._started.set()
            await self._shutdown.wait()
            await self._close_clients()

    async def _handler(self, websocket: ServerConnection) -> None:
        request_path = (
            urlsplit(websocket.request.path).path
            if websocket.request is not None
            else ""
        )
        if request_path != self._config.websocket_path:
            await websocket.close(code=1008, reason="Invalid websocket path")
            return

        self._connected_clients.add(websocket)
        self._logger.info("Client connected: %s", websocket.remote_address)
        try:
            await websocket.send(
                make_event(EVENT_HELLO, message="UI websocket connected")
            )
            for message in self._sticky.snapshot():
                await websocket.send(message)
            async for message in websocket:
                reply = self.handle_client_message(message)
                if reply is not None:
                    await websocket.send(reply)
        except websockets.exceptions.ConnectionClosed:
            self._logger.info("Client disconnected: %s", websocket.remote_address)
        finally:
            self._connected_clients.discard(websocket)

    def handle_client_message(self, message: str | bytes) -> Optional[str]:
        """Parse a view frame and forward it; returns an error event on bad input."""
        self._logger.debug("Received from UI: %s", message)
        try:
            command = json.loads(message)
        except ValueError:
            self._logger.warning("Ignoring malformed UI message: %r", message)
            return make_event(EVENT_ERROR, message="Malformed command")

        if not isinstance(command, dict) or not isinstance(command.get("command"), str):
            self._logger.warning("Ignoring UI message without command: %r", message)
            return make_event(EVENT_ERROR, message="Missing command")

        if self._command_sink is None:
            self._logger.warning("No command sink; dropping %s", command["command"])
            return None

        self._command_sink(command)
        return None

    async def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        del connection  # Unused in static routing.
        path = urlsplit(request.path).path

        if path == self._config.websocket_path:
            return None

        if path in (ROOT_PATH, INDEX_PATH):
            return self._response(
                200,
                "OK",
                self._index_html,
                "text/html; charset=utf-8",
            )

        if path == BREAK_PATH:
            return self._response(
                200,
                "OK",
                self._break_html,
                "text/html; charset=utf-8",
            )

        if path == HEALTHZ_PATH:
            return self._response(
                200,
                "OK",
                b"ok\n",
                "text/plain; charset=utf-8",
            )

        asset = load_static_file(self._ui_root, path)
        if asset is not None:
            body, content_type = asset
            return self._response(200, "OK", body, content_type)

        return self._response(
            404,
            "Not Found",
            b"not found\n",
            "text/plain; charset=utf-8",
        )

    def _response(
        self,
        status_code: int,
        reason_phrase: str,
        body: bytes,
        content_type: str,
    ) -> Response:
        headers = Headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(len(body))
        headers["Cache-Control"] = "no-store"
        return Response(status_code, reason_phrase, headers, body)

    async def _close_clients(self) -> None:
        if not self._connected_clients:
            return

        tasks = [
            client.close(code=1001, reason="Server shutting down")
            for client in tuple(self._connected_clients)
        ]
        await asyncio.gather(*tasks, return_exceptions=True)
        self._connected_clients.clear()

    async def _broadcast(self, message: str) -> None:
        if not self._connected_clients:
            return

        clients = tuple(self._connected_clients)
        disconnected = []
        tasks = [client.send(message) for client in clients]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                disconnected.append(client)
                self._logger.warning("Failed to send message to client: %s", result)

        for client in disconnected:
            self._connected_clients.discard(client)
