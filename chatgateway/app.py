"""The gateway's web application and its command-line entry point."""

from __future__ import annotations

import argparse

from aiohttp import web

from chatgateway.controller import ChatController
from chatgateway.logger import AsyncLogger

DEFAULT_PORT = 8080
GREETING = "Hello world from Http!"

CONTROLLER_KEY = web.AppKey("controller", ChatController)
LOGGER_KEY = web.AppKey("logger", AsyncLogger)


async def hello(request: web.Request) -> web.Response:
    """Answer any ``/api/`` GET with a fixed greeting."""
    return web.Response(text=GREETING)


def create_app(logger: AsyncLogger) -> web.Application:
    """Build the application with the chat routes and the greeting route."""
    app = web.Application()
    controller = ChatController()
    controller.register(app)
    app.router.add_get("/api/{tail:.*}", hello)
    app[CONTROLLER_KEY] = controller
    app[LOGGER_KEY] = logger
    return app


def main(argv: list[str] | None = None) -> int:
    """Run the gateway until it is stopped."""
    parser = argparse.ArgumentParser(prog="chatgateway", description="Run the chat gateway.")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    print("Starting ChatGateway server...", flush=True)
    with AsyncLogger() as logger:
        app = create_app(logger)
        try:
            web.run_app(
                app,
                host=args.host,
                port=args.port,
                print=lambda _banner: logger.write(f"Listening on port {args.port}\n"),
            )
        except OSError:
            logger.write(f"Failed to listen on port {args.port}\n")
            return 1
    return 0