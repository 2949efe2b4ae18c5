# labelbot/main.py
"""Main entry point for the label bot webhook server."""
import asyncio
import json
import logging
import signal
import sys

from aiohttp import web
from dotenv import load_dotenv

from labelbot.config import Config
from labelbot.models.policy import ConfigError
from labelbot.robot import Robot
from labelbot.services.config_store import ConfigStore
from labelbot.services.github_client import GitHubClient
from labelbot.webhook import parse_event, verify_signature

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

ROBOT_KEY = web.AppKey("robot", Robot)
STORE_KEY = web.AppKey("config_store", ConfigStore)
SECRET_KEY = web.AppKey("webhook_secret", str)


def _log_failure(future: "asyncio.Future[None]") -> None:
    if not future.cancelled() and future.exception() is not None:
        logger.error(f"Event processing failed: {future.exception()}")


async def webhook_handler(request: web.Request) -> web.Response:
    """Accept a GitHub delivery and process it on a worker thread."""
    body = await request.read()

    secret = request.app[SECRET_KEY]
    if secret and not verify_signature(secret, body, request.headers.get("X-Hub-Signature-256")):
        logger.warning("Rejected webhook with invalid signature")
        return web.json_response({"error": "invalid signature"}, status=401)

    try:
        payload = json.loads(body)
    except ValueError:
        return web.json_response({"error": "invalid JSON"}, status=400)

    event_name = request.headers.get("X-GitHub-Event", "")
    event = parse_event(event_name, payload)
    if event is None:
        return web.Response(status=204)

    # Snapshot taken now; a reload while the event runs does not affect it
    config = request.app[STORE_KEY].current
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(None, request.app[ROBOT_KEY].dispatch, event, config)
    future.add_done_callback(_log_failure)
    return web.json_response({"status": "accepted"}, status=202)


async def health_handler(request: web.Request) -> web.Response:
    """Handle health check requests."""
    return web.json_response({
        "status": "healthy",
        "policies": len(request.app[STORE_KEY].current.config_items),
    })


def create_app(robot: Robot, store: ConfigStore, webhook_secret: str = "") -> web.Application:
    """Build the aiohttp application serving /webhook and /health."""
    app = web.Application()
    app[ROBOT_KEY] = robot
    app[STORE_KEY] = store
    app[SECRET_KEY] = webhook_secret
    app.router.add_post("/webhook", webhook_handler)
    app.router.add_get("/health", health_handler)
    return app


async def main() -> None:
    """Main entry point."""
    load_dotenv()
    config = Config()
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    try:
        store = ConfigStore(config.robot_config_path)
    except ConfigError as e:
        logger.error(f"Config error: {e}")
        sys.exit(1)
    logger.info(
        f"Loaded {len(store.current.config_items)} repository policies from {store.path}"
    )

    robot = Robot(GitHubClient(config.github_token, base_url=config.github_api_url))
    app = create_app(robot, store, config.webhook_secret)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, config.host, config.port)
    await site.start()
    logger.info(f"Webhook server started on {config.host}:{config.port}")

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, shutting down...")
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal, sig)
    loop.add_signal_handler(signal.SIGHUP, store.reload)

    try:
        await stop.wait()
    finally:
        await runner.cleanup()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
