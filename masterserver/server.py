"""Master server HTTP front end.

Reporters PUT batches of listing operations to ``/serverListings``; clients
GET the live listings, the client config and a rendered listing page.
"""

from __future__ import annotations

import json
from pathlib import Path

from aiohttp import web
from loguru import logger

from masterserver.banner import StatsBanner
from masterserver.config.schema import Config
from masterserver.pages import render_server_list
from masterserver.protocol import MSG_MALFORMED, ServiceAnnouncement
from masterserver.registry.ingest import IngestionProcessor
from masterserver.registry.state import ListingStore
from masterserver.registry.sweeper import ExpirySweeper

WWW_DIR = Path(__file__).parent / "www"


class MasterServer:
    def __init__(self, store: ListingStore | None = None, cfg: Config | None = None) -> None:
        self.cfg = cfg if cfg is not None else Config()
        self.store = store if store is not None else ListingStore()
        self.processor = IngestionProcessor(self.store)
        self.sweeper = ExpirySweeper(
            self.store,
            expire_time=self.cfg.expire_time,
            update_rate_ms=self.cfg.update_rate,
            on_sweep=StatsBanner(self.cfg.port) if self.cfg.show_banner else None,
        )
        self.announcement = ServiceAnnouncement(
            service_message=self.cfg.service_message,
            heartbeat_interval=self.cfg.heartbeat_interval,
        )
        self.bound_port: int = self.cfg.port
        self._runner: web.AppRunner | None = None

    def create_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self.handle_index)
        app.router.add_get("/config", self.handle_config)
        app.router.add_get("/serverListings", self.handle_list)
        app.router.add_put("/serverListings", self.handle_report)
        app.router.add_static("/static/", WWW_DIR)
        return app

    async def start(self) -> None:
        if self._runner:
            return
        self._runner = web.AppRunner(self.create_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.cfg.host, self.cfg.port)
        await site.start()
        addresses = self._runner.addresses
        if addresses:
            self.bound_port = int(addresses[0][1])
        self.sweeper.start()
        logger.info(f"Master server listening on http://{self.cfg.host}:{self.bound_port}")

    async def stop(self) -> None:
        await self.sweeper.stop()
        if self._runner:
            await self._runner.cleanup()
            self._runner = None

    async def handle_index(self, request: web.Request) -> web.Response:
        html = render_server_list(self.sweeper.stats, self.store.snapshot())
        return web.Response(text=html, content_type="text/html")

    async def handle_config(self, request: web.Request) -> web.Response:
        return web.Response(text=self.announcement.to_json(), content_type="application/json")

    async def handle_list(self, request: web.Request) -> web.Response:
        return web.json_response(self.store.to_json_dict())

    async def handle_report(self, request: web.Request) -> web.Response:
        body = await request.read() if request.can_read_body else b""
        try:
            raw = body.decode("utf-8")
            if not raw.strip():
                return web.Response(status=400, text=MSG_MALFORMED)
            items = json.loads(raw)
        except (ValueError, RecursionError):
            return web.Response(status=400, text=MSG_MALFORMED)

        result = await self.processor.process(items, request.remote or "")
        return web.Response(status=result.status, text=result.message)
