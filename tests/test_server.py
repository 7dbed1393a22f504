import pytest

from masterserver.config.schema import Config
from masterserver.registry.state import ListingStore
from masterserver.server import MasterServer

from tests.conftest import listing


@pytest.fixture
def master(clock):
    cfg = Config(show_banner=False, service_message="Maintenance at noon", heartbeat_interval=60000)
    return MasterServer(store=ListingStore(clock=clock), cfg=cfg)


@pytest.fixture
async def client(aiohttp_client, master):
    return await aiohttp_client(master.create_app())


def add(**server):
    return {"type": "add", "server": listing(**server)}


class TestReport:
    async def test_add_then_list(self, client):
        resp = await client.put("/serverListings", json=[add(name="Alpha")])
        assert resp.status == 200
        assert await resp.text() == "Server added / Updated."

        resp = await client.get("/serverListings")
        assert resp.status == 200
        data = await resp.json()
        assert list(data) == ["127.0.0.1:7777"]
        assert data["127.0.0.1:7777"]["name"] == "Alpha"
        assert "port" not in data["127.0.0.1:7777"]

    async def test_delete(self, client, master):
        await client.put("/serverListings", json=[add()])
        resp = await client.put("/serverListings", json=[{"type": "delete", "server": listing()}])
        assert resp.status == 200
        assert await resp.text() == "Server removed."
        assert len(master.store) == 0

    async def test_empty_body(self, client):
        resp = await client.put("/serverListings")
        assert resp.status == 400
        assert await resp.text() == "Malformed request."

    async def test_invalid_json(self, client):
        resp = await client.put("/serverListings", data="[{", headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert await resp.text() == "Malformed request."

    async def test_body_not_utf8(self, client):
        resp = await client.put("/serverListings", data=b"\xff\xfe[", headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert await resp.text() == "Malformed request."

    async def test_deeply_nested_body(self, client):
        resp = await client.put("/serverListings", data="[" * 100000, headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert await resp.text() == "Malformed request."

    async def test_missing_field(self, client):
        server = listing()
        del server["players"]
        resp = await client.put("/serverListings", json=[{"type": "add", "server": server}])
        assert resp.status == 400
        assert await resp.text() == "Missing JSON data: players"

    async def test_unknown_type(self, client):
        resp = await client.put("/serverListings", json=[{"type": "move", "server": listing()}])
        assert resp.status == 400
        assert await resp.text() == "Unknown operation type."

    async def test_partial_batch_single_response(self, client, master):
        batch = [add(port=1), {"server": listing(port=2)}, add(port=3)]
        resp = await client.put("/serverListings", json=batch)
        assert resp.status == 400
        assert await resp.text() == "Malformed request."
        assert [str(k) for k in master.store.snapshot()] == ["127.0.0.1:1"]


class TestQueries:
    async def test_config(self, client):
        resp = await client.get("/config")
        assert resp.status == 200
        assert await resp.json() == {"ServiceMessage": "Maintenance at noon", "HeartbeatInterval": 60000}

    async def test_index_page(self, client, master):
        await client.put("/serverListings", json=[add(name="Alpha", players=10, max_players=20)])
        await master.sweeper.sweep_once()

        resp = await client.get("/")
        assert resp.status == 200
        assert resp.content_type == "text/html"
        html = await resp.text()
        assert "Alpha" in html
        assert "10 players" in html
        assert "50% capacity" in html
        assert "127.0.0.1:7777" in html

    async def test_index_page_empty(self, client):
        resp = await client.get("/")
        html = await resp.text()
        assert "0 players" in html
        assert "No servers are reporting" in html

    async def test_static_files(self, client):
        resp = await client.get("/static/style.css")
        assert resp.status == 200
        assert "border-collapse" in await resp.text()

    async def test_expired_listing_gone_after_sweep(self, client, master, clock):
        await client.put("/serverListings", json=[add()])
        clock.advance(121)
        assert len(await (await client.get("/serverListings")).json()) == 1

        await master.sweeper.sweep_once()
        assert await (await client.get("/serverListings")).json() == {}


class TestLifecycle:
    def test_uses_injected_empty_store(self, clock):
        store = ListingStore(clock=clock)
        cfg = Config(show_banner=False)
        server = MasterServer(store=store, cfg=cfg)
        assert server.store is store
        assert server.processor.store is store
        assert server.sweeper.store is store
        assert server.cfg is cfg

    async def test_start_stop(self, clock):
        server = MasterServer(cfg=Config(host="127.0.0.1", port=0, show_banner=False))
        await server.start()
        try:
            assert server.bound_port > 0
            assert server.sweeper.running
        finally:
            await server.stop()
        assert not server.sweeper.running
