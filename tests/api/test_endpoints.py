"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.main import app
from core.game.engine import ALREADY_SHUFFLED_NOTICE


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def open_table(client, card_count=None):
    """Open a table and return its session headers and initial state."""
    body = {"card_count": card_count} if card_count is not None else None
    response = await client.post("/api/game/new", json=body)
    assert response.status_code == 200
    data = response.json()
    return {"X-Session-ID": data["session_id"]}, data["state"]


async def settle(client, headers):
    """Deal, shuffle and run the clock until the cards settle."""
    await client.post("/api/game/deal", headers=headers)
    await client.post("/api/game/shuffle", headers=headers)
    for _ in range(3):
        await client.post("/api/game/advance", json={"elapsed": 2.0}, headers=headers)
    response = await client.get("/api/game/state", headers=headers)
    return response.json()


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_table(client):
    """Test opening a new table."""
    headers, state = await open_table(client)

    assert headers["X-Session-ID"]
    assert state["phase"] == "IDLE"
    assert state["card_count"] == 3
    assert state["can_deal"] is True
    assert all(card["face_value"] is None for card in state["cards"])


@pytest.mark.asyncio
async def test_new_table_clamps_card_count(client):
    """Requested counts are clamped into range."""
    _, state = await open_table(client, card_count=12)
    assert state["card_count"] == 5

    _, state = await open_table(client, card_count="4")
    assert state["card_count"] == 4


@pytest.mark.asyncio
async def test_new_table_reuses_valid_session(client):
    """A valid session header is kept for the new table."""
    headers, _ = await open_table(client)
    response = await client.post("/api/game/new", headers=headers)
    assert response.json()["session_id"] == headers["X-Session-ID"]


@pytest.mark.asyncio
async def test_table_state(client):
    """Test getting table state."""
    headers, _ = await open_table(client)

    response = await client.get("/api/game/state", headers=headers)
    assert response.status_code == 200
    data = response.json()

    assert data["phase"] == "IDLE"
    assert data["pending_phase"] is None
    assert data["has_shuffled_once"] is False


@pytest.mark.asyncio
async def test_unknown_session(client):
    """Badly signed or unknown sessions are 404."""
    response = await client.get("/api/game/state", headers={"X-Session-ID": "forged"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_missing_session_header(client):
    """A missing session header fails validation."""
    response = await client.get("/api/game/state")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_deal(client):
    """Dealing places every card face up at its own slot."""
    headers, _ = await open_table(client)

    response = await client.post("/api/game/deal", headers=headers)
    assert response.status_code == 200
    data = response.json()

    assert data["accepted"] is True
    assert data["state"]["phase"] == "DEALT"
    assert [p["slot"] for p in data["placements"]] == [0, 1, 2]
    assert all(p["face_up"] and p["locked"] for p in data["placements"])
    assert all(card["face_value"] for card in data["state"]["cards"])


@pytest.mark.asyncio
async def test_deal_with_count(client):
    """Dealing with a different count rebuilds the round first."""
    headers, _ = await open_table(client)

    response = await client.post("/api/game/deal", json={"card_count": 5}, headers=headers)
    data = response.json()

    assert data["state"]["card_count"] == 5
    assert len(data["placements"]) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "card_count, expected",
    [(4.7, 4), ("4.7", 4), ([4], 3), ({"n": 4}, 3), ("many", 3)],
)
async def test_deal_clamps_odd_counts(client, card_count, expected):
    """Counts of any shape are clamped instead of failing validation."""
    headers, _ = await open_table(client)

    response = await client.post(
        "/api/game/deal", json={"card_count": card_count}, headers=headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["accepted"] is True
    assert data["state"]["card_count"] == expected


@pytest.mark.asyncio
async def test_new_and_restart_clamp_odd_counts(client):
    headers, state = await open_table(client, card_count=4.7)
    assert state["card_count"] == 4

    response = await client.post(
        "/api/game/restart", json={"card_count": {"n": 5}}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["state"]["card_count"] == 3


@pytest.mark.asyncio
async def test_deal_twice_not_accepted(client):
    """A second deal is a no-op, not an error."""
    headers, _ = await open_table(client)
    await client.post("/api/game/deal", headers=headers)

    response = await client.post("/api/game/deal", headers=headers)
    assert response.status_code == 200
    assert response.json()["accepted"] is False
    assert response.json()["placements"] == []


@pytest.mark.asyncio
async def test_shuffle_hides_faces(client):
    """Shuffling flips every card face down and hides the values."""
    headers, _ = await open_table(client)
    await client.post("/api/game/deal", headers=headers)

    response = await client.post("/api/game/shuffle", headers=headers)
    data = response.json()

    assert data["accepted"] is True
    assert data["state"]["phase"] == "FLIPPING_DOWN"
    assert data["state"]["pending_phase"] == "FLIPPING_DOWN"
    assert all(card["face_value"] is None for card in data["state"]["cards"])
    assert all(not p["face_up"] for p in data["placements"])


@pytest.mark.asyncio
async def test_advance_runs_phases(client):
    """Advancing the clock walks the sequence to SETTLED."""
    headers, _ = await open_table(client)
    await client.post("/api/game/deal", headers=headers)
    await client.post("/api/game/shuffle", headers=headers)

    response = await client.post("/api/game/advance", json={"elapsed": 1.1}, headers=headers)
    data = response.json()
    assert data["accepted"] is True
    assert data["state"]["phase"] == "GATHERING"
    assert all(p["slot"] is None for p in data["placements"])

    state = await settle(client, headers)
    assert state["phase"] == "SETTLED"
    assert sorted(card["slot"] for card in state["cards"]) == [0, 1, 2]
    assert all(not card["locked"] for card in state["cards"])


@pytest.mark.asyncio
async def test_advance_with_nothing_due(client):
    headers, _ = await open_table(client)
    response = await client.post("/api/game/advance", json={"elapsed": 0.5}, headers=headers)
    assert response.json()["accepted"] is False


@pytest.mark.asyncio
async def test_advance_rejects_negative_time(client):
    headers, _ = await open_table(client)
    response = await client.post("/api/game/advance", json={"elapsed": -1}, headers=headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_phase_complete(client):
    """The client can end a phase as soon as its animation is done."""
    headers, _ = await open_table(client)
    await client.post("/api/game/deal", headers=headers)
    await client.post("/api/game/shuffle", headers=headers)

    response = await client.post(
        "/api/game/phase-complete", json={"phase": "flipping_down"}, headers=headers
    )
    data = response.json()
    assert data["accepted"] is True
    assert data["state"]["phase"] == "GATHERING"

    # Stale signal for a phase that already ended
    response = await client.post(
        "/api/game/phase-complete", json={"phase": "flipping_down"}, headers=headers
    )
    assert response.json()["accepted"] is False


@pytest.mark.asyncio
async def test_phase_complete_rejects_untimed_phase(client):
    headers, _ = await open_table(client)
    response = await client.post(
        "/api/game/phase-complete", json={"phase": "settled"}, headers=headers
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_reveal(client):
    """Revealing shows one card's face value."""
    headers, _ = await open_table(client)
    state = await settle(client, headers)
    target = next(card for card in state["cards"] if card["slot"] == 2)

    response = await client.post(
        "/api/game/reveal", json={"card_index": target["index"]}, headers=headers
    )
    data = response.json()

    assert data["accepted"] is True
    assert data["state"]["phase"] == "REVEALED"
    revealed = [card for card in data["state"]["cards"] if card["face_up"]]
    assert [card["index"] for card in revealed] == [target["index"]]
    assert revealed[0]["face_value"] in ("A", "K", "Q", "J", "10")


@pytest.mark.asyncio
async def test_reveal_locked_card(client):
    """Locked cards ignore activation."""
    headers, _ = await open_table(client)
    await client.post("/api/game/deal", headers=headers)

    response = await client.post("/api/game/reveal", json={"card_index": 0}, headers=headers)
    data = response.json()

    assert data["accepted"] is False
    assert data["state"]["phase"] == "DEALT"


@pytest.mark.asyncio
async def test_reveal_negative_index(client):
    headers, _ = await open_table(client)
    response = await client.post("/api/game/reveal", json={"card_index": -1}, headers=headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_second_shuffle_notice(client):
    """Shuffling a settled round only returns a notice."""
    headers, _ = await open_table(client)
    await settle(client, headers)

    response = await client.post("/api/game/shuffle", headers=headers)
    data = response.json()

    assert data["accepted"] is False
    assert data["notices"] == [ALREADY_SHUFFLED_NOTICE]
    assert data["placements"] == []
    assert data["state"]["phase"] == "SETTLED"


@pytest.mark.asyncio
async def test_restart_mid_sequence(client):
    """Restarting mid-shuffle starts a fresh idle round."""
    headers, state = await open_table(client)
    await client.post("/api/game/deal", headers=headers)
    await client.post("/api/game/shuffle", headers=headers)

    response = await client.post(
        "/api/game/restart", json={"card_count": 4}, headers=headers
    )
    data = response.json()

    assert data["accepted"] is True
    assert data["state"]["phase"] == "IDLE"
    assert data["state"]["card_count"] == 4
    assert data["state"]["round_id"] != state["round_id"]
    assert data["state"]["pending_phase"] is None

    response = await client.post("/api/game/advance", json={"elapsed": 10}, headers=headers)
    assert response.json()["placements"] == []
