"""
Unit Tests: HTTP API

Routes exercised in-process through httpx with the session dependency
pointed at the test database.
"""

import asyncio
from uuid import uuid4

import httpx

from database.dependencies import get_db
from helpers import make_bet, make_user, make_world
from main import app


def _client_for(factory) -> httpx.AsyncClient:
    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    )


def test_resolve_bets_endpoint(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            alice = await make_user(db, "alice", balance=0)
            bob = await make_user(db, "bob", balance=0)
            await make_bet(db, world, alice, world.team_ids[0], 200)
            await make_bet(db, world, bob, world.team_ids[1], 100)

        try:
            async with _client_for(factory) as client:
                response = await client.post(
                    f"/admin/hackathons/{world.hackathon_id}/resolve-bets",
                    json={"winner_results": {str(world.team_ids[0]): {"position": 1}}},
                )
                alice_response = await client.get(f"/users/{alice}")
                bets_response = await client.get(f"/users/{alice}/bets")
        finally:
            app.dependency_overrides.clear()
        return response, alice_response, bets_response

    response, alice_response, bets_response = run_db(scenario)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["resolved_count"] == 2
    assert body["total_payout"] == 390
    assert body["errors"] == []

    assert alice_response.json()["wallet_balance"] == 300

    page = bets_response.json()
    assert page["total"] == 1
    assert page["items"][0]["status"] == "won"
    assert page["items"][0]["final_payout"] == 300


def test_resolve_bets_without_pending_bets(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)

        try:
            async with _client_for(factory) as client:
                return await client.post(
                    f"/admin/hackathons/{world.hackathon_id}/resolve-bets",
                    json={"winner_results": {}},
                )
        finally:
            app.dependency_overrides.clear()

    response = run_db(scenario)

    assert response.status_code == 200
    assert response.json()["resolved_count"] == 0
    assert response.json()["message"] == "No pending bets to resolve"


def test_resolve_bets_rejects_bad_input(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)

        try:
            async with _client_for(factory) as client:
                missing = await client.post(
                    f"/admin/hackathons/{world.hackathon_id}/resolve-bets",
                    json={},
                )
                bad_position = await client.post(
                    f"/admin/hackathons/{world.hackathon_id}/resolve-bets",
                    json={"winner_results": {str(uuid4()): {"position": 0}}},
                )
                unknown = await client.post(
                    f"/admin/hackathons/{uuid4()}/resolve-bets",
                    json={"winner_results": {}},
                )
        finally:
            app.dependency_overrides.clear()
        return missing, bad_position, unknown

    missing, bad_position, unknown = run_db(scenario)

    assert missing.status_code == 422
    assert bad_position.status_code == 422
    assert unknown.status_code == 404
    assert "not found" in unknown.json()["error"]


def test_place_bet_endpoint(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "carol", balance=100)

        payload = {
            "user_id": str(user_id),
            "hackathon_id": str(world.hackathon_id),
            "team_id": str(world.team_ids[0]),
            "prize_id": str(world.prize_id),
            "bet_amount": 60,
            "odds_american": 120,
            "odds_decimal": "2.20",
        }
        try:
            async with _client_for(factory) as client:
                placed = await client.post("/bets", json=payload)
                too_much = await client.post("/bets", json=payload)
                zero = await client.post("/bets", json={**payload, "bet_amount": 0})
                transactions = await client.get(f"/users/{user_id}/transactions")
                bet = await client.get(f"/bets/{placed.json()['bet']['id']}")
                missing_bet = await client.get(f"/bets/{uuid4()}")
        finally:
            app.dependency_overrides.clear()
        return placed, too_much, zero, transactions, bet, missing_bet

    placed, too_much, zero, transactions, bet, missing_bet = run_db(scenario)

    assert placed.status_code == 200
    assert placed.json()["new_balance"] == 40
    assert placed.json()["bet"]["status"] == "pending"

    assert too_much.status_code == 400
    assert too_much.json()["current_balance"] == 40

    assert zero.status_code == 422

    ledger = transactions.json()
    assert len(ledger) == 1
    assert ledger[0]["amount"] == -60

    assert bet.status_code == 200
    assert bet.json()["bet_amount"] == 60
    assert missing_bet.status_code == 404


def test_unknown_user_is_404(run_db):
    async def scenario(factory):
        try:
            async with _client_for(factory) as client:
                return await client.get(f"/users/{uuid4()}")
        finally:
            app.dependency_overrides.clear()

    assert run_db(scenario).status_code == 404


def test_root_describes_api():
    async def scenario():
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as client:
            return await client.get("/")

    response = asyncio.run(scenario())

    assert response.status_code == 200
    assert response.json()["name"] == "HackArena API"
