"""
Unit Tests: Bet Placement

Wallet debit, ledger entry and pending bet creation.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from helpers import make_user, make_world
from models import Bet, WalletTransaction
from services.bet_service import bet_service
from services.settlement_service import settlement_service
from services.user_service import user_service
from utils.errors import InsufficientBalanceError, InvalidRequestError, NotFoundError


def test_place_bet_debits_and_records(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "alice", balance=500)
            team_id = world.team_ids[0]

            bet, new_balance = await bet_service.place_bet(
                db,
                user_id,
                world.hackathon_id,
                team_id,
                world.prize_id,
                200,
                odds_american=-110,
                odds_decimal=Decimal("1.91"),
            )
            user = await user_service.get_user(db, user_id)
            transactions = await user_service.get_transactions(db, user_id)
            return bet, new_balance, user, transactions, team_id

    bet, new_balance, user, transactions, team_id = run_db(scenario)

    assert new_balance == 300
    assert user.wallet_balance == 300
    assert user.total_bets == 1
    assert user.total_predictions == 1
    assert user.xp == 5

    assert bet.status == "pending"
    assert bet.bet_amount == 200
    assert bet.odds_american == -110
    assert bet.odds_decimal == Decimal("1.91")
    assert bet.final_payout is None

    assert len(transactions) == 1
    assert transactions[0].transaction_type == "bet_placed"
    assert transactions[0].amount == -200
    assert transactions[0].reference_id == team_id


def test_stake_equal_to_balance_is_allowed(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "bob", balance=100)
            _, new_balance = await bet_service.place_bet(
                db, user_id, world.hackathon_id, world.team_ids[0], world.prize_id, 100
            )
            return new_balance

    assert run_db(scenario) == 0


def test_insufficient_balance_leaves_no_trace(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "carol", balance=50)

            with pytest.raises(InsufficientBalanceError) as exc_info:
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, world.team_ids[0],
                    world.prize_id, 51,
                )

            user = await user_service.get_user(db, user_id)
            bet_count = await db.scalar(select(func.count()).select_from(Bet))
            tx_count = await db.scalar(
                select(func.count()).select_from(WalletTransaction)
            )
            return exc_info.value, user, bet_count, tx_count

    error, user, bet_count, tx_count = run_db(scenario)

    assert error.balance == 50
    assert error.requested == 51
    assert user.wallet_balance == 50
    assert user.total_bets == 0
    assert bet_count == 0
    assert tx_count == 0


def test_unknown_user_is_not_found(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            with pytest.raises(NotFoundError):
                await bet_service.place_bet(
                    db, uuid4(), world.hackathon_id, world.team_ids[0],
                    world.prize_id, 10,
                )

    run_db(scenario)


def test_unknown_hackathon_is_not_found(run_db):
    async def scenario(factory):
        async with factory() as db:
            user_id = await make_user(db, "dave")
            with pytest.raises(NotFoundError):
                await bet_service.place_bet(db, user_id, uuid4(), uuid4(), uuid4(), 10)
            return await user_service.get_balance(db, user_id)

    assert run_db(scenario) == 1000


def test_team_or_prize_from_another_hackathon_is_rejected(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            other = await make_world(db)
            user_id = await make_user(db, "mallory", balance=100)

            with pytest.raises(NotFoundError):
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, other.team_ids[0],
                    world.prize_id, 100,
                )
            with pytest.raises(NotFoundError):
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, world.team_ids[0],
                    other.prize_id, 100,
                )
            with pytest.raises(NotFoundError):
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, uuid4(),
                    world.prize_id, 100,
                )

            # Nothing was debited, so there is nothing for settlement to pay
            report = await settlement_service.resolve_bets(
                db, world.hackathon_id, {other.team_ids[0]: {"position": 1}}
            )
            bet_count = await db.scalar(
                select(func.count()).select_from(Bet).where(Bet.user_id == user_id)
            )
            balance = await user_service.get_balance(db, user_id)
            return report, bet_count, balance

    report, bet_count, balance = run_db(scenario)

    assert bet_count == 0
    assert report.resolved_count == 0
    assert report.total_payout == 0
    assert balance == 100


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_amount_rejected(run_db, amount):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "erin")
            with pytest.raises(InvalidRequestError):
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, world.team_ids[0],
                    world.prize_id, amount,
                )

    run_db(scenario)


def test_user_bets_are_paginated(run_db):
    async def scenario(factory):
        async with factory() as db:
            world = await make_world(db)
            user_id = await make_user(db, "frank")
            for team_id in world.team_ids:
                await bet_service.place_bet(
                    db, user_id, world.hackathon_id, team_id, world.prize_id, 10
                )

            first_page, total = await bet_service.get_user_bets(
                db, user_id, page=1, page_size=3
            )
            second_page, _ = await bet_service.get_user_bets(
                db, user_id, page=2, page_size=3
            )
            won, won_total = await bet_service.get_user_bets(db, user_id, status="won")
            return first_page, second_page, total, won, won_total

    first_page, second_page, total, won, won_total = run_db(scenario)

    assert total == 4
    assert len(first_page) == 3
    assert len(second_page) == 1
    assert won == []
    assert won_total == 0


def test_create_user_uses_starting_balance(run_db):
    async def scenario(factory):
        async with factory() as db:
            return await user_service.create_user(db, "grace")

    user = run_db(scenario)

    assert user.wallet_balance == 1000
    assert user.accuracy_rate == Decimal("0.00")
