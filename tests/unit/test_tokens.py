"""Unit tests for the in-memory token collaborator."""
from __future__ import annotations

import pytest

from stablecoin_engine.tokens import InMemoryToken


@pytest.fixture()
def token() -> InMemoryToken:
    t = InMemoryToken("DSC", owner="engine")
    t.mint("engine", "alice", 100)
    return t


class TestTransfers:
    def test_transfer(self, token: InMemoryToken) -> None:
        assert token.transfer("alice", "bob", 40) is True
        assert token.balance_of("alice") == 60
        assert token.balance_of("bob") == 40

    def test_transfer_over_balance_moves_nothing(self, token: InMemoryToken) -> None:
        assert token.transfer("alice", "bob", 101) is False
        assert token.balance_of("alice") == 100
        assert token.balance_of("bob") == 0

    def test_transfer_from_needs_allowance(self, token: InMemoryToken) -> None:
        assert token.transfer_from("engine", "alice", "engine", 10) is False
        token.approve("alice", "engine", 10)
        assert token.transfer_from("engine", "alice", "engine", 10) is True
        assert token.allowance("alice", "engine") == 0
        assert token.balance_of("engine") == 10

    def test_failed_transfer_from_keeps_allowance(self, token: InMemoryToken) -> None:
        token.approve("bob", "engine", 10)
        assert token.transfer_from("engine", "bob", "engine", 10) is False
        assert token.allowance("bob", "engine") == 10


class TestSupply:
    def test_mint_restricted_to_owner(self, token: InMemoryToken) -> None:
        with pytest.raises(PermissionError):
            token.mint("alice", "alice", 1)

    def test_burn_from_owner_balance(self, token: InMemoryToken) -> None:
        token.transfer("alice", "engine", 30)
        assert token.burn("engine", 30) is True
        assert token.total_supply == 70
        assert token.burn("engine", 1) is False

    def test_transfer_ownership(self, token: InMemoryToken) -> None:
        token.transfer_ownership("engine", "new-engine")
        with pytest.raises(PermissionError):
            token.mint("engine", "alice", 1)
        assert token.mint("new-engine", "alice", 1) is True

    def test_unowned_token_mints_freely(self) -> None:
        t = InMemoryToken("WETH")
        assert t.mint("anyone", "alice", 5) is True
        assert t.total_supply == 5
