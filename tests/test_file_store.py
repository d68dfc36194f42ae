# tests/test_file_store.py
"""
File Store Tests - Unit Tests for Account Persistence

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- lineplay.adapters.persistence.file_store (AccountFileStore, JSON conversion)
- lineplay.domain.models (Account and nested models for test data)
- pytest (testing framework, tmp_path fixture)
"""
import json
from datetime import date, datetime, timezone

import pytest

from lineplay.adapters.persistence.file_store import (
    AccountFileStore,
    account_from_json,
    account_to_json,
)
from lineplay.domain.models import (
    Account,
    ProgressionState,
    ReferralStats,
    StreakState,
    TokenTransaction,
)


def _sample_account() -> Account:
    return Account(
        account_id="user_123456",
        balance=123_456_789_012_345_678_901,
        total_earned=500_000_000_000,
        progression=ProgressionState(xp=42, level=3, xp_to_next_level=1440),
        streak=StreakState(
            current_streak=3,
            longest_streak=6,
            last_claim_date=date(2026, 3, 10),
            claimed_days=frozenset({1, 2, 3}),
            streak_start_date=date(2026, 3, 8),
        ),
        referral=ReferralStats(total_referrals=15, tier=2),
        transactions=(
            TokenTransaction(
                kind="EARN",
                amount=500_000_000_000,
                balance=500_000_000_000,
                source="Welcome Bonus",
                created_at=datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc),
            ),
        ),
    )


class TestJsonConversion:
    def test_amounts_written_as_strings(self):
        data = account_to_json(_sample_account())
        assert data["balance"] == "123456789012345678901"
        assert data["transactions"][0]["amount"] == "500000000000"
        assert data["streak"]["claimed_days"] == [1, 2, 3]
        assert data["streak"]["last_claim_date"] == "2026-03-10"

    def test_round_trip(self):
        account = _sample_account()
        assert account_from_json(account_to_json(account)) == account

    def test_defaults_for_missing_sections(self):
        account = account_from_json({"account_id": "new"})
        assert account.balance == 0
        assert account.progression == ProgressionState.initial()
        assert account.streak == StreakState()
        assert account.transactions == ()

    @pytest.mark.parametrize("claimed_days", [[0], [8], [1, 2, 9]])
    def test_claimed_days_outside_cycle_rejected(self, claimed_days):
        data = account_to_json(_sample_account())
        data["streak"]["claimed_days"] = claimed_days
        with pytest.raises(ValueError):
            account_from_json(data)

    def test_current_streak_above_longest_rejected(self):
        data = account_to_json(_sample_account())
        data["streak"]["current_streak"] = 7
        data["streak"]["longest_streak"] = 6
        with pytest.raises(ValueError):
            account_from_json(data)

    def test_negative_streak_rejected(self):
        data = account_to_json(_sample_account())
        data["streak"]["current_streak"] = -1
        with pytest.raises(ValueError):
            account_from_json(data)

    def test_z_suffix_timestamps(self):
        data = account_to_json(_sample_account())
        data["transactions"][0]["created_at"] = "2026-03-08T12:00:00Z"
        account = account_from_json(data)
        assert account.transactions[0].created_at == datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc)


class TestAccountFileStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = AccountFileStore(tmp_path / "data" / "accounts.json")
        assert store.load_all() == {}

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "accounts.json"
        store = AccountFileStore(path)
        account = _sample_account()

        store.save_all({account.account_id: account})

        assert path.exists()
        assert list(tmp_path.glob("*.tmp")) == []
        assert AccountFileStore(path).load_all() == {account.account_id: account}

    def test_corrupt_file_backed_up(self, tmp_path):
        path = tmp_path / "accounts.json"
        path.write_text("{not json", encoding="utf-8")

        assert AccountFileStore(path).load_all() == {}
        assert (tmp_path / "accounts.json.corrupt").exists()

    def test_unreadable_account_skipped(self, tmp_path):
        path = tmp_path / "accounts.json"
        good = account_to_json(_sample_account())
        payload = {
            "version": 1,
            "accounts": {
                "user_123456": good,
                "broken": {"balance": "12"},
            },
        }
        path.write_text(json.dumps(payload), encoding="utf-8")

        loaded = AccountFileStore(path).load_all()
        assert list(loaded) == ["user_123456"]
        assert (tmp_path / "accounts.json.corrupt").exists()

    def test_skipped_account_survives_next_save(self, tmp_path):
        path = tmp_path / "accounts.json"
        payload = {
            "version": 1,
            "accounts": {
                "user_123456": account_to_json(_sample_account()),
                "broken": {"balance": "12"},
            },
        }
        original = json.dumps(payload)
        path.write_text(original, encoding="utf-8")

        store = AccountFileStore(path)
        store.save_all(store.load_all())

        backup = json.loads((tmp_path / "accounts.json.corrupt").read_text(encoding="utf-8"))
        assert backup["accounts"]["broken"] == {"balance": "12"}
        assert "broken" not in json.loads(path.read_text(encoding="utf-8"))["accounts"]

    def test_clean_load_writes_no_backup(self, tmp_path):
        path = tmp_path / "accounts.json"
        account = _sample_account()
        AccountFileStore(path).save_all({account.account_id: account})

        AccountFileStore(path).load_all()

        assert not (tmp_path / "accounts.json.corrupt").exists()

    @pytest.mark.parametrize("content", ["[]", '"accounts"', '{"accounts": []}', "null"])
    def test_wrong_top_level_shape_backed_up(self, tmp_path, content):
        path = tmp_path / "accounts.json"
        path.write_text(content, encoding="utf-8")

        assert AccountFileStore(path).load_all() == {}
        assert (tmp_path / "accounts.json.corrupt").read_text(encoding="utf-8") == content

    def test_non_object_account_record_skipped(self, tmp_path):
        path = tmp_path / "accounts.json"
        payload = {"accounts": {"user_123456": account_to_json(_sample_account()), "odd": [1, 2]}}
        path.write_text(json.dumps(payload), encoding="utf-8")

        assert list(AccountFileStore(path).load_all()) == ["user_123456"]
        assert (tmp_path / "accounts.json.corrupt").exists()

    def test_invalid_streak_account_skipped(self, tmp_path):
        path = tmp_path / "accounts.json"
        bad = account_to_json(_sample_account())
        bad["account_id"] = "bad_streak"
        bad["streak"]["claimed_days"] = [0, 8]
        payload = {"accounts": {"user_123456": account_to_json(_sample_account()), "bad_streak": bad}}
        path.write_text(json.dumps(payload), encoding="utf-8")

        assert list(AccountFileStore(path).load_all()) == ["user_123456"]
        assert (tmp_path / "accounts.json.corrupt").exists()
