# src/lineplay/application/referral_service.py
"""
Referral Service - Referral Bonuses and Tier Upgrades

Files that USE this module:
- lineplay.app (composition root)
- tests.test_services (unit tests)

Files that this module USES:
- lineplay.application.account_manager (serialized account updates)
- lineplay.application.ledger (apply_credit for bonuses)
- lineplay.domain.referrals (tier rules and bonus amounts)
- lineplay.shared.validators (referral code format)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from lineplay.application.account_manager import AccountManager
from lineplay.application.ledger import apply_credit
from lineplay.domain.models import TX_REFERRAL_BONUS, Account, ReferralStats
from lineplay.domain.referrals import check_tier_upgrade, new_referral_bonus
from lineplay.shared.validators import validate_referral_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferralResult:
    """Bonuses paid to a referrer for one new referral."""
    bonus: int
    tier_bonus: int
    tier: int
    upgraded: bool


class ReferralService:
    """Pays referrers and keeps their tier current."""

    def __init__(self, accounts: AccountManager):
        self.accounts = accounts

    def register_referral(
        self,
        referrer_id: str,
        code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ReferralResult:
        """
        Record a new referral for ``referrer_id``.

        The referral bonus depends on the tier held before this referral; a
        tier upgrade reached by it pays the tier bonus on top.

        Args:
            referrer_id: Account that referred the new player
            code: Referral code used at signup, checked for format when given
            now: Transaction timestamp

        Returns:
            ReferralResult with the amounts credited (whole LINE tokens)

        Raises:
            ValueError: If code is given and malformed
            AccountNotFound: If the referrer does not exist
        """
        if code is not None and not validate_referral_code(code):
            raise ValueError(f"Invalid referral code: {code!r}")

        result_holder = {}

        def _update(account: Account) -> Account:
            stats = account.referral
            bonus = new_referral_bonus(stats.tier)
            total = stats.total_referrals + 1
            upgrade = check_tier_upgrade(stats.tier, total)
            tier = upgrade.new_tier if upgrade.eligible else stats.tier

            account = replace(account, referral=ReferralStats(total_referrals=total, tier=tier))
            units = self.accounts.codec.units
            account = apply_credit(account, units(bonus), "Referral Bonus", TX_REFERRAL_BONUS, now)
            if upgrade.bonus:
                account = apply_credit(
                    account, units(upgrade.bonus), f"Tier {tier} Bonus", TX_REFERRAL_BONUS, now
                )
            result_holder["result"] = ReferralResult(
                bonus=bonus, tier_bonus=upgrade.bonus, tier=tier, upgraded=upgrade.eligible
            )
            return account

        self.accounts.update(referrer_id, _update)
        result = result_holder["result"]
        if result.upgraded:
            logger.info("Referrer %s upgraded to tier %d", referrer_id, result.tier)
        return result
