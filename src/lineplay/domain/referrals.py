# src/lineplay/domain/referrals.py
"""
Referral Rules - Tiers, Commissions and Bonuses

Tier 1: 0-14 referrals (5% commission)
Tier 2: 15-49 referrals (7%)
Tier 3: 50-99 referrals (10%)
Tier 4: 100+ referrals (15%)
"""
from __future__ import annotations

import math
import random
import string
from typing import NamedTuple, Optional

REFERRAL_CODE_PREFIX = "LINE-"
REFERRAL_CODE_LENGTH = 8
_CODE_ALPHABET = string.ascii_uppercase + string.digits

_COMMISSION_RATES = {1: 0.05, 2: 0.07, 3: 0.10, 4: 0.15}
_TIER_BONUSES = {1: 0, 2: 10, 3: 20, 4: 50}
_NEW_REFERRAL_BONUSES = {1: 200, 2: 250, 3: 300, 4: 400}


class TierUpgrade(NamedTuple):
    eligible: bool
    new_tier: int
    bonus: int


def generate_referral_code(rng: Optional[random.Random] = None) -> str:
    """Generate a code like LINE-7GQ2ZK4M."""
    rng = rng or random.SystemRandom()
    suffix = "".join(rng.choice(_CODE_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH))
    return REFERRAL_CODE_PREFIX + suffix


def tier_for_referral_count(count: int) -> int:
    if count >= 100:
        return 4
    if count >= 50:
        return 3
    if count >= 15:
        return 2
    return 1


def commission_rate_for_tier(tier: int) -> float:
    return _COMMISSION_RATES.get(tier, 0.05)


def commission(amount: int, rate: float) -> int:
    """Commission on ``amount`` at ``rate``, rounded down."""
    return math.floor(amount * rate)


def tier_bonus_reward(tier: int) -> int:
    return _TIER_BONUSES.get(tier, 0)


def check_tier_upgrade(current_tier: int, total_referrals: int) -> TierUpgrade:
    """Check whether ``total_referrals`` lifts the account above ``current_tier``."""
    new_tier = tier_for_referral_count(total_referrals)
    eligible = new_tier > current_tier
    return TierUpgrade(
        eligible=eligible,
        new_tier=new_tier,
        bonus=tier_bonus_reward(new_tier) if eligible else 0,
    )


def new_referral_bonus(referrer_tier: int) -> int:
    """Tokens paid to the referrer for each new referral."""
    return _NEW_REFERRAL_BONUSES.get(referrer_tier, 200)


def build_referral_link(base_url: str, code: str) -> str:
    return f"{base_url.rstrip('/')}/signup?ref={code}"
