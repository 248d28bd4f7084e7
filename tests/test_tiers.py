import pytest

from vivaya.services.tiers import (
    Tier,
    effective_tier,
    has_tier_at_least,
    is_premium_like,
    normalize_tier,
    tier_label,
)

from conftest import FakeSupabase


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("free", Tier.FREE),
        ("premium", Tier.ESSENTIAL),
        ("Essentiel", Tier.ESSENTIAL),
        (" essential ", Tier.ESSENTIAL),
        ("ELITE", Tier.ELITE),
        ("keefon+", Tier.ELITE),
        ("keefonplus", Tier.ELITE),
        ("gold", Tier.FREE),
        ("", Tier.FREE),
        (None, Tier.FREE),
        (Tier.ELITE, Tier.ELITE),
    ],
)
def test_normalize_tier(raw, expected):
    assert normalize_tier(raw) is expected


def test_labels_and_ranks():
    assert tier_label("premium") == "Essentiel"
    assert tier_label(None) == "Gratuit"
    assert tier_label("elite") == "Keefon+"
    assert has_tier_at_least("elite", Tier.ESSENTIAL)
    assert not has_tier_at_least("free", "premium")
    assert is_premium_like("essentiel")
    assert not is_premium_like("unknown")


def test_effective_tier_reads_view():
    client = FakeSupabase({"user_plans_effective_v": [{"id": "u-1", "effective_tier": "essentiel"}]})
    assert effective_tier(client, "u-1") is Tier.ESSENTIAL
    assert effective_tier(client, "u-2") is Tier.FREE


def test_effective_tier_defaults_to_free_on_error():
    client = FakeSupabase()
    client.failing_tables.add("user_plans_effective_v")
    assert effective_tier(client, "u-1") is Tier.FREE
    assert effective_tier(None, "u-1") is Tier.FREE
