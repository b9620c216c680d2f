"""Tests for aid-intensity resolution, the grant ceiling and the minimum grant gate."""

import pytest

from grant_triage.models import NamedThreshold
from grant_triage.rates import apply_cap, check_minimum_grant, resolve_rate

from .factories import make_profile, make_scheme


# ---------------------------------------------------------------------------
# resolve_rate
# ---------------------------------------------------------------------------

class TestResolveRate:
    def test_sme_in_gozo_gets_bonus_rate(self):
        scheme = make_scheme(sme_aid_intensity=0.5, sme_gozo_aid_intensity=0.65)
        assert resolve_rate(scheme, make_profile(project_location="gozo")) == 0.65

    def test_sme_in_malta_gets_sme_rate(self):
        scheme = make_scheme(sme_aid_intensity=0.5, sme_gozo_aid_intensity=0.65)
        assert resolve_rate(scheme, make_profile()) == 0.5

    def test_sme_in_gozo_without_bonus_rate_falls_back(self):
        scheme = make_scheme(sme_aid_intensity=0.5, sme_gozo_aid_intensity=None)
        assert resolve_rate(scheme, make_profile(project_location="gozo")) == 0.5

    def test_sme_falls_back_to_standard_rate(self):
        scheme = make_scheme(sme_aid_intensity=None, standard_aid_intensity=0.4)
        assert resolve_rate(scheme, make_profile()) == 0.4

    def test_explicit_zero_sme_rate_is_used(self):
        scheme = make_scheme(sme_aid_intensity=0.0, standard_aid_intensity=0.4)
        assert resolve_rate(scheme, make_profile()) == 0.0

    def test_no_rates_resolves_to_zero(self):
        scheme = make_scheme(sme_aid_intensity=None, large_entity_aid_intensity=None)
        assert resolve_rate(scheme, make_profile()) == 0.0
        assert resolve_rate(scheme, make_profile(business_size="large")) == 0.0

    def test_large_in_gozo_gets_large_bonus_rate(self):
        scheme = make_scheme(large_entity_aid_intensity=0.3, large_entity_gozo_aid_intensity=0.4)
        profile = make_profile(business_size="large", project_location="gozo")
        assert resolve_rate(scheme, profile) == 0.4

    def test_large_in_malta_gets_large_rate(self):
        scheme = make_scheme(large_entity_aid_intensity=0.3, large_entity_gozo_aid_intensity=0.4)
        assert resolve_rate(scheme, make_profile(business_size="large")) == 0.3

    def test_large_falls_back_to_standard_rate(self):
        scheme = make_scheme(large_entity_aid_intensity=None, standard_aid_intensity=0.25)
        assert resolve_rate(scheme, make_profile(business_size="large")) == 0.25

    def test_hospitality_rate_wins(self):
        scheme = make_scheme(hospitality_aid_intensity=0.3, startup_aid_intensity=0.6)
        profile = make_profile(primary_activity="hospitality", business_age="startup")
        assert resolve_rate(scheme, profile) == 0.3

    @pytest.mark.parametrize("hospitality_rate", [None, 0])
    def test_unset_hospitality_rate_falls_through(self, hospitality_rate):
        scheme = make_scheme(hospitality_aid_intensity=hospitality_rate)
        assert resolve_rate(scheme, make_profile(primary_activity="hospitality")) == 0.5

    def test_startup_rate_beats_gozo_bonus(self):
        scheme = make_scheme(startup_aid_intensity=0.6, sme_gozo_aid_intensity=0.65)
        profile = make_profile(business_age="startup", project_location="gozo")
        assert resolve_rate(scheme, profile) == 0.6

    def test_established_ignores_startup_rate(self):
        scheme = make_scheme(startup_aid_intensity=0.6)
        assert resolve_rate(scheme, make_profile()) == 0.5


# ---------------------------------------------------------------------------
# apply_cap
# ---------------------------------------------------------------------------

class TestApplyCap:
    def test_grant_above_ceiling_is_capped_with_note(self):
        grant, note = apply_cap(10_000, make_scheme(max_grant_amount=8_000))
        assert grant == 8_000
        assert note == "Grant capped at maximum of €8,000"

    def test_grant_below_ceiling_is_unchanged(self):
        assert apply_cap(5_000, make_scheme(max_grant_amount=8_000)) == (5_000, None)

    @pytest.mark.parametrize("ceiling", [None, 0])
    def test_no_ceiling_means_unbounded(self, ceiling):
        assert apply_cap(1_000_000, make_scheme(max_grant_amount=ceiling)) == (1_000_000, None)

    def test_cap_is_idempotent(self):
        scheme = make_scheme(max_grant_amount=8_000)
        once, _ = apply_cap(10_000, scheme)
        twice, note = apply_cap(once, scheme)
        assert twice == once
        assert note is None


# ---------------------------------------------------------------------------
# check_minimum_grant
# ---------------------------------------------------------------------------

SME_ENHANCE = NamedThreshold(
    label="SME Enhance",
    min_project_cost_sme=10_000,
    min_project_cost_large=10_000,
    min_grant_amount=10_000,
)


class TestMinimumGrant:
    def test_below_scheme_minimum_fails(self):
        check = check_minimum_grant(make_scheme(min_grant_amount=5_000), 4_000)
        assert check.name == "minimum_grant"
        assert not check.passed
        assert check.note == "Calculated grant (€4,000) is below the minimum of €5,000"

    def test_at_scheme_minimum_passes(self):
        assert check_minimum_grant(make_scheme(min_grant_amount=5_000), 5_000).passed

    def test_no_minimum_passes_zero_grant(self):
        assert check_minimum_grant(make_scheme(), 0).passed

    def test_named_minimum_fails(self):
        check = check_minimum_grant(make_scheme(named_threshold=SME_ENHANCE), 9_000)
        assert not check.passed
        assert check.note == "SME Enhance requires a minimum grant amount of €10,000"

    def test_named_minimum_reported_before_scheme_minimum(self):
        scheme = make_scheme(named_threshold=SME_ENHANCE, min_grant_amount=20_000)
        check = check_minimum_grant(scheme, 9_000)
        assert check.note == "SME Enhance requires a minimum grant amount of €10,000"
