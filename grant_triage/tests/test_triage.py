"""Tests for the triage engine: per-scheme evaluation and ranking."""

import pytest

from grant_triage.catalog import attach_named_threshold
from grant_triage.models import GrantScheme, ProjectSubmission
from grant_triage.triage import evaluate_scheme, find_all_matching_grants, find_best_grant, select_best
from grant_triage.triage.engine import BONUS_REGION_NOTE, NO_COST_MATCH_NOTE

from .factories import make_costs, make_profile, make_scheme


# ---------------------------------------------------------------------------
# evaluate_scheme
# ---------------------------------------------------------------------------

class TestEvaluateScheme:
    def test_eligible_result_fields(self):
        scheme = make_scheme(eligible_costs={"equipment_machinery": True, "vehicles": True})
        profile = make_profile(costs=make_costs(equipment_machinery=60_000, vehicles=20_000))

        result = evaluate_scheme(scheme, profile)

        assert result.is_eligible
        assert result.grant_id == "scheme-1"
        assert result.scheme_name == "Test Scheme"
        assert result.total_eligible_costs == 80_000
        assert result.applicable_aid_intensity == 0.5
        assert result.estimated_max_grant == 40_000
        assert result.matched_cost_categories == ["Equipment & Machinery", "Vehicles"]
        assert result.match_score == 35
        assert result.exclusion_reason is None
        assert [c.name for c in result.checks][-1] == "minimum_grant"

    def test_gozo_sme_gets_bonus_rate_and_note(self):
        scheme = make_scheme(sme_gozo_aid_intensity=0.65)
        result = evaluate_scheme(scheme, make_profile(project_location="gozo"))

        assert result.applicable_aid_intensity == 0.65
        assert result.estimated_max_grant == pytest.approx(39_000)
        assert BONUS_REGION_NOTE in result.notes

    def test_de_minimis_ceiling_excludes(self):
        scheme = make_scheme(aid_framework="de_minimis")
        result = evaluate_scheme(scheme, make_profile(has_exceeded_de_minimis=True))

        assert not result.is_eligible
        assert result.match_score == 0
        assert result.exclusion_reason == (
            "Excluded: You have received > €300,000 in state aid (De Minimis limit exceeded)"
        )

    def test_grant_is_capped(self):
        scheme = make_scheme(max_grant_amount=8_000)
        result = evaluate_scheme(scheme, make_profile(costs=make_costs(equipment_machinery=20_000)))

        assert result.is_eligible
        assert result.estimated_max_grant == 8_000
        assert "Grant capped at maximum of €8,000" in result.notes

    def test_minimum_grant_gate_overrides_filters(self):
        scheme = GrantScheme(**attach_named_threshold({
            "id": "sme-enhance",
            "scheme_name": "SME Enhance",
            "scheme_code": "BE-SME-ENHANCE",
            "sme_aid_intensity": 0.45,
            "eligible_costs": {"equipment_machinery": True},
            "is_active": True,
        }))
        profile = make_profile(costs=make_costs(equipment_machinery=15_000))

        result = evaluate_scheme(scheme, profile)

        assert not result.is_eligible
        assert result.match_score == 0
        assert result.estimated_max_grant == pytest.approx(6_750)
        assert result.exclusion_reason == "SME Enhance requires a minimum grant amount of €10,000"
        assert all(c.passed for c in result.checks[:-1])

    def test_no_cost_match_note_on_eligible_result(self):
        scheme = make_scheme(eligible_costs={"vehicles": True})
        result = evaluate_scheme(scheme, make_profile())

        assert result.is_eligible
        assert result.estimated_max_grant == 0
        assert result.match_score == 25
        assert NO_COST_MATCH_NOTE in result.notes

    def test_missing_cost_map_matches_nothing(self):
        result = evaluate_scheme(make_scheme(eligible_costs=None), make_profile())
        assert result.total_eligible_costs == 0
        assert result.estimated_max_grant == 0

    def test_ineligible_result_keeps_estimate_and_all_notes(self):
        scheme = make_scheme(startup_required=True, allowed_legal_structures=["partnership"])
        result = evaluate_scheme(scheme, make_profile())

        assert not result.is_eligible
        assert result.estimated_max_grant == 30_000
        assert len(result.notes) == 2
        assert NO_COST_MATCH_NOTE not in result.notes

    def test_exclusion_reason_is_serialized(self):
        scheme = make_scheme(startup_required=True)
        dumped = evaluate_scheme(scheme, make_profile()).model_dump()
        assert dumped["exclusion_reason"].startswith("This scheme is only available for startups")

    def test_evaluation_is_deterministic(self):
        scheme = make_scheme(sme_gozo_aid_intensity=0.6, max_grant_amount=25_000)
        profile = make_profile(project_location="gozo")
        assert evaluate_scheme(scheme, profile) == evaluate_scheme(scheme, profile)

    @pytest.mark.parametrize("extra", [1, 500, 25_000])
    def test_more_eligible_cost_never_lowers_estimate(self, extra):
        scheme = make_scheme()
        before = evaluate_scheme(scheme, make_profile(costs=make_costs(equipment_machinery=10_000)))
        after = evaluate_scheme(scheme, make_profile(costs=make_costs(equipment_machinery=10_000 + extra)))

        assert after.total_eligible_costs >= before.total_eligible_costs
        assert after.estimated_max_grant >= before.estimated_max_grant


# ---------------------------------------------------------------------------
# find_best_grant
# ---------------------------------------------------------------------------

class TestFindBestGrant:
    def test_highest_grant_wins(self):
        schemes = [
            make_scheme(id="a", sme_aid_intensity=0.5),
            make_scheme(id="b", sme_aid_intensity=0.6),
        ]
        assert find_best_grant(make_profile(), schemes).grant_id == "b"

    def test_match_score_breaks_grant_tie(self):
        costs = make_costs(equipment_machinery=60_000, vehicles=10_000)
        schemes = [
            make_scheme(id="a-scheme", max_grant_amount=10_000),
            make_scheme(
                id="x-scheme",
                max_grant_amount=10_000,
                eligible_costs={"equipment_machinery": True, "vehicles": True},
            ),
        ]
        best = find_best_grant(make_profile(costs=costs), schemes)
        assert best.grant_id == "x-scheme"
        assert best.match_score == 35

    def test_scheme_id_breaks_full_tie(self):
        schemes = [make_scheme(id="zeta"), make_scheme(id="alpha")]
        assert find_best_grant(make_profile(), schemes).grant_id == "alpha"

    def test_ineligible_schemes_never_win(self):
        schemes = [
            make_scheme(id="big", sme_aid_intensity=0.9, startup_required=True),
            make_scheme(id="small", sme_aid_intensity=0.1),
        ]
        assert find_best_grant(make_profile(), schemes).grant_id == "small"

    def test_none_when_nothing_eligible(self):
        assert find_best_grant(make_profile(), [make_scheme(startup_required=True)]) is None

    def test_none_when_all_inactive(self):
        schemes = [make_scheme(id="a", is_active=False), make_scheme(id="b", is_active=False)]
        assert find_best_grant(make_profile(), schemes) is None

    def test_empty_catalog(self):
        assert find_best_grant(make_profile(), []) is None

    def test_select_best_from_ranked_results_matches_find_best(self):
        costs = make_costs(equipment_machinery=60_000, vehicles=10_000)
        schemes = [
            make_scheme(id="a-scheme", max_grant_amount=10_000),
            make_scheme(
                id="x-scheme",
                max_grant_amount=10_000,
                eligible_costs={"equipment_machinery": True, "vehicles": True},
            ),
            make_scheme(id="closed", sme_aid_intensity=0.9, startup_required=True),
        ]
        profile = make_profile(costs=costs)

        ranked = find_all_matching_grants(profile, schemes)

        assert select_best(ranked) == find_best_grant(profile, schemes)
        assert select_best(ranked).grant_id == "x-scheme"

    def test_select_best_without_eligible_results(self):
        results = find_all_matching_grants(make_profile(), [make_scheme(startup_required=True)])
        assert select_best(results) is None


# ---------------------------------------------------------------------------
# find_all_matching_grants
# ---------------------------------------------------------------------------

class TestFindAllMatchingGrants:
    def test_eligible_before_ineligible(self):
        schemes = [
            make_scheme(id="rich-but-closed", sme_aid_intensity=0.9, startup_required=True),
            make_scheme(id="modest", sme_aid_intensity=0.2),
        ]
        results = find_all_matching_grants(make_profile(), schemes)
        assert [r.grant_id for r in results] == ["modest", "rich-but-closed"]

    def test_grant_descending_within_groups(self):
        schemes = [
            make_scheme(id="e-low", sme_aid_intensity=0.2),
            make_scheme(id="e-high", sme_aid_intensity=0.6),
            make_scheme(id="i-low", sme_aid_intensity=0.1, startup_required=True),
            make_scheme(id="i-high", sme_aid_intensity=0.7, startup_required=True),
        ]
        results = find_all_matching_grants(make_profile(), schemes)
        assert [r.grant_id for r in results] == ["e-high", "e-low", "i-high", "i-low"]

    def test_inactive_schemes_are_dropped(self):
        schemes = [
            make_scheme(id="on"),
            make_scheme(id="off", is_active=False),
            make_scheme(id="unset", is_active=None),
        ]
        results = find_all_matching_grants(make_profile(), schemes)
        assert sorted(r.grant_id for r in results) == ["on", "unset"]

    def test_all_inactive_yields_empty_list(self):
        assert find_all_matching_grants(make_profile(), [make_scheme(is_active=False)]) == []

    def test_order_is_reproducible(self):
        schemes = [make_scheme(id=f"s{i}") for i in range(5)]
        first = find_all_matching_grants(make_profile(), schemes)
        second = find_all_matching_grants(make_profile(), list(reversed(schemes)))
        assert [r.grant_id for r in first] == [r.grant_id for r in second]

    def test_does_not_mutate_inputs(self):
        schemes = [make_scheme(id="b"), make_scheme(id="a")]
        profile = make_profile()
        snapshot = [s.model_dump() for s in schemes], profile.model_dump()

        find_all_matching_grants(profile, schemes)

        assert ([s.model_dump() for s in schemes], profile.model_dump()) == snapshot
        assert [s.id for s in schemes] == ["b", "a"]

    def test_sample_catalog_ranking(self, catalog, submission_path):
        with open(submission_path, encoding="utf-8") as f:
            profile = ProjectSubmission.model_validate_json(f.read()).to_applicant_profile()

        results = find_all_matching_grants(profile, catalog)

        assert [r.grant_id for r in results] == [
            "business-development",
            "invest-2024",
            "sme-enhance",
            "digitalise",
            "business-start",
            "startup-finance",
        ]
        assert [r.is_eligible for r in results] == [True, True, True, True, False, False]
        assert results[0].estimated_max_grant == 65_000
        assert results[1].matched_cost_categories == [
            "Construction",
            "Equipment & Machinery",
            "Hardware & Software",
        ]

    def test_sample_catalog_best(self, catalog, submission_path):
        with open(submission_path, encoding="utf-8") as f:
            profile = ProjectSubmission.model_validate_json(f.read()).to_applicant_profile()

        best = find_best_grant(profile, catalog)

        assert best.grant_id == "business-development"
        assert best.match_score == 45
