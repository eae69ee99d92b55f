import itertools

import pytest

from briefs.risk import (
    LIKELIHOOD_SCALE,
    RISK_LEVEL_INFO,
    SEVERITY_SCALE,
    RiskLevel,
    calculate_risk_score,
    get_likelihood_label,
    get_risk_level,
    get_risk_level_from_factors,
    get_severity_label,
    level_counts,
    risk_matrix,
)
from utils.errors import InvalidInputError

RATINGS = range(1, 6)


def test_score_is_product_over_whole_grid():
    for s, l in itertools.product(RATINGS, RATINGS):
        score = calculate_risk_score(s, l)
        assert score == s * l
        assert 1 <= score <= 25


@pytest.mark.parametrize("severity, likelihood", [(0, 3), (6, 1), (3, -1), (2, 9)])
def test_score_rejects_out_of_range(severity, likelihood):
    with pytest.raises(InvalidInputError):
        calculate_risk_score(severity, likelihood)


@pytest.mark.parametrize("bad", [True, 2.5, "3", None])
def test_score_rejects_non_integers(bad):
    with pytest.raises(InvalidInputError):
        calculate_risk_score(bad, 3)
    with pytest.raises(ValueError):
        calculate_risk_score(3, bad)


def test_level_bands_partition_one_to_twenty_five():
    expected = {
        RiskLevel.LOW: set(range(1, 5)),
        RiskLevel.MODERATE: set(range(5, 10)),
        RiskLevel.HIGH: set(range(10, 17)),
        RiskLevel.CRITICAL: set(range(17, 26)),
    }
    for level, scores in expected.items():
        for score in scores:
            assert get_risk_level(score) is level


def test_level_band_boundaries():
    assert get_risk_level(4) == "low"
    assert get_risk_level(5) == "moderate"
    assert get_risk_level(9) == "moderate"
    assert get_risk_level(10) == "high"
    assert get_risk_level(16) == "high"
    assert get_risk_level(17) == "critical"


def test_level_clamps_out_of_range_scores():
    assert get_risk_level(0) is RiskLevel.LOW
    assert get_risk_level(-12) is RiskLevel.LOW
    assert get_risk_level(26) is RiskLevel.CRITICAL
    assert get_risk_level(1000) is RiskLevel.CRITICAL


def test_grid_counts_are_8_7_7_3():
    assert level_counts() == {
        RiskLevel.LOW: 8,
        RiskLevel.MODERATE: 7,
        RiskLevel.HIGH: 7,
        RiskLevel.CRITICAL: 3,
    }


def test_level_from_factors_matches_composition():
    for s, l in itertools.product(RATINGS, RATINGS):
        assert get_risk_level_from_factors(s, l) is get_risk_level(s * l)


@pytest.mark.parametrize(
    "severity, likelihood, score, level",
    [
        (4, 3, 12, "high"),
        (1, 1, 1, "low"),
        (5, 5, 25, "critical"),
        (3, 3, 9, "moderate"),
    ],
)
def test_scenarios(severity, likelihood, score, level):
    assert calculate_risk_score(severity, likelihood) == score
    assert get_risk_level_from_factors(severity, likelihood) == level


def test_scoring_is_repeatable():
    assert calculate_risk_score(4, 3) == calculate_risk_score(4, 3)
    assert get_risk_level(12) is get_risk_level(12)
    assert get_severity_label(4) == get_severity_label(4)


def test_labels_for_valid_ratings():
    assert [get_severity_label(r) for r in RATINGS] == [
        "Negligible", "Minor", "Moderate", "Major", "Catastrophic",
    ]
    assert [get_likelihood_label(r) for r in RATINGS] == [
        "Rare", "Unlikely", "Possible", "Likely", "Almost Certain",
    ]


@pytest.mark.parametrize("bad", [0, 6, -1, 2.5, "3", None, True, [], {}])
def test_labels_unknown_for_anything_else(bad):
    assert get_severity_label(bad) == "Unknown"
    assert get_likelihood_label(bad) == "Unknown"


def test_matrix_layout():
    grid = risk_matrix()
    assert len(grid) == 5
    assert all(len(row) == 5 for row in grid)
    # top-left is severity 5, likelihood 1
    assert grid[0][0]["severity"] == 5
    assert grid[0][0]["likelihood"] == 1
    assert grid[4][4] == {"severity": 1, "likelihood": 5, "score": 5, "level": RiskLevel.MODERATE}
    assert grid[0][4]["score"] == 25


def test_scale_tables_line_up_with_labels():
    assert [e.rating for e in SEVERITY_SCALE] == list(RATINGS)
    assert [e.rating for e in LIKELIHOOD_SCALE] == list(RATINGS)
    assert set(RISK_LEVEL_INFO) == set(RiskLevel)
    assert RISK_LEVEL_INFO[RiskLevel.CRITICAL]["range"] == "17-25"
