"""
Tests for compliance scoring.
"""

import pytest

from apigov.models import Category, Severity, Violation
from apigov.policy import GovernancePolicy
from apigov.scoring import calculate_score, category_breakdown


def violation(category, severity=Severity.WARNING):
    return Violation(path="/api/items", message="test", severity=severity, category=category)


def errors(category, count):
    return [violation(category, Severity.ERROR) for _ in range(count)]


def warnings(category, count):
    return [violation(category, Severity.WARNING) for _ in range(count)]


class TestCalculateScore:
    """Tests for calculate_score."""

    def test_no_violations_scores_100(self):
        """Test that an empty violation list scores exactly 100."""
        assert calculate_score([]) == 100

    def test_single_error_weighted(self):
        """Test an error costs 1.5x the sensitivity."""
        assert calculate_score(errors(Category.SECURITY, 1)) == 85

    def test_single_warning(self):
        """Test a warning costs the sensitivity."""
        assert calculate_score(warnings(Category.NAMING, 1)) == 90

    def test_category_penalty_capped_at_weight(self):
        """Test a category cannot exceed its own weight."""
        assert calculate_score(warnings(Category.NAMING, 3)) == 80
        assert calculate_score(warnings(Category.NAMING, 50)) == 80

    def test_other_bucket_uses_default_weight(self):
        """Test uncategorized violations are capped at weight 10."""
        assert calculate_score(errors(Category.OTHER, 1)) == 90

    def test_all_categories_saturated_scores_zero(self):
        """Test the score floors at zero."""
        violations = []
        for category in Category:
            violations.extend(errors(category, 10))
        assert calculate_score(violations) == 0

    def test_total_apis_normalizes_with_half_up_rounding(self):
        """Test normalization and rounding of .5 upward."""
        # 1.5 / 2 * 10 = 7.5 -> 92.5 -> 93
        assert calculate_score(errors(Category.SECURITY, 1), total_apis=2) == 93

    def test_order_independent(self):
        """Test the score depends only on counts."""
        violations = errors(Category.SECURITY, 2) + warnings(Category.NAMING, 1) + errors(Category.RESPONSES, 1)
        assert calculate_score(violations) == calculate_score(list(reversed(violations)))

    @pytest.mark.parametrize("category", list(Category))
    @pytest.mark.parametrize("severity", list(Severity))
    def test_additional_violation_never_increases_score(self, category, severity):
        """Test monotonic non-increasing score."""
        base = errors(Category.SECURITY, 1) + warnings(Category.NAMING, 1)
        assert calculate_score(base + [violation(category, severity)]) <= calculate_score(base)

    def test_score_bounded(self):
        """Test score stays in [0, 100] for large inputs."""
        score = calculate_score(errors(Category.SECURITY, 1000) + warnings(Category.OTHER, 1000))
        assert 0 <= score <= 100

    @pytest.mark.parametrize("total_apis", [0, -1, 1.5, True])
    def test_invalid_total_apis(self, total_apis):
        """Test the normalization factor must be a positive integer."""
        with pytest.raises(ValueError):
            calculate_score([], total_apis=total_apis)

    def test_custom_policy_weights(self):
        """Test policy weights change the cap."""
        policy = GovernancePolicy(category_weights={"security": 50})
        assert calculate_score(errors(Category.SECURITY, 10), policy=policy) == 50
        assert calculate_score(errors(Category.SECURITY, 10)) == 70

    def test_custom_sensitivity(self):
        """Test the sensitivity constant is configurable."""
        policy = GovernancePolicy(sensitivity=4)
        assert calculate_score(warnings(Category.NAMING, 1), policy=policy) == 96


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_counts_and_penalties(self):
        """Test per-category counts, weights and penalties."""
        violations = errors(Category.SECURITY, 1) + warnings(Category.SECURITY, 2) + warnings(Category.NAMING, 1)
        breakdown = category_breakdown(violations)

        assert list(breakdown) == ["security", "naming"]
        security = breakdown["security"]
        assert (security.errors, security.warnings, security.weight) == (1, 2, 30)
        assert security.penalty == pytest.approx(30)
        assert breakdown["naming"].penalty == pytest.approx(10)

    def test_to_dict(self):
        """Test conversion to dictionary."""
        data = category_breakdown(errors(Category.RESPONSES, 1))["responses"].to_dict()
        assert data == {
            "category": "responses",
            "errors": 1,
            "warnings": 0,
            "weight": 25,
            "penalty": 15.0,
        }
