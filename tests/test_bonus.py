from datetime import date

import pytest
from pydantic import ValidationError

from compensation.schemas.bonus import BonusStatus
from compensation.services.bonus import calculate_employee_bonus


def test_scenario_full_year(senior_employee, corporate_2024):
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 50, "is_locked": True}]
    result = calculate_employee_bonus(senior_employee, corporate_2024, objectives, 2024)

    # Sr.: company 60 / area 40
    assert result.corporate.total_completion == 100
    assert result.bonus.company_component == 60
    assert result.bonus.personal_component == 20
    assert result.bonus.base == 80
    assert result.bonus.final_percentage == 80
    assert result.bonus.status == BonusStatus.CALCULATED
    assert result.warnings == []


def test_mid_year_hire_is_prorated(senior_employee, corporate_2024):
    employee = dict(senior_employee, hire_date=date(2024, 7, 1))
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 50}]
    result = calculate_employee_bonus(employee, corporate_2024, objectives, 2024)

    assert result.pro_rata.months == 6
    assert result.bonus.base == 80
    assert result.bonus.final_percentage == 40
    assert result.final_percentage == 40


def test_partial_evaluation_is_pending(senior_employee, corporate_2024):
    objectives = [
        {"id": "o1", "year": 2024, "achievement_percentage": 90},
        {"id": "o2", "year": 2024, "progress_percentage": 100},
    ]
    result = calculate_employee_bonus(senior_employee, corporate_2024, objectives, 2024)

    assert result.bonus.status == BonusStatus.PENDING_EVALUATION
    assert result.bonus.final_percentage is None
    assert result.bonus.base is None
    assert result.bonus.personal_component is None
    assert result.personal.evaluated_count == 1
    assert result.personal.total_count == 2


def test_no_personal_objectives(senior_employee, corporate_2024):
    result = calculate_employee_bonus(senior_employee, corporate_2024, [], 2024)
    assert result.bonus.status == BonusStatus.NO_PERSONAL_OBJECTIVES
    assert result.bonus.final_percentage is None
    assert result.bonus.company_component == 60
    assert result.personal.average_completion is None


def test_missed_gate_keeps_nps_share(senior_employee, corporate_2024):
    corporate = [dict(corporate_2024[0], actual_value=850_000)] + corporate_2024[1:]
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 100}]
    result = calculate_employee_bonus(senior_employee, corporate, objectives, 2024)

    assert not result.bonus.gate_met
    assert result.corporate.billing.completion == 0
    assert result.corporate.total_completion == 50
    assert result.bonus.final_percentage == pytest.approx(30 + 40)


def test_billing_over_target_lifts_the_bonus(senior_employee, corporate_2024):
    corporate = [dict(corporate_2024[0], actual_value=1_400_000)] + corporate_2024[1:]
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 100}]
    result = calculate_employee_bonus(senior_employee, corporate, objectives, 2024)
    # billing 140, NPS 100 -> corporate 120
    assert result.bonus.final_percentage == pytest.approx(120 * 0.6 + 40)


def test_missing_corporate_data_is_reported(senior_employee):
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 100}]
    result = calculate_employee_bonus(senior_employee, [], objectives, 2024)

    assert not result.corporate.billing.configured
    assert not result.corporate.nps.configured
    assert len(result.warnings) == 2
    assert result.bonus.final_percentage == 40


def test_other_years_are_ignored(senior_employee, corporate_2024):
    corporate = corporate_2024 + [
        {"objective_type": "billing", "year": 2023, "target_value": 10, "actual_value": 1},
    ]
    objectives = [
        {"id": "o1", "year": 2024, "achievement_percentage": 100},
        {"id": "o2", "year": 2023, "achievement_percentage": 0},
    ]
    result = calculate_employee_bonus(senior_employee, corporate, objectives, 2024)
    assert result.corporate.billing.target == 1_000_000
    assert result.personal.total_count == 1


def test_malformed_seniority_defaults_to_junior(senior_employee, corporate_2024):
    employee = dict(senior_employee, seniority_level="senior")
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 100}]
    result = calculate_employee_bonus(employee, corporate_2024, objectives, 2024)

    assert result.weights.is_default
    assert result.weights.category == 1
    assert any("senior" in w for w in result.warnings)
    assert result.employee.seniority_label == "senior"
    assert result.bonus.final_percentage == 100


def test_year_end_seniority_takes_precedence(senior_employee, corporate_2024):
    employee = dict(senior_employee, seniority_at_year_end="1.2")
    result = calculate_employee_bonus(employee, corporate_2024, [], 2024)
    assert result.weights.category == 1
    assert result.employee.seniority_level == "3.1"
    assert result.employee.effective_seniority_level == "1.2"


def test_employee_summary(senior_employee, corporate_2024):
    result = calculate_employee_bonus(senior_employee, corporate_2024, [], 2024)
    assert result.employee.name == "Ana Alvarez"
    assert result.employee.department == "Engineering"
    assert result.employee.seniority_label == "Lev. 3.1 - Sr."


def test_result_serializes_for_screens(senior_employee, corporate_2024):
    result = calculate_employee_bonus(senior_employee, corporate_2024, [], 2024)
    payload = result.model_dump(mode="json")
    assert payload["bonus"]["status"] == "no_personal_objectives"
    assert payload["corporate"]["nps"]["quarters"][0]["quarter"] == "q1"


def test_nps_row_without_quarter_fails_fast(senior_employee):
    with pytest.raises(ValidationError):
        calculate_employee_bonus(
            senior_employee, [{"objective_type": "nps", "year": 2024, "target_value": 1}], [], 2024
        )


def test_hired_after_the_year_gets_no_bonus(senior_employee, corporate_2024):
    employee = dict(senior_employee, hire_date=date(2025, 3, 1))
    objectives = [{"id": "o1", "year": 2024, "achievement_percentage": 100}]
    result = calculate_employee_bonus(employee, corporate_2024, objectives, 2024)

    assert result.bonus.status == BonusStatus.NOT_EMPLOYED
    assert result.bonus.final_percentage is None
    assert result.bonus.base is None
    assert result.pro_rata.factor == 1
    assert any("2025-03-01" in w for w in result.warnings)
