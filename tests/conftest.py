import pytest


@pytest.fixture
def corporate_2024():
    """Billing exactly on target and every NPS quarter above target"""
    rows = [
        {"objective_type": "billing", "year": 2024, "target_value": 1_000_000, "actual_value": 1_000_000},
    ]
    for quarter in ("q1", "q2", "q3", "q4"):
        rows.append({"objective_type": "nps", "year": 2024, "quarter": quarter, "target_value": 50, "actual_value": 60})
    return rows


@pytest.fixture
def senior_employee():
    return {
        "id": "emp-1",
        "first_name": "Ana",
        "last_name": "Alvarez",
        "department": "Engineering",
        "seniority_level": "3.1",
        "hire_date": None,
    }
