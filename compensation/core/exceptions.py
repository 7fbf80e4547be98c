class CompensationError(Exception):
    """Base class for errors raised by the compensation package."""


class ConfigurationError(CompensationError):
    """A seniority level that cannot be mapped to a weight band."""

    def __init__(self, level, message=None):
        self.level = level
        super().__init__(message or f"Malformed seniority level: {level!r}")


class EmployeeNotFoundError(CompensationError):
    def __init__(self, employee_id):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")
