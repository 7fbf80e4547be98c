from sqlalchemy import Column, String, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from compensation.database import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    department_id = Column(String, ForeignKey("departments.id"), nullable=True)
    seniority_level = Column(String, nullable=True)  # "1.1" .. "5.4"
    hire_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="active")  # active, inactive

    department = relationship("Department", lazy="joined")


class SeniorityHistory(Base):
    __tablename__ = "seniority_history"

    id = Column(String, primary_key=True)
    employee_id = Column(String, ForeignKey("employees.id"), nullable=False, index=True)
    previous_level = Column(String, nullable=True)
    new_level = Column(String, nullable=False)
    effective_date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
