from sqlalchemy import Column, Integer, String, Text, Float, Boolean, ForeignKey
from compensation.database import Base


class CorporateObjective(Base):
    __tablename__ = "corporate_objectives"

    id = Column(String, primary_key=True)
    year = Column(Integer, nullable=False, index=True)
    objective_type = Column(String, nullable=False)  # billing, nps
    quarter = Column(String, nullable=True)  # null for billing, q1-q4 for nps
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_value = Column(Float, nullable=True)
    actual_value = Column(Float, nullable=True)
    gate_percentage = Column(Float, nullable=True)
    cap_percentage = Column(Float, nullable=True)


class Objective(Base):
    __tablename__ = "objectives"

    id = Column(String, primary_key=True)
    employee_id = Column(String, ForeignKey("employees.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    periodicity = Column(String, nullable=False, default="annual")  # annual, semestral, trimestral
    parent_objective_id = Column(String, ForeignKey("objectives.id"), nullable=True)
    sub_objective_number = Column(Integer, nullable=True)
    progress_percentage = Column(Float, nullable=False, default=0)
    achievement_percentage = Column(Float, nullable=True)
    is_locked = Column(Boolean, nullable=False, default=False)
    weight_pct = Column(Float, nullable=True)
