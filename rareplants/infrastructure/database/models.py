"""
SQLAlchemy models for RarePlants database tables.
"""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint, Index

from rareplants.infrastructure.database.config import Base

# Largest key an Integer primary key can hold on every supported backend
PLANT_ID_MAX = 2**31 - 1


class PlantModel(Base):
    """Plant catalog database model."""
    __tablename__ = 'plants'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)
    water_requirement = Column(Integer, nullable=False)
    adoption_date = Column(DateTime(timezone=True), nullable=True)

    # Range checks on water_requirement happen at validation time, not here
    __table_args__ = (
        CheckConstraint("length(name) > 0", name='check_plant_name_not_empty'),
        CheckConstraint("length(type) > 0", name='check_plant_type_not_empty'),
        Index('idx_plants_adoption_date', 'adoption_date'),
    )
