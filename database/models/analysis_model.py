# database/models/analysis_model.py
from sqlalchemy import Column, Integer, JSON, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database.db import Base


class ExperimentAnalysis(Base):
    __tablename__ = "experiment_analyses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # One cached analysis per experiment
    experiment_id = Column(
        Integer,
        ForeignKey("experiments.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    analysis_data = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    experiment = relationship("Experiment", back_populates="analysis")
