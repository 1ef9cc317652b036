# database/models/experiment_model.py
from sqlalchemy import Column, Integer, Text, DateTime, func
from sqlalchemy.orm import relationship
from database.db import Base


class Experiment(Base):
    __tablename__ = "experiments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Catalog metadata, written by the offline ingestion batch
    title = Column(Text, nullable=False)
    authors = Column(Text, nullable=False)
    link = Column(Text, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    analysis = relationship(
        "ExperimentAnalysis",
        back_populates="experiment",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "authors": self.authors,
            "link": self.link,
        }
