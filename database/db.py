# File: database/db.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base


Base = declarative_base()


def build_engine(database_url: str, **overrides) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False, **overrides)

    options = dict(
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_pre_ping=True,
        connect_args={"connect_timeout": 10},
    )
    options.update(overrides)
    return create_engine(database_url, **options)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    from database.models.experiment_model import Experiment
    from database.models.analysis_model import ExperimentAnalysis
    from database.models.ml_models import ModelUsageStat, MLPrediction
    Base.metadata.create_all(bind=engine)
