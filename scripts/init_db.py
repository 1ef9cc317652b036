# scripts/init_db.py
import sys
import os
from sqlalchemy import inspect
from dotenv import load_dotenv

script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.join(script_dir, '..')
env_path = os.path.join(project_root, ".env.local")
if not os.path.exists(env_path):
    env_path = os.path.join(project_root, ".env")
load_dotenv(env_path)
sys.path.append(os.path.abspath(project_root))

from database.db import build_engine, init_db
from utils.settings import build_database_url

REQUIRED_TABLES = ["experiments", "experiment_analyses", "model_usage_stats", "ml_predictions"]


def main():
    print("🔄 Creating database tables...")
    engine = build_engine(build_database_url())
    try:
        init_db(engine)
        existing = set(inspect(engine).get_table_names())
        missing = [t for t in REQUIRED_TABLES if t not in existing]
        if missing:
            print(f"❌ Missing tables after init: {missing}")
            sys.exit(1)
        print("✅ Tables ready:")
        for t in REQUIRED_TABLES:
            print(f"   - {t}")
    finally:
        engine.dispose()
        print("🔌 Database connection closed")


if __name__ == "__main__":
    main()
