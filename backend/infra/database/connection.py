from sqlmodel import create_engine, Session
import os
from config import settings
from infra.database.schema import init_raw_db
from utils.logger import get_logger

logger = get_logger(__name__)

# DB path from settings
DB_PATH = settings.DB_PATH
os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)

DATABASE_URL = f"duckdb:///{DB_PATH}"

connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
engine = create_engine(
    DATABASE_URL,
    pool_size=5,
    max_overflow=10,
    connect_args=connect_args
)

def init_db():
    """
    Startup initialization: create tables and sequences, then seed the
    default genres if the genre table is empty.
    """
    from utils.seeding import seed_initial_data

    try:
        init_raw_db(engine)

        with Session(engine) as session:
            seed_initial_data(session)

    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        raise e

def close_db():
    """
    Dispose of the engine. Called from the lifespan handler in main.py.
    """
    engine.dispose()

def get_session():
    with Session(engine) as session:
        yield session
