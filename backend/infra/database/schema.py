from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

# Current schema version
CURRENT_SCHEMA_VERSION = 1

def get_db_schema_sql() -> str:
    """
    DuckDB does not support ON DELETE CASCADE and updates on tables with
    physical FOREIGN KEY clauses are fragile, so tables only carry primary
    keys and UNIQUE constraints. Cascades are done by the repositories.
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_users_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_genres_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_rap_entries_id START 1;
    CREATE SEQUENCE IF NOT EXISTS seq_rap_likes_id START 1;

    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_users_id'),
        username VARCHAR UNIQUE NOT NULL,
        email VARCHAR UNIQUE NOT NULL,
        password VARCHAR,
        avatar_url VARCHAR,
        google_id VARCHAR UNIQUE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS genres (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_genres_id'),
        name VARCHAR UNIQUE NOT NULL,
        icon VARCHAR,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE TABLE IF NOT EXISTS rap_entries (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_rap_entries_id'),
        user_id INTEGER NOT NULL,
        genre_id INTEGER NOT NULL,
        topic VARCHAR NOT NULL,
        stanza_count INTEGER NOT NULL,
        explicit BOOLEAN DEFAULT FALSE,
        content VARCHAR NOT NULL,
        is_public BOOLEAN DEFAULT TRUE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_rap_entries_user_id ON rap_entries (user_id);
    CREATE INDEX IF NOT EXISTS idx_rap_entries_created_at ON rap_entries (created_at);

    CREATE TABLE IF NOT EXISTS rap_likes (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_rap_likes_id'),
        user_id INTEGER NOT NULL,
        rap_id INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (user_id, rap_id)
    );

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    try:
        result = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'"))
        row = result.fetchone()
        return int(row[0]) if row else 0
    except Exception: return 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = :version
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing DuckDB schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < CURRENT_SCHEMA_VERSION:
                set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise e
