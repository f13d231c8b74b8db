from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from travel_planner.config import DATABASE_URL

# Flask serves requests from worker threads; pooled SQLite connections move between them
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
