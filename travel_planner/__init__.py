def init_db():
    """Create tables (simple dev mode)."""
    from travel_planner.db import engine
    from travel_planner.models import Base

    Base.metadata.create_all(bind=engine)
