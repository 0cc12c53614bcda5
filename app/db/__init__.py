from .database import SessionLocal, engine, Base


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = ["SessionLocal", "engine", "Base", "get_db"]
