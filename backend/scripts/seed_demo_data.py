from __future__ import annotations

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.services.seed import seed_demo_data
import app.models  # noqa: F401


def main() -> None:
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_demo_data(db)
        print("Demo data seeded successfully.")


if __name__ == "__main__":
    main()
