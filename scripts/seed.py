from pathlib import Path

from app.core.logging import setup_logging
from app.db.session import engine, Session, init_db
from app.db.seed import load_seed_yaml, seed_all

SEED_PATH = Path(__file__).resolve().parent.parent / "app" / "db" / "seed_data.yaml"


def run_seed(seed_path: Path = SEED_PATH):
    setup_logging()
    init_db()
    with Session(engine) as session:
        seed_all(session, load_seed_yaml(seed_path))


if __name__ == "__main__":
    run_seed()
