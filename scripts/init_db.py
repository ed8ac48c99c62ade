from exercise_tracker.config import load_settings
from exercise_tracker.db.engine import get_engine
from exercise_tracker.db.schema import metadata

def main():
    settings = load_settings()
    engine = get_engine(settings.database_url)
    metadata.drop_all(engine)
    metadata.create_all(engine)
    print(f"DB schema created at {settings.database_url}.")

if __name__ == "__main__":
    main()
