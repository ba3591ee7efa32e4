# create_tables.py
from nexgig.core.config import Settings
from nexgig.database import Database


def create_db_and_tables():
    settings = Settings()
    database = Database(settings.database_url, echo=settings.sql_echo)
    try:
        database.create_all()
    finally:
        database.dispose()

if __name__ == "__main__":
    create_db_and_tables()
