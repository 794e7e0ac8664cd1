from app.db.database import engine, init_db
from app.storage.seed import seed_demo_users
from app.storage.sql import SqlStorage

def main():
    print("Creating database tables...")
    init_db()
    added = seed_demo_users(SqlStorage(engine))
    print(f"Database tables created successfully! ({added} demo users added)")

if __name__ == "__main__":
    main()
