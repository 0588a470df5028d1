# create_tables.py
"""
Create the database schema and seed two sample admins.

    python create_tables.py           # create missing tables, seed if no admin exists
    python create_tables.py --reset   # drop everything first
"""
import argparse

from teamtasks.database import Base, create_db_engine, create_session_factory, init_db
from teamtasks.models.user import User, UserRole
from teamtasks.services.tenant_registry import TenantRegistry
from teamtasks.utils.security import hash_password

SAMPLE_PASSWORD = "password123"
SAMPLE_ADMINS = [
    ("admin1", "admin1@company.com"),
    ("admin2", "admin2@company.com"),
]


def create_tables(reset: bool = False, url: str = None):
    """Create all tables, optionally dropping the existing ones first"""
    engine = create_db_engine(url)
    if reset:
        Base.metadata.drop_all(bind=engine)
        print("🗑️  Dropped existing tables")
    init_db(engine)
    print("✅ All tables created successfully!")
    return engine


def seed_admins(engine):
    """Create the sample admins when the database has none"""
    db = create_session_factory(engine=engine)()
    try:
        if db.query(User).filter(User.role == UserRole.ADMIN).count():
            print("ℹ️  Admins already present, skipping seed")
            return []

        registry = TenantRegistry(db)
        created = []
        for username, email in SAMPLE_ADMINS:
            admin = User(
                username=username,
                email=email,
                hashed_password=hash_password(SAMPLE_PASSWORD),
                role=UserRole.ADMIN,
                admin_code=registry.mint_code(),
            )
            db.add(admin)
            # flush so the next mint_code sees this code
            db.flush()
            created.append(admin)
        db.commit()

        print("📋 Sample Admins:")
        for admin in created:
            print(f"   {admin.username} / {SAMPLE_PASSWORD} | Admin Code: {admin.admin_code}")
        return created
    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding admins: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the Team Tasks schema")
    parser.add_argument("--reset", action="store_true", help="drop all tables before creating them")
    args = parser.parse_args()

    seed_admins(create_tables(reset=args.reset))
