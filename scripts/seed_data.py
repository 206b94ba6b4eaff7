"""Seed script to populate the database with sample data."""

from datetime import date
from decimal import Decimal

from sqlalchemy import select

from app.access.actor import Actor
from app.access.store import EntityStore
from app.core.database import Base, SessionLocal, engine
from app.models.enums import Action, Entity, PropertyStatus
from app.models.property import Property
from app.schemas.user import UserCreate
from app.services.auth import create_user
from app.services.market_data import record_market_data

DEMO_PASSWORD = "password123"

AGENTS = [
    ("amina@keja.example", "Amina Wanjiru"),
    ("brian@keja.example", "Brian Otieno"),
]
SEEKERS = [
    ("carol@keja.example", "Carol Njeri"),
]

LISTINGS = [
    {
        "title": "Two bedroom apartment in Kilimani",
        "price": Decimal("85000"),
        "for_rent": True,
        "beds": 2,
        "baths": 2,
        "area_sqft": 1100,
        "city": "Nairobi",
        "region": "Nairobi",
        "status": PropertyStatus.PUBLISHED,
    },
    {
        "title": "Family home in Nyali",
        "price": Decimal("32000000"),
        "for_rent": False,
        "beds": 4,
        "baths": 3,
        "area_sqft": 2800,
        "city": "Mombasa",
        "region": "Coast",
        "status": PropertyStatus.PUBLISHED,
    },
    {
        "title": "Studio near Westlands (draft)",
        "price": Decimal("35000"),
        "for_rent": True,
        "beds": 0,
        "baths": 1,
        "city": "Nairobi",
        "region": "Nairobi",
        "status": PropertyStatus.DRAFT,
    },
]

MARKET = [
    ("Nairobi", date(2025, 1, 1), Decimal("72000"), 340),
    ("Coast", date(2025, 1, 1), Decimal("48000"), 120),
]


def seed_database() -> None:
    """Seed the database with sample data."""
    Base.metadata.create_all(bind=engine)
    service = Actor.service()

    with SessionLocal() as db:
        if db.scalar(select(Property).limit(1)):
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        agents = [
            create_user(db, UserCreate(email=email, password=DEMO_PASSWORD, name=name, role="agent"))
            for email, name in AGENTS
        ]
        for email, name in SEEKERS:
            create_user(db, UserCreate(email=email, password=DEMO_PASSWORD, name=name))
        print(f"Created {len(agents)} agents and {len(SEEKERS)} seekers")

        store = EntityStore(db)
        for index, listing in enumerate(LISTINGS):
            agent = agents[index % len(agents)]
            row = store.write(
                Entity.PROPERTIES,
                Action.INSERT,
                {**listing, "agent_id": agent.id},
                service,
            )
            print(f"Created property: {row.title} ({row.status})")

        for region, period, avg_price, count in MARKET:
            record_market_data(db, service, region, period, avg_price, count)
        print(f"Created {len(MARKET)} market data rows")

        print("\nSeed data created successfully!")
        print(f"Log in with any seeded email and password '{DEMO_PASSWORD}'.")


if __name__ == "__main__":
    seed_database()
