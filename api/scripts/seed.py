"""Seed the database with demo venues in São Paulo.

Run with: python -m scripts.seed
Creates the sport catalogue, two owners with an establishment and courts each,
a demo player, one confirmed booking and one blocked slot for tomorrow.
"""

import asyncio
from datetime import time, timedelta
from decimal import Decimal

from sqlalchemy import select

from vestiario.core.auth import hash_password
from vestiario.core.database import async_session_factory, engine
from vestiario.models import (
    Account,
    AccountRole,
    Base,
    BlockedSlot,
    Booking,
    BookingStatus,
    Court,
    Establishment,
    SlotClaim,
    Sport,
)
from vestiario.services.availability import venue_now
from vestiario.services.booking_rules import calc_end_time
from vestiario.services.pricing import calculate_total_price

SPORTS = [
    ("Futebol", "⚽"),
    ("Futsal", "⚽"),
    ("Tênis", "🎾"),
    ("Padel", "🎾"),
    ("Vôlei", "🏐"),
    ("Beach Tennis", "🏖️"),
    ("Basquete", "🏀"),
]

VENUES = [
    {
        "owner": {"email": "dono@arenacentro.com.br", "full_name": "Carlos Mendes", "phone": "11 99999-0001"},
        "establishment": {
            "name": "Arena Centro",
            "description": "Quadras cobertas no centro da cidade.",
            "address": "Rua Augusta, 1200",
            "city": "São Paulo",
            "state": "SP",
        },
        "courts": [
            {"name": "Quadra Society 1", "sport": "Futebol", "hourly_rate": Decimal("100.00"), "is_indoor": True},
            {"name": "Quadra Society 2", "sport": "Futebol", "hourly_rate": Decimal("120.00"), "is_indoor": True},
            {"name": "Quadra de Futsal", "sport": "Futsal", "hourly_rate": Decimal("90.00"), "is_indoor": True},
        ],
    },
    {
        "owner": {"email": "dona@clubepraia.com.br", "full_name": "Fernanda Lima", "phone": "11 99999-0002"},
        "establishment": {
            "name": "Clube da Praia",
            "description": "Areia e saibro na zona sul.",
            "address": "Av. Interlagos, 3500",
            "city": "São Paulo",
            "state": "SP",
        },
        "courts": [
            {"name": "Beach 1", "sport": "Beach Tennis", "hourly_rate": Decimal("80.00")},
            {"name": "Beach 2", "sport": "Beach Tennis", "hourly_rate": Decimal("80.00")},
            {"name": "Saibro Central", "sport": "Tênis", "hourly_rate": Decimal("150.00")},
            {"name": "Padel Panorâmica", "sport": "Padel", "hourly_rate": Decimal("140.00"), "is_indoor": True},
        ],
    },
]


async def seed():
    # Create tables (in dev; production would run migrations)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        # Check if already seeded
        result = await db.execute(select(Account).where(Account.email == "jogador@example.com"))
        if result.scalar_one_or_none():
            print("Database already seeded, skipping.")
            return

        db.add_all(Sport(name=name, icon=icon) for name, icon in SPORTS)

        first_court = None
        total_courts = 0
        for venue in VENUES:
            owner = Account(hashed_password=hash_password("owner123"), role=AccountRole.OWNER, **venue["owner"])
            db.add(owner)
            await db.flush()

            establishment = Establishment(owner_id=owner.id, **venue["establishment"])
            db.add(establishment)
            await db.flush()

            for court_data in venue["courts"]:
                court = Court(
                    owner_id=owner.id,
                    establishment=establishment,
                    schedules=[],
                    address=establishment.address,
                    city=establishment.city,
                    state=establishment.state,
                    rating=Decimal("4.5"),
                    **court_data,
                )
                db.add(court)
                total_courts += 1
                first_court = first_court or court

        player = Account(
            email="jogador@example.com",
            hashed_password=hash_password("player123"),
            full_name="João Silva",
            phone="11 98888-0000",
            role=AccountRole.PLAYER,
        )
        db.add(player)
        await db.flush()

        # Tomorrow: 14:00-16:00 booked, 11:00 under maintenance
        tomorrow = venue_now().date() + timedelta(days=1)
        booking = Booking(
            court=first_court,
            player=player,
            booking_date=tomorrow,
            start_time=time(14, 0),
            end_time=calc_end_time(time(14, 0), 2),
            duration_hours=2,
            status=BookingStatus.CONFIRMED,
            total_price=calculate_total_price(first_court.hourly_rate, 2),
            sport=first_court.sport,
            players=10,
        )
        db.add(booking)
        await db.flush()
        db.add_all(
            SlotClaim(booking_id=booking.id, court_id=first_court.id, slot_date=tomorrow, slot_hour=hour)
            for hour in booking.hours
        )
        db.add(BlockedSlot(court_id=first_court.id, slot_date=tomorrow, slot_time=time(11, 0), reason="Manutenção"))

        await db.commit()

        print(f"Seeded {len(SPORTS)} sports, {len(VENUES)} establishments, {total_courts} courts")
        print(f"  booking on {first_court.name} {tomorrow} 14:00-16:00, block at 11:00")
        print("  test accounts:")
        for venue in VENUES:
            print(f"    {venue['owner']['email']} / owner123 (owner)")
        print("    jogador@example.com / player123 (player)")


if __name__ == "__main__":
    asyncio.run(seed())
