#!/usr/bin/env python3
"""
ローカル開発用のデモデータ投入。
  python -m scripts.seed_demo [--count 24] [--reset]
"""
import argparse
import random
import uuid
from datetime import timedelta

from app.db import Base, SessionLocal, engine, utcnow
from app.data.locations import LOCATIONS
from app.logging_config import setup_logger
from app.models import Profile, ProfileInteraction, ProfileView, Report

logger = setup_logger("seed_demo")

NAMES = ["Nino", "Mariam", "Salome", "Ana", "Tamar", "Elene", "Natia", "Keti", "Sopo", "Lika"]
GENDERS = ["female", "female", "female", "male", "transsexual"]
INTERACTION_TYPES = ["phone", "whatsapp", "viber", "instagram"]


def _maybe_expiry(now, chance):
    if random.random() >= chance:
        return None
    # 期限切れのティアも混ぜる
    return now + timedelta(days=random.randint(-10, 30))


def make_profile(now):
    city = random.choice(LOCATIONS)
    district = random.choice(city["districts"])["id"]
    name = random.choice(NAMES)
    pid = str(uuid.uuid4())
    return Profile(
        id=pid,
        role="escort",
        email=f"demo-{pid[:8]}@example.com",
        slug=f"{name.lower()}-{city['id']}-{pid[:8]}",
        name=name,
        phone=f"+9955{random.randint(10000000, 99999999)}",
        whatsapp_available=random.random() < 0.7,
        viber_available=random.random() < 0.4,
        city=city["name"]["en"],
        district=None if district == "all" else district,
        gender=random.choice(GENDERS),
        about="Demo profile",
        public_expiry=now + timedelta(days=random.randint(-5, 60)),
        gold_expires_at=_maybe_expiry(now, 0.2),
        silver_expires_at=_maybe_expiry(now, 0.3),
        featured_expires_at=_maybe_expiry(now, 0.2),
        verified_photos_expiry=_maybe_expiry(now, 0.5),
        last_active=now - timedelta(seconds=random.randint(0, 7 * 24 * 3600)),
        created_at=now - timedelta(days=random.randint(0, 120)),
        updated_at=now,
    )


def seed(count, reset):
    if reset:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    now = utcnow()
    db = SessionLocal()
    try:
        profiles = [make_profile(now) for _ in range(count)]
        db.add_all(profiles)
        db.flush()

        for p in profiles:
            for _ in range(random.randint(0, 40)):
                db.add(
                    ProfileView(
                        id=str(uuid.uuid4()),
                        profile_id=p.id,
                        viewer_ip="127.0.0.1",
                        viewed_at=now - timedelta(minutes=random.randint(0, 60 * 24 * 45)),
                    )
                )
            for _ in range(random.randint(0, 10)):
                db.add(
                    ProfileInteraction(
                        id=str(uuid.uuid4()),
                        profile_id=p.id,
                        type=random.choice(INTERACTION_TYPES),
                        interactor_ip="127.0.0.1",
                        interacted_at=now - timedelta(minutes=random.randint(0, 60 * 24 * 45)),
                    )
                )

        db.add(
            Report(
                id=str(uuid.uuid4()),
                profile_id=profiles[0].id if profiles else None,
                reason="fake_profile",
                description="Demo report",
                status="pending",
            )
        )
        db.commit()
    finally:
        db.close()

    logger.info(f"seeded {count} demo profiles")


def main():
    parser = argparse.ArgumentParser(description="Seed demo data")
    parser.add_argument("--count", type=int, default=24)
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    seed(args.count, args.reset)


if __name__ == "__main__":
    main()
