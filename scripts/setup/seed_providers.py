# scripts/setup/seed_providers.py
"""
Seed demo resources around a city centre and one service-provider user per resource.
Safe to re-run: resources are matched by name, users by external uid.
Usage: python scripts/setup/seed_providers.py [--lat 17.385 --lng 78.4867]
"""

import argparse
import math
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import datetime
from jeevanpath.database import SessionLocal, create_tables
from jeevanpath.models.resource import Resource
from jeevanpath.models.user import User

# (name, category, km north, km east, contact)
DEMO_RESOURCES = [
    ("City Care Clinic",          "clinic",     0.8,  0.5, "+91 90000 00001"),
    ("Apollo Pharmacy Central",   "pharmacy",  -1.2,  0.9, "+91 90000 00002"),
    ("Red Cross Blood Bank",      "blood_bank", 2.5, -1.0, "+91 90000 00003"),
    ("Lakeview Hospital",         "clinic",     6.0,  4.0, "+91 90000 00004"),
    ("Suburban Health Centre",    "clinic",   -12.0,  8.0, "+91 90000 00005"),
    ("Highway Trauma Unit",       "clinic",    18.0, -9.0, "+91 90000 00006"),
]

KM_PER_DEG = 111.0


def offset(lat, lng, km_north, km_east):
    return lat + km_north / KM_PER_DEG, lng + km_east / (KM_PER_DEG * math.cos(math.radians(lat)))


def main():
    parser = argparse.ArgumentParser(description="Seed demo resources and service providers")
    parser.add_argument("--lat", type=float, default=17.385)
    parser.add_argument("--lng", type=float, default=78.4867)
    args = parser.parse_args()

    create_tables()
    db = SessionLocal()
    try:
        for i, (name, category, north, east, contact) in enumerate(DEMO_RESOURCES, start=1):
            resource = db.query(Resource).filter(Resource.name == name).first()
            if not resource:
                resource = Resource(name=name, category=category, contact=contact, is_24_hours=True,
                                    rating=4.0, services=["emergency_care"], is_verified=True,
                                    created_at=datetime.utcnow())
                db.add(resource)
            resource.set_point(*offset(args.lat, args.lng, north, east))
            db.flush()

            uid = f"provider-{i:03d}"
            user = db.query(User).filter(User.external_uid == uid).first()
            if not user:
                user = User(external_uid=uid, created_at=datetime.utcnow())
                db.add(user)
            user.name = f"Dr. {name.split()[0]} Manager"
            user.phone = contact.replace(" ", "")
            user.role = "provider"
            user.is_active = True
            user.is_service_provider = True
            user.emergency_notifications_enabled = True
            user.assigned_resource_id = resource.id
            print(f"   ✓ {name} ({category}) ← {user.name} {user.phone}")

        db.commit()
        print(f"\n✅ Seeded {len(DEMO_RESOURCES)} resources with providers around ({args.lat}, {args.lng})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
