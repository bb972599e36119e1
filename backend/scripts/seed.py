# scripts/seed.py
import asyncio
import random

from livingbook.db.session import AsyncSessionLocal, init_models
from livingbook.db.crud_users import create_user
from livingbook.db.crud_properties import create_property, create_featured


async def seed():
    # create tables (no migrations in this project)
    await init_models()
    async with AsyncSessionLocal() as db:
        # hosts
        hosts = []
        for i in range(3):
            host, _ = await create_user(db, email=f"host{i}@livingbook.dev", name=f"Host {i}")
            hosts.append(host)
        # properties sample
        locations = ["Dhaka", "Chattogram", "Sylhet", "Cox's Bazar"]
        props = []
        for i in range(12):
            host = random.choice(hosts)
            prop = await create_property(
                db,
                {
                    "title": f"Room {i}",
                    "description": "Nice room",
                    "price": 50 + i * 10,
                    "location": random.choice(locations),
                    "images": ["https://placehold.co/600x400"],
                    "host_email": host.email,
                },
                attributes={"rating": round(random.uniform(3.5, 5.0), 1)},
            )
            props.append(prop)
        for prop in random.sample(props, 4):
            await create_featured(
                db,
                title=prop.title,
                property_id=prop.id,
                image=prop.images[0],
                description=prop.description,
            )
        print("Seed complete")


if __name__ == "__main__":
    asyncio.run(seed())
