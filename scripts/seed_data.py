"""Script to seed demo data into the database."""

from datetime import date, timedelta
from decimal import Decimal
import asyncio

from components.account.models import Account
from components.appointment.models import Appointment
from components.client.models import Client
from components.core.init_db import db_manager
from components.core.security import hash_password
from components.service.models import Service
from components.transaction.models import Transaction


async def seed_data():
    """Seed one account per plan plus an administrator, with sample records."""
    await db_manager.reset_tables()

    async with db_manager.get_db() as db:
        accounts = [
            Account(email="free@proserv.app", full_name="Ana Souza", plan="free",
                    password=hash_password("password123")),
            Account(email="basic@proserv.app", full_name="Bruno Lima", plan="basic",
                    password=hash_password("password123")),
            Account(email="premium@proserv.app", full_name="Carla Dias", plan="premium",
                    password=hash_password("password123")),
            Account(email="admin@proserv.app", full_name="Admin", plan="premium", role="admin",
                    password=hash_password("password123")),
        ]
        for account in accounts:
            db.add(account)
        await db.commit()

        today = date.today()
        for account in accounts[:3]:
            clients = [
                Client(owner_id=account.id, name="Maria Oliveira", phone="11 99999-0001"),
                Client(owner_id=account.id, name="João Santos", email="joao@mail.com"),
            ]
            services = [
                Service(owner_id=account.id, name="Haircut", price=Decimal("50.00"), duration=45),
                Service(owner_id=account.id, name="Manicure", price=Decimal("35.00"), duration=60),
            ]
            for record in clients + services:
                db.add(record)
            await db.commit()

            # Create appointments over the last two weeks
            statuses = ["completed", "completed", "confirmed", "scheduled", "canceled"]
            for i in range(8):
                client = clients[i % len(clients)]
                service = services[i % len(services)]
                db.add(Appointment(
                    owner_id=account.id,
                    client_id=client.id,
                    service_id=service.id,
                    client_name=client.name,
                    service_name=service.name,
                    value=service.price,
                    date=today - timedelta(days=i * 2),
                    time=f"{9 + i:02d}:00",
                    status=statuses[i % len(statuses)],
                ))
            await db.commit()

            if account.plan == "premium":
                db.add(Transaction(owner_id=account.id, type="income", category="service",
                                   amount=Decimal("200.00"), date=today, client_name="Maria Oliveira"))
                db.add(Transaction(owner_id=account.id, type="expense", category="rent",
                                   amount=Decimal("80.00"), date=today))
                await db.commit()


if __name__ == "__main__":
    asyncio.run(seed_data())
