"""Sample data seeder: settings row, a few VAs and leads at every stage.

Run with ``python -m app.scripts.seed``.  Estimates and settlement
figures go through the same calculator the API uses, so seeded rows
satisfy the profit/commission invariants.
"""

import asyncio

from sqlalchemy import text

from app.core.database import AsyncSessionLocal, engine, init_db
from app.models import Lead, VA
from app.repositories.settings_repository import SettingsRepository
from app.schemas.settings import CommissionTiers
from app.services.commission import calculate_profit, estimate_commission

VA_NAMES = ["Amara", "Jonah", "Priya"]

# (va index, make, model, year, mileage, asking, est. sale, est. expenses,
#  location, status, actual sale, actual expenses)
SAMPLE_LEADS = [
    (0, "Ford", "Fiesta", 2013, 88_000, 1500, 2200, 100, "Hereford", "PENDING", None, None),
    (0, "Vauxhall", "Corsa", 2012, 102_000, 900, 1450, 150, "Worcester", "APPROVED", None, None),
    (1, "Toyota", "Yaris", 2011, 120_500, 1800, 2900, 200, "Hereford", "CONTACTED", None, None),
    (1, "Honda", "Jazz", 2014, 76_000, 2500, 3600, 250, "Worcester", "BOUGHT", None, None),
    (2, "Peugeot", "208", 2015, 64_000, 2200, 3300, 150, "Hereford", "SOLD", 3150, 180),
    (2, "Skoda", "Fabia", 2016, 58_000, 2900, 4200, 200, "Worcester", "PAID", 4000, 220),
    (2, "Fiat", "Punto", 2010, 140_000, 600, 950, 50, "Hereford", "REJECTED", None, None),
]


async def seed():
    await init_db()

    async with AsyncSessionLocal() as session:
        print("Seeding sample data")

        # Clear leads and VAs so the seed can be re-run; settings are kept
        await session.execute(text("TRUNCATE TABLE leads, vas CASCADE"))
        await session.commit()

        settings_repo = SettingsRepository(session)
        tiers = CommissionTiers.model_validate(await settings_repo.get_settings())

        vas = [VA(name=name) for name in VA_NAMES]
        session.add_all(vas)
        await session.flush()
        print(f"Created {len(vas)} VAs")

        for (
            va_index,
            make,
            model,
            year,
            mileage,
            asking,
            est_sale,
            est_expenses,
            location,
            status,
            actual_sale,
            actual_expenses,
        ) in SAMPLE_LEADS:
            est_profit = calculate_profit(est_sale, asking, est_expenses)
            lead = Lead(
                va_id=vas[va_index].id,
                make=make,
                model=model,
                year=year,
                mileage=mileage,
                asking_price=asking,
                estimated_sale_price=est_sale,
                estimated_expenses=est_expenses,
                estimated_profit=est_profit,
                estimated_commission=estimate_commission(est_profit, tiers),
                seller_name=f"Seller of the {make}",
                location=f"{location}, UK",
                listing_url=f"https://example.com/listings/{make.lower()}-{model.lower()}",
                condition_notes="Runs and drives, MOT until next spring",
                good_deal_reason="Priced well under comparable local listings",
                conditions=["small_dents"],
                status="PENDING",
            )
            session.add(lead)
            await session.flush()

            # Move through the pipeline after insert, like the admin would
            lead.status = status
            if actual_sale is not None:
                actual_profit = calculate_profit(actual_sale, asking, actual_expenses)
                lead.actual_sale_price = actual_sale
                lead.actual_expenses = actual_expenses
                lead.actual_profit = actual_profit
                lead.actual_commission = estimate_commission(actual_profit, tiers)
                if status != "SOLD":
                    # settlement figures are only writable while SOLD
                    lead.status = "SOLD"
                    await session.flush()
                    lead.status = status
            await session.flush()

        await session.commit()
        print(f"Created {len(SAMPLE_LEADS)} leads")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
