"""
Seed script to create a demo account with one career card
Run with: python seed_data.py
"""
import asyncio
import secrets

from careercard.config import get_settings
from careercard.database import Database
from careercard.models import User, CareerCard
from careercard.schemas.card import CareerCardData
from careercard.services.auth import get_password_hash, get_user_by_email

DEMO_EMAIL = "demo@careercard.dev"
DEMO_PASSWORD = "password123"

DEMO_CARD = {
    "profile": {
        "name": "Jordan Rivera",
        "title": "Senior Software Engineer",
        "location": "Austin, TX",
        "portfolioUrl": "https://github.com/octocat",
    },
    "theme": "purple",
    "experience": [
        {
            "title": "Senior Engineer",
            "company": "Acme Corp",
            "period": "Jan 2020 - Present",
            "description": "Led a team of five on the payments squad.",
        },
        {
            "title": "Software Engineer",
            "company": "Initech",
            "period": "Jun 2016 - Dec 2019",
            "description": "Built internal reporting services.",
        },
    ],
    "projects": [
        {
            "name": "Log Lens",
            "description": "A CLI tool for log analysis.",
            "technologies": "Python, Go",
            "projectUrl": "",
        },
    ],
    "greatestImpacts": [
        {
            "title": "Checkout latency",
            "context": "Checkout p99 was over two seconds.",
            "outcome": "Cut p99 to 400ms by batching ledger writes.",
        },
    ],
    "stylesOfWork": [
        {"question": "How do you prefer to collaborate?", "selectedAnswer": "Pairing on hard problems"},
    ],
    "frameworks": [
        {"name": "React", "proficiency": "Advanced", "projectsBuilt": "6"},
        {"name": "FastAPI", "proficiency": "Intermediate"},
    ],
    "pastimes": [
        {"activity": "Climbing", "description": "Bouldering twice a week."},
    ],
    "codeShowcase": [],
}


async def seed_database():
    db = Database(get_settings())
    await db.init_db()

    async with db.session_maker() as session:
        if await get_user_by_email(session, DEMO_EMAIL):
            print(f"ℹ️  {DEMO_EMAIL} already exists, nothing to do")
            await db.dispose()
            return

        user = User(
            email=DEMO_EMAIL,
            password_hash=get_password_hash(DEMO_PASSWORD),
            first_name="Jordan",
            last_name="Rivera",
            job_title="Senior Software Engineer",
            location="Austin, TX",
        )
        session.add(user)
        await session.flush()

        card = CareerCard(
            user_id=user.id,
            card_data=CareerCardData.model_validate(DEMO_CARD).to_storage(),
            edit_token=secrets.token_hex(16),
        )
        session.add(card)

        await session.commit()
        print("✅ Database seeded successfully!")
        print(f"   Demo user: {DEMO_EMAIL} / {DEMO_PASSWORD}")
        print(f"   Card id: {card.id}")

    await db.dispose()


if __name__ == "__main__":
    asyncio.run(seed_database())
