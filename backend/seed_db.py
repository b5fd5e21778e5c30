"""
AbleConnect Database Seeder

Creates one account per role and a sample job:
- Admin (approved)
- Employer with a company profile and accessibility accommodations
- Jobseeker with preferences
- One disability-friendly job posted by the employer
"""

import sys
sys.path.insert(0, ".")

from ableconnect.db.session import SessionLocal, engine
from ableconnect.db.base import Base
from ableconnect.models import Job, User, UserSettings
from ableconnect.models.settings import DEFAULT_NOTIFICATIONS, DEFAULT_TTS
from ableconnect.core.security import get_password_hash


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing_admin = db.query(User).filter(User.email == "admin@ableconnect.com").first()
        if existing_admin:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Admin
        admin = User(
            email="admin@ableconnect.com",
            username="admin",
            name="Site Admin",
            hashed_password=get_password_hash("admin123"),
            role="admin",
            approved=True,
        )
        db.add(admin)

        # 2. Employer with a company profile
        employer = User(
            email="hiring@brightpath.example",
            username="brightpath",
            name="Maya Patel",
            hashed_password=get_password_hash("employer123"),
            role="employer",
            approved=True,
            phone="555-0100",
            location="Austin, TX",
            company_profile={
                "name": "BrightPath Labs",
                "website": "https://brightpath.example",
                "industry": "Software",
                "size": "51-200",
                "inclusionStatement": "We hire for skills and build for everyone.",
                "accommodations": [
                    {"name": "Screen reader friendly tools", "available": True},
                    {"name": "Flexible hours", "available": True},
                    {"name": "Sign language interpreter", "available": False},
                ],
                "accommodationsAvailable": True,
            },
        )
        db.add(employer)

        # 3. Jobseeker
        jobseeker = User(
            email="alex.rivera@example.com",
            username="alexr",
            name="Alex Rivera",
            hashed_password=get_password_hash("jobseeker123"),
            role="jobseeker",
            location="Remote",
            job_types=["Full-time", "Remote"],
            preferred_location="Remote",
            desired_salary="70000",
            accommodation_preferences="Screen reader compatible documents",
        )
        db.add(jobseeker)
        db.flush()  # Get IDs

        db.add(
            UserSettings(
                user_id=jobseeker.id,
                tts=dict(DEFAULT_TTS),
                notifications=dict(DEFAULT_NOTIFICATIONS),
                font_size=1,
                high_contrast=True,
            )
        )

        # 4. Sample job
        job = Job(
            title="Junior QA Analyst",
            description="Test web and mobile releases, including accessibility audits.",
            location="Remote",
            salary="55000",
            type="Full-time",
            disability_friendly=True,
            company="BrightPath Labs",
            accessibility=["Remote work", "Flexible schedule", "Assistive technology provided"],
            about_company="BrightPath Labs builds accessible learning software.",
            requirements="Attention to detail; familiarity with WCAG is a plus.",
            category="Quality Assurance",
            posted_by=employer.id,
            status="Active",
        )
        db.add(job)

        # Commit all changes
        db.commit()

        print("Database seeded successfully!")
        print("\nCreated Users:")
        print("   - admin@ableconnect.com (password: admin123) [admin]")
        print("   - hiring@brightpath.example (password: employer123) [employer]")
        print("   - alex.rivera@example.com (password: jobseeker123) [jobseeker]")
        print(f"\nCreated Job: {job.title} (id {job.id})")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
