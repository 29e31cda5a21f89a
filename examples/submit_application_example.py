"""
Example script submitting a job application.

Environment variables in .env:
- JOBBOARD_API_URL: Base URL of the job board (default: http://localhost:3000)
Optional:
- JOBBOARD_TIMEOUT: Request timeout in seconds
"""
import asyncio
from jobboard.interfaces.interface import JobBoard
from jobboard.storage.models import JobPost

async def main():
    board = JobBoard()

    job = JobPost(
        id="64b7f0c2a1e4d93f8c0a1b2c",
        title="Backend Developer",
        company="Software Inc",
        location="New York",
        description="Build and run our APIs."
    )

    try:
        form = board.application_form(job)
        form.set_field("fullName", "Jane Doe")
        form.set_field("email", "jane@example.com")
        form.set_field("phone", "555-0100")
        form.choose_resume("jane_doe_cv.pdf")
        form.set_field("coverLetter", "I would love to join the team.")

        result = await form.submit()
        if not result.ok:
            for field, message in result.errors.items():
                print(f"✗ {field}: {message}")
            return

        if result.notice:
            print(f"\n{result.notice}")
        print(f"✓ Application submitted: {result.application_id}")
        print(f"Next page: {result.navigation.url}")

    finally:
        await board.close()

if __name__ == "__main__":
    asyncio.run(main())
