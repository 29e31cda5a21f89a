"""
Example script listing the signed-in user's applications.

Required environment variables in .env:
- JOBBOARD_AUTH_TOKEN: Bearer token of the user
Optional:
- JOBBOARD_API_URL: Base URL of the job board (default: http://localhost:3000)
"""
import asyncio
import sys
from jobboard.interfaces.interface import JobBoard

async def main(status_filter: str = "all", query: str = ""):
    board = JobBoard()
    viewer = board.status_viewer()

    try:
        await viewer.load()
        if viewer.error:
            print(viewer.error)
            if viewer.navigation:
                print(f"Please sign in: {viewer.navigation.url}")
            return
        if viewer.using_fallback:
            print(f"Showing sample data ({viewer.fetch_error})")

        viewer.set_filter(status_filter)
        viewer.set_search(query)

        rows = viewer.rows
        print(f"\n{len(rows)} application(s):")
        for row in rows:
            print(f"- {row.title} at {row.company} ({row.location}) | {row.status.value} | applied {row.date}")

    finally:
        await board.close()

if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:3]))
