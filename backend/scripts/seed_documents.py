"""Script to seed sample CTO guides into the configured document store."""

import asyncio
import sys
from pathlib import Path

# Add backend/ to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cto_coach.core.config import get_config
from cto_coach.core.logging import setup_logging
from cto_coach.documents.classifier import generate_title
from cto_coach.documents.extractor import FileContentExtractor
from cto_coach.documents.scoring import ScoringWeights
from cto_coach.documents.service import DocumentService
from cto_coach.storage import StoreFactory

SAMPLE_DOCUMENTS = {
    "software-architecture-principles.md": """# Software Architecture Principles

Good architecture keeps the cost of change low as the system and the team grow.
Start with a modular monolith and split out microservices only when a clear
scalability or ownership boundary appears. System design reviews should record
the trade-offs behind each decision so later engineers understand the context.

## Key principles
- Separate domain logic from infrastructure code.
- Design APIs around business capabilities, not database tables.
- Prefer boring, well-understood technology for the database and messaging layers.
- Measure performance before optimizing anything.
""",
    "engineering-leadership-guide.md": """# Engineering Leadership Guide

Leadership in engineering is mostly about building a team that can make good
decisions without you. Invest in mentoring, write down the strategy, and make
the culture explicit. Management is a service role: remove blockers, protect
focus time and give honest feedback.

## Practices
- Hold weekly one-on-ones with every direct report.
- Share the technical strategy and revisit it each quarter.
- Hire for learning speed as much as for current skills.
""",
    "code-review-best-practices.md": """# Code Review Best Practices

Code review is the cheapest quality gate a team has. Reviews catch bugs and
defects early, spread knowledge and keep the codebase consistent. Keep pull
requests small so reviewers can give real attention to each change.

## Checklist
- Does the change include unit test and integration test coverage?
- Is the testing strategy clear for risky paths?
- Are security concerns such as authentication and authorization handled?
- Would reliability suffer if a dependency were slow or unavailable?
""",
}


async def seed_documents() -> int:
    """Upload each sample guide through the document service."""
    setup_logging(log_level="INFO")
    config = get_config()

    if config.store.backend == "in_memory":
        print("Note: STORE_BACKEND=in_memory, seeded documents only live for this run")

    store = StoreFactory.create(config.store)
    await store.initialize()
    service = DocumentService(
        store=store,
        extractor=FileContentExtractor(),
        upload_dir=config.upload.upload_dir,
        weights=ScoringWeights.from_config(config.search),
        default_limit=config.search.top_k,
    )

    print("Seeding documents...")
    print(f"Store: {config.store.backend}")

    try:
        existing = {doc.title for doc in await service.list_documents()}
        added = 0
        for filename, content in SAMPLE_DOCUMENTS.items():
            title = generate_title(filename)
            if title in existing:
                print(f"'{title}' already exists, skipping")
                continue
            upload = service.save_upload(filename, content.encode("utf-8"), "text/markdown")
            document = await service.process_upload(upload)
            added += 1
            print(f"Added '{document.title}' [{document.category}] tags={', '.join(document.tags)}")

        print(f"Successfully seeded {added} documents!")
    except Exception as e:
        print(f"Error seeding documents: {e}")
        return 1
    finally:
        await store.close()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed_documents()))
