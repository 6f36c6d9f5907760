"""InsightDesk command line runner.

Generates a report from local PDFs, optionally followed by a refresh check:

    python main.py -q "What are the effects of microplastics on marine ecosystems?" paper.pdf
    python main.py -q "..." paper.pdf --refresh
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from config.config import Config
from models.errors import ResearchError
from models.research import DocumentInput
from orchestrator.core import ResearchOrchestrator
from server.validation import UploadSummary, validate_research_submission


def load_documents(paths: list[str]) -> list[DocumentInput]:
    documents = []
    for raw_path in paths:
        path = Path(raw_path)
        media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        documents.append(DocumentInput(filename=path.name, content=path.read_bytes(), media_type=media_type))
    return documents


def print_report(outcome) -> None:
    report = outcome.report
    print("\n=== Key Takeaways ===")
    for idx, takeaway in enumerate(report.key_takeaways, start=1):
        print(f"{idx}. {takeaway}")
    print("\n=== Summary ===")
    print(report.summary)
    print("\n=== Sources ===")
    for source in report.sources:
        print(f"- {source}")
    if outcome.unverified_sources:
        print("\n[!] Cited but not provided to the model:")
        for source in outcome.unverified_sources:
            print(f"- {source}")
    print(f"\n[Completed in {outcome.latency_ms}ms]")


async def run(question: str, paths: list[str], refresh: bool) -> int:
    config = Config()
    if not config.validate():
        print("Configuration is incomplete. See logs/error.log for details.")
        return 2

    documents = load_documents(paths)
    question = validate_research_submission(
        question,
        [UploadSummary(d.filename, d.size, d.media_type) for d in documents],
        max_file_size=config.MAX_UPLOAD_BYTES,
    )

    orchestrator = ResearchOrchestrator(config)
    print(f"Researching ({config.get_model_info()}): {question}")
    outcome = await orchestrator.generate_report(question, documents)
    print_report(outcome)

    if refresh:
        print("\nChecking for new information...")
        result = await orchestrator.refresh_answer(question, outcome.report.summary, outcome.report.sources)
        if result.is_updated:
            print("\n=== Updated Summary ===")
            print(result.updated_answer)
        else:
            print("No update needed; the summary is still current.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="InsightDesk research report generator")
    parser.add_argument("--question", "-q", required=True, help="Research question (at least 10 characters)")
    parser.add_argument("files", nargs="*", help="PDF documents to analyze")
    parser.add_argument("--refresh", action="store_true", help="Run a refresh check after the report")
    args = parser.parse_args()

    try:
        return asyncio.run(run(args.question, args.files, args.refresh))
    except ResearchError as e:
        print(f"Error: {e}")
        return 1
    except OSError as e:
        print(f"Error: could not read {e.filename or 'input file'}: {e.strerror or e}")
        return 1
    except KeyboardInterrupt:
        print("\nExiting...")
        return 130


if __name__ == "__main__":
    sys.exit(main())
