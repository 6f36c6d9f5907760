"""Cross-check a report's cited sources against what the model was actually given."""

from models.research import ExtractedDocument, Report
from tools.web.contracts import SearchResult


def _normalize(identifier: str) -> str:
    return identifier.strip().rstrip("/").lower()


def known_identifiers(documents: list[ExtractedDocument], search_results: list[SearchResult]) -> set[str]:
    return {_normalize(d.filename) for d in documents} | {_normalize(r.link) for r in search_results}


def find_unverified_sources(
    report: Report,
    documents: list[ExtractedDocument],
    search_results: list[SearchResult],
) -> list[str]:
    """
    Return cited sources that match no submitted filename and no search link,
    in the order the report lists them. The report itself is left untouched.
    """
    known = known_identifiers(documents, search_results)
    return [source for source in report.sources if _normalize(source) not in known]
