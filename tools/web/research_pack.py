"""Build the prompts sent to the model for report synthesis and answer refresh."""

from models.research import ExtractedDocument

from .contracts import SearchResult

RULE = "=" * 80
DIVIDER = "-" * 80


def build_synthesis_prompt(
    question: str,
    documents: list[ExtractedDocument],
    search_results: list[SearchResult],
) -> str:
    """
    Assemble the single synthesis request: question, documents in upload order,
    search results in ranking order, then the output instructions.

    Args:
        question: The research question, verbatim
        documents: Extracted text per uploaded file
        search_results: Ranked web results for the question

    Returns:
        Prompt text for a structured-output call with the Report schema
    """
    lines = [
        "You are a research assistant tasked with analyzing documents and web sources to answer a research question.",
        "",
        f"Research Question: {question}",
        "",
        RULE,
        "DOCUMENTS:",
        RULE,
    ]

    if documents:
        for doc in documents:
            lines.append(f"Filename: {doc.filename}")
            lines.append("Content:")
            lines.append(doc.text)
            lines.append(DIVIDER)
    else:
        lines.append("No documents provided.")

    lines.extend(["", RULE, "WEB SOURCES:", RULE])
    if search_results:
        for idx, result in enumerate(search_results, start=1):
            lines.append(f"[{idx}] {result.title}")
            lines.append(f"URL: {result.link}")
            if result.snippet:
                lines.append(f"Snippet: {result.snippet}")
            lines.append("")
    else:
        lines.append("No web sources provided.")

    lines.extend(
        [
            "",
            RULE,
            "INSTRUCTIONS:",
            "1. Write a multi-paragraph summary that synthesizes the documents and web sources to answer the question.",
            "2. Extract the key takeaways as a list of short, self-contained statements.",
            "3. List in `sources` every document filename and web URL you actually used, exactly as written above.",
            "   Do not list anything that does not appear above.",
            "Respond with a JSON object with the fields: key_takeaways (list of strings), summary (string), "
            "sources (list of strings).",
            RULE,
        ]
    )
    return "\n".join(lines)


def build_refresh_prompt(
    question: str,
    current_answer: str,
    source_urls: list[str],
    new_information: str,
) -> str:
    """Prompt for the refresh decision: does the new information warrant revising the answer?"""
    sources = ", ".join(source_urls) if source_urls else "No source URLs provided."
    return "\n".join(
        [
            "You are an expert research assistant. Your task is to determine if the current answer to a research "
            "question can be improved or updated based on new information from external sources.",
            "",
            f"Research Question: {question}",
            f"Current Answer: {current_answer}",
            f"Source URLs: {sources}",
            "",
            f"New Information: {new_information}",
            "",
            "Assess whether the current answer requires any updates or modifications. If the new information "
            "provides additional insights, corrections, or clarifications, set needs_update to true and write the "
            "complete revised answer in updated_answer.",
            "If the new information is irrelevant or does not significantly impact the current answer, set "
            "needs_update to false and return the current answer unchanged in updated_answer.",
            "Respond with a JSON object with the fields: needs_update (boolean), updated_answer (string).",
        ]
    )
