"""Canned answers used while the workflow webhook is unreachable.

Keeps the UI usable in development and demos. Answers are shaped exactly
like the webhook's fenced-JSON output, so they go through the same
normalization path as real responses.
"""

import json

from docchat.models.schemas import Document

_DRIVE = "https://drive.google.com/file/d/{}/view"

_TERMS_ID = "1RKUniO9hI4611Q0G7_trPIMV3RSAAiLD"
_PROPOSAL_ID = "2ABCdef789xyz"
_FINANCIAL_ID = "3XYZ123abc"

_NO_FILE: dict[str, str | int | None] = {
    "FileID": None,
    "FileName": None,
    "FileLink": None,
    "From": None,
    "To": None,
}

GREETING = (
    "Hello! I'm your AI document assistant. I can help you search through your "
    "uploaded documents and answer questions about contracts, financial reports, "
    "project proposals, and more. What would you like to know?"
)
HELP = (
    "I can help you find information from your uploaded documents. Try asking "
    "specific questions like: 'What are the contract terms for late delivery?', "
    "'What's our Q3 budget status?', 'What's the project timeline?', or 'Show me "
    "the financial report details.' I'll search through your documents and provide "
    "relevant answers with source references."
)
DEFAULT = (
    "Hello! I'm your document assistant. I can help you find information from your "
    "uploaded documents. Try asking specific questions about contracts, financial "
    "reports, project proposals, or any topics mentioned in your documents. For "
    "example: 'What are the contract terms for late delivery?' or 'What's our Q3 "
    "budget status?'"
)


def _file(file_id: str, name: str, start: int, end: int) -> dict[str, str | int | None]:
    return {
        "FileID": file_id,
        "FileName": name,
        "FileLink": _DRIVE.format(file_id),
        "From": start,
        "To": end,
    }


# Checked in order; the first rule with a matching keyword wins.
_RULES: list[tuple[tuple[str, ...], dict[str, object]]] = [
    (
        ("contract", "terms", "agreement"),
        {
            "answer": (
                "According to the contract terms, if a supplier fails to deliver goods on "
                "time, the company has two options: (1) Cancel the order and seek "
                "alternative suppliers, or (2) Accept delayed delivery with penalty "
                "charges applied to the supplier account."
            ),
            **_file(_TERMS_ID, "US_TERMS_COND-0056.pdf", 411, 414),
        },
    ),
    (
        ("budget", "financial", "cost"),
        {
            "answer": (
                "The Q3 financial report shows total revenue of $2.4M with operating "
                "expenses of $1.8M, resulting in a net profit margin of 25%. The budget "
                "allocation for Q4 includes increased marketing spend and R&D investment."
            ),
            **_file(_FINANCIAL_ID, "Financial_Report_Q3.xlsx", 89, 95),
        },
    ),
    (
        ("project", "proposal", "timeline"),
        {
            "answer": (
                "The project proposal outlines a 6-month timeline with three phases: "
                "(1) Planning and design (2 months), (2) Development and testing "
                "(3 months), and (3) Deployment and training (1 month). Total estimated "
                "cost is $150,000."
            ),
            **_file(_PROPOSAL_ID, "Project_Proposal_2024.docx", 25, 32),
        },
    ),
    (
        ("hello", "hi", "hey", "good morning", "good afternoon", "good evening"),
        {"answer": GREETING, **_NO_FILE},
    ),
    (
        ("help", "what can you do", "how do you work"),
        {"answer": HELP, **_NO_FILE},
    ),
    (
        ("tata", "director", "board"),
        {
            "answer": (
                "Based on the Tata Industries board documentation, the key directors "
                "include Mr. Ratan Tata (Chairman), Mr. Natarajan Chandrasekaran (CEO), "
                "and Ms. Aarthi Sivanandh (CFO). The board structure includes 12 members "
                "with diverse expertise in technology, finance, and operations."
            ),
            "FileID": "TATA_BOARD_2024",
            "FileName": "Tata_Industries_Board_Structure.pdf",
            "FileLink": _DRIVE.format("TATA_BOARD_2024"),
            "From": 15,
            "To": 28,
        },
    ),
    (
        ("web search", "search the web", "google", "internet"),
        {
            "answer": (
                "Here are the results from my web search:\n\n"
                "1. **Example.com** - This is a placeholder website used for "
                "illustrative examples in documents.\n"
                "2. **Sample.org** - Another placeholder domain commonly used in "
                "documentation.\n\nWould you like me to search for something specific?"
            ),
            "FileID": "WebSearch",
            "FileName": "Web Search Results",
            "FileLink": "https://www.google.com",
            "From": 0,
            "To": 0,
            "searchInfo": (
                "https://example.com - Example Domain\n"
                "https://sample.org - Sample Organization"
            ),
        },
    ),
]


def fallback_payload(chat_input: str) -> dict[str, object]:
    """Pick the canned answer for a question by keyword."""
    text = chat_input.lower()
    for keywords, payload in _RULES:
        if any(keyword in text for keyword in keywords):
            return payload
    return {"answer": DEFAULT, **_NO_FILE}


def fallback_output(chat_input: str) -> str:
    """Canned answer as the webhook would send it: fenced JSON in a string."""
    body = json.dumps(fallback_payload(chat_input), indent=2, ensure_ascii=False)
    return f"```json\n{body}\n```"


FALLBACK_DOCUMENTS: list[Document] = [
    Document(name="US_TERMS_COND-0056.pdf", link=_DRIVE.format(_TERMS_ID)),
    Document(name="Project_Proposal_2024.docx", link=_DRIVE.format(_PROPOSAL_ID)),
    Document(name="Financial_Report_Q3.xlsx", link=_DRIVE.format(_FINANCIAL_ID)),
    Document(name="Contract_Agreement.pdf", link=_DRIVE.format("4DEF567ghi")),
    Document(name="Technical_Specification.docx", link=_DRIVE.format("5GHI890jkl")),
    Document(name="Budget_Analysis.xlsx", link=_DRIVE.format("6JKL123mno")),
    Document(name="User_Manual.pdf", link=_DRIVE.format("7MNO456pqr")),
    Document(name="Meeting_Minutes.docx", link=_DRIVE.format("8PQR789stu")),
    Document(name="Sales_Data.csv", link="https://example.com/doc9.csv"),
    Document(name="Legal_Documentation.pdf", link="https://example.com/doc10.pdf"),
    Document(name="Marketing_Strategy.docx", link="https://example.com/doc11.docx"),
    Document(name="Inventory_Report.xlsx", link="https://example.com/doc12.xlsx"),
    Document(name="Training_Materials.pdf", link="https://example.com/doc13.pdf"),
    Document(name="Policy_Guidelines.docx", link="https://example.com/doc14.docx"),
    Document(name="Performance_Metrics.csv", link="https://example.com/doc15.csv"),
]
