"""Offline archive assistant.

Answers questions by plain substring lookup over the published-article
knowledge sections; there is no model behind it.
"""

import re
from typing import Iterable

GREETING_RE = re.compile(r"^(hi|hello|hey|greetings)")
TITLE_RE = re.compile(r"^TITLE: (.*)$", re.MULTILINE)
MAX_TITLES = 3

GREETING = (
    "Hello! I am Lumen, your offline archivist. I can help you find information contained "
    "within The Light's published articles. What are you looking for?"
)
FALLBACK = (
    "I searched The Light's archives but couldn't find any articles matching your query. "
    "Please try searching for specific topics like 'sports', 'campus', or 'science'."
)


def reply(message: str, sections: Iterable[str]) -> str:
    """Answer ``message`` from ``sections``, one block of text per article."""
    query = (message or "").strip().lower()
    if not query:
        return FALLBACK
    if GREETING_RE.match(query):
        return GREETING

    matches = [s for s in sections if query in s.lower()]
    if not matches:
        return FALLBACK

    titles = []
    for section in matches[:MAX_TITLES]:
        found = TITLE_RE.search(section)
        titles.append(found.group(1) if found else "Unknown Article")
    listing = "\n- ".join(titles)
    return (
        f'I found information related to "{message}" in the following articles:\n\n- {listing}\n\n'
        "You can read these articles to learn more. Is there a specific detail you need?"
    )
