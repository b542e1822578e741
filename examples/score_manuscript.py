"""
Tiny helper script that prints word counts and the reading-ease band for a
manuscript. Pass the path to a UTF-8 text file.
"""

from __future__ import annotations

import sys
from pathlib import Path

from author_ally import analyze_document
from author_ally.models import Document


def main() -> None:
    path = Path(sys.argv[1])
    analytics = analyze_document(Document(path.name, path.read_text(encoding="utf-8")))
    readability = analytics.readability
    minutes = analytics.reading_time_minutes
    print(f"{analytics.doc_id}: {analytics.word_count} words, {minutes} min read")
    print(f"Readability: {readability.score:.1f} ({readability.level.value})")
    for tip in analytics.tips:
        print(f"- {tip}")


if __name__ == "__main__":
    main()
