"""
Heuristic section splitter for plain-text resumes.

Scans the text once, line by line, and buckets every line under the most
recent section heading. Lines before the first heading belong to
``header``.
"""
import re
from typing import Dict, List, Optional, Tuple

HEADER_SECTION = 'header'

# Heading lines must be shorter than this to count as headings
MAX_HEADING_LENGTH = 50

# Tested in order; the first match wins
SECTION_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ('summary', re.compile(r'(summary|profile|about|overview)', re.IGNORECASE)),
    ('objective', re.compile(r'(objective|goal)', re.IGNORECASE)),
    ('experience', re.compile(r'(experience|work|employment|career)', re.IGNORECASE)),
    ('work', re.compile(r'(work experience|professional experience|employment history)', re.IGNORECASE)),
    ('education', re.compile(r'(education|academic|qualification)', re.IGNORECASE)),
    ('skills', re.compile(r'(skills|technical|competencies|expertise)', re.IGNORECASE)),
    ('achievements', re.compile(r'(achievements|accomplishments|awards)', re.IGNORECASE)),
    ('certifications', re.compile(r'(certifications|certificates|licenses)', re.IGNORECASE)),
)


def match_heading(line: str) -> Optional[str]:
    """Return the section a line introduces, or None if it is not a heading."""
    if len(line) >= MAX_HEADING_LENGTH:
        return None
    for name, pattern in SECTION_PATTERNS:
        if pattern.search(line):
            return name
    return None


def identify_sections(text: str) -> Dict[str, List[str]]:
    """Split resume text into named sections.

    Every input line lands in exactly one section buffer, including the
    heading line itself, which starts its section. A section that appears
    twice in the document is extended rather than replaced.

    Args:
        text: Plain resume text

    Returns:
        Mapping of section name to its (stripped) lines, in document order
    """
    sections: Dict[str, List[str]] = {}
    current = HEADER_SECTION
    buffer: List[str] = []

    for raw_line in text.split('\n'):
        line = raw_line.strip()
        heading = match_heading(line)

        if heading is not None and heading != current:
            if buffer:
                sections.setdefault(current, []).extend(buffer)
            current = heading
            buffer = [line]
        else:
            buffer.append(line)

    if buffer:
        sections.setdefault(current, []).extend(buffer)

    return sections


def _strip_heading(line: str) -> str:
    # "Summary: Engineer with ..." keeps its inline content; a bare heading goes away
    if ':' in line:
        return line.split(':', 1)[1].strip()
    return ''


def section_body(sections: Dict[str, List[str]], *names: str) -> str:
    """Return the text of the first non-empty section among ``names``.

    The heading line is removed; inline content after a colon on the
    heading line is kept. ``header`` has no heading line and is returned
    as-is.
    """
    for name in names:
        lines = sections.get(name)
        if not lines:
            continue
        if name == HEADER_SECTION:
            return '\n'.join(lines)
        first = _strip_heading(lines[0])
        body = ([first] if first else []) + lines[1:]
        return '\n'.join(body)
    return ''
