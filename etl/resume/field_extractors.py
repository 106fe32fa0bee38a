"""
Per-section field extractors for heuristic resume parsing.

Each function takes plain text and returns plain dicts/lists shaped like the
corresponding StructuredResume fields. None of them raise: text that does
not match simply yields empty values.
"""
import re
from typing import Dict, Iterable, List, Optional

from etl.resume.skill_catalog import (
    ACHIEVEMENT_VERBS,
    CERTIFICATION_KEYWORDS,
    FRAMEWORKS,
    PROGRAMMING_LANGUAGES,
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
    TOOLS,
)

EMAIL_RE = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
PHONE_RE = re.compile(r'(\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})')
PHONE_IN_LINE_RE = re.compile(r'\d{3}[-.\s]?\d{3}[-.\s]?\d{4}')
LINKEDIN_RE = re.compile(r'linkedin\.com/in/([^\s]+)', re.IGNORECASE)
GITHUB_RE = re.compile(r'github\.com/([^\s]+)', re.IGNORECASE)
LOCATION_RE = re.compile(r"^[A-Z][A-Za-z .'-]+,\s*(?:[A-Z]{2}|[A-Z][A-Za-z]+(?: [A-Z][A-Za-z]+)*)(?:\s+\d{5})?$")
CONTACT_SEPARATOR_RE = re.compile(r'\s*[|•·]\s*')

# A new experience entry starts at a capitalized line containing "," or " |"
EXPERIENCE_SPLIT_RE = re.compile(r'(?=\n[A-Z][^,\n]*(?:,|\s+\||$))')
TITLE_COMPANY_RE = re.compile(r'^(.+?)\s*(?:\bat\b|@|\||,)\s*(.+?)(?:\s*\|\s*(.+))?$', re.IGNORECASE)
DATE_TOKEN_RE = re.compile(
    r'\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec|\d{4}|\d{1,2}/\d{1,2}/\d{2,4})',
    re.IGNORECASE,
)
BULLET_RE = re.compile(r'^(?:[•\-*]|\d+\.)')
BULLET_MARKER_RE = re.compile(r'^(?:[•\-*]|\d+\.)\s*')

# Education entries start at capitalized lines, except detail lines
EDUCATION_SPLIT_RE = re.compile(
    r'\n(?=[A-Z])(?!(?i:gpa|grade|honors|honours|relevant|coursework|courses|thesis|details)\b)'
)
DEGREE_RE = re.compile(r'^(.+?)\s*(?:\bfrom\b|\bat\b|\||,)\s*(.+?)(?:\s*\|\s*(.+))?$', re.IGNORECASE)
GPA_RE = re.compile(r'gpa[:\s]*(\d+\.?\d*)', re.IGNORECASE)
YEAR_RE = re.compile(r'\b(?:19|20)\d{2}\b')

QUANTIFIER_RE = re.compile(r'\d+%|\$\d+|\d+,\d+|\d+\s*(?:million|thousand|k|m)', re.IGNORECASE)


def _non_empty_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split('\n') if line.strip()]


def extract_personal_info(header_text: str) -> Dict[str, str]:
    """Pull contact details and the candidate name out of the header section."""
    info = {
        'name': '',
        'email': '',
        'phone': '',
        'location': '',
        'linkedin': '',
        'github': '',
    }

    email = EMAIL_RE.search(header_text)
    if email:
        info['email'] = email.group(0)

    phone = PHONE_RE.search(header_text)
    if phone:
        info['phone'] = phone.group(0).strip()

    linkedin = LINKEDIN_RE.search(header_text)
    if linkedin:
        info['linkedin'] = linkedin.group(0)

    github = GITHUB_RE.search(header_text)
    if github:
        info['github'] = github.group(0)

    lines = _non_empty_lines(header_text)
    for line in lines:
        lowered = line.lower()
        if ('@' in line or 'linkedin' in lowered or 'github' in lowered
                or PHONE_IN_LINE_RE.search(line)):
            continue
        info['name'] = line
        break

    for line in lines:
        for segment in CONTACT_SEPARATOR_RE.split(line):
            if segment != info['name'] and LOCATION_RE.match(segment):
                info['location'] = segment
                break
        if info['location']:
            break

    return info


def extract_summary(summary_text: str) -> str:
    return ' '.join(_non_empty_lines(summary_text))


def _find_duration_line(lines: List[str]) -> Optional[str]:
    for line in lines[1:]:
        if BULLET_RE.match(line):
            continue
        if DATE_TOKEN_RE.search(line):
            return line
    return None


def extract_experience(experience_text: str) -> List[Dict]:
    """Parse work history blocks into experience entries.

    Blocks shorter than 10 characters or with fewer than two lines are
    skipped. The first line of a block holds title and company (and
    optionally the duration after a ``|``).
    """
    experiences = []

    for block in EXPERIENCE_SPLIT_RE.split(experience_text):
        if len(block.strip()) < 10:
            continue

        lines = _non_empty_lines(block)
        if len(lines) < 2:
            continue

        entry = {
            'title': '',
            'company': '',
            'duration': '',
            'description': '',
            'responsibilities': [],
        }

        first_line = lines[0]
        match = TITLE_COMPANY_RE.match(first_line)
        if match:
            entry['title'] = match.group(1).strip()
            entry['company'] = match.group(2).strip()
            entry['duration'] = (match.group(3) or '').strip()
        else:
            entry['title'] = first_line

        duration_line = None
        if not entry['duration']:
            duration_line = _find_duration_line(lines)
            if duration_line:
                entry['duration'] = duration_line

        bullets = [line for line in lines[1:] if BULLET_RE.match(line)]
        entry['responsibilities'] = [
            BULLET_MARKER_RE.sub('', bullet).strip() for bullet in bullets
        ]

        description = [
            line for line in lines[1:]
            if not BULLET_RE.match(line) and line != duration_line
        ]
        entry['description'] = ' '.join(description)

        if entry['title'] or entry['company']:
            experiences.append(entry)

    return experiences


def extract_education(education_text: str) -> List[Dict]:
    """Parse education blocks into entries with degree, institution, year and GPA."""
    education = []

    for block in EDUCATION_SPLIT_RE.split(education_text):
        if len(block.strip()) < 5:
            continue

        lines = _non_empty_lines(block)
        entry = {
            'degree': '',
            'institution': '',
            'year': '',
            'gpa': '',
            'details': '',
        }

        first_line = lines[0]
        match = DEGREE_RE.match(first_line)
        if match:
            entry['degree'] = match.group(1).strip()
            entry['institution'] = match.group(2).strip()
            entry['year'] = (match.group(3) or '').strip()
        else:
            entry['degree'] = first_line

        gpa = GPA_RE.search(block)
        if gpa:
            entry['gpa'] = gpa.group(1)

        if not entry['year']:
            year = YEAR_RE.search(block)
            if year:
                entry['year'] = year.group(0)

        entry['details'] = ' '.join(lines[1:])
        education.append(entry)

    return education


def _contains_term(lowered_text: str, term: str) -> bool:
    # One- and two-letter terms ("r", "go") only count as standalone tokens
    if len(term) <= 2:
        return re.search(rf'(?<![a-z0-9]){re.escape(term)}(?![a-z0-9+#])', lowered_text) is not None
    return term in lowered_text


def _match_terms(lowered_text: str, terms: Iterable[str]) -> List[str]:
    found: List[str] = []
    for term in terms:
        if term not in found and _contains_term(lowered_text, term):
            found.append(term)
    return found


def extract_skills(skills_text: str) -> Dict[str, List[str]]:
    """Match skill keywords from the static catalog, case-insensitively.

    Each category keeps first-match order and holds a term at most once.
    """
    lowered = skills_text.lower()
    technical_terms = [term for terms in TECHNICAL_SKILLS.values() for term in terms]
    return {
        'technical': _match_terms(lowered, technical_terms),
        'soft': _match_terms(lowered, SOFT_SKILLS),
        'languages': _match_terms(lowered, PROGRAMMING_LANGUAGES),
        'frameworks': _match_terms(lowered, FRAMEWORKS),
        'tools': _match_terms(lowered, TOOLS),
    }


def extract_achievements(text: str) -> List[str]:
    """Lines with an achievement verb and a quantifiable result (%, $, counts)."""
    achievements = []
    for line in text.split('\n'):
        lowered = line.lower()
        if any(verb in lowered for verb in ACHIEVEMENT_VERBS) and QUANTIFIER_RE.search(line):
            achievements.append(line.strip())
    return achievements


def extract_certifications(text: str) -> List[str]:
    certifications = []
    for line in text.split('\n'):
        lowered = line.lower()
        if any(keyword in lowered for keyword in CERTIFICATION_KEYWORDS):
            certifications.append(line.strip())
    return certifications
