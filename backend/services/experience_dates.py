"""Work-history dates: parsing, durations and stated year requirements."""

import logging
import re
from datetime import date

from services.scoring.technical_keywords import extract_technical_keywords

logger = logging.getLogger(__name__)

EXP_YEARS_RE = re.compile(
    r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:experience|exp\b)",
    re.IGNORECASE,
)

# Any years mention inside a requirement line: "5+ years with Python", "3 yrs React"
YEARS_MENTION_RE = re.compile(r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)

_ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})(?:-\d{1,2})?(?:[T ].*)?$")
_SLASH_RE = re.compile(r"^(\d{1,2})/(?:\d{1,2}/)?(\d{4})$")

_MONTH_MAP = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_PRESENT = ("present", "current", "now")

# Keyword categories that name a skill area, as opposed to roles or practices
SKILL_CATEGORIES = ("PROGRAMMING_LANGUAGES", "FRAMEWORKS", "DATABASES", "CLOUD_DEVOPS")


def parse_date(date_str: str | None, today: date | None = None) -> tuple[int, int] | None:
    """Parse a date string into (year, month). Returns None if unparseable.

    Accepts ISO dates ("2020-03-01", "2020-03", with or without a time part),
    "03/2020", "03/01/2020", "March 2020", a bare year, or "present".
    """
    if not date_str:
        return None
    date_str = date_str.strip().rstrip(".")
    if date_str.lower() in _PRESENT:
        today = today or date.today()
        return today.year, today.month

    match = _ISO_RE.match(date_str)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
        return (year, month) if 1 <= month <= 12 else None

    match = _SLASH_RE.match(date_str)
    if match:
        month, year = int(match.group(1)), int(match.group(2))
        return (year, month) if 1 <= month <= 12 else None

    # Try "Month Year" format
    parts = date_str.replace(",", " ").split()
    if len(parts) == 2:
        month_str = parts[0].lower().rstrip(".")
        if month_str in _MONTH_MAP:
            try:
                return int(parts[1]), _MONTH_MAP[month_str]
            except ValueError:
                pass

    # Try bare year
    try:
        year = int(date_str)
        if 1970 <= year <= 2100:
            return year, 1
    except ValueError:
        pass

    return None


def months_between(start: tuple[int, int], end: tuple[int, int]) -> int:
    return (end[0] - start[0]) * 12 + (end[1] - start[1])


def entry_months(start_date: str | None, end_date: str | None, today: date | None = None) -> int:
    """Duration of one role in months. A missing end date means ongoing."""
    start = parse_date(start_date, today)
    if start is None:
        return 0
    end = parse_date(end_date, today) if end_date else parse_date("present", today)
    if end is None:
        return 0
    return max(0, months_between(start, end))


def calculate_total_experience(work_experience: list, today: date | None = None) -> float:
    """Total years across dated roles, rounded to one decimal."""
    total_months = sum(entry_months(e.start_date, e.end_date, today) for e in work_experience)
    return round(total_months / 12, 1)


def years_since(date_str: str | None, today: date | None = None) -> float | None:
    parsed = parse_date(date_str, today)
    if parsed is None:
        return None
    today = today or date.today()
    return months_between(parsed, (today.year, today.month)) / 12


def extract_required_years(job_description: str) -> float:
    """Extract required years of experience from a job description."""
    best = 0.0
    for match in EXP_YEARS_RE.finditer(job_description or ""):
        years = float(match.group(1))
        if years > best:
            best = years
    return best


def extract_area_requirements(job_description: str) -> dict[str, float]:
    """Map technical keywords to the years stated beside them.

    Each line or sentence that mentions a number of years contributes that
    number to every technical keyword it names; the highest value wins.
    """
    requirements: dict[str, float] = {}
    for segment in re.split(r"[\n.;]\s+|\n", job_description or ""):
        mention = YEARS_MENTION_RE.search(segment)
        if not mention:
            continue
        years = float(mention.group(1))
        if years <= 0 or years > 50:
            continue
        for keyword in extract_technical_keywords(segment, SKILL_CATEGORIES):
            requirements[keyword] = max(years, requirements.get(keyword, 0.0))
    return requirements
