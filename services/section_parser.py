# File: services/section_parser.py
"""
Splits the free-text Markdown analysis returned by Gemini into named sections.

Every section is located independently over the whole document: a section
starts at a heading (one to three '#') whose text contains the section's
canonical label, preferring headings that open with the label, and runs
until the next heading of the same or a shallower level. Sections missing
from the text are simply absent from the result.
If nothing matches at all, the whole text is returned under ``fullAnalysis``.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Tuple


FULL_ANALYSIS_KEY = "fullAnalysis"


@dataclass(frozen=True)
class SectionSpec:
    key: str
    label: str
    slug: str
    display_name: str


SECTIONS: Tuple[SectionSpec, ...] = (
    SectionSpec("executiveSummary", "EXECUTIVE SUMMARY", "executive-summary", "Executive summary"),
    SectionSpec("experimentDetails", "EXPERIMENT DETAILS", "experiment-details", "Experiment details"),
    SectionSpec("keyFindings", "KEY FINDINGS", "key-findings", "Key findings"),
    SectionSpec("biologicalImpacts", "BIOLOGICAL IMPACTS", "biological-impacts", "Biological impacts"),
    SectionSpec("knowledgeGraph", "KNOWLEDGE GRAPH", "knowledge-graph", "Knowledge graph"),
    SectionSpec("practicalApplications", "PRACTICAL APPLICATIONS", "practical-applications", "Practical applications"),
    SectionSpec("researchConnections", "RESEARCH CONNECTIONS", "research-connections", "Research connections"),
    SectionSpec("visualInsights", "VISUAL INSIGHTS", "visual-insights", "Visual insights"),
    SectionSpec("futureResearch", "FUTURE RESEARCH", "future-research", "Future research"),
)

_HEADING = re.compile(r"^[ \t]{0,3}(#{1,3})(?!#)[ \t]*(.*?)[ \t#]*$")
_FENCE = re.compile(r"^[ \t]{0,3}(```|~~~)")
_TRAILING_RULE = re.compile(r"(?:\n[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*)+\Z")


@dataclass(frozen=True)
class Heading:
    index: int
    offset: int
    level: int
    title: str


class SectionMatcher(Protocol):
    def match(self, text: str) -> Dict[str, str]:
        ...


def _label_patterns(label: str) -> Tuple["re.Pattern[str]", "re.Pattern[str]"]:
    words = r"\s+".join(re.escape(word) for word in label.split())
    anywhere = re.compile(r"\b" + words + r"\b", re.IGNORECASE)
    # Label leads the title, after optional numbering or markup such as "2." or "**"
    leading = re.compile(r"^[^A-Za-z]*" + words + r"\b", re.IGNORECASE)
    return anywhere, leading


def scan_headings(text: str) -> List[Heading]:
    """Collects level 1-3 ATX headings, skipping anything inside fenced code blocks."""
    headings: List[Heading] = []
    offset = 0
    fence: Optional[str] = None

    for line in text.splitlines(keepends=True):
        bare = line.rstrip("\r\n")
        fence_match = _FENCE.match(bare)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
        elif fence is None:
            m = _HEADING.match(bare)
            if m:
                headings.append(Heading(len(headings), offset, len(m.group(1)), m.group(2)))
        offset += len(line)

    return headings


def _clean_span(span: str) -> str:
    content = span.strip()
    content = _TRAILING_RULE.sub("", content)
    return content.strip()


class HeadingSectionMatcher:
    """Default matcher: independent heading scan per section."""

    def __init__(self, sections: Iterable[SectionSpec] = SECTIONS):
        self.sections = [(spec,) + _label_patterns(spec.label) for spec in sections]

    def match(self, text: str) -> Dict[str, str]:
        headings = scan_headings(text)
        found: Dict[str, str] = {}

        for spec, anywhere, leading in self.sections:
            candidates = [h for h in headings if anywhere.search(h.title)]
            if not candidates:
                continue

            # Label-led headings first, then the shallowest, then the first in the text
            start = min(candidates, key=lambda h: (leading.match(h.title) is None, h.level, h.index))
            end = len(text)
            for h in headings[start.index + 1:]:
                if h.level <= start.level:
                    end = h.offset
                    break

            found[spec.key] = _clean_span(text[start.offset:end])

        return found


_default_matcher = HeadingSectionMatcher()


def parse_sections(text: str, matcher: Optional[SectionMatcher] = None) -> Dict[str, str]:
    text = text or ""
    sections = (matcher or _default_matcher).match(text)
    if not sections:
        return {FULL_ANALYSIS_KEY: text}
    return sections


def get_section_spec(slug: str) -> Optional[SectionSpec]:
    for spec in SECTIONS:
        if spec.slug == slug:
            return spec
    return None
