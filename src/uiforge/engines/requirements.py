"""Natural-language requirement parsing for the Generation Engine.

Turns a free-text request such as "Create a primary button with loading
state and click handler" into a name, a component type and a prop list.
Parsing never fails: anything it cannot interpret is simply left out.
"""

import re
from dataclasses import dataclass, field

from uiforge.analyzers.heuristics import extract_described_props, to_pascal_case
from uiforge.models.analysis import PropInfo

BASIC_COMPONENT_WARNING = "No specific requirements detected, generating basic component"
FALLBACK_NAME = "CustomComponent"

COMPONENT_TYPES = ["button", "form", "modal", "table", "navigation"]

# Checked in COMPONENT_TYPES order; first hit wins.
TYPE_KEYWORDS: dict[str, set[str]] = {
    "button": {"button", "btn", "cta"},
    "form": {"form"},
    "modal": {"modal", "dialog", "popup", "overlay", "lightbox"},
    "table": {"table", "datagrid", "grid"},
    "navigation": {"nav", "navigation", "navbar", "menu", "sidebar", "breadcrumb", "breadcrumbs"},
}

TYPE_DEFAULT_NAMES = {
    "button": "Button",
    "form": "Form",
    "modal": "Modal",
    "table": "DataTable",
    "navigation": "Navigation",
}

# Props every generated component of a type relies on in its markup.
BASE_PROPS: dict[str, list[PropInfo]] = {
    "button": [PropInfo(name="onClick", type="() => void", optional=True)],
    "form": [PropInfo(name="onSubmit", type="(event: React.FormEvent<HTMLFormElement>) => void", optional=True)],
    "modal": [
        PropInfo(name="isOpen", type="boolean", optional=False),
        PropInfo(name="onClose", type="() => void", optional=False),
    ],
    "table": [
        PropInfo(name="data", type="Record<string, unknown>[]", optional=False),
        PropInfo(name="columns", type="{ key: string; header: string }[]", optional=False),
    ],
    "navigation": [PropInfo(name="items", type="{ label: string; href: string }[]", optional=False)],
}

STYLING_KEYWORDS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\btailwind\b", re.IGNORECASE), "tailwind"),
    (re.compile(r"\bstyled[- ]components?\b", re.IGNORECASE), "styled-components"),
    (re.compile(r"\bemotion\b", re.IGNORECASE), "emotion"),
    (re.compile(r"\bcss[- ]modules?\b", re.IGNORECASE), "css-modules"),
]

_TRIGGER_RE = re.compile(r"\b(?:create|build|generate|make)\b", re.IGNORECASE)
_WORD_RE = re.compile(r"[A-Za-z][\w-]*|[^\sA-Za-z]")
_NAME_STOP_WORDS = {
    "with", "that", "which", "for", "to", "and", "using", "having", "accepting", "supporting",
    "showing", "containing", "where", "who", "in", "on", "of", "from", "by", "including",
}
_FILLER_WORDS = {"a", "an", "the", "new", "simple", "basic", "reusable", "me", "some", "custom"}
_NOISE_WORDS = {"component", "components", "dialog", "widget", "element"}
_ARTIFACT_WORDS = {"test", "tests", "story", "stories", "storybook", "docs", "documentation"}
_STYLING_WORDS = {"tailwind", "emotion", "styledcomponents", "cssmodules", "cssmodule"}
_MAX_NAME_WORDS = 4


@dataclass
class Requirements:
    """Interpretation of a free-text component request.

    Attributes:
        name: PascalCase component name (None if not inferable)
        type: button, form, modal, table, navigation or generic
        props: Described props (base props are merged by the engine)
        styling: Styling approach named in the text, if any
        requested_artifacts: Tests/stories/docs words found in the text
        name_phrase: Raw words the name was derived from
    """

    name: str | None = None
    type: str = "generic"
    props: list[PropInfo] = field(default_factory=list)
    styling: str | None = None
    requested_artifacts: list[str] = field(default_factory=list)
    name_phrase: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing specific was recognized."""
        return self.name is None and self.type == "generic" and not self.props


def _name_phrase(text: str) -> list[str]:
    """Words following the first trigger verb, up to a stop word or punctuation."""
    match = _TRIGGER_RE.search(text)
    if not match:
        return []

    words: list[str] = []
    for token in _WORD_RE.findall(text[match.end() :]):
        if not token[0].isalpha():
            break
        lowered = token.lower()
        if lowered in _NAME_STOP_WORDS:
            break
        if not words and lowered in _FILLER_WORDS:
            continue
        words.append(token)
        if len(words) == _MAX_NAME_WORDS:
            break
    return words


def detect_type(words: list[str], text: str) -> str:
    """Infer the component type from the name phrase, then the full text."""
    phrase = {w.lower() for w in words}
    for component_type in COMPONENT_TYPES:
        if phrase & TYPE_KEYWORDS[component_type]:
            return component_type

    text_words = {w.lower() for w in re.findall(r"[A-Za-z]+", text)}
    for component_type in COMPONENT_TYPES:
        if text_words & TYPE_KEYWORDS[component_type]:
            return component_type
    return "generic"


def base_props(component_type: str) -> list[PropInfo]:
    """Props a component type's markup depends on (copies)."""
    return [
        PropInfo(name=p.name, type=p.type, optional=p.optional, description=p.description)
        for p in BASE_PROPS.get(component_type, [])
    ]


def merge_props(*groups: list[PropInfo]) -> list[PropInfo]:
    """Concatenate prop lists, keeping the first declaration of each name."""
    merged: dict[str, PropInfo] = {}
    for group in groups:
        for prop in group:
            merged.setdefault(prop.name, prop)
    return list(merged.values())


def parse_requirements(text: str) -> Requirements:
    """Parse a free-text component request.

    Args:
        text: Description such as "Build a login form with email and password"

    Returns:
        Requirements; ``is_empty`` is True when nothing was recognized
    """
    text = (text or "").strip()
    if not text:
        return Requirements()

    phrase = _name_phrase(text)
    component_type = detect_type(phrase, text)

    name_words = [w for w in phrase if w.lower() not in _NOISE_WORDS]
    name = to_pascal_case(" ".join(name_words)) if name_words else None
    if name is None and component_type != "generic":
        name = TYPE_DEFAULT_NAMES[component_type]

    artifacts = sorted({w.lower() for w in re.findall(r"[A-Za-z]+", text)} & _ARTIFACT_WORDS)
    props = [p for p in extract_described_props(text) if p.name.lower() not in _ARTIFACT_WORDS]

    styling = None
    for pattern, approach in STYLING_KEYWORDS:
        if pattern.search(text):
            styling = approach
            break
    # "with tailwind" is a styling request, not a prop.
    props = [p for p in props if p.name.lower() not in _STYLING_WORDS]

    return Requirements(
        name=name,
        type=component_type,
        props=props,
        styling=styling,
        requested_artifacts=artifacts,
        name_phrase=phrase,
    )
