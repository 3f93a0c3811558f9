"""Source heuristics for React/TypeScript files.

Pure text-in, facts-out functions. Nothing here touches the file system;
the Analysis Engine reads files and hands their content to these functions.

All results are textual approximations, not AST-exact computations:
- extract_props: Props interface/type members (or natural-language props)
- extract_dependencies: Ordered unique import specifiers
- calculate_cyclomatic_complexity: 1 + decision points
- determine_component_type: page, component or hook
- analyze_accessibility: Weighted 0-100 accessibility score
"""

import math
import re
from pathlib import PurePath

from uiforge.models.analysis import AccessibilityInfo, ComponentType, PropInfo

# =============================================================================
# Shared helpers
# =============================================================================

_STRING_OR_COMMENT_RE = re.compile(
    r"""(?P<string>"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)"""
    r"""|(?P<comment>//[^\n]*|/\*.*?\*/)""",
    re.DOTALL,
)


def strip_comments_and_strings(text: str) -> str:
    """Blank out comments and string-literal contents, keeping line structure."""

    def blank(match: re.Match[str]) -> str:
        if match.group("string") is not None:
            quote = match.group("string")[0]
            return quote + quote
        return "\n" * match.group("comment").count("\n") or " "

    return _STRING_OR_COMMENT_RE.sub(blank, text)


def to_pascal_case(text: str) -> str:
    """Convert words, kebab-case or snake_case to PascalCase.

    Words that already contain inner capitals (``DataTable``) are kept as-is.
    """
    words = [w for w in re.split(r"[^A-Za-z0-9]+", text) if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def to_camel_case(text: str) -> str:
    """Convert words to camelCase."""
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


# =============================================================================
# Props (interface form)
# =============================================================================

_PROPS_DECL_RE = re.compile(
    r"(?:interface\s+(?P<iname>[A-Za-z_$][\w$]*Props)\b[^{]*"
    r"|type\s+(?P<tname>[A-Za-z_$][\w$]*Props)\s*(?:<[^=]*>)?\s*=[^{]*)\{"
)
_MEMBER_RE = re.compile(
    r"""^(?:readonly\s+)?(?P<name>[A-Za-z_$][\w$-]*|'[^']+'|"[^"]+")(?P<optional>\?)?\s*:\s*(?P<type>.+)$""",
    re.DOTALL,
)


def _block_body(text: str, open_brace: int) -> str:
    """Return the text between a ``{`` at open_brace and its matching ``}``."""
    depth = 0
    for index in range(open_brace, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[open_brace + 1 : index]
    return text[open_brace + 1 :]


def _split_members(body: str) -> list[str]:
    """Split an interface body at top-level ``;``, ``,`` or newlines."""
    members: list[str] = []
    depth = 0
    current: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "=" and body[index + 1 : index + 2] == ">":
            current.append("=>")
            index += 2
            continue
        if char in "{([<":
            depth += 1
        elif char in "})]>":
            depth = max(0, depth - 1)
        if depth == 0 and char in ";,\n":
            members.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1
    members.append("".join(current))
    return [m.strip() for m in members if m.strip()]


def extract_props(text: str, component_name: str | None = None) -> list[PropInfo]:
    """Extract props from a ``*Props`` interface or type literal.

    When several Props declarations exist, ``{component_name}Props`` wins,
    otherwise the first one is used.

    Args:
        text: Source text
        component_name: Preferred component name

    Returns:
        Props in declaration order; optional when the name has a trailing ``?``
    """
    cleaned = strip_comments_and_strings_keep_types(text)
    declarations = list(_PROPS_DECL_RE.finditer(cleaned))
    if not declarations:
        return []

    chosen = declarations[0]
    if component_name:
        for decl in declarations:
            if (decl.group("iname") or decl.group("tname")) == f"{component_name}Props":
                chosen = decl
                break

    body = _block_body(cleaned, chosen.end() - 1)
    props: list[PropInfo] = []
    for member in _split_members(body):
        match = _MEMBER_RE.match(member)
        if not match:
            continue
        name = match.group("name").strip("'\"")
        props.append(
            PropInfo(
                name=name,
                type=" ".join(match.group("type").split()).rstrip(";,"),
                optional=match.group("optional") is not None,
            )
        )
    return props


def strip_comments_and_strings_keep_types(text: str) -> str:
    """Remove comments only; string literal types (``'primary'``) must survive."""
    return re.sub(r"//[^\n]*|/\*.*?\*/", "", text, flags=re.DOTALL)


# =============================================================================
# Props (natural-language form)
# =============================================================================

_HANDLER_RE = re.compile(r"\bon[A-Z]\w*\b")
_OPTIONS_RE = re.compile(
    r"\b(?P<name>\w+)\s+prop\s+with\s+(?P<options>[\w\s,]+?)\s+(?:options|values|variants)\b",
    re.IGNORECASE,
)
_CLAUSE_RE = re.compile(
    r"\b(?:with|accepts?|accepting|supports?|supporting|takes?|has|have)\s+(?P<clause>[^.;:!?]+)",
    re.IGNORECASE,
)
_SPLIT_RE = re.compile(r"\s*,\s*(?:and\s+|or\s+)?|\s+and\s+|\s+or\s+", re.IGNORECASE)
_LEADING_NOISE = re.compile(
    r"^(?:an?|the|some|its|their|optional|required|(?:an?\s+)?(?:array|list|set)\s+of)\s+",
    re.IGNORECASE,
)
_TRAILING_NOISE = {"prop", "props", "field", "fields", "support", "option", "options", "property", "properties"}
_TRIGGER_RE = re.compile(r"\b(?:with|accepts?|accepting|supports?|supporting|takes?|has|have)\s+", re.IGNORECASE)
_STOP_WORDS = {
    "it", "should", "also", "be", "can", "may", "will", "that", "which", "when", "include",
    "including", "component", "a", "an", "the", "to", "of", "for", "in", "on", "is",
}


def _handler_name(word_or_phrase: str) -> str:
    """Turn "click" into onClick; keep names that already are handlers."""
    if _HANDLER_RE.fullmatch(word_or_phrase):
        return word_or_phrase
    return "on" + to_pascal_case(word_or_phrase)


def _phrase_to_prop(phrase: str) -> PropInfo | None:
    required = bool(re.search(r"\brequired\b", phrase, re.IGNORECASE))
    # "and support disabled state" -> "disabled state"
    phrase = _TRIGGER_RE.split(phrase)[-1]
    cleaned = " ".join(phrase.split())
    while True:
        stripped = _LEADING_NOISE.sub("", cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped
    words = [w for w in re.split(r"[^A-Za-z0-9]+", cleaned) if w]
    while words and words[-1].lower() in _TRAILING_NOISE:
        words.pop()
    if not words or len(words) > 3 or any(w.lower() in _STOP_WORDS for w in words):
        return None

    last = words[-1].lower()
    if last == "handler" and len(words) > 1:
        return PropInfo(name=_handler_name(" ".join(words[:-1])), type="() => void", optional=True)
    if last == "state" and len(words) > 1:
        return PropInfo(name=to_camel_case(" ".join(words[:-1])), type="boolean", optional=True)
    if last in {"callback", "callbacks", "functions", "function"}:
        return None

    name = to_camel_case(" ".join(words))
    prop_type = "boolean" if len(words) == 1 and last.endswith("ing") else "string"
    return PropInfo(name=name, type=prop_type, optional=not required)


def extract_described_props(text: str) -> list[PropInfo]:
    """Extract props from a natural-language description.

    Rules, in priority order:
    - ``onX`` words and "X handler" phrases become ``() => void`` handlers
    - "X prop with a, b, c options" becomes a union of string literals
    - "X state" becomes a boolean
    - noun phrases after with/accept/support default to ``string``

    Every prop is optional unless the phrase says "required".

    Args:
        text: Free-text description

    Returns:
        Props in first-seen order, unique by name
    """
    props: dict[str, PropInfo] = {}

    def add(prop: PropInfo | None) -> None:
        if prop is not None and prop.name not in props:
            props[prop.name] = prop

    for match in _OPTIONS_RE.finditer(text):
        options = [o for o in _SPLIT_RE.split(match.group("options").strip()) if o]
        union = " | ".join(f"'{o.strip().lower()}'" for o in options)
        add(PropInfo(name=to_camel_case(match.group("name")), type=union, optional=True))

    # Option lists were consumed above; keep their words out of the clauses.
    remaining = _OPTIONS_RE.sub(",", text)
    for match in _CLAUSE_RE.finditer(remaining):
        for phrase in _SPLIT_RE.split(match.group("clause")):
            if phrase.strip():
                add(_phrase_to_prop(phrase))

    for match in re.finditer(r"\b(\w+)\s+state\b", text, re.IGNORECASE):
        word = match.group(1).lower()
        if word not in _STOP_WORDS:
            add(PropInfo(name=to_camel_case(word), type="boolean", optional=True))

    for match in re.finditer(r"\b(\w+)\s+handler\b", text, re.IGNORECASE):
        if match.group(1).lower() not in _STOP_WORDS:
            add(PropInfo(name=_handler_name(match.group(1)), type="() => void", optional=True))

    for match in _HANDLER_RE.finditer(text):
        add(PropInfo(name=match.group(0), type="() => void", optional=True))

    return list(props.values())


# =============================================================================
# Dependencies
# =============================================================================

_IMPORT_RES = [
    re.compile(r"""\bimport\s+(?:type\s+)?[\w$*{}\s,]+?\s+from\s+['"]([^'"]+)['"]"""),
    re.compile(r"""\bexport\s+[\w$*{}\s,]+?\s+from\s+['"]([^'"]+)['"]"""),
    re.compile(r"""\bimport\s+['"]([^'"]+)['"]"""),
    re.compile(r"""\brequire\(\s*['"]([^'"]+)['"]\s*\)"""),
    re.compile(r"""\bimport\(\s*['"]([^'"]+)['"]\s*\)"""),
]


def extract_dependencies(text: str) -> list[str]:
    """Return module specifiers referenced by import-like statements.

    Args:
        text: Source text

    Returns:
        Specifiers ordered by first occurrence, without duplicates
    """
    found: list[tuple[int, str]] = []
    for pattern in _IMPORT_RES:
        found.extend((m.start(), m.group(1)) for m in pattern.finditer(text))

    ordered: list[str] = []
    for _, spec in sorted(found):
        if spec not in ordered:
            ordered.append(spec)
    return ordered


# =============================================================================
# Complexity
# =============================================================================

_ELSE_IF_RE = re.compile(r"\belse\s+if\b")
_IF_RE = re.compile(r"\bif\b")
_ELSE_RE = re.compile(r"\belse\b(?!\s+if\b)")
_CASE_RE = re.compile(r"\bcase\b")
_LOOP_RE = re.compile(r"\b(?:for|while)\s*\(")
_TERNARY_RE = re.compile(r"(?<![?.])\?(?![?.:])")
_LOGICAL_RE = re.compile(r"&&|\|\|")


def calculate_cyclomatic_complexity(text: str) -> int:
    """Approximate cyclomatic complexity as 1 + decision points.

    Decision points: ``if``, ``else if`` (one unit), ``else``, ``case``,
    ternary ``?``, ``&&``, ``||`` and ``for``/``while`` headers. Comments and
    string contents are ignored.

    Args:
        text: Source text

    Returns:
        Complexity, always >= 1
    """
    code = strip_comments_and_strings(text)
    else_ifs = len(_ELSE_IF_RE.findall(code))
    # Drop else-if pairs so their "if" is not counted again.
    code = _ELSE_IF_RE.sub(" ", code)
    decisions = (
        else_ifs
        + len(_IF_RE.findall(code))
        + len(_ELSE_RE.findall(code))
        + len(_CASE_RE.findall(code))
        + len(_LOOP_RE.findall(code))
        + len(_TERNARY_RE.findall(code))
        + len(_LOGICAL_RE.findall(code))
    )
    return 1 + decisions


_HALSTEAD_TOKEN_RE = re.compile(r"[A-Za-z_$][\w$]*|\d+(?:\.\d+)?|[^\s\w]")


def count_lines_of_code(text: str) -> int:
    """Count non-blank lines outside comments."""
    code = strip_comments_and_strings(text)
    return sum(1 for line in code.splitlines() if line.strip())


def calculate_maintainability_index(text: str, cyclomatic: int | None = None) -> int:
    """Approximate the maintainability index, scaled to 0..100.

    MI = 171 - 5.2 ln(V) - 0.23 CC - 16.2 ln(LOC), where the Halstead volume
    V is approximated from token counts (N * log2(n)).

    Args:
        text: Source text
        cyclomatic: Precomputed complexity (computed when omitted)

    Returns:
        Maintainability index in 0..100 (100 for empty input)
    """
    code = strip_comments_and_strings(text)
    tokens = _HALSTEAD_TOKEN_RE.findall(code)
    loc = count_lines_of_code(text)
    if not tokens or loc == 0:
        return 100

    if cyclomatic is None:
        cyclomatic = calculate_cyclomatic_complexity(text)

    vocabulary = max(2, len(set(tokens)))
    volume = len(tokens) * math.log2(vocabulary)
    raw = 171 - 5.2 * math.log(volume) - 0.23 * cyclomatic - 16.2 * math.log(loc)
    return max(0, min(100, round(raw * 100 / 171)))


# =============================================================================
# Classification
# =============================================================================

_EXPORTED_NAME_RE = re.compile(
    r"\bexport\s+(?:default\s+)?(?:async\s+)?(?:function\*?|const|let|var|class)\s+([A-Za-z_$][\w$]*)"
)
_DEFAULT_EXPORT_NAME_RE = re.compile(r"\bexport\s+default\s+([A-Za-z_$][\w$]*)\s*;?\s*$", re.MULTILINE)
_PAGE_FUNCTION_RE = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?function\s+[A-Za-z_$][\w$]*Page\b"
    r"|\bexport\s+default\s+[A-Za-z_$][\w$]*Page\s*;?\s*$",
    re.MULTILINE,
)
_PAGE_SEGMENTS = {"pages", "views", "screens"}


def extract_exported_name(text: str) -> str | None:
    """Return the first exported identifier, if any."""
    match = _EXPORTED_NAME_RE.search(text)
    if match:
        return match.group(1)
    match = _DEFAULT_EXPORT_NAME_RE.search(text)
    return match.group(1) if match else None


def _is_page_path(file_path: str | PurePath) -> bool:
    path = PurePath(file_path)
    parts = [p.lower() for p in path.parts[:-1]]
    if any(part in _PAGE_SEGMENTS for part in parts):
        return True
    return "app" in parts and path.stem == "page"


def _is_hook_name(name: str | None) -> bool:
    return bool(name) and re.match(r"^use[A-Z0-9]", name or "") is not None


def determine_component_type(text: str, file_path: str | PurePath) -> ComponentType:
    """Classify a source file as page, component or hook.

    A ``use*`` exported identifier always means hook, even under a pages
    directory. Otherwise a pages-like path segment or a default-exported
    ``*Page`` function means page.

    Args:
        text: Source text
        file_path: Path of the file (only its segments are inspected)

    Returns:
        ComponentType
    """
    exported = extract_exported_name(text)
    if _is_hook_name(exported):
        return ComponentType.HOOK
    if exported is None and _is_hook_name(PurePath(file_path).stem):
        return ComponentType.HOOK
    if _is_page_path(file_path) or _PAGE_FUNCTION_RE.search(text):
        return ComponentType.PAGE
    return ComponentType.COMPONENT


# =============================================================================
# State
# =============================================================================

_STATE_RE = re.compile(
    r"\bconst\s+\[\s*([A-Za-z_$][\w$]*)\s*,\s*[A-Za-z_$][\w$]*\s*\]\s*=\s*"
    r"(?:React\.)?use(?:State|Reducer)\b"
)


def extract_state(text: str) -> list[str]:
    """Return state variable names from useState/useReducer destructuring."""
    names: list[str] = []
    for match in _STATE_RE.finditer(text):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


# =============================================================================
# Accessibility
# =============================================================================

ACCESSIBILITY_BASE = 70

POSITIVE_SIGNALS: list[tuple[re.Pattern[str], int]] = [
    (re.compile(r"\baria-[a-z]+\s*="), 15),
    (re.compile(r"\brole\s*="), 10),
    (re.compile(r"\btabIndex\s*="), 5),
    (re.compile(r"\bonKey(?:Down|Up|Press)\s*="), 10),
    (re.compile(r"\balt\s*="), 5),
    (re.compile(r"\bhtmlFor\s*=|<label\b"), 5),
]

CLICKABLE_PENALTY = 30
MISSING_ALT_PENALTY = 20

_TAG_RE = re.compile(r"<(?P<tag>div|span|li|p|td|section|article|img)\b(?P<attrs>(?:=>|[^<>])*?)/?>", re.DOTALL)
_A11Y_ATTR_RE = re.compile(r"\b(?:role|tabIndex|aria-[a-z]+)\s*=")


def analyze_accessibility(text: str) -> AccessibilityInfo:
    """Score accessibility signals in JSX source.

    Positive signals add their weight to a base of 70; clickable
    non-interactive elements without role/tabIndex/aria and images
    without alt text subtract penalties. The score is clamped to 0..100,
    so adding a positive signal never lowers it and adding a negative
    signal never raises it.

    Args:
        text: Source text

    Returns:
        AccessibilityInfo with score and issue descriptions
    """
    score = ACCESSIBILITY_BASE
    issues: list[str] = []

    for pattern, weight in POSITIVE_SIGNALS:
        score += weight * len(pattern.findall(text))

    for match in _TAG_RE.finditer(text):
        tag, attrs = match.group("tag"), match.group("attrs")
        if tag == "img":
            if not re.search(r"\balt\s*=", attrs):
                score -= MISSING_ALT_PENALTY
                issues.append("Image without alt text")
            continue
        if re.search(r"\bonClick\s*=", attrs) and not _A11Y_ATTR_RE.search(attrs):
            score -= CLICKABLE_PENALTY
            issues.append(f"Clickable <{tag}> without role, tabIndex or aria attributes")

    return AccessibilityInfo(score=max(0, min(100, score)), issues=issues)


# =============================================================================
# Security and documentation
# =============================================================================

SECURITY_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bdangerouslySetInnerHTML\b"), "Uses dangerouslySetInnerHTML"),
    (re.compile(r"\beval\s*\("), "Uses eval()"),
    (re.compile(r"\bnew\s+Function\s*\("), "Uses new Function()"),
    (re.compile(r"\.innerHTML\s*="), "Assigns innerHTML directly"),
    (re.compile(r"\bdocument\.write\s*\("), "Uses document.write()"),
]
_BLANK_TARGET_RE = re.compile(r"<a\b[^>]*target\s*=\s*[\"'{]_blank[^>]*>", re.DOTALL)


def detect_security_issues(text: str) -> list[str]:
    """Return descriptions of risky constructs found in the source."""
    issues = [message for pattern, message in SECURITY_PATTERNS if pattern.search(text)]
    for match in _BLANK_TARGET_RE.finditer(text):
        if "rel=" not in match.group(0):
            issues.append('Link with target="_blank" missing rel="noopener noreferrer"')
            break
    return issues


def has_doc_comment(text: str) -> bool:
    """Return True if the source contains a JSDoc block."""
    return re.search(r"/\*\*[\s\S]*?\*/", text) is not None
