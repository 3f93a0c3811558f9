"""Framework idiom tables and codemod generation.

Static ``(source, target) -> [ComponentMapping]`` tables describing how an
idiom in one framework or component library translates to another. The
Migration Engine exposes them through ``generate_component_mapping``; the
CLI turns them into a default rename phase when no phases are configured.
"""

import logging
import re
from dataclasses import replace

from uiforge.models.migration import (
    ComponentMapping,
    MigrationPhase,
    RiskLevel,
    Transformation,
    TransformationType,
)
from uiforge.templates.library import TemplateLibrary
from uiforge.templates.processor import TemplateProcessor

logger = logging.getLogger(__name__)

UIFORGE_IMPORT = "@uiforge/components"

FRAMEWORK_ALIASES = {
    "reactjs": "react",
    "vuejs": "vue",
    "angularjs": "angular",
    "mui": "material-ui",
    "material": "material-ui",
    "materialui": "material-ui",
    "ant-design": "antd",
    "chakra": "chakra-ui",
    "chakraui": "chakra-ui",
}

MAPPING_TABLES: dict[tuple[str, str], list[ComponentMapping]] = {
    ("react", "vue"): [
        ComponentMapping("React.FC", "defineComponent", "vue"),
        ComponentMapping("useState", "ref", "vue"),
        ComponentMapping("useEffect", "onMounted", "vue"),
        ComponentMapping("useMemo", "computed", "vue"),
        ComponentMapping("useRef", "ref", "vue"),
        ComponentMapping("useContext", "inject", "vue"),
        ComponentMapping("className", "class", "vue"),
    ],
    ("react", "angular"): [
        ComponentMapping("React.FC", "@Component", "@angular/core"),
        ComponentMapping("useState", "signal", "@angular/core"),
        ComponentMapping("useEffect", "ngOnInit", "@angular/core"),
        ComponentMapping("useMemo", "computed", "@angular/core"),
        ComponentMapping("useRef", "ViewChild", "@angular/core"),
        ComponentMapping("useContext", "inject", "@angular/core"),
    ],
    ("react", "svelte"): [
        ComponentMapping("React.FC", "SvelteComponent", "svelte"),
        ComponentMapping("useState", "writable", "svelte/store"),
        ComponentMapping("useEffect", "onMount", "svelte"),
        ComponentMapping("useMemo", "derived", "svelte/store"),
        ComponentMapping("useContext", "getContext", "svelte"),
    ],
    ("vue", "react"): [
        ComponentMapping("defineComponent", "React.FC", "react"),
        ComponentMapping("ref", "useState", "react"),
        ComponentMapping("reactive", "useReducer", "react"),
        ComponentMapping("onMounted", "useEffect", "react"),
        ComponentMapping("computed", "useMemo", "react"),
        ComponentMapping("inject", "useContext", "react"),
    ],
    ("material-ui", "uiforge"): [
        ComponentMapping("Button", "Button", UIFORGE_IMPORT),
        ComponentMapping("TextField", "Input", UIFORGE_IMPORT, {"helperText": "hint"}),
        ComponentMapping("Card", "Card", UIFORGE_IMPORT),
        ComponentMapping("Box", "Container", UIFORGE_IMPORT, {"sx": "style"}),
        ComponentMapping("Typography", "Typography", UIFORGE_IMPORT),
        ComponentMapping("Stack", "Stack", UIFORGE_IMPORT, {"spacing": "gap"}),
        ComponentMapping("Grid", "Grid", UIFORGE_IMPORT),
    ],
    ("antd", "uiforge"): [
        ComponentMapping("Button", "Button", UIFORGE_IMPORT),
        ComponentMapping("Input", "Input", UIFORGE_IMPORT),
        ComponentMapping("Card", "Card", UIFORGE_IMPORT),
        ComponentMapping("Space", "Stack", UIFORGE_IMPORT, {"size": "gap"}),
        ComponentMapping("Typography", "Typography", UIFORGE_IMPORT),
    ],
    ("chakra-ui", "uiforge"): [
        ComponentMapping("Button", "Button", UIFORGE_IMPORT),
        ComponentMapping("Input", "Input", UIFORGE_IMPORT),
        ComponentMapping("Box", "Container", UIFORGE_IMPORT),
        ComponentMapping("Text", "Typography", UIFORGE_IMPORT),
        ComponentMapping("VStack", "Stack", UIFORGE_IMPORT, {"spacing": "gap"}),
        ComponentMapping("HStack", "Stack", UIFORGE_IMPORT, {"spacing": "gap"}),
    ],
}


def normalize_framework(name: str) -> str:
    """Normalize a framework name: lower case, no ``.js`` suffix, no spaces.

    Examples:
        >>> normalize_framework("Vue.js")
        'vue'
        >>> normalize_framework("Material UI")
        'material-ui'
    """
    normalized = name.strip().lower()
    normalized = re.sub(r"\.js$", "", normalized)
    normalized = re.sub(r"[\s_]+", "-", normalized)
    return FRAMEWORK_ALIASES.get(normalized, normalized)


def component_mappings(source: str, target: str) -> list[ComponentMapping]:
    """Return the idiom table for a framework pair ([] when unknown)."""
    key = (normalize_framework(source), normalize_framework(target))
    mappings = [replace(m, props=dict(m.props)) for m in MAPPING_TABLES.get(key, [])]
    if not mappings:
        logger.debug("No component mapping for %s -> %s", *key)
    return mappings


def render_codemod(
    mapping: ComponentMapping,
    library: TemplateLibrary | None = None,
    processor: TemplateProcessor | None = None,
) -> str:
    """Render a jscodeshift-style codemod for one mapping."""
    library = library or TemplateLibrary()
    processor = processor or TemplateProcessor()
    context = {
        "source": mapping.source,
        "target": mapping.target,
        "import_path": mapping.import_path,
        "props": [{"from": old, "to": new} for old, new in mapping.props.items()],
    }
    return processor.render(library.get("codemod"), context)


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def mappings_to_transformations(mappings: list[ComponentMapping]) -> list[Transformation]:
    """Turn idiom mappings into literal rename transformations.

    Identity mappings (same source and target) only change the import path
    and produce no rename.
    """
    transformations: list[Transformation] = []
    for mapping in mappings:
        if mapping.source == mapping.target:
            continue
        transformations.append(
            Transformation(
                id=f"rename-{_slug(mapping.source)}-to-{_slug(mapping.target)}",
                type=TransformationType.RENAME,
                source=mapping.source,
                target=mapping.target,
            )
        )
    return transformations


def default_phase(source: str, target: str, components: list[str] | None = None) -> MigrationPhase | None:
    """Build a single rename phase from the idiom table, or None if there is none."""
    transformations = mappings_to_transformations(component_mappings(source, target))
    if not transformations:
        return None
    source_name, target_name = normalize_framework(source), normalize_framework(target)
    return MigrationPhase(
        id=f"{source_name}-to-{target_name}",
        name=f"Rename {source_name} idioms to {target_name}",
        risk_level=RiskLevel.MEDIUM,
        components=components or ["*"],
        transformations=transformations,
        description=f"Literal renames from the {source_name} -> {target_name} idiom table",
    )
