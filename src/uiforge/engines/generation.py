"""Generation Engine: React/TypeScript source generation.

Four entry points share one pipeline: build a render context from a
validated spec, pick a template from the TemplateLibrary by
``(kind, styling)``, render it with the TemplateProcessor and collect
GeneratedFile values. The engine never writes files; callers do.

Generation never raises past its public methods. Invalid specs and
template failures come back as ``success=False`` results.
"""

import json
import logging
import posixpath
from dataclasses import replace
from typing import Any

from uiforge.analyzers.heuristics import to_pascal_case
from uiforge.engines.requirements import (
    BASIC_COMPONENT_WARNING,
    FALLBACK_NAME,
    base_props,
    merge_props,
    parse_requirements,
)
from uiforge.exceptions import SpecValidationError
from uiforge.models.analysis import PropInfo
from uiforge.models.generation import (
    ComponentSpec,
    FileType,
    GeneratedFile,
    GenerationContext,
    GenerationResult,
    PageSpec,
    ProjectSpec,
    TestingOptions,
)
from uiforge.templates.library import TemplateLibrary
from uiforge.templates.processor import TemplateProcessor

logger = logging.getLogger(__name__)

# component type -> (element, ref type, css display)
TYPE_ELEMENTS: dict[str, tuple[str, str, str]] = {
    "button": ("button", "HTMLButtonElement", "inline-flex"),
    "form": ("form", "HTMLFormElement", "flex"),
    "modal": ("div", "HTMLDivElement", "block"),
    "table": ("table", "HTMLTableElement", "table"),
    "navigation": ("nav", "HTMLElement", "block"),
    "generic": ("div", "HTMLDivElement", "block"),
}

TAILWIND_CLASSES = {
    "button": "inline-flex items-center justify-center rounded-md px-4 py-2 font-medium focus-visible:outline-none focus-visible:ring-2",
    "form": "flex flex-col gap-4",
    "modal": "fixed inset-0 z-50 flex items-center justify-center bg-black/50",
    "table": "w-full border-collapse text-left text-sm",
    "navigation": "flex items-center gap-4",
    "generic": "block",
}

TYPE_REACT_HOOKS = {"form": ["useCallback"], "modal": ["useEffect"]}

TEST_HANDLERS = {
    "button": [{"prop": "onClick", "event": "click"}],
    "form": [{"prop": "onSubmit", "event": "submit"}],
}

RESERVED_PROPS = {"children", "className"}

# Pinned ranges written into generated package.json files.
VERSIONS = {
    "react": "^18.3.1",
    "react-dom": "^18.3.1",
    "next": "^14.2.5",
    "styled-components": "^6.1.11",
    "@emotion/react": "^11.11.4",
    "@emotion/styled": "^11.11.5",
    "class-variance-authority": "^0.7.0",
    "tailwindcss": "^3.4.4",
    "postcss": "^8.4.39",
    "autoprefixer": "^10.4.19",
    "typescript": "^5.5.3",
    "@types/react": "^18.3.3",
    "@types/react-dom": "^18.3.0",
    "eslint": "^9.7.0",
    "@eslint/js": "^9.7.0",
    "typescript-eslint": "^7.16.0",
    "eslint-plugin-react-hooks": "^4.6.2",
    "prettier": "^3.3.3",
    "jest": "^29.7.0",
    "@testing-library/react": "^16.0.0",
    "@testing-library/jest-dom": "^6.4.6",
    "@storybook/react": "^8.2.4",
    "storybook": "^8.2.4",
    "vite": "^5.3.4",
    "@vitejs/plugin-react": "^4.3.1",
}


def _kebab(name: str) -> str:
    out: list[str] = []
    for index, char in enumerate(name):
        if char.isupper() and index and (name[index - 1].islower() or name[index - 1].isdigit()):
            out.append("-")
        out.append(char.lower())
    return "".join(out).replace("_", "-").replace(" ", "-")


def _humanize(name: str) -> str:
    return _kebab(name).replace("-", " ").capitalize()


def _relative_import(from_file: str, to_file: str) -> str:
    """Module specifier for importing ``to_file`` from ``from_file``."""
    target = posixpath.splitext(to_file)[0]
    relative = posixpath.relpath(target, posixpath.dirname(from_file) or ".")
    return relative if relative.startswith(".") else f"./{relative}"


def _prop_dict(prop: PropInfo) -> dict[str, Any]:
    return {
        "name": prop.name,
        "type": prop.type,
        "optional": prop.optional,
        "description": prop.description or "",
    }


def _jsx_value(prop: PropInfo) -> str:
    """A placeholder JSX attribute satisfying a required prop in tests."""
    if prop.type == "boolean":
        return f"{prop.name} "
    if "=>" in prop.type:
        return prop.name + "={() => {}} "
    if prop.type.endswith("[]"):
        return prop.name + "={[]} "
    if prop.type == "number":
        return prop.name + "={0} "
    return f'{prop.name}="{prop.name}" '


def _story_value(prop: PropInfo) -> str:
    if prop.type == "boolean":
        return f"{prop.name}: true"
    if "=>" in prop.type:
        return f"{prop.name}: () => {{}}"
    if prop.type.endswith("[]"):
        return f"{prop.name}: []"
    if prop.type == "number":
        return f"{prop.name}: 0"
    return f"{prop.name}: '{prop.name}'"


class GenerationEngine:
    """Generates React source files from descriptions and specs.

    Usage:
        engine = GenerationEngine(GenerationContext(include_tests=True))
        result = engine.generate_component(ComponentSpec(name="PrimaryButton", type="button"))
        for generated in result.files:
            print(generated.path)
    """

    def __init__(
        self,
        context: GenerationContext | None = None,
        library: TemplateLibrary | None = None,
        processor: TemplateProcessor | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            context: Target project conventions (read-only)
            library: Template table (defaults to the built-in templates)
            processor: Template processor
        """
        self.context = context or GenerationContext()
        self.library = library or TemplateLibrary()
        self.processor = processor or TemplateProcessor()

    # =========================================================================
    # Public API
    # =========================================================================

    def generate_from_description(self, text: str) -> GenerationResult:
        """Generate a single component file from a free-text request.

        Empty or unrecognizable input still succeeds with a basic scaffold
        and a warning.

        Args:
            text: Free-text description

        Returns:
            GenerationResult holding exactly one file on success
        """
        requirements = parse_requirements(text)
        warnings: list[str] = []
        suggestions: list[str] = []

        if requirements.is_empty:
            warnings.append(BASIC_COMPONENT_WARNING)
        elif requirements.name is None:
            warnings.append(f"Could not infer a component name; using {FALLBACK_NAME}")

        spec = ComponentSpec(
            name=requirements.name or FALLBACK_NAME,
            type=requirements.type,
            props=requirements.props,
            styling=requirements.styling,
            description=(text or "").strip(),
            testing=TestingOptions(include_tests=False, include_stories=False, include_docs=False),
        )

        styling = spec.styling or self.context.styling
        if styling == "css-modules":
            # A CSS module needs a companion stylesheet; this flow emits one file.
            styling = "css"
            suggestions.append(
                f"Generate {spec.name} from a component spec to get a CSS module stylesheet"
            )
        if requirements.requested_artifacts:
            suggestions.append(
                f"Requested {', '.join(requirements.requested_artifacts)}: "
                "use a component spec with testing options to generate them"
            )

        logger.info("Generating %s component %s from description", spec.type, spec.name)
        try:
            main = self._main_component(spec, styling)
        except Exception as e:
            logger.error("Component generation failed for %s: %s", spec.name, e)
            return GenerationResult.failure(str(e))

        return GenerationResult(files=[main], warnings=warnings, suggestions=suggestions)

    def generate_component(self, spec: ComponentSpec | dict[str, Any]) -> GenerationResult:
        """Generate a component and its companion files.

        Args:
            spec: ComponentSpec or equivalent dict

        Returns:
            GenerationResult; success False with errors if the spec is invalid
        """
        try:
            spec = spec if isinstance(spec, ComponentSpec) else ComponentSpec.from_dict(spec)
        except SpecValidationError as e:
            logger.warning("Invalid component spec: %s", e)
            return GenerationResult.failure(*e.errors)

        errors = spec.validate()
        if errors:
            logger.warning("Invalid component spec %r: %s", spec.name, "; ".join(errors))
            return GenerationResult.failure(*errors)

        logger.info("Generating component %s", spec.name)
        try:
            return self._component_files(spec)
        except Exception as e:
            logger.error("Component generation failed for %s: %s", spec.name, e)
            return GenerationResult.failure(str(e))

    def generate_page(self, spec: PageSpec | dict[str, Any]) -> GenerationResult:
        """Generate a page shell plus its declared components.

        Args:
            spec: PageSpec or equivalent dict

        Returns:
            GenerationResult
        """
        try:
            spec = spec if isinstance(spec, PageSpec) else PageSpec.from_dict(spec)
        except SpecValidationError as e:
            logger.warning("Invalid page spec: %s", e)
            return GenerationResult.failure(*e.errors)

        errors = spec.validate()
        if errors:
            return GenerationResult.failure(*errors)

        logger.info("Generating page %s (%s layout)", spec.name, spec.layout)
        try:
            result = GenerationResult(files=[self._page_file(spec)])
            for component in spec.components:
                result.merge(self._component_files(component))
            return result
        except Exception as e:
            logger.error("Page generation failed for %s: %s", spec.name, e)
            return GenerationResult.failure(str(e))

    def generate_project(self, spec: ProjectSpec | dict[str, Any]) -> GenerationResult:
        """Generate a project scaffold: manifest, tooling configs, README, components.

        Args:
            spec: ProjectSpec or equivalent dict

        Returns:
            GenerationResult
        """
        try:
            spec = spec if isinstance(spec, ProjectSpec) else ProjectSpec.from_dict(spec)
        except SpecValidationError as e:
            logger.warning("Invalid project spec: %s", e)
            return GenerationResult.failure(*e.errors)

        errors = spec.validate()
        if errors:
            return GenerationResult.failure(*errors)

        logger.info("Generating %s project %s", spec.platform, spec.name)
        try:
            return self._project_files(spec)
        except Exception as e:
            logger.error("Project generation failed for %s: %s", spec.name, e)
            return GenerationResult.failure(str(e))

    # =========================================================================
    # Paths
    # =========================================================================

    def component_dir(self, name: str) -> str:
        """Directory holding a component, per the file structure."""
        if self.context.file_structure == "nested":
            return f"{self.context.components_dir}/{name}"
        if self.context.file_structure == "feature-based":
            return f"src/features/{_kebab(name)}/components"
        return self.context.components_dir

    def component_path(self, name: str) -> str:
        return f"{self.component_dir(name)}/{name}{self.context.extension}"

    def test_path(self, name: str) -> str:
        ext = self.context.extension
        if self.context.test_location == "test-directory":
            return f"src/__tests__/{name}.test{ext}"
        if self.context.test_location == "separate":
            return f"tests/components/{name}.test{ext}"
        return f"{self.component_dir(name)}/{name}.test{ext}"

    def story_path(self, name: str) -> str:
        ext = self.context.extension
        if self.context.story_location == "stories-directory":
            return f"src/stories/{name}.stories{ext}"
        return f"{self.component_dir(name)}/{name}.stories{ext}"

    def hook_path(self, owner: str, hook: str) -> str:
        ext = self.context.script_extension
        if self.context.file_structure == "nested":
            return f"{self.component_dir(owner)}/{hook}{ext}"
        if self.context.file_structure == "feature-based":
            return f"src/features/{_kebab(owner)}/hooks/{hook}{ext}"
        return f"src/hooks/{hook}{ext}"

    def page_path(self, spec: PageSpec) -> str:
        ext = self.context.extension
        if self.context.platform == "nextjs":
            if spec.route is not None:
                route = spec.route.strip("/")
            else:
                base = spec.name[:-4] if spec.name.endswith("Page") and len(spec.name) > 4 else spec.name
                route = _kebab(base)
            return f"app/{route}/page{ext}" if route else f"app/page{ext}"
        return f"src/pages/{spec.name}{ext}"

    # =========================================================================
    # Components
    # =========================================================================

    def _render(self, kind: str, variant: str | None, context: dict[str, Any]) -> str:
        return self.processor.render(self.library.get(kind, variant), context)

    def _component_context(self, spec: ComponentSpec, styling: str) -> dict[str, Any]:
        component_type = spec.type if spec.type in TYPE_ELEMENTS else "generic"
        element, ref_type, display = TYPE_ELEMENTS[component_type]
        props = merge_props(base_props(component_type), spec.props)
        interface_props = [p for p in props if p.name not in RESERVED_PROPS]

        state_lines: list[str] = []
        if "state" in spec.features:
            state_lines.append("const [isActive, setIsActive] = useState(false);")

        react_imports = ["forwardRef", *TYPE_REACT_HOOKS.get(component_type, [])]
        if state_lines:
            react_imports.append("useState")

        variants_name = f"{spec.name[:1].lower()}{spec.name[1:]}Variants"
        css_class = _kebab(spec.name)
        tag = element
        if styling == "css-modules":
            class_attr = "className={[styles.root, className].filter(Boolean).join(' ')}"
        elif styling == "tailwind":
            class_attr = "className={[" + variants_name + "(), className].filter(Boolean).join(' ')}"
        elif styling in {"styled-components", "emotion"}:
            tag = f"{spec.name}Root"
            class_attr = "className={className}"
        else:
            class_attr = "className={['" + css_class + "', className].filter(Boolean).join(' ')}"

        aria_label = spec.accessibility.aria_label
        if aria_label is None and component_type == "navigation":
            aria_label = "Main navigation"
        if aria_label is None and component_type == "modal":
            aria_label = _humanize(spec.name)

        sub_components = [to_pascal_case(s) for s in spec.sub_components]

        return {
            "name": spec.name,
            "description": spec.description,
            "typescript": self.context.typescript,
            "type": component_type,
            "element": element,
            "tag": tag,
            "ref_type": ref_type,
            "display": display,
            "props": [_prop_dict(p) for p in props],
            "interface_props": [_prop_dict(p) for p in interface_props],
            "destructure": ", ".join([p.name for p in interface_props] + ["children", "className", "...rest"]),
            "state_lines": state_lines,
            "react_imports": ", ".join(react_imports),
            "class_attr": class_attr,
            "css_class": css_class,
            "variants_name": variants_name,
            "base_classes": TAILWIND_CLASSES[component_type],
            "aria_label": aria_label,
            "role": spec.accessibility.role,
            "focusable": spec.accessibility.keyboard and spec.accessibility.role is not None,
            # A table cannot host arbitrary children markup.
            "sub_components": [] if component_type == "table" else sub_components,
            "required_props": "".join(_jsx_value(p) for p in props if not p.optional),
            "handlers": TEST_HANDLERS.get(component_type, []),
            "code_fence": "tsx" if self.context.typescript else "jsx",
        }

    def _main_component(self, spec: ComponentSpec, styling: str) -> GeneratedFile:
        context = self._component_context(spec, styling)
        context["body"] = self._render("body", context["type"], context)
        content = self._render("component", styling, context)
        return GeneratedFile(path=self.component_path(spec.name), content=content, type=FileType.COMPONENT)

    def _flag(self, value: bool | None, default: bool) -> bool:
        return default if value is None else value

    def _component_files(self, spec: ComponentSpec) -> GenerationResult:
        styling = spec.styling or self.context.styling
        result = GenerationResult(files=[self._main_component(spec, styling)])
        context = self._component_context(spec, styling)
        main_path = self.component_path(spec.name)

        if styling == "css-modules":
            result.files.append(
                GeneratedFile(
                    path=f"{self.component_dir(spec.name)}/{spec.name}.module.css",
                    content=self._render("styles", styling, context),
                    type=FileType.STYLES,
                )
            )

        for sub in spec.sub_components:
            sub_name = to_pascal_case(sub)
            result.files.append(
                GeneratedFile(
                    path=f"{self.component_dir(spec.name)}/{sub_name}{self.context.extension}",
                    content=self._render("sub-component", None, {"name": sub_name, "typescript": self.context.typescript}),
                    type=FileType.COMPONENT,
                )
            )
        if spec.sub_components and context["type"] == "table":
            result.warnings.append(f"Sub-components of table {spec.name} are generated but not rendered")

        for hook in spec.hooks:
            hook_name = hook if hook.startswith("use") else f"use{to_pascal_case(hook)}"
            result.files.append(
                GeneratedFile(
                    path=self.hook_path(spec.name, hook_name),
                    content=self._render("hook", None, {"name": hook_name, "typescript": self.context.typescript}),
                    type=FileType.COMPONENT,
                )
            )

        if self._flag(spec.testing.include_tests, self.context.include_tests):
            test_path = self.test_path(spec.name)
            context["import_path"] = _relative_import(test_path, main_path)
            result.files.append(
                GeneratedFile(path=test_path, content=self._render("test", None, context), type=FileType.TEST)
            )

        if self._flag(spec.testing.include_stories, self.context.include_stories):
            story_path = self.story_path(spec.name)
            context["import_path"] = _relative_import(story_path, main_path)
            context["story_args"] = self._story_args(spec, context)
            result.files.append(
                GeneratedFile(path=story_path, content=self._render("story", None, context), type=FileType.STORY)
            )

        if self._flag(spec.testing.include_docs, self.context.include_docs):
            docs_path = f"docs/components/{spec.name}.md"
            context["import_path"] = _relative_import(docs_path, main_path)
            context["props"] = [
                {**prop, "type": prop["type"].replace("|", "\\|")} for prop in context["props"]
            ]
            result.files.append(
                GeneratedFile(path=docs_path, content=self._render("docs", None, context), type=FileType.DOCS)
            )

        for locale in spec.locales:
            messages = {spec.name: {"title": _humanize(spec.name), "description": spec.description}}
            result.files.append(
                GeneratedFile(
                    path=f"src/locales/{locale}/{spec.name}.json",
                    content=json.dumps(messages, indent=2, ensure_ascii=False) + "\n",
                    type=FileType.LOCALE,
                )
            )

        if spec.complexity == "high":
            result.suggestions.append(f"Consider splitting {spec.name} into smaller sub-components")
        if context["type"] == "generic" and spec.accessibility.role is None and not spec.accessibility.aria_label:
            result.suggestions.append(f"Add an ARIA role or label to {spec.name} if it is interactive")

        logger.debug("Generated %d files for %s", len(result.files), spec.name)
        return result

    @staticmethod
    def _story_args(spec: ComponentSpec, context: dict[str, Any]) -> list[str]:
        component_type = context["type"]
        props = merge_props(base_props(component_type), spec.props)
        args = [_story_value(p) for p in props if not p.optional]
        if component_type == "navigation":
            args = [a for a in args if not a.startswith("items:")]
            args.append("items: [{ label: 'Home', href: '/' }]")
        if component_type != "table":
            args.append(f"children: 'Default {spec.name}'")
        return args

    # =========================================================================
    # Pages
    # =========================================================================

    def _page_file(self, spec: PageSpec) -> GeneratedFile:
        page_path = self.page_path(spec)
        sections = [to_pascal_case(s) for s in spec.sections]
        has_data = bool(spec.data_sources)
        nextjs = self.context.platform == "nextjs"

        sidebar = [s for s in sections if any(k in s for k in ("Nav", "Sidebar", "Menu"))]
        hero = [s for s in sections if "Hero" in s]
        if spec.layout == "dashboard":
            main = [s for s in sections if s not in sidebar]
        elif spec.layout == "landing":
            main = [s for s in sections if s not in hero]
        else:
            main = sections

        context: dict[str, Any] = {
            "name": spec.name,
            "title": spec.title,
            "route": spec.route,
            "typescript": self.context.typescript,
            "has_data": has_data,
            "data_source_list": ", ".join(f"'{url}'" for url in spec.data_sources),
            "use_client": nextjs and has_data,
            "metadata": nextjs and bool(spec.title) and not has_data,
            "sections": sections,
            "section_imports": [
                {"name": s, "path": _relative_import(page_path, self.component_path(s))} for s in sections
            ],
            "sidebar": sidebar,
            "hero": hero,
            "main": main,
            "footer_label": spec.title or _humanize(spec.name),
        }

        context["layout"] = self._render("layout", spec.layout, context)
        content = self._render("page", None, context)
        return GeneratedFile(path=page_path, content=content, type=FileType.COMPONENT)

    # =========================================================================
    # Projects
    # =========================================================================

    def _package_manifest(self, spec: ProjectSpec, typescript: bool) -> dict[str, Any]:
        features = set(spec.features)
        dependencies = ["react", "react-dom"]
        dev_dependencies: list[str] = []
        scripts: dict[str, str] = {}

        if spec.platform == "nextjs":
            dependencies.append("next")
            scripts.update({"dev": "next dev", "build": "next build", "start": "next start"})
        else:
            dev_dependencies.extend(["vite", "@vitejs/plugin-react"])
            scripts.update({"dev": "vite", "build": "vite build", "preview": "vite preview"})

        if spec.styling == "styled-components":
            dependencies.append("styled-components")
        elif spec.styling == "emotion":
            dependencies.extend(["@emotion/react", "@emotion/styled"])
        elif spec.styling == "tailwind":
            dependencies.append("class-variance-authority")
            dev_dependencies.extend(["tailwindcss", "postcss", "autoprefixer"])

        if typescript:
            dev_dependencies.extend(["typescript", "@types/react", "@types/react-dom"])
        if "eslint" in features:
            dev_dependencies.extend(["eslint", "@eslint/js", "eslint-plugin-react-hooks"])
            if typescript:
                dev_dependencies.append("typescript-eslint")
            scripts["lint"] = "eslint ."
        if "prettier" in features:
            dev_dependencies.append("prettier")
            scripts["format"] = "prettier --write ."
        if "testing" in features:
            dev_dependencies.extend(["jest", "@testing-library/react", "@testing-library/jest-dom"])
            scripts["test"] = "jest"
        if "storybook" in features:
            dev_dependencies.extend(["storybook", "@storybook/react"])
            scripts["storybook"] = "storybook dev -p 6006"

        manifest: dict[str, Any] = {
            "name": spec.name,
            "version": spec.version,
            "private": True,
        }
        if spec.description:
            manifest["description"] = spec.description
        manifest["scripts"] = scripts
        manifest["dependencies"] = {name: VERSIONS[name] for name in sorted(dependencies)}
        manifest["devDependencies"] = {name: VERSIONS[name] for name in sorted(dev_dependencies)}
        return manifest

    @staticmethod
    def _tsconfig(nextjs: bool) -> dict[str, Any]:
        options: dict[str, Any] = {
            "target": "ES2020",
            "lib": ["dom", "dom.iterable", "esnext"],
            "module": "esnext",
            "moduleResolution": "bundler",
            "jsx": "preserve" if nextjs else "react-jsx",
            "strict": True,
            "skipLibCheck": True,
            "esModuleInterop": True,
            "resolveJsonModule": True,
            "isolatedModules": True,
            "noEmit": True,
        }
        include = ["next-env.d.ts", "**/*.ts", "**/*.tsx"] if nextjs else ["src"]
        return {"compilerOptions": options, "include": include, "exclude": ["node_modules"]}

    def _project_files(self, spec: ProjectSpec) -> GenerationResult:
        features = set(spec.features)
        typescript = "typescript" in features
        nextjs = spec.platform == "nextjs"
        tailwind = spec.styling == "tailwind"

        project_engine = GenerationEngine(
            replace(self.context, platform=spec.platform, styling=spec.styling, typescript=typescript),
            self.library,
            self.processor,
        )
        ext = project_engine.context.extension
        script_ext = project_engine.context.script_extension

        def config(path: str, content: str) -> GeneratedFile:
            return GeneratedFile(path=path, content=content, type=FileType.CONFIG)

        def as_json(data: dict[str, Any]) -> str:
            return json.dumps(data, indent=2) + "\n"

        manifest = self._package_manifest(spec, typescript)
        result = GenerationResult(files=[config("package.json", as_json(manifest))])

        flags = {"typescript": typescript, "tailwind": tailwind, "styled_components": spec.styling == "styled-components"}
        component_names = [c.name for c in spec.components]

        if typescript:
            result.files.append(config("tsconfig.json", as_json(self._tsconfig(nextjs))))
        if "eslint" in features:
            result.files.append(config("eslint.config.js", self._render("eslint", None, flags)))
        if "prettier" in features:
            prettier = {"semi": True, "singleQuote": True, "trailingComma": "all", "printWidth": 100}
            result.files.append(config(".prettierrc", as_json(prettier)))
        if tailwind:
            globs = ["./src/**/*.{js,jsx,ts,tsx}"]
            if nextjs:
                globs = ["./pages/**/*.{js,jsx,ts,tsx}", "./app/**/*.{js,jsx,ts,tsx}", *globs]
            result.files.append(
                config("tailwind.config.js", self._render("tailwind", None, {"content_globs": ", ".join(f"'{g}'" for g in globs)}))
            )
            result.files.append(config("postcss.config.js", self._render("postcss", None, {})))
            css_path = "styles/globals.css" if nextjs else "src/index.css"
            result.files.append(
                GeneratedFile(path=css_path, content=self._render("tailwind-css", None, {}), type=FileType.STYLES)
            )

        if nextjs:
            result.files.append(config("next.config.js", self._render("next-config", None, flags)))
            result.files.append(
                GeneratedFile(
                    path=f"pages/index{ext}",
                    content=self._render("next-index", None, {"name": spec.name}),
                    type=FileType.COMPONENT,
                )
            )
            result.files.append(
                GeneratedFile(path=f"pages/_app{ext}", content=self._render("next-app", None, flags), type=FileType.COMPONENT)
            )
        else:
            app_path = f"src/App{ext}"
            app_context = {
                "title": spec.name,
                "components": [
                    {"name": name, "path": _relative_import(app_path, project_engine.component_path(name))}
                    for name in component_names
                ],
            }
            result.files.append(config(f"vite.config{script_ext}", self._render("vite-config", None, flags)))
            result.files.append(
                GeneratedFile(path=f"src/main{ext}", content=self._render("vite-main", None, flags), type=FileType.COMPONENT)
            )
            result.files.append(
                GeneratedFile(path=app_path, content=self._render("vite-app", None, app_context), type=FileType.COMPONENT)
            )
            result.files.append(
                config("index.html", self._render("vite-index", None, {"title": spec.name, "script_extension": script_ext}))
            )

        readme_context = {
            "name": spec.name,
            "description": spec.description,
            "platform": "Next.js" if nextjs else "React (Vite)",
            "styling": spec.styling,
            "features": sorted(features),
            "components": component_names,
            "scripts": [{"name": name, "command": command} for name, command in manifest["scripts"].items()],
        }
        result.files.append(
            GeneratedFile(path="README.md", content=self._render("readme", None, readme_context), type=FileType.DOCS)
        )

        for component in spec.components:
            result.merge(project_engine._component_files(component))

        logger.info("Generated project %s with %d files", spec.name, len(result.files))
        return result
