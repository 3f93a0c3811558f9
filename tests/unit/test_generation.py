"""Unit tests for the Generation Engine."""

import json

import pytest

from uiforge.engines.generation import GenerationEngine
from uiforge.engines.requirements import BASIC_COMPONENT_WARNING
from uiforge.models.analysis import PropInfo
from uiforge.models.generation import (
    ComponentSpec,
    FileType,
    GenerationContext,
    PageSpec,
    ProjectSpec,
    TestingOptions,
)
from uiforge.templates.library import TemplateLibrary


def paths(result) -> list[str]:
    """Generated paths in emission order."""
    return [f.path for f in result.files]


def content_of(result, path: str) -> str:
    """Content of the generated file at path."""
    return next(f.content for f in result.files if f.path == path)


class TestGenerateFromDescription:
    """Tests for free-text generation."""

    def test_button_description(self) -> None:
        """Test the single-file output for a described button."""
        result = GenerationEngine().generate_from_description(
            "Create a primary button with loading state and click handler"
        )

        assert result.success
        assert paths(result) == ["src/components/PrimaryButton.tsx"]
        assert result.files[0].type == FileType.COMPONENT
        content = result.files[0].content
        assert "export interface PrimaryButtonProps {" in content
        assert "readonly onClick?: () => void;" in content
        assert "readonly loading?: boolean;" in content
        assert "forwardRef<HTMLButtonElement, PrimaryButtonProps>" in content
        assert "({ onClick, loading, children, className, ...rest }, ref)" in content
        assert 'type="button"' in content
        assert "PrimaryButton.displayName = 'PrimaryButton';" in content
        assert "{{" not in content

    def test_css_modules_degrade_to_plain_class(self) -> None:
        """Test that the one-file flow never imports a missing stylesheet."""
        result = GenerationEngine().generate_from_description("Create a primary button")

        content = result.files[0].content
        assert ".module.css" not in content
        assert "'primary-button'" in content
        assert any("CSS module" in s for s in result.suggestions)

    def test_styling_from_description(self) -> None:
        result = GenerationEngine().generate_from_description("Create a button using tailwind")

        content = result.files[0].content
        assert "import { cva } from 'class-variance-authority';" in content
        assert "const buttonVariants = cva(" in content

    def test_empty_description_still_succeeds(self) -> None:
        result = GenerationEngine().generate_from_description("")

        assert result.success
        assert result.warnings == [BASIC_COMPONENT_WARNING]
        assert paths(result) == ["src/components/CustomComponent.tsx"]

    def test_unnamed_but_described(self) -> None:
        result = GenerationEngine().generate_from_description("Create something with disabled state")

        assert result.success
        assert paths(result) == ["src/components/Something.tsx"]

    def test_artifacts_become_suggestions(self) -> None:
        result = GenerationEngine().generate_from_description("Create a card with tests")

        assert len(result.files) == 1
        assert any("Requested tests" in s for s in result.suggestions)

    def test_javascript_output(self) -> None:
        engine = GenerationEngine(GenerationContext(typescript=False))

        result = engine.generate_from_description("Create a modal")

        assert paths(result) == ["src/components/Modal.jsx"]
        content = result.files[0].content
        assert "interface" not in content
        assert "forwardRef(" in content
        assert 'role="dialog"' in content

    def test_deterministic(self) -> None:
        engine = GenerationEngine()
        text = "Create a navigation menu with collapsed state"

        assert engine.generate_from_description(text).files == engine.generate_from_description(text).files


class TestGenerateComponent:
    """Tests for structured component generation."""

    def test_css_modules_companion_stylesheet(self) -> None:
        result = GenerationEngine().generate_component(ComponentSpec(name="Card"))

        assert paths(result) == ["src/components/Card.tsx", "src/components/Card.module.css"]
        assert "import styles from './Card.module.css';" in result.files[0].content
        assert result.files[1].type == FileType.STYLES
        assert ".root {" in result.files[1].content

    def test_invalid_dict_spec(self) -> None:
        result = GenerationEngine().generate_component({"type": "button"})

        assert not result.success
        assert result.files == []
        assert result.errors == ["Component name is required"]

    def test_invalid_styling(self) -> None:
        result = GenerationEngine().generate_component(ComponentSpec(name="Card", styling="sass"))

        assert not result.success
        assert result.errors == ["Unsupported styling approach: sass"]

    def test_all_companions_nested(self) -> None:
        """Test tests, stories, docs, hooks, sub-components and locales together."""
        engine = GenerationEngine(GenerationContext(file_structure="nested"))
        spec = ComponentSpec(
            name="UserCard",
            props=[PropInfo(name="name"), PropInfo(name="size", type="'sm' | 'lg'", optional=True)],
            sub_components=["avatar"],
            hooks=["toggle"],
            testing=TestingOptions(include_tests=True, include_stories=True, include_docs=True),
            locales=["en"],
            description="Shows a user.",
        )

        result = engine.generate_component(spec)

        assert paths(result) == [
            "src/components/UserCard/UserCard.tsx",
            "src/components/UserCard/UserCard.module.css",
            "src/components/UserCard/Avatar.tsx",
            "src/components/UserCard/useToggle.ts",
            "src/components/UserCard/UserCard.test.tsx",
            "src/components/UserCard/UserCard.stories.tsx",
            "docs/components/UserCard.md",
            "src/locales/en/UserCard.json",
        ]
        main = result.files[0].content
        assert "import { Avatar } from './Avatar';" in main
        assert "<Avatar />" in main
        assert " * Shows a user." in main

        test = content_of(result, "src/components/UserCard/UserCard.test.tsx")
        assert "import { UserCard } from './UserCard';" in test
        assert 'render(<UserCard name="name" />)' in test

        story = content_of(result, "src/components/UserCard/UserCard.stories.tsx")
        assert "name: 'name'," in story
        assert "children: 'Default UserCard'," in story

        docs = content_of(result, "docs/components/UserCard.md")
        assert "import { UserCard } from '../../src/components/UserCard/UserCard';" in docs
        assert "| `size` | `'sm' \\| 'lg'` | No |  |" in docs
        assert "| `name` | `string` | Yes |  |" in docs

        messages = json.loads(content_of(result, "src/locales/en/UserCard.json"))
        assert messages == {"UserCard": {"title": "User card", "description": "Shows a user."}}
        assert result.files_of_type(FileType.LOCALE)[0].type == FileType.LOCALE

    def test_test_directory_import_path(self) -> None:
        engine = GenerationEngine(GenerationContext(test_location="test-directory", include_tests=True))

        result = engine.generate_component(ComponentSpec(name="Card", styling="css"))

        test = content_of(result, "src/__tests__/Card.test.tsx")
        assert "import { Card } from '../components/Card';" in test

    def test_feature_based_paths(self) -> None:
        engine = GenerationEngine(GenerationContext(file_structure="feature-based"))

        result = engine.generate_component(ComponentSpec(name="OrderList", hooks=["useOrders"], styling="css"))

        assert paths(result) == [
            "src/features/order-list/components/OrderList.tsx",
            "src/features/order-list/hooks/useOrders.ts",
        ]

    def test_spec_flags_override_context(self) -> None:
        engine = GenerationEngine(GenerationContext(include_tests=True))

        result = engine.generate_component(
            ComponentSpec(name="Card", styling="css", testing=TestingOptions(include_tests=False))
        )

        assert paths(result) == ["src/components/Card.tsx"]

    def test_button_test_fires_click(self) -> None:
        engine = GenerationEngine(GenerationContext(include_tests=True))

        result = engine.generate_component(ComponentSpec(name="SaveButton", type="button", styling="css"))

        test = content_of(result, "src/components/SaveButton.test.tsx")
        assert "it('calls onClick on click'" in test
        assert "fireEvent.click(screen.getByText('Trigger'));" in test

    @pytest.mark.parametrize("styling", ["styled-components", "emotion"])
    def test_css_in_js(self, styling: str) -> None:
        result = GenerationEngine().generate_component(ComponentSpec(name="Panel", styling=styling))

        content = result.files[0].content
        module = "@emotion/styled" if styling == "emotion" else "styled-components"
        assert f"import styled from '{module}';" in content
        assert "const PanelRoot = styled.div`" in content
        assert "<PanelRoot" in content
        assert len(result.files) == 1

    def test_table_sub_components_warning(self) -> None:
        result = GenerationEngine().generate_component(
            ComponentSpec(name="Orders", type="table", styling="css", sub_components=["Toolbar"])
        )

        assert result.success
        assert result.warnings == ["Sub-components of table Orders are generated but not rendered"]
        assert "<Toolbar />" not in result.files[0].content

    def test_generic_suggestions(self) -> None:
        result = GenerationEngine().generate_component(ComponentSpec(name="Box", styling="css", complexity="high"))

        assert result.suggestions == [
            "Consider splitting Box into smaller sub-components",
            "Add an ARIA role or label to Box if it is interactive",
        ]

    def test_template_failure_becomes_result(self) -> None:
        """Test that a broken template is reported, not raised."""
        library = TemplateLibrary({("component", "css"): "{{#if name}}unclosed"})

        result = GenerationEngine(library=library).generate_component(ComponentSpec(name="Card", styling="css"))

        assert not result.success
        assert "Unclosed block" in result.errors[0]


class TestGeneratePage:
    """Tests for page generation."""

    def test_react_page_with_sections(self) -> None:
        spec = PageSpec(name="HomePage", sections=["Hero", "Features"], title="Welcome")

        result = GenerationEngine().generate_page(spec)

        assert paths(result) == ["src/pages/HomePage.tsx"]
        content = result.files[0].content
        assert "import { Hero } from '../components/Hero';" in content
        assert "export default function HomePage() {" in content
        assert "<h1>Welcome</h1>" in content
        assert "      <Features />" in content

    def test_nextjs_route_from_name(self) -> None:
        engine = GenerationEngine(GenerationContext(platform="nextjs"))

        result = engine.generate_page(PageSpec(name="SettingsPage", title="Settings"))

        assert paths(result) == ["app/settings/page.tsx"]
        assert "export const metadata = {" in result.files[0].content

    def test_nextjs_explicit_route_and_data(self) -> None:
        engine = GenerationEngine(GenerationContext(platform="nextjs"))
        spec = PageSpec(name="Stats", route="/admin/stats/", data_sources=["/api/stats"], title="Stats")

        result = engine.generate_page(spec)

        assert paths(result) == ["app/admin/stats/page.tsx"]
        content = result.files[0].content
        assert content.startswith("'use client';\n")
        assert "['/api/stats'].map" in content
        assert "export const metadata" not in content

    def test_dashboard_layout_splits_sidebar(self) -> None:
        spec = PageSpec(name="Admin", layout="dashboard", sections=["SideNav", "Chart"])

        content = GenerationEngine().generate_page(spec).files[0].content

        sidebar = content.index('<aside className="dashboard-sidebar"')
        main = content.index('<main className="dashboard-main">')
        assert sidebar < content.index("<SideNav />") < main < content.index("<Chart />")

    def test_landing_layout_footer(self) -> None:
        content = GenerationEngine().generate_page(PageSpec(name="LandingPage", layout="landing")).files[0].content

        assert "Landing page</p>" in content

    def test_page_components_generated(self) -> None:
        spec = PageSpec(name="Shop", components=[ComponentSpec(name="ProductGrid", styling="css")])

        assert paths(GenerationEngine().generate_page(spec)) == [
            "src/pages/Shop.tsx",
            "src/components/ProductGrid.tsx",
        ]

    def test_invalid_layout(self) -> None:
        result = GenerationEngine().generate_page({"name": "X", "layout": "grid"})

        assert not result.success
        assert result.errors == ["Unsupported layout: grid"]


class TestGenerateProject:
    """Tests for project scaffolding."""

    def test_vite_typescript_project(self) -> None:
        spec = ProjectSpec(
            name="shop",
            features=["typescript", "eslint", "testing"],
            components=[ComponentSpec(name="Header", styling="css")],
        )

        result = GenerationEngine().generate_project(spec)

        assert result.success
        assert paths(result) == [
            "package.json",
            "tsconfig.json",
            "eslint.config.js",
            "vite.config.ts",
            "src/main.tsx",
            "src/App.tsx",
            "index.html",
            "README.md",
            "src/components/Header.tsx",
        ]
        manifest = json.loads(content_of(result, "package.json"))
        assert manifest["name"] == "shop"
        assert list(manifest["dependencies"]) == ["react", "react-dom"]
        assert "typescript-eslint" in manifest["devDependencies"]
        assert manifest["scripts"]["test"] == "jest"
        assert "import { Header } from './components/Header';" in content_of(result, "src/App.tsx")
        assert '<script type="module" src="/src/main.tsx">' in content_of(result, "index.html")
        assert "- `npm run lint`: eslint ." in content_of(result, "README.md")

    def test_nextjs_tailwind_project(self) -> None:
        spec = ProjectSpec(name="site", platform="nextjs", styling="tailwind", features=["prettier"])

        result = GenerationEngine().generate_project(spec)

        assert paths(result) == [
            "package.json",
            ".prettierrc",
            "tailwind.config.js",
            "postcss.config.js",
            "styles/globals.css",
            "next.config.js",
            "pages/index.jsx",
            "pages/_app.jsx",
            "README.md",
        ]
        manifest = json.loads(content_of(result, "package.json"))
        assert "next" in manifest["dependencies"]
        assert "tailwindcss" in manifest["devDependencies"]
        assert "import '../styles/globals.css';" in content_of(result, "pages/_app.jsx")
        assert "'./app/**/*.{js,jsx,ts,tsx}'" in content_of(result, "tailwind.config.js")

    def test_invalid_project(self) -> None:
        result = GenerationEngine().generate_project({"name": "x", "platform": "svelte"})

        assert not result.success
        assert result.errors == ["Unsupported platform: svelte"]

    def test_missing_name(self) -> None:
        result = GenerationEngine().generate_project({})

        assert result.errors == ["Project name is required"]
