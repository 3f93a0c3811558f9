"""Immutable template table for the Generation and Reporting engines.

Templates are keyed by ``(kind, variant)``. For components the variant is
the styling approach; for pages it is the layout; for reports it is the
output format. Lookups that miss fall back to ``(kind, "default")``.

All templates use the processor grammar (``{{path}}``, ``{{#each}}``,
``{{#if}}``/``{{else}}``). Values that need per-target logic (class
attributes, destructuring lists, import paths) are computed by the engines
and passed in as plain strings.
"""

from collections.abc import Mapping
from types import MappingProxyType

from uiforge.templates.reports import REPORT_TEMPLATES

TemplateKey = tuple[str, str]

DEFAULT_VARIANT = "default"


# =============================================================================
# Component templates
# =============================================================================

_COMPONENT_DOC = """/**
 * {{name}} component.
{{#if description}}
 *
 * {{description}}
{{/if}}
 */
"""

_COMPONENT_REACT_IMPORT = """import React, { {{react_imports}} } from 'react';
"""

_COMPONENT_LOCAL_IMPORTS = """{{#each sub_components}}
import { {{this}} } from './{{this}}';
{{/each}}
"""

_COMPONENT_PROPS = """
{{#if typescript}}
export interface {{name}}Props {
{{#each interface_props}}
  readonly {{name}}{{#if optional}}?{{/if}}: {{type}};
{{/each}}
  readonly children?: React.ReactNode;
  readonly className?: string;
}

{{/if}}
"""

_COMPONENT_BODY = """export const {{name}} = forwardRef{{#if typescript}}<{{ref_type}}, {{name}}Props>{{/if}}(
  ({ {{destructure}} }, ref) => {
{{#each state_lines}}
    {{this}}
{{/each}}
{{body}}
  },
);

{{name}}.displayName = '{{name}}';

export default {{name}};
"""

COMPONENT_CSS_MODULES = (
    _COMPONENT_DOC
    + _COMPONENT_REACT_IMPORT
    + "\nimport styles from './{{name}}.module.css';\n"
    + _COMPONENT_LOCAL_IMPORTS
    + _COMPONENT_PROPS
    + _COMPONENT_BODY
)

COMPONENT_STYLED = (
    _COMPONENT_DOC
    + _COMPONENT_REACT_IMPORT
    + "import styled from 'styled-components';\n"
    + _COMPONENT_LOCAL_IMPORTS
    + """
const {{tag}} = styled.{{element}}`
  box-sizing: border-box;
  display: {{display}};

  &:focus-visible {
    outline: 2px solid currentColor;
    outline-offset: 2px;
  }
`;
"""
    + _COMPONENT_PROPS
    + _COMPONENT_BODY
)

COMPONENT_TAILWIND = (
    _COMPONENT_DOC
    + _COMPONENT_REACT_IMPORT
    + "import { cva } from 'class-variance-authority';\n"
    + _COMPONENT_LOCAL_IMPORTS
    + """
const {{variants_name}} = cva('{{base_classes}}');
"""
    + _COMPONENT_PROPS
    + _COMPONENT_BODY
)

COMPONENT_DEFAULT = (
    _COMPONENT_DOC
    + _COMPONENT_REACT_IMPORT
    + _COMPONENT_LOCAL_IMPORTS
    + _COMPONENT_PROPS
    + _COMPONENT_BODY
)


# Type-specific render bodies. Rendered first, then injected as {{body}}.

BODY_BUTTON = """    return (
      <{{tag}}
        ref={ref}
        type="button"
        {{class_attr}}
        onClick={onClick}
{{#if aria_label}}
        aria-label="{{aria_label}}"
{{/if}}
        {...rest}
      >
{{#each sub_components}}
        <{{this}} />
{{/each}}
        {children}
      </{{tag}}>
    );"""

BODY_FORM = """    const handleSubmit = useCallback(
      (event{{#if typescript}}: React.FormEvent<HTMLFormElement>{{/if}}) => {
        event.preventDefault();
        onSubmit?.(event);
      },
      [onSubmit],
    );

    return (
      <{{tag}}
        ref={ref}
        {{class_attr}}
        onSubmit={handleSubmit}
        noValidate
{{#if aria_label}}
        aria-label="{{aria_label}}"
{{/if}}
        {...rest}
      >
{{#each sub_components}}
        <{{this}} />
{{/each}}
        {children}
      </{{tag}}>
    );"""

BODY_MODAL = """    useEffect(() => {
      if (!isOpen) {
        return undefined;
      }
      const handleKeyDown = (event{{#if typescript}}: KeyboardEvent{{/if}}) => {
        if (event.key === 'Escape') {
          onClose();
        }
      };
      document.addEventListener('keydown', handleKeyDown);
      return () => document.removeEventListener('keydown', handleKeyDown);
    }, [isOpen, onClose]);

    if (!isOpen) {
      return null;
    }

    return (
      <{{tag}}
        ref={ref}
        role="dialog"
        aria-modal="true"
{{#if aria_label}}
        aria-label="{{aria_label}}"
{{/if}}
        tabIndex={-1}
        {{class_attr}}
        {...rest}
      >
{{#each sub_components}}
        <{{this}} />
{{/each}}
        {children}
      </{{tag}}>
    );"""

BODY_TABLE = """    return (
      <{{tag}}
        ref={ref}
        {{class_attr}}
{{#if aria_label}}
        aria-label="{{aria_label}}"
{{/if}}
        {...rest}
      >
        <thead>
          <tr>
            {columns.map((column) => (
              <th key={column.key} scope="col">
                {column.header}
              </th>
            ))}
          </tr>
        </thead>
        <tbody>
          {data.map((row, rowIndex) => (
            <tr key={rowIndex}>
              {columns.map((column) => (
                <td key={column.key}>{String(row[column.key] ?? '')}</td>
              ))}
            </tr>
          ))}
        </tbody>
        {children}
      </{{tag}}>
    );"""

BODY_NAVIGATION = """    return (
      <{{tag}}
        ref={ref}
        {{class_attr}}
        aria-label="{{aria_label}}"
        {...rest}
      >
        <ul role="list">
          {items.map((item) => (
            <li key={item.href}>
              <a href={item.href}>{item.label}</a>
            </li>
          ))}
        </ul>
{{#each sub_components}}
        <{{this}} />
{{/each}}
        {children}
      </{{tag}}>
    );"""

BODY_GENERIC = """    return (
      <{{tag}}
        ref={ref}
        {{class_attr}}
{{#if role}}
        role="{{role}}"
{{/if}}
{{#if aria_label}}
        aria-label="{{aria_label}}"
{{/if}}
{{#if focusable}}
        tabIndex={0}
{{/if}}
        {...rest}
      >
{{#each sub_components}}
        <{{this}} />
{{/each}}
        {children}
      </{{tag}}>
    );"""

SUB_COMPONENT = """{{#if typescript}}
import type { ReactNode } from 'react';

export interface {{name}}Props {
  readonly children?: ReactNode;
  readonly className?: string;
}

{{/if}}
export const {{name}} = ({ children, className }{{#if typescript}}: {{name}}Props{{/if}}) => (
  <div className={className}>{children}</div>
);

export default {{name}};
"""

STYLES_CSS_MODULES = """.root {
  box-sizing: border-box;
  display: {{display}};
}

.root:focus-visible {
  outline: 2px solid currentColor;
  outline-offset: 2px;
}
"""

STYLES_CSS = """.{{css_class}} {
  box-sizing: border-box;
  display: {{display}};
}

.{{css_class}}:focus-visible {
  outline: 2px solid currentColor;
  outline-offset: 2px;
}
"""

HOOK = """import { useCallback, useState } from 'react';

/**
 * {{name}} keeps a resettable piece of local state.
 */
export function {{name}}{{#if typescript}}<T>{{/if}}(initialValue{{#if typescript}}: T{{/if}}) {
  const [value, setValue] = useState(initialValue);
  const reset = useCallback(() => setValue(initialValue), [initialValue]);

  return { value, setValue, reset }{{#if typescript}} as const{{/if}};
}

export default {{name}};
"""

TEST = """import React from 'react';
import { fireEvent, render, screen } from '@testing-library/react';

import { {{name}} } from '{{import_path}}';

describe('{{name}}', () => {
  it('renders without crashing', () => {
    const { container } = render(<{{name}} {{required_props}}/>);
    expect(container.firstChild).not.toBeNull();
  });

  it('forwards className', () => {
    const { container } = render(<{{name}} {{required_props}}className="custom-class" />);
    expect(container.firstChild).toHaveClass('custom-class');
  });
{{#each handlers}}

  it('calls {{prop}} on {{event}}', () => {
    const handler = jest.fn();
    render(
      <{{name}} {{required_props}}{{prop}}={handler}>
        Trigger
      </{{name}}>,
    );
    fireEvent.{{event}}(screen.getByText('Trigger'));
    expect(handler).toHaveBeenCalled();
  });
{{/each}}
});
"""

STORY = """{{#if typescript}}
import type { Meta, StoryObj } from '@storybook/react';

{{/if}}
import { {{name}} } from '{{import_path}}';

const meta{{#if typescript}}: Meta<typeof {{name}}>{{/if}} = {
  title: 'Components/{{name}}',
  component: {{name}},
  tags: ['autodocs'],
};

export default meta;
{{#if typescript}}
type Story = StoryObj<typeof {{name}}>;
{{/if}}

export const Default{{#if typescript}}: Story{{/if}} = {
  args: {
{{#each story_args}}
    {{this}},
{{/each}}
  },
};
"""

DOCS = """# {{name}}

{{#if description}}
{{description}}

{{/if}}
## Usage

```{{code_fence}}
import { {{name}} } from '{{import_path}}';
```

## Props

| Prop | Type | Required | Description |
|------|------|----------|-------------|
{{#each props}}
| `{{name}}` | `{{type}}` | {{#if optional}}No{{else}}Yes{{/if}} | {{description}} |
{{/each}}
| `className` | `string` | No | Extra class names |

## Accessibility

{{#if aria_label}}
- Announced as "{{aria_label}}"
{{/if}}
{{#if role}}
- Exposes role `{{role}}`
{{/if}}
- Forwards its ref to the underlying `<{{element}}>` element
"""


# =============================================================================
# Page templates
# =============================================================================

PAGE = """{{#if use_client}}
'use client';

{{/if}}
{{#if has_data}}
import { useEffect, useState } from 'react';

{{/if}}
{{#each section_imports}}
import { {{name}} } from '{{path}}';
{{/each}}

{{#if metadata}}
export const metadata = {
  title: '{{title}}',
};

{{/if}}
{{#if route}}
// Route: {{route}}
{{/if}}
export default function {{name}}() {
{{#if has_data}}
  const [data, setData] = useState{{#if typescript}}<Record<string, unknown>>{{/if}}({});
  const [error, setError] = useState{{#if typescript}}<Error | null>{{/if}}(null);

  useEffect(() => {
    const controller = new AbortController();
    const load = async () => {
      try {
        const entries = await Promise.all(
          [{{data_source_list}}].map(async (url) => {
            const response = await fetch(url, { signal: controller.signal });
            if (!response.ok) {
              throw new Error(`Request to ${url} failed: ${response.status}`);
            }
            return [url, await response.json()];
          }),
        );
        setData(Object.fromEntries(entries));
      } catch (err) {
        if (!controller.signal.aborted) {
          setError(err{{#if typescript}} as Error{{/if}});
        }
      }
    };
    load();
    return () => controller.abort();
  }, []);

{{/if}}
  return (
{{layout}}
  );
}
"""

LAYOUT_DEFAULT = """    <main className="page">
{{#if title}}
      <h1>{{title}}</h1>
{{/if}}
{{#if has_data}}
      {error && <p role="alert">{error.message}</p>}
{{/if}}
{{#each sections}}
      <{{this}}{{#if has_data}} data={data}{{/if}} />
{{/each}}
    </main>"""

LAYOUT_DASHBOARD = """    <div className="dashboard-grid">
      <aside className="dashboard-sidebar" aria-label="Sidebar">
{{#each sidebar}}
        <{{this}} />
{{/each}}
      </aside>
      <main className="dashboard-main">
{{#if title}}
        <h1>{{title}}</h1>
{{/if}}
{{#if has_data}}
        {error && <p role="alert">{error.message}</p>}
{{/if}}
        <section className="dashboard-widgets">
{{#each main}}
          <{{this}}{{#if has_data}} data={data}{{/if}} />
{{/each}}
        </section>
      </main>
    </div>"""

LAYOUT_LANDING = """    <>
      <header className="hero">
{{#if title}}
        <h1>{{title}}</h1>
{{/if}}
{{#each hero}}
        <{{this}} />
{{/each}}
      </header>
      <main>
{{#if has_data}}
        {error && <p role="alert">{error.message}</p>}
{{/if}}
{{#each main}}
        <{{this}}{{#if has_data}} data={data}{{/if}} />
{{/each}}
      </main>
      <footer className="footer">
        <p>&copy; {new Date().getFullYear()} {{footer_label}}</p>
      </footer>
    </>"""


# =============================================================================
# Project templates
# =============================================================================

README = """# {{name}}

{{#if description}}
{{description}}

{{/if}}
## Getting Started

```bash
npm install
npm run dev
```

## Scripts

{{#each scripts}}
- `npm run {{name}}`: {{command}}
{{/each}}

## Stack

- Platform: {{platform}}
- Styling: {{styling}}
{{#if features.length}}
- Features: {{features}}
{{/if}}
{{#if components.length}}

## Components

{{#each components}}
- `{{this}}`
{{/each}}
{{/if}}
"""

ESLINT_CONFIG = """import js from '@eslint/js';
{{#if typescript}}
import tseslint from 'typescript-eslint';
{{/if}}
import reactHooks from 'eslint-plugin-react-hooks';

export default [
  js.configs.recommended,
{{#if typescript}}
  ...tseslint.configs.recommended,
{{/if}}
  {
    plugins: { 'react-hooks': reactHooks },
    rules: {
      ...reactHooks.configs.recommended.rules,
    },
  },
  { ignores: ['dist', 'build', '.next', 'node_modules'] },
];
"""

TAILWIND_CONFIG = """/** @type {import('tailwindcss').Config} */
module.exports = {
  content: [{{content_globs}}],
  theme: {
    extend: {},
  },
  plugins: [],
};
"""

POSTCSS_CONFIG = """module.exports = {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
};
"""

NEXT_CONFIG = """/** @type {import('next').NextConfig} */
const nextConfig = {
  reactStrictMode: true,
{{#if styled_components}}
  compiler: {
    styledComponents: true,
  },
{{/if}}
};

module.exports = nextConfig;
"""

NEXT_APP = """{{#if typescript}}
import type { AppProps } from 'next/app';
{{/if}}
{{#if tailwind}}
import '../styles/globals.css';
{{/if}}

export default function App({ Component, pageProps }{{#if typescript}}: AppProps{{/if}}) {
  return <Component {...pageProps} />;
}
"""

NEXT_INDEX = """export default function Home() {
  return (
    <main>
      <h1>{{name}}</h1>
    </main>
  );
}
"""

VITE_CONFIG = """import { defineConfig } from 'vite';
import react from '@vitejs/plugin-react';

export default defineConfig({
  plugins: [react()],
});
"""

VITE_MAIN = """import React from 'react';
import ReactDOM from 'react-dom/client';

import App from './App';
{{#if tailwind}}
import './index.css';
{{/if}}

ReactDOM.createRoot(document.getElementById('root'){{#if typescript}}!{{/if}}).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>,
);
"""

VITE_APP = """{{#each components}}
import { {{name}} } from '{{path}}';
{{/each}}

export default function App() {
  return (
    <main>
      <h1>{{title}}</h1>
{{#each components}}
      <{{name}} />
{{/each}}
    </main>
  );
}
"""

VITE_INDEX_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{{title}}</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main{{script_extension}}x"></script>
  </body>
</html>
"""

TAILWIND_CSS = """@tailwind base;
@tailwind components;
@tailwind utilities;
"""


# =============================================================================
# Migration templates
# =============================================================================

CODEMOD = """// Codemod for {{source}} -> {{target}}
import { Transform } from 'jscodeshift';

const transform: Transform = (fileInfo, api) => {
  const j = api.jscodeshift;
  const root = j(fileInfo.source);
{{#if import_path}}

  root
    .find(j.ImportDeclaration)
    .filter((path) => path.value.specifiers?.some((s) => s.local?.name === '{{source}}'))
    .forEach((path) => {
      path.value.source.value = '{{import_path}}';
    });
{{/if}}

  root
    .find(j.JSXElement)
    .filter((path) => path.value.openingElement.name.name === '{{source}}')
    .forEach((path) => {
      path.value.openingElement.name.name = '{{target}}';
      if (path.value.closingElement) {
        path.value.closingElement.name.name = '{{target}}';
      }
{{#each props}}
      path.value.openingElement.attributes
        .filter((attr) => attr.name?.name === '{{from}}')
        .forEach((attr) => {
          attr.name.name = '{{to}}';
        });
{{/each}}
    });

  return root.toSource();
};

export default transform;
"""


DEFAULT_TEMPLATES: dict[TemplateKey, str] = {
    ("component", "css-modules"): COMPONENT_CSS_MODULES,
    ("component", "styled-components"): COMPONENT_STYLED,
    ("component", "emotion"): COMPONENT_STYLED.replace("'styled-components'", "'@emotion/styled'"),
    ("component", "tailwind"): COMPONENT_TAILWIND,
    ("component", DEFAULT_VARIANT): COMPONENT_DEFAULT,
    ("body", "button"): BODY_BUTTON,
    ("body", "form"): BODY_FORM,
    ("body", "modal"): BODY_MODAL,
    ("body", "table"): BODY_TABLE,
    ("body", "navigation"): BODY_NAVIGATION,
    ("body", DEFAULT_VARIANT): BODY_GENERIC,
    ("sub-component", DEFAULT_VARIANT): SUB_COMPONENT,
    ("styles", "css-modules"): STYLES_CSS_MODULES,
    ("styles", DEFAULT_VARIANT): STYLES_CSS,
    ("hook", DEFAULT_VARIANT): HOOK,
    ("test", DEFAULT_VARIANT): TEST,
    ("story", DEFAULT_VARIANT): STORY,
    ("docs", DEFAULT_VARIANT): DOCS,
    ("page", DEFAULT_VARIANT): PAGE,
    ("layout", DEFAULT_VARIANT): LAYOUT_DEFAULT,
    ("layout", "dashboard"): LAYOUT_DASHBOARD,
    ("layout", "landing"): LAYOUT_LANDING,
    ("readme", DEFAULT_VARIANT): README,
    ("eslint", DEFAULT_VARIANT): ESLINT_CONFIG,
    ("tailwind", DEFAULT_VARIANT): TAILWIND_CONFIG,
    ("postcss", DEFAULT_VARIANT): POSTCSS_CONFIG,
    ("tailwind-css", DEFAULT_VARIANT): TAILWIND_CSS,
    ("next-config", DEFAULT_VARIANT): NEXT_CONFIG,
    ("next-app", DEFAULT_VARIANT): NEXT_APP,
    ("next-index", DEFAULT_VARIANT): NEXT_INDEX,
    ("vite-config", DEFAULT_VARIANT): VITE_CONFIG,
    ("vite-main", DEFAULT_VARIANT): VITE_MAIN,
    ("vite-app", DEFAULT_VARIANT): VITE_APP,
    ("vite-index", DEFAULT_VARIANT): VITE_INDEX_HTML,
    ("codemod", DEFAULT_VARIANT): CODEMOD,
    **REPORT_TEMPLATES,
}


class TemplateLibrary:
    """Read-only ``(kind, variant) -> template`` table.

    Built once and handed to engines at construction. Overrides replace
    individual entries without touching the defaults.

    Usage:
        library = TemplateLibrary()
        source = library.get("component", "tailwind")
        custom = library.with_overrides({("readme", "default"): "# {{name}}\\n"})
    """

    def __init__(self, overrides: Mapping[TemplateKey, str] | None = None) -> None:
        table = dict(DEFAULT_TEMPLATES)
        if overrides:
            table.update(overrides)
        self._templates: Mapping[TemplateKey, str] = MappingProxyType(table)

    def get(self, kind: str, variant: str | None = None) -> str:
        """Return the template for a kind and variant.

        Args:
            kind: Template kind (component, test, page, health-report, ...)
            variant: Styling approach, layout or output format

        Returns:
            Template source

        Raises:
            KeyError: If neither the variant nor the default exists
        """
        if variant and (kind, variant) in self._templates:
            return self._templates[(kind, variant)]
        try:
            return self._templates[(kind, DEFAULT_VARIANT)]
        except KeyError:
            raise KeyError(f"No template registered for kind '{kind}'") from None

    def has(self, kind: str, variant: str = DEFAULT_VARIANT) -> bool:
        """Return True if an exact entry exists."""
        return (kind, variant) in self._templates

    def variants(self, kind: str) -> list[str]:
        """List registered variants for a kind."""
        return sorted(variant for k, variant in self._templates if k == kind)

    def with_overrides(self, overrides: Mapping[TemplateKey, str]) -> "TemplateLibrary":
        """Return a new library with some entries replaced."""
        merged = dict(self._templates)
        merged.update(overrides)
        return TemplateLibrary(merged)

    def __len__(self) -> int:
        return len(self._templates)
