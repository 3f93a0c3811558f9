"""Report body templates (markdown and HTML fragments).

Markdown templates also feed the plain-text format through the
``to_plain_text`` filter. HTML fragments receive pre-escaped context
strings and are wrapped in the Jinja2 ``report.html.j2`` shell.

Every report ends with the shared charts and recommendations sections,
rendered from their own templates and appended by the engine.
"""

# =============================================================================
# Health report
# =============================================================================

HEALTH_MARKDOWN = """# {{title}}

**Project:** {{project.name}}{{#if project.version}} v{{project.version}}{{/if}}
**Generated:** {{generated_at}}
**Framework:** {{framework.label}}

## Summary

**Overall Health:** {{status.label}} ({{status.score}}/100)

{{summary.component_count}} components analyzed

## Quality Scores

| Metric | Score | Status |
|--------|-------|--------|
{{#each scores}}
| {{label}} | {{value}}/100 | {{status}} |
{{/each}}

## Component Analysis

- Components: {{types.component}}
- Pages: {{types.page}}
- Hooks: {{types.hook}}
- Average Complexity: {{summary.average_complexity}}

### Complexity Distribution

- Low: {{complexity.low}}
- Medium: {{complexity.medium}}
- High: {{complexity.high}}
{{#if components.length}}

| Component | Type | Complexity | Accessibility | Props |
|-----------|------|------------|---------------|-------|
{{#each components}}
| {{name}} | {{type}} | {{cyclomatic}} ({{level}}) | {{accessibility}}/100 | {{prop_count}} |
{{/each}}
{{/if}}
{{#if summarized}}

_Per-component detail omitted for {{summary.component_count}} components; see the distributions above._
{{/if}}

## Dependency Analysis

- Total Dependencies: {{summary.total_dependencies}}
- Production Dependencies: {{summary.production_dependencies}}
- Development Dependencies: {{summary.development_dependencies}}
{{#if dependencies.production.length}}

**Production:** {{dependencies.production}}
{{/if}}
{{#if dependencies.development.length}}

**Development:** {{dependencies.development}}
{{/if}}

### Security Assessment

Security Score: {{quality.security}}/100

{{#if security.length}}
{{#each security}}
- **{{subject}}**: {{detail}}
{{/each}}
{{else}}
No risky constructs found.
{{/if}}

## Performance Metrics

- Performance Score: {{quality.performance}}/100
- Maintainability: {{quality.maintainability}}/100
- Code Quality: {{quality.code_quality}}/100

## Accessibility Score

Accessibility Score: {{quality.accessibility}}/100
{{#if accessibility.length}}

{{#each accessibility}}
- **{{subject}}**: {{detail}}
{{/each}}
{{/if}}
"""

HEALTH_HTML = """<h1>{{title}}</h1>
<p class="meta">
  <strong>Project:</strong> {{project.name}}{{#if project.version}} v{{project.version}}{{/if}}<br>
  <strong>Generated:</strong> {{generated_at}}<br>
  <strong>Framework:</strong> {{framework.label}}
</p>

<section class="summary status-{{status.key}}">
  <h2>Summary</h2>
  <p class="score"><strong>Overall Health:</strong> {{status.label}} ({{status.score}}/100)</p>
  <p>{{summary.component_count}} components analyzed</p>
</section>

<section>
  <h2>Quality Scores</h2>
  <table>
    <thead><tr><th>Metric</th><th>Score</th><th>Status</th></tr></thead>
    <tbody>
{{#each scores}}
      <tr><td>{{label}}</td><td>{{value}}/100</td><td>{{status}}</td></tr>
{{/each}}
    </tbody>
  </table>
</section>

<section>
  <h2>Component Analysis</h2>
  <ul>
    <li>Components: {{types.component}}</li>
    <li>Pages: {{types.page}}</li>
    <li>Hooks: {{types.hook}}</li>
    <li>Average Complexity: {{summary.average_complexity}}</li>
  </ul>
  <h3>Complexity Distribution</h3>
  <ul>
    <li>Low: {{complexity.low}}</li>
    <li>Medium: {{complexity.medium}}</li>
    <li>High: {{complexity.high}}</li>
  </ul>
{{#if components.length}}
  <table>
    <thead><tr><th>Component</th><th>Type</th><th>Complexity</th><th>Accessibility</th><th>Props</th></tr></thead>
    <tbody>
{{#each components}}
      <tr><td>{{name}}</td><td>{{type}}</td><td>{{cyclomatic}} ({{level}})</td><td>{{accessibility}}/100</td><td>{{prop_count}}</td></tr>
{{/each}}
    </tbody>
  </table>
{{/if}}
{{#if summarized}}
  <p class="note">Per-component detail omitted for {{summary.component_count}} components.</p>
{{/if}}
</section>

<section>
  <h2>Dependency Analysis</h2>
  <ul>
    <li>Total Dependencies: {{summary.total_dependencies}}</li>
    <li>Production Dependencies: {{summary.production_dependencies}}</li>
    <li>Development Dependencies: {{summary.development_dependencies}}</li>
  </ul>
  <h3>Security Assessment</h3>
  <p>Security Score: {{quality.security}}/100</p>
{{#if security.length}}
  <ul>
{{#each security}}
    <li><strong>{{subject}}</strong>: {{detail}}</li>
{{/each}}
  </ul>
{{/if}}
</section>

<section>
  <h2>Performance Metrics</h2>
  <ul>
    <li>Performance Score: {{quality.performance}}/100</li>
    <li>Maintainability: {{quality.maintainability}}/100</li>
    <li>Code Quality: {{quality.code_quality}}/100</li>
  </ul>
</section>

<section>
  <h2>Accessibility Score</h2>
  <p>Accessibility Score: {{quality.accessibility}}/100</p>
{{#if accessibility.length}}
  <ul>
{{#each accessibility}}
    <li><strong>{{subject}}</strong>: {{detail}}</li>
{{/each}}
  </ul>
{{/if}}
</section>
"""


# =============================================================================
# Migration report
# =============================================================================

MIGRATION_MARKDOWN = """# {{title}}

**Project:** {{project.name}}
**Generated:** {{generated_at}}

## Summary

- Migration Status: {{status}}
- Completed Phases: {{summary.completed}}
- Failed Phases: {{summary.failed}}
- Modified Files: {{summary.modified}}
- Skipped Files: {{summary.skipped}}
- Errors Encountered: {{summary.errors}}
- Risk Level: {{risk_level}}
- Phase Duration: {{summary.duration}}
{{#if phases.length}}

## Phases

| Phase | Name | Risk | Result |
|-------|------|------|--------|
{{#each phases}}
| {{id}} | {{name}} | {{risk}} | {{outcome}} |
{{/each}}
{{/if}}
{{#if completed_phases.length}}

**Completed:** {{completed_phases}}
{{/if}}
{{#if failed_phases.length}}

**Failed:** {{failed_phases}}
{{/if}}
{{#if modified_files.length}}

## Modified Files

{{#each modified_files}}
- `{{this}}`
{{/each}}
{{/if}}
{{#if summarized}}

_File list omitted for {{summary.modified}} modified files._
{{/if}}
{{#if errors.length}}

## Errors

{{#each errors}}
- {{this}}
{{/each}}
{{/if}}
{{#if warnings.length}}

## Warnings

{{#each warnings}}
- {{this}}
{{/each}}
{{/if}}
{{#if rollback_recommended}}

**Rollback recommended:** one or more phases failed.
{{/if}}
{{#if backup_location}}

## Rollback

Backup Location: `{{backup_location}}`

{{#each rollback_instructions}}
- {{this}}
{{/each}}
{{/if}}
"""

MIGRATION_HTML = """<h1>{{title}}</h1>
<p class="meta">
  <strong>Project:</strong> {{project.name}}<br>
  <strong>Generated:</strong> {{generated_at}}
</p>

<section class="summary status-{{status_key}}">
  <h2>Summary</h2>
  <ul>
    <li>Migration Status: {{status}}</li>
    <li>Completed Phases: {{summary.completed}}</li>
    <li>Failed Phases: {{summary.failed}}</li>
    <li>Modified Files: {{summary.modified}}</li>
    <li>Skipped Files: {{summary.skipped}}</li>
    <li>Errors Encountered: {{summary.errors}}</li>
    <li>Risk Level: {{risk_level}}</li>
    <li>Phase Duration: {{summary.duration}}</li>
  </ul>
</section>
{{#if phases.length}}

<section>
  <h2>Phases</h2>
  <table>
    <thead><tr><th>Phase</th><th>Name</th><th>Risk</th><th>Result</th></tr></thead>
    <tbody>
{{#each phases}}
      <tr><td>{{id}}</td><td>{{name}}</td><td>{{risk}}</td><td>{{outcome}}</td></tr>
{{/each}}
    </tbody>
  </table>
</section>
{{/if}}
{{#if modified_files.length}}

<section>
  <h2>Modified Files</h2>
  <ul>
{{#each modified_files}}
    <li><code>{{this}}</code></li>
{{/each}}
  </ul>
</section>
{{/if}}
{{#if errors.length}}

<section>
  <h2>Errors</h2>
  <ul>
{{#each errors}}
    <li>{{this}}</li>
{{/each}}
  </ul>
</section>
{{/if}}
{{#if backup_location}}

<section>
  <h2>Rollback</h2>
  <p>Backup Location: <code>{{backup_location}}</code></p>
{{#if rollback_recommended}}
  <p class="warning"><strong>Rollback recommended:</strong> one or more phases failed.</p>
{{/if}}
  <ul>
{{#each rollback_instructions}}
    <li>{{this}}</li>
{{/each}}
  </ul>
</section>
{{/if}}
"""


# =============================================================================
# Architecture report
# =============================================================================

ARCHITECTURE_MARKDOWN = """# {{title}}

**Project:** {{project.name}}
**Generated:** {{generated_at}}
**Framework:** {{framework.label}}

## Overview

- Routing: {{architecture.routing}}
- Styling: {{architecture.styling}}
- TypeScript: {{architecture.typescript}}
- Structure: {{architecture.structure}}
{{#if architecture.state_management.length}}
- State Management: {{architecture.state_management}}
{{/if}}
{{#if architecture.directories.length}}
- Source Directories: {{architecture.directories}}
{{/if}}

## Component Types:

- Components: {{types.component}}
- Pages: {{types.page}}
- Hooks: {{types.hook}}

## Complexity Distribution

- Low: {{complexity.low}}
- Medium: {{complexity.medium}}
- High: {{complexity.high}}

## Dependency Graph

{{#if graph.length}}
{{#each graph}}
- {{name}} -> {{imports}}
{{/each}}
{{else}}
{{#if summarized}}
_{{summary.edge_count}} internal imports across {{summary.component_count}} components._
{{else}}
No internal component imports.
{{/if}}
{{/if}}

## Architectural Patterns

{{#each patterns}}
- **{{name}}**: {{description}}
{{/each}}
{{#if issues.length}}

## Architectural Issues

{{#each issues}}
### {{kind}}

{{#each findings}}
- {{this}}
{{/each}}

{{/each}}
{{/if}}
"""

ARCHITECTURE_HTML = """<h1>{{title}}</h1>
<p class="meta">
  <strong>Project:</strong> {{project.name}}<br>
  <strong>Generated:</strong> {{generated_at}}<br>
  <strong>Framework:</strong> {{framework.label}}
</p>

<section>
  <h2>Overview</h2>
  <ul>
    <li>Routing: {{architecture.routing}}</li>
    <li>Styling: {{architecture.styling}}</li>
    <li>TypeScript: {{architecture.typescript}}</li>
    <li>Structure: {{architecture.structure}}</li>
{{#if architecture.state_management.length}}
    <li>State Management: {{architecture.state_management}}</li>
{{/if}}
  </ul>
</section>

<section>
  <h2>Component Types:</h2>
  <ul>
    <li>Components: {{types.component}}</li>
    <li>Pages: {{types.page}}</li>
    <li>Hooks: {{types.hook}}</li>
  </ul>
  <h2>Complexity Distribution</h2>
  <ul>
    <li>Low: {{complexity.low}}</li>
    <li>Medium: {{complexity.medium}}</li>
    <li>High: {{complexity.high}}</li>
  </ul>
</section>

<section>
  <h2>Dependency Graph</h2>
{{#if graph.length}}
  <ul>
{{#each graph}}
    <li>{{name}} &rarr; {{imports}}</li>
{{/each}}
  </ul>
{{/if}}
</section>

<section>
  <h2>Architectural Patterns</h2>
  <ul>
{{#each patterns}}
    <li><strong>{{name}}</strong>: {{description}}</li>
{{/each}}
  </ul>
</section>
{{#if issues.length}}

<section class="issues">
  <h2>Architectural Issues</h2>
{{#each issues}}
  <h3>{{kind}}</h3>
  <ul>
{{#each findings}}
    <li>{{this}}</li>
{{/each}}
  </ul>
{{/each}}
</section>
{{/if}}
"""


# =============================================================================
# Executive summary
# =============================================================================

EXECUTIVE_MARKDOWN = """# {{title}}

## Executive Summary

**Project:** {{project.name}}
**Generated:** {{generated_at}}

Health Score: {{status.label}} ({{status.score}}/100)

## Project Overview

- Framework: {{framework.label}}
- Total Components: {{metrics.total_components}}
- Dependencies: {{metrics.dependencies}}

## Key Metrics

- Health Score: {{status.label}} ({{status.score}}/100)
- Security: {{quality.security}}/100
- Accessibility: {{quality.accessibility}}/100
- Maintainability: {{quality.maintainability}}/100
- High Complexity Components: {{metrics.high_complexity}}
- Security Vulnerabilities: {{metrics.security_vulnerabilities}}
- Technical Debt: {{metrics.technical_debt}}
{{#if migration}}

## Migration Status

- Migration Status: {{migration.status}}
- Completed Phases: {{migration.completed}}
- Failed Phases: {{migration.failed}}
- Modified Files: {{migration.modified}}
{{/if}}

## Risk Assessment

{{#if risks.length}}
{{#each risks}}
- **{{level}}**: {{description}}
{{/each}}
{{else}}
- **Low**: No significant risks identified.
{{/if}}
"""

EXECUTIVE_HTML = """<h1>{{title}}</h1>

<section class="summary status-{{status.key}}">
  <h2>Executive Summary</h2>
  <p>
    <strong>Project:</strong> {{project.name}}<br>
    <strong>Generated:</strong> {{generated_at}}
  </p>
  <p class="score">Health Score: {{status.label}} ({{status.score}}/100)</p>
</section>

<section>
  <h2>Project Overview</h2>
  <ul>
    <li>Framework: {{framework.label}}</li>
    <li>Total Components: {{metrics.total_components}}</li>
    <li>Dependencies: {{metrics.dependencies}}</li>
  </ul>
</section>

<section>
  <h2>Key Metrics</h2>
  <ul>
    <li>Health Score: {{status.label}} ({{status.score}}/100)</li>
    <li>Security: {{quality.security}}/100</li>
    <li>Accessibility: {{quality.accessibility}}/100</li>
    <li>Maintainability: {{quality.maintainability}}/100</li>
    <li>High Complexity Components: {{metrics.high_complexity}}</li>
    <li>Security Vulnerabilities: {{metrics.security_vulnerabilities}}</li>
    <li>Technical Debt: {{metrics.technical_debt}}</li>
  </ul>
</section>
{{#if migration}}

<section>
  <h2>Migration Status</h2>
  <ul>
    <li>Migration Status: {{migration.status}}</li>
    <li>Completed Phases: {{migration.completed}}</li>
    <li>Failed Phases: {{migration.failed}}</li>
    <li>Modified Files: {{migration.modified}}</li>
  </ul>
</section>
{{/if}}

<section>
  <h2>Risk Assessment</h2>
  <ul>
{{#each risks}}
    <li><strong>{{level}}</strong>: {{description}}</li>
{{/each}}
  </ul>
</section>
"""


# =============================================================================
# Shared sections
# =============================================================================

CHARTS_MARKDOWN = """{{#if charts.length}}

## Charts

{{#each charts}}
### {{title}}

{{#each points}}
- {{label}}: {{value}} ({{percent}}%)
{{/each}}

{{/each}}
{{/if}}
"""

CHARTS_HTML = """{{#if charts.length}}

<section class="charts">
  <h2>Charts</h2>
{{#each charts}}
  <figure class="chart" id="{{chart_id}}">
    <figcaption>{{title}}</figcaption>
{{#each points}}
    <div class="bar-row">
      <span class="bar-label">{{label}}</span>
      <span class="bar" style="width: {{percent}}%; background: {{color}}"></span>
      <span class="bar-value">{{value}}</span>
    </div>
{{/each}}
  </figure>
{{/each}}
</section>
{{/if}}
"""

RECOMMENDATIONS_MARKDOWN = """{{#if recommendations.length}}

## Recommendations

{{#each recommendations}}
- **[{{priority}}] {{title}}**: {{description}}
{{/each}}
{{/if}}
"""

RECOMMENDATIONS_HTML = """{{#if recommendations.length}}

<section class="recommendations">
  <h2>Recommendations</h2>
  <ul>
{{#each recommendations}}
    <li class="priority-{{priority}}"><strong>[{{priority}}] {{title}}</strong>: {{description}}</li>
{{/each}}
  </ul>
</section>
{{/if}}
"""

REPORT_TEMPLATES: dict[tuple[str, str], str] = {
    ("health-report", "markdown"): HEALTH_MARKDOWN,
    ("health-report", "html"): HEALTH_HTML,
    ("migration-report", "markdown"): MIGRATION_MARKDOWN,
    ("migration-report", "html"): MIGRATION_HTML,
    ("architecture-report", "markdown"): ARCHITECTURE_MARKDOWN,
    ("architecture-report", "html"): ARCHITECTURE_HTML,
    ("executive-report", "markdown"): EXECUTIVE_MARKDOWN,
    ("executive-report", "html"): EXECUTIVE_HTML,
    ("charts-section", "markdown"): CHARTS_MARKDOWN,
    ("charts-section", "html"): CHARTS_HTML,
    ("recommendations-section", "markdown"): RECOMMENDATIONS_MARKDOWN,
    ("recommendations-section", "html"): RECOMMENDATIONS_HTML,
}
