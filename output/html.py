"""HTML build report with sortable tables and dark theme."""

import os
import glob
from datetime import datetime

from jinja2 import Template

from models import AutoFixPlan, Build, CompatibilityResult, Recommendations, ScoreResult, UpgradeOption


HTML_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>PC Build Report - {{ generated_at }}</title>
<style>
  * { margin: 0; padding: 0; box-sizing: border-box; }
  body {
    background: #1a1a2e;
    color: #e0e0e0;
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    padding: 20px;
  }
  h1 { color: #00d4ff; margin-bottom: 10px; }
  h2 { color: #00d4ff; margin: 25px 0 10px; font-size: 1.2em; }
  .summary {
    background: #16213e;
    border: 1px solid #0f3460;
    border-radius: 8px;
    padding: 15px 20px;
    margin-bottom: 20px;
    display: flex;
    gap: 30px;
    flex-wrap: wrap;
  }
  .summary .stat {
    display: flex;
    flex-direction: column;
  }
  .summary .stat .label {
    font-size: 0.8em;
    color: #888;
    text-transform: uppercase;
  }
  .summary .stat .value {
    font-size: 1.3em;
    font-weight: bold;
    color: #00d4ff;
  }
  .meta {
    color: #666;
    font-size: 0.85em;
    margin-bottom: 15px;
  }
  table {
    width: 100%;
    border-collapse: collapse;
    background: #16213e;
    border-radius: 8px;
    overflow: hidden;
  }
  th {
    background: #0f3460;
    color: #00d4ff;
    padding: 10px 8px;
    text-align: left;
    cursor: pointer;
    user-select: none;
    white-space: nowrap;
  }
  th:hover { background: #1a4a8a; }
  th.sortable::after { content: ' \\2195'; font-size: 0.7em; opacity: 0.5; }
  td {
    padding: 8px;
    border-bottom: 1px solid #1a1a2e;
  }
  tr:hover { background: #1a2a4e; }
  tr.critical td { background: rgba(255, 61, 0, 0.15); }
  tr.warning td { background: rgba(255, 193, 7, 0.15); }
  tr.good td { background: rgba(0, 200, 83, 0.15); }
  .evidence, .breakdown {
    color: #888;
    font-size: 0.85em;
    margin-top: 4px;
  }
  .breakdown { list-style: none; }
  .empty {
    text-align: center;
    padding: 20px;
    color: #666;
  }
</style>
</head>
<body>
<h1>PC Build Report</h1>
<div class="meta">Generated: {{ generated_at }} | Parts: {{ parts|length }} | Preset: {{ preset }}</div>

<div class="summary">
  <div class="stat">
    <span class="label">Overall</span>
    <span class="value">{{ scores.overall }}</span>
  </div>
  <div class="stat">
    <span class="label">Compatible</span>
    <span class="value">{{ "Yes" if compat.is_compatible else "No" }}</span>
  </div>
  <div class="stat">
    <span class="label">Confidence</span>
    <span class="value">{{ compat.confidence }}%</span>
  </div>
  <div class="stat">
    <span class="label">Total Price</span>
    <span class="value">${{ "%.2f"|format(total_price) }}</span>
  </div>
</div>

<h2>Parts</h2>
<table id="partsTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable('partsTable', 0)">Slot</th>
  <th class="sortable" onclick="sortTable('partsTable', 1)">Part</th>
  <th class="sortable" onclick="sortTable('partsTable', 2)">Price</th>
</tr>
</thead>
<tbody>
{% for part in parts %}
<tr>
  <td>{{ part.category }}</td>
  <td>{{ part.name or part.id }}</td>
  <td>{{ "$%.2f"|format(part.price_usd) if part.price_usd is not none else "—" }}</td>
</tr>
{% endfor %}
</tbody>
</table>

<h2>Compatibility</h2>
{% if compat.issues %}
<table id="issuesTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable('issuesTable', 0)">Severity</th>
  <th class="sortable" onclick="sortTable('issuesTable', 1)">Issue</th>
  <th>Details</th>
  <th>Suggested Fix</th>
</tr>
</thead>
<tbody>
{% for issue in compat.issues %}
<tr class="{{ issue.severity }}">
  <td>{{ issue.severity }}</td>
  <td>{{ issue.title }}</td>
  <td>
    {{ issue.description }}
    {% if issue.evidence and issue.evidence.values %}
    <div class="evidence">
      {% for label, value in issue.evidence.values.items() %}{{ label }}: {{ value }}{% if not loop.last %} &middot; {% endif %}{% endfor %}
      {% if issue.evidence.calculation %}<br>{{ issue.evidence.calculation }}{% endif %}
    </div>
    {% endif %}
  </td>
  <td>{{ issue.suggested_fixes[0] if issue.suggested_fixes else "—" }}</td>
</tr>
{% endfor %}
</tbody>
</table>
{% else %}
<div class="empty">No issues found.</div>
{% endif %}

<h2>Scores</h2>
<table id="scoresTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable('scoresTable', 0)">Score</th>
  <th class="sortable" onclick="sortTable('scoresTable', 1)">Value</th>
  <th class="sortable" onclick="sortTable('scoresTable', 2)">Confidence</th>
  <th>Summary</th>
</tr>
</thead>
<tbody>
{% for name, score in score_rows %}
<tr class="{{ 'good' if score.value >= 80 else ('warning' if score.value >= 50 else 'critical') }}">
  <td>{{ name }}</td>
  <td>{{ score.value }}</td>
  <td>{{ score.confidence }}%</td>
  <td>
    {{ score.summary }}
    <ul class="breakdown">
    {% for item in score.breakdown %}
      <li>{{ "%+d"|format(item.impact) }} {{ item.factor }}</li>
    {% endfor %}
    </ul>
  </td>
</tr>
{% endfor %}
</tbody>
</table>

{% if upgrades is not none %}
<h2>Upgrade Path</h2>
{% if upgrades %}
<table id="upgradesTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable('upgradesTable', 0)">#</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 1)">Slot</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 2)">Suggested</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 3)">Cost</th>
  <th>Cascade</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 5)">Total</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 6)">Overall Δ</th>
  <th class="sortable" onclick="sortTable('upgradesTable', 7)">Pts/$100</th>
</tr>
</thead>
<tbody>
{% for option in upgrades %}
<tr class="{{ 'good' if option.score_impact.overall > 0 else '' }}">
  <td>{{ loop.index }}</td>
  <td>{{ option.category }}</td>
  <td>{{ option.suggested_part.name }}</td>
  <td>${{ "%.2f"|format(option.cost) }}</td>
  <td>{{ option.platform_change.warning if option.platform_change else "—" }}</td>
  <td>${{ "%.2f"|format(option.total_cost) }}</td>
  <td>{{ "%+d"|format(option.score_impact.overall) }}</td>
  <td>{{ "%.1f"|format(option.value_rating) }}</td>
</tr>
{% endfor %}
</tbody>
</table>
{% else %}
<div class="empty">No upgrades found within budget.</div>
{% endif %}
{% endif %}

{% if recommendations is not none %}
<h2>Suggestions</h2>
{% if recommendations.upgrades %}
<table id="suggestionsTable">
<thead>
<tr>
  <th class="sortable" onclick="sortTable('suggestionsTable', 0)">Slot</th>
  <th>Current</th>
  <th>Suggested</th>
  <th class="sortable" onclick="sortTable('suggestionsTable', 3)">Price Δ</th>
  <th class="sortable" onclick="sortTable('suggestionsTable', 4)">Overall Δ</th>
  <th>Reason</th>
</tr>
</thead>
<tbody>
{% for s in recommendations.upgrades %}
<tr class="{{ 'good' if s.score_delta > 0 else '' }}">
  <td>{{ s.category }}</td>
  <td>{{ s.current_part.name }}</td>
  <td>{{ s.suggested_part.name }}</td>
  <td>{{ "%+.2f"|format(s.price_delta) }}</td>
  <td>{{ "%+d"|format(s.score_delta) }}</td>
  <td>{{ s.reason }}</td>
</tr>
{% endfor %}
</tbody>
</table>
{% else %}
<div class="empty">No part suggestions.</div>
{% endif %}
{% for alt in recommendations.alternatives %}
<div class="meta">Alternative: {{ alt.label }} ({{ alt.score_impact }})</div>
{% endfor %}
{% endif %}

{% if plan is not none %}
<h2>Auto-fix Plan ({{ plan.strategy }})</h2>
{% if plan.fixes %}
<table id="fixesTable">
<thead>
<tr>
  <th>Issue</th>
  <th>Action</th>
  <th>From</th>
  <th>To</th>
  <th class="sortable" onclick="sortTable('fixesTable', 4)">Price Δ</th>
  <th>Reason</th>
</tr>
</thead>
<tbody>
{% for fix in plan.fixes %}
<tr>
  <td>{{ fix.issue_id }}</td>
  <td>{{ fix.action }}</td>
  <td>{{ fix.old_part.name if fix.old_part else "—" }}</td>
  <td>{{ fix.new_part.name if fix.new_part else "—" }}</td>
  <td>{{ "%+.2f"|format(fix.price_impact) }}</td>
  <td>{{ fix.reason }}</td>
</tr>
{% endfor %}
</tbody>
</table>
{% else %}
<div class="empty">No fixes available from the catalog.</div>
{% endif %}
<div class="meta">Remaining: {{ plan.issues_remaining|join(", ") or "none" }}</div>
{% endif %}

<script>
function sortTable(tableId, colIndex) {
  var table = document.getElementById(tableId);
  var tbody = table.querySelector("tbody");
  var rows = Array.from(tbody.querySelectorAll("tr"));
  var ascending = table.dataset.sortCol === String(colIndex)
    ? table.dataset.sortDir !== "asc"
    : true;

  rows.sort(function(a, b) {
    var aText = a.cells[colIndex].textContent.trim().replace(/[$,%+]/g, "");
    var bText = b.cells[colIndex].textContent.trim().replace(/[$,%+]/g, "");
    var aNum = parseFloat(aText);
    var bNum = parseFloat(bText);
    if (!isNaN(aNum) && !isNaN(bNum)) {
      return ascending ? aNum - bNum : bNum - aNum;
    }
    return ascending
      ? aText.localeCompare(bText)
      : bText.localeCompare(aText);
  });

  rows.forEach(function(row) { tbody.appendChild(row); });
  table.dataset.sortCol = String(colIndex);
  table.dataset.sortDir = ascending ? "asc" : "desc";
}
</script>
</body>
</html>
""")


INDEX_TEMPLATE = Template("""\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>PC Build Reports Index</title>
<style>
  body {
    background: #1a1a2e;
    color: #e0e0e0;
    font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    padding: 20px;
  }
  h1 { color: #00d4ff; margin-bottom: 20px; }
  ul { list-style: none; padding: 0; }
  li {
    padding: 8px 0;
    border-bottom: 1px solid #0f3460;
  }
  a { color: #00d4ff; text-decoration: none; font-size: 1.1em; }
  a:hover { text-decoration: underline; }
</style>
</head>
<body>
<h1>PC Build Reports</h1>
<ul>
{% for report in reports %}
  <li><a href="{{ report }}">{{ report }}</a></li>
{% endfor %}
</ul>
{% if not reports %}
<p>No reports found.</p>
{% endif %}
</body>
</html>
""")


def render_html_report(
    build: Build,
    compat: CompatibilityResult,
    scores: ScoreResult,
    upgrades: list[UpgradeOption] | None = None,
    plan: AutoFixPlan | None = None,
    recommendations: Recommendations | None = None,
    preset: str = "custom",
    output_dir: str = "results",
) -> str:
    """Render a build evaluation to a timestamped HTML report file.

    Args:
        build: The evaluated build.
        compat: Compatibility result for the build.
        scores: Scores for the build.
        upgrades: Optional upgrade path; the section is omitted when None.
        plan: Optional auto-fix plan; the section is omitted when None.
        recommendations: Optional part suggestions and alternatives.
        preset: Preset name shown in the header.
        output_dir: Directory to write the HTML file into.

    Returns:
        Path to the generated HTML file.
    """
    os.makedirs(output_dir, exist_ok=True)

    now = datetime.now()
    generated_at = now.strftime("%Y-%m-%d %H:%M:%S")
    filename = f"build_report_{now.strftime('%Y-%m-%d_%H%M%S')}.html"
    filepath = os.path.join(output_dir, filename)

    html = HTML_TEMPLATE.render(
        generated_at=generated_at,
        preset=preset,
        parts=build.parts(),
        total_price=build.total_price(),
        compat=compat,
        scores=scores,
        score_rows=[
            (name.capitalize(), getattr(scores, name))
            for name in ("compatibility", "performance", "value", "usability")
        ],
        upgrades=upgrades,
        plan=plan,
        recommendations=recommendations,
    )

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(html)

    return filepath


def update_index(output_dir: str = "results") -> str:
    """Generate an index.html listing all report files in the output directory.

    Args:
        output_dir: Directory containing report HTML files.

    Returns:
        Path to the generated index.html.
    """
    pattern = os.path.join(output_dir, "build_report_*.html")
    report_files = sorted(
        [os.path.basename(f) for f in glob.glob(pattern)],
        reverse=True,
    )

    html = INDEX_TEMPLATE.render(reports=report_files)

    index_path = os.path.join(output_dir, "index.html")
    with open(index_path, "w", encoding="utf-8") as f:
        f.write(html)

    return index_path
