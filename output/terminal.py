"""Terminal output using Rich library."""
from datetime import datetime
from rich.console import Console
from rich.table import Table
from rich.text import Text
from models import (
    CRITICAL, WARNING, AutoFixPlan, Build, CompatibilityResult, Recommendations, ScoreResult,
    UpgradeOption,
)

SEVERITY_STYLES = {CRITICAL: "bold red", WARNING: "yellow", "info": "cyan"}


def _score_style(value: int) -> str:
    if value >= 80:
        return "green"
    if value >= 50:
        return "yellow"
    return "red"


def render_build_table(build: Build, console: Console) -> None:
    table = Table(show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("Slot", width=12)
    table.add_column("Part", width=50)
    table.add_column("Price", justify="right", width=10)

    for part in build.parts():
        table.add_row(
            part.category,
            part.name or part.id,
            f"${part.price_usd:,.0f}" if part.price_usd is not None else "—",
        )
    console.print(table)
    console.print(f"[bold]Total:[/bold] ${build.total_price():,.0f}")


def render_compat_table(compat: CompatibilityResult, console: Console) -> None:
    verdict = "[bold green]Compatible[/bold green]" if compat.is_compatible else "[bold red]Not compatible[/bold red]"
    console.print(
        f"\n{verdict}    Checks run: {compat.checks_run}    Confidence: {compat.confidence}%\n"
    )
    if not compat.issues:
        console.print("No issues found.")
        return

    table = Table(show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("Severity", width=9)
    table.add_column("Issue", width=36)
    table.add_column("Details", width=70)
    table.add_column("Fix", width=45)

    for issue in compat.issues:
        table.add_row(
            Text(issue.severity, style=SEVERITY_STYLES[issue.severity]),
            issue.title,
            issue.description,
            issue.suggested_fixes[0] if issue.suggested_fixes else "—",
        )
    console.print(table)


def render_scores_table(scores: ScoreResult, console: Console) -> None:
    table = Table(show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("Score", width=14)
    table.add_column("Value", justify="right", width=6)
    table.add_column("Conf.", justify="right", width=6)
    table.add_column("Weight", justify="right", width=7)
    table.add_column("Summary", width=90)

    for name in ("compatibility", "performance", "value", "usability"):
        score = getattr(scores, name)
        table.add_row(
            name.capitalize(),
            Text(str(score.value), style=_score_style(score.value)),
            f"{score.confidence}%",
            f"{score.weight:.2f}",
            score.summary,
        )
    console.print(table)
    console.print(f"[bold]Overall:[/bold] [{_score_style(scores.overall)}]{scores.overall}[/]")


def render_upgrades_table(upgrades: list[UpgradeOption], console: Console) -> None:
    if not upgrades:
        console.print("[bold]No upgrades found within budget.[/bold]")
        return

    table = Table(show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Slot", width=8)
    table.add_column("Suggested", width=36)
    table.add_column("Cost", justify="right", width=8)
    table.add_column("Cascade", width=36)
    table.add_column("Total", justify="right", width=8)
    table.add_column("Overall Δ", justify="right", width=9)
    table.add_column("Pts/$100", justify="right", width=8)
    table.add_column("Priority", width=8)

    for i, option in enumerate(upgrades, 1):
        change = option.platform_change
        cascade = f"{change.warning} (+${change.total_cost:,.0f})" if change else "—"
        delta = option.score_impact.overall
        table.add_row(
            str(i),
            option.category,
            option.suggested_part.name or option.suggested_part.id,
            f"${option.cost:,.0f}",
            cascade,
            f"${option.total_cost:,.0f}",
            Text(f"{delta:+d}", style="green" if delta > 0 else "white"),
            f"{option.value_rating:.1f}",
            option.priority,
        )
    console.print(table)


def render_auto_fix_table(plan: AutoFixPlan, console: Console) -> None:
    console.print(f"\n[bold]Auto-fix plan ({plan.strategy})[/bold]")
    if not plan.fixes:
        console.print("No fixes available from the catalog.")
    else:
        table = Table(show_header=True, header_style="bold cyan", show_lines=True)
        table.add_column("Issue", width=28)
        table.add_column("Action", width=8)
        table.add_column("From", width=32)
        table.add_column("To", width=32)
        table.add_column("Price Δ", justify="right", width=9)
        table.add_column("Perf.", width=7)
        table.add_column("Reason", width=40)
        for fix in plan.fixes:
            table.add_row(
                fix.issue_id,
                fix.action,
                fix.old_part.name if fix.old_part else "—",
                fix.new_part.name if fix.new_part else "—",
                f"${fix.price_impact:+,.0f}",
                fix.performance_impact,
                fix.reason,
            )
        console.print(table)

    console.print(f"[bold]Price impact:[/bold] ${plan.total_price_impact:+,.0f}")
    console.print(f"[bold]Fixed:[/bold] {', '.join(plan.issues_fixed) or 'none'}")
    if plan.issues_remaining:
        console.print(f"[bold red]Remaining:[/bold red] {', '.join(plan.issues_remaining)}")
    if plan.new_compat_result is not None:
        status = "compatible" if plan.new_compat_result.is_compatible else "still incompatible"
        console.print(f"[bold]Fixed build:[/bold] {status}")


def render_recommendations_table(recs: Recommendations, console: Console) -> None:
    console.print("\n[bold]Suggestions[/bold]")
    if not recs.upgrades:
        console.print("No part suggestions.")
    else:
        table = Table(show_header=True, header_style="bold cyan", show_lines=True)
        table.add_column("Slot", width=8)
        table.add_column("Current", width=32)
        table.add_column("Suggested", width=32)
        table.add_column("Price Δ", justify="right", width=9)
        table.add_column("Overall Δ", justify="right", width=9)
        table.add_column("Reason", width=40)
        for s in recs.upgrades:
            table.add_row(
                s.category,
                s.current_part.name,
                s.suggested_part.name,
                f"${s.price_delta:+,.0f}",
                Text(f"{s.score_delta:+d}", style="green" if s.score_delta > 0 else "white"),
                s.reason,
            )
        console.print(table)

    for alt in recs.alternatives:
        swaps = ", ".join(f"{sw.from_name} -> {sw.to_name}" for sw in alt.swaps)
        console.print(f"[bold]Alternative:[/bold] {alt.label} ({swaps}) [dim]{alt.score_impact}[/dim]")


def render_report(
    build: Build,
    compat: CompatibilityResult,
    scores: ScoreResult,
    upgrades: list[UpgradeOption] | None = None,
    plan: AutoFixPlan | None = None,
    recommendations: Recommendations | None = None,
) -> str:
    """Render a full build report. Returns string representation."""
    console = Console(record=True, width=200)

    if not build.parts():
        console.print("[bold red]No parts selected.[/bold red]")
        return console.export_text()

    now = datetime.now().strftime("%Y-%m-%d %H:%M")
    console.print(f"\n[bold]PC Build Report — {now}    Parts: {len(build.parts())}[/bold]\n")

    render_build_table(build, console)
    render_compat_table(compat, console)
    render_scores_table(scores, console)
    if upgrades is not None:
        console.print("\n[bold]Upgrade path[/bold]")
        render_upgrades_table(upgrades, console)
    if plan is not None:
        render_auto_fix_table(plan, console)
    if recommendations is not None:
        render_recommendations_table(recommendations, console)

    return console.export_text()
