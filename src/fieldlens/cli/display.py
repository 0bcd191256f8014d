"""Rich display helpers for terminal output.

Provides formatted display functions for profiling results: a per-field
summary table, kind-specific statistics panels, quality assessments and
value distributions.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fieldlens.models.metadata import DatasetMetadata
from fieldlens.models.numeric import NumericStats
from fieldlens.models.profiling import FieldKind, FieldProfile, ProfilingResult
from fieldlens.models.quality import QualityLevel, QualityMetrics
from fieldlens.models.strings import FormatMatch, StringStats
from fieldlens.models.temporal import TemporalStats

_KIND_STYLES: dict[FieldKind, str] = {
    FieldKind.NUMERIC: "green",
    FieldKind.STRING: "cyan",
    FieldKind.DATE: "yellow",
    FieldKind.NONE: "dim",
}

_LEVEL_STYLES: dict[QualityLevel, str] = {
    QualityLevel.GOOD: "green",
    QualityLevel.FAIR: "yellow",
    QualityLevel.POOR: "bold red",
}


def _fmt(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.{digits}f}"


def display_profile_summary(
    result: ProfilingResult, console: Console, meta: DatasetMetadata | None = None
) -> None:
    """Print a summary table of all profiled fields.

    Columns: Field, Kind, Rows, Unique, Null%, Quality, Cardinality, Top Value

    Args:
        result: ProfilingResult to display.
        console: Rich Console for output.
        meta: Source file metadata, used for the table title.
    """
    title = "Field Summary"
    if meta is not None:
        title = f"{meta.filename} ({meta.row_count:,} rows x {meta.col_count} cols)"

    table = Table(title=title, show_lines=True)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Rows", justify="right", style="green")
    table.add_column("Unique", justify="right")
    table.add_column("Null%", justify="right")
    table.add_column("Quality", justify="right")
    table.add_column("Cardinality", no_wrap=True)
    table.add_column("Top Value", max_width=30)

    for p in result.fields:
        if p.error is not None:
            table.add_row(
                Text(p.field_name),
                Text("error", style="bold red"),
                str(p.total_rows),
                "",
                "",
                "",
                "",
                Text(p.error, style="red"),
            )
            continue

        null_pct = p.null_count / p.total_rows * 100 if p.total_rows else 0.0
        top = p.distribution[0] if p.distribution else None
        quality = ""
        cardinality = ""
        if p.quality is not None:
            assessment = p.quality.assessment
            quality = Text(
                f"{assessment.quality_score} {assessment.quality_level.value}",
                style=_LEVEL_STYLES[assessment.quality_level],
            )
            cardinality = p.quality.cardinality.level.value

        table.add_row(
            Text(p.field_name),
            Text(p.kind.value, style=_KIND_STYLES[p.kind]),
            f"{p.total_rows:,}",
            f"{p.unique_values:,}" + ("+" if p.truncated else ""),
            f"{null_pct:.1f}%",
            quality,
            cardinality,
            Text(f"{top.value} ({top.count})") if top is not None else "",
        )

    console.print(table)
    console.print(f"\n[bold]{len(result.fields)}[/bold] fields profiled")


def display_quality(quality: QualityMetrics, console: Console) -> None:
    """Print the quality assessment of one field as a panel."""
    assessment = quality.assessment
    completeness = quality.completeness
    color = assessment.color.value

    lines = [
        f"[bold]Score:[/bold] [{color}]{assessment.quality_score}/100 "
        f"({assessment.quality_level.value})[/{color}]",
        f"[bold]Non-null:[/bold] {completeness.non_null_percentage:.1f}%   "
        f"[bold]Fill rate:[/bold] {completeness.fill_rate:.1f}%   "
        f"[bold]Empty strings:[/bold] {completeness.empty_string_count}",
        f"[bold]Cardinality:[/bold] {quality.cardinality.classification} "
        f"(ratio {quality.cardinality.ratio:.3f})",
        f"  [dim]{quality.cardinality.recommendation}[/dim]",
        f"[bold]Duplicates:[/bold] {quality.uniqueness.duplicate_count} rows over "
        f"{quality.uniqueness.duplicated_distinct_values} values",
        f"[bold]Evenness:[/bold] {quality.distribution.evenness_score:.2f} "
        f"({quality.distribution.skewness})",
    ]
    for issue in assessment.issues:
        lines.append(f"[bold red]Issue:[/bold red] {issue}")
    for warning in assessment.warnings:
        lines.append(f"[yellow]Warning:[/yellow] {warning}")

    console.print(Panel("\n".join(lines), title="Quality", border_style=color))


def _display_numeric(stats: NumericStats, console: Console) -> None:
    table = Table(title="Numeric Statistics", show_header=False)
    table.add_column("Statistic", style="bold")
    table.add_column("Value", justify="right")

    d, s, dist = stats.descriptive, stats.spread, stats.distribution
    if d is not None:
        table.add_row("Count", f"{d.count:,}")
        table.add_row("Min", _fmt(d.min))
        table.add_row("Max", _fmt(d.max))
        table.add_row("Mean", _fmt(d.mean))
        table.add_row("Median", _fmt(d.median))
        table.add_row("Mode", ", ".join(_fmt(m) for m in d.mode[:5]) or "none")
        table.add_row("Sum", _fmt(d.sum))
    if s is not None:
        table.add_row("Std Dev", _fmt(s.std_dev))
        table.add_row("IQR", _fmt(s.iqr))
    if dist is not None:
        p = dist.percentiles
        table.add_row("P10 / P90", f"{_fmt(p.p10)} / {_fmt(p.p90)}")
        table.add_row("Skewness", _fmt(dist.skewness, 3))
        table.add_row("Kurtosis", _fmt(dist.kurtosis, 3))
    if stats.outliers is not None:
        table.add_row("Outliers", f"{stats.outliers.count} ({stats.outliers.percentage:.2f}%)")
    table.add_row("Non-numeric", str(stats.quality.non_numeric_count))

    console.print(table)


def _format_row(name: str, match: FormatMatch) -> tuple[str, str, str, str]:
    breakdown = ", ".join(f"{k}: {v}" for k, v in match.breakdown.items())
    return name, str(match.count), f"{match.percentage:.2f}%", breakdown


def _display_string(stats: StringStats, console: Console) -> None:
    if stats.length_stats is not None:
        ls = stats.length_stats
        console.print(
            f"[bold]Length:[/bold] {ls.min}-{ls.max} (avg {ls.average}, "
            f"most common {ls.most_common} x{ls.most_common_count})"
        )
    if stats.prefixes:
        console.print(
            "[bold]Prefixes:[/bold] "
            + ", ".join(f"{escape(repr(a.text))} ({a.count})" for a in stats.prefixes[:5])
        )
    if stats.suffixes:
        console.print(
            "[bold]Suffixes:[/bold] "
            + ", ".join(f"{escape(repr(a.text))} ({a.count})" for a in stats.suffixes[:5])
        )

    fd = stats.format_detection
    if fd is None:
        return
    matches = [
        ("Email", fd.email),
        ("URL", fd.url),
        ("Phone", fd.phone),
        ("National ID", fd.national_id),
        ("Date string", fd.date_string),
    ]
    matches = [(name, m) for name, m in matches if m.count > 0]
    if not matches:
        return

    table = Table(title="Detected Formats")
    table.add_column("Format", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Breakdown")
    for name, m in matches:
        table.add_row(*_format_row(name, m))
    console.print(table)


def _display_temporal(stats: TemporalStats, console: Console) -> None:
    r = stats.range
    if r is not None and r.earliest is not None and r.latest is not None:
        fmt = f", {r.format.description}" if r.format is not None else ""
        console.print(
            f"[bold]Range:[/bold] {r.earliest.date()} .. {r.latest.date()} "
            f"({r.span_description}{fmt})"
        )
    if stats.gaps is not None:
        g = stats.gaps
        largest = f", largest {g.largest_gap.days} days" if g.largest_gap else ""
        console.print(f"[bold]Gaps:[/bold] {g.gap_count}{largest}; coverage {g.coverage:.1f}%")
    if stats.trends is not None:
        console.print(f"[bold]Trend:[/bold] {stats.trends.description}")
    if stats.distribution is not None and stats.distribution.by_year:
        years = ", ".join(f"{pc.period}: {pc.count}" for pc in stats.distribution.by_year)
        console.print(f"[bold]By year:[/bold] {years}")


def display_distribution(profile: FieldProfile, console: Console, limit: int = 10) -> None:
    """Print the most frequent values of one field."""
    table = Table(title=f"Top values: {profile.field_name}")
    table.add_column("Value", max_width=40)
    table.add_column("Count", justify="right")
    table.add_column("%", justify="right")
    for entry in profile.distribution[:limit]:
        table.add_row(Text(entry.value), f"{entry.count:,}", f"{entry.percentage:.2f}%")
    console.print(table)
    if profile.truncated:
        console.print(
            f"[yellow]Distribution truncated to the first {profile.truncated_at:,} "
            "distinct values seen[/yellow]"
        )


def display_field_detail(profile: FieldProfile, console: Console) -> None:
    """Print every statistics block of one field."""
    style = _KIND_STYLES[profile.kind]
    console.print(
        Panel(
            f"[bold]{escape(profile.field_name)}[/bold]  [{style}]{profile.kind.value}[/{style}]  "
            f"{profile.total_rows:,} rows, {profile.unique_values:,} unique, "
            f"{profile.null_count:,} null",
            border_style=style,
        )
    )
    if profile.error is not None:
        console.print(f"[bold red]Error:[/bold red] {escape(profile.error)}")
        return

    if profile.type_check is not None:
        tc = profile.type_check
        console.print(
            f"[yellow]Looked {tc.attempted_kind.value} but only {tc.valid_count} of "
            f"{tc.valid_count + tc.invalid_count} values qualified[/yellow]"
        )

    if profile.numeric is not None:
        _display_numeric(profile.numeric, console)
    elif profile.string is not None:
        _display_string(profile.string, console)
    elif profile.temporal is not None:
        _display_temporal(profile.temporal, console)

    if profile.quality is not None:
        display_quality(profile.quality, console)
    display_distribution(profile, console)
