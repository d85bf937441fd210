"""CLI for the Talent Scoring Engine.

Provides command-line interface for scoring questionnaire answers and
ranking career recommendations.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from question_bank.loader import load_answer_vector, load_traditional_scores

from .app_logging import setup_logging
from .config import find_config_file, load_config
from .engine import ScoringEngine, validate_bank, validate_catalog
from .schema import ScoringResult, TraditionalProfile

console = Console()


@click.group()
@click.version_option(version="1.0.0", prog_name="talent-scorer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to a scorer configuration YAML file"
)
def main(config_path: Optional[str]):
    """Talent Scoring and Career Recommendation Engine.

    Scores free-tier and pro questionnaire answers, fuses them into island
    scores and ranks careers from the catalog.
    """
    path = Path(config_path) if config_path else find_config_file()
    if path:
        load_config(path)


@main.command("score")
@click.option(
    "--bank", "-b",
    required=True,
    type=click.Path(exists=True),
    help="Path to the pro question bank"
)
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to the career catalog"
)
@click.option(
    "--answers", "-a",
    required=True,
    type=click.Path(exists=True),
    help="Path to the pro answer vector (JSON array)"
)
@click.option(
    "--traditional", "-t",
    type=click.Path(exists=True),
    help="Path to free-tier scores ({intelligences, interests})"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output"
)
def score_cmd(
    bank: str,
    catalog: str,
    answers: str,
    traditional: Optional[str],
    out: Optional[str],
    json_output: bool,
    verbose: bool,
):
    """Score pro answers and rank career recommendations.

    Examples:
        talent-scorer score -b questions_pro.json -c careers_pro.json -a answers.json
        talent-scorer score -b questions_pro.json -c careers_pro.json -a answers.json -t free.json -v
    """
    if verbose:
        setup_logging("DEBUG")

    try:
        engine = ScoringEngine()
        engine.load_pro_bank(bank)
        engine.load_catalog(catalog)

        prior = None
        if traditional:
            intelligences, interests = load_traditional_scores(traditional)
            prior = {"intelligences": intelligences, "interests": interests}

        if not json_output:
            console.print("\n[bold blue]Talent Scoring Engine[/bold blue]")
            console.print(f"Bank: {bank} ({engine.pro_bank.answer_length} items)")
            console.print(f"Catalog: {catalog} ({engine.catalog.total_records} records)")
            console.print()

        result = engine.score(load_answer_vector(answers), traditional=prior)

        if json_output:
            output_json(result, out)
        else:
            display_result(result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("traditional")
@click.option(
    "--mi-bank", "-m",
    required=True,
    type=click.Path(exists=True),
    help="Path to the multiple-intelligence item list"
)
@click.option(
    "--ria-bank", "-r",
    required=True,
    type=click.Path(exists=True),
    help="Path to the RIASEC interest item list"
)
@click.option(
    "--mi-answers",
    required=True,
    type=click.Path(exists=True),
    help="Path to the intelligence answer vector"
)
@click.option(
    "--ria-answers",
    required=True,
    type=click.Path(exists=True),
    help="Path to the interest answer vector"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def traditional_cmd(
    mi_bank: str,
    ria_bank: str,
    mi_answers: str,
    ria_answers: str,
    out: Optional[str],
    json_output: bool,
):
    """Score the free-tier intelligence and interest questionnaires.

    The JSON output can be passed to `score --traditional`.

    Example:
        talent-scorer traditional -m intelligences.json -r interests.json \\
            --mi-answers mi.json --ria-answers ria.json -o free.json
    """
    try:
        engine = ScoringEngine()
        engine.load_intelligence_bank(mi_bank)
        engine.load_interest_bank(ria_bank)

        profile = engine.score_traditional(
            load_answer_vector(mi_answers),
            load_answer_vector(ria_answers),
        )

        if json_output:
            output_json(profile, out)
        else:
            display_traditional(profile)
            if out:
                output_json(profile, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--bank", "-b",
    type=click.Path(),
    help="Path to a question bank"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(),
    help="Path to a career catalog"
)
def validate_cmd(bank: Optional[str], catalog: Optional[str]):
    """Validate question bank and/or catalog files.

    Examples:
        talent-scorer validate -b questions_pro.json
        talent-scorer validate -c careers_pro.json
        talent-scorer validate -b questions_pro.json -c careers_pro.json
    """
    if not bank and not catalog:
        console.print("[yellow]Please specify --bank and/or --catalog to validate[/yellow]")
        return

    all_valid = True

    if bank:
        is_valid, issues = validate_bank(bank)
        if is_valid:
            console.print(f"[green]✓ Bank valid: {bank}[/green]")
        else:
            console.print(f"[red]✗ Bank invalid: {bank}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if catalog:
        is_valid, issues = validate_catalog(catalog)
        if is_valid:
            console.print(f"[green]✓ Catalog valid: {catalog}[/green]")
        else:
            console.print(f"[red]✗ Catalog invalid: {catalog}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("inspect")
@click.option(
    "--catalog", "-c",
    required=True,
    type=click.Path(exists=True),
    help="Path to the career catalog"
)
@click.option(
    "--island",
    help="Show the records of one island"
)
def inspect_cmd(catalog: str, island: Optional[str]):
    """Inspect the career catalog.

    Without --island, lists every island with its record count.
    """
    try:
        engine = ScoringEngine()
        cat = engine.load_catalog(catalog)

        console.print("\n[bold blue]Career Catalog[/bold blue]")
        console.print(f"Version: {cat.version}")
        console.print(f"Total Records: {cat.total_records}")
        console.print()

        if island:
            records = cat.records_for(island)
            if not records:
                console.print(f"[red]No records for island: {island}[/red]")
                return

            table = Table(show_header=True, header_style="bold")
            table.add_column("Type", no_wrap=True)
            table.add_column("Title", style="cyan")
            table.add_column("Category")
            table.add_column("Trend", justify="right")

            for record in records:
                trend = record.trend_score
                table.add_row(
                    record.kind.value,
                    record.title.en or record.title.zh,
                    (record.category.en or record.category.zh) if record.category else "",
                    f"{trend:.0f}" if trend is not None else "[dim]-[/dim]",
                )
            console.print(table)
        else:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Island", style="cyan", no_wrap=True)
            table.add_column("Records", justify="right")
            table.add_column("Jobs", justify="right")
            table.add_column("Startups", justify="right")

            for code, records in cat.islands.items():
                jobs = sum(1 for r in records if r.kind.value == "job")
                table.add_row(code, str(len(records)), str(jobs), str(len(records) - jobs))
            console.print(table)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def display_result(result: ScoringResult, verbose: bool):
    """Display scoring result in formatted text."""
    polarity = result.personality.polarity
    console.print(Panel(
        f"Top Islands: [bold cyan]{', '.join(result.top_islands) or 'None'}[/bold cyan]\n"
        f"Type Code: [bold]{polarity.code if polarity else '-'}[/bold]\n"
        f"Free-tier data: {'yes' if result.traditional_present else 'no'}",
        title="Scoring Summary",
    ))

    # Island scores
    table = Table(show_header=True, header_style="bold")
    table.add_column("Island", style="cyan", no_wrap=True)
    table.add_column("Fused", justify="right")
    table.add_column("Raw", justify="right")
    if verbose:
        table.add_column("Traditional", justify="right")
        table.add_column("Future", justify="right")

    for code, score in result.islands.items():
        row = [code, str(score), str(result.islands_raw.get(code, 0))]
        if verbose:
            detail = result.island_breakdown[code]
            row += [f"{detail.traditional_core:.1f}", f"{detail.future_core:.1f}"]
        table.add_row(*row)
    console.print(table)

    if result.meta:
        console.print("\n[bold]Meta Intelligences:[/bold]")
        for dim, score in result.meta.items():
            console.print(f"  {dim}: {score}")

    # Recommendations
    if result.recommendations:
        console.print("\n[bold]Top Recommendations:[/bold]\n")
        for i, rec in enumerate(result.recommendations, 1):
            title = rec.record.title.en or rec.record.title.zh
            console.print(
                f"  [bold cyan]{i}. {title}[/bold cyan] "
                f"[bold]{rec.match_score:.0f}[/bold] [dim]{rec.category} / {rec.record.kind.value}[/dim]"
            )
            if verbose and rec.record.skills and rec.record.skills.en:
                console.print(f"     Skills: {', '.join(rec.record.skills.en)}")
    else:
        console.print("\n[yellow]No career recommendations for the top islands.[/yellow]")

    if verbose and polarity:
        console.print("\n[bold]Type Axes:[/bold]")
        for tally in polarity.axes.values():
            console.print(
                f"  {tally.axis}: {tally.first_pole}={tally.first_sum:g} "
                f"{tally.second_pole}={tally.second_sum:g} -> {tally.winner}"
            )


def display_traditional(profile: TraditionalProfile):
    """Display free-tier scores in formatted text."""
    console.print(Panel(
        f"Top Interests: [bold cyan]{''.join(profile.top_interests) or 'None'}[/bold cyan]",
        title="Free-tier Summary",
    ))

    for title, scores in (("Intelligences", profile.intelligences), ("Interests", profile.interests)):
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Dimension", style="cyan")
        table.add_column("Score", justify="right")
        for dim, score in scores.items():
            table.add_row(dim, str(score))
        console.print(table)


def output_json(result, out_path: Optional[str]):
    """Output a result model as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="scorer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        talent-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • fusion - Weights and island mappings for the fused scores")
        console.print("  • ranking - Top islands, recommendation count and match weights")
        console.print("  • modules - Module keys of the pro question bank")
        console.print("  • traditional - Interest types of the free tier")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. TALENT_SCORER_CONFIG environment variable")
        console.print("  2. ./scorer-config.yaml (current directory)")
        console.print("  3. ~/.config/talent-scorer/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
