"""Click CLI with analyze, script, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from deadwood import __version__
from deadwood.analysis import ModuleResolver
from deadwood.cleaner import generate_deletion_script, select_modules
from deadwood.config import default_port, default_target_dir, load_config
from deadwood.errors import DeadwoodError
from deadwood.exporter import load_report, write_report
from deadwood.models import DEFAULT_REPORT_FILE, AnalysisReport, Classification
from deadwood.pipeline import run_analysis

_CLASS_CHOICES = [c.value for c in Classification]
_CLASS_COLORS = {
    Classification.ORPHANED: "red",
    Classification.TRANSITIVE_DEAD: "yellow",
    Classification.FALSE_POSITIVE: "magenta",
}


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """deadwood: Find unreachable modules in JavaScript/TypeScript projects."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("target_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("-o", "--output", "output_file", help=f"Report file (default: {DEFAULT_REPORT_FILE})")
@click.option("--trace", "trace_module", help="Explain why one module is or is not reachable")
@click.option("--entry", "entries", multiple=True, help="Extra entry point module id")
@click.option("--max-chains", type=int, help="Stop tracing a module after N chains")
@click.option("--max-depth", type=int, help="Cut chains longer than N modules")
@click.option("--follow-reexports", is_flag=True, help="Treat every re-export as an import")
@click.option("--workers", type=int, help="Parallel extraction threads")
@click.option("--samples", default=5, show_default=True, help="Modules listed per classification")
def analyze(
    target_dir: Path,
    output_file: str | None,
    trace_module: str | None,
    entries: tuple[str, ...],
    max_chains: int | None,
    max_depth: int | None,
    follow_reexports: bool,
    workers: int | None,
    samples: int,
):
    """Analyze a project and report unreachable modules."""
    try:
        config = load_config(
            target_dir,
            output_file=output_file,
            extra_entry_points=entries or None,
            max_chains=max_chains,
            max_depth=max_depth,
            follow_reexports=follow_reexports or None,
            workers=workers,
        )
    except DeadwoodError as e:
        raise click.ClickException(str(e))

    def progress(stage: str, current: int, total: int):
        if total > 0:
            click.echo(f"  {stage}: {current}/{total}", nl=(current == total))
        else:
            click.echo(f"  {stage}...")

    click.echo(f"Analyzing {target_dir}\n")
    report = run_analysis(config, progress=progress)
    path = write_report(report, config.report_path, target_dir.resolve())

    if trace_module:
        _print_trace(report, _match_module(report, trace_module, config.extensions))
    else:
        _print_summary(report, samples)
    click.echo(f"\nReport saved to {path}")


@cli.command()
@click.argument("target_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--report", "report_file", type=click.Path(path_type=Path), help="Saved report to read")
@click.option(
    "--include", "-i", "include", multiple=True, type=click.Choice(_CLASS_CHOICES),
    help="Classification to delete (default: orphaned, transitive_dead)",
)
@click.option("-o", "--output", "output", type=click.Path(path_type=Path), help="Write the script here")
def script(target_dir: Path, report_file: Path | None, include: tuple[str, ...], output: Path | None):
    """Generate a deletion script from a saved report."""
    report_path = report_file or target_dir / DEFAULT_REPORT_FILE
    try:
        report = load_report(report_path)
    except DeadwoodError as e:
        raise click.ClickException(str(e))

    module_ids = select_modules(report, include) if include else select_modules(report)
    text = generate_deletion_script(target_dir, module_ids)
    if output:
        output.write_text(text, encoding="utf-8")
        output.chmod(0o755)
        click.echo(f"Wrote deletion script for {len(module_ids)} module(s) to {output}")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.option("--port", "-p", type=int, help="Port number (default: $DEADWOOD_PORT or 8420)")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.option("--target-dir", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Project to analyze")
def serve(port: int | None, host: str, target_dir: Path | None):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the API server. "
            "Install with: pip install 'deadwood[web]'"
        )

    from deadwood.web import create_app

    port = port or default_port(8420)
    target = target_dir.resolve() if target_dir else default_target_dir()
    click.echo(f"Starting deadwood API at http://{host}:{port} (target: {target})")
    uvicorn.run(create_app(target), host=host, port=port, log_level="info")


def _print_summary(report: AnalysisReport, samples: int) -> None:
    counts = report.summary()
    buckets = report.by_classification()

    click.echo("\nSummary:")
    click.echo(f"  Total modules:   {counts['total']}")
    click.echo(f"  Reachable:       {click.style(str(counts['reachable']), fg='green')}")
    click.echo(f"  Unreachable:     {click.style(str(counts['unreachable']), fg='red')}")
    if report.unresolved_entry_points:
        click.echo(
            click.style(
                f"  Entry points matching no module: {', '.join(report.unresolved_entry_points)}",
                fg="yellow",
            )
        )

    if not report.unreachable:
        click.echo(click.style("\nNo dead code found.", fg="green"))

    for cls, module_ids in buckets.items():
        if not module_ids:
            continue
        label = cls.value.replace("_", " ").title()
        click.echo()
        click.echo(click.style(f"{label} ({len(module_ids)}):", fg=_CLASS_COLORS[cls], bold=True))
        for module_id in module_ids[:samples]:
            analysis = report.chain_analysis[module_id]
            click.echo(f"  {module_id}")
            click.echo(click.style(f"    {analysis.summary}", dim=True))
            if analysis.chains and len(analysis.chains[0]) > 1:
                click.echo(click.style(f"    {' <- '.join(analysis.chains[0])}", dim=True))
        if len(module_ids) > samples:
            click.echo(click.style(f"  ... and {len(module_ids) - samples} more", dim=True))

    if buckets[Classification.FALSE_POSITIVE]:
        click.echo(
            click.style(
                "\nFalse positives reach reachable code; check path aliases "
                "or resolution gaps before deleting anything.",
                fg="magenta",
            )
        )
    if report.dynamic_import_modules:
        click.echo(
            click.style(
                f"\n{len(report.dynamic_import_modules)} module(s) use dynamic imports; "
                "modules they load may be reported as dead:",
                fg="yellow",
            )
        )
        for module_id in report.dynamic_import_modules:
            click.echo(f"  {module_id}")


def _match_module(report: AnalysisReport, raw: str, extensions: tuple[str, ...]) -> str:
    """Map a user-typed path (`src/a.js`, `./src/a`) to its module id."""
    resolver = ModuleResolver(report.reachable | set(report.unreachable), extensions)
    return resolver.canonical(raw.replace("\\", "/")) or raw


def _print_trace(report: AnalysisReport, module_id: str) -> None:
    click.echo(f"\nTrace for {click.style(module_id, fg='cyan')}:")
    if module_id in report.entry_points:
        click.echo(click.style("  Entry point", fg="green"))
    if module_id in report.reachable:
        click.echo(click.style("  Reachable from an entry point", fg="green"))
        return

    analysis = report.chain_analysis.get(module_id)
    if analysis is None:
        click.echo(click.style("  Not a known module", fg="red"))
        return

    click.echo(
        f"  {click.style(analysis.classification.value, fg=_CLASS_COLORS[analysis.classification])}"
        f": {analysis.summary}"
    )
    if analysis.imported_by:
        click.echo(f"  Imported by: {', '.join(analysis.imported_by)}")
    for chain in analysis.chains:
        marker = " (root reachable)" if chain[-1] in analysis.reachable_roots else ""
        click.echo(f"  {' <- '.join(chain)}{marker}")
    for cycle in analysis.cycles:
        click.echo(click.style(f"  cycle: {' <- '.join(cycle)}", dim=True))
    if analysis.truncated:
        click.echo(click.style("  (tracing truncated)", fg="yellow"))


if __name__ == "__main__":
    cli()
