"""StandardKit command-line interface."""

from __future__ import annotations

import logging
import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .composer import compose, resolve
from .config import discover_documents, load_build_config, load_profile
from .exceptions import StandardKitError
from .pipeline import BuildReport, build_all, generate_profiles, generate_site
from .store import load_fragments

app = typer.Typer(
    name="stdkit",
    help="StandardKit: compose coding guidelines into assistant files and a docs site",
    add_completion=False,
)
console = Console()


def _get_version_string() -> str:
    """Get version string from package metadata or pyproject.toml."""
    try:
        return get_version("standardkit")
    except PackageNotFoundError:
        pass

    # Development checkouts without installed metadata
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        content = pyproject_path.read_text()
        match = re.search(r'version\s*=\s*["\']([^"\']+)["\']', content)
        if match:
            return f"{match.group(1)} (development)"

    return "unknown"


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"StandardKit version {_get_version_string()}")
        raise typer.Exit


def _setup_logging(verbose: bool) -> None:
    """Route library log records through the rich console."""
    root = logging.getLogger("standardkit")
    root.handlers = [
        RichHandler(console=console, show_time=False, show_path=False, markup=False),
    ]
    root.setLevel(logging.INFO if verbose else logging.WARNING)
    root.propagate = False


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show progress messages",
    ),
) -> None:
    """StandardKit: compose coding guidelines into assistant files and a docs site."""
    _setup_logging(verbose)


def _fail(error: StandardKitError) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1) from error


def _print_report(report: BuildReport, dry_run: bool, root: Path) -> None:
    if dry_run:
        console.print("[bold blue]Dry run - would write:[/bold blue]")
        for path in report.written:
            console.print(f"  • {path.relative_to(root) if path.is_relative_to(root) else path}")
        return

    if report.profiles:
        console.print(
            f"[green]✓[/green] Generated {len(report.profiles)} profiles: "
            + escape(", ".join(report.profiles)),
        )
    if report.rulesets or report.guidelines:
        console.print(
            f"[green]✓[/green] Generated site with {len(report.guidelines)} guidelines "
            f"and {len(report.rulesets)} rulesets",
        )
    console.print(f"  • {len(report.written)} files written")


ROOT_OPTION = typer.Option(
    Path.cwd(),
    "--root",
    "-r",
    help="Standards repository root",
    file_okay=False,
    dir_okay=True,
)
DRY_RUN_OPTION = typer.Option(
    False,
    "--dry-run",
    help="Show what would be generated without writing files",
)


@app.command()
def generate(root: Path = ROOT_OPTION, dry_run: bool = DRY_RUN_OPTION) -> None:
    """Generate CLAUDE.md, .cursorrules, guidelines.md and metadata.json per profile."""
    try:
        config = load_build_config(root)
        report = generate_profiles(config, dry_run=dry_run)
        _print_report(report, dry_run, root)
        if not dry_run:
            console.print(f"Output written to: {config.dist_dir / 'profiles'}")
    except StandardKitError as e:
        _fail(e)


@app.command()
def site(root: Path = ROOT_OPTION, dry_run: bool = DRY_RUN_OPTION) -> None:
    """Render rulesets and generate the documentation site."""
    try:
        config = load_build_config(root)
        report = generate_site(config, dry_run=dry_run)
        _print_report(report, dry_run, root)
        if not dry_run:
            console.print(f"Site generated at: {config.site_dir}")
    except StandardKitError as e:
        _fail(e)


@app.command()
def build(root: Path = ROOT_OPTION, dry_run: bool = DRY_RUN_OPTION) -> None:
    """Generate profile artifacts, ruleset pages and the site."""
    try:
        config = load_build_config(root)
        report = build_all(config, dry_run=dry_run)
        _print_report(report, dry_run, root)
    except StandardKitError as e:
        _fail(e)


@app.command()
def show(
    profile: str = typer.Argument(..., help="Profile id (file name without suffix)"),
    root: Path = ROOT_OPTION,
) -> None:
    """Print the composed guideline document of one profile."""
    try:
        config = load_build_config(root)
        matches = [
            p for p in discover_documents(config.profiles_dir, "profiles")
            if p.stem == profile
        ]
        if not matches:
            console.print(f"[red]Error:[/red] Profile '{escape(profile)}' not found")
            raise typer.Exit(1)

        store = load_fragments(config.guidelines_dir)
        console.print(compose(load_profile(matches[0]), store), markup=False)
    except StandardKitError as e:
        _fail(e)


@app.command()
def doctor(root: Path = ROOT_OPTION) -> None:
    """Show loaded guidelines and how each profile resolves."""
    try:
        config = load_build_config(root)
        store = load_fragments(config.guidelines_dir)

        table = Table(title="Guidelines")
        table.add_column("Id", style="cyan")
        table.add_column("Title")
        table.add_column("Category", style="green")
        table.add_column("Priority", justify="right")
        table.add_column("Source", style="dim")
        for fragment in store.by_priority():
            table.add_row(
                fragment.id,
                fragment.title,
                fragment.category,
                str(fragment.priority),
                fragment.source,
            )
        console.print(table)

        console.print("\n[bold]Profiles:[/bold]")
        for path in discover_documents(config.profiles_dir, "profiles"):
            loaded = load_profile(path)
            resolved = [f.id for f in resolve(loaded, store)]
            missing = [i for i in loaded.included_ids if i not in store]
            console.print(
                f"  [cyan]{escape(path.stem)}[/cyan] ({escape(loaded.name)}): "
                f"{len(resolved)} guidelines",
            )
            if resolved:
                console.print(f"    order: {' → '.join(resolved)}", markup=False)
            if missing:
                console.print(
                    f"    [yellow]missing:[/yellow] {escape(', '.join(missing))}",
                )
    except StandardKitError as e:
        _fail(e)


@app.command()
def version() -> None:
    """Show StandardKit version information."""
    console.print(f"StandardKit version {_get_version_string()}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
