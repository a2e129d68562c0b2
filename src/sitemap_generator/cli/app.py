from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sitemap_generator.core.config import SitemapGeneratorConfig
from sitemap_generator.core.config_loader import ConfigLoader
from sitemap_generator.core.exceptions import SitemapGeneratorError
from sitemap_generator.core.logging import setup_logging
from sitemap_generator.core.pipeline import generate_sitemap
from sitemap_generator.core.types import Diagnostic, Site
from sitemap_generator.engine.assembler import SitemapAssembler
from sitemap_generator.infra.adapters.jekyll import JekyllSiteSource
from sitemap_generator.infra.registry import KeepFilesRegistry

app = typer.Typer(name="sitemap-generator", help="Generate sitemap.xml for a static site.")

console = Console()


def _load(
    site_root: Path,
    url: str | None,
    destination: Path | None,
    log_level: str | None,
) -> tuple[SitemapGeneratorConfig, Site]:
    config = ConfigLoader(site_root.resolve()).load()
    if url is not None:
        config.site.url = url.rstrip("/")
    if destination is not None:
        config.site.destination = destination

    setup_logging(log_level or config.logging.level, config.logging.file)

    source = JekyllSiteSource(
        config.site.abs_source,
        base_url=config.site.url,
        destination=config.site.abs_destination,
        permalink=config.site.permalink,
    )
    return config, source.load()


def _print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    table = Table(title="Diagnostics")
    table.add_column("Item", style="cyan", no_wrap=True)
    table.add_column("Field", no_wrap=True)
    table.add_column("Problem", style="yellow")
    for diagnostic in diagnostics:
        table.add_row(diagnostic.relative_path, diagnostic.field, diagnostic.message)
    console.print(table)


@app.command()
def build(
    site_root: Path = typer.Argument(Path("."), help="Directory holding _config.yml."),
    url: str | None = typer.Option(None, "--url", help="Override the site base URL."),
    destination: Path | None = typer.Option(None, "--destination", help="Override the generated site directory."),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, ...)."),
):
    """
    Write the sitemap into the generated site.
    """
    try:
        config, site = _load(site_root, url, destination, log_level)
        registry = KeepFilesRegistry(site.destination)
        result = generate_sitemap(site, config.sitemap, registry=registry)
    except SitemapGeneratorError as exc:
        console.print(f"[bold red]Sitemap generation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if result.diagnostics:
        _print_diagnostics(result.diagnostics)
    console.print(f"✅ Wrote {len(result.records)} URLs to {result.output_path}")


@app.command()
def validate(
    site_root: Path = typer.Argument(Path("."), help="Directory holding _config.yml."),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, ...)."),
):
    """
    Check front matter sitemap fields without writing anything.
    """
    try:
        config, site = _load(site_root, None, None, log_level)
    except SitemapGeneratorError as exc:
        console.print(f"[bold red]Could not load site:[/] {exc}")
        raise typer.Exit(code=1) from exc

    result = SitemapAssembler(config.sitemap).assemble(site)
    if result.diagnostics:
        _print_diagnostics(result.diagnostics)
        raise typer.Exit(code=1)
    console.print(f"✅ {len(result.records)} URLs, no problems found")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
