"""CLI for rendering sitemaps and auditing indexability offline."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING, TypeVar

import click

from sky_atlas_core.schemas import SitemapKind

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sky_atlas_seo.health import IndexHealthReport

    from .services.sitemap_service import SitemapService

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

_KIND_CHOICE = click.Choice([kind.value for kind in SitemapKind])

T = TypeVar("T")


def _run(action: Callable[[SitemapService], Awaitable[T]]) -> T:
    """Run ``action`` against a fresh pipeline backed by the configured DB."""
    from .config import settings

    os.environ.setdefault("DATABASE_URL", settings.database_url)

    from sky_atlas_db.database import async_session_factory, engine

    from .services.catalog_service import CatalogService
    from .services.indexing_service import IndexingService
    from .services.sitemap_service import SitemapService

    async def _main() -> T:
        try:
            async with async_session_factory() as session:
                catalog = CatalogService(session, async_session_factory)
                service = SitemapService(IndexingService(catalog, settings))
                return await action(service)
        finally:
            await engine.dispose()

    return asyncio.run(_main())


@click.group()
def cli() -> None:
    """Sky Atlas sitemap CLI."""


@cli.command("render")
@click.argument("kind", type=_KIND_CHOICE)
@click.argument("part", type=click.IntRange(min=1), default=1)
def render(kind: str, part: int) -> None:
    """Print one sitemap part as XML."""

    async def _action(service: SitemapService) -> str:
        return await service.render_sitemap_part(SitemapKind(kind), part)

    click.echo(_run(_action), nl=False)


@cli.command("urls")
@click.argument("kind", type=_KIND_CHOICE)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Max URLs")
def urls(kind: str, limit: int | None) -> None:
    """Print the indexable URLs of one sitemap family, in sitemap order."""

    async def _action(service: SitemapService) -> list[str]:
        return [url.loc for url in await service.collect_urls(SitemapKind(kind))]

    locs = _run(_action)
    for loc in locs[:limit]:
        click.echo(loc)
    click.echo(f"{len(locs)} indexable URL(s)", err=True)


@cli.command("index")
def index() -> None:
    """Print the sitemap index."""

    async def _action(service: SitemapService) -> str:
        return await service.render_index()

    click.echo(_run(_action), nl=False)


@cli.command("health")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def health(json_output: bool) -> None:
    """Print the index health report."""

    async def _action(service: SitemapService) -> IndexHealthReport:
        return await service.health_report()

    report = _run(_action)
    if json_output:
        click.echo(report.model_dump_json(indent=2))
        return

    click.echo(
        f"Indexable: {report.indexable}/{report.total} "
        f"({report.indexability_rate:.1%})"
    )
    for entity_type, bucket in report.by_entity_type.items():
        click.echo(
            f"  {entity_type}: {bucket.indexable} indexable, "
            f"{bucket.noindex} noindex"
        )
    if report.noindex_reasons:
        click.echo("Noindex reasons:")
        for reason, count in report.noindex_reasons.items():
            click.echo(f"  {count:>6}  {reason}")


if __name__ == "__main__":
    cli()
