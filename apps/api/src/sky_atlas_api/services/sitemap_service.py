"""Sitemap pipeline: catalog -> correlation -> policy -> partition -> XML.

One :class:`SitemapService` serves one request. Catalog reads, the hub set and
the airline relation maps are cached on the instance and thrown away with it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from sky_atlas_core.schemas import (
    ChangeFreq,
    SitemapKind,
    SitemapPart,
    SitemapURL,
)
from sky_atlas_seo.health import build_health_report
from sky_atlas_seo.lastmod import LastmodClock
from sky_atlas_seo.partition import (
    airline_airport_sort_key,
    airline_route_sort_key,
    airline_sort_key,
    airport_sort_key,
    part_count,
    partition,
    route_sort_key,
)
from sky_atlas_seo.renderer import (
    fallback_url,
    render_sitemap_index,
    render_urlset,
)

if TYPE_CHECKING:
    from datetime import datetime

    from sky_atlas_core.schemas import (
        AirlineRecord,
        AirportRecord,
        IndexabilityDecision,
        RouteRecord,
    )
    from sky_atlas_seo.correlation import AirlineRelations
    from sky_atlas_seo.health import IndexHealthReport

    from ..config import ApiSettings
    from .indexing_service import IndexingService

logger = logging.getLogger(__name__)

STATIC_PAGES: tuple[tuple[str, ChangeFreq, float], ...] = (
    ("/", ChangeFreq.DAILY, 1.0),
    ("/flights", ChangeFreq.DAILY, 0.9),
    ("/airports", ChangeFreq.DAILY, 0.9),
    ("/airlines", ChangeFreq.WEEKLY, 0.8),
    ("/manifesto", ChangeFreq.MONTHLY, 0.8),
    ("/how-we-help", ChangeFreq.MONTHLY, 0.8),
    ("/editorial-policy", ChangeFreq.MONTHLY, 0.8),
    ("/corrections", ChangeFreq.MONTHLY, 0.8),
)

ROBOTS_DISALLOW = ("/admin/", "/api/", "/_next/", "/test/", "/debug/")


class EvaluatedEntry(NamedTuple):
    """A decision plus the sitemap entry it would produce when indexable."""

    decision: IndexabilityDecision
    url: SitemapURL | None


class SitemapService:
    """Builds every sitemap document for one request."""

    def __init__(
        self,
        indexing: IndexingService,
        clock: LastmodClock | None = None,
        config: ApiSettings | None = None,
    ) -> None:
        self._indexing = indexing
        self._catalog = indexing.catalog
        self._config = config or indexing.config
        self._clock = clock or LastmodClock()
        self._site_url = self._config.site_url.rstrip("/")

        self._airlines: list[AirlineRecord] | None = None
        self._airports: list[AirportRecord] | None = None
        self._routes: list[RouteRecord] | None = None
        self._relations: AirlineRelations | None = None
        self._evaluated: dict[SitemapKind, list[EvaluatedEntry]] = {}

    @property
    def clock(self) -> LastmodClock:
        return self._clock

    # ------------------------------------------------------------------
    # Catalog snapshot (request-scoped)
    # ------------------------------------------------------------------

    async def _load_airlines(self) -> list[AirlineRecord]:
        if self._airlines is None:
            airlines = await self._catalog.list_airlines(
                self._config.airline_scan_limit
            )
            seen: set[str | None] = set()
            unique: list[AirlineRecord] = []
            for airline in airlines:
                if airline.key is not None and airline.key in seen:
                    logger.debug("Duplicate airline code %s skipped", airline.key)
                    continue
                seen.add(airline.key)
                unique.append(airline)
            self._airlines = unique
        return self._airlines

    async def _load_airports(self) -> list[AirportRecord]:
        if self._airports is None:
            self._airports = await self._catalog.list_active_airports(
                self._config.airport_scan_limit
            )
        return self._airports

    async def _load_routes(self) -> list[RouteRecord]:
        if self._routes is None:
            routes = await self._catalog.list_routes_with_flight_data(
                self._config.route_scan_limit
            )
            complete = [r for r in routes if r.origin_iata and r.destination_iata]
            if len(complete) < len(routes):
                logger.warning(
                    "Skipped %d route(s) without both endpoint codes",
                    len(routes) - len(complete),
                )
            self._routes = complete
        return self._routes

    async def _load_relations(self) -> AirlineRelations:
        if self._relations is None:
            codes = [a.key for a in await self._load_airlines() if a.key]
            engine = self._indexing.correlation_engine()
            self._relations = await engine.correlate(codes)
        return self._relations

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _url(
        self,
        decision: IndexabilityDecision,
        path: str,
        kind: SitemapKind,
        updated_at: datetime | None,
    ) -> SitemapURL | None:
        if not decision.indexable:
            return None
        return SitemapURL(
            loc=f"{self._site_url}{path}",
            lastmod=self._clock.resolve(updated_at),
            changefreq=kind.changefreq,
            priority=decision.priority,
        )

    async def evaluate_kind(self, kind: SitemapKind) -> list[EvaluatedEntry]:
        """Decisions for every candidate of ``kind``, in canonical order."""
        if kind in self._evaluated:
            return self._evaluated[kind]

        policy = await self._indexing.policy()
        entries: list[EvaluatedEntry] = []

        match kind:
            case SitemapKind.FLIGHTS:
                for route in sorted(await self._load_routes(), key=route_sort_key):
                    decision = policy.evaluate(route)
                    path = route_path(route.origin_iata, route.destination_iata)
                    entries.append(
                        EvaluatedEntry(
                            decision,
                            self._url(decision, path, kind, route.updated_at),
                        )
                    )
            case SitemapKind.AIRPORTS:
                for airport in sorted(
                    await self._load_airports(), key=airport_sort_key
                ):
                    decision = policy.evaluate(airport)
                    entries.append(
                        EvaluatedEntry(
                            decision,
                            self._url(
                                decision,
                                airport_path(airport.iata),
                                kind,
                                airport.updated_at,
                            ),
                        )
                    )
            case SitemapKind.AIRLINES:
                for airline in sorted(
                    await self._load_airlines(), key=airline_sort_key
                ):
                    decision = policy.evaluate(airline)
                    url = None
                    if airline.key:
                        url = self._url(
                            decision,
                            airline_path(airline.key),
                            kind,
                            airline.updated_at,
                        )
                    entries.append(EvaluatedEntry(decision, url))
            case SitemapKind.AIRLINE_ROUTES:
                routes = {r.route_key: r for r in await self._load_routes()}
                relations = await self._load_relations()
                for link in sorted(
                    relations.route_links(), key=airline_route_sort_key
                ):
                    route = routes.get(link.route_key)
                    decision = policy.evaluate(link, route)
                    path = airline_path(link.airline_code) + route_path(
                        link.origin_iata, link.destination_iata, prefix=""
                    )
                    entries.append(
                        EvaluatedEntry(
                            decision,
                            self._url(
                                decision,
                                path,
                                kind,
                                route.updated_at if route else None,
                            ),
                        )
                    )
            case SitemapKind.AIRLINE_AIRPORTS:
                airports = {a.iata: a for a in await self._load_airports()}
                relations = await self._load_relations()
                for link in sorted(
                    relations.airport_links(), key=airline_airport_sort_key
                ):
                    airport = airports.get(link.airport_iata)
                    decision = policy.evaluate(link, airport)
                    path = (
                        f"{airline_path(link.airline_code)}"
                        f"/{link.airport_iata.lower()}"
                    )
                    entries.append(
                        EvaluatedEntry(
                            decision,
                            self._url(
                                decision,
                                path,
                                kind,
                                airport.updated_at if airport else None,
                            ),
                        )
                    )

        self._evaluated[kind] = entries
        return entries

    async def collect_urls(self, kind: SitemapKind) -> list[SitemapURL]:
        """Indexable entries of ``kind`` in canonical order."""
        return [
            entry.url
            for entry in await self.evaluate_kind(kind)
            if entry.url is not None
        ]

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def build_part(self, kind: SitemapKind, part_index: int) -> SitemapPart:
        """Slice ``part_index`` of ``kind``; an empty slice becomes a fallback.

        A failure anywhere in the pipeline is logged and also answered with the
        fallback part, so a sitemap request never errors out.
        """
        if part_index < 1:
            msg = f"part_index must be >= 1, got {part_index}"
            raise ValueError(msg)
        try:
            urls = await self.collect_urls(kind)
            page = partition(urls, part_index, self._config.sitemap_part_size)
        except Exception:
            logger.exception(
                "Sitemap %s part %d failed; serving fallback", kind.value, part_index
            )
            page = []

        if not page:
            fallback = fallback_url(self._site_url, kind, self._clock.default)
            return SitemapPart(part_index=part_index, urls=[fallback], is_fallback=True)
        return SitemapPart(part_index=part_index, urls=page)

    async def render_sitemap_part(self, kind: SitemapKind, part_index: int) -> str:
        part = await self.build_part(kind, part_index)
        logger.info(
            "Rendered sitemap %s part %d: %d url(s)%s",
            kind.value,
            part_index,
            len(part.urls),
            " (fallback)" if part.is_fallback else "",
        )
        return render_urlset(part.urls)

    async def part_counts(self) -> dict[SitemapKind, int]:
        """Number of parts each dynamic kind currently needs (at least one)."""
        counts: dict[SitemapKind, int] = {}
        for kind in SitemapKind:
            try:
                total = len(await self.collect_urls(kind))
            except Exception:
                logger.exception("Counting %s entries failed", kind.value)
                total = 0
            counts[kind] = part_count(total, self._config.sitemap_part_size)
        return counts

    async def render_index(self) -> str:
        today = self._clock.now.date()
        entries = [(f"{self._site_url}/sitemap-static.xml", today)]
        for kind, parts in (await self.part_counts()).items():
            entries.extend(
                (f"{self._site_url}/sitemap-{kind.value}-{n}.xml", today)
                for n in range(1, parts + 1)
            )
        return render_sitemap_index(entries)

    def static_urls(self) -> list[SitemapURL]:
        lastmod = self._clock.default
        return [
            SitemapURL(
                loc=f"{self._site_url}{path}",
                lastmod=lastmod,
                changefreq=changefreq,
                priority=priority,
            )
            for path, changefreq, priority in STATIC_PAGES
        ]

    def render_static(self) -> str:
        return render_urlset(self.static_urls())

    def robots_txt(self) -> str:
        lines = ["User-agent: *", "Allow: /"]
        lines.extend(f"Disallow: {path}" for path in ROBOTS_DISALLOW)
        lines.append("")
        lines.append(f"Sitemap: {self._site_url}/sitemap.xml")
        return "\n".join(lines) + "\n"

    async def health_report(self) -> IndexHealthReport:
        """Audit every candidate, including airports the sitemap never lists.

        The airport sitemap only scans active airports; the audit reads the
        whole airport table so inactive ones show up as noindex.
        """
        policy = await self._indexing.policy()
        airports = await self._catalog.list_airports(self._config.airport_scan_limit)
        decisions = [policy.evaluate(airport) for airport in airports]
        for kind in SitemapKind:
            if kind is SitemapKind.AIRPORTS:
                continue
            decisions.extend(
                entry.decision for entry in await self.evaluate_kind(kind)
            )
        return build_health_report(decisions)


def route_path(
    origin: str | None, destination: str | None, prefix: str = "/flights"
) -> str:
    return f"{prefix}/{(origin or '').lower()}-{(destination or '').lower()}"


def airport_path(iata: str) -> str:
    return f"/airports/{iata.lower()}"


def airline_path(code: str) -> str:
    return f"/airlines/{code.lower()}"
