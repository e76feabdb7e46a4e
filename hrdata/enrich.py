"""
Program to enrich the site's locations with data from Wikidata and the
Croatian Wikipedia and with analytical conclusions from census data.

Output is written to the site's wiki-enrichment.json, keyed by location slug.
It only needs to be rerun when the location tables change or to refresh
the external data.
"""

from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import more_itertools as mit

from . import SOURCE_DATA_DIR
from .conclusions import generate_conclusions
from .external import SummaryFetcher
from .external import USER_AGENT_TEMPLATE
from .external import fetch_all_wikidata
from .external import get_sparql_session
from .external import get_wiki_client
from .external import merge_wikidata_bindings
from .matching import find_summary
from .matching import find_wikidata
from .sitefiles import get_output_path
from .sitefiles import load_locations
from .sitefiles import load_site_config
from .sitefiles import write_json_data
from .types import Enrichment
from .types import Location
from .types import LocationType
from .types import WikiSummary
from .types import WikidataFacts

PROGRESS_INTERVAL = 50

SummaryLookup = Callable[[str], WikiSummary | None]


@dataclass(frozen=True)
class EnrichmentStats:
    total: int
    with_description: int
    with_coat_of_arms: int
    with_photo: int
    with_conclusions: int
    with_postal_code: int
    with_website: int

    @classmethod
    def from_enrichment(cls, enrichment: Mapping[str, Enrichment]) -> 'EnrichmentStats':
        values = list(enrichment.values())

        return cls(
            total=len(values),
            with_description=mit.quantify(values, lambda e: bool(e.description)),
            with_coat_of_arms=mit.quantify(values, lambda e: bool(e.coat_of_arms)),
            with_photo=mit.quantify(values, lambda e: e.has_photo),
            with_conclusions=mit.quantify(values, lambda e: bool(e.conclusions)),
            with_postal_code=mit.quantify(values, lambda e: bool(e.postal_code)),
            with_website=mit.quantify(values, lambda e: bool(e.official_website)),
        )

    def report(self):
        print('=== Results ===')
        print('Total locations:', self.total)
        print('With description:', self.with_description)
        print('With coat of arms:', self.with_coat_of_arms)
        print('With photo/thumbnail:', self.with_photo)
        print('With conclusions:', self.with_conclusions)
        print('With postal code:', self.with_postal_code)
        print('With website:', self.with_website)


def enrich_location(
    location: Location,
    facts_by_label: Mapping[str, WikidataFacts],
    lookup_summary: SummaryLookup | None,
    counties_by_id: Mapping[object, Location],
) -> tuple[Enrichment, bool]:
    '''
    Builds the enrichment for a single location.

    Returns: the enrichment and whether a Wikipedia summary was found
    '''
    enrichment = Enrichment()

    if facts := find_wikidata(location, facts_by_label):
        enrichment.apply_wikidata(facts)

    summary = None
    if lookup_summary:
        summary, _ = find_summary(location, lookup_summary)
        if summary:
            enrichment.apply_summary(summary)

    enrichment.conclusions = generate_conclusions(location, counties_by_id)

    return enrichment, summary is not None


def enrich_all(
    locations: Sequence[Location],
    facts_by_label: Mapping[str, WikidataFacts],
    lookup_summary: SummaryLookup | None,
    counties_by_id: Mapping[object, Location],
):
    enrichment: dict[str, Enrichment] = {}
    failures = []
    wiki_hits = 0
    wiki_misses = 0

    if lookup_summary:
        print(f'Fetching Wikipedia summaries for {len(locations)} locations...')

    for i, location in enumerate(locations, start=1):
        try:
            enrichment[location.slug], found = enrich_location(
                location,
                facts_by_label,
                lookup_summary,
                counties_by_id,
            )
        except Exception as ex:
            print('Error:', location, ex)
            failures.append((location, ex))
            # Keep an entry for every location
            enrichment[location.slug] = Enrichment()
        else:
            if found:
                wiki_hits += 1
            elif lookup_summary:
                wiki_misses += 1

        if i % PROGRESS_INTERVAL == 0 or i == len(locations):
            print(f'  Progress: {i}/{len(locations)} ({wiki_hits} wiki hits, {wiki_misses} misses)')

    return enrichment, failures


def load_wikidata(user_agent: str) -> dict[str, WikidataFacts]:
    session = get_sparql_session(user_agent)
    bindings, failed = fetch_all_wikidata(session)

    if failed and not bindings:
        print('Continuing without Wikidata...')
        return {}

    facts_by_label = merge_wikidata_bindings(bindings)
    print(f'Wikidata: {len(facts_by_label)} unique locations matched')

    return facts_by_label


def run(
    offline: bool = False,
    dry: bool = False,
    output: Path | None = None,
    data_dir: Path = SOURCE_DATA_DIR,
) -> EnrichmentStats:
    tables = load_locations(data_dir)
    locations = list(mit.flatten(tables.values()))
    counties_by_id = {c.id: c for c in tables[LocationType.ZUPANIJA]}

    site_config = load_site_config()
    user_agent = USER_AGENT_TEMPLATE.format(domain=site_config.domain)

    if offline:
        print('Offline: skipping Wikidata and Wikipedia')
        facts_by_label = {}
        lookup_summary = None
    else:
        facts_by_label = load_wikidata(user_agent)
        lookup_summary = SummaryFetcher(lambda: get_wiki_client(user_agent))

    print()
    enrichment, failures = enrich_all(locations, facts_by_label, lookup_summary, counties_by_id)

    if lookup_summary:
        print(f'Wikipedia: {lookup_summary.requests} requests, {len(lookup_summary.articles)} articles')

    print()
    stats = EnrichmentStats.from_enrichment(enrichment)
    stats.report()

    if failures:
        print()
        print('Failed to enrich:')
        for location, ex in failures:
            print(' ', location, ex)

    output = output or get_output_path('enrichment')
    print()
    if dry:
        print('Dry run: not writing', output)
    else:
        write_json_data(output, enrichment)

    return stats


if '__main__' == __name__:
    run()
