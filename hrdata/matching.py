"""
Matching local locations to external data by name.

Wikidata and Wikipedia have no identifiers in common with the site's data
tables, so records are joined by human-readable name. Each location
produces an ordered list of candidate names, and the first candidate that
resolves wins.
"""

from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping

from .types import Location
from .types import LocationType
from .types import WikiSummary
from .types import WikidataFacts

# Manual overrides where the article title differs from the location name
WIKI_TITLE_FIXES = {
    'Grad Zagreb': 'Zagreb',
}

ALTERNATE_TITLE_SUFFIXES = {
    LocationType.GRAD: ' (grad)',
    LocationType.OPCINA: ' (općina)',
}


def strip_county_name(name: str) -> str:
    return name.replace(' županija', '').replace('Grad ', '')


def wikidata_keys(location: Location) -> Iterator[str]:
    yield location.name

    # Wikidata labels counties inconsistently
    if location.type is LocationType.ZUPANIJA:
        short_name = strip_county_name(location.name)
        if short_name != location.name:
            yield short_name


def primary_wiki_title(location: Location) -> str:
    if location.type is LocationType.ZUPANIJA:
        return location.name

    return WIKI_TITLE_FIXES.get(location.name, location.name)


def wiki_titles(location: Location) -> Iterator[str]:
    yield primary_wiki_title(location)

    if suffix := ALTERNATE_TITLE_SUFFIXES.get(location.type):
        yield location.name + suffix


def find_wikidata(location: Location, facts_by_label: Mapping[str, WikidataFacts]) -> WikidataFacts | None:
    for key in wikidata_keys(location):
        if facts := facts_by_label.get(key):
            return facts

    return None


def find_summary(
    location: Location,
    fetch: Callable[[str], WikiSummary | None],
) -> tuple[WikiSummary | None, int]:
    '''
    Fetches the first Wikipedia summary found for the location.

    Titles are tried in order and only fetched as needed, so the alternate
    title is never requested when the primary title exists.

    Returns: the summary (or None) and the number of titles tried
    '''
    attempts = 0

    for title in wiki_titles(location):
        attempts += 1
        if summary := fetch(title):
            return summary, attempts

    return None, attempts
