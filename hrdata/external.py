"""
Functions and information for working with external data sources: the
Wikidata query service and the Croatian Wikipedia.

Both are treated as unreliable. Failures are reported and skipped so a
single bad response never loses the rest of the data.
"""

from collections import defaultdict
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from datetime import timedelta
from typing import Any
import warnings

from mediawiki import MediaWiki
from mediawiki.exceptions import MediaWikiException
import more_itertools as mit
import requests

from .types import WikiSummary
from .types import WikidataFacts
from .util import LazyValue
from .util import MultikeyCache


class ExternalDataError(Exception):
    pass


USER_AGENT_TEMPLATE = 'MojaHrvatska/1.0 ({domain}) Python'

#region Wikidata

WIKIDATA_ENDPOINT = 'https://query.wikidata.org/sparql'
SPARQL_TIMEOUT = 60

# Shared by all queries; only the selection of items differs.
SPARQL_TEMPLATE = '''
SELECT ?item ?itemLabel ?coatOfArms ?photo ?postalCode ?elevation ?website ?licensePlate ?sisterCityLabel WHERE {{
  {selector}
  OPTIONAL {{ ?item wdt:P94 ?coatOfArms . }}
  OPTIONAL {{ ?item wdt:P18 ?photo . }}
  OPTIONAL {{ ?item wdt:P281 ?postalCode . }}
  OPTIONAL {{ ?item wdt:P2044 ?elevation . }}
  OPTIONAL {{ ?item wdt:P856 ?website . }}
  OPTIONAL {{ ?item wdt:P395 ?licensePlate . }}
  OPTIONAL {{ ?item wdt:P190 ?sisterCity . ?sisterCity rdfs:label ?sisterCityLabel . FILTER(LANG(?sisterCityLabel) = "hr") }}
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "hr,en" . }}
}}
'''

SPARQL_SELECTORS = {
    # Any human settlement in Croatia
    'settlements': '?item wdt:P31/wdt:P279* wd:Q486972 .\n  ?item wdt:P17 wd:Q224 .',
    'counties': '?item wdt:P31 wd:Q5765585 .',
    'cities': '?item wdt:P31 wd:Q2616791 .',
    'municipalities': '?item wdt:P31 wd:Q1196726 .',
}

SPARQL_QUERIES = {
    label: SPARQL_TEMPLATE.format(selector=selector)
    for label, selector in SPARQL_SELECTORS.items()
}

Binding = Mapping[str, Mapping[str, str]]


def get_sparql_session(user_agent: str) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        'Accept': 'application/sparql-results+json',
        'User-Agent': user_agent,
    })
    return session


def fetch_sparql(session: requests.Session, query: str, label: str, timeout: float = SPARQL_TIMEOUT) -> list[Binding]:
    print(f'Fetching Wikidata SPARQL ({label})...')

    try:
        response = session.get(
            WIKIDATA_ENDPOINT,
            params={'query': query, 'format': 'json'},
            timeout=timeout,
        )
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as ex:
        raise ExternalDataError(f'Wikidata SPARQL error ({label}): {ex}') from ex
    except ValueError as ex:
        raise ExternalDataError(f'Wikidata SPARQL returned malformed JSON ({label})') from ex

    try:
        bindings = data['results']['bindings']
    except (KeyError, TypeError) as ex:
        raise ExternalDataError(f'Wikidata SPARQL response has no bindings ({label})') from ex

    if not isinstance(bindings, list):
        raise ExternalDataError(f'Wikidata SPARQL bindings are a {type(bindings).__name__}; expected list ({label})')

    return bindings


def fetch_all_wikidata(
    session: requests.Session,
    queries: Mapping[str, str] = SPARQL_QUERIES,
) -> tuple[list[Binding], list[str]]:
    '''
    Runs every query, skipping the ones that fail.

    Returns: all result rows in query order and the labels of failed queries
    '''
    bindings = []
    failed = []
    counts = []

    for label, query in queries.items():
        try:
            rows = fetch_sparql(session, query, label)
        except ExternalDataError as ex:
            warnings.warn(f'{ex}. Skipping {label}.')
            failed.append(label)
            continue

        counts.append(f'{len(rows)} {label} rows')
        bindings.extend(rows)

    if counts:
        print('Wikidata:', ', '.join(counts))

    return bindings, failed


def merge_wikidata_bindings(bindings: Iterable[Binding]) -> dict[str, WikidataFacts]:
    '''
    Groups SPARQL result rows by item label.

    A location appears once per combination of its optional values, so
    the rows are merged into a single set of facts per label.
    '''
    facts_by_label = defaultdict(WikidataFacts)

    for row in bindings:
        label = row.get('itemLabel', {}).get('value')
        if not label:
            continue

        facts_by_label[label].absorb(row)

    return dict(facts_by_label)

#endregion

#region Wikipedia

WIKIPEDIA_API = 'https://hr.wikipedia.org/w/api.php'
WIKIPEDIA_TIMEOUT = 15.0
THUMBNAIL_SIZE = 320


def get_wiki_client(user_agent: str) -> MediaWiki:
    return MediaWiki(
        WIKIPEDIA_API,
        timeout=WIKIPEDIA_TIMEOUT,
        rate_limit=True,
        rate_limit_wait=timedelta(seconds=.1),
        user_agent=user_agent,
    )


def fetch_wiki_summary(client: MediaWiki, title: str) -> WikiSummary | None:
    '''
    Fetches the plain text introduction and thumbnail of an article.

    Returns None when the article does not exist or cannot be loaded.
    '''
    params: dict[str, Any] = {
        'prop': 'extracts|pageimages',
        'exintro': 1,
        'explaintext': 1,
        'piprop': 'thumbnail',
        'pithumbsize': THUMBNAIL_SIZE,
        'titles': title,
        'redirects': 1,
    }

    try:
        response = client.wiki_request(params)
    except (requests.RequestException, MediaWikiException) as ex:
        warnings.warn(f'Wikipedia request failed for {title}: {ex}')
        return None

    if error := response.get('error'):
        warnings.warn(f'Wikipedia API error for {title}: {error.get("info", error)}')
        return None

    page = mit.first(response.get('query', {}).get('pages', {}).values(), None)

    if not page or 'missing' in page or 'invalid' in page:
        return None

    description = (page.get('extract') or '').strip() or None
    thumbnail = page.get('thumbnail', {}).get('source')

    if not description and not thumbnail:
        return None

    return WikiSummary(page.get('title', title), description, thumbnail)


def normalize_title(title: str) -> str:
    title = ' '.join(title.replace('_', ' ').split())
    return title[:1].upper() + title[1:]


class SummaryFetcher:
    '''
    Fetches Wikipedia summaries, remembering results by title.

    Several locations can share an article, so a summary is stored under
    the requested title and the article's resolved title. Misses are
    remembered too.
    '''
    _client: LazyValue[MediaWiki]
    _cache: MultikeyCache[str, WikiSummary | None]

    def __init__(
        self,
        client_factory: Callable[[], MediaWiki],
        fetch: Callable[[MediaWiki, str], WikiSummary | None] = fetch_wiki_summary,
    ):
        self._client = LazyValue(client_factory)
        self._fetch = fetch
        self._cache = MultikeyCache()
        self._unavailable = False
        self.requests = 0

    def _equivalent_titles(self, title: str) -> Iterator[str]:
        yield title
        if (normalized := normalize_title(title)) != title:
            yield normalized

    def _load(self, title: str) -> WikiSummary | None:
        if self._unavailable:
            return None

        try:
            client = self._client.value
        except (requests.RequestException, MediaWikiException) as ex:
            warnings.warn(f'Unable to connect to Wikipedia: {ex}. Skipping summaries.')
            self._unavailable = True
            return None

        self.requests += 1
        return self._fetch(client, title)

    def __call__(self, title: str) -> WikiSummary | None:
        summary, cached = self._cache.get(
            self._equivalent_titles(title),
            lambda: self._load(title),
        )

        if summary and not cached:
            # Redirects and normalization resolve to the article title
            self._cache.get([summary.title], lambda: summary)

        return summary

    @property
    def articles(self):
        return self._cache.allvalues

#endregion
