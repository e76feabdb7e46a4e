"""
Program to flatten the location tables into the compact JSON indexes used
by the site's client-side search and comparison pages.

Must be run before the site is built.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import more_itertools as mit

from . import SOURCE_DATA_DIR
from .sitefiles import get_output_path
from .sitefiles import load_locations
from .sitefiles import write_json_data
from .types import Location
from .types import LocationType

# Fields from the location tables included in the comparison data
COMPARE_FIELDS = (
    'name',
    'slug',
    'type',
    'county_name',
    'population_2021',
    'change_pct',
    'density',
    'avg_age',
    'education_university_pct',
    'male_pct',
    'female_pct',
)


def search_entry(location: Location) -> dict[str, Any]:
    return {
        'name': location.name,
        'slug': location.slug,
        'type': location.type.code,
        'county': '' if location.type is LocationType.ZUPANIJA else (location.county_name or ''),
        'pop': location.population_2021,
    }


def compare_entry(location: Location) -> dict[str, Any]:
    entry = {f: getattr(location, f) for f in COMPARE_FIELDS}
    entry['type'] = location.type.code
    return entry


def build_search_index(
    counties: Iterable[Location],
    cities: Iterable[Location],
    municipalities: Iterable[Location],
) -> list[dict[str, Any]]:
    return [search_entry(loc) for loc in mit.flatten([counties, cities, municipalities])]


def build_compare_data(
    cities: Iterable[Location],
    municipalities: Iterable[Location],
) -> list[dict[str, Any]]:
    return [compare_entry(loc) for loc in mit.flatten([cities, municipalities])]


def run(dry: bool = False, data_dir: Path = SOURCE_DATA_DIR) -> tuple[int, int]:
    tables = load_locations(data_dir)
    counties = tables[LocationType.ZUPANIJA]
    cities = tables[LocationType.GRAD]
    municipalities = tables[LocationType.OPCINA]

    search_index = build_search_index(counties, cities, municipalities)
    compare_data = build_compare_data(cities, municipalities)

    outputs = [
        (get_output_path('search-index'), search_index),
        (get_output_path('locations-compare'), compare_data),
    ]

    for path, data in outputs:
        if dry:
            print(f'Dry run: not writing {path.name} ({len(data)} entries)')
        else:
            write_json_data(path, data, compact=True)
            print(f'Written {path.name} ({len(data)} entries)')

    return len(search_index), len(compare_data)


if '__main__' == __name__:
    run()
