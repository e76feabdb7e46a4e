"""
Data types for data represented in the site's files.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any


class LocationType(Enum):
    ZUPANIJA = ('zupanija', 'županija', 'ZUPANIJE')
    GRAD     = ('grad', 'grad', 'GRADOVI')
    OPCINA   = ('opcina', 'općina', 'OPCINE')

    def __init__(self, code: str, long_name: str, table_name: str):
        self.code = code
        self.long_name = long_name
        # Name of the exported array in the site's data files
        self.table_name = table_name

    @classmethod
    def find_by_code(cls, code: str):
        for lt in cls:
            if lt.code == code:
                return lt

        raise ValueError(f'No location type found with code {code}')

    def __str__(self):
        return self.long_name

    def __repr__(self):
        return f'<{type(self).__name__}:{self.code}>'


def _optional_float(record: Mapping[str, Any], key: str) -> float | None:
    value = record.get(key)
    if value is None:
        return None
    return float(value)


@dataclass(frozen=True)
class Location:
    id: int | str | None
    name: str
    slug: str
    type: LocationType
    population_2021: int
    change_pct: float | None = None
    density: float | None = None
    avg_age: float | None = None
    age_0_14_pct: float | None = None
    age_65_plus_pct: float | None = None
    education_university_pct: float | None = None
    male_pct: float | None = None
    female_pct: float | None = None
    county_id: int | str | None = None
    county_name: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any], default_type: LocationType) -> 'Location':
        name = record.get('name')
        slug = record.get('slug')

        if not name or not slug:
            raise ValueError(f'Location record without name or slug: {dict(record)}')

        if record.get('population_2021') is None:
            raise ValueError(f'Location record without population: {name}')

        if record_type := record.get('type'):
            location_type = LocationType.find_by_code(record_type)
        else:
            location_type = default_type

        return cls(
            id=record.get('id'),
            name=name,
            slug=slug,
            type=location_type,
            population_2021=int(record['population_2021']),
            change_pct=_optional_float(record, 'change_pct'),
            density=_optional_float(record, 'density'),
            avg_age=_optional_float(record, 'avg_age'),
            age_0_14_pct=_optional_float(record, 'age_0_14_pct'),
            age_65_plus_pct=_optional_float(record, 'age_65_plus_pct'),
            education_university_pct=_optional_float(record, 'education_university_pct'),
            male_pct=_optional_float(record, 'male_pct'),
            female_pct=_optional_float(record, 'female_pct'),
            county_id=record.get('county_id'),
            county_name=record.get('county_name'),
        )

    def __str__(self):
        return f'{self.name} ({self.type})'


@dataclass
class WikidataFacts:
    coat_of_arms: str | None = None
    photo: str | None = None
    postal_code: str | None = None
    elevation: float | None = None
    official_website: str | None = None
    license_plate: str | None = None
    sister_cities: list[str] = field(default_factory=list)

    def absorb(self, binding: Mapping[str, Mapping[str, str]]):
        '''
        Merges one SPARQL result row into these facts.

        Fields already set are kept; the first row with a value wins.
        '''
        def value(key):
            return binding.get(key, {}).get('value') or None

        if not self.coat_of_arms:
            self.coat_of_arms = value('coatOfArms')
        if not self.photo:
            self.photo = value('photo')
        if not self.postal_code:
            self.postal_code = value('postalCode')
        if self.elevation is None and (elevation := value('elevation')):
            self.elevation = float(elevation)
        if not self.official_website:
            self.official_website = value('website')
        if not self.license_plate:
            self.license_plate = value('licensePlate')
        if (sister_city := value('sisterCityLabel')) and sister_city not in self.sister_cities:
            self.sister_cities.append(sister_city)


@dataclass(frozen=True)
class WikiSummary:
    title: str
    description: str | None
    thumbnail: str | None


# Site key for each Enrichment field, in output order
ENRICHMENT_KEYS = {
    'description': 'description',
    'thumbnail': 'thumbnail',
    'coat_of_arms': 'coatOfArms',
    'photo': 'photo',
    'postal_code': 'postalCode',
    'elevation': 'elevation',
    'official_website': 'officialWebsite',
    'license_plate': 'licensePlate',
    'sister_cities': 'sisterCities',
    'conclusions': 'conclusions',
}


@dataclass
class Enrichment:
    description: str | None = None
    thumbnail: str | None = None
    coat_of_arms: str | None = None
    photo: str | None = None
    postal_code: str | None = None
    elevation: float | None = None
    official_website: str | None = None
    license_plate: str | None = None
    sister_cities: list[str] = field(default_factory=list)
    conclusions: list[str] = field(default_factory=list)

    def apply_wikidata(self, facts: WikidataFacts):
        self.coat_of_arms = facts.coat_of_arms
        self.photo = facts.photo
        self.postal_code = facts.postal_code
        self.elevation = facts.elevation
        self.official_website = facts.official_website
        self.license_plate = facts.license_plate
        self.sister_cities = list(facts.sister_cities)

    def apply_summary(self, summary: WikiSummary):
        self.description = summary.description
        self.thumbnail = summary.thumbnail

    @property
    def has_photo(self):
        return bool(self.photo or self.thumbnail)

    def to_site_data(self) -> dict[str, Any]:
        '''
        Converts to the structure stored in the site's enrichment file.

        Empty values are left out to keep the file compact. Elevation is
        the exception: 0 is a real elevation.
        '''
        data = {}

        for attr, key in ENRICHMENT_KEYS.items():
            value = getattr(self, attr)

            if attr == 'elevation':
                if value is not None:
                    # Whole metres are written without a fraction
                    data[key] = int(value) if value.is_integer() else value
            elif value:
                data[key] = value

        return data
