import pytest

from hrdata.types import Enrichment
from hrdata.types import Location
from hrdata.types import LocationType
from hrdata.types import WikidataFacts


def test_location_from_record_uses_table_type():
    location = Location.from_record(
        {'id': 1, 'name': 'Zadarska županija', 'slug': 'zadarska-zupanija', 'population_2021': 159766},
        LocationType.ZUPANIJA,
    )

    assert location.type is LocationType.ZUPANIJA
    assert location.population_2021 == 159766
    assert location.avg_age is None
    assert location.county_id is None


def test_location_from_record_prefers_record_type():
    location = Location.from_record(
        {'name': 'Bilje', 'slug': 'bilje', 'type': 'opcina', 'population_2021': 5000, 'density': 40},
        LocationType.GRAD,
    )

    assert location.type is LocationType.OPCINA
    assert location.density == 40.0


def test_location_from_record_requires_slug():
    with pytest.raises(ValueError):
        Location.from_record({'name': 'Bilje'}, LocationType.OPCINA)


def test_unknown_location_type_code():
    with pytest.raises(ValueError):
        LocationType.find_by_code('naselje')


def test_wikidata_facts_first_value_wins():
    facts = WikidataFacts()
    facts.absorb({
        'coatOfArms': {'value': 'http://commons.wikimedia.org/wiki/Special:FilePath/Grb.svg'},
        'elevation': {'value': '12'},
        'sisterCityLabel': {'value': 'Dubrovnik'},
    })
    facts.absorb({
        'coatOfArms': {'value': 'http://commons.wikimedia.org/wiki/Special:FilePath/Other.svg'},
        'postalCode': {'value': '21000'},
        'elevation': {'value': '99'},
        'sisterCityLabel': {'value': 'Dubrovnik'},
    })
    facts.absorb({'sisterCityLabel': {'value': 'Pula'}})

    assert facts.coat_of_arms.endswith('Grb.svg')
    assert facts.postal_code == '21000'
    assert facts.elevation == 12.0
    assert facts.sister_cities == ['Dubrovnik', 'Pula']


def test_empty_enrichment_is_compacted_away():
    assert Enrichment().to_site_data() == {}


def test_enrichment_uses_site_keys():
    enrichment = Enrichment(
        description='Split je grad.',
        coat_of_arms='grb.svg',
        official_website='https://split.hr',
        license_plate='ST',
        sister_cities=['Pula'],
        elevation=0.0,
        conclusions=['Jedan.'],
    )

    assert enrichment.to_site_data() == {
        'description': 'Split je grad.',
        'coatOfArms': 'grb.svg',
        'elevation': 0,
        'officialWebsite': 'https://split.hr',
        'licensePlate': 'ST',
        'sisterCities': ['Pula'],
        'conclusions': ['Jedan.'],
    }
    assert list(enrichment.to_site_data()) == [
        'description', 'coatOfArms', 'elevation', 'officialWebsite',
        'licensePlate', 'sisterCities', 'conclusions',
    ]


def test_enrichment_keeps_fractional_elevation():
    assert Enrichment(elevation=121.5).to_site_data() == {'elevation': 121.5}


def test_location_from_record_requires_population():
    with pytest.raises(ValueError, match='without population'):
        Location.from_record({'name': 'Bilje', 'slug': 'bilje', 'type': 'opcina'}, LocationType.OPCINA)
