import pytest

from hrdata.types import Location
from hrdata.types import LocationType

ZUPANIJE_TS = '''\
import type { Zupanija } from './types';

export const ZUPANIJE: Zupanija[] = [
  {
    id: 17,
    name: 'Splitsko-dalmatinska županija',
    slug: 'splitsko-dalmatinska-zupanija',
    population_2021: 423407,
    change_pct: -6.1,
    density: 93.0,
    avg_age: 43.1,
    age_0_14_pct: 14.6,
    age_65_plus_pct: 21.2,
  },
  {
    id: 21,
    name: 'Grad Zagreb',
    slug: 'grad-zagreb',
    population_2021: 767131,
    change_pct: -2.1,
    density: 1202.0,
    avg_age: 42.9,
    age_0_14_pct: 15.0,
    age_65_plus_pct: 20.3,
  },
];
'''

GRADOVI_TS = '''\
export const GRADOVI: Grad[] = [
  {
    id: 101,
    name: 'Split',
    slug: 'split',
    type: 'grad' as const,
    county_id: 17,
    county_name: 'Splitsko-dalmatinska županija',
    population_2021: 160577,
    change_pct: -4.9,
    density: 2021.0,
    avg_age: 43.5,
    age_0_14_pct: 13.9,
    age_65_plus_pct: 21.9,
    education_university_pct: 27.3,
    male_pct: 47.6,
    female_pct: 52.4,
  },
  {
    id: 102,
    name: 'Zagreb',
    slug: 'zagreb',
    type: 'grad' as const,
    county_id: 21,
    county_name: 'Grad Zagreb',
    population_2021: 767131,
    change_pct: -2.1,
    density: 1202.0,
    avg_age: 42.9,
    age_0_14_pct: 15.0,
    age_65_plus_pct: 20.3,
    education_university_pct: 33.1,
    male_pct: 47.1,
    female_pct: 52.9,
  },
];
'''

OPCINE_TS = '''\
export const OPCINE: Opcina[] = [
  {
    id: 201,
    name: 'Podstrana',
    slug: 'podstrana',
    type: 'opcina' as const,
    county_id: 17,
    county_name: 'Splitsko-dalmatinska županija',
    population_2021: 10889,
    change_pct: 16.3,
    density: 1012.0,
    avg_age: 38.9,
    age_0_14_pct: 18.2,
    age_65_plus_pct: 15.4,
    education_university_pct: 24.0,
    male_pct: 49.5,
    female_pct: 50.5,
  },
  {
    id: 202,
    name: 'Zadvarje',
    slug: 'zadvarje',
    type: 'opcina' as const,
    county_id: 17,
    county_name: 'Splitsko-dalmatinska županija',
    population_2021: 253,
    change_pct: -12.4,
    density: 18.2,
    avg_age: 50.3,
    age_0_14_pct: 9.1,
    age_65_plus_pct: 31.2,
    education_university_pct: null,
    male_pct: 50.2,
    female_pct: 49.8,
  },
];
'''


@pytest.fixture
def data_dir(tmp_path):
    directory = tmp_path / 'data'
    directory.mkdir()
    (directory / 'zupanije.ts').write_text(ZUPANIJE_TS, encoding='utf-8')
    (directory / 'gradovi.ts').write_text(GRADOVI_TS, encoding='utf-8')
    (directory / 'opcine.ts').write_text(OPCINE_TS, encoding='utf-8')
    return directory


@pytest.fixture
def split_county():
    return Location(
        id=17,
        name='Splitsko-dalmatinska županija',
        slug='splitsko-dalmatinska-zupanija',
        type=LocationType.ZUPANIJA,
        population_2021=423407,
        change_pct=-6.1,
        density=93.0,
        avg_age=43.1,
        age_0_14_pct=14.6,
        age_65_plus_pct=21.2,
    )


@pytest.fixture
def split_city():
    return Location(
        id=101,
        name='Split',
        slug='split',
        type=LocationType.GRAD,
        population_2021=160577,
        change_pct=-4.9,
        density=2021.0,
        avg_age=43.5,
        age_0_14_pct=13.9,
        age_65_plus_pct=21.9,
        education_university_pct=27.3,
        male_pct=47.6,
        female_pct=52.4,
        county_id=17,
        county_name='Splitsko-dalmatinska županija',
    )


@pytest.fixture
def small_municipality():
    return Location(
        id=202,
        name='Zadvarje',
        slug='zadvarje',
        type=LocationType.OPCINA,
        population_2021=253,
        change_pct=-12.4,
        density=18.2,
        avg_age=50.3,
        age_0_14_pct=9.1,
        age_65_plus_pct=31.2,
        county_id=17,
        county_name='Splitsko-dalmatinska županija',
    )
