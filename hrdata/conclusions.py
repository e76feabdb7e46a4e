"""
Analytical conclusions about a location, written in Croatian.

Each rule compares one census statistic against the national average and
contributes at most one sentence. Rules whose statistic is unknown for a
location are skipped.
"""

from collections.abc import Mapping
from decimal import Decimal
from decimal import ROUND_HALF_UP

from .types import Location
from .types import LocationType

MAX_CONCLUSIONS = 5

# 2021 census, approximate
NATIONAL_DENSITY = 68.4
NATIONAL_AVG_AGE = 43.7
NATIONAL_UNIVERSITY_PCT = 18.4
NATIONAL_CHANGE_PCT = -9.64  # 2011-2021
NATIONAL_AGE_0_14_PCT = 14.2

# Share of the county population that makes a location its main centre
COUNTY_CENTRE_SHARE = 0.3


def fmt(value: float, places: int = 1) -> str:
    '''
    Formats a number for a sentence, rounding halves away from zero.
    '''
    exponent = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def county_genitive(county_name: str) -> str:
    return county_name.replace('a županija', 'e županije').replace('Grad Zagreb', 'Grada Zagreba')


def _population_change(change: float) -> str:
    if change > 5:
        return (
            f'Stanovništvo bilježi značajan rast od {fmt(change)}% u desetljeću 2011.–2021., '
            f'što je znatno iznad nacionalnog trenda ({fmt(NATIONAL_CHANGE_PCT)}%).'
        )
    elif change > 0:
        return (
            f'Stanovništvo bilježi blagi rast od {fmt(change)}% u desetljeću 2011.–2021., '
            'suprotno od nacionalnog trenda pada.'
        )
    elif change > -5:
        return (
            f'Stanovništvo bilježi umjereni pad od {fmt(change)}% u razdoblju 2011.–2021., '
            f'što je blaže od nacionalnog prosjeka ({fmt(NATIONAL_CHANGE_PCT)}%).'
        )
    elif change > -15:
        return f'Stanovništvo bilježi značajan pad od {fmt(change)}% u desetljeću 2011.–2021.'
    else:
        return (
            f'Stanovništvo bilježi drastičan pad od {fmt(change)}% u razdoblju 2011.–2021., '
            'što ukazuje na snažne demografske izazove.'
        )


def _density(density: float) -> str | None:
    if density > NATIONAL_DENSITY * 5:
        return (
            f'Gustoća naseljenosti ({fmt(density, 0)}/km²) znatno je iznad '
            f'nacionalnog prosjeka ({NATIONAL_DENSITY}/km²).'
        )
    elif density > NATIONAL_DENSITY * 1.5:
        return (
            f'Gustoća naseljenosti ({fmt(density, 0)}/km²) iznad je '
            f'nacionalnog prosjeka ({NATIONAL_DENSITY}/km²).'
        )
    elif density < NATIONAL_DENSITY * 0.5:
        return (
            f'Gustoća naseljenosti ({fmt(density, 0)}/km²) ispod je nacionalnog prosjeka '
            f'({NATIONAL_DENSITY}/km²), što ukazuje na ruralni karakter.'
        )

    return None


def _average_age(avg_age: float) -> str | None:
    if avg_age > 48:
        return (
            f'Prosječna starost od {fmt(avg_age)} godina značajno je iznad nacionalnog prosjeka '
            f'({NATIONAL_AVG_AGE}), što ukazuje na izrazito staro stanovništvo.'
        )
    elif avg_age > NATIONAL_AVG_AGE + 2:
        return (
            f'Prosječna starost od {fmt(avg_age)} godina iznad je '
            f'nacionalnog prosjeka ({NATIONAL_AVG_AGE}).'
        )
    elif avg_age < NATIONAL_AVG_AGE - 3:
        return (
            f'Prosječna starost od {fmt(avg_age)} godina ispod je nacionalnog prosjeka '
            f'({NATIONAL_AVG_AGE}), što ukazuje na mlađe stanovništvo.'
        )

    return None


def _education(university_pct: float) -> str | None:
    if university_pct > 25:
        return (
            f'Udio visokoobrazovanih ({fmt(university_pct)}%) znatno je iznad '
            f'nacionalnog prosjeka ({NATIONAL_UNIVERSITY_PCT}%).'
        )
    elif university_pct < 10:
        return (
            f'Udio visokoobrazovanih ({fmt(university_pct)}%) ispod je '
            f'nacionalnog prosjeka ({NATIONAL_UNIVERSITY_PCT}%).'
        )

    return None


def _county_centre(location: Location, county: Location) -> str | None:
    if not county.population_2021:
        return None

    share = location.population_2021 / county.population_2021
    if share <= COUNTY_CENTRE_SHARE:
        return None

    return (
        f'{location.name} je najveće urbano središte {county_genitive(county.name)}, '
        f's {fmt(share * 100, 0)}% županijskog stanovništva.'
    )


def _size(location: Location) -> str | None:
    pop = location.population_2021

    if location.type is LocationType.OPCINA:
        if pop < 500:
            return 'S manje od 500 stanovnika, ovo je jedna od najmanjih općina u Hrvatskoj.'
        elif pop > 10000:
            return 'S više od 10.000 stanovnika, ovo je jedna od većih općina u Hrvatskoj.'
    elif location.type is LocationType.GRAD:
        if pop > 100000:
            return f'{location.name} je jedan od najvećih gradova u Hrvatskoj.'
        elif pop < 3000:
            return f'S manje od 3.000 stanovnika, {location.name} je među najmanjim gradovima u Hrvatskoj.'

    return None


def generate_conclusions(location: Location, counties_by_id: Mapping[object, Location]) -> list[str]:
    conclusions = []
    is_county = location.type is LocationType.ZUPANIJA

    if location.change_pct is not None:
        conclusions.append(_population_change(location.change_pct))

    if not is_county and location.density is not None:
        conclusions.append(_density(location.density))

    if location.avg_age is not None:
        conclusions.append(_average_age(location.avg_age))

    if location.age_0_14_pct is not None and location.age_0_14_pct > 16:
        conclusions.append(
            f'Udio mladih (0–14 godina) od {fmt(location.age_0_14_pct)}% iznad je nacionalnog prosjeka '
            f'({NATIONAL_AGE_0_14_PCT}%), što upućuje na povoljniju demografsku sliku.'
        )

    if location.age_65_plus_pct is not None and location.age_65_plus_pct > 28:
        conclusions.append(
            f'Udio stanovništva starijih od 65 godina ({fmt(location.age_65_plus_pct)}%) znatno je '
            'iznad prosjeka, što predstavlja demografski izazov.'
        )

    if location.education_university_pct is not None:
        conclusions.append(_education(location.education_university_pct))

    if not is_county and location.county_id is not None:
        if county := counties_by_id.get(location.county_id):
            conclusions.append(_county_centre(location, county))

    conclusions.append(_size(location))

    return [c for c in conclusions if c][:MAX_CONCLUSIONS]
