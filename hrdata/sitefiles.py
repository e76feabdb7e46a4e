"""
Functions and information for working with the site's data files.

The location tables live in TypeScript modules shared with the site
generator. They are plain array literals, so the array is cut out of the
source and parsed as a JavaScript object literal.
"""

from collections.abc import Mapping
from dataclasses import dataclass
import json
from pathlib import Path
import re
from types import MappingProxyType
from typing import Any
import warnings

import chompjs

from . import PUBLIC_DIR
from . import SITE_CONFIG_PATH
from . import SOURCE_DATA_DIR
from .types import Enrichment
from .types import Location
from .types import LocationType


DATA_TABLE_FILES: Mapping[LocationType, str] = MappingProxyType({
    LocationType.ZUPANIJA: 'zupanije.ts',
    LocationType.GRAD: 'gradovi.ts',
    LocationType.OPCINA: 'opcine.ts',
})

OUTPUT_FILES: Mapping[str, Path] = MappingProxyType({
    'enrichment': SOURCE_DATA_DIR / 'wiki-enrichment.json',
    'search-index': PUBLIC_DIR / 'search-index.json',
    'locations-compare': PUBLIC_DIR / 'locations-compare.json',
})

DEFAULT_DOMAIN = 'mojahrvatska.com.hr'

STRING_QUOTES = {'"', "'", '`'}


@dataclass(frozen=True)
class SiteConfig:
    domain: str
    name: str | None = None


def get_output_path(artifact: str) -> Path:
    return OUTPUT_FILES[artifact]


def _find_array_end(source: str, start: int) -> int:
    '''
    Returns the index just past the bracket closing the one at ``start``.

    Brackets inside string literals are ignored.
    '''
    depth = 0
    quote = None
    escaped = False

    for i in range(start, len(source)):
        c = source[i]

        if quote:
            if escaped:
                escaped = False
            elif c == '\\':
                escaped = True
            elif c == quote:
                quote = None
        elif c in STRING_QUOTES:
            quote = c
        elif c == '[':
            depth += 1
        elif c == ']':
            depth -= 1
            if depth == 0:
                return i + 1

    raise ValueError('Unterminated array literal')


def parse_ts_array(source: str, var_name: str, source_name: str = '<source>') -> list[dict[str, Any]]:
    declaration = re.search(rf'export\s+const\s+{re.escape(var_name)}\b[^=]*=\s*\[', source)
    if not declaration:
        raise ValueError(f'Cannot find {var_name} in {source_name}')

    start = declaration.end() - 1
    try:
        end = _find_array_end(source, start)
    except ValueError as ex:
        raise ValueError(f'{ex} for {var_name} in {source_name}') from ex

    array_text = re.sub(r'\s+as\s+const\b', '', source[start:end])

    data = chompjs.parse_js_object(array_text)
    if not isinstance(data, list):
        raise ValueError(f'{var_name} in {source_name} is a {type(data).__name__}; expected list')

    return data


def load_data_table(location_type: LocationType, data_dir: Path = SOURCE_DATA_DIR) -> list[Location]:
    path = data_dir / DATA_TABLE_FILES[location_type]

    with open(path, encoding='utf-8') as f:
        records = parse_ts_array(f.read(), location_type.table_name, path.name)

    return [Location.from_record(r, location_type) for r in records]


def load_locations(data_dir: Path = SOURCE_DATA_DIR) -> dict[LocationType, list[Location]]:
    tables = {lt: load_data_table(lt, data_dir) for lt in LocationType}

    print(
        f'Loaded: {len(tables[LocationType.ZUPANIJA])} counties,',
        f'{len(tables[LocationType.GRAD])} cities,',
        f'{len(tables[LocationType.OPCINA])} municipalities',
    )

    return tables


def load_site_config(path: Path = SITE_CONFIG_PATH) -> SiteConfig:
    if not path.is_file():
        warnings.warn(f'{path.name} not found. Using default domain {DEFAULT_DOMAIN}.')
        return SiteConfig(DEFAULT_DOMAIN)

    with open(path, encoding='utf-8') as f:
        config = json.load(f)

    if not isinstance(config, dict) or not config.get('domain'):
        raise ValueError(f'{path.name} has no domain')

    return SiteConfig(config['domain'], config.get('name'))


def to_json_serializable(o):
    if isinstance(o, Enrichment):
        return o.to_site_data()

    if isinstance(o, LocationType):
        return o.code

    raise TypeError(f'Cannot serialize {o} {type(o).__name__})')


def write_json_data(path: Path, data: Any, compact: bool = False):
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8', newline='') as f:
        if compact:
            json.dump(data, f, ensure_ascii=False, separators=(',', ':'), default=to_json_serializable)
        else:
            json.dump(data, f, ensure_ascii=False, indent=2, default=to_json_serializable)
        print('Wrote', f.name)
