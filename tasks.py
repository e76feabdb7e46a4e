from pathlib import Path

from invoke import task
from invoke.exceptions import Exit

from hrdata import PROJECT_ROOT
from hrdata import enrich as enrich_module
from hrdata import searchindex as searchindex_module
from hrdata.sitefiles import get_output_path

GENERATED_PUBLIC_FILES = ['search-index', 'locations-compare']


@task
def clean(ctx):
    for artifact in GENERATED_PUBLIC_FILES:
        path = get_output_path(artifact)
        if path.is_file():
            print(f'Deleting {path.name}', end=' ')
            if not ctx.config.run.dry:
                path.unlink()
                print('Complete')
            else:
                print('(dry)')
        else:
            print(f'{path.name} did not exist or is not a file')


@task
def searchindex(ctx):
    try:
        searchindex_module.run(dry=ctx.config.run.dry)
    except (OSError, ValueError) as ex:
        raise Exit(f'Unable to generate search indexes: {ex}')


@task(help={
    'offline': 'Skip Wikidata and Wikipedia. Only conclusions are generated.',
    'output': 'File to write instead of src/data/wiki-enrichment.json.',
})
def enrich(ctx, offline=False, output=None):
    try:
        enrich_module.run(
            offline=offline,
            dry=ctx.config.run.dry,
            output=Path(output) if output else None,
        )
    except (OSError, ValueError) as ex:
        raise Exit(f'Unable to enrich locations: {ex}')


@task(searchindex)
def build(ctx):
    with ctx.cd(PROJECT_ROOT):
        ctx.run('npx astro build', echo=True)
