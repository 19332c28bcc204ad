"""Rocksmith Toolkit CLI."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log decoding details to stderr")
def main(verbose: bool):
    """Rocksmith Toolkit - Decode PSARC archives and song manifests.

    \b
    list     - Show the paths stored in an archive
    extract  - Write every stored file to a directory
    manifest - Dump the .hsan manifest, with arrangement path names merged in
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command("list")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def list_command(archive: Path):
    """List files in a PSARC archive."""
    from .psarc import PSARCReader

    try:
        reader = PSARCReader.from_file(archive)
        files = reader.list_files()
        click.echo(f"Files in archive ({len(files)}):")
        for filename in files:
            click.echo(f"  {filename}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output directory (default: <archive_name>_extracted)",
)
def extract(archive: Path, output: Optional[Path]):
    """Extract all files from a PSARC archive."""
    from .psarc import PSARCReader

    click.echo(f"Opening: {archive}")

    try:
        reader = PSARCReader.from_file(archive)

        if output is None:
            output = archive.parent / f"{archive.stem}_extracted"
        click.echo(f"Output:  {output}")

        extracted_count = 0
        with click.progressbar(
            reader.extract_all(output),
            length=len(reader.list_files()),
            label="Extracting",
            item_show_func=lambda x: x[0] if x else "",
        ) as items:
            for _ in items:
                extracted_count += 1

        click.echo()
        click.echo(f"Extracted: {extracted_count} files")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("manifest.json"),
    show_default=True,
    help="Output JSON file",
)
@click.option(
    "--pathnames/--raw",
    default=True,
    help="Merge arrangement path names into the manifest, or dump the .hsan as stored",
)
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent for --pathnames")
def manifest(archive: Path, output: Path, pathnames: bool, indent: int):
    """Write the archive's song manifest as JSON.

    With --pathnames (default) every arrangement entry gains an
    Attributes.PathName label such as "Lead" or "Bonus Rhythm 2".
    Vocal arrangements are left without one.
    """
    from .manifest import build_path_name_manifest
    from .psarc import PSARCReader

    try:
        reader = PSARCReader.from_file(archive)

        if pathnames:
            text = json.dumps(build_path_name_manifest(reader), indent=indent, ensure_ascii=False)
        else:
            text = reader.get_manifest().decode("utf-8")

        output.write_text(text, encoding="utf-8")
        click.echo(f"Created: {output}")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
