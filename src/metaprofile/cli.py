# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for metaprofile.

This module provides the command-line interface for inspecting EML
and Dublin Core metadata documents and re-serializing them.
"""

# Standard Library
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

# Third Party
import click
from colorama import Fore, Style, init
from lxml import etree
from tqdm import tqdm

# Local
from . import __version__
from .binding import SoftFieldError, bind
from .dialects import TABLES
from .exceptions import (
    HardParseError,
    MetadataError,
    NoRecognizedDialectError,
    NoSuitableParserError,
    SchemaValidationError,
    TemplateRenderError,
    UnreadableStreamError,
)
from .model import DublinCoreDocument, Eml
from .resolver import resolve
from .sniffer import Dialect, detect
from .utils import setup_logging
from .validator import load_schema, validate_xml
from .writer import write

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_PARSE_FAILED = 3
EXIT_VALIDATION_FAILED = 4
EXIT_PERMISSION_ERROR = 5

METADATA_FILE_PATTERN = "*.xml"

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Result of processing one metadata file.

    Attributes:
        input_path: Path to the metadata file.
        success: True if the file was parsed (and written, if requested).
        dialect: Detected dialect.
        document: The bound document, unless only detection was requested.
        output_path: Path the document was written to, if any.
        warnings: Field values skipped while binding.
        error: Error message if success=False.
        validation_errors: Schema violations of the serialized document.
    """

    input_path: Path
    success: bool
    dialect: Dialect | None = None
    document: Eml | DublinCoreDocument | None = None
    output_path: Path | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    validation_errors: list[str] = field(default_factory=list)

    @property
    def validation_failed(self) -> bool:
        return bool(self.validation_errors)


def print_success(msg: str) -> None:
    """Prints a success message in green.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.GREEN}\u2713{Style.RESET_ALL} {msg}")


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}\u2717 Error:{Style.RESET_ALL} {msg}", err=True)


def print_warning(msg: str) -> None:
    """Prints a warning in yellow.

    Args:
        msg: The warning to output.
    """
    click.echo(f"{Fore.YELLOW}\u26a0{Style.RESET_ALL} {msg}")


def _print_summary(document: Eml | DublinCoreDocument) -> None:
    """Prints the common metadata fields of a document."""
    fields = (
        ("Title", document.title),
        ("Identifier", document.identifier),
        ("Creator", document.creator_name),
        ("Publisher", document.publisher_name),
        ("Published", document.published.isoformat() if document.published else None),
        ("Homepage", document.homepage),
        ("Subject", document.subject),
        ("License", document.license.value if document.license else None),
    )
    for label, value in fields:
        if value:
            click.echo(f"  {label}: {value}")


def _print_result(
    result: FileResult, quiet: bool, show_validation: bool = True
) -> None:
    """Prints the processing result in a formatted way.

    Args:
        result: The processing result.
        quiet: If True, only output errors.
        show_validation: If False, schema violations are left to the
            caller's summary.
    """
    if not result.success:
        print_error(f"{result.input_path.name}: {result.error}")
        return

    if show_validation and result.validation_failed:
        print_error(f"Validation failed for {result.output_path or result.input_path}")
        for error in result.validation_errors:
            click.echo(f"  - {error}", err=True)

    if quiet:
        return

    dialect = result.dialect.value if result.dialect else "unknown"
    if result.output_path is not None:
        print_success(f"{result.input_path.name} ({dialect}) -> {result.output_path}")
    else:
        print_success(f"{result.input_path.name}: {dialect}")
    if result.document is not None:
        _print_summary(result.document)
    for warning in result.warnings:
        print_warning(warning)


def _bind_document(
    data: bytes, errors: list[SoftFieldError]
) -> tuple[Dialect, Eml | DublinCoreDocument]:
    """Binds a document with its detected dialect, else tries all dialects."""
    try:
        dialect = detect(data)
    except NoRecognizedDialectError:
        logger.info("Dialect not recognized, trying all parsers")
        document = resolve(data)
        return (Dialect.EML if isinstance(document, Eml) else Dialect.DC), document
    return dialect, bind(data, TABLES[dialect], errors)


def process_file(
    input_path: Path,
    output_path: Path | None = None,
    *,
    detect_only: bool = False,
    schema: etree.XMLSchema | None = None,
) -> FileResult:
    """Parses a metadata file and optionally re-serializes it.

    Args:
        input_path: Path to the metadata file.
        output_path: Where to write the serialized document, if anywhere.
        detect_only: Only detect the dialect.
        schema: Schema the serialized document is validated against.

    Returns:
        The processing result.

    Raises:
        MetadataError: If the file cannot be parsed or serialized.
        OSError: If reading or writing a file fails.
    """
    data = input_path.read_bytes()

    if detect_only:
        return FileResult(input_path=input_path, success=True, dialect=detect(data))

    errors: list[SoftFieldError] = []
    dialect, document = _bind_document(data, errors)
    result = FileResult(
        input_path=input_path,
        success=True,
        dialect=dialect,
        document=document,
        warnings=[f"Skipped {e.path}: {e.reason}" for e in errors],
    )

    if output_path is None and schema is None:
        return result

    xml = write(document)
    if schema is not None:
        report = validate_xml(xml, schema)
        result.validation_errors = report.errors
    if output_path is not None:
        output_path.write_text(xml, encoding="utf-8")
        result.output_path = output_path
        logger.debug("Wrote %s", output_path)

    return result


@click.command()
@click.argument("input_path", required=False, type=click.Path(exists=True))
@click.argument("output", required=False, type=click.Path())
@click.option(
    "--detect",
    "detect_only",
    is_flag=True,
    help="Only detect the metadata dialect",
)
@click.option(
    "-r",
    "--recursive",
    is_flag=True,
    help="Process directories recursively",
)
@click.option(
    "-f",
    "--force",
    is_flag=True,
    help="Overwrite existing files",
)
@click.option(
    "--schema",
    type=click.Path(exists=True, dir_okay=False),
    help="Validate the serialized document against this XML Schema",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Only output errors",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Detailed output",
)
@click.version_option(version=__version__)
def main(
    input_path: str | None,
    output: str | None,
    detect_only: bool,
    recursive: bool,
    force: bool,
    schema: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """Reads EML and Dublin Core metadata documents.

    INPUT is the path to a metadata document or a directory.
    OUTPUT is optionally the path the document is re-serialized to.
    """
    # Initialize colorama for Windows compatibility
    init()

    if input_path is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(verbose=verbose, quiet=quiet)

    input_path_obj = Path(input_path)

    if detect_only and (output or schema):
        print_warning("--detect ignores OUTPUT and --schema")
        output = schema = None

    try:
        loaded_schema = load_schema(schema) if schema else None

        if input_path_obj.is_file():
            exit_code = _process_single_file(
                input_path_obj, output, detect_only, force, loaded_schema, quiet
            )
        elif input_path_obj.is_dir():
            exit_code = _process_directory(
                input_path_obj,
                output,
                detect_only,
                force,
                recursive,
                loaded_schema,
                quiet,
            )
        else:
            print_error(f"Invalid path: {input_path}")
            exit_code = EXIT_FILE_NOT_FOUND

    except FileNotFoundError as e:
        print_error(str(e))
        exit_code = EXIT_FILE_NOT_FOUND
    except PermissionError as e:
        print_error(f"Access denied: {e}")
        exit_code = EXIT_PERMISSION_ERROR
    except (
        HardParseError,
        NoRecognizedDialectError,
        NoSuitableParserError,
        TemplateRenderError,
        UnreadableStreamError,
    ) as e:
        print_error(str(e))
        exit_code = EXIT_PARSE_FAILED
    except SchemaValidationError as e:
        print_error(str(e))
        exit_code = EXIT_GENERAL_ERROR
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        exit_code = EXIT_GENERAL_ERROR

    sys.exit(exit_code)


def _process_single_file(
    input_path: Path,
    output: str | None,
    detect_only: bool,
    force: bool,
    schema: etree.XMLSchema | None,
    quiet: bool,
) -> int:
    """Processes a single metadata file.

    Args:
        input_path: Path to the metadata file.
        output: Optional output path.
        detect_only: Whether to only detect the dialect.
        force: Whether to overwrite an existing output file.
        schema: Optional schema to validate the serialized document.
        quiet: Whether to only output errors.

    Returns:
        Exit code.
    """
    output_path = Path(output) if output else None

    if output_path is not None and output_path.exists() and not force:
        print_error(
            f"Output file already exists: {output_path}. Use --force to overwrite."
        )
        return EXIT_GENERAL_ERROR

    result = process_file(
        input_path, output_path, detect_only=detect_only, schema=schema
    )
    _print_result(result, quiet)

    if result.validation_failed:
        return EXIT_VALIDATION_FAILED
    return EXIT_SUCCESS


def _process_directory(
    input_dir: Path,
    output: str | None,
    detect_only: bool,
    force: bool,
    recursive: bool,
    schema: etree.XMLSchema | None,
    quiet: bool,
) -> int:
    """Processes all metadata files in a directory.

    Args:
        input_dir: Input directory.
        output: Optional output directory.
        detect_only: Whether to only detect dialects.
        force: Whether to overwrite existing output files.
        recursive: Whether to process recursively.
        schema: Optional schema to validate serialized documents.
        quiet: Whether to only output errors.

    Returns:
        Exit code.
    """
    output_dir = Path(output) if output else None
    pattern = f"**/{METADATA_FILE_PATTERN}" if recursive else METADATA_FILE_PATTERN
    files = sorted(input_dir.glob(pattern))

    if not files:
        logger.warning("No metadata files found in: %s", input_dir)
        return EXIT_SUCCESS

    if not quiet:
        mode = "recursive" if recursive else "non-recursive"
        click.echo(f"Reading directory {input_dir} ({mode}), {len(files)} file(s)...")

    results: list[FileResult] = []
    for path in tqdm(files, desc="Reading", unit="file", ncols=80, disable=quiet):
        out_path = None
        if output_dir is not None:
            out_path = output_dir / path.relative_to(input_dir)
            if out_path.exists() and not force:
                results.append(
                    FileResult(
                        input_path=path,
                        success=False,
                        error=f"Output file already exists: {out_path}",
                    )
                )
                continue
            out_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            result = process_file(
                path, out_path, detect_only=detect_only, schema=schema
            )
        except (MetadataError, OSError) as e:
            result = FileResult(input_path=path, success=False, error=str(e))
        results.append(result)

    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    validation_failures = [r for r in successful if r.validation_failed]

    logger.info(
        "Directory processing completed: %d successful, %d failed",
        len(successful),
        len(failed),
    )

    if not quiet:
        for result in successful:
            _print_result(result, quiet, show_validation=False)
        click.echo()
        click.echo("Summary:")
        print_success(f"{len(successful)} file(s) successfully read")
    if failed:
        print_error(f"{len(failed)} file(s) failed")
        for result in failed:
            click.echo(f"  - {result.input_path.name}: {result.error}", err=True)
    if validation_failures:
        print_error(f"{len(validation_failures)} file(s) failed validation")
        for result in validation_failures:
            for error in result.validation_errors:
                click.echo(f"  - {result.input_path.name}: {error}", err=True)

    if failed:
        return EXIT_PARSE_FAILED

    if validation_failures:
        return EXIT_VALIDATION_FAILED

    return EXIT_SUCCESS


if __name__ == "__main__":
    main()
