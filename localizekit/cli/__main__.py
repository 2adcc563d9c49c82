from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from localizekit.config.loader import ConfigError, load_config, resolve_config_path
from localizekit.logging.init import log_summary, setup_logging
from localizekit.logging.sink import LoggerSink
from localizekit.models.documents import LangJsonInput
from localizekit.models.errors import ParseError
from localizekit.models.options import SEPARATORS, OutputFormat, ParseOptions
from localizekit.services.export import merge_jsons_to_table, parse_lang_json_inputs, table_to_csv, table_to_excel
from localizekit.services.header import validate_header
from localizekit.services.lint import lint_table
from localizekit.services.orchestrator import ProcessingError, open_row_source, process_all
from localizekit.services.parser import excel_to_csv, parse_table, rewrite_key_separator_in_csv
from localizekit.services.serialize import serialize_result
from localizekit.services.summary import render_summary_line

"""CLI entrypoint.

Subcommands:
- parse              table (.csv/.xlsx/.xls) -> per-language documents (JSON/YAML)
- languages          header languages of a table
- merge              per-language JSON documents -> one CSV/xlsx table
- excel-to-csv       first sheet of a workbook as CSV
- rewrite-separator  replace key separators in a CSV key column
- lint               report every data problem of a table
- batch              convert a whole directory (config file driven)
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (missing file is not an error)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _add_option_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--separator", default=".", choices=SEPARATORS, help="Key path separator")
    p.add_argument("--flat", action="store_true", help="Keep keys flat instead of nesting them")
    p.add_argument("--no-escapes", action="store_true", help="Keep escape sequences literal")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="localizekit", description="Localization table <-> JSON converter")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    parse_p = sub.add_parser("parse", help="Convert a table into per-language documents")
    parse_p.add_argument("file", type=Path)
    _add_option_flags(parse_p)
    parse_p.add_argument("--format", dest="output_format", default="json", choices=["json", "yaml", "i18n"])
    parse_p.add_argument("--indent", type=int, default=2)
    parse_p.add_argument("--output", "-o", type=Path)

    lang_p = sub.add_parser("languages", help="List the languages of a table header")
    lang_p.add_argument("file", type=Path)

    merge_p = sub.add_parser("merge", help="Merge per-language JSON documents into one table")
    merge_p.add_argument("documents", nargs="*", metavar="LANG=PATH", help="Language document, e.g. en=en.json")
    merge_p.add_argument("--inputs", type=Path, help='JSON file: [{"language": ..., "content": ...}]')
    merge_p.add_argument("--separator", default=".", choices=SEPARATORS)
    merge_p.add_argument("--output", "-o", type=Path, help="Write CSV, or xlsx when the suffix is .xlsx")

    x2c_p = sub.add_parser("excel-to-csv", help="Render the first sheet of a workbook as CSV")
    x2c_p.add_argument("file", type=Path)
    x2c_p.add_argument("--output", "-o", type=Path)

    rw_p = sub.add_parser("rewrite-separator", help="Rewrite key separators of a CSV table")
    rw_p.add_argument("file", type=Path)
    rw_p.add_argument("--to", dest="target", required=True, choices=SEPARATORS)
    rw_p.add_argument("--output", "-o", type=Path)

    lint_p = sub.add_parser("lint", help="Report every data problem of a table")
    lint_p.add_argument("file", type=Path)
    _add_option_flags(lint_p)

    batch_p = sub.add_parser("batch", help="Convert every table of the configured directory")
    batch_p.add_argument("--config", type=Path, help="Config file (default: $LOCALIZEKIT_CONFIG or localizekit.yml)")

    return p.parse_args(argv)


def _options_from_args(args: argparse.Namespace) -> ParseOptions:
    return ParseOptions(
        separator=args.separator,
        nested=not args.flat,
        output_format=OutputFormat.parse(getattr(args, "output_format", "json")),
        process_escapes=not args.no_escapes,
    )


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
    else:
        try:
            output.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ParseError.io_error(f"failed to write {output}: {e}") from e


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError.io_error(f"failed to read {path}: {e}") from e


def _merge_inputs(args: argparse.Namespace) -> list[LangJsonInput]:
    inputs: list[LangJsonInput] = []
    if args.inputs is not None:
        inputs.extend(parse_lang_json_inputs(_read_text(args.inputs)))
    for spec in args.documents:
        lang, sep, path = spec.partition("=")
        if not sep or not lang or not path:
            raise ParseError.unknown(f"Invalid document argument '{spec}'").with_suggestion(
                "Use LANG=PATH, e.g. en=locales/en.json"
            )
        inputs.append(LangJsonInput(language=lang, content=_read_text(Path(path))))
    return inputs


def _cmd_parse(args: argparse.Namespace) -> int:
    options = _options_from_args(args)
    result = parse_table(open_row_source(args.file), options, LoggerSink())
    _emit(serialize_result(result, options.output_format, indent=args.indent), args.output)
    return EXIT_SUCCESS_ALL


def _cmd_languages(args: argparse.Namespace) -> int:
    header = validate_header(open_row_source(args.file).header(), LoggerSink())
    _emit("\n".join(header.languages), None)
    return EXIT_SUCCESS_ALL


def _cmd_merge(args: argparse.Namespace) -> int:
    table = merge_jsons_to_table(_merge_inputs(args), args.separator)
    if args.output is not None and args.output.suffix.lower() == ".xlsx":
        data = table_to_excel(table)
        try:
            args.output.write_bytes(data)
        except OSError as e:
            raise ParseError.io_error(f"failed to write {args.output}: {e}") from e
    else:
        _emit(table_to_csv(table), args.output)
    return EXIT_SUCCESS_ALL


def _cmd_excel_to_csv(args: argparse.Namespace) -> int:
    try:
        data = args.file.read_bytes()
    except OSError as e:
        raise ParseError.io_error(f"failed to read {args.file}: {e}") from e
    _emit(excel_to_csv(data), args.output)
    return EXIT_SUCCESS_ALL


def _cmd_rewrite_separator(args: argparse.Namespace) -> int:
    _emit(rewrite_key_separator_in_csv(_read_text(args.file), args.target), args.output)
    return EXIT_SUCCESS_ALL


def _cmd_lint(args: argparse.Namespace, logger: logging.Logger) -> int:
    findings = lint_table(open_row_source(args.file), _options_from_args(args), LoggerSink())
    for finding in findings:
        logger.warning(str(finding))
    logger.info(f"lint: {args.file.name} findings={len(findings)}")
    return EXIT_PARTIAL_FAILURE if findings else EXIT_SUCCESS_ALL


def _cmd_batch(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {cfg.source_directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    # None only: an empty list must not pull in sys.argv (pytest flags)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    if args.debug:
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))

    try:
        if args.command == "parse":
            return _cmd_parse(args)
        if args.command == "languages":
            return _cmd_languages(args)
        if args.command == "merge":
            return _cmd_merge(args)
        if args.command == "excel-to-csv":
            return _cmd_excel_to_csv(args)
        if args.command == "rewrite-separator":
            return _cmd_rewrite_separator(args)
        if args.command == "lint":
            return _cmd_lint(args, logger)
        return _cmd_batch(args, logger)
    except ParseError as e:
        logger.error(str(e))
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
