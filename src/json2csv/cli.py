from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from json2csv.api import convert
from json2csv.data.io import parse_ldjson, read_json_input, write_csv_text
from json2csv.errors import Json2CsvError
from json2csv.pipeline.loader import normalize_data
from json2csv.pipeline.params import infer_fields, load_field_specs

app = typer.Typer(help="json2csv CLI")

logger = logging.getLogger("json2csv")


# -----------------------------
# helpers
# -----------------------------

_ESCAPES = {"\\n": "\n", "\\r": "\r", "\\t": "\t"}


def _unescape(s: Optional[str]) -> Optional[str]:
    """Turn typed escapes ('\\t', '\\r\\n') into the characters."""
    if s is None:
        return None
    for k, v in _ESCAPES.items():
        s = s.replace(k, v)
    return s


def _coerce_value(v: str) -> Any:
    try:
        return json.loads(v)
    except ValueError:
        return v


def _split_list(s: Optional[str]) -> Optional[List[str]]:
    if s is None:
        return None
    return [p.strip() for p in s.split(",") if p.strip()]


def _configure_logging(verbose: bool) -> None:
    if verbose and not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[json2csv] %(message)s"))
        logger.addHandler(h)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_input(input: Optional[Path], ndjson: bool) -> Any:
    if input is None:
        text = typer.get_text_stream("stdin").read()
        return parse_ldjson(text) if ndjson else json.loads(text)
    return read_json_input(str(input.expanduser()), ndjson=ndjson)


def _fail(msg: str) -> None:
    typer.secho(msg, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


# -----------------------------
# commands
# -----------------------------

@app.command("convert")
def convert_cmd(
    input: Optional[Path] = typer.Argument(None, help="JSON/NDJSON input file (stdin when omitted)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write CSV here (stdout when omitted)"),
    fields: Optional[str] = typer.Option(None, "--fields", "-f", help="Comma-separated field paths"),
    fields_file: Optional[Path] = typer.Option(None, "--fields-file", "-F", help="YAML file with field specs"),
    field_names: Optional[str] = typer.Option(None, "--field-names", help="Comma-separated column titles"),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help="Column delimiter; use \\t for TSV"),
    quote: str = typer.Option('"', "--quote", "-q", help="Quote character ('' disables quoting)"),
    double_quotes: Optional[str] = typer.Option(None, "--double-quotes", help="Replacement for embedded quotes"),
    default_value: Optional[str] = typer.Option(None, "--default-value", help="Value for missing cells (JSON literal or text)"),
    header: bool = typer.Option(True, "--header/--no-header", help="Include the column title line"),
    eol: str = typer.Option("", "--eol", help="Extra text appended to every line"),
    newline: str = typer.Option("\\n", "--newline", help="Line separator; use \\r\\n for CRLF"),
    flatten: bool = typer.Option(False, "--flatten", help="Flatten nested objects into dotted keys"),
    unwind: Optional[str] = typer.Option(None, "--unwind", "-u", help="Array path to fan out into rows"),
    excel_strings: bool = typer.Option(False, "--excel-strings", help="Wrap strings as =\"...\" for Excel"),
    include_empty_rows: bool = typer.Option(False, "--include-empty-rows", help="Emit lines for empty objects"),
    ndjson: bool = typer.Option(False, "--ndjson", "-L", help="Input is line-delimited JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps to stderr"),
):
    """Convert JSON or NDJSON to CSV."""
    _configure_logging(verbose)

    if fields and fields_file:
        raise typer.BadParameter("use either --fields or --fields-file, not both")

    opts: Dict[str, Any] = {
        "del": _unescape(delimiter),
        "quotes": quote,
        "hasCSVColumnTitle": header,
        "eol": _unescape(eol),
        "newLine": _unescape(newline),
        "flatten": flatten,
        "unwindPath": unwind,
        "excelStrings": excel_strings,
        "includeEmptyRows": include_empty_rows,
    }
    if double_quotes is not None:
        opts["doubleQuotes"] = double_quotes
    if default_value is not None:
        opts["defaultValue"] = _coerce_value(default_value)

    try:
        if fields_file:
            opts["fields"] = load_field_specs(fields_file)
        elif fields:
            opts["fields"] = _split_list(fields)
        if field_names:
            opts["fieldNames"] = _split_list(field_names)

        data = _load_input(input, ndjson)
        csv_text = convert(data, opts)
    except (Json2CsvError, json.JSONDecodeError, FileNotFoundError) as e:
        _fail(f"Error: {e}")

    if output is None:
        typer.echo(csv_text)
        return
    output = output.expanduser().resolve()
    write_csv_text(str(output), csv_text)
    typer.secho(f"Wrote {output}", fg=typer.colors.GREEN)


@app.command("fields")
def fields_cmd(
    input: Optional[Path] = typer.Argument(None, help="JSON/NDJSON input file (stdin when omitted)"),
    flatten: bool = typer.Option(False, "--flatten", help="Flatten nested objects into dotted keys"),
    ndjson: bool = typer.Option(False, "--ndjson", "-L", help="Input is line-delimited JSON"),
):
    """List the fields that would be inferred from the input."""
    try:
        rows = normalize_data(_load_input(input, ndjson), flatten=flatten)
        names = infer_fields(rows)
    except (Json2CsvError, json.JSONDecodeError, FileNotFoundError) as e:
        _fail(f"Error: {e}")
    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()
