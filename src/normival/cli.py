import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import srsly
import typer
from pydantic import ValidationError

from normival.core.bounds import Bound, RawInterval
from normival.core.errors import NormivalError
from normival.core.presets import domain_names, get_domain
from normival.core.scalars import ScalarDomain
from normival.interval import Interval
from normival.parse import parse_interval, parse_selection
from normival.render import format_interval, format_selection
from normival.selection import Selection

logger = logging.getLogger(__name__)

app = typer.Typer(help="Normalize intervals and combine interval selections.")

DomainOption = Annotated[
    str,
    typer.Option(
        "--domain",
        "-d",
        help=f"Scalar domain: {', '.join(domain_names())}",
    ),
]
JsonOption = Annotated[
    bool, typer.Option("--json", help="Emit one JSON object per result")
]
AsciiOption = Annotated[
    bool, typer.Option("--ascii", help="Use ASCII symbols in notation")
]


class CombineOp(str, Enum):
    UNION = "union"
    INTERSECT = "intersect"
    SUBTRACT = "subtract"
    XOR = "xor"


class _RecordError(Exception):
    def __init__(self, *, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(reason)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def _resolve_domain(name: str) -> ScalarDomain:
    try:
        return get_domain(name)
    except ValueError as err:
        raise typer.BadParameter(str(err)) from err


def _parse_interval_arg(text: str, domain: ScalarDomain) -> Interval:
    try:
        return parse_interval(text, domain)
    except NormivalError as err:
        raise typer.BadParameter(str(err)) from err


def _parse_selection_arg(text: str, domain: ScalarDomain) -> Selection:
    try:
        return parse_selection(text, domain)
    except NormivalError as err:
        raise typer.BadParameter(str(err)) from err


def _interval_record(interval: Interval, ascii_only: bool) -> dict[str, Any]:
    record = interval.normalized.model_dump(mode="json")
    record["domain"] = interval.domain.name
    record["notation"] = format_interval(interval, ascii_only)
    return record


def _selection_record(
    selection: Selection, ascii_only: bool
) -> dict[str, Any]:
    return {
        "domain": selection.domain.name,
        "notation": format_selection(selection, ascii_only),
        "intervals": [
            interval.normalized.model_dump(mode="json")
            for interval in selection.to_intervals()
        ],
    }


def _echo_selection(
    selection: Selection, as_json: bool, ascii_only: bool
) -> None:
    if as_json:
        typer.echo(srsly.json_dumps(_selection_record(selection, ascii_only)))
    else:
        typer.echo(format_selection(selection, ascii_only))


def _bound_from_record(data: Any, domain: ScalarDomain) -> Bound:
    bound = Bound.model_validate(data)
    # JSON has no date or decimal type; such values arrive as strings.
    if isinstance(bound.value, str) and domain.name != "str":
        return Bound(kind=bound.kind, value=domain.parse_value(bound.value))
    return bound


def _interval_from_record(record: Any, domain: ScalarDomain) -> Interval:
    if not isinstance(record, dict):
        raise ValueError("record must be a JSON object")
    if "interval" in record:
        text = record["interval"]
        if not isinstance(text, str):
            raise ValueError("'interval' must be a notation string")
        return parse_interval(text, domain)
    if "lower" in record and "upper" in record:
        raw = RawInterval(
            lower=_bound_from_record(record["lower"], domain),
            upper=_bound_from_record(record["upper"], domain),
        )
        return Interval.from_raw(raw, domain)
    raise ValueError("expected an 'interval' key or 'lower' and 'upper'")


def _read_intervals(input_file: Path, domain: ScalarDomain) -> list[Interval]:
    intervals = []
    try:
        records = list(srsly.read_jsonl(input_file))
    except ValueError as err:
        raise _RecordError(
            line_number=0, reason=f"unreadable JSONL ({err})"
        ) from err
    for line_number, record in enumerate(records, start=1):
        try:
            intervals.append(_interval_from_record(record, domain))
        except ValidationError as err:
            first_error = err.errors(include_url=False)[0]
            loc = ".".join(str(item) for item in first_error["loc"])
            raise _RecordError(
                line_number=line_number,
                reason=f"invalid bound at '{loc}': {first_error['msg']}",
            ) from err
        except (ValueError, NormivalError) as err:
            raise _RecordError(
                line_number=line_number, reason=str(err)
            ) from err
    return intervals


@app.command()
def normalize(
    texts: Annotated[
        list[str], typer.Argument(help="Intervals in interval notation")
    ],
    domain: DomainOption = "int",
    as_json: JsonOption = False,
    ascii_only: AsciiOption = False,
) -> None:
    """Print the canonical form of each interval."""
    scalar_domain = _resolve_domain(domain)
    for text in texts:
        interval = _parse_interval_arg(text, scalar_domain)
        if as_json:
            record = _interval_record(interval, ascii_only)
            typer.echo(srsly.json_dumps(record))
        else:
            typer.echo(format_interval(interval, ascii_only))


@app.command()
def combine(
    left: Annotated[str, typer.Argument(help="Left selection")],
    right: Annotated[str, typer.Argument(help="Right selection")],
    op: Annotated[
        CombineOp,
        typer.Option("--op", help="union, intersect, subtract, or xor"),
    ] = CombineOp.UNION,
    domain: DomainOption = "int",
    as_json: JsonOption = False,
    ascii_only: AsciiOption = False,
) -> None:
    """Combine two selections with a set operation."""
    scalar_domain = _resolve_domain(domain)
    lhs = _parse_selection_arg(left, scalar_domain)
    rhs = _parse_selection_arg(right, scalar_domain)
    match op:
        case CombineOp.UNION:
            result = lhs.union_with(rhs)
        case CombineOp.INTERSECT:
            result = lhs.intersect_with(rhs)
        case CombineOp.SUBTRACT:
            result = lhs.subtract(rhs)
        case CombineOp.XOR:
            result = lhs.symmetric_difference(rhs)
    _echo_selection(result, as_json, ascii_only)


@app.command()
def complement(
    text: Annotated[str, typer.Argument(help="Selection to complement")],
    domain: DomainOption = "int",
    as_json: JsonOption = False,
    ascii_only: AsciiOption = False,
) -> None:
    """Print every point of the domain not in the selection."""
    scalar_domain = _resolve_domain(domain)
    selection = _parse_selection_arg(text, scalar_domain)
    _echo_selection(selection.complement(), as_json, ascii_only)


@app.command()
def contains(
    text: Annotated[str, typer.Argument(help="Selection to test")],
    point: Annotated[str, typer.Argument(help="Point to look up")],
    domain: DomainOption = "int",
) -> None:
    """Exit 0 when the selection contains the point, 1 otherwise."""
    scalar_domain = _resolve_domain(domain)
    selection = _parse_selection_arg(text, scalar_domain)
    try:
        value = scalar_domain.parse_value(point)
        found = selection.contains(value)
    except (TypeError, ValueError) as err:
        raise typer.BadParameter(f"invalid point {point!r}: {err}") from err
    typer.echo("true" if found else "false")
    raise typer.Exit(0 if found else 1)


@app.command()
def merge(
    input_file: Annotated[Path, typer.Argument(help="Input JSONL file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output JSONL file"),
    ] = None,
    domain: DomainOption = "int",
    ascii_only: AsciiOption = False,
) -> None:
    """Union the intervals of a JSONL file into disjoint intervals."""
    scalar_domain = _resolve_domain(domain)
    try:
        intervals = _read_intervals(input_file, scalar_domain)
    except _RecordError as err:
        where = f" at line {err.line_number}" if err.line_number else ""
        typer.echo(
            f"Error: invalid JSONL row in {input_file}{where}: {err.reason}",
            err=True,
        )
        raise typer.Exit(1) from err

    selection = Selection.from_intervals(intervals, scalar_domain)
    records = [
        _interval_record(interval, ascii_only)
        for interval in selection.to_intervals()
    ]
    logger.debug(
        "merged %d records into %d intervals", len(intervals), len(records)
    )
    if output is None:
        for record in records:
            typer.echo(srsly.json_dumps(record))
        return
    srsly.write_jsonl(output, records)
    typer.echo(f"Wrote {len(records)} intervals to {output}")
