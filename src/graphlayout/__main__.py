"""CLI entry point for graphlayout."""

import json
import logging
import sys

import click
import networkx as nx

from graphlayout.errors import LayoutError
from graphlayout.layout.edges import resolve_edges
from graphlayout.layout.engine import compute


def _parse_value(text: str):
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _parse_params(pairs: tuple[str, ...]) -> dict:
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'", param_hint="--param")
        params[key] = _parse_value(value)
    return params


def _load_graph(text: str) -> nx.Graph:
    data = json.loads(text)
    edges_key = "edges" if "edges" in data else "links"
    return nx.node_link_graph(data, edges=edges_key)


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--layout", "-l", "layout", type=str, default="auto", help="Layout name (default: auto)")
@click.option("--circular", "-c", is_flag=True, help="Request the circular variant of the layout")
@click.option("--param", "-p", "params", multiple=True, help="Layout parameter as KEY=VALUE (repeatable)")
@click.option("--edges", "-e", "with_edges", is_flag=True, help="Include the edge table in the output")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout stages to stderr")
def main(
    input: str | None,
    layout: str,
    circular: bool,
    params: tuple[str, ...],
    with_edges: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Compute a graph layout from node-link JSON and print the node table as JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if input:
        try:
            with open(input) as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        graph = _load_graph(text)
    except (ValueError, KeyError, TypeError, nx.NetworkXError) as e:
        click.echo(f"error: not a node-link graph: {e}", err=True)
        sys.exit(1)

    try:
        result = compute(graph, layout, circular, **_parse_params(params))
        doc = {
            "algorithm": result.algorithm,
            "circular": result.circular,
            "nodes": [_jsonable(row) for row in result.to_records()],
        }
        if with_edges:
            doc["edges"] = [
                _jsonable(
                    {
                        "from": e.from_index,
                        "to": e.to_index,
                        "x": e.x,
                        "y": e.y,
                        "xend": e.xend,
                        "yend": e.yend,
                        "circular": e.circular,
                    }
                )
                for e in resolve_edges(result)
            ]
    except LayoutError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    rendered = json.dumps(doc, indent=2, default=str)
    if output:
        try:
            with open(output, "w") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered)


def _jsonable(row: dict) -> dict:
    return {str(k): v for k, v in row.items()}


if __name__ == "__main__":
    main()
