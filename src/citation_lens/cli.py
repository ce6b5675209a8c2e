"""CLI entry point for Citation Lens."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from citation_lens.analyzer import CitationNetworkAnalyzer
from citation_lens.config import get_config, load_config
from citation_lens.exceptions import CitationLensError
from citation_lens.export.formats import get_exporter
from citation_lens.models import DateRange, NetworkFilter
from citation_lens.store.file import FilePaperStore
from citation_lens.utils import truncate_text

if TYPE_CHECKING:
    from citation_lens.analysis.graph import CitationGraph

app = typer.Typer(
    name="citation-lens",
    help="Citation network analysis for research paper collections.",
    no_args_is_help=True,
)

DataOption = Annotated[
    Path | None,
    typer.Option("--data", "-d", help="Dataset file (JSON or YAML) with papers and citations"),
]
ConfigOption = Annotated[Path | None, typer.Option("--config", "-c", help="Path to config file")]
CategoriesOption = Annotated[
    str | None,
    typer.Option("--categories", help="Comma-separated list of categories"),
]
StartOption = Annotated[str | None, typer.Option("--start", help="Earliest publication date (YYYY-MM-DD)")]
EndOption = Annotated[str | None, typer.Option("--end", help="Latest publication date (YYYY-MM-DD)")]
MinCitationsOption = Annotated[int, typer.Option("--min-citations", help="Minimum citation count")]
MaxNodesOption = Annotated[int | None, typer.Option("--max-nodes", "-n", help="Maximum number of papers")]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show log messages")]


def _setup(config_file: Path | None, verbose: bool) -> None:
    if config_file:
        load_config(config_file)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _make_filter(
    categories: str | None,
    start: str | None,
    end: str | None,
    min_citations: int,
    max_nodes: int | None,
) -> NetworkFilter:
    try:
        date_range = None
        if start or end:
            date_range = DateRange(start=start or date.min, end=end or date.max)

        return NetworkFilter(
            categories=[c.strip() for c in categories.split(",")] if categories else [],
            date_range=date_range,
            min_citations=min_citations,
            max_nodes=max_nodes or get_config().default_max_nodes,
        )
    except ValueError as e:
        typer.echo(f"Invalid filter: {e}", err=True)
        raise typer.Exit(1) from e


def _make_analyzer(data: Path | None) -> CitationNetworkAnalyzer:
    cfg = get_config()
    path = data or (Path(cfg.data_path) if cfg.data_path else None)
    if path is None:
        typer.echo("Error: no dataset given. Use --data or set data_path in the config file.", err=True)
        raise typer.Exit(1)
    return CitationNetworkAnalyzer(FilePaperStore(path), config=cfg)


def _build(analyzer: CitationNetworkAnalyzer, network_filter: NetworkFilter) -> CitationGraph:
    try:
        return asyncio.run(analyzer.build(network_filter))
    except (CitationLensError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, default=str))


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.command()
def build(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Build a citation network and summarize it."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    if output_json:
        _echo_json(graph.to_dict())
        return

    typer.echo(f"\nCitation network: {graph.node_count} papers, {graph.edge_count} citations\n")
    for i, node in enumerate(list(graph.nodes.values())[:10], 1):
        typer.echo(f"{i}. {truncate_text(node.title, 80)} ({node.year}) - {node.citation_count} citations")


@app.command()
def metrics(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    top: Annotated[int, typer.Option("--top", "-t", help="Papers to list per ranking")] = 5,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Show network metrics (degree, authority, betweenness, clustering)."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    try:
        basic = analyzer.basic_metrics(graph)
        snapshot = analyzer.metrics(graph)
    except CitationLensError as e:
        raise _fail(e) from e

    if output_json:
        _echo_json(
            {
                "basic": asdict(basic),
                "centrality": {
                    "in_degree": snapshot.in_degree,
                    "out_degree": snapshot.out_degree,
                    "authority": snapshot.authority,
                    "betweenness": snapshot.betweenness,
                },
                "clustering": {"local": snapshot.clustering, "global": snapshot.global_clustering},
            }
        )
        return

    typer.echo("\nNetwork metrics:")
    typer.echo(f"  Papers: {basic.node_count}")
    typer.echo(f"  Citations: {basic.edge_count}")
    typer.echo(f"  Density: {basic.density:.4f}")
    typer.echo(f"  Avg in-degree: {basic.avg_in_degree:.2f} (max {basic.max_in_degree})")
    typer.echo(f"  Avg out-degree: {basic.avg_out_degree:.2f} (max {basic.max_out_degree})")
    typer.echo(f"  Global clustering: {snapshot.global_clustering:.4f}")

    for label, scores in (("Authority", snapshot.authority), ("Betweenness (approximate)", snapshot.betweenness)):
        typer.echo(f"\n{label}:")
        ranked = sorted(scores.items(), key=lambda x: x[1], reverse=True)[:top]
        for paper_id, score in ranked:
            typer.echo(f"  {score:.4f}  {truncate_text(graph.nodes[paper_id].title, 70)}")


@app.command()
def influence(
    paper_id: Annotated[str, typer.Argument(help="Paper identifier")],
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the network metrics of one paper."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    try:
        node_metrics = analyzer.influence(graph, paper_id)
    except (CitationLensError, ValueError) as e:
        raise _fail(e) from e

    _echo_json(asdict(node_metrics))


@app.command()
def components(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Show the connected components of the network."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    try:
        report = analyzer.components(graph)
    except CitationLensError as e:
        raise _fail(e) from e

    if output_json:
        _echo_json(asdict(report))
        return

    typer.echo(f"\n{report.count} components, largest has {report.largest} papers")
    typer.echo(f"  Sizes: {', '.join(str(s) for s in report.sizes[:20])}")


@app.command()
def communities(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Detect research communities."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    try:
        report = analyzer.communities(graph)
    except CitationLensError as e:
        raise _fail(e) from e

    if output_json:
        _echo_json({"count": report.count, "communities": [asdict(c) for c in report.communities]})
        return

    typer.echo(f"\nFound {report.count} communities\n")
    for community in report.communities:
        cats = ", ".join(name for name, _ in community.top_categories) or "none"
        typer.echo(f"Community {community.id}: {community.size} papers")
        typer.echo(f"   Categories: {cats}")
        typer.echo(f"   Years: {community.time_span.start}-{community.time_span.end}")
        typer.echo(f"   Avg citations: {community.avg_citation_count:.1f}")
        if community.top_papers:
            typer.echo(f"   Top paper: {truncate_text(community.top_papers[0].title, 70)}")
        typer.echo()


@app.command()
def patterns(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Analyze temporal, categorical and sentiment citation patterns."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))
    report = analyzer.patterns(graph)

    if output_json:
        data_out = asdict(report)
        data_out["categorical"]["cross_disciplinary_count"] = report.categorical.cross_disciplinary_count
        _echo_json(data_out)
        return

    temporal = report.temporal
    typer.echo("\nTemporal:")
    if temporal.avg_citation_lag is not None:
        typer.echo(f"  Avg citation lag: {temporal.avg_citation_lag:.2f} years")
    else:
        typer.echo("  Avg citation lag: n/a")
    if temporal.negative_lag_count:
        typer.echo(f"  Citations to later papers (excluded): {temporal.negative_lag_count}")

    typer.echo("\nCategorical:")
    typer.echo(f"  Cross-disciplinary category pairs: {report.categorical.cross_disciplinary_count}")
    typer.echo(f"  Citations with no shared category: {report.categorical.disjoint_edge_count}")

    typer.echo("\nSentiment:")
    for sentiment, count in report.sentiment.overall.items():
        typer.echo(f"  {sentiment}: {count}")


@app.command()
def seminal(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    threshold: Annotated[
        int | None, typer.Option("--threshold", help="Minimum citations for a seminal paper")
    ] = None,
    min_age: Annotated[int | None, typer.Option("--min-age", help="Minimum age in years")] = None,
    top: Annotated[int | None, typer.Option("--top", "-t", help="Maximum papers to select")] = None,
    config_file: ConfigOption = None,
    output_json: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Identify seminal papers and flag them in the dataset."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))

    try:
        papers = asyncio.run(
            analyzer.identify_seminal(graph, min_citations=threshold, min_age=min_age, top_n=top)
        )
    except CitationLensError as e:
        raise _fail(e) from e

    if output_json:
        _echo_json([asdict(p) for p in papers])
        return

    typer.echo(f"\nFound {len(papers)} seminal papers\n")
    for i, item in enumerate(papers, 1):
        typer.echo(f"{i}. {truncate_text(item.paper.title, 80)} ({item.paper.year})")
        typer.echo(f"   Score: {item.score:.2f} | Citations: {item.paper.citation_count} | In-degree: {item.in_degree}")


@app.command()
def export(
    data: DataOption = None,
    categories: CategoriesOption = None,
    start: StartOption = None,
    end: EndOption = None,
    min_citations: MinCitationsOption = 0,
    max_nodes: MaxNodesOption = None,
    format: Annotated[str, typer.Option("--format", "-f", help="json, gexf or graphml")] = "json",
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    view_nodes: Annotated[
        int | None, typer.Option("--view-nodes", help="Export only the first N papers and their citations")
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Export the network as JSON, GEXF or GraphML."""
    _setup(config_file, verbose)
    analyzer = _make_analyzer(data)
    graph = _build(analyzer, _make_filter(categories, start, end, min_citations, max_nodes))
    exporter = get_exporter(format)

    try:
        if view_nodes is not None:
            graph = analyzer.view(graph, view_nodes)
        if output:
            exporter.to_file(graph, output)
            typer.echo(f"Network saved to: {output}")
            typer.echo(f"  - Papers: {graph.node_count}")
            typer.echo(f"  - Citations: {graph.edge_count}")
        else:
            typer.echo(exporter.export(graph))
    except (CitationLensError, ValueError) as e:
        raise _fail(e) from e


@app.command(name="config")
def config_show(
    config_file: ConfigOption = None,
) -> None:
    """Show current configuration."""
    if config_file:
        load_config(config_file)

    cfg = get_config()

    typer.echo("Current configuration:")
    typer.echo(f"  Dataset: {cfg.data_path or 'not set'}")
    typer.echo(f"  Default max nodes: {cfg.default_max_nodes}")
    typer.echo(f"  Authority iterations: {cfg.analysis.authority_iterations}")
    typer.echo(f"  Damping: {cfg.analysis.damping}")
    typer.echo(f"  Betweenness paths per pair: {cfg.analysis.max_shortest_paths}")
    typer.echo(f"  Betweenness max path length: {cfg.analysis.max_path_length}")
    typer.echo(f"  Community similarity threshold: {cfg.analysis.similarity_threshold}")
    typer.echo(f"  Min community size: {cfg.analysis.min_community_size}")
    typer.echo(
        f"  Seminal: >= {cfg.seminal.min_citations} citations, >= {cfg.seminal.min_age} years, top {cfg.seminal.top_n}"
    )


if __name__ == "__main__":
    app()
