"""
Command-line interface for topicscope.

Fits topic models from JSON Lines files of precomputed embeddings, inspects
saved models and assigns new documents to their topics.

Each input line is an object with ``text``, ``embedding`` and an optional
``metadata`` mapping:

    {"text": "Nvidia ships new GPU", "embedding": [0.12, -0.4, ...]}

Usage:
    topicscope fit docs.jsonl -o model.json --method kmeans --k 8
    topicscope show model.json
    topicscope assign model.json new_docs.jsonl
"""

import json
import sys
from pathlib import Path
from typing import Any

import click

from topicscope.observability import log_context, setup_logging


def _read_jsonl(path: str) -> tuple[list[str], list[list[float]], list[dict[str, Any]]]:
    """Parse a JSON Lines input file into texts, embeddings and metadata."""
    texts: list[str] = []
    embeddings: list[list[float]] = []
    metadata: list[dict[str, Any]] = []

    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise click.ClickException(f"{path}:{line_no}: invalid JSON ({e.msg})")
            if not isinstance(record, dict) or "embedding" not in record:
                raise click.ClickException(f"{path}:{line_no}: expected an object with 'embedding'")
            texts.append(str(record.get("text", "")))
            embeddings.append(record["embedding"])
            metadata.append(record.get("metadata") or {})

    return texts, embeddings, metadata


def _echo_topics(topics: list[Any]) -> None:
    for topic in topics:
        terms = ", ".join(topic.terms[:5])
        click.echo(f"  {topic.id:4d}  {topic.size:5d} docs  {topic.label or '-':30s}  [{terms}]")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """topicscope - topic discovery over document embeddings."""
    setup_logging("DEBUG" if debug else None)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_path", required=True, type=click.Path(dir_okay=False),
              help="Where to write the model file")
@click.option("--method", type=click.Choice(["hdbscan", "kmeans"]), default=None,
              help="Clustering method (default: hdbscan)")
@click.option("--k", type=int, default=None, help="Number of clusters for kmeans")
@click.option("--min-cluster-size", type=int, default=None, help="HDBSCAN minimum cluster size")
@click.option("--min-samples", type=int, default=None, help="HDBSCAN minimum samples")
@click.option("--labeling", type=click.Choice(["term_based", "llm_based", "hybrid"]), default=None,
              help="Labeling strategy (default: hybrid)")
@click.option("--reduce/--no-reduce", default=None, help="Run UMAP before clustering")
@click.option("--n-components", type=int, default=None, help="Target dimensions for UMAP")
@click.option("--verbose", is_flag=True, help="Log pipeline progress")
def fit(
    input_path: str,
    output_path: str,
    method: str | None,
    k: int | None,
    min_cluster_size: int | None,
    min_samples: int | None,
    labeling: str | None,
    reduce: bool | None,
    n_components: int | None,
    verbose: bool,
) -> None:
    """Discover topics in INPUT_PATH and save the model.

    Options left unset fall back to TOPICS_* environment variables, then
    to the built-in defaults.

    Example:
        topicscope fit docs.jsonl -o model.json
        topicscope fit docs.jsonl -o model.json --method kmeans --k 5 --labeling term_based
    """
    from pydantic import ValidationError

    from topicscope.engine import EngineConfig, TopicEngine

    overrides = {
        "clustering_method": method,
        "k": k,
        "min_cluster_size": min_cluster_size,
        "min_samples": min_samples,
        "labeling_method": labeling,
        "reduce_dimensions": reduce,
        "n_components": n_components,
        "verbose": verbose or None,
    }
    try:
        config = EngineConfig(**{key: v for key, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise click.BadParameter(str(e))

    texts, embeddings, metadata = _read_jsonl(input_path)
    if not texts:
        click.echo("No documents found in input.")
        return
    click.echo(f"Loaded {len(texts)} documents from {input_path}")

    engine = TopicEngine(config)
    with log_context(command="fit", input=input_path, model=output_path):
        try:
            topics = engine.fit(embeddings, texts, metadata)
        except ValueError as e:
            click.echo(click.style(f"Fit failed: {e}", fg="red"))
            sys.exit(1)
        engine.save(output_path)

    stats = engine.get_stats()
    click.echo(f"\nResults:")
    click.echo(f"  Topics discovered: {stats['n_topics']}")
    click.echo(f"  Outliers:          {stats['n_outliers']}")
    click.echo(f"  Coverage:          {stats['coverage']:.1%}")
    if topics:
        click.echo(f"\nTopics:")
        _echo_topics(topics)
    click.echo(click.style(f"\nModel saved to {output_path}", fg="green"))


@main.command()
@click.argument("model_path", type=click.Path(dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the model summary as JSON")
def show(model_path: str, as_json: bool) -> None:
    """Print the configuration and topics of a saved model."""
    from topicscope.engine import ModelFormatError, TopicEngine

    try:
        engine = TopicEngine.load(model_path)
    except (FileNotFoundError, ModelFormatError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"))
        sys.exit(1)

    if as_json:
        summary = {
            "config": engine.config.model_dump(mode="json"),
            "topics": [topic.to_dict() for topic in engine.topics],
        }
        click.echo(json.dumps(summary, indent=2))
        return

    config = engine.config
    click.echo(f"Model: {Path(model_path).name}")
    click.echo(f"  Clustering: {config.clustering_method.value}")
    if config.k is not None:
        click.echo(f"  k:          {config.k}")
    click.echo(f"  Labeling:   {config.labeling_method.value}")
    click.echo(f"  Topics:     {len(engine.topics)}")
    click.echo("")
    _echo_topics(engine.topics)


@main.command()
@click.argument("model_path", type=click.Path(dir_okay=False))
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def assign(model_path: str, input_path: str) -> None:
    """Assign each document in INPUT_PATH to a topic of a saved model.

    Prints one line per document: topic id, topic label and a text preview.
    Documents assigned -1 matched no topic.
    """
    from topicscope.engine import ModelFormatError, TopicEngine

    try:
        engine = TopicEngine.load(model_path)
    except (FileNotFoundError, ModelFormatError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"))
        sys.exit(1)

    texts, embeddings, _ = _read_jsonl(input_path)
    if not texts:
        click.echo("No documents found in input.")
        return

    with log_context(command="assign", input=input_path, model=model_path):
        try:
            assignments = engine.transform(embeddings)
        except ValueError as e:
            click.echo(click.style(f"Assignment failed: {e}", fg="red"))
            sys.exit(1)

    for text, topic_id in zip(texts, assignments):
        topic = engine.get_topic(int(topic_id))
        label = topic.label if topic is not None and topic.label else "(outlier)"
        preview = text[:60].replace("\n", " ")
        click.echo(f"{int(topic_id):4d}  {label:30s}  {preview}")


if __name__ == "__main__":
    main()
