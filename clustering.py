"""Example usage of the corpus similarity pipeline.

This script compares speakers by the words they use. Speakers whose
speeches share vocabulary in similar proportions end up in the same cluster.
"""

import logging

from docsim import CorpusPipeline, PipelineConfig, filter_pairs, top_terms

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)


# Example speeches, several per speaker
EXAMPLE_DOCS = [
    {"id": "1", "group": "lincoln", "text": "Four score and seven years ago our fathers brought forth a new nation."},
    {"id": "2", "group": "lincoln", "text": "A house divided against itself cannot stand.\nThis nation cannot endure."},
    {"id": "3", "group": "kennedy", "text": "Ask not what your country can do for you, ask what you can do for your country."},
    {"id": "4", "group": "kennedy", "text": "We choose to go to the moon in this decade."},
    {"id": "5", "group": "roosevelt", "text": "The only thing we have to fear is fear itself."},
    {"id": "6", "group": "roosevelt", "text": "This nation asks for action, and action now."},
    {"id": "7", "group": "obama", "text": "Yes we can. Our nation can change, and our country can heal."},
]


def main():
    """Run the pipeline on the example speeches."""

    config = PipelineConfig(
        n_clusters=2,
        linkage="average",
        show_progress=True,
    )
    pipeline = CorpusPipeline(config)

    print(f"Clustering {len(EXAMPLE_DOCS)} documents...")
    result = pipeline.run(EXAMPLE_DOCS)

    print("\nMost frequent terms:")
    for group, terms in top_terms(result.term_counts, n=3).items():
        print(f"  {group}: {', '.join(f'{t} ({c})' for t, c in terms)}")

    print("\nSimilarity involving lincoln:")
    for pair in filter_pairs(result.pairs, "lincoln"):
        print(f"  {pair.group_a} / {pair.group_b}: {pair.score:.3f}")

    print("\nDendrogram merges:")
    for merge in result.dendrogram.merges:
        print(f"  {merge.left} + {merge.right} at {merge.height:.3f} (size {merge.size})")

    print(f"\nFound {result.assignment.k} clusters:\n")
    for cluster in range(1, result.assignment.k + 1):
        print(f"Cluster {cluster}: {', '.join(result.assignment.members(cluster))}")

    pipeline.save_results("clusters.json")
    print("\nResults saved to clusters.json")


if __name__ == "__main__":
    main()
