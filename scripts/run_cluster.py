"""
CLI entry point for clustering documents against a taxonomy.

Usage:
    # Cluster text/HTML/PDF files and print the bucket summary
    python scripts/run_cluster.py --taxonomy taxonomy.json --inputs docs/*.txt

    # One document per line of a text file
    python scripts/run_cluster.py --taxonomy taxonomy.json --inputs corpus.txt --split-lines

    # Inline text
    python scripts/run_cluster.py --taxonomy taxonomy.json --text "Oranges have vitamin c"

    # Look up one (category, detail, keyword) entry
    python scripts/run_cluster.py --taxonomy taxonomy.json --inputs corpus.txt \\
        --query fruit citrus vitaminc

    # Save the run report
    python scripts/run_cluster.py --taxonomy taxonomy.json --inputs corpus.txt --report run.json
"""

import sys
import argparse
from dataclasses import replace
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from taxocluster.config.settings import Settings
from taxocluster.exceptions import TaxonomyConfigError
from taxocluster.pipeline.cluster import ClusterBuilder
from taxocluster.pipeline.sources import TextSource, source_for_path
from taxocluster.taxonomy.loader import load_taxonomy
from taxocluster.utils.file_utils import save_json
from taxocluster.utils.logging_config import setup_logging


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Cluster documents into a category/detail/keyword taxonomy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_cluster.py --taxonomy tx.json --inputs a.txt b.html c.pdf
  python scripts/run_cluster.py --taxonomy tx.json --text "lemons are sour"
  python scripts/run_cluster.py --taxonomy tx.json --inputs a.txt --query fruit citrus sour
        """,
    )

    parser.add_argument(
        "--taxonomy", type=Path, required=True,
        help="Taxonomy JSON file",
    )
    parser.add_argument(
        "--inputs", nargs="+", type=Path, default=[],
        help="Input files (.txt, .html, .pdf)",
    )
    parser.add_argument(
        "--text", action="append", default=[],
        help="Inline document text (repeatable)",
    )
    parser.add_argument(
        "--split-lines", action="store_true", dest="split_lines",
        help="Treat every non-blank line of a text file as its own document",
    )
    parser.add_argument(
        "--workers", type=int, default=None,
        help="Worker threads (default: TAXOCLUSTER_MAX_WORKERS or 4)",
    )
    parser.add_argument(
        "--cycle-policy", choices=["document", "token"], default=None,
        dest="cycle_policy",
        help="What a cyclic synonym voids: the whole document or only the token",
    )
    parser.add_argument(
        "--extract-details", action="store_true", dest="extract_details",
        help="Also match detail names appearing literally in the text",
    )
    parser.add_argument(
        "--query", nargs=3, metavar=("CATEGORY", "DETAIL", "KEYWORD"),
        help="Print the entry stored under one key",
    )
    parser.add_argument(
        "--report", type=Path, default=None,
        help="Write the run report as JSON",
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: TAXOCLUSTER_LOG_LEVEL or INFO)",
    )

    args = parser.parse_args(argv)

    # Initialize
    settings = Settings()
    overrides = {}
    if args.workers is not None:
        overrides["max_workers"] = args.workers
    if args.cycle_policy is not None:
        overrides["cycle_policy"] = args.cycle_policy
    if args.extract_details:
        overrides["extract_details"] = True
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    settings = replace(settings, **overrides)
    setup_logging(level=settings.log_level, log_dir=settings.log_dir)

    try:
        taxonomy = load_taxonomy(args.taxonomy)
    except TaxonomyConfigError as e:
        print(f"\nError: {e}")
        return 1

    sources = [source_for_path(p, split_lines=args.split_lines) for p in args.inputs]
    if args.text:
        sources.append(TextSource(args.text))
    if not sources:
        print("\nError: nothing to cluster, pass --inputs or --text")
        return 1

    builder = ClusterBuilder(taxonomy, mapper=lambda entry: entry.document,
                             settings=settings)
    result = builder.make(sources)

    if args.report:
        save_json(result.to_dict(), args.report)
        print(f"\nRun report written to {args.report}")

    # ── Single lookup ────────────────────────────────────────────────
    if args.query:
        category, detail, keyword = args.query
        document = builder.take(category, detail, keyword)
        if document is None:
            print(f"\nNo entry for [{category}, {detail}, {keyword}]")
            return 2
        print(f"\n[{category}, {detail}, {keyword}]")
        print(document)
        return 0

    # ── Bucket summary ───────────────────────────────────────────────
    summary = builder.summary()
    print("\n" + "=" * 70)
    print("  CLUSTER SUMMARY")
    print("=" * 70)
    print(f"\n  Documents: {result.documents_total} "
          f"(classified {result.documents_classified}, "
          f"skipped {result.documents_skipped}, "
          f"cyclic aliases {result.cyclic_alias_documents})")
    for category in sorted(summary):
        print(f"\n  {category}")
        for detail in sorted(summary[category]):
            keywords = ", ".join(summary[category][detail])
            print(f"    {detail:<25} {keywords}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
