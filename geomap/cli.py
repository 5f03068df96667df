"""CLI entry point for the GEO mapping tool."""

import argparse
import logging
from pathlib import Path

from geomap.config import load_config
from geomap.db import GeoDB
from geomap.graph.view import GraphViewState, build_view, set_filters
from geomap.models import PLevel
from geomap.output.analytics import get_content_coverage
from geomap.output.graph_png import render_graph_png
from geomap.output.graph_svg import write_graph_svg
from geomap.output.query_engine import citation_stats, content_stats, roadmap_stats
from geomap.seed import seed_demo
from geomap.sources import DatabaseSource, FixtureSource, load_graph


def _add_view_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--source", choices=["fixture", "db"], default="fixture",
                   help="Where the graph comes from (default: demo fixture)")
    p.add_argument("--focus", default=None, help="Node id to focus, e.g. p1 or prompt:3")
    p.add_argument("--show-all", action="store_true", help="Draw every edge")
    p.add_argument("--p-level", choices=[lvl.value for lvl in PLevel], default=None,
                   help="Only show prompts of this P-level")
    p.add_argument("--category", default=None, help="Only show prompts in this category")
    p.add_argument("--covered", choices=["covered", "uncovered"], default=None,
                   help="Only show covered or uncovered prompts")


def main() -> None:
    parser = argparse.ArgumentParser(description="GEO three-layer network mapper")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    seed_parser = sub.add_parser("seed", help="Load the demo dataset into the database")
    seed_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    seed_parser.add_argument("--force", action="store_true",
                             help="Replace any existing roadmap, content and citations")

    stats_parser = sub.add_parser("stats", help="Show roadmap, content and citation totals")
    stats_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    coverage_parser = sub.add_parser("coverage", help="Show which prompts have content")
    coverage_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    view_parser = sub.add_parser("view", help="Print visible edges and stats for a focus node")
    view_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    _add_view_args(view_parser)

    render_parser = sub.add_parser("render", help="Render the network to SVG or PNG")
    render_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    _add_view_args(render_parser)
    render_parser.add_argument("--format", choices=["svg", "png"], default="svg")
    render_parser.add_argument("-o", "--output", default=None,
                               help="Output file (default: <output_dir>/geo_network.<format>)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config()
    db = GeoDB(config)
    db.init_db()

    try:
        if args.command == "seed":
            print(seed_demo(db, force=args.force))

        elif args.command == "stats":
            roadmap = roadmap_stats(db)
            content = content_stats(db)
            citations = citation_stats(db)
            if not roadmap["total"]:
                print("No roadmap items yet. Run 'geomap seed' to load the demo data.")
                return
            print(f"Roadmap: {roadmap['total']} prompts")
            for level, cnt in roadmap["by_p_level"].items():
                print(f"  {level}: {cnt}")
            print(f"  avg GEO score {roadmap['averages']['geo_score']:.1f}, "
                  f"avg quick-win {roadmap['averages']['quick_win_index']:.1f}")
            print(f"Content: {content['total']} pieces")
            for status, cnt in content["by_status"].items():
                print(f"  {status}: {cnt}")
            print(f"Citations: {citations['total']} ({citations['index_rate']}% AI-indexed)")
            for platform, cnt in citations["by_platform"].items():
                print(f"  {platform}: {cnt}")

        elif args.command == "coverage":
            cov = get_content_coverage(db)
            print(f"Coverage: {cov['covered']}/{cov['total']} prompts ({cov['coverage_rate']}%)")
            if cov["uncovered_items"]:
                print("\nUncovered:")
                for item in cov["uncovered_items"]:
                    print(f"  [{item['p_level']}] {item['prompt']} (GEO {item['geo_score']:.0f})")

        elif args.command in ("view", "render"):
            source = FixtureSource() if args.source == "fixture" else DatabaseSource(db)
            graph = load_graph(source)
            if args.focus and graph.get_node(args.focus) is None:
                print(f"Node not found: {args.focus}")
                return
            state = GraphViewState(focus=args.focus, show_all=args.show_all)
            state = set_filters(
                state, p_level=args.p_level, category=args.category, covered=args.covered,
            )
            view = build_view(graph, state, config.layout, config.render)

            if args.command == "view":
                if view.focus:
                    print(f"Focus: {view.focus.name} ({view.focus.layer.value})")
                    print(f"  contents: {view.stats.content_count}, "
                          f"citation platforms: {view.stats.citation_count}")
                names = {n.id: n.name for n in graph.nodes}
                print(f"\nVisible edges ({len(view.edges)}):")
                for e in view.edges:
                    print(f"  {names.get(e.source, e.source)} --> {names.get(e.target, e.target)}")
            else:
                output = (
                    Path(args.output) if args.output
                    else config.resolved_output_dir / f"geo_network.{args.format}"
                )
                if args.format == "png":
                    render_graph_png(view, output, background=config.render.background)
                else:
                    write_graph_svg(view, output, background=config.render.background)
                print(f"Output: {output}")

        else:
            parser.print_help()
    finally:
        db.close()


if __name__ == "__main__":
    main()
