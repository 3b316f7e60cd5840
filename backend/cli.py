"""
Story Graph CLI
===============

Drive a viewer session from the terminal.

COMMANDS:
- layout:   Per-node depth and coordinates
- mermaid:  Mermaid text of the graph
- inspect:  Click a node, follow options, print the dialog
- export:   Write the JPEG page and open it

USAGE:
    python -m backend.cli [--endpoint URL | --file PATH] COMMAND [ARGS]
"""
import argparse
import asyncio
import logging
import sys

from .engine import StoryGraphSession, StoryGraphConfig
from .contracts.events import NodeClicked, OptionActivated
from ingestion import FileStoryFetcher, FetchConfig
from frontend.mapper import ViewMapper
from frontend.visualization.mermaid import generate_mermaid


def build_session(args) -> StoryGraphSession:
    config = StoryGraphConfig.from_env()
    if args.endpoint:
        config.fetch = FetchConfig(endpoint=args.endpoint)
    if args.file:
        return StoryGraphSession(config, fetcher=FileStoryFetcher(args.file))
    return StoryGraphSession(config)


def load(args) -> StoryGraphSession:
    session = build_session(args)
    mapper = ViewMapper()
    print(f"[*] {mapper.map_loading(session.phase).message}")
    state = asyncio.run(session.load())
    banner = mapper.map_error(state.error_message)
    if banner:
        print(f"[!] {banner.message}")
        sys.exit(1)
    print(f"    Loaded {len(state.stories)} stories.")
    return session


def cmd_layout(args):
    """Print depth and position of every node, layer by layer."""
    session = load(args)
    layout = session.layout
    placements = layout.placement_map()
    labels = {n.id: n.label for n in session.graph.nodes}

    for depth, layer in enumerate(layout.layers):
        tag = " (overflow)" if layout.overflow and layer == layout.overflow else ""
        print(f"--- depth {depth}{tag}")
        for node_id in layer:
            p = placements[node_id]
            print(f"  {node_id:<12} x={p.x:9.2f} y={p.y:9.2f}  {labels[node_id]}")


def cmd_mermaid(args):
    """Print the Mermaid flowchart."""
    session = load(args)
    print(generate_mermaid(session.graph, root_id=session.layout.root_id))


def cmd_inspect(args):
    """Click a node, then follow each --follow target in turn."""
    session = load(args)
    snapshot = session.dispatch(NodeClicked(args.node_id))
    if not snapshot.is_open:
        print(f"[!] No story with id {args.node_id}")
        return

    for target in args.follow or []:
        before = snapshot.story_id
        snapshot = session.dispatch(OptionActivated(target))
        if snapshot.story_id == before and target != before:
            print(f"[!] Option target {target} has no story; staying on {before}")

    dialog = ViewMapper().map_selection(snapshot)
    print(f"=== {dialog.title} [{dialog.story_id}]")
    if dialog.content:
        print(dialog.content)
    print()
    if not dialog.options:
        print("(no options)")
    for option in dialog.options:
        print(f"  -> {option.label}  [{option.target}]")


def cmd_export(args):
    """Rasterize the diagram and open it."""
    session = load(args)
    if args.no_open:
        print(session.export_data_uri())
        return

    outcome = session.export()
    if outcome.html_path:
        print(f"[*] Wrote {outcome.html_path}")
    if outcome.notice:
        print(f"[!] {outcome.notice.message}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Story graph viewer")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--endpoint", help="Story endpoint URL (default: STORYGRAPH_ENDPOINT or built-in)")
    source.add_argument("--file", help="Read stories from a local JSON file instead")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("layout", help="Print node depths and positions")
    subparsers.add_parser("mermaid", help="Print Mermaid text")

    inspect_parser = subparsers.add_parser("inspect", help="Inspect a story")
    inspect_parser.add_argument("node_id")
    inspect_parser.add_argument("--follow", action="append", help="Option target to jump to (repeatable)")

    export_parser = subparsers.add_parser("export", help="Export the diagram as JPEG")
    export_parser.add_argument("--no-open", action="store_true", help="Print the data URI instead of opening it")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "layout": cmd_layout,
        "mermaid": cmd_mermaid,
        "inspect": cmd_inspect,
        "export": cmd_export,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
