#!/usr/bin/env python3
"""
ffbookmarks - Firefox bookmark backup tool

Inspect a Firefox bookmarks backup, export a folder to CSV or HTML and
report duplicate bookmarks.
"""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ffbookmarks.config import init_config, get_config
from ffbookmarks.dedup import find_duplicates, get_duplicate_stats, remove_duplicates
from ffbookmarks.errors import FFBookmarksError
from ffbookmarks.exporters import export_file, format_csv
from ffbookmarks.models import Bookmark
from ffbookmarks.parser import parse_bookmarks_from_file

logger = logging.getLogger(__name__)


console = Console()

FORMAT_SUFFIXES = {
    ".csv": "csv",
    ".html": "html",
    ".htm": "html",
}


def setup_logging(level: str):
    """Send package log records to stderr through rich."""
    package_logger = logging.getLogger("ffbookmarks")
    package_logger.setLevel(str(level).upper())
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)


def select_bookmarks(root: Bookmark, folder: Optional[str] = None,
                     indices: Optional[List[int]] = None, recursive: bool = False) -> List[Bookmark]:
    """
    Pick the bookmarks a command works on.

    Args:
        root: Root of the parsed tree
        folder: Title of a folder to select (searched below the indexed node)
        indices: Child positions to follow from the root, e.g. [2] for the
            third top-level folder
        recursive: Return every leaf below the selected folder instead of
            its direct children

    Returns:
        Direct children (or all leaves) of the selected folder. With no
        selection, every leaf of the tree.
    """
    node = root
    for i in indices or []:
        if not node.is_container or not 0 <= i < len(node.children):
            raise ValueError(f"No child at index {i} in '{node.title}'")
        node = node.children[i]

    if folder is not None:
        found = node.find_folder(folder)
        if found is None:
            raise ValueError(f"Folder not found: {folder}")
        node = found

    if node is root and not indices:
        return list(root.leaves())
    if not node.is_container:
        return [node]
    if recursive:
        return list(node.leaves())
    return list(node.children)


def load_selection(args) -> List[Bookmark]:
    """Parse the input file and apply folder selection and dedup options."""
    root = parse_bookmarks_from_file(args.file)
    bookmarks = select_bookmarks(root, folder=args.folder, indices=args.index,
                                 recursive=args.recursive)
    dedup = getattr(args, "dedup", False)
    if dedup is None:
        dedup = get_config().dedup
    if dedup:
        before = len(bookmarks)
        bookmarks = remove_duplicates(bookmarks)
        logger.info(f"Removed {before - len(bookmarks)} duplicate bookmarks")
    return bookmarks


def cmd_tree(args):
    """Show the folder structure of a backup."""
    root = parse_bookmarks_from_file(args.file)

    def add_children(branch: Tree, node: Bookmark, depth: int):
        for position, child in enumerate(node.children):
            label = escape(child.title or "(untitled)")
            if child.is_container:
                sub = branch.add(f"[bold cyan]{position}[/bold cyan] [yellow]{label}/[/yellow] "
                                 f"[dim]({len(child.children)})[/dim]")
                if args.depth is None or depth < args.depth:
                    add_children(sub, child, depth + 1)
            elif args.leaves:
                branch.add(f"[dim]{position}[/dim] {label}")

    tree = Tree(f"[bold]{escape(root.title or root.root)}[/bold] [dim]({escape(root.root)})[/dim]")
    add_children(tree, root, 1)
    console.print(tree)


def cmd_list(args):
    """List bookmarks of the selected folder."""
    bookmarks = load_selection(args)
    limit = args.limit if args.limit is not None else get_config().page_size
    shown = bookmarks[:limit] if limit > 0 else bookmarks

    if args.output == "csv":
        sys.stdout.write(format_csv(shown))
        return

    table = Table(title="Bookmarks")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("URI", style="blue")
    table.add_column("Added", style="magenta")

    for b in shown:
        table.add_row(
            str(b.id),
            escape(b.title[:50]),
            escape(b.uri[:60]),
            b.date_added.strftime("%Y-%m-%d"),
        )

    console.print(table)
    if len(shown) < len(bookmarks):
        console.print(f"[dim]... and {len(bookmarks) - len(shown)} more[/dim]")


def cmd_export(args):
    """Export the selected bookmarks to CSV or HTML."""
    config = get_config()
    output = Path(args.output_file)

    format = args.format or FORMAT_SUFFIXES.get(output.suffix.lower()) or config.export_format

    bookmarks = load_selection(args)
    options = {}
    if format == "html":
        options = {
            "escape": args.escape or config.html_escape,
            "title": config.html_title,
        }

    export_file(bookmarks, output, format, **options)
    console.print(f"[green]✓ Exported {len(bookmarks)} bookmarks to {escape(str(output))}[/green]", soft_wrap=True)


def cmd_dedup(args):
    """Report duplicate bookmarks."""
    bookmarks = load_selection(args)
    stats = get_duplicate_stats(bookmarks)

    console.print(f"Number of bookmarks: {stats['total']}")
    console.print(f"Number of bookmarks (filtered): {stats['unique']}")

    if not stats["duplicates"]:
        console.print("[green]No duplicates found[/green]")
        return

    table = Table(title=f"Duplicates ({stats['duplicate_groups']} URIs)")
    table.add_column("URI", style="blue")
    table.add_column("Count", style="red")
    table.add_column("IDs", style="cyan")

    for uri, group in find_duplicates(bookmarks).items():
        table.add_row(escape(uri or "(empty)"), str(len(group)), ", ".join(str(b.id) for b in group))

    console.print(table)


def add_selection_args(parser: argparse.ArgumentParser):
    parser.add_argument("file", help="Firefox bookmarks backup (JSON)")
    parser.add_argument("--folder", help="Select the folder with this title")
    parser.add_argument("--index", type=int, action="append",
                        help="Follow child position from the root (repeatable)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Include bookmarks in subfolders of the selection")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ffbookmarks",
        description="ffbookmarks - inspect, export and deduplicate Firefox bookmark backups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ffbookmarks tree bookmarks.json --depth 2
  ffbookmarks list bookmarks.json --index 2 --limit 10 --output csv
  ffbookmarks export bookmarks.json bookmarks.html --index 2
  ffbookmarks export bookmarks.json menu.csv --folder "Bookmarks Menu" --dedup
  ffbookmarks dedup bookmarks.json --index 2

Configuration:
  Config file: ~/.config/ffbookmarks/config.toml or ./ffbookmarks.toml
  Environment: FFBOOKMARKS_HTML_ESCAPE, FFBOOKMARKS_LOG_LEVEL
        """
    )

    # Global options
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

    subparsers = parser.add_subparsers(dest="command", required=True)

    tree_parser = subparsers.add_parser("tree", help="Show the folder tree")
    tree_parser.add_argument("file", help="Firefox bookmarks backup (JSON)")
    tree_parser.add_argument("--depth", type=int, help="Maximum folder depth to show")
    tree_parser.add_argument("--leaves", action="store_true", help="Show bookmarks as well as folders")
    tree_parser.set_defaults(func=cmd_tree)

    list_parser = subparsers.add_parser("list", help="List bookmarks")
    add_selection_args(list_parser)
    list_parser.add_argument("--limit", type=int, help="Maximum rows (0 for all)")
    list_parser.add_argument("--dedup", action="store_true", default=None, help="Remove duplicate URIs")
    list_parser.add_argument("--output", choices=["table", "csv"], default="table", help="Output format")
    list_parser.set_defaults(func=cmd_list)

    export_parser = subparsers.add_parser("export", help="Export bookmarks to CSV or HTML")
    add_selection_args(export_parser)
    export_parser.add_argument("output_file", help="Output file")
    export_parser.add_argument("--format", choices=["csv", "html"],
                               help="Output format (default: from file extension)")
    export_parser.add_argument("--dedup", action="store_true", default=None, help="Remove duplicate URIs")
    export_parser.add_argument("--escape", action="store_true", help="HTML-escape cell values")
    export_parser.set_defaults(func=cmd_export)

    dedup_parser = subparsers.add_parser("dedup", help="Report duplicate bookmarks")
    add_selection_args(dedup_parser)
    dedup_parser.set_defaults(func=cmd_dedup)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = init_config(config_file=Path(args.config) if args.config else None)
        if not isinstance(logging.getLevelName(str(config.log_level).upper()), int):
            raise ValueError(f"Unknown log level: {config.log_level}")
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)

    if args.verbose:
        setup_logging("DEBUG")
    elif args.quiet:
        setup_logging("ERROR")
    else:
        setup_logging(config.log_level)

    if not config.color_output:
        console.no_color = True

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except FFBookmarksError as e:
        logger.debug("Failed to read bookmarks", exc_info=True)
        console.print(f"[red]Error in {escape(args.file)}: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)
    except (OSError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
