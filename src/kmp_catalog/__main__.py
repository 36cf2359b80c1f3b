"""KMP catalog entry point."""

import argparse
import asyncio
import sys

from loguru import logger

from kmp_catalog.config import settings


def _configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)


def _build() -> int:
    """Build the static site into OUTPUT_DIR."""
    from kmp_catalog.build import build_site
    from kmp_catalog.sources.readme import ReadmeError

    try:
        out = asyncio.run(build_site())
    except ReadmeError as e:
        logger.error(f"Build failed: {e}")
        return 1
    print(f"Site written to {out}")
    return 0


def _list_parser() -> argparse.ArgumentParser:
    from kmp_catalog.view import SortKey

    parser = argparse.ArgumentParser(
        prog="kmp-catalog list",
        description="Print the catalog, filtered and sorted like the web page.",
    )
    parser.add_argument("search", nargs="*", help="Match name or description")
    parser.add_argument(
        "--platform",
        action="append",
        default=[],
        help="Only show libraries with this platform badge (repeatable)",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        help="Only show libraries in this category (repeatable)",
    )
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        help="Sort column (default: stars, most starred first)",
    )
    parser.add_argument("--reverse", action="store_true", help="Flip the sort order")
    return parser


def _list_state(args: argparse.Namespace, catalog):
    """Replay the CLI options as the page's checkbox and header clicks."""
    from kmp_catalog.view import SortKey, ViewState

    state = ViewState.initial(catalog.platforms, catalog.categories)

    if args.platform:
        state = state.select_all_platforms(False, catalog.platforms)
        for platform in dict.fromkeys(args.platform):
            if platform not in catalog.platforms:
                logger.warning(f"Unknown platform ignored: {platform}")
                continue
            state = state.toggle_platform(platform)

    if args.category:
        state = state.select_all_categories(False, catalog.categories)
        for category in dict.fromkeys(args.category):
            if category not in catalog.categories:
                logger.warning(f"Unknown category ignored: {category}")
                continue
            state = state.toggle_category(category)

    if args.sort and SortKey(args.sort) is not state.sort_key:
        state = state.toggle_sort(args.sort)
    if args.reverse:
        state = state.toggle_sort(state.sort_key)

    return state.with_search(" ".join(args.search))


def _list(argv: list[str] | None = None) -> int:
    """Print the catalog in landing-page order, or as the options select."""
    from kmp_catalog.build import build_catalog
    from kmp_catalog.markup import strip_inline
    from kmp_catalog.site import format_stars
    from kmp_catalog.sources.readme import ReadmeError
    from kmp_catalog.view import derive

    args = _list_parser().parse_args(argv or [])

    try:
        catalog = asyncio.run(build_catalog())
    except ReadmeError as e:
        logger.error(f"Listing failed: {e}")
        return 1

    state = _list_state(args, catalog)
    rows = derive(catalog.libraries, state, catalog.platforms, catalog.categories)
    for lib in rows:
        platforms = ", ".join(lib.platforms) or "-"
        print(
            f"{format_stars(lib.stars):>9}  {strip_inline(lib.name)}"
            f"  [{lib.category}]  ({platforms})"
        )
    print(f"{len(rows)} {'library' if len(rows) == 1 else 'libraries'} found")
    return 0


def _cli() -> None:
    """CLI dispatcher: build (default) or list subcommand."""
    _configure_logging()
    if len(sys.argv) >= 2 and sys.argv[1] == "list":
        sys.exit(_list(sys.argv[2:]))
    else:
        sys.exit(_build())


if __name__ == "__main__":
    _cli()
