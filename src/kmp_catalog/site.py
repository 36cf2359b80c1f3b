"""Static site rendering.

Writes ``index.html`` (initial table rendered server-side),
``libraries.json`` (data for the client script) and ``catalog.js``
(client-side filtering/sorting) into the output directory.
"""

import json
import shutil
from importlib.resources import files
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape
from loguru import logger

from kmp_catalog.config import Settings, settings
from kmp_catalog.markup import render_inline, strip_inline
from kmp_catalog.models import Catalog
from kmp_catalog.view import ViewState, derive

_DATA_FILE = "libraries.json"
_SCRIPT_FILE = "catalog.js"


def format_stars(stars: int | None) -> str:
    if stars is None:
        return "N/A"
    return f"{stars:,}"


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("kmp_catalog", "templates"),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["inline_md"] = render_inline
    # Names sit inside the row link, so they must not carry links of their own.
    env.filters["plain_md"] = strip_inline
    env.filters["stars"] = format_stars
    return env


def catalog_payload(catalog: Catalog) -> dict:
    """JSON document consumed by the client script."""
    return {
        "platforms": catalog.platforms,
        "categories": catalog.categories,
        "libraries": [
            {
                **lib.to_dict(),
                "nameText": strip_inline(lib.name),
                "descriptionHtml": str(render_inline(lib.description)),
            }
            for lib in catalog.libraries
        ],
    }


def render_index(catalog: Catalog, config: Settings | None = None) -> str:
    """Render the landing page HTML for *catalog*."""
    config = config or settings
    state = ViewState.initial(catalog.platforms, catalog.categories)
    rows = derive(catalog.libraries, state, catalog.platforms, catalog.categories)

    template = _environment().get_template("index.html.j2")
    return template.render(
        title=config.site_title,
        base_path=config.get_base_path(),
        source_repo=config.source_repo,
        data_file=_DATA_FILE,
        script_file=_SCRIPT_FILE,
        platforms=catalog.platforms,
        categories=catalog.categories,
        state=state,
        rows=rows,
    )


def render_site(
    catalog: Catalog,
    output_dir: Path | str | None = None,
    config: Settings | None = None,
) -> Path:
    """Write the static site for *catalog* and return the output directory."""
    config = config or settings
    out = Path(output_dir or config.output_dir)
    out.mkdir(parents=True, exist_ok=True)

    (out / "index.html").write_text(render_index(catalog, config), encoding="utf-8")
    (out / _DATA_FILE).write_text(
        json.dumps(catalog_payload(catalog), ensure_ascii=False),
        encoding="utf-8",
    )
    script = files("kmp_catalog").joinpath("static").joinpath(_SCRIPT_FILE)
    with script.open("rb") as src, open(out / _SCRIPT_FILE, "wb") as dst:
        shutil.copyfileobj(src, dst)

    logger.info(f"Wrote {len(catalog.libraries)} libraries to {out}")
    return out
