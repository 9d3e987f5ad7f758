"""Standalone HTML viewer for metadata summaries.

The page offers a search box, click-to-sort headers, resizable columns, a
sticky leading ``Column`` column, paging, and a button that shows or hides the
``Class`` column (hidden on load).
"""
from __future__ import annotations

import html
import logging
import tempfile
import webbrowser
from pathlib import Path
from string import Template
from typing import Optional, Union

import pandas as pd

from geckoutils.core.errors import FilesystemError

logger = logging.getLogger(__name__)

TABLE_ID = "metadata-vis-class"

_PAGE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>$title</title>
<style>
body { font-family: -apple-system, BlinkMacSystemFont, "Noto Sans", "Segoe UI", Helvetica, Arial, sans-serif; font-size: 0.80rem; color: #000; background: #fff; }
.button-container { display: flex; justify-content: space-between; align-items: center; margin-bottom: 5px; }
.viewer-title { font-size: 1.2rem; font-weight: bold; font-family: system-ui; }
.modern-button { display: inline-block; margin: 5px 0; padding: 5px 10px; font-size: 0.8rem; color: #000; background-color: #fff; border: none; border-radius: 6px; cursor: pointer; box-shadow: 0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06); }
.modern-button:hover { transform: scale(1.02); }
.modern-button:active { transform: scale(0.98); }
.search-input { width: 100%; box-sizing: border-box; padding: 5px; margin-bottom: 5px; border: 1px solid #ddd; border-radius: 4px; }
.table-wrap { overflow-x: auto; }
table.gecko-meta { border-collapse: separate; border-spacing: 0; width: 100%; }
table.gecko-meta th { background-color: #f7f7f7; font-weight: bold; text-align: left; cursor: pointer; resize: horizontal; overflow: auto; }
table.gecko-meta th, table.gecko-meta td { padding: 4px 8px; border-bottom: 1px solid #ddd; }
table.gecko-meta tbody tr:hover { background-color: #f2f2f2; }
table.gecko-meta th:first-child, table.gecko-meta td:first-child { position: sticky; left: 0; z-index: 1; font-weight: bold; background-color: #f7f7f7; border-right: 1px solid #eee; }
th.col-description, td.col-description { min-width: 250px; }
.pager { margin-top: 5px; display: flex; gap: 8px; align-items: center; }
</style>
</head>
<body>
<div class="button-container">
<span class="viewer-title">$title</span>
<button class="modern-button" id="toggle-class" type="button">Show/hide class column</button>
</div>
<input class="search-input" id="search" type="search" placeholder="Search...">
<div class="table-wrap">
$table
</div>
<div class="pager">
<button class="modern-button" id="prev" type="button">Previous</button>
<span id="page-info"></span>
<button class="modern-button" id="next" type="button">Next</button>
</div>
<script>
(function () {
  var table = document.getElementById("$table_id");
  var pageSize = $page_size;
  var page = 0;
  var classHidden = true;
  var sortCol = -1, sortAsc = true;
  var headers = Array.prototype.slice.call(table.tHead.rows[0].cells);
  var body = table.tBodies[0];
  var rows = Array.prototype.slice.call(body.rows);
  var classIdx = -1;
  headers.forEach(function (th, i) {
    var name = th.textContent.trim();
    if (name === "Class") { classIdx = i; }
    if (name === "Description") {
      th.classList.add("col-description");
      rows.forEach(function (r) { r.cells[i].classList.add("col-description"); });
    }
    th.addEventListener("click", function () { sortBy(i); });
  });
  function setClassVisible(visible) {
    if (classIdx < 0) { return; }
    var display = visible ? "" : "none";
    headers[classIdx].style.display = display;
    rows.forEach(function (r) { r.cells[classIdx].style.display = display; });
  }
  function filtered() {
    var q = document.getElementById("search").value.toLowerCase();
    return rows.filter(function (r) { return r.textContent.toLowerCase().indexOf(q) !== -1; });
  }
  function render() {
    var visible = filtered();
    var pages = Math.max(1, Math.ceil(visible.length / pageSize));
    if (page >= pages) { page = pages - 1; }
    rows.forEach(function (r) { r.style.display = "none"; });
    visible.slice(page * pageSize, (page + 1) * pageSize).forEach(function (r) { r.style.display = ""; });
    document.getElementById("page-info").textContent = (page + 1) + " of " + pages + " (" + visible.length + " rows)";
  }
  function sortBy(i) {
    sortAsc = (sortCol === i) ? !sortAsc : true;
    sortCol = i;
    rows.sort(function (a, b) {
      var x = a.cells[i].textContent, y = b.cells[i].textContent;
      var nx = parseFloat(x), ny = parseFloat(y);
      var cmp = (!isNaN(nx) && !isNaN(ny)) ? nx - ny : x.localeCompare(y);
      return sortAsc ? cmp : -cmp;
    });
    rows.forEach(function (r) { body.appendChild(r); });
    render();
  }
  document.getElementById("toggle-class").addEventListener("click", function () {
    classHidden = !classHidden;
    setClassVisible(!classHidden);
  });
  document.getElementById("search").addEventListener("input", function () { page = 0; render(); });
  document.getElementById("prev").addEventListener("click", function () { if (page > 0) { page -= 1; render(); } });
  document.getElementById("next").addEventListener("click", function () { page += 1; render(); });
  setClassVisible(false);
  render();
})();
</script>
</body>
</html>
""")


def render_interactive_view(
    summary: pd.DataFrame,
    path: Optional[Union[str, Path]] = None,
    title: str = "Metadata viewer",
    page_size: int = 20,
    open_browser: bool = False,
) -> str:
    """Render `summary` (as built by ``render_summary``) to a standalone HTML page.

    Writes the page to `path` when given and returns the HTML text.
    """
    if not isinstance(summary, pd.DataFrame):
        raise TypeError(f"summary must be a pandas DataFrame, got {type(summary).__name__}")
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    table_html = summary.to_html(
        index=False,
        table_id=TABLE_ID,
        classes="gecko-meta",
        na_rep="",
        border=0,
        escape=True,
    )
    page = _PAGE.substitute(
        title=html.escape(title),
        table=table_html,
        table_id=TABLE_ID,
        page_size=int(page_size),
    )
    if path is None and open_browser:
        path = Path(tempfile.mkdtemp(prefix="gecko-viewer-")) / "metadata_viewer.html"
    if path is not None:
        out = Path(path)
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(page, encoding="utf-8")
        except OSError as e:
            raise FilesystemError(f"Failed to write metadata viewer to {out}: {e}") from e
        logger.info("Metadata viewer written to %s", out)
        if open_browser:
            webbrowser.open(out.resolve().as_uri())
    return page
