"""
A buffer list rendered with rich.

``RichBufferList`` is a small list host: it keeps registries of filters,
groupings, sorters and columns, a stack of active filters, and renders the
visible documents as a ``rich.table.Table``. Filtering, sorting and grouping
for one render are computed from a single read of the document list.
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from buftabs.core.config import settings
from buftabs.core.settings import NAME_SORTER
from buftabs.membership.views import GroupSpec
from buftabs.schemas.objects import Document

logger = logging.getLogger(__name__)

Chooser = Callable[[str, Sequence[str]], Optional[List[str]]]


def prompt_choice(prompt: str, options: Sequence[str]) -> Optional[List[str]]:
    """
    Ask for a comma separated subset of ``options`` on the terminal.

    A blank answer cancels. Unknown names are dropped.
    """
    typer.echo(f"{prompt}: {', '.join(options)}")
    answer = typer.prompt("Workspaces (comma separated, blank to cancel)", default="",
                          show_default=False)
    picked = [part.strip() for part in answer.split(",") if part.strip()]
    valid = [name for name in picked if name in options]
    if len(valid) != len(picked):
        logger.warning("Ignoring unknown workspaces: %s",
                       ", ".join(name for name in picked if name not in options))
    return valid or None


def _compare_names(a: Document, b: Document) -> int:
    return (a.name > b.name) - (a.name < b.name)


class RichBufferList:
    """
    List host backed by a live document provider.

    Args:
        documents: returns the open documents in their natural order
        visitor: called when a document is opened from the list
        chooser: asks the user to pick among options; defaults to a terminal prompt
    """

    def __init__(self, documents: Callable[[], List[Document]],
                 visitor: Optional[Callable[[Document], None]] = None,
                 chooser: Optional[Chooser] = None,
                 title: str = "Buffers"):
        self.documents = documents
        self.visitor = visitor
        self.chooser = chooser or prompt_choice
        self.title = title

        self.filters: Dict[str, Tuple[Callable[[Document, Any], bool], str]] = {}
        self.groupings: Dict[str, Callable[[], List[GroupSpec]]] = {}
        self.sorters: Dict[str, Callable[[Document, Document], int]] = {NAME_SORTER: _compare_names}
        self.columns: Dict[str, Callable[[Document], Any]] = {}

        self.active_filters: List[Tuple[str, Any]] = []
        self.grouping: Optional[str] = None
        self.sorter: Optional[str] = None
        self.visited: Optional[Document] = None
        self.single_view = False

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def define_filter(self, name, predicate, description=""):
        self.filters[name] = (predicate, description)

    def define_grouping(self, name, generator):
        self.groupings[name] = generator

    def define_sorter(self, name, comparator):
        self.sorters[name] = comparator

    def define_column(self, name, producer):
        self.columns[name] = producer

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def push_filter(self, name: str, qualifier: Any) -> None:
        if name not in self.filters:
            raise ValueError(f"Unknown filter '{name}'")
        self.active_filters.append((name, qualifier))

    def pop_filter(self) -> Optional[Tuple[str, Any]]:
        if not self.active_filters:
            return None
        return self.active_filters.pop()

    def clear_filters(self) -> None:
        self.active_filters = []

    def set_grouping(self, name: Optional[str]) -> None:
        if name is not None and name not in self.groupings:
            raise ValueError(f"Unknown grouping '{name}'")
        self.grouping = name

    def set_sorter(self, name: Optional[str]) -> None:
        if name is not None and name not in self.sorters:
            raise ValueError(f"Unknown sorter '{name}'")
        self.sorter = name

    def choose(self, prompt: str, options: Sequence[str]) -> Optional[List[str]]:
        return self.chooser(prompt, options)

    def visit(self, doc: Document) -> None:
        self.visited = doc
        if self.visitor is not None:
            self.visitor(doc)

    def collapse(self) -> None:
        self.single_view = True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def describe_filters(self) -> List[str]:
        described = []
        for name, qualifier in self.active_filters:
            description = self.filters[name][1] or name
            if isinstance(qualifier, (set, frozenset)):
                qualifier = ", ".join(sorted(qualifier))
            described.append(f"{description}: {qualifier}")
        return described

    def visible_documents(self) -> List[Document]:
        """Documents passing every active filter, sorted by the current sorter."""
        docs = self.documents()
        for name, qualifier in self.active_filters:
            predicate = self.filters[name][0]
            docs = [doc for doc in docs if predicate(doc, qualifier)]
        if self.sorter is not None:
            docs = sorted(docs, key=functools.cmp_to_key(self.sorters[self.sorter]))
        return docs

    def sections(self) -> List[Tuple[Optional[str], List[Document]]]:
        """
        Split the visible documents into labelled sections.

        Each document lands in the first group whose predicate accepts it;
        documents no group claims go to the default section, last. Without a
        grouping there is a single unlabelled section.
        """
        docs = self.visible_documents()
        if self.grouping is None:
            return [(None, docs)]

        specs = self.groupings[self.grouping]()
        buckets: List[Tuple[Optional[str], List[Document]]] = [(spec.label, []) for spec in specs]
        leftovers: List[Document] = []
        for doc in docs:
            for position, spec in enumerate(specs):
                if spec.predicate(doc):
                    buckets[position][1].append(doc)
                    break
            else:
                leftovers.append(doc)
        if leftovers:
            buckets.append((settings.default_group_label, leftovers))
        return [(label, members) for label, members in buckets if members]

    def build_table(self) -> Table:
        caption = escape("; ".join(self.describe_filters())) or None
        table = Table(title=escape(self.title), caption=caption)
        table.add_column("", style="yellow", width=1)
        table.add_column("Name", style="green")
        for name in self.columns:
            table.add_column(name, style="cyan")
        table.add_column("Size", style="magenta", justify="right")
        table.add_column("Mode", style="blue")
        table.add_column("File")

        for label, docs in self.sections():
            if label is not None:
                table.add_section()
                table.add_row("", f"[bold][ {escape(label)} ][/bold]")
            for doc in docs:
                values = [escape(str(producer(doc))) for producer in self.columns.values()]
                table.add_row(
                    "*" if doc.modified else "",
                    escape(doc.name),
                    *values,
                    str(doc.size),
                    escape(doc.mode or ""),
                    escape(doc.path or ""),
                )
        return table

    def render(self, console: Optional[Console] = None) -> None:
        console = console or Console()
        console.print(self.build_table())
