"""Collapsible file-tree view."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

from termui.ansi import bold, cyan, dim, gray, muted, white, yellow
from termui.keys import KeyEvent, KeyType
from termui.layout import center_line
from termui.screen import BaseScreen
from termui.widgets import key_hints, screen_header

if TYPE_CHECKING:
    from termui.session import Session


@dataclass(frozen=True)
class Node:
    name: str
    children: tuple[Node, ...] | None = None
    size: str = ""

    @property
    def is_dir(self) -> bool:
        return self.children is not None


def _dir(name: str, *children: Node) -> Node:
    return Node(name, tuple(children))


def _file(name: str, size: str) -> Node:
    return Node(name, None, size)


TREE = _dir(
    "my-project",
    _dir(
        "src",
        _dir("components", _file("App.tsx", "2.4 KB"), _file("Header.tsx", "1.1 KB"), _file("Footer.tsx", "0.8 KB")),
        _dir("hooks", _file("useAuth.ts", "1.2 KB"), _file("useFetch.ts", "0.9 KB")),
        _dir("utils", _file("api.ts", "2.1 KB"), _file("helpers.ts", "1.4 KB"), _file("constants.ts", "0.6 KB")),
        _file("index.ts", "0.2 KB"),
        _file("App.css", "3.2 KB"),
    ),
    _dir("public", _file("index.html", "1.0 KB"), _file("favicon.ico", "16 KB")),
    _dir("tests", _file("App.test.tsx", "2.8 KB"), _file("setup.ts", "0.4 KB")),
    _file("package.json", "1.8 KB"),
    _file("tsconfig.json", "0.5 KB"),
    _file("README.md", "2.2 KB"),
)

_ICONS = {"tsx": "⚛", "ts": "◆", "css": "◈", "json": "{}", "html": "◇", "md": "¶", "ico": "◉"}

CHROME_LINES = 10


class Row(NamedTuple):
    path: str
    node: Node
    depth: int
    prefix: str


def flatten(
    node: Node,
    expanded: set[str],
    path: str = "",
    depth: int = 0,
    prefix: str = "",
    lead: str = "",
) -> list[Row]:
    """Visible rows in display order, with the tree-drawing prefix for each.

    *lead* is the guide-line text that descendants of *node* inherit.
    """
    path = f"{path}/{node.name}" if path else node.name
    rows = [Row(path, node, depth, prefix)]
    if node.is_dir and path in expanded:
        children = node.children or ()
        for i, child in enumerate(children):
            last = i == len(children) - 1
            rows.extend(
                flatten(
                    child,
                    expanded,
                    path,
                    depth + 1,
                    lead + ("└── " if last else "├── "),
                    lead + ("    " if last else "│   "),
                )
            )
    return rows


@dataclass
class TreeState:
    cursor: int = 0
    expanded: set[str] = field(default_factory=lambda: {"my-project", "my-project/src"})


def _icon(node: Node, expanded: bool) -> str:
    if node.is_dir:
        return "▾" if expanded else "▸"
    return _ICONS.get(node.name.rsplit(".", 1)[-1], "·")


class TreeScreen(BaseScreen):
    title = "Tree"
    description = "Hierarchy"

    def init_state(self, session: Session) -> TreeState:
        return TreeState()

    def handle_input(self, session: Session, event: KeyEvent) -> None:
        if self.handle_back(session, event):
            return
        state: TreeState = session.screen_state
        rows = flatten(TREE, state.expanded)
        row = rows[min(state.cursor, len(rows) - 1)]

        if event.type is KeyType.UP or event.is_char("k"):
            state.cursor = max(0, state.cursor - 1)
        elif event.type is KeyType.DOWN or event.is_char("j"):
            state.cursor = min(len(rows) - 1, state.cursor + 1)
        elif event.type is KeyType.RIGHT or event.is_char("l"):
            if row.node.is_dir:
                state.expanded.add(row.path)
        elif event.type is KeyType.LEFT or event.is_char("h"):
            if row.node.is_dir and row.path in state.expanded:
                state.expanded.discard(row.path)
            elif "/" in row.path:
                parent = row.path.rsplit("/", 1)[0]
                state.cursor = next(i for i, r in enumerate(rows) if r.path == parent)
        elif event.type is KeyType.ENTER or event.is_char(" "):
            if row.node.is_dir:
                state.expanded ^= {row.path}
        else:
            return
        session.render()

    def render(self, session: Session) -> str:
        state: TreeState = session.screen_state
        cols = session.cols
        rows = flatten(TREE, state.expanded)
        cursor = min(state.cursor, len(rows) - 1)
        lines = screen_header("Tree View", "Expand and collapse a project hierarchy", cols, session.theme)

        visible = max(3, session.rows - CHROME_LINES)
        top = max(0, cursor - visible + 1)
        body = []
        for i in range(top, min(len(rows), top + visible)):
            row = rows[i]
            is_open = row.path in state.expanded
            icon = _icon(row.node, is_open)
            if row.node.is_dir:
                label = yellow(f"{icon} {row.node.name}/")
            else:
                label = cyan(icon) + " " + white(row.node.name) + " " + muted(row.node.size)
            if i == cursor:
                label = bold(cyan("▶ ")) + bold(label)
            else:
                label = "  " + label
            body.append(dim(gray(row.prefix)) + label)

        width = max((len(r.prefix) + len(r.node.name) + 14 for r in rows), default=0)
        indent = " " * max(0, (cols - width) // 2)
        lines.extend(indent + line for line in body)

        lines.append("")
        files = sum(1 for r in rows if not r.node.is_dir)
        lines.append(center_line(muted(f"{len(rows)} visible · {files} files"), cols))
        lines.append(key_hints([("↑↓", "Move"), ("→/←", "Expand/Collapse"), ("Enter", "Toggle"), ("q", "Back")], cols))
        return "\n".join(lines)
