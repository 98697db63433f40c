# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitt.graph.graph import GraphRow, SegmentKind
from gitt.graph.graphbuilder import MockCommit

PADDING = 2

UP = 1
DOWN = 2
LEFT = 4
RIGHT = 8

GLYPHS = {
    0: " ",
    UP: "╵",
    DOWN: "╷",
    LEFT: "╴",
    RIGHT: "╶",
    UP | DOWN: "│",
    LEFT | RIGHT: "─",
    UP | LEFT: "╯",
    UP | RIGHT: "╰",
    DOWN | LEFT: "╮",
    DOWN | RIGHT: "╭",
    UP | DOWN | LEFT: "┤",
    UP | DOWN | RIGHT: "├",
    DOWN | LEFT | RIGHT: "┬",
    UP | LEFT | RIGHT: "┴",
    UP | DOWN | LEFT | RIGHT: "┼",
}

# Indexed by (has outgoing segments) << 1 | (has incoming segments)
COMMIT_GLYPHS = "╳┷┯┿"


def padx(x):
    assert x >= 0
    return x * PADDING


class GraphDiagram:
    @staticmethod
    def parseDefinition(text: str) -> tuple[list[MockCommit], set[str]]:
        """
        Parse a compact graph definition into a commit sequence.

        Chains of commits are separated by whitespace. Within a chain,
        "a-b-c" means a's parent is b, b's parent is c. An optional
        ":x,y" suffix lists the parents of the chain's last commit.
        Example: "m:a,b a-z b:z z" is a merge of two branches off a root.
        """
        sequence: list[MockCommit] = []
        referenced: set[str] = set()
        heads: set[str] = set()
        defined: set[str] = set()

        for token in text.split():
            chainPart, _, tailPart = token.partition(":")
            assert chainPart, f"Empty chain in {token!r}"
            assert "," not in chainPart, f"Use ':' before a parent list in {token!r}"
            assert "-" not in tailPart and ":" not in tailPart, f"Malformed parent list in {token!r}"

            chain = chainPart.split("-")
            tailParents = tuple(p for p in tailPart.split(",") if p)

            for i, commit in enumerate(chain):
                assert commit not in defined, f"Duplicate commit {commit}"
                defined.add(commit)
                parents = (chain[i + 1],) if i + 1 < len(chain) else tailParents
                sequence.append(MockCommit(commit, parents))
                if commit not in referenced:
                    heads.add(commit)
                referenced.update(parents)

        return sequence, heads

    @staticmethod
    def rowGlyphs(row: GraphRow, width: int = 0) -> str:
        """
        Draw a single graph row as a string of box-drawing characters.
        Lanes are PADDING cells apart; `width` (in lanes) pads the result.
        """
        numLanes = max(row.width, width)
        cells = [0] * (padx(numLanes - 1) + 1)
        home = padx(row.lane)

        def hline(x1: int, x2: int):
            left, right = min(x1, x2), max(x1, x2)
            for x in range(left + 1, right):
                cells[x] |= LEFT | RIGHT

        for segment in row.segments:
            x = padx(segment.lane)
            target = padx(segment.target)

            if segment.kind == SegmentKind.PASSING:
                cells[x] |= UP | DOWN

            elif segment.kind == SegmentKind.INCOMING:
                if x != home:
                    cells[x] |= UP | (LEFT if x > home else RIGHT)
                    hline(x, home)

            elif segment.kind == SegmentKind.OUTGOING:
                if target != home:
                    cells[target] |= DOWN | (LEFT if target > home else RIGHT)
                    hline(home, target)

        text = [GLYPHS[c] for c in cells]
        text[home] = COMMIT_GLYPHS[row.hasOutgoing() << 1 | row.hasIncoming()]
        return "".join(text)

    @staticmethod
    def diagram(rows: list[GraphRow], row0=0, maxRows=20, verbose=False) -> str:
        """ Draw rows with their commit ids in the left margin. """
        diagram = GraphDiagram()
        for y, row in enumerate(rows[row0:row0 + maxRows], start=row0):
            margins = [str(row.commitId)]
            if verbose:
                margins.append(str(y))
            diagram.newRow(GraphDiagram.rowGlyphs(row), margins)
        return diagram.bake()

    # -----------------------------------------------------------------

    def __init__(self):
        self.rows: list[tuple[list[str], str]] = []

    def newRow(self, scanline: str, margins: list[str]):
        self.rows.append((margins, scanline))

    def bake(self) -> str:
        # Margins are right-aligned, last margin first
        columns = max((len(m) for m, _ in self.rows), default=0)
        widths = [0] * columns
        for margins, _ in self.rows:
            for i, cell in enumerate(margins):
                widths[i] = max(widths[i], len(cell))

        lines = []
        for margins, scanline in self.rows:
            padded = margins + [""] * (columns - len(margins))
            prefix = "".join(cell.rjust(w) + " " for cell, w in reversed(list(zip(padded, widths))))
            lines.append(prefix + scanline.rstrip())
        return "\n".join(lines)
