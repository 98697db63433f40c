# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import curses
import enum


class Action(enum.IntEnum):
    NONE = 0
    UP = enum.auto()
    DOWN = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    TOP = enum.auto()
    BOTTOM = enum.auto()
    SWITCH_FOCUS = enum.auto()
    QUIT = enum.auto()


def ctrl(c: str) -> int:
    return ord(c) & 0x1F


KEYMAP: dict[int, Action] = {
    curses.KEY_UP: Action.UP,
    ord('k'): Action.UP,
    curses.KEY_DOWN: Action.DOWN,
    ord('j'): Action.DOWN,
    curses.KEY_PPAGE: Action.PAGE_UP,
    ctrl('b'): Action.PAGE_UP,
    curses.KEY_NPAGE: Action.PAGE_DOWN,
    ctrl('f'): Action.PAGE_DOWN,
    ord(' '): Action.PAGE_DOWN,
    ord('g'): Action.TOP,
    curses.KEY_HOME: Action.TOP,
    ord('G'): Action.BOTTOM,
    curses.KEY_END: Action.BOTTOM,
    ord('\t'): Action.SWITCH_FOCUS,
    ord('q'): Action.QUIT,
}


def actionForKey(key: int) -> Action:
    return KEYMAP.get(key, Action.NONE)
