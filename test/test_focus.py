# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import curses

import pytest

from gitt.diffview.diffmodel import DiffModel
from gitt.focus import FocusController, Pane
from gitt.graphview.listmodel import ListModel
from gitt.keymap import Action, actionForKey, ctrl
from .test_listmodel import linearRows


@pytest.fixture
def focus():
    listModel = ListModel(3)
    listModel.append(linearRows(10))
    listModel.setSelection(0)
    diffModel = DiffModel(3)
    diffModel.load(str(i) for i in range(10))
    return FocusController(listModel, diffModel)


@pytest.mark.parametrize("key,action", [
    (curses.KEY_UP, Action.UP),
    (ord('k'), Action.UP),
    (curses.KEY_DOWN, Action.DOWN),
    (ord('j'), Action.DOWN),
    (curses.KEY_PPAGE, Action.PAGE_UP),
    (ctrl('b'), Action.PAGE_UP),
    (curses.KEY_NPAGE, Action.PAGE_DOWN),
    (ctrl('f'), Action.PAGE_DOWN),
    (ord('g'), Action.TOP),
    (ord('G'), Action.BOTTOM),
    (ord('\t'), Action.SWITCH_FOCUS),
    (ord('q'), Action.QUIT),
    (ord('x'), Action.NONE),
    (-1, Action.NONE),
])
def testKeymap(key, action):
    assert actionForKey(key) == action


def testCtrl():
    assert ctrl('f') == 6
    assert ctrl('b') == 2


def testListHasFocusInitially(focus):
    assert focus.focus == Pane.LIST
    focus.handleAction(Action.DOWN)
    assert focus.listModel.selection == 1
    assert focus.diffModel.offset == 0


def testToggleFocus(focus):
    assert focus.handleAction(Action.SWITCH_FOCUS)
    assert focus.focus == Pane.DIFF
    focus.handleAction(Action.DOWN)
    focus.handleAction(Action.PAGE_DOWN)
    assert focus.diffModel.offset == 4
    assert focus.listModel.selection == 0

    focus.toggle()
    assert focus.focus == Pane.LIST


def testEndsGoToFocusedPaneOnly(focus):
    focus.setFocus(Pane.DIFF)
    focus.handleAction(Action.BOTTOM)
    assert focus.diffModel.offset == 7
    assert focus.listModel.selection == 0

    focus.setFocus(Pane.LIST)
    focus.handleAction(Action.BOTTOM)
    assert focus.listModel.selection == 9
    assert focus.diffModel.offset == 7


def testUnroutedActions(focus):
    assert not focus.handleAction(Action.NONE)
    assert not focus.handleAction(Action.QUIT)


def testToggleTwiceRestoresFocus(focus):
    focus.toggle()
    focus.toggle()
    assert focus.focus == Pane.LIST
