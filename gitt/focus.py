# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import enum
import logging

from gitt.diffview.diffmodel import DiffModel
from gitt.graphview.listmodel import ListModel
from gitt.keymap import Action

logger = logging.getLogger(__name__)


class Pane(enum.IntEnum):
    LIST = 0
    DIFF = 1


class FocusController:
    """
    Decides which pane receives navigation actions.
    Holds no data of its own besides the focused pane.
    """

    def __init__(self, listModel: ListModel, diffModel: DiffModel, focus: Pane = Pane.LIST):
        self.listModel = listModel
        self.diffModel = diffModel
        self.focus = focus

    def setFocus(self, pane: Pane):
        if pane != self.focus:
            logger.debug(f"Focus: {self.focus.name} -> {pane.name}")
        self.focus = pane

    def toggle(self):
        self.setFocus(Pane.DIFF if self.focus == Pane.LIST else Pane.LIST)

    def handleAction(self, action: Action) -> bool:
        """
        Route an action to the focused pane.
        Return False if the action isn't a navigation or focus action.
        """
        if action == Action.SWITCH_FOCUS:
            self.toggle()
            return True

        if self.focus == Pane.LIST:
            model = self.listModel
            routes = {
                Action.UP: lambda: model.moveSelection(-1),
                Action.DOWN: lambda: model.moveSelection(1),
                Action.PAGE_UP: model.pageUp,
                Action.PAGE_DOWN: model.pageDown,
                Action.TOP: model.scrollToTop,
                Action.BOTTOM: model.scrollToBottom,
            }
        else:
            model = self.diffModel
            routes = {
                Action.UP: lambda: model.scroll(-1),
                Action.DOWN: lambda: model.scroll(1),
                Action.PAGE_UP: model.pageUp,
                Action.PAGE_DOWN: model.pageDown,
                Action.TOP: model.scrollToTop,
                Action.BOTTOM: model.scrollToBottom,
            }

        try:
            route = routes[action]
        except KeyError:
            return False

        route()
        return True
