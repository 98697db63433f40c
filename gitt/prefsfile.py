# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os
import tempfile
import typing
from types import NoneType, UnionType
from typing import Any

logger = logging.getLogger(__name__)

APP_DIR_NAME = "gitt"


def configDir() -> str:
    """ Directory holding gitt's prefs and log file. """
    from gitt.settings import TEST_MODE
    if TEST_MODE:
        return os.path.join(tempfile.gettempdir(), f"{APP_DIR_NAME}-testmode-config")
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, APP_DIR_NAME)


def fieldDefault(field: dataclasses.Field) -> Any:
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return field.default


def toJson(value: Any) -> Any:
    """ Make a pref value JSON-friendly. """
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, set):
        return sorted(value)
    return value


def fromJson(value: Any, targetType: type | UnionType) -> Any:
    """
    Convert a value read from JSON to the declared type of a pref.
    Raise ValueError if the value can't stand for that type.
    """
    # "SomeType | None" -> SomeType
    if isinstance(targetType, UnionType):
        targetType = next(t for t in typing.get_args(targetType) if t is not NoneType)

    if targetType is set:
        acceptable = list
    elif issubclass(targetType, enum.StrEnum):
        acceptable = str
    elif issubclass(targetType, enum.Enum):
        acceptable = int
    elif targetType is float:
        acceptable = (int, float)
    else:
        acceptable = targetType

    # JSON booleans would otherwise pass for ints
    if isinstance(value, bool) and targetType is not bool:
        raise ValueError(f"expected {targetType.__name__}, got a boolean")
    if not isinstance(value, acceptable):
        raise ValueError(f"expected {targetType.__name__}, got {type(value).__name__}")

    if acceptable is targetType:
        return value
    return targetType(value)


class PrefsFile:
    """
    Mixin for dataclasses that persist as a JSON object in the config dir.
    Fields whose names start with an underscore are never persisted.
    """

    _filename = ""

    def getParentDir(self) -> str:
        return configDir()

    def getPath(self) -> str:
        assert self._filename, "subclass must set _filename"
        return os.path.join(self.getParentDir(), self._filename)

    def persistentFields(self) -> list[dataclasses.Field]:
        assert dataclasses.is_dataclass(self)
        return [f for f in dataclasses.fields(self) if not f.name.startswith("_")]

    def reset(self):
        assert dataclasses.is_dataclass(self)
        for field in dataclasses.fields(self):
            setattr(self, field.name, fieldDefault(field))

    def write(self) -> str:
        """
        Save the prefs that differ from their defaults.
        Return the path of the file, or an empty string if nothing was written.
        """
        path = self.getPath()

        changed = {}
        for field in self.persistentFields():
            value = getattr(self, field.name)
            if value != fieldDefault(field):
                changed[field.name] = toJson(value)

        if not changed:
            # All defaults: a stale file would override them next time
            if os.path.isfile(path):
                logger.debug(f"All prefs are default, removing {path}")
                os.unlink(path)
            return ""

        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wt", encoding="utf-8") as file:
            json.dump(changed, file, indent="\t")

        logger.info(f"Wrote {path}")
        return path

    def load(self) -> bool:
        """
        Read prefs from disk. Unknown keys and values of the wrong type are
        skipped with a warning. Return False if there's no usable file.
        """
        path = self.getPath()
        if not os.path.isfile(path):
            return False

        try:
            with open(path, "rt", encoding="utf-8") as file:
                blob = json.load(file)
        except ValueError as exc:
            logger.warning(f"{path}: not valid JSON: {exc}")
            return False

        if not isinstance(blob, dict):
            logger.warning(f"{path}: top level isn't a JSON object")
            return False

        fields = {f.name: f for f in self.persistentFields()}

        for key, value in blob.items():
            field = fields.get(key)
            if field is None:
                logger.warning(f"{path}: unknown pref {key!r}")
                continue
            if value is None:
                continue

            try:
                setattr(self, key, fromJson(value, field.type))
            except ValueError as exc:
                logger.warning(f"{path}: {key}: {exc}")

        return True
