# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
import os as _os
from pathlib import Path as _Path

from pygit2 import (
    Commit,
    Diff,
    GitError,
    InvalidSpecError,
    Oid,
    Repository as _VanillaRepository,
    Signature,
    Tree,
    Walker,

    discover_repository,
    __version__ as PYGIT2_VERSION,
    LIBGIT2_VERSION,
)

from pygit2.enums import (
    DiffOption,
    ReferenceType,
    SortMode,
)


_logger = _logging.getLogger(__name__)


class RefPrefix:
    HEADS = "refs/heads/"
    REMOTES = "refs/remotes/"
    TAGS = "refs/tags/"

    @classmethod
    def split(cls, refname: str) -> tuple[str, str]:
        for prefix in cls.HEADS, cls.REMOTES, cls.TAGS:
            if refname.startswith(prefix):
                return prefix, refname[len(prefix):]
        return "", refname


def tree_entry_id(tree: Tree, path: str) -> Oid | None:
    """ Return the id of the blob or subtree at `path` in `tree`, or None if absent. """
    if not path:
        return tree.id
    try:
        return tree[path].id
    except KeyError:
        return None


class Repo(_VanillaRepository):
    """
    Drop-in replacement for pygit2.Repository with read-only front-ends to
    the git operations needed to browse history.
    """

    @staticmethod
    def discover(path: str | _Path) -> Repo | None:
        """ Find the repository that contains `path`, or None if there isn't one. """
        gitdir = discover_repository(str(path))
        if not gitdir:
            return None
        return Repo(gitdir)

    @property
    def head_commit(self) -> Commit:
        return self.head.peel(Commit)

    def peel_commit(self, commit_id: Oid | str) -> Commit:
        return self[commit_id].peel(Commit)

    def resolve_committish(self, committish: str) -> Commit:
        """
        Resolve a hash, branch, tag or any revision expression to a commit.
        Raise KeyError, ValueError, InvalidSpecError or GitError if impossible.
        """
        if not committish:
            return self.head_commit
        obj = self.revparse_single(committish)
        return obj.peel(Commit)

    def walk_from(self, tip: Oid, chronological: bool = True) -> Walker:
        sorting = SortMode.TOPOLOGICAL
        if chronological:
            # In strictly chronological ordering, a commit may appear before its
            # children if it was "created" later than its children. The graph
            # generator can't lay out such a sequence, so keep TOPOLOGICAL
            # in addition to TIME.
            sorting |= SortMode.TIME
        return self.walk(tip, sorting)

    def map_commits_to_refs(self) -> dict[Oid, list[str]]:
        """
        Return the shorthand names of all branches, tags, etc. keyed by the
        commit they point to. HEAD comes first in its commit's list.
        """
        refs: dict[Oid, list[str]] = {}

        try:
            head_id = self.head_commit.id
            refs.setdefault(head_id, []).append("HEAD")
        except (GitError, InvalidSpecError):
            pass  # Skip unborn head

        for ref in self.listall_reference_objects():
            if ref.type != ReferenceType.DIRECT or ref.name == "refs/stash":
                continue

            try:
                commit: Commit = ref.peel(Commit)
            except (InvalidSpecError, GitError) as e:
                # Some refs might not be committish, e.g. in linux's source repo
                _logger.info(f"{e} - Skipping ref '{ref.name}'")
                continue

            _, shorthand = RefPrefix.split(ref.name)
            refs.setdefault(commit.id, []).append(shorthand)

        return refs

    def commit_diff(self, commit: Commit, context_lines: int = 3) -> Diff:
        """
        Get the diff of a commit compared to its first parent
        (or to the empty tree if the commit is parentless).
        """
        flags = DiffOption.INCLUDE_TYPECHANGE

        if commit.parents:
            diff = self.diff(commit.parents[0], commit, flags=flags, context_lines=context_lines)
            diff.find_similar()
        else:
            # Parentless commit: diff with empty tree
            # (no tree passed to diff_to_tree == force diff against empty tree)
            diff = commit.tree.diff_to_tree(swap=True, flags=flags, context_lines=context_lines)

        return diff

    def relative_workdir_path(self, path: str, working_directory: str) -> str:
        """
        Convert a path given on the command line (relative to the user's
        working directory) to a repository-relative path with forward slashes.
        """
        root = self.workdir or _os.path.dirname(_os.path.normpath(self.path))
        absolute = _os.path.normpath(_os.path.join(working_directory, path))
        relative = _os.path.relpath(absolute, root)
        if relative == ".":
            return ""
        return relative.replace(_os.sep, "/")
