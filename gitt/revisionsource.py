# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Supplies commit history and diff text from a repository, via pygit2.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterator, Sequence

from gitt import settings
from gitt.porcelain import Commit, GitError, InvalidSpecError, Oid, Repo, tree_entry_id
from gitt.toolbox import gitDateFormat, messageSummary

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """ Fatal problem detected before the interactive session can start. """


class LoadError(Exception):
    """ The commit walk or diff generation failed mid-session. """


@dataclasses.dataclass(frozen=True)
class CommitInfo:
    id: str
    parent_ids: tuple[str, ...]
    subject: str
    author: str
    authorEmail: str
    time: int
    offset: int
    refs: tuple[str, ...] = ()


class RevisionSource:
    def __init__(self, repo: Repo, tip: Oid, paths: Sequence[str] = (), committish: str = ""):
        self.repo = repo
        self.tip = tip
        self.paths = tuple(p for p in paths if p)
        self.committish = committish
        self.refsByCommit = {str(oid): tuple(refs) for oid, refs in repo.map_commits_to_refs().items()}

        # Path filtering caches: commit -> parents to follow (None if the commit is shown),
        # and commit -> nearest shown ancestors
        self._simplifiedParentsMemo: dict[Oid, list[Oid] | None] = {}
        self._rewrittenMemo: dict[Oid, tuple[str, ...]] = {}

    @staticmethod
    def open(workingDirectory: str = "", committish: str = "", paths: Sequence[str] = ()) -> RevisionSource:
        workingDirectory = os.path.abspath(workingDirectory or os.getcwd())

        if not os.path.isdir(workingDirectory):
            raise StartupError(f"Invalid working directory: {workingDirectory}")

        try:
            repo = Repo.discover(workingDirectory)
        except GitError as exc:
            raise StartupError(f"Unable to load repository at {workingDirectory}: {exc}") from exc

        if repo is None:
            raise StartupError(f"Unable to load repository at {workingDirectory}")

        if repo.is_empty and not committish:
            raise StartupError(f"Repository at {workingDirectory} has no commits yet")

        try:
            tip = repo.resolve_committish(committish)
        except (KeyError, ValueError, InvalidSpecError, GitError) as exc:
            raise StartupError(f"Invalid revision specifier: {committish or 'HEAD'}") from exc

        relativePaths = []
        for path in paths:
            relative = repo.relative_workdir_path(path, workingDirectory)
            if relative == ".." or relative.startswith("../"):
                raise StartupError(f"Path is outside the repository: {path}")
            relativePaths.append(relative)

        logger.info(f"Opened {repo.path} at {tip.id} (paths: {relativePaths or 'all'})")
        return RevisionSource(repo, tip.id, relativePaths, committish)

    @property
    def isFiltered(self) -> bool:
        return bool(self.paths)

    # -------------------------------------------------------------------------
    # Commit walk

    def walk(self) -> Iterator[CommitInfo]:
        """
        Yield commits from the tip down, children before parents.
        Each call starts a new walk from scratch.
        """
        walker = self.repo.walk_from(self.tip, settings.prefs.chronologicalOrder)

        # Commits still reachable from the tip through simplified parents.
        # Topological order puts children first, so one pass fills it in time.
        reachable = {self.tip}

        for commit in walker:
            if not self.isFiltered:
                parentIds = tuple(str(p) for p in commit.parent_ids if p in self.repo)
                yield self.makeCommitInfo(commit, parentIds)
                continue

            if commit.id not in reachable:
                continue  # Behind a merge that took another parent's version
            reachable.discard(commit.id)

            follow = self._simplifiedParents(commit)
            if follow is not None:
                reachable.update(follow)
                continue  # Doesn't touch the paths we're interested in

            reachable.update(commit.parent_ids)
            parentIds = self._rewriteParents(commit.parent_ids)
            yield self.makeCommitInfo(commit, parentIds)

    def makeCommitInfo(self, commit: Commit, parentIds: tuple[str, ...]) -> CommitInfo:
        commitId = str(commit.id)
        subject, _ = messageSummary(commit.message, elision="")
        author = commit.author
        return CommitInfo(
            id=commitId,
            parent_ids=parentIds,
            subject=subject,
            author=author.name,
            authorEmail=author.email,
            time=author.time,
            offset=author.offset,
            refs=self.refsByCommit.get(commitId, ()))

    def _simplifiedParents(self, commit: Commit) -> list[Oid] | None:
        """
        Return None if the commit changes one of the filtered paths (it's shown).
        Otherwise, return the parents whose history must be followed instead:
        a commit that is TREESAME to one of its parents follows that parent only.
        """
        memo = self._simplifiedParentsMemo
        try:
            return memo[commit.id]
        except KeyError:
            pass

        mine = [tree_entry_id(commit.tree, p) for p in self.paths]

        if not commit.parents:
            result = None if any(entry is not None for entry in mine) else []
        else:
            result = None
            for parent in commit.parents:
                theirs = [tree_entry_id(parent.tree, p) for p in self.paths]
                if theirs == mine:
                    result = [parent.id]
                    break

        memo[commit.id] = result
        return result

    def _rewriteParents(self, parentIds: Sequence[Oid]) -> tuple[str, ...]:
        """ Replace parents that aren't shown with their nearest shown ancestors. """
        rewritten = []
        for parentId in parentIds:
            for ancestor in self._nearestShownAncestors(parentId):
                if ancestor not in rewritten:
                    rewritten.append(ancestor)
        return tuple(rewritten)

    def _nearestShownAncestors(self, start: Oid) -> tuple[str, ...]:
        memo = self._rewrittenMemo
        stack = [start]

        while stack:
            oid = stack[-1]
            if oid in memo:
                stack.pop()
                continue

            try:
                commit = self.repo.peel_commit(oid)
            except (KeyError, ValueError):
                # Missing from the object database (e.g. shallow clone boundary)
                memo[oid] = ()
                stack.pop()
                continue

            follow = self._simplifiedParents(commit)
            if follow is None:
                memo[oid] = (str(oid),)
                stack.pop()
                continue

            pending = [p for p in follow if p not in memo]
            if pending:
                stack.extend(pending)
                continue

            ancestors = []
            for p in follow:
                ancestors.extend(a for a in memo[p] if a not in ancestors)
            memo[oid] = tuple(ancestors)
            stack.pop()

        return memo[start]

    # -------------------------------------------------------------------------
    # Diff text

    def diffLines(self, commitId: str) -> Iterator[str]:
        """
        Yield the lines of a `git show`-like rendition of a commit:
        header, indented message, then the unified diff against its first parent.
        """
        try:
            commit = self.repo.peel_commit(commitId)
        except (KeyError, ValueError) as exc:
            raise LoadError(f"Commit not found: {commitId}") from exc

        refs = self.refsByCommit.get(str(commit.id))
        if refs:
            yield f"commit {commit.id} ({', '.join(refs)})"
        else:
            yield f"commit {commit.id}"

        if len(commit.parent_ids) > 1:
            yield "Merge: " + " ".join(str(p)[:settings.prefs.shortHashChars] for p in commit.parent_ids)

        author = commit.author
        yield f"Author: {author.name} <{author.email}>"
        yield f"Date:   {gitDateFormat(author.time, author.offset)}"
        yield ""

        for line in commit.message.rstrip().split("\n"):
            yield f"    {line}".rstrip()
        yield ""

        diff = self.repo.commit_diff(commit, context_lines=settings.prefs.contextLines)
        for patch in diff:
            if patch is None:
                continue
            yield from patch.data.decode("utf-8", errors="replace").splitlines()
