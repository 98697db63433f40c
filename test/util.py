# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os

import pygit2

from gitt.porcelain import Signature

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


def writeFile(path, text):
    # Prevent accidental littering of current working directory
    assert os.path.isabs(path), "pass me an absolute path"

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(text.encode("utf-8"))


class RepoBuilder:
    """
    Creates commits in a fresh repository without touching the working tree.
    Each commit is one minute younger than the previous one.
    """

    def __init__(self, path: str):
        os.makedirs(path, exist_ok=True)
        self.path = path
        self.repo = pygit2.init_repository(path)
        self.clock = TEST_SIGNATURE.time

    def signature(self, name="", email=""):
        self.clock += 60
        return Signature(name or TEST_SIGNATURE.name, email or TEST_SIGNATURE.email, self.clock, 0)

    def tree(self, files: dict[str, str]) -> pygit2.Oid:
        """ Build a tree from {path: contents}; paths may contain slashes. """
        nested = {}
        for path, contents in files.items():
            head, _, rest = path.partition("/")
            if rest:
                nested.setdefault(head, {})[rest] = contents
            else:
                nested[head] = contents

        builder = self.repo.TreeBuilder()
        for name, value in sorted(nested.items()):
            if isinstance(value, dict):
                builder.insert(name, self.tree(value), pygit2.enums.FileMode.TREE)
            else:
                blob = self.repo.create_blob(value.encode("utf-8"))
                builder.insert(name, blob, pygit2.enums.FileMode.BLOB)
        return builder.write()

    def commit(self, message: str, files: dict[str, str], parents=(), ref=None, author="") -> str:
        sig = self.signature(author)
        oid = self.repo.create_commit(
            ref, sig, sig, message, self.tree(files), [pygit2.Oid(hex=str(p)) for p in parents])
        return str(oid)

    def branch(self, name: str, commitId: str):
        self.repo.references.create(f"refs/heads/{name}", pygit2.Oid(hex=commitId), force=True)

    def checkout(self, name: str):
        """ Point HEAD at a branch (the working tree is left alone). """
        self.repo.set_head(f"refs/heads/{name}")

    def tag(self, name: str, commitId: str):
        self.repo.references.create(f"refs/tags/{name}", pygit2.Oid(hex=commitId))
