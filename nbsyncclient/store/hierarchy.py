# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Bounded, concurrent traversal of the content tree of a notebook server.

A full listing of a file system backed server is unbounded and the number of concurrent
requests grows with max_branch ** max_depth, so both limits are small. Directories beyond
these limits are left out of the result. A subtree that can't be fetched ends up as a
directory without children and never aborts the traversal of its siblings.
"""

import logging
from collections import namedtuple
from concurrent.futures import Future

import nbsyncclient.store.convert as convert
from nbsyncclient.store import session_index
from nbsyncclient.util.futures import FanIn
from nbsyncclient.util import helper

logger = logging.getLogger(__name__)


HierarchyNode = namedtuple("HierarchyNode", ("content", "children"))
HierarchyNode.__doc__ = """
One node of a traversal result: a content model and the list of its child nodes.
The order of the children is only meaningful for non-directory entries.
"""


def flatten(tree):
    """
    Flatten a traversal result depth first. The root itself is not part of the result,
    every other directory appears once, followed by its descendants.

    :param tree: The traversal result.
    :type tree: HierarchyNode

    :returns: A list of content models.
    :rtype: list
    """
    contents = []
    for child in tree.children:
        contents.append(child.content)
        contents.extend(flatten(child))
    return contents


class HierarchyTraversal(object):
    """
    Expands the content tree of one server, starting at its root.
    """

    def __init__(self, store, cache_store, max_depth=2, max_branch=6):
        """
        Constructor.

        :param store: The store used to fetch listings and sessions.
        :type store: RestStore
        :param cache_store: The cache that receives the flattened result of a complete traversal.
        :type cache_store: CacheStore
        :param max_depth: Directories at this depth or deeper are not expanded.
        :type max_depth: int
        :param max_branch: Maximum number of directories expanded per directory.
        :type max_branch: int
        """
        self.__store = store
        self.__cache_store = cache_store
        self.__max_depth = max_depth
        self.__max_branch = max_branch
        self.__schema = None

    #
    # Properties
    #

    @property
    def store(self):
        return self.__store

    @property
    def max_depth(self):
        return self.__max_depth

    @property
    def max_branch(self):
        return self.__max_branch

    @property
    def schema(self):
        if self.__schema is None:
            self.__schema = self.store.schema
        return self.__schema

    #
    # Methods
    #

    def traverse(self, on_complete=None):
        """
        Build the session index, fetch the root listing and expand it. When the whole tree
        is known, its flattened form replaces the cached hierarchy of the server.

        :param on_complete: Called exactly once with the tree (HierarchyNode), or with None
                            if the root listing could not be fetched.
        :type on_complete: callable

        :returns: A future that resolves with the same value.
        :rtype: Future
        """
        result = Future()
        schema = self.schema
        server = self.store.server

        def complete(tree):
            if on_complete is not None:
                on_complete(tree)
            result.set_result(tree)

        def on_root(body, index):
            if body is None:
                root = schema.directory(server, "")
            else:
                try:
                    root = convert.collections_to_model(server, "", body, schema)
                except Exception as e:
                    logger.error("Unreadable root listing of %s: %r", server, e)
                    complete(None)
                    return
            self.expand("", index, 0, root, complete)

        def on_root_denied(index):
            logger.warning("Root listing of %s is denied, continuing with an empty tree", server)
            self.expand("", index, 0, schema.directory(server, ""), complete)

        def on_root_error(status):
            logger.error("Root listing of %s is unavailable (status %s)", server, status)
            complete(None)

        def on_sessions(index):
            self.store.fetch(schema.contents_location(""), lambda body: on_root(body, index), on_root_error,
                             on_denied=lambda body: on_root_denied(index))

        session_index.fetch_sessions(self.store, on_sessions, schema=schema)
        return result

    def expand(self, path, index, depth, node, on_subtree_ready):
        """
        Expand one directory whose listing is known. Non-directory children are annotated
        with the presence of a kernel session; directory children are fetched and expanded
        concurrently, as long as depth and branch limits allow.

        :param path: The path of the directory, empty for the root.
        :type path: str
        :param index: The kernel sessions of the server.
        :type index: SessionIndex
        :param depth: The depth of the directory, 0 for the root.
        :type depth: int
        :param node: The directory including its listing.
        :type node: ContentModel
        :param on_subtree_ready: Called exactly once with the merged HierarchyNode.
        :type on_subtree_ready: callable
        """
        candidates, others = self.partition(node, index, depth)

        def merge(subtrees):
            tree = HierarchyNode(node, others + subtrees)
            if path == "":
                self.__cache_store.set(self.store.server, flatten(tree))
            on_subtree_ready(tree)

        join = FanIn(len(candidates), merge)
        for candidate in candidates:
            self.__expand_candidate(candidate, index, depth + 1, join.add)

    def partition(self, node, index, depth):
        """
        Split the listing of a directory into the directories to expand and the leaf nodes.

        :returns: A tuple (candidates, others) of a list of directory models and a list of
                  HierarchyNode objects without children.
        :rtype: tuple
        """
        candidates = []
        others = []

        for child in self.children(node):
            if child.is_directory:
                if depth < self.max_depth and len(candidates) < self.max_branch:
                    candidates.append(child)
            else:
                child.has_session = child.path in index
                others.append(HierarchyNode(child, []))

        return candidates, others

    def children(self, node):
        """
        Normalize the child records of a directory. Unreadable records are skipped.
        """
        children = []
        for record in self.schema.children(node):
            if not isinstance(record, dict):
                logger.warning("Skipping entry of '%s' on %s: %s", node.path, self.store.server,
                               helper.summarize(record))
                continue
            try:
                children.append(convert.collections_to_model(self.store.server, node.path, record, self.schema))
            except Exception as e:
                logger.warning("Skipping entry of '%s' on %s: %r", node.path, self.store.server, e)
        return children

    #
    # Private functions
    #

    def __expand_candidate(self, candidate, index, depth, on_ready):
        server = self.store.server

        def childless():
            on_ready(HierarchyNode(candidate, []))

        def on_listing(body):
            if body is None:
                childless()
                return
            try:
                node = convert.collections_to_model(server, candidate.path, body, self.schema)
            except Exception as e:
                logger.warning("Unreadable listing of '%s' on %s: %r", candidate.path, server, e)
                childless()
                return
            self.expand(candidate.path, index, depth, node,
                        lambda subtree: on_ready(HierarchyNode(candidate, subtree.children)))

        def on_denied(body):
            logger.warning("Listing of '%s' on %s is denied", candidate.path, server)
            childless()

        def on_error(status):
            logger.warning("Listing of '%s' on %s is unavailable (status %s)", candidate.path, server, status)
            childless()

        self.store.fetch(self.schema.contents_location(candidate.path), on_listing, on_error, on_denied=on_denied)
