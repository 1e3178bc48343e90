# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import logging
from concurrent.futures import Future

from nbsyncclient.errors import error_for_status
from nbsyncclient.store import session_index, upload
from nbsyncclient.store.basic_store import BasicStore
from nbsyncclient.store.cache_store import CacheStore
from nbsyncclient.store.hierarchy import HierarchyTraversal
from nbsyncclient.store.rest_store import RestStore
from nbsyncclient.util import helper

logger = logging.getLogger(__name__)


class CachingRestStore(BasicStore):
    """
    A store implementation, that uses an instance of RestStore and CacheStore to implement
    an interface to the REST API of a notebook server with an in-memory snapshot of its content
    tree. The snapshot is taken by a bounded traversal and replaced by the next one.
    """

    def __init__(self, location, token=None, max_depth=2, max_branch=6, cache_store=None, **options):
        """
        Constructor.

        :param location: The base URL of the notebook server.
        :type location: str
        :param token: The API token of the server or None.
        :type token: str
        :param max_depth: Directories at this depth or deeper are not expanded by traverse().
        :type max_depth: int
        :param max_branch: Maximum number of directories expanded per directory by traverse().
        :type max_branch: int
        :param cache_store: A cache shared with other stores, by default each store has its own.
        :type cache_store: CacheStore
        :param options: Further options of RestStore, e.g. execution_mode or request_timeout.
        """
        super(CachingRestStore, self).__init__(location.rstrip("/"), token)

        self.__rest_store = RestStore(location, token, **options)
        self.__cache_store = cache_store or CacheStore()
        self.__traversal = HierarchyTraversal(self.__rest_store, self.__cache_store, max_depth, max_branch)

    #
    # Properties
    #

    @property
    def server(self):
        return self.rest_store.server

    @property
    def rest_store(self):
        return self.__rest_store

    @property
    def cache_store(self):
        return self.__cache_store

    @property
    def traversal(self):
        return self.__traversal

    @property
    def execution_mode(self):
        return self.rest_store.execution_mode

    #
    # Methods
    #

    def connect(self):
        """
        Prepare the HTTP session and initialize the cache.
        """
        self.rest_store.connect()
        self.cache_store.connect()

    def is_connected(self):
        """
        Check the connection and the presence of a cache.
        """
        return self.rest_store.is_connected() and self.cache_store.is_connected()

    def disconnect(self):
        """
        Close the HTTP session and drop the cached hierarchy of this server.
        """
        self.rest_store.disconnect()
        if self.cache_store.is_connected():
            self.cache_store.delete(self.server)

    def traverse(self, on_complete=None):
        """
        Take a new snapshot of the content tree. See HierarchyTraversal.traverse().

        :returns: A future that resolves with the tree or None.
        :rtype: Future
        """
        return self.traversal.traverse(on_complete)

    def hierarchy(self, refresh=False):
        """
        Get the flattened content tree of the server. If nothing is cached or refresh is True,
        a traversal is run first.

        :param refresh: If True, always take a new snapshot.
        :type refresh: bool

        :returns: A list of content models, None if the root could not be read.
        :rtype: list
        """
        if not refresh:
            contents = self.cache_store.get(self.server)
            if contents is not None:
                return contents

        if self.traverse().result() is None:
            return None
        return self.cache_store.get(self.server)

    def sessions(self):
        """
        Get the kernel sessions running on the server.

        :rtype: SessionIndex
        """
        result = Future()
        session_index.fetch_sessions(self.rest_store, result.set_result)
        return result.result()

    def get(self, location):
        """
        Get a single content entry from the server, bypassing the cache.

        :param location: The server relative path of the content.
        :type location: str

        :rtype: ContentModel
        """
        return self.rest_store.get(location)

    def set(self, content):
        """
        Save a content entry on the server.

        :param content: The content to save.
        :type content: ContentModel

        :returns: The saved content.
        :rtype: ContentModel
        """
        return self.rest_store.set(content)

    def rename(self, content, new_path, rename_session=True):
        """
        Move a content entry and wait for the result. A kernel session that belongs to the
        content is moved along, on a best-effort basis.

        :param content: The content to rename, updated in place.
        :type content: ContentModel
        :param new_path: The new server relative path.
        :type new_path: str
        :param rename_session: If True, move the kernel session of the content too.
        :type rename_session: bool

        :returns: The renamed content.
        :rtype: ContentModel

        :raises: ContentsError if the server rejected the rename.
        """
        kernel_session = None
        if rename_session and not content.is_directory:
            kernel_session = self.sessions().lookup(content.path)

        old_path = content.path
        result = Future()
        self.rest_store.rename(content, new_path, result.set_result,
                               lambda status: result.set_exception(error_for_status(status, old_path)))
        renamed = result.result()

        if kernel_session is not None:
            self.rest_store.rename_session(kernel_session, renamed.path)

        return renamed

    def upload(self, local_path, remote_dir=""):
        """
        Upload a local file into a directory of the server.

        :param local_path: The path of the local file.
        :type local_path: str
        :param remote_dir: The server relative directory, empty for the root.
        :type remote_dir: str

        :returns: The uploaded content.
        :rtype: ContentModel
        """
        name, content_type, content_format, payload = upload.classify(local_path)
        path = helper.join_path(remote_dir, name)
        content = self.rest_store.schema.new_content(self.server, path, content_type, content_format, payload)
        logger.debug("Uploading '%s' as %s/%s to '%s'", local_path, content_type, content_format, path)
        return self.set(content)
