# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import logging
import threading

from nbsyncclient.store.basic_store import BasicStore

logger = logging.getLogger(__name__)


class CacheStore(BasicStore):
    """
    A simple in-memory cache that holds the flattened result of the last complete traversal
    of each server. Entries are only ever replaced as a whole.
    """

    def __init__(self, location=None):
        super(CacheStore, self).__init__(location)
        self.__hierarchies = None
        self.__lock = threading.Lock()

    def connect(self):
        with self.__lock:
            if self.__hierarchies is None:
                self.__hierarchies = {}

    def is_connected(self):
        return self.__hierarchies is not None

    def disconnect(self):
        with self.__lock:
            self.__hierarchies = None

    def get(self, server):
        """
        Get the cached hierarchy of a server.

        :param server: The server identity.
        :type server: str

        :returns: A copy of the list of cached content, None if nothing is cached.
        :rtype: list
        """
        with self.__lock:
            hierarchy = self.__hierarchies.get(server)
            return None if hierarchy is None else list(hierarchy)

    def set(self, server, contents):
        """
        Replace the cached hierarchy of a server.

        :param server: The server identity.
        :type server: str
        :param contents: The flattened traversal result.
        :type contents: list

        :returns: The cached list.
        :rtype: list
        """
        contents = list(contents)
        with self.__lock:
            self.__hierarchies[server] = contents
        logger.debug("Cached %d entries for %s", len(contents), server)
        return contents

    def delete(self, server):
        with self.__lock:
            self.__hierarchies.pop(server, None)

    def servers(self):
        with self.__lock:
            return list(self.__hierarchies.keys())

    def clear_cache(self):
        with self.__lock:
            self.__hierarchies.clear()
