# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Lookup of the kernel sessions that are running on a server, by content path.
"""

import logging

import nbsyncclient.store.convert as convert

logger = logging.getLogger(__name__)


class SessionIndex(object):
    """
    Maps canonical content paths to kernel sessions. An index is built from scratch for
    every traversal and never merged with an older one.
    """

    def __init__(self, sessions=()):
        """
        Constructor.

        :param sessions: The kernel sessions to index.
        :type sessions: list
        """
        self.__sessions = dict((s.path, s) for s in sessions)

    def lookup(self, path):
        """
        Get the kernel session of a content path.

        :param path: The server relative path of a notebook or file.
        :type path: str

        :returns: The session or None.
        :rtype: KernelSessionModel
        """
        return self.__sessions.get(path)

    @property
    def paths(self):
        return list(self.__sessions.keys())

    def __contains__(self, path):
        return path in self.__sessions

    def __len__(self):
        return len(self.__sessions)

    def __iter__(self):
        return iter(self.__sessions.values())


def build_index(server, records, schema):
    """
    Build an index from the session records of a server. Records without id or path
    are skipped.

    :param server: The server identity.
    :type server: str
    :param records: The decoded list of session records.
    :type records: list
    :param schema: The schema of the server API.
    :type schema: CurrentSchema

    :rtype: SessionIndex
    """
    sessions = []
    for record in records or []:
        try:
            sessions.append(convert.collections_to_session(server, record, schema))
        except ValueError as e:
            logger.warning("Skipping session record of %s: %s", server, e)
    return SessionIndex(sessions)


def fetch_sessions(store, on_ready, on_error=None, schema=None):
    """
    Fetch the kernel sessions of a server and build the index. on_ready is called exactly
    once; if the sessions can't be fetched it gets an empty index.

    :param store: The store of the server.
    :type store: RestStore
    :param on_ready: Called with the SessionIndex.
    :type on_ready: callable
    :param on_error: Called with the status code before on_ready, if fetching failed.
    :type on_error: callable
    :param schema: The schema of the server API, by default the schema of the store.
    :type schema: CurrentSchema
    """
    schema = schema or store.schema

    def success(body):
        if body is not None and not isinstance(body, list):
            logger.warning("Unexpected session list from %s: %s", store.server, type(body).__name__)
            body = []
        index = build_index(store.server, body, schema)
        logger.debug("%d kernel session(s) running on %s", len(index), store.server)
        on_ready(index)

    def failure(status):
        logger.warning("Kernel sessions of %s are unavailable (status %s), continuing without", store.server,
                       status)
        if on_error is not None:
            on_error(status)
        on_ready(SessionIndex())

    store.fetch(schema.session_location(), success, failure)
