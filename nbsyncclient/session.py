# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
The session module defines the main programming interface of the client. It provides the
Session class which defines all methods, that are necessary to browse and modify the contents
of a notebook server. Further the module defines the functions create() and close(): both
functions operate on a global, application wide session object.
"""

from nbsyncclient.conf import Configuration
from nbsyncclient.store.caching_rest_store import CachingRestStore

__all__ = ("Session", "create", "close")

# A global session object.
_MAIN_SESSION = None


class Session(object):
    """
    The session class defines all basic methods, that are necessary to access the contents
    and kernel sessions of one notebook server.
    """

    def __init__(self, options, file_name=None, persist_options=False, http_session=None):
        """
        Constructor.

        :param options: A dict with configuration options such as 'location', 'token' or 'max_depth'.
        :type options: dict
        :param file_name: A path to a file that contains further configuration options.
        :type file_name: str
        :param persist_options: If set to True, all options will be saved in the configuration
                                file (except for the token).
        :type persist_options: bool
        :param http_session: Send requests through this session instead of a new FuturesSession.
        :type http_session: FuturesSession
        """
        self.__options = Configuration(options, file_name, persist_options)
        self.__store = CachingRestStore(
            location=self.__options["location"],
            token=self.__options["token"],
            max_depth=self.__options["max_depth"],
            max_branch=self.__options["max_branch"],
            execution_mode=self.__options["execution_mode"],
            request_timeout=self.__options["request_timeout"],
            retry_delay=self.__options["retry_delay"],
            max_workers=self.__options["max_workers"],
            api_version=self.__options["api_version"],
            http_session=http_session
        )
        self.__store.connect()

    #
    # Properties
    #

    @property
    def options(self):
        """
        Read only property for accessing all used options.

        :returns: All currently used options.
        :rtype: Configuration
        """
        return self.__options

    @property
    def server(self):
        """
        The identity of the server this session is connected to.
        """
        return self.__store.server

    #
    # Methods
    #

    def traverse(self, on_complete=None):
        """
        Take a new snapshot of the content tree of the server. The traversal runs in the
        background; its result is delivered to on_complete and through the returned future.

        The tree is a HierarchyNode(content, children). The order of directories among the
        children of a node depends on the order in which requests completed.

        :param on_complete: Called with the tree, or with None if the root could not be read.
        :type on_complete: callable

        :returns: A future that resolves with the tree or None.
        :rtype: Future
        """
        return self.__store.traverse(on_complete)

    def hierarchy(self, refresh=False):
        """
        Get all content entries of the last snapshot of the content tree, as an unordered list.
        If no snapshot was taken yet or refresh is True, a new one is taken.

        :param refresh: If True, take a new snapshot.
        :type refresh: bool

        :returns: A list of content objects, None if the root could not be read.
        :rtype: list
        """
        return self.__store.hierarchy(refresh)

    def sessions(self):
        """
        Get the kernel sessions running on the server.

        :returns: An index of the sessions by content path.
        :rtype: SessionIndex
        """
        return self.__store.sessions()

    def get(self, path):
        """
        Get a specific content entry from the server, including its content.

        :param path: The server relative path of the content.
        :type path: str

        :returns: The requested content.
        :rtype: ContentModel

        :raises: NotFoundError if there is no such content.
        """
        return self.__store.get(path)

    def set(self, content):
        """
        Save a modified or created content entry on the server.

        :param content: The content to save.
        :type content: ContentModel

        :returns: The saved content.
        :rtype: ContentModel
        """
        return self.__store.set(content)

    def rename(self, content, new_path):
        """
        Move a content entry on the server. The content object is updated in place and a kernel
        session running for it is moved along.

        :param content: The content to move.
        :type content: ContentModel
        :param new_path: The new server relative path.
        :type new_path: str

        :returns: The moved content.
        :rtype: ContentModel
        """
        return self.__store.rename(content, new_path)

    def upload(self, local_path, remote_dir=""):
        """
        Upload a local file. Notebooks are sent as JSON, other files as text or base64.

        :param local_path: The path of the local file.
        :type local_path: str
        :param remote_dir: The server relative target directory.
        :type remote_dir: str

        :returns: The uploaded content.
        :rtype: ContentModel
        """
        return self.__store.upload(local_path, remote_dir)

    def close(self):
        """
        Close all connections used by the session.
        """
        self.__store.disconnect()

    def is_open(self):
        return self.__store.is_connected()

    def clear_cache(self):
        self.__store.cache_store.delete(self.server)


def create(location=None, token=None, file_name=None, persist_options=False, **options):
    """
    Creates and returns a main session object. Multiple calls will return always
    the same object unless close() was called.
    """
    global _MAIN_SESSION
    if _MAIN_SESSION is None:
        if location is not None:
            options["location"] = location
        if token is not None:
            options["token"] = token

        _MAIN_SESSION = Session(options, file_name, persist_options)

    return _MAIN_SESSION


def close():
    """
    Close the main session object.
    """
    global _MAIN_SESSION
    if _MAIN_SESSION is not None:
        _MAIN_SESSION.close()
        _MAIN_SESSION = None
