# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

class BasicStore(object):
    """
    Abstract definition of a class that can be used to read and write content of a
    notebook server.
    """

    def __init__(self, location, token=None):
        """
        Constructor.

        :param location: The location from where the data should be accessed.
        :type location: str
        :param token: The API token (might be ignored by some kinds of store)
        :type token: str
        """
        self.__location = location
        self.__token = token

    #
    # Properties
    #

    @property
    def location(self):
        """
        The location from where the data should be accessed. For a notebook server this
        is the base URL, which also serves as the identity of the server.
        """
        return self.__location

    @property
    def token(self):
        """
        The API token (might be ignored by some kinds of store)
        """
        return self.__token

    #
    # Methods
    #

    def connect(self):
        """
        Connect the store to the data source defined by the given location.
        """
        raise NotImplementedError()

    def is_connected(self):
        """
        Test if the store is connected to the data source.

        :returns: True if the store is connected, False otherwise.
        :rtype: bool
        """
        raise NotImplementedError()

    def disconnect(self):
        """
        Disconnect the store from the data source.
        """
        raise NotImplementedError()

    def get(self, location):
        """
        Get an entity from the store.

        :param location: The location of the entity.
        :type location: str

        :returns: The entity or None.
        """
        raise NotImplementedError()

    def set(self, entity):
        """
        Save an entity in the store.

        :param entity: The entity to store.
        """
        raise NotImplementedError()
