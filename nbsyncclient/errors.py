# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Exceptions raised by the blocking parts of the client. The continuation based store
methods never raise these, they report failures to an error callback with at most
a status code.
"""


class ContentsError(RuntimeError):
    """
    A request to the notebook server failed for good.
    """

    def __init__(self, status=None, location=None):
        self.status = status
        self.location = location
        if status is None:
            msg = "Request for '%s' failed without response" % location
        else:
            msg = "Request for '%s' failed with status %d" % (location, status)
        super(ContentsError, self).__init__(msg)


class NotFoundError(ContentsError):
    """
    The server answered 404, the content does not exist (anymore).
    """


def error_for_status(status, location=None):
    """
    Get the exception matching a status code reported to an error callback.

    :param status: The status code or None if the server did not answer.
    :type status: int
    :param location: The requested location.
    :type location: str

    :rtype: ContentsError
    """
    if status == 404:
        return NotFoundError(status, location)
    return ContentsError(status, location)
