# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
This package contains the storage backend, basic converters, the traversal of the
remote content tree and the in-memory cache of traversal results.
"""


__all__ = ("convert", "rest_store", "cache_store", "caching_rest_store", "hierarchy", "session_index",
           "upload")
