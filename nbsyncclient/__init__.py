# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
This package contains a client that synchronizes the content tree and the kernel
sessions of a remote notebook server through its REST API.
"""

import logging

from nbsyncclient.session import Session, close, create
from nbsyncclient.model.models import Model

NBSYNCCLIENT_VERSION = "0.2.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ("session", "model", "store", "conf", "errors", "test", "Session", "Model")
