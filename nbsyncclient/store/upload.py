# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Preparation of local files for upload to a notebook server.
"""

import base64
import json
import os

from nbsyncclient.model.models import Model

NOTEBOOK_EXTENSION = ".ipynb"


def is_binary(data):
    """
    Check if raw file data can't be sent as text.

    :param data: The raw file data.
    :type data: bytes

    :rtype: bool
    """
    if b"\0" in data:
        return True
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


def classify(local_path):
    """
    Read a local file and determine how it is sent to the server: notebooks as JSON,
    binary files base64 encoded and all other files as text.

    :param local_path: The path of the local file.
    :type local_path: str

    :returns: A tuple (name, content type, content format, payload).
    :rtype: tuple

    :raises: ValueError if a notebook file is not valid JSON.
    """
    name = os.path.basename(local_path)
    with open(local_path, "rb") as f:
        data = f.read()

    if name.endswith(NOTEBOOK_EXTENSION):
        return name, Model.NOTEBOOK, Model.JSON, json.loads(data.decode("utf-8"))
    elif is_binary(data):
        return name, Model.FILE, Model.BASE64, base64.b64encode(data).decode("ascii")
    else:
        return name, Model.FILE, Model.TEXT, data.decode("utf-8")
