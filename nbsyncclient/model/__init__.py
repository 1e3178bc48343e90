# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
The model package contains classes that help to define easy inspectable
models. This is used in order to define the content and kernel session models
of the notebook server API as well as the schema variants of that API.
"""

__all__ = ("models", "model_fields", "schema")
