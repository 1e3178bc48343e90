# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import nbsyncclient.util.declarative_models as dc
from nbsyncclient.model.model_fields import FTyped, FNumber, FChoice, FPayload
from nbsyncclient.util import helper


class Model(dc.Model):
    """
    A base class for all defined models, that also provides some factory methods as well as some
    constants for all model names, content types and content formats.

    Example:
    >>> content = Model.create(Model.CONTENT)
    >>> content.name = "analysis.ipynb"
    """

    CONTENT = "content"
    LEGACY_CONTENT = "legacy_content"
    KERNEL_SESSION = "kernel_session"

    FILE = "file"
    NOTEBOOK = "notebook"
    DIRECTORY = "directory"
    CONTENT_TYPES = (FILE, NOTEBOOK, DIRECTORY)

    JSON = "json"
    TEXT = "text"
    BASE64 = "base64"
    CONTENT_FORMATS = (JSON, TEXT, BASE64)

    LEGACY_VERSION = 2
    CURRENT_VERSION = 3

    _MODEL_MAP = {}

    @classmethod
    def create(cls, type_name, **kwargs):
        """
        Creates an instance of the model class matching the type name.

        :param type_name: The name of the model class.

        :returns: An instance of the respective model class.
        :rtype: Model
        """
        return cls._MODEL_MAP[type_name](**kwargs)

    @classmethod
    def exists(cls, type_name):
        """
        Check if a model name exists.

        :param type_name: The name of the model type.

        :returns: True if the model exists, False otherwise.
        :rtype: bool
        """
        return type_name in cls._MODEL_MAP

    @classmethod
    def content_model_name(cls, schema_version):
        """
        Get the name of the content model variant for a certain API schema version.

        :param schema_version: The major version of the server API.
        :type schema_version: int

        :returns: The model name.
        :rtype: str
        """
        if schema_version < cls.CURRENT_VERSION:
            return cls.LEGACY_CONTENT
        return cls.CONTENT


class ContentModel(Model):
    """
    One node of the content tree of a notebook server: a file, a notebook or a directory.

    Only the fields path, name and last_modified change after normalization, and only
    when a save or rename succeeded.
    """

    name            = FTyped(field_type=str, default="")
    path            = FTyped(field_type=str, default="")
    type            = FChoice(Model.CONTENT_TYPES, obligatory=True)
    format          = FChoice(Model.CONTENT_FORMATS)
    created         = FTyped(field_type=str)
    last_modified   = FTyped(field_type=str)
    writable        = FTyped(field_type=bool)
    mimetype        = FTyped(field_type=str)
    raw_content     = FPayload(name_mapping="content")
    size            = FNumber(min_val=0)

    schema_version  = FNumber(ignore=True, type_info="version", default=Model.CURRENT_VERSION, min_val=1)
    server          = FTyped(ignore=True, field_type=str)
    has_session     = FTyped(ignore=True, field_type=bool)

    @property
    def is_directory(self):
        return self.type == Model.DIRECTORY

    @property
    def is_notebook(self):
        return self.type == Model.NOTEBOOK

    @property
    def directory(self):
        """The directory component of the path, empty for top level entries"""
        return helper.dirname(self.path)

    @property
    def is_root(self):
        return self.is_directory and self.path == ""


class CurrentContentModel(ContentModel):
    """Content as returned by servers with API version 3 or newer"""
    schema_version  = FNumber(ignore=True, type_info="version", default=Model.CURRENT_VERSION, min_val=1)

Model._MODEL_MAP[Model.CONTENT] = CurrentContentModel


class LegacyContentModel(ContentModel):
    """Content as returned by servers with API version 2"""
    schema_version  = FNumber(ignore=True, type_info="version", default=Model.LEGACY_VERSION, min_val=1)

Model._MODEL_MAP[Model.LEGACY_CONTENT] = LegacyContentModel


class KernelSessionModel(Model):
    """
    A running kernel session and the canonical path of the content it belongs to.
    """

    session_id  = FTyped(field_type=str, obligatory=True, name_mapping="id")
    path        = FTyped(field_type=str, default="")
    kernel      = FTyped(field_type=dict)
    server      = FTyped(ignore=True, field_type=str)

    @property
    def kernel_id(self):
        if self.kernel is None:
            return None
        return self.kernel.get("id")

Model._MODEL_MAP[Model.KERNEL_SESSION] = KernelSessionModel
