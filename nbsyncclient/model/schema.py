# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Notebook servers speak two generations of the contents API. Servers with API version 3
or newer use one model for every kind of content and always send full paths. Legacy
servers (version 2) send directory listings as bare lists, keep the directory and the
name of an entry in separate fields and use different endpoints.

All code that depends on the API generation lives in the two schema classes defined
here. A schema is selected once per server and then passed to everything that
normalizes, serializes or renames content.
"""

from urllib.parse import quote

from nbsyncclient.model.models import Model
from nbsyncclient.util import helper


class CurrentSchema(object):
    """
    Schema of servers with API version 3 or newer.
    """

    CONTENTS_LOCATION = "api/contents"
    SESSIONS_LOCATION = "api/sessions"

    # fields sent with a save request
    WIRE_FIELDS = ("name", "path", "type", "format", "content")

    def __init__(self, version=Model.CURRENT_VERSION):
        """
        Constructor.

        :param version: The major version of the server API.
        :type version: int
        """
        self.__version = version

    #
    # Properties
    #

    @property
    def version(self):
        return self.__version

    @property
    def model_name(self):
        return Model.content_model_name(self.version)

    @property
    def is_legacy(self):
        return False

    #
    # Locations
    #

    def contents_location(self, path):
        """
        Get the location of a content entry relative to the server root.

        :param path: The server relative path of the entry, empty for the root.
        :type path: str

        :returns: The location.
        :rtype: str
        """
        path = path.strip("/") if path else ""
        return "%s/%s" % (self.CONTENTS_LOCATION, quote(path))

    def session_location(self, session_id=None):
        if session_id is None:
            return self.SESSIONS_LOCATION
        return "%s/%s" % (self.SESSIONS_LOCATION, quote(session_id))

    #
    # Normalization
    #

    def normalize(self, server, parent_path, record):
        """
        Convert one record as received from the server into a content model.

        :param server: The server identity.
        :type server: str
        :param parent_path: The path that was requested to get this record.
        :type parent_path: str
        :param record: The decoded JSON record.
        :type record: dict

        :returns: The content model.
        :rtype: ContentModel

        :raises: ValueError if the record is not a valid content record.
        """
        if not isinstance(record, dict):
            raise ValueError("Content record must be an object, got: %s" % type(record).__name__)
        return self._from_record(server, record)

    def _from_record(self, server, record):
        model_obj = Model.create(self.model_name)

        for field_name, field in model_obj.wire_fields.items():
            value = record.get(field.wire_name)
            if value is not None:
                model_obj[field_name] = value

        if model_obj.type is None:
            raise ValueError("Content record has no type: %s" % helper.summarize(record))

        model_obj.schema_version = self.version
        model_obj.server = server
        return model_obj

    def directory(self, server, path, listing=None):
        """
        Create a directory model for a path, e.g. for a listing that could not be read.

        :param server: The server identity.
        :type server: str
        :param path: The path of the directory.
        :type path: str
        :param listing: Child records of the directory.
        :type listing: list

        :returns: The directory model.
        :rtype: ContentModel
        """
        path = path.strip("/") if path else ""
        return Model.create(
            self.model_name,
            name=helper.basename(path),
            path=path,
            type=Model.DIRECTORY,
            writable=False,
            raw_content=list(listing or []),
            schema_version=self.version,
            server=server
        )

    def new_content(self, server, path, content_type, content_format, payload):
        """
        Create a model for content that does not exist on the server yet.
        """
        return Model.create(
            self.model_name,
            name=helper.basename(path),
            path=path.strip("/"),
            type=content_type,
            format=content_format,
            raw_content=payload,
            schema_version=self.version,
            server=server
        )

    def children(self, content):
        """
        The child records of a directory model.

        :param content: A directory model.
        :type content: ContentModel

        :returns: A list of child records, empty if the directory has no listing.
        :rtype: list
        """
        listing = content.raw_content
        if not content.is_directory or not isinstance(listing, list):
            return []
        return listing

    #
    # Serialization
    #

    def wire_path(self, content):
        return content.path

    def to_wire(self, content, collections):
        """
        Build the request body that is used to save a content model.

        :param content: The content to serialize.
        :type content: ContentModel
        :param collections: The complete wire representation of the model as returned by
                            convert.model_to_collections().
        :type collections: dict

        :returns: The request body.
        :rtype: dict
        """
        result = dict((name, collections.get(name)) for name in self.WIRE_FIELDS)
        result["path"] = self.wire_path(content)
        return result

    #
    # Sessions
    #

    def session_path(self, record):
        """
        Get the canonical path of the content a kernel session belongs to.
        """
        path = record.get("path")
        if path is None:
            notebook = record.get("notebook") or {}
            path = notebook.get("path")
        return path

    def session_rename_body(self, new_path):
        return {"path": new_path}

    #
    # Rename
    #

    def rename_request(self, content, new_path):
        """
        Get the location and the body of a request that renames a content entry.

        :returns: A tuple (location, body)
        :rtype: tuple
        """
        return self.contents_location(content.path), {"path": new_path}


class LegacySchema(CurrentSchema):
    """
    Schema of servers with API version 2.
    """

    CONTENTS_LOCATION = "api/notebooks"

    def __init__(self, version=Model.LEGACY_VERSION):
        super(LegacySchema, self).__init__(version)

    @property
    def is_legacy(self):
        return True

    def normalize(self, server, parent_path, record):
        # mixed schema servers exist, typed records are read like current ones
        if isinstance(record, dict) and "type" in record:
            return self._from_record(server, record)

        if not isinstance(record, list):
            raise ValueError("Legacy record is neither typed content nor a listing: %s"
                             % helper.summarize(record))

        listing = []
        for item in record:
            # non-object entries are rejected when the listing is read
            if isinstance(item, dict):
                item = dict(item)
                item["path"] = helper.join_path(parent_path, item.get("name") or "")
            listing.append(item)

        return self.directory(server, parent_path, listing)

    def wire_path(self, content):
        return content.directory

    def session_path(self, record):
        notebook = record.get("notebook") or {}
        return helper.join_path(notebook.get("path") or "", notebook.get("name") or "")

    def session_rename_body(self, new_path):
        directory, name = helper.split_path(new_path)
        return {"notebook": {"path": directory, "name": name}}

    def rename_request(self, content, new_path):
        directory, name = helper.split_path(new_path)
        return self.contents_location(content.path), {"name": name, "path": directory}


def schema_for(version):
    """
    Select the schema for a server API version.

    :param version: The major version of the server API.
    :type version: int

    :returns: The schema.
    :rtype: CurrentSchema
    """
    if version < Model.CURRENT_VERSION:
        return LegacySchema(version)
    return CurrentSchema(version)
