# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import json

from nbsyncclient.model.models import Model


def json_to_collections(string):
    """
    Converts a json string from the REST API into a collection (list, dict) that
    represents the content of the json string.

    :param string: The json encoded string or bytes from the REST API.
    :type string: str|bytes

    :returns: A list or dict that represents the parsed string, None for an empty body.
    :rtype: dict|list

    :raises: ValueError if the string is not valid JSON.
    """
    if string is None:
        return None
    if isinstance(string, bytes):
        string = string.decode("utf-8")
    if not string.strip():
        return None
    return json.loads(string)


def collections_to_model(server, parent_path, record, schema):
    """
    Converts a record as produced by the json module into a content model. How the
    record is read depends on the schema of the server.

    :param server: The server identity.
    :type server: str
    :param parent_path: The path that was requested to get this record.
    :type parent_path: str
    :param record: The decoded record.
    :type record: dict|list
    :param schema: The schema of the server API.
    :type schema: CurrentSchema

    :returns: The converted content.
    :rtype: ContentModel

    :raises: ValueError
    """
    return schema.normalize(server, parent_path, record)


def collections_to_session(server, record, schema):
    """
    Converts a kernel session record into a session model. The path of the model is the
    canonical content path, regardless of how the server represents it.

    :param server: The server identity.
    :type server: str
    :param record: The decoded session record.
    :type record: dict
    :param schema: The schema of the server API.
    :type schema: CurrentSchema

    :returns: The converted session.
    :rtype: KernelSessionModel

    :raises: ValueError
    """
    if not isinstance(record, dict) or record.get("id") is None:
        raise ValueError("Session identifier is missing")

    path = schema.session_path(record)
    if not path:
        raise ValueError("Session %s has no content path" % record.get("id"))

    return Model.create(
        Model.KERNEL_SESSION,
        session_id=record["id"],
        path=path,
        kernel=record.get("kernel"),
        server=server
    )


def model_to_collections(model):
    """
    Converts a single model into a dict representation of this model, using the field
    names of the wire format. Local fields like the server identity are left out.

    :param model: The model to convert.
    :type model: Model

    :returns: A dictionary that represents this model.
    :rtype: dict
    """
    result = {}
    for field_name, field in model.wire_fields.items():
        result[field.wire_name] = model[field_name]
    return result


def model_to_json_response(model, schema):
    """
    Converts a single content model into a json encoded string that can be used as the
    body of a save request.

    :param model: The model to convert
    :type model: ContentModel
    :param schema: The schema of the server API.
    :type schema: CurrentSchema

    :returns: A json encoded string representing the model.
    :rtype: str
    """
    return json.dumps(schema.to_wire(model, model_to_collections(model)))
