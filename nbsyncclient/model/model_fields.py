# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

from numbers import Number

from nbsyncclient.util.declarative_models import Field


class FTyped(Field):
    """
    A field class that performs type checks. None is accepted for optional fields.
    """

    def check(self, val):
        if val is None:
            return not self.obligatory
        if self.field_type is not None:
            return isinstance(val, self.field_type)
        return True


class FNumber(FTyped):
    """
    A special field class for integral values.
    """

    def __init__(self, ignore=False, type_info="number", default=None, obligatory=False,
                 min_val=None, name_mapping=None):
        super(FNumber, self).__init__(ignore, int, type_info, default, obligatory, name_mapping)
        self.__min = min_val

    #
    # Properties
    #

    @property
    def min(self):
        return self.__min

    #
    # Methods
    #

    def check(self, val):
        if val is None:
            return not self.obligatory
        # bool is a subclass of int, but never a valid count or version
        if isinstance(val, bool) or not isinstance(val, Number):
            return False
        if self.min is not None and val < self.min:
            return False
        return True


class FChoice(Field):
    """
    A field class for values that must be one of a fixed set of strings.
    """

    def __init__(self, choices, ignore=False, default=None, obligatory=False, name_mapping=None):
        super(FChoice, self).__init__(ignore, str, "choice", default, obligatory, name_mapping)
        self.__choices = tuple(choices)

    @property
    def choices(self):
        return self.__choices

    def check(self, val):
        if val is None:
            return not self.obligatory
        return val in self.choices


class FPayload(Field):
    """
    A field for opaque payloads like nested JSON, text or base64 encoded data.
    """

    def __init__(self, ignore=False, default=None, name_mapping=None):
        super(FPayload, self).__init__(ignore, object, "payload", default, False, name_mapping)

    def check(self, val):
        return val is None or isinstance(val, (dict, list, str))
