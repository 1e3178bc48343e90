"""
Semi declarative model definitions. A model is a class inheriting from Model whose
fields are declared by assigning Field instances to class attributes. Each field
checks the values assigned to it and knows its name in the wire format.

Example model class:
>>> class Entry(Model):
>>>     name = Field(default="", field_type=str)
>>>     body = Field(name_mapping="content")

Create object and set/get values:
>>> entry = Entry(name="a.ipynb")
>>> entry["body"] = {}      # same as entry.body = {}
>>> del entry.name          # back to the default

Two models are equal if they are of the same class and all field values are equal.
"""

_VALUES = "_model_values"


class Field(object):
    """
    Describes one field of a model class and acts as the accessor of that field
    on model instances.
    """

    def __init__(self, ignore=False, field_type=object, type_info=None, default=None, obligatory=False,
                 name_mapping=None):
        """
        Constructor for Field.

        :param ignore: If True the field is local state and not part of the wire format.
        :type ignore: bool
        :param field_type: The type of the value of the field.
        :type field_type: class
        :param type_info: Some additional information about the type of the value e.g. a string.
        :type type_info: object
        :param default: The value of the field as long as nothing else was assigned.
        :type default: object
        :param obligatory: If True the field must never be None.
        :type obligatory: bool
        :param name_mapping: The field name used in the wire format, if it differs from the field name.
        :type name_mapping: str
        """
        self.__ignore = ignore
        self.__field_type = field_type
        self.__type_info = type_info
        self.__default = default
        self.__obligatory = obligatory
        self.__name_mapping = name_mapping
        self.__name = None
        self.__owner = None

    #
    # Properties
    #

    @property
    def ignore(self):
        return self.__ignore

    @property
    def field_type(self):
        return self.__field_type

    @property
    def type_info(self):
        return self.__type_info

    @property
    def default(self):
        return self.__default

    @property
    def obligatory(self):
        return self.__obligatory

    @property
    def name_mapping(self):
        return self.__name_mapping

    @property
    def name(self):
        return self.__name

    @property
    def wire_name(self):
        return self.__name_mapping or self.__name

    #
    # Methods
    #

    def bind(self, owner, name):
        """
        Called by the meta class when the field is declared.
        """
        self.__owner = owner
        self.__name = name

    def check(self, val):
        return True

    #
    # Descriptor protocol
    #

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return _values(instance).get(self.__name, self.__default)

    def __set__(self, instance, value):
        if not self.check(value):
            raise ValueError("Not a valid value for %s.%s: %r!" % (self.__owner, self.__name, value))
        _values(instance)[self.__name] = value

    def __delete__(self, instance):
        _values(instance).pop(self.__name, None)

    def __repr__(self):
        return str(self)

    def __str__(self):
        template = "{name: %s, ignore: %s, default: %s, field_type: %s, type_info: %s, obligatory: %s}"
        return template % (self.wire_name, self.ignore, self.default, self.field_type, self.type_info,
                           self.obligatory)


def _values(instance):
    values = instance.__dict__.get(_VALUES)
    if values is None:
        values = instance.__dict__[_VALUES] = {}
    return values


class ModelMeta(type):
    """
    Meta class of all models: it binds the declared fields and registers them,
    together with the fields inherited from base models, in the class attribute _fields.
    """

    def __new__(mcs, name, bases, dct):
        fields = {}
        for base in reversed(bases):
            fields.update(getattr(base, "_fields", {}))

        for attr, value in list(dct.items()):
            if isinstance(value, Field):
                value.bind(name, attr)
                fields[attr] = value

        dct["_fields"] = fields
        return type.__new__(mcs, name, bases, dct)


class Model(object, metaclass=ModelMeta):
    """
    Base class of all declarative models. Fields can be accessed as attributes or like
    the items of a map; iteration yields the field names.
    """

    def __init__(self, **kwargs):
        for f_name, value in kwargs.items():
            if f_name not in self._fields:
                raise KeyError("%s has no such field: %s" % (type(self).__name__, f_name))
            setattr(self, f_name, value)

    #
    # Properties
    #

    @property
    def fields(self):
        """Descriptors for all fields of the model"""
        return self.__select()

    @property
    def wire_fields(self):
        """Descriptors for all fields of the model, that are part of the wire format"""
        return self.__select(lambda f: not f.ignore)

    @property
    def optional_fields(self):
        return self.__select(lambda f: not f.obligatory)

    @property
    def obligatory_fields(self):
        return self.__select(lambda f: f.obligatory)

    #
    # Methods
    #

    def get_field(self, name):
        """
        Get a field descriptor by the name of the field.

        :param name: The name of the field.
        :type name: str

        :return: The field descriptor or None if the field does not exits.
        :rtype: Field
        """
        return self._fields.get(name)

    def __select(self, selector=None):
        return dict((n, f) for n, f in self._fields.items() if selector is None or selector(f))

    #
    # Built-in functions
    #

    def __getitem__(self, name):
        if name not in self._fields:
            raise KeyError("Model has no such field: %s" % name)
        return getattr(self, name)

    def __setitem__(self, name, value):
        if name not in self._fields:
            raise KeyError("Model has no such field: %s" % name)
        setattr(self, name, value)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(self[name] == other[name] for name in self)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    # mutable, hashed by identity
    __hash__ = object.__hash__

    def __len__(self):
        return len(self._fields)

    def __iter__(self):
        return iter(self._fields)

    def __str__(self):
        kv_str = ", ".join("%s=%r" % (name, getattr(self, name)) for name in self._fields)
        return "<%s: %s>" % (type(self).__name__, kv_str)

    def __repr__(self):
        return str(self)
