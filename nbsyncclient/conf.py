# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

"""
Very simple configuration file handling.
"""

import json
import os

import appdirs

INTERACTIVE = "interactive"
UNATTENDED = "unattended"
EXECUTION_MODES = (INTERACTIVE, UNATTENDED)


class Configuration(dict):
    """
    A configuration class that extends dictionary
    """

    NAME = 'nbsyncclient'

    DEFAULTS = {
        'location': 'http://localhost:8888',
        'token': None,
        'max_depth': 2,
        'max_branch': 6,
        'request_timeout': None,
        'execution_mode': INTERACTIVE,
        'retry_delay': 0.5,
        'max_workers': 8,
        'api_version': None,
    }

    def __init__(self, options=None, file_name=None, persist_options=False):
        """
        The init function is the only feature that is overridden by this class. The init function
        loads options from a file ('file_name') and updates them with the options ('options') that
        are passed directly as a parameter. If some options are still missing it will set
        useful defaults for them.

        :param options: A dict of key value pairs, that will complement or override options from the file.
        :type options: dict
        :param file_name: The name of the JSON configuration file.
        :type file_name: str
        :param persist_options: If True, update the configuration file.
        :type persist_options: bool

        :raises: ValueError if an option has an invalid value.
        """
        super(Configuration, self).__init__()

        # set options to empty dict if None
        if options is None:
            options = {}

        # read config from file
        if file_name is None:
            file_name = Configuration.default_file_name()

        f_options = {}
        try:
            with open(file_name, 'r', encoding='UTF-8') as fhandle:
                f_options = json.load(fhandle)
        except IOError:
            pass

        # merge with other options
        tmp = f_options.copy()
        tmp.update(options)
        options = tmp

        # set defaults
        self['version'] = "0.2.0"
        for key, default in Configuration.DEFAULTS.items():
            self[key] = options.get(key, default)

        self.__validate()

        # write options back
        if persist_options:
            d = os.path.dirname(file_name)
            if d and not os.path.exists(d):
                os.makedirs(d)
            options = self.copy()
            if f_options.get('token') is None:
                del options['token']
            with open(file_name, 'w+', encoding='UTF-8') as fhandle:
                fhandle.write(json.dumps(options, sort_keys=True, indent=4 * ' '))

    @staticmethod
    def default_file_name():
        return os.path.join(appdirs.user_data_dir(appname=Configuration.NAME), Configuration.NAME + '.conf')

    def __validate(self):
        if self['execution_mode'] not in EXECUTION_MODES:
            raise ValueError("execution_mode must be one of %s, got: %s"
                             % (", ".join(EXECUTION_MODES), self['execution_mode']))

        for key in ('max_depth', 'max_branch', 'max_workers'):
            if not isinstance(self[key], int) or self[key] < 0:
                raise ValueError("%s must be a non negative integer, got: %s" % (key, self[key]))

        if self['max_workers'] < 1:
            raise ValueError("max_workers must be at least 1")
