# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import json
import logging
import threading
from concurrent.futures import Future
from urllib.parse import urljoin

from requests_futures.sessions import FuturesSession

import nbsyncclient.store.convert as convert
from nbsyncclient.conf import INTERACTIVE, UNATTENDED, EXECUTION_MODES
from nbsyncclient.errors import NotFoundError, error_for_status
from nbsyncclient.model.models import Model
from nbsyncclient.model.schema import schema_for
from nbsyncclient.store.basic_store import BasicStore
from nbsyncclient.util import helper

logger = logging.getLogger(__name__)


class RestStore(BasicStore):
    """
    Implementation of a store, that uses the REST API of a notebook server as data source.

    All requests are sent concurrently through a FuturesSession. The results are delivered
    to continuations which run on the thread that completed the request, so they must not
    block on other requests.
    """

    URL_VERSION = 'api'

    # total number of attempts per request, including the first one
    MAX_ATTEMPTS = {INTERACTIVE: 3, UNATTENDED: 6}

    def __init__(self, location, token=None, execution_mode=INTERACTIVE, request_timeout=None, retry_delay=0.5,
                 max_workers=8, api_version=None, http_session=None):
        """
        Constructor.

        :param location: The base URL of the notebook server.
        :type location: str
        :param token: The API token of the server or None.
        :type token: str
        :param execution_mode: 'interactive' or 'unattended', governs retries and the handling of 403.
        :type execution_mode: str
        :param request_timeout: Timeout of a single request in seconds, None for no timeout.
        :type request_timeout: float
        :param retry_delay: Delay before the first retry, later retries wait longer.
        :type retry_delay: float
        :param max_workers: Maximum number of concurrently outstanding requests.
        :type max_workers: int
        :param api_version: The major version of the server API, if None it is queried from the server.
        :type api_version: int
        :param http_session: Use this session instead of creating a FuturesSession on connect.
        :type http_session: FuturesSession
        """
        super(RestStore, self).__init__(location.rstrip("/"), token)

        if execution_mode not in EXECUTION_MODES:
            raise ValueError("Unknown execution mode: %s" % execution_mode)

        self.__execution_mode = execution_mode
        self.__request_timeout = request_timeout
        self.__retry_delay = retry_delay
        self.__max_workers = max_workers
        self.__api_version = api_version
        self.__http_session = http_session
        self.__session = None
        self.__schema = None
        self.__schema_lock = threading.Lock()

    #
    # Properties
    #

    @property
    def server(self):
        """
        The identity of the server, i.e. its base URL without trailing slash.
        """
        return self.location

    @property
    def execution_mode(self):
        return self.__execution_mode

    @property
    def max_attempts(self):
        return RestStore.MAX_ATTEMPTS[self.execution_mode]

    @property
    def request_timeout(self):
        return self.__request_timeout

    @property
    def retry_delay(self):
        return self.__retry_delay

    @property
    def schema(self):
        """
        The schema of the server API. The version is looked up only once per store.
        """
        with self.__schema_lock:
            if self.__schema is None:
                version = self.__api_version
                if version is None:
                    version = self.query_version()
                self.__schema = schema_for(version)
                logger.debug("Using API schema version %d for %s", version, self.server)
            return self.__schema

    #
    # Methods
    #

    def connect(self):
        """
        Prepare the HTTP session. Note: no request is sent before the first fetch.
        """
        session = self.__http_session
        if session is None:
            session = FuturesSession(max_workers=self.__max_workers)

        if self.token is not None:
            session.headers["Authorization"] = "token %s" % self.token

        self.__session = session

    def is_connected(self):
        """
        Check if the store is connected.

        :returns: bool
        """
        return False if self.__session is None else True

    def disconnect(self):
        """
        Close the HTTP session. Requests still outstanding run to completion.
        """
        if self.__session is not None:
            self.__session.close()
        self.__session = None

    def url(self, location):
        """
        Resolve a location relative to the server root.
        """
        return urljoin(self.server + "/", location)

    def fetch(self, location, on_success, on_error, attempt=0, method="GET", data=None, retry=True,
              on_denied=None):
        """
        Send one logical request to the server. Exactly one of the continuations is invoked
        exactly once.

        Failures are classified by status code: 404 is reported at once; 403 in unattended
        mode counts as success with whatever body came with the error (GET only); any other
        status or a failed transport is retried with a linearly growing delay until the
        attempt ceiling of the execution mode is reached.

        :param location: The location of the resource relative to the server root.
        :type location: str
        :param on_success: Called with the decoded body (or None for an empty body).
        :type on_success: callable
        :param on_error: Called with the status code, or None if the server never answered.
        :type on_error: callable
        :param attempt: Number of attempts made so far.
        :type attempt: int
        :param method: The HTTP method.
        :type method: str
        :param data: A JSON encoded request body.
        :type data: str
        :param retry: If False the request is sent only once.
        :type retry: bool
        :param on_denied: Called instead of on_success with the body of a degraded 403, if given.
        :type on_denied: callable
        """
        if self.__session is None:
            raise RuntimeError("The store is not connected to %s" % self.server)

        kwargs = {}
        if data is not None:
            kwargs["data"] = data
            kwargs["headers"] = {"Content-Type": "application/json"}
        if self.request_timeout is not None:
            kwargs["timeout"] = self.request_timeout

        future = self.__session.request(method, self.url(location), **kwargs)
        future.add_done_callback(
            lambda f: self.__complete(f, location, on_success, on_error, attempt, method, data, retry, on_denied)
        )

    def request(self, location, method="GET", data=None, retry=True):
        """
        Like fetch(), but the result is delivered through a future.

        :returns: A future that resolves with the decoded body or fails with ContentsError.
        :rtype: Future
        """
        result = Future()

        def on_error(status):
            result.set_exception(error_for_status(status, self.url(location)))

        self.fetch(location, result.set_result, on_error, method=method, data=data, retry=retry)
        return result

    def query_version(self):
        """
        Ask the server for its version. Servers without version resource are legacy servers.

        :returns: The major version of the server API.
        :rtype: int
        """
        try:
            body = self.request(RestStore.URL_VERSION).result()
        except NotFoundError:
            logger.info("%s has no version resource, assuming legacy API", self.server)
            return Model.LEGACY_VERSION

        if not isinstance(body, dict) or body.get("version") is None:
            logger.warning("%s sent no version, assuming legacy API", self.server)
            return Model.LEGACY_VERSION

        return helper.major_version(body["version"])

    def get(self, location):
        """
        Get a single content entry, a directory including its listing.

        :param location: The server relative path of the content.
        :type location: str

        :returns: The content.
        :rtype: ContentModel

        :raises: NotFoundError if the content was not found on the server (404).
        """
        schema = self.schema
        body = self.request(schema.contents_location(location)).result()
        return convert.collections_to_model(self.server, location, body, schema)

    def save(self, content, on_success, on_error, *args):
        """
        Save a content entry. The request is not retried.

        :param content: The content to save.
        :type content: ContentModel
        :param on_success: Called with the additional arguments once the server confirmed.
        :type on_success: callable
        :param on_error: Called with the status code.
        :type on_error: callable
        """
        schema = schema_for(content.schema_version)
        data = convert.model_to_json_response(content, schema)

        def success(body):
            if isinstance(body, dict) and body.get("last_modified"):
                content.last_modified = body["last_modified"]
            logger.debug("Saved '%s' on %s", content.path, self.server)
            on_success(*args)

        def failure(status):
            logger.error("Saving '%s' on %s failed with status %s", content.path, self.server, status)
            on_error(status)

        self.fetch(schema.contents_location(content.path), success, failure, method="PUT", data=data,
                   retry=False)

    def set(self, content):
        """
        Save a content entry and wait for the result.

        :param content: The content to save.
        :type content: ContentModel

        :returns: The saved content.
        :rtype: ContentModel

        :raises: ContentsError if the server rejected the content.
        """
        location = self.url(schema_for(content.schema_version).contents_location(content.path))
        result = Future()
        self.save(content, result.set_result, lambda status: result.set_exception(error_for_status(status, location)),
                  content)
        return result.result()

    def rename(self, content, new_path, on_success, on_error):
        """
        Move a content entry to a new path. On success path, name and modification time
        of the content are updated in place. The request is not retried.

        :param content: The content to rename.
        :type content: ContentModel
        :param new_path: The new server relative path.
        :type new_path: str
        :param on_success: Called with the updated content.
        :type on_success: callable
        :param on_error: Called with the status code.
        :type on_error: callable
        """
        schema = schema_for(content.schema_version)
        new_path = new_path.strip("/")
        location, body = schema.rename_request(content, new_path)
        old_path = content.path

        def success(response_body):
            content.path = new_path
            content.name = helper.basename(new_path)
            if isinstance(response_body, dict) and response_body.get("last_modified"):
                content.last_modified = response_body["last_modified"]
            logger.debug("Renamed '%s' to '%s' on %s", old_path, new_path, self.server)
            on_success(content)

        def failure(status):
            logger.error("Renaming '%s' to '%s' on %s failed with status %s", old_path, new_path, self.server,
                         status)
            on_error(status)

        self.fetch(location, success, failure, method="PATCH", data=json.dumps(body), retry=False)

    def rename_session(self, kernel_session, new_path):
        """
        Tell the server that a kernel session now belongs to another path. The outcome
        is only logged.

        :param kernel_session: The session to update.
        :type kernel_session: KernelSessionModel
        :param new_path: The new server relative path of the content.
        :type new_path: str
        """
        schema = self.schema
        body = schema.session_rename_body(new_path.strip("/"))

        def success(response_body):
            kernel_session.path = new_path.strip("/")
            logger.info("Session %s now belongs to '%s'", kernel_session.session_id, kernel_session.path)

        def failure(status):
            logger.warning("Session %s could not be moved to '%s' (status %s)", kernel_session.session_id,
                           new_path, status)

        self.fetch(schema.session_location(kernel_session.session_id), success, failure, method="PATCH",
                   data=json.dumps(body), retry=False)

    #
    # Private functions
    #

    def __complete(self, future, location, on_success, on_error, attempt, method, data, retry, on_denied):
        url = self.url(location)
        status, body, malformed = None, None, False

        error = future.exception()
        if error is None:
            response = future.result()
            status = response.status_code
            try:
                body = convert.json_to_collections(response.content)
            except ValueError:
                malformed = True

        logger.debug("%s %s (attempt %d): status=%s error=%s body=%s", method, url, attempt + 1, status, error,
                     "<malformed>" if malformed else helper.summarize(body))

        if status is not None and 200 <= status < 300 and not malformed:
            on_success(body)
            return

        if status == 404:
            logger.debug("%s %s: not found", method, url)
            on_error(status)
            return

        if status == 403 and method == "GET" and self.execution_mode == UNATTENDED:
            logger.warning("%s %s: permission denied, continuing with partial data", method, url)
            (on_denied or on_success)(body)
            return

        if retry and attempt + 1 < self.max_attempts:
            delay = (attempt + 1) * self.retry_delay
            logger.debug("%s %s: retrying in %.2fs", method, url, delay)
            self.__schedule(delay, self.__retry, status, location, on_success, on_error, attempt + 1, method, data,
                            retry, on_denied)
            return

        logger.error("%s %s failed after %d attempt(s): status=%s error=%s", method, url, attempt + 1, status,
                     error)
        on_error(status)

    def __retry(self, status, location, on_success, on_error, attempt, method, data, retry, on_denied):
        # the store may have been disconnected while the retry was pending
        if self.__session is None:
            logger.warning("%s %s: store disconnected, giving up after %d attempt(s)", method, self.url(location),
                           attempt)
            on_error(status)
            return
        self.fetch(location, on_success, on_error, attempt, method, data, retry, on_denied)

    def __schedule(self, delay, func, *args):
        if delay <= 0:
            func(*args)
            return

        timer = threading.Timer(delay, func, args)
        timer.daemon = True
        timer.start()
