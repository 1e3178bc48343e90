# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import base64
import json
import os
import shutil
import tempfile
import unittest

from nbsyncclient.errors import ContentsError, NotFoundError
from nbsyncclient.model.models import Model
from nbsyncclient.model.schema import schema_for
from nbsyncclient.store.cache_store import CacheStore
from nbsyncclient.store.caching_rest_store import CachingRestStore
from nbsyncclient.test.fake_server import SERVER, FakeHttpSession, FakeResponse, serve_sessions, serve_tree


class TestCachingRestStore(unittest.TestCase):
    """
    Unit tests for the store that combines requests, traversal and cache.
    """

    def setUp(self):
        self.http = FakeHttpSession()
        self.store = CachingRestStore(SERVER, retry_delay=0, api_version=4, http_session=self.http)
        self.store.connect()

    def tearDown(self):
        self.store.disconnect()

    def notebook(self, path):
        return schema_for(4).new_content(SERVER, path, Model.NOTEBOOK, Model.JSON, None)

    # tests --------------------------------------------------------------------

    def test_connect(self):
        self.assertTrue(self.store.is_connected())
        self.assertEqual(self.store.server, SERVER)
        self.assertEqual(self.store.execution_mode, "interactive")

    def test_hierarchy_is_cached(self):
        serve_tree(self.http, {"work": {"a.ipynb": None}, "b.txt": None})

        first = self.store.hierarchy()
        second = self.store.hierarchy()

        self.assertEqual(set(c.path for c in first), {"work", "work/a.ipynb", "b.txt"})
        self.assertEqual(first, second)
        self.assertEqual(self.http.count("GET", "api/contents/"), 1)

    def test_hierarchy_refresh(self):
        serve_tree(self.http, {"a.ipynb": None})
        self.store.hierarchy()

        serve_tree(self.http, {"a.ipynb": None, "b.ipynb": None})
        contents = self.store.hierarchy(refresh=True)

        self.assertEqual(set(c.path for c in contents), {"a.ipynb", "b.ipynb"})
        self.assertEqual(self.http.count("GET", "api/contents/"), 2)

    def test_hierarchy_unavailable(self):
        self.http.add("GET", "api/contents/", FakeResponse(500))
        self.assertIsNone(self.store.hierarchy())

    def test_shared_cache(self):
        cache_store = CacheStore()
        other_server = "http://other.test:8888"
        serve_tree(self.http, {"a.ipynb": None})
        store = CachingRestStore(SERVER, retry_delay=0, api_version=4, http_session=self.http,
                                 cache_store=cache_store)
        store.connect()
        cache_store.set(other_server, [])

        store.hierarchy()
        store.disconnect()

        self.assertIsNone(cache_store.get(SERVER))
        self.assertEqual(cache_store.get(other_server), [])

    def test_sessions(self):
        serve_sessions(self.http, "a.ipynb", "work/b.ipynb")

        index = self.store.sessions()

        self.assertEqual(len(index), 2)
        self.assertEqual(index.lookup("work/b.ipynb").session_id, "session-1")
        self.assertEqual(index.lookup("work/b.ipynb").kernel_id, "kernel-1")

    def test_get_not_found(self):
        self.assertRaises(NotFoundError, self.store.get, "missing.ipynb")

    def test_rename_moves_session(self):
        serve_sessions(self.http, "work/a.ipynb")
        self.http.add("PATCH", "api/contents/work/a.ipynb", FakeResponse(200, {}))
        self.http.add("PATCH", "api/sessions/session-0", FakeResponse(200, {}))
        content = self.notebook("work/a.ipynb")

        renamed = self.store.rename(content, "done/a.ipynb")

        self.assertIs(renamed, content)
        self.assertEqual(content.path, "done/a.ipynb")
        self.assertEqual(self.http.bodies("PATCH", "api/sessions/session-0"), [{"path": "done/a.ipynb"}])

    def test_rename_without_session(self):
        serve_sessions(self.http, "other.ipynb")
        self.http.add("PATCH", "api/contents/work/a.ipynb", FakeResponse(200, {}))

        self.store.rename(self.notebook("work/a.ipynb"), "done/a.ipynb")

        self.assertEqual(self.http.count("PATCH", "api/sessions/session-0"), 0)

    def test_rename_failure(self):
        serve_sessions(self.http, "work/a.ipynb")
        self.http.add("PATCH", "api/contents/work/a.ipynb", FakeResponse(409))
        content = self.notebook("work/a.ipynb")

        with self.assertRaises(ContentsError) as cm:
            self.store.rename(content, "done/a.ipynb")

        self.assertEqual(cm.exception.status, 409)
        self.assertEqual(cm.exception.location, "work/a.ipynb")
        self.assertEqual(content.path, "work/a.ipynb")
        self.assertEqual(self.http.count("PATCH", "api/sessions/session-0"), 0)

    def test_rename_session_failure_keeps_rename(self):
        serve_sessions(self.http, "work/a.ipynb")
        self.http.add("PATCH", "api/contents/work/a.ipynb", FakeResponse(200, {}))
        self.http.add("PATCH", "api/sessions/session-0", FakeResponse(500))

        with self.assertLogs("nbsyncclient.store.rest_store", level="WARNING"):
            renamed = self.store.rename(self.notebook("work/a.ipynb"), "done/a.ipynb")

        self.assertEqual(renamed.path, "done/a.ipynb")


class TestUpload(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()
        self.http = FakeHttpSession()
        self.store = CachingRestStore(SERVER, retry_delay=0, api_version=4, http_session=self.http)
        self.store.connect()

    def tearDown(self):
        shutil.rmtree(self.directory)

    def write(self, name, data):
        path = os.path.join(self.directory, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_upload_notebook(self):
        notebook = {"cells": [], "metadata": {}, "nbformat": 4, "nbformat_minor": 5}
        local_path = self.write("analysis.ipynb", json.dumps(notebook).encode("utf-8"))
        self.http.add("PUT", "api/contents/work/analysis.ipynb", FakeResponse(201, {"last_modified": "now"}))

        content = self.store.upload(local_path, "work")

        self.assertEqual(content.path, "work/analysis.ipynb")
        self.assertEqual(content.last_modified, "now")
        body = self.http.bodies("PUT", "api/contents/work/analysis.ipynb")[0]
        self.assertEqual(body["type"], "notebook")
        self.assertEqual(body["format"], "json")
        self.assertEqual(body["content"], notebook)

    def test_upload_binary(self):
        data = b"\x89PNG\r\n\x1a\n\0\0"
        local_path = self.write("plot.png", data)
        self.http.add("PUT", "api/contents/plot.png", FakeResponse(200, {}))

        self.store.upload(local_path)

        body = self.http.bodies("PUT", "api/contents/plot.png")[0]
        self.assertEqual(body["format"], "base64")
        self.assertEqual(base64.b64decode(body["content"]), data)

    def test_upload_rejected(self):
        local_path = self.write("notes.txt", b"hello")
        self.http.add("PUT", "api/contents/notes.txt", FakeResponse(403))

        self.assertRaises(ContentsError, self.store.upload, local_path)
        self.assertEqual(self.http.count("PUT", "api/contents/notes.txt"), 1)


if __name__ == "__main__":
    unittest.main()
