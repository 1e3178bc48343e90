# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import unittest

from nbsyncclient.model.schema import schema_for
from nbsyncclient.store.rest_store import RestStore
from nbsyncclient.store.session_index import SessionIndex, build_index, fetch_sessions
from nbsyncclient.test.fake_server import SERVER, FakeHttpSession, FakeResponse, serve_sessions


class TestSessionIndex(unittest.TestCase):
    """
    Unit tests for the kernel session lookup.
    """

    def setUp(self):
        self.http = FakeHttpSession()
        self.store = RestStore(SERVER, retry_delay=0, api_version=5, http_session=self.http)
        self.store.connect()
        self.indexes = []
        self.errors = []

    def test_build_index(self):
        records = [
            {"id": "s1", "path": "a.ipynb", "kernel": {"id": "k1"}},
            {"id": "s2", "notebook": {"path": "work/b.ipynb"}},
            {"path": "no-id.ipynb"},
            {"id": "s3"},
            "garbage",
        ]

        with self.assertLogs("nbsyncclient.store.session_index", level="WARNING") as logs:
            index = build_index(SERVER, records, schema_for(5))

        self.assertEqual(len(logs.output), 3)
        self.assertEqual(len(index), 2)
        self.assertIn("a.ipynb", index)
        self.assertIn("work/b.ipynb", index)
        self.assertNotIn("no-id.ipynb", index)
        self.assertEqual(index.lookup("a.ipynb").kernel_id, "k1")
        self.assertIsNone(index.lookup("work/b.ipynb").kernel_id)
        self.assertIsNone(index.lookup("missing.ipynb"))
        self.assertEqual(set(index.paths), {"a.ipynb", "work/b.ipynb"})
        self.assertEqual(set(s.session_id for s in index), {"s1", "s2"})

    def test_build_legacy_index(self):
        records = [{"id": "s1", "notebook": {"path": "work", "name": "b.ipynb"}}]

        index = build_index(SERVER, records, schema_for(2))

        self.assertEqual(index.paths, ["work/b.ipynb"])

    def test_empty_index(self):
        index = SessionIndex()
        self.assertEqual(len(index), 0)
        self.assertNotIn("", index)

    def test_fetch_sessions(self):
        serve_sessions(self.http, "a.ipynb", "b.ipynb")

        fetch_sessions(self.store, self.indexes.append, self.errors.append)

        self.assertEqual(len(self.indexes), 1)
        self.assertEqual(set(self.indexes[0].paths), {"a.ipynb", "b.ipynb"})
        self.assertEqual(self.errors, [])

    def test_fetch_sessions_failure(self):
        self.http.add("GET", "api/sessions", FakeResponse(503))

        with self.assertLogs("nbsyncclient.store.session_index", level="WARNING"):
            fetch_sessions(self.store, self.indexes.append, self.errors.append)

        self.assertEqual(self.errors, [503])
        self.assertEqual(len(self.indexes), 1)
        self.assertEqual(len(self.indexes[0]), 0)
        self.assertEqual(self.http.count("GET", "api/sessions"), 3)

    def test_fetch_sessions_unexpected_body(self):
        self.http.add("GET", "api/sessions", FakeResponse(200, {"message": "sessions are disabled"}))

        fetch_sessions(self.store, self.indexes.append)

        self.assertEqual(len(self.indexes[0]), 0)


if __name__ == "__main__":
    unittest.main()
