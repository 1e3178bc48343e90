# Python Notebook Sync Client
#
# Copyright (C) 2013  A. Stoewer
#                     A. Sobolev
#
# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License (see LICENSE.txt).

import unittest

from nbsyncclient.model.models import Model, CurrentContentModel, LegacyContentModel, KernelSessionModel


class TestModels(unittest.TestCase):
    """
    Unit tests for the model classes and their field checks.
    """

    def test_create(self):
        self.assertIsInstance(Model.create(Model.CONTENT), CurrentContentModel)
        self.assertIsInstance(Model.create(Model.LEGACY_CONTENT), LegacyContentModel)
        self.assertIsInstance(Model.create(Model.KERNEL_SESSION, session_id="s"), KernelSessionModel)
        self.assertTrue(Model.exists(Model.CONTENT))
        self.assertFalse(Model.exists("block"))
        self.assertRaises(KeyError, Model.create, "block")

    def test_defaults(self):
        current = Model.create(Model.CONTENT)
        legacy = Model.create(Model.LEGACY_CONTENT)

        self.assertEqual(current.schema_version, 3)
        self.assertEqual(legacy.schema_version, 2)
        self.assertEqual(current.path, "")
        self.assertIsNone(current.type)

    def test_field_checks(self):
        content = Model.create(Model.CONTENT, type=Model.FILE)

        content.format = Model.BASE64
        content.size = 0
        content.raw_content = "aGVsbG8="

        self.assertRaises(ValueError, setattr, content, "type", "symlink")
        self.assertRaises(ValueError, setattr, content, "type", None)
        self.assertRaises(ValueError, setattr, content, "size", -1)
        self.assertRaises(ValueError, setattr, content, "size", True)
        self.assertRaises(ValueError, setattr, content, "writable", "yes")
        self.assertRaises(ValueError, setattr, content, "raw_content", 42)
        self.assertRaises(KeyError, Model.create, Model.CONTENT, location="/api/contents")

    def test_item_access(self):
        content = Model.create(Model.CONTENT, type=Model.NOTEBOOK)

        content["path"] = "work/a.ipynb"

        self.assertEqual(content.path, "work/a.ipynb")
        self.assertEqual(content["type"], Model.NOTEBOOK)
        self.assertRaises(KeyError, content.__getitem__, "location")
        self.assertIn("raw_content", content)
        self.assertEqual(len(content), len(content.fields))

    def test_wire_fields(self):
        content = Model.create(Model.CONTENT)

        self.assertNotIn("server", content.wire_fields)
        self.assertNotIn("has_session", content.wire_fields)
        self.assertEqual(content.get_field("raw_content").name_mapping, "content")
        self.assertEqual(set(content.obligatory_fields), {"type"})
        self.assertIsNone(content.get_field("location"))

    def test_equality(self):
        a = Model.create(Model.CONTENT, path="a.ipynb", type=Model.NOTEBOOK)
        b = Model.create(Model.CONTENT, path="a.ipynb", type=Model.NOTEBOOK)
        c = Model.create(Model.LEGACY_CONTENT, path="a.ipynb", type=Model.NOTEBOOK)

        self.assertEqual(a, b)
        self.assertNotEqual(a, c)
        b.last_modified = "later"
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)

    def test_content_properties(self):
        root = Model.create(Model.CONTENT, type=Model.DIRECTORY)
        nb = Model.create(Model.CONTENT, path="work/sub/a.ipynb", type=Model.NOTEBOOK)

        self.assertTrue(root.is_root)
        self.assertTrue(root.is_directory)
        self.assertFalse(nb.is_root)
        self.assertTrue(nb.is_notebook)
        self.assertEqual(nb.directory, "work/sub")

    def test_kernel_session(self):
        session = Model.create(Model.KERNEL_SESSION, session_id="s", kernel={"id": "k"})

        self.assertEqual(session.kernel_id, "k")
        self.assertEqual(session.get_field("session_id").name_mapping, "id")
        self.assertRaises(ValueError, setattr, session, "session_id", None)


if __name__ == "__main__":
    unittest.main()
