import unittest

from hidden_heaven.errors import InvalidArgument
from hidden_heaven.planning.policy import HidePolicy, DEFAULT_POLICY, classify_items, classify_item


class TestPolicy(unittest.TestCase):
    def test_partition_is_total_and_disjoint(self):
        items = {"src", "README.md", "node_modules", "dist", "tsconfig.json", "jest.config.js"}
        included, excluded = classify_items(items, DEFAULT_POLICY)

        self.assertEqual(included | excluded, items)
        self.assertEqual(included & excluded, set())
        self.assertEqual(included, {"node_modules", "dist", "tsconfig.json", "jest.config.js"})
        self.assertEqual(excluded, {"src", "README.md"})

    def test_explicit_include_list(self):
        policy = HidePolicy(include=["node_modules"])
        included, excluded = classify_items(["src", "README.md", "node_modules"], policy)

        self.assertEqual(included, {"node_modules"})
        self.assertEqual(excluded, {"src", "README.md"})

    def test_exclude_beats_include(self):
        policy = HidePolicy(include=["*.json"], exclude=["package.json"])
        included, excluded = classify_items(["package.json", "tsconfig.json"], policy)

        self.assertEqual(included, {"tsconfig.json"})
        self.assertEqual(excluded, {"package.json"})

    def test_glob_patterns_are_case_sensitive(self):
        policy = HidePolicy(include=[".eslintrc*"])
        self.assertTrue(policy.is_included(".eslintrc.json"))
        self.assertFalse(policy.is_included(".ESLINTRC"))

    def test_reserved_names_never_included(self):
        policy = HidePolicy(include=["*"]).with_reserved("hidden-heaven", ".vscode")
        included, excluded = classify_items(["hidden-heaven", ".vscode", "dist"], policy)

        self.assertEqual(included, {"dist"})
        self.assertEqual(excluded, {"hidden-heaven", ".vscode"})

    def test_with_reserved_does_not_mutate_original(self):
        policy = HidePolicy(include=["*"])
        policy.with_reserved("stash")
        self.assertEqual(policy.reserved, ())

    def test_policy_keeps_its_own_copy_of_patterns(self):
        include = ["node_modules"]
        policy = HidePolicy(include=include)
        include.append("src")

        self.assertEqual(policy.include, ("node_modules",))
        self.assertFalse(policy.is_included("src"))
        with self.assertRaises(AttributeError):
            policy.include.append("src")

    def test_classification_ignores_filesystem(self):
        # Names that do not exist anywhere are still classified
        policy = HidePolicy(include=["node_modules"])
        self.assertTrue(classify_item("node_modules", ["node_modules"], policy))

    def test_classify_item_outside_listing_fails(self):
        policy = HidePolicy(include=["node_modules"])
        with self.assertRaises(InvalidArgument):
            classify_item("node_modules", ["src"], policy)

    def test_from_dict(self):
        policy = HidePolicy.from_dict({"include": ["dist"], "exclude": ["src"]})
        self.assertEqual(policy.include, ("dist",))
        self.assertEqual(policy.exclude, ("src",))
        self.assertEqual(policy.to_dict(), {"include": ["dist"], "exclude": ["src"]})

    def test_from_dict_rejects_bad_shapes(self):
        with self.assertRaises(InvalidArgument):
            HidePolicy.from_dict(["dist"])
        with self.assertRaises(InvalidArgument):
            HidePolicy.from_dict({"include": "dist"})
        with self.assertRaises(InvalidArgument):
            HidePolicy.from_dict({"include": ["dist", 3]})


if __name__ == "__main__":
    unittest.main()
