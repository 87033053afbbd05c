import asyncio
import unittest
from unittest.mock import AsyncMock

from fairsoft_metadata.entities import DocumentationEntry
from fairsoft_metadata.pipeline.documentation import (
    DOC_DIRECTORIES,
    classify,
    fetch_documentation,
    match_doc_type,
)
from fairsoft_metadata.services.github.exceptions import GithubNotFoundError


def blob(name):
    return {"name": name, "type": "blob"}


def tree(name):
    return {"name": name, "type": "tree"}


class TestClassify(unittest.TestCase):
    def test_root_files(self):
        documentation = classify(
            "octo", "hello", [blob("README.md"), blob("LICENSE"), blob("NOTES.md")]
        )

        self.assertEqual(
            documentation,
            [
                DocumentationEntry(type="readme", url="https://github.com/octo/hello/blob/main/README.md"),
                DocumentationEntry(type="license", url="https://github.com/octo/hello/blob/main/LICENSE"),
                DocumentationEntry(type="root", url="https://github.com/octo/hello/blob/main/NOTES.md"),
            ],
        )

    def test_match_is_case_insensitive(self):
        [entry] = classify("octo", "hello", [blob("readme.MD")])
        self.assertEqual(entry.type, "readme")
        self.assertTrue(entry.url.endswith("/blob/main/readme.MD"))

    def test_trees_and_other_files_are_ignored(self):
        documentation = classify(
            "octo", "hello", [tree("docs"), tree("README.md"), blob("setup.py"), blob("logo.png")]
        )
        self.assertEqual(documentation, [])

    def test_directory_files(self):
        documentation = classify(
            "octo",
            "hello",
            [blob("README.md")],
            {
                "docs": [blob("usage.md"), blob("architecture.md")],
                "example": [blob("notes.txt"), tree("data")],
            },
        )

        self.assertEqual(
            [(entry.type, entry.url) for entry in documentation],
            [
                ("readme", "https://github.com/octo/hello/blob/main/README.md"),
                ("usage", "https://github.com/octo/hello/blob/main/docs/usage.md"),
                ("docs", "https://github.com/octo/hello/blob/main/docs/architecture.md"),
                ("example", "https://github.com/octo/hello/blob/main/example/notes.txt"),
            ],
        )

    def test_missing_directories_yield_nothing(self):
        self.assertEqual(classify("octo", "hello", [], {"docs": None}), [])
        self.assertEqual(classify("octo", "hello", []), [])

    def test_branch_is_used_in_urls(self):
        [entry] = classify("octo", "hello", [blob("CHANGELOG.md")], branch="master")
        self.assertEqual(entry.url, "https://github.com/octo/hello/blob/master/CHANGELOG.md")

    def test_catalog_lookup(self):
        self.assertEqual(match_doc_type("CITATION.cff"), "citation")
        self.assertEqual(match_doc_type("code_of_conduct.md"), "code_of_conduct")
        self.assertEqual(match_doc_type("install.txt"), "installation")
        self.assertIsNone(match_doc_type("random.md"))

    def test_rest_file_type_is_accepted(self):
        [entry] = classify("octo", "hello", [{"name": "FAQ.md", "type": "file"}])
        self.assertEqual(entry.type, "faq")


class TestFetchDocumentation(unittest.IsolatedAsyncioTestCase):
    async def test_aggregation_order_is_fixed(self):
        listings = {
            "": [blob("README.md")],
            "docs": [blob("guide.md")],
            "documentation": [blob("api.md")],
            "example": [blob("tutorial.md")],
        }
        # Root completes last, docs first
        delays = {"": 0.03, "docs": 0.0, "documentation": 0.02, "example": 0.01}

        async def list_directory(owner, repo, path):
            await asyncio.sleep(delays[path])
            return listings[path]

        client = AsyncMock()
        client.list_directory.side_effect = list_directory

        documentation = await fetch_documentation(client, "octo", "hello")

        self.assertEqual(
            [entry.type for entry in documentation], ["readme", "docs", "api", "tutorial"]
        )
        requested = [call.args[2] for call in client.list_directory.await_args_list]
        self.assertEqual(sorted(requested), sorted(["", *DOC_DIRECTORIES]))

    async def test_listing_failure_is_treated_as_empty(self):
        async def list_directory(owner, repo, path):
            if path == "docs":
                raise GithubNotFoundError("gone", status_code=404)
            return [blob("README.md")] if path == "" else []

        client = AsyncMock()
        client.list_directory.side_effect = list_directory

        documentation = await fetch_documentation(client, "octo", "hello", branch="develop")

        self.assertEqual(
            documentation,
            [DocumentationEntry(type="readme", url="https://github.com/octo/hello/blob/develop/README.md")],
        )


if __name__ == "__main__":
    unittest.main()
