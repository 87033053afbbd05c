import base64
import json
import unittest
from unittest.mock import AsyncMock

from fairsoft_metadata.services.github.exceptions import GithubRequestError
from fairsoft_metadata.services.github.github_client import GithubClient
from fairsoft_metadata.services.metadata_updater import (
    DEFAULT_PR_TITLE,
    MetadataUpdater,
    PullRequestPlan,
    default_commit_message,
    encode_content,
    generate_branch_name,
)
from fairsoft_metadata.services.pipeline_exceptions import (
    UpstreamFetchFailure,
    ValidationFailure,
)


class TestGenerateBranchName(unittest.TestCase):
    def test_no_evaluator_branches(self):
        self.assertEqual(generate_branch_name(["main", "develop"]), "evaluator-1")
        self.assertEqual(generate_branch_name([]), "evaluator-1")

    def test_bare_evaluator_counts_as_zero(self):
        self.assertEqual(generate_branch_name(["evaluator"]), "evaluator-1")
        self.assertEqual(generate_branch_name(["evaluator", "evaluator-1"]), "evaluator-2")

    def test_highest_number_wins(self):
        self.assertEqual(
            generate_branch_name(["evaluator-3", "main", "evaluator-10", "evaluator-2"]),
            "evaluator-11",
        )

    def test_similar_names_are_ignored(self):
        self.assertEqual(
            generate_branch_name(["evaluator-x", "my-evaluator-5", "evaluator-7-fix"]),
            "evaluator-1",
        )

    def test_invalid_input(self):
        with self.assertRaises(ValidationFailure) as ctx:
            generate_branch_name("evaluator-1")
        self.assertEqual(ctx.exception.status_code, 400)


class TestEncodeContent(unittest.TestCase):
    def test_text_is_encoded(self):
        encoded = encode_content("hello")
        self.assertEqual(base64.b64decode(encoded).decode("utf-8"), "hello")

    def test_mapping_is_written_as_json(self):
        encoded = encode_content({"name": "café"})
        self.assertEqual(json.loads(base64.b64decode(encoded)), {"name": "café"})


def make_client(branches=None, existing=None):
    client = AsyncMock(spec=GithubClient)
    client.get_branch.return_value = {"name": "main", "commit": {"sha": "abc123"}}
    client.list_branches.return_value = branches if branches is not None else ["main"]
    client.create_branch.return_value = {"ref": "refs/heads/evaluator-1"}
    client.get_contents.return_value = existing
    client.create_or_update_file.return_value = {"content": {"path": "metadata.json"}}
    client.create_pull_request.return_value = {
        "number": 7,
        "html_url": "https://github.com/octo/hello/pull/7",
    }
    return client


def make_plan(**overrides):
    values = dict(
        owner="octo",
        repo="hello",
        filename="metadata.json",
        branch="main",
        metadata={"name": "hello"},
    )
    values.update(overrides)
    return PullRequestPlan(**values)


class TestOpenPullRequest(unittest.IsolatedAsyncioTestCase):
    async def test_steps_and_result(self):
        client = make_client(branches=["main", "evaluator-1"])

        result = await MetadataUpdater(client).open_pull_request(make_plan())

        self.assertEqual(result["new_branch_name"], "evaluator-2")
        self.assertEqual(result["head_branch_name"], "main")
        self.assertEqual(result["url"], "https://github.com/octo/hello/pull/7")
        self.assertEqual(result["pullrequest_message"]["number"], 7)

        client.get_branch.assert_awaited_once_with("octo", "hello", "main")
        client.create_branch.assert_awaited_once_with("octo", "hello", "evaluator-2", "abc123")
        client.get_contents.assert_awaited_once_with(
            "octo", "hello", "metadata.json", ref="evaluator-2"
        )
        client.create_pull_request.assert_awaited_once_with(
            "octo",
            "hello",
            "evaluator-2",
            "main",
            DEFAULT_PR_TITLE,
            default_commit_message("metadata.json"),
        )

    async def test_file_is_created_without_sha(self):
        client = make_client()

        await MetadataUpdater(client).open_pull_request(make_plan(message="Add metadata"))

        args, kwargs = client.create_or_update_file.await_args
        self.assertEqual(
            args[:4], ("octo", "hello", "evaluator-1", "metadata.json")
        )
        self.assertEqual(json.loads(base64.b64decode(args[4])), {"name": "hello"})
        self.assertEqual(args[5], "Add metadata")
        self.assertIsNone(kwargs["sha"])
        self.assertEqual(
            kwargs["committer"],
            {"name": "Metadata Updater for FAIRsoft", "email": "openebench@bsc.es"},
        )

    async def test_existing_file_sha_is_passed(self):
        client = make_client(existing={"sha": "deadbeef", "content": ""})

        await MetadataUpdater(client).open_pull_request(make_plan(title="Custom title"))

        self.assertEqual(client.create_or_update_file.await_args.kwargs["sha"], "deadbeef")
        self.assertEqual(client.create_pull_request.await_args.args[4], "Custom title")

    async def test_failed_step_aborts_the_rest(self):
        client = make_client()
        client.create_branch.side_effect = GithubRequestError(
            "Reference already exists", status_code=422
        )

        with self.assertRaises(UpstreamFetchFailure) as ctx:
            await MetadataUpdater(client).open_pull_request(make_plan())

        self.assertEqual(ctx.exception.status_code, 422)
        self.assertIn("evaluator-1", ctx.exception.message)
        client.create_or_update_file.assert_not_awaited()
        client.create_pull_request.assert_not_awaited()

    async def test_missing_target_branch(self):
        client = make_client()
        client.get_branch.side_effect = GithubRequestError("Branch not found", status_code=404)

        with self.assertRaises(UpstreamFetchFailure):
            await MetadataUpdater(client).open_pull_request(make_plan(branch="nope"))

        self.assertEqual(client.list_branches.await_args_list, [])
        client.get_branch.assert_awaited_once_with("octo", "hello", "nope")


if __name__ == "__main__":
    unittest.main()
