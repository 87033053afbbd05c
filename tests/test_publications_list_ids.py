import unittest

from fairsoft_metadata.entities import Author, MetadataRecord, PublicationEntry
from fairsoft_metadata.pipeline.list_ids import LIST_ID_FIELDS, assign_ids
from fairsoft_metadata.pipeline.publications import dedupe


class TestDedupe(unittest.TestCase):
    def test_title_and_doi_key(self):
        publications = [
            PublicationEntry(title="A", doi="1"),
            PublicationEntry(title="A", doi="1", year="2020"),
            PublicationEntry(title="A", doi="2"),
        ]

        unique = dedupe(publications)

        self.assertEqual(len(unique), 2)
        # First occurrence survives
        self.assertEqual(unique[0].year, "")
        self.assertEqual(unique[1].doi, "2")

    def test_key_is_case_sensitive(self):
        unique = dedupe([PublicationEntry(title="A"), PublicationEntry(title="a")])
        self.assertEqual(len(unique), 2)

    def test_blank_entries_collapse(self):
        unique = dedupe([PublicationEntry(), PublicationEntry(year="2020"), PublicationEntry()])
        self.assertEqual(unique, [PublicationEntry()])

    def test_empty(self):
        self.assertEqual(dedupe([]), [])


class TestAssignIds(unittest.TestCase):
    def test_single_field_mapping(self):
        self.assertEqual(
            assign_ids({"license": ["MIT"]}), {"license": [{"term": "MIT", "id": 0}]}
        )

    def test_ids_follow_position(self):
        result = assign_ids({"topics": ["a", "b", "c"], "name": "tool"})

        self.assertEqual(
            result["topics"],
            [{"term": "a", "id": 0}, {"term": "b", "id": 1}, {"term": "c", "id": 2}],
        )
        self.assertEqual(result["name"], "tool")

    def test_record_fields(self):
        record = MetadataRecord(
            name="tool",
            label=["tool"],
            description=["A tool"],
            version=["v1"],
            authors=[Author(name="Ada", email="ada@example.org")],
        )

        document = assign_ids(record)

        self.assertEqual(document["description"], [{"term": "A tool", "id": 0}])
        self.assertEqual(
            document["authors"],
            [
                {
                    "term": {"name": "Ada", "type": "person", "email": "ada@example.org", "maintainer": False},
                    "id": 0,
                }
            ],
        )
        # label and version are not list-id fields
        self.assertEqual(document["label"], ["tool"])
        self.assertEqual(document["version"], ["v1"])
        for field in LIST_ID_FIELDS:
            self.assertIsInstance(document[field], list)

    def test_input_mapping_is_not_modified(self):
        metadata = {"license": ["MIT"]}
        assign_ids(metadata)
        self.assertEqual(metadata, {"license": ["MIT"]})

    def test_second_pass_wraps_again(self):
        once = assign_ids({"os": ["linux"]})
        twice = assign_ids(once)
        self.assertEqual(twice["os"], [{"term": {"term": "linux", "id": 0}, "id": 0}])


if __name__ == "__main__":
    unittest.main()
