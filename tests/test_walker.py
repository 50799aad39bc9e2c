"""
Tests for the tree walker, end to end over in-memory modules.
"""

import json
import logging
import unittest

import pytest

from tfdoc.converter.walker import TerraformConverter
from tfdoc.errors import ModulePrefixConflictError
from tfdoc.importers import MockImporter
from tfdoc.models import METADATA_KEY, Attribute, Module, ModuleLineage, TypedValue

from tests.helpers import attr, make_block


def _ref_attr(name, reference):
    return Attribute(name=name, value=TypedValue.unknown(), raw=f"{reference}.id", references=[reference])


class TestTerraformConverter(unittest.TestCase):
    """Test dispatch, collection keys and metadata of top-level documents."""

    def test_collection_keys(self):
        module = Module(blocks=[
            make_block("variable", ["region"], 1, 3, attributes=[attr("default", "eu-west-1")]),
            make_block("resource", ["aws_s3_bucket", "main"], 5, 8),
            make_block("data", ["aws_caller_identity", "current"], 10, 10),
            make_block("locals", [], 12, 14, attributes=[attr("env", "dev")]),
            make_block("terraform", [], 16, 18),
        ])
        output = TerraformConverter([module]).visit_json()

        self.assertEqual(set(output), {"variable", "aws_s3_bucket", "aws_caller_identity", "locals", "terraform"})
        bucket_meta = output["aws_s3_bucket"][0][METADATA_KEY]
        self.assertEqual(bucket_meta["type"], "resource")
        self.assertEqual(bucket_meta["path"], "aws_s3_bucket.main")
        self.assertEqual(output["aws_caller_identity"][0][METADATA_KEY]["type"], "data")
        self.assertEqual(output["aws_caller_identity"][0][METADATA_KEY]["path"],
                         "data.aws_caller_identity.current")
        self.assertNotIn("type", output["variable"][0][METADATA_KEY])
        self.assertEqual(output["variable"][0][METADATA_KEY]["path"], "var.region")

    def test_documents_are_appended_in_order(self):
        module = Module(blocks=[
            make_block("resource", ["aws_s3_bucket", "a"], 1, 2),
            make_block("resource", ["aws_s3_bucket", "b"], 3, 4),
        ])
        output = TerraformConverter([module]).visit_json()
        paths = [d[METADATA_KEY]["path"] for d in output["aws_s3_bucket"]]
        self.assertEqual(paths, ["aws_s3_bucket.a", "aws_s3_bucket.b"])

    def test_unknown_block_type_is_logged_and_skipped(self):
        logger = logging.getLogger("tests.walker")
        module = Module(blocks=[
            make_block("check", ["health"], 1, 5, children=[make_block("assert", [], 2, 4)]),
            make_block("resource", ["aws_s3_bucket", "main"], 7, 9),
        ])
        with self.assertLogs(logger, level="WARNING") as logs:
            output = TerraformConverter([module], logger=logger).visit_json()

        self.assertEqual(list(output), ["aws_s3_bucket"])
        self.assertTrue(any("unknown block type: check" in line for line in logs.output))

    def test_references_resolve_to_earlier_blocks_only(self):
        module = Module(blocks=[
            make_block("resource", ["aws_s3_bucket_policy", "early"], 1, 3,
                       attributes=[_ref_attr("bucket", "aws_s3_bucket.main")]),
            make_block("resource", ["aws_s3_bucket", "main"], 5, 8, id="bucket-id"),
            make_block("resource", ["aws_s3_bucket_policy", "late"], 10, 12,
                       attributes=[_ref_attr("bucket", "aws_s3_bucket.main")]),
        ])
        output = TerraformConverter([module]).visit_json()
        early, late = output["aws_s3_bucket_policy"]

        self.assertNotIn("references", early[METADATA_KEY])
        self.assertEqual(late[METADATA_KEY]["references"],
                         [{"id": "bucket-id", "label": "aws_s3_bucket", "name": "main"}])

    def test_references_across_modules(self):
        root_call = make_block("module", ["infra"], 1, 3, id="mod-infra")
        child_output = make_block("output", ["arn"], 1, 3,
                                  attributes=[_ref_attr("value", "module.infra")])
        lineage = ModuleLineage()
        child = Module(blocks=[child_output])
        lineage.register_module(child, root_call)

        output = TerraformConverter([Module(blocks=[root_call]), child], lineage=lineage).visit_json()

        meta = output["output"][0][METADATA_KEY]
        self.assertEqual(meta["path"], "module.infra.output.arn")
        self.assertEqual(meta["references"], [{"id": "mod-infra", "label": "infra", "name": ""}])

    def test_nested_module_paths(self):
        lineage = ModuleLineage()
        infra_call = make_block("module", ["infra"], 1, 3)
        network_call = make_block("module", ["network"], 1, 3, filename="infra/main.tf")
        vpc = make_block("resource", ["aws_vpc", "main"], 1, 5, filename="infra/network/main.tf")
        infra = Module(blocks=[network_call])
        network = Module(blocks=[vpc])
        lineage.register_module(infra, infra_call)
        lineage.register_module(network, network_call)

        output = TerraformConverter([Module(blocks=[infra_call]), infra, network], lineage=lineage).visit_json()

        paths = [d[METADATA_KEY]["path"] for d in output["module"]]
        self.assertEqual(paths, ["module.infra", "module.infra.module.network"])
        self.assertEqual(output["aws_vpc"][0][METADATA_KEY]["path"],
                         "module.infra.module.network.aws_vpc.main")

    def test_prefix_conflict_aborts_conversion(self):
        lineage = ModuleLineage()
        first = make_block("resource", ["aws_s3_bucket", "a"], 1, 2)
        second = make_block("resource", ["aws_s3_bucket", "b"], 3, 4)
        lineage.register(first, make_block("module", ["one"]))
        lineage.register(second, make_block("module", ["two"]))

        with self.assertRaises(ModulePrefixConflictError) as ctx:
            TerraformConverter([Module(blocks=[first, second])], lineage=lineage).visit_json()
        self.assertEqual(ctx.exception.names, ["module.one", "module.two"])


@pytest.fixture
def mock_document():
    importer = MockImporter()
    return TerraformConverter(importer.get_modules(), lineage=importer.get_lineage()).visit_json()


def test_mock_configuration_converts(mock_document):
    assert set(mock_document) == {"variable", "aws_vpc", "aws_security_group", "module", "output", "aws_s3_bucket"}

    variable = mock_document["variable"][0]
    assert variable["type"] == "string"
    assert variable["default"] == "us-east-1"

    group = mock_document["aws_security_group"][0]
    assert [rule["from_port"] for rule in group["ingress"]] == [80, 443]
    assert group["ingress"][0]["cidr_blocks"] == ["0.0.0.0/0"]
    assert group["vpc_id"] is None
    assert group[METADATA_KEY]["references"] == [{"id": "data-vpc-main", "label": "aws_vpc", "name": "main"}]

    bucket = mock_document["aws_s3_bucket"][0]
    assert bucket[METADATA_KEY]["path"] == "module.infra.aws_s3_bucket.main"
    assert bucket[METADATA_KEY]["filename"] == "infra/main.tf"
    assert bucket["versioning"]["enabled"] is True

    output = mock_document["output"][0]
    assert output[METADATA_KEY]["references"] == [{"id": "sg-web", "label": "aws_security_group", "name": "web"}]


def test_mock_document_is_json_serializable(mock_document):
    assert json.loads(json.dumps(mock_document)) == mock_document


def test_every_document_has_consistent_line_range(mock_document):
    def check(document):
        meta = document[METADATA_KEY]
        assert meta["line_start"] <= meta["line_end"]
        assert meta["filename"].endswith(".tf")
        for value in document.values():
            nested = value if isinstance(value, list) else [value]
            for item in nested:
                if isinstance(item, dict) and METADATA_KEY in item:
                    check(item)

    for documents in mock_document.values():
        for document in documents:
            assert "path" in document[METADATA_KEY]
            check(document)
