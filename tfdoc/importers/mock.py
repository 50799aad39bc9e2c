"""
Mock importer for testing tfdoc.

This module provides a hardcoded evaluated configuration for exercising the
converter without running a parser.
"""

from typing import Any, Dict, List, Optional

from ..models import Attribute, Block, Module, ModuleLineage, ParserOptions, SourceRange, TypedValue
from .base import BaseImporter


def _attr(name: str, value: Any, raw: Optional[str] = None, references: Optional[List[str]] = None) -> Attribute:
    typed = TypedValue.of(value)
    return Attribute(
        name=name,
        value=typed,
        raw=raw if raw is not None else repr(value),
        references=references or []
    )


def _block(block_type: str, labels: List[str], filename: str, start: int, end: int, **kwargs: Any) -> Block:
    return Block(
        type=block_type,
        labels=labels,
        range=SourceRange(filename=filename, start_line=start, end_line=end),
        **kwargs
    )


class MockImporter(BaseImporter):
    """
    Mock importer that returns a hardcoded root module and one child module.

    The root module declares a variable, a data source, a security group with
    a dynamic ingress block expanded twice, a module call and an output.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """Initialize the mock importer with test data."""
        super().__init__(options)
        self._lineage = ModuleLineage()
        self._modules = self._create_test_modules()

    def get_modules(self) -> List[Module]:
        """
        Return the hardcoded modules.

        Returns:
            The root module followed by the "infra" child module
        """
        return self._modules

    def get_lineage(self) -> ModuleLineage:
        return self._lineage

    def _create_test_modules(self) -> List[Module]:
        region = _block(
            "variable", ["region"], "main.tf", 1, 4,
            id="var-region",
            attributes=[
                Attribute(name="type", value=TypedValue.unknown(), raw="string"),
                _attr("default", "us-east-1", raw='"us-east-1"'),
            ]
        )

        vpc = _block(
            "data", ["aws_vpc", "main"], "main.tf", 6, 8,
            id="data-vpc-main",
            attributes=[_attr("default", True, raw="true")]
        )

        ingress_rules: List[Dict[str, Any]] = [
            {"port": 80, "cidr": "0.0.0.0/0"},
            {"port": 443, "cidr": "0.0.0.0/0"},
        ]
        template = _block(
            "dynamic", ["ingress"], "main.tf", 13, 20,
            attributes=[_attr("for_each", ingress_rules, raw="var.ingress_rules")]
        )
        expanded = [
            _block(
                "ingress", [], "main.tf", 14, 19,
                attributes=[
                    _attr("from_port", rule["port"], raw="ingress.value.port"),
                    _attr("to_port", rule["port"], raw="ingress.value.port"),
                    _attr("protocol", "tcp", raw='"tcp"'),
                    _attr("cidr_blocks", [rule["cidr"]], raw="[ingress.value.cidr]"),
                ]
            )
            for rule in ingress_rules
        ]
        security_group = _block(
            "resource", ["aws_security_group", "web"], "main.tf", 10, 21,
            id="sg-web",
            attributes=[
                _attr("name", "web", raw='"web"'),
                Attribute(
                    name="vpc_id",
                    value=TypedValue.unknown(),
                    raw="data.aws_vpc.main.id",
                    references=["data.aws_vpc.main"]
                ),
            ],
            children=[template, *expanded]
        )

        infra_call = _block(
            "module", ["infra"], "main.tf", 23, 26,
            id="module-infra",
            attributes=[
                _attr("source", "./infra", raw='"./infra"'),
                Attribute(name="region", value=TypedValue.of("us-east-1"), raw="var.region",
                          references=["var.region"]),
            ]
        )

        sg_output = _block(
            "output", ["security_group_id"], "main.tf", 28, 30,
            attributes=[
                Attribute(
                    name="value",
                    value=TypedValue.unknown(),
                    raw="aws_security_group.web.id",
                    references=["aws_security_group.web"]
                )
            ]
        )

        bucket = _block(
            "resource", ["aws_s3_bucket", "main"], "infra/main.tf", 1, 7,
            id="s3-main",
            attributes=[
                _attr("bucket", "infra-artifacts", raw='"infra-artifacts"'),
                _attr("force_destroy", False, raw="false"),
            ],
            children=[
                _block("versioning", [], "infra/main.tf", 4, 6,
                       attributes=[_attr("enabled", True, raw="true")])
            ]
        )

        root = Module(blocks=[region, vpc, security_group, infra_call, sg_output])
        infra = Module(blocks=[bucket])
        self._lineage.register_module(infra, infra_call)
        return [root, infra]
