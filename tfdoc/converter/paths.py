"""
Path naming for tfdoc.

A block's path locates it in the whole configuration, for example
"module.notify_slack_qa.aws_cloudwatch_log_group.lambda[0]": the first
instance of the aws_cloudwatch_log_group resource "lambda", created inside
a module called "notify_slack_qa".
"""

from ..errors import ModulePrefixConflictError
from ..models import Block, Module, ModuleLineage


def block_path(block: Block, parent_path: str) -> str:
    """Return the path of a block below `parent_path` ("" for the root module)."""
    if not parent_path:
        return block.address
    return f"{parent_path}.{block.address}"


def module_name(block: Block, lineage: ModuleLineage) -> str:
    """
    Name of the module chain enclosing a block.

    Returns "" for root module blocks, "module.a" for blocks of module "a",
    "module.a.module.b" for blocks of module "b" declared inside "a".
    """
    module_block = lineage.module_block_of(block)
    if module_block is None:
        return ""

    name = module_block.reference
    parent_name = module_name(module_block, lineage)
    if parent_name:
        name = f"{parent_name}.{name}"
    return name


def module_path(module: Module, lineage: ModuleLineage) -> str:
    """
    Path prefix shared by every root block of a module.

    Raises:
        ModulePrefixConflictError: if root blocks name different enclosing modules
    """
    prefixes = set()
    for block in module.blocks:
        name = module_name(block, lineage)
        if name:
            prefixes.add(name)

    if len(prefixes) > 1:
        raise ModulePrefixConflictError(prefixes)

    for prefix in prefixes:
        return prefix
    return ""
