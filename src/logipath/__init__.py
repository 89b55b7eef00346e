"""logipath — map logical paths (namespaces, resource ids) to file-system paths."""

from importlib.metadata import PackageNotFoundError, version

from logipath.rules import MappingRule, RuleError, load_rule, save_rule
from logipath.transformer import NotApplicable, is_applicable, transform

try:
    __version__ = version("logipath")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "MappingRule",
    "NotApplicable",
    "RuleError",
    "__version__",
    "is_applicable",
    "load_rule",
    "save_rule",
    "transform",
]
