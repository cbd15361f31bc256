from cssarch.classifier.classify import classify, classify_rule, unresolved_violations
from cssarch.classifier.selector import (
    ComplexSelector,
    Compound,
    parse_selector,
    property_family,
    split_selector_list,
    var_references,
)

__all__ = [
    "classify",
    "classify_rule",
    "unresolved_violations",
    "Compound",
    "ComplexSelector",
    "parse_selector",
    "split_selector_list",
    "var_references",
    "property_family",
]
