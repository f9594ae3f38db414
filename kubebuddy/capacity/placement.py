"""
Placement Matcher

Evaluates whether the placement rules of a service allow it on a node:

1. every affinity selector must match the node tags;
2. no anti-affinity selector may match the node tags;
3. with a spread limit, the node must host fewer instances of the service
   than the limit.

Tag selectors combine exact label matches with expressions:

- ``Exists`` / ``DoesNotExist``: the key is present / absent;
- ``In``: the key is present and its value is listed;
- ``NotIn``: the key is absent or its value is not listed.

A selector matches only when all of its clauses pass.
"""

from typing import Iterable, Mapping
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.services import Expression, Service, TagSelector


def expression_matches(expression: Expression, tags: Mapping[str, str]) -> bool:
    """
    Evaluate one tag expression.

    Args:
        expression (Expression): Expression to evaluate.
        tags (Mapping[str, str]): Node tags.

    Returns:
        bool: True if the expression holds.
    """
    exists = expression.key in tags

    if expression.operator == 'Exists':
        return exists
    if expression.operator == 'DoesNotExist':
        return not exists
    if expression.operator == 'In':
        return exists and tags[expression.key] in expression.values
    if expression.operator == 'NotIn':
        return not exists or tags[expression.key] not in expression.values
    return False


def selector_matches(selector: TagSelector, tags: Mapping[str, str]) -> bool:
    """
    Evaluate a tag selector.

    Labels compare exactly: a label must be present on the node, so a label
    with an empty value does not match a node lacking that tag.

    Args:
        selector (TagSelector): Selector to evaluate.
        tags (Mapping[str, str]): Node tags.

    Returns:
        bool: True if all labels and expressions of the selector match.
    """
    for key, value in selector.match_labels.items():
        if key not in tags or tags[key] != value:
            return False
    return all(expression_matches(expression, tags) for expression in selector.match_expressions)


def count_instances(service: Service, node: Node, assignments: Iterable[Assignment]) -> int:
    """ Number of existing assignments of `service` on `node`. """
    return sum(1 for a in assignments if a.service_id == service.id and a.node_id == node.id)


def can_place_on(service: Service, node: Node, assignments: Iterable[Assignment]) -> bool:
    """
    Check whether the placement rules of a service allow it on a node.

    Resources are not considered here.

    Args:
        service (Service): Service to place.
        node (Node): Target node.
        assignments (Iterable[Assignment]): Existing assignments.

    Returns:
        bool: True if affinity, anti-affinity and spread rules allow the placement.
    """
    rules = service.placement

    if not all(selector_matches(selector, node.tags) for selector in rules.affinity):
        return False

    if any(selector_matches(selector, node.tags) for selector in rules.anti_affinity):
        return False

    if rules.spread_max > 0 and count_instances(service, node, assignments) >= rules.spread_max:
        return False

    return True
