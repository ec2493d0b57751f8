"""
Device Pool Rules
=================

Translates between a set of device ARNs and Device Farm pool rules.

A pool that targets specific devices carries one rule of the form::

    {"attribute": "ARN", "operator": "IN", "value": "[\"arn1\",\"arn2\"]"}

``build_rules`` writes the ARNs in the order the caller gives them.
``device_pool_matches`` reads them back as a set, so ordering and
duplicates never affect whether a pool matches.
"""

import json
from typing import Iterable, Optional, Sequence

from farmhand.devices.models import DevicePool, Rule, RuleAttribute, RuleOperator


def encode_arns(device_arns: Sequence[str]) -> str:
    """Serialize ARNs as a compact JSON array, e.g. ``["foo","bar"]``."""
    return json.dumps(list(device_arns), separators=(",", ":"))


def decode_arns(value: str) -> Optional[set[str]]:
    """
    Parse a rule value into a set of ARNs.

    Returns None when the value is not a JSON array of strings.
    """
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        return None
    if not isinstance(decoded, list) or not all(isinstance(item, str) for item in decoded):
        return None
    return set(decoded)


def build_rules(device_arns: Sequence[str]) -> list[Rule]:
    """
    Build the rule set for a pool containing exactly ``device_arns``.

    The order of ``device_arns`` is preserved in the serialized value.
    """
    return [
        Rule(
            attribute=RuleAttribute.ARN.value,
            operator=RuleOperator.IN.value,
            value=encode_arns(device_arns),
        )
    ]


def _is_arn_membership_rule(rule: Rule) -> bool:
    return (
        rule.attribute.upper() == RuleAttribute.ARN.value
        and rule.operator == RuleOperator.IN.value
    )


def device_pool_matches(pool: DevicePool, device_arns: Iterable[str]) -> bool:
    """
    Check whether a pool targets exactly the given devices.

    Only ``ARN IN [...]`` rules are considered. Other rules are ignored,
    as are ARN rules whose value cannot be decoded.

    Args:
        pool: Pool whose rules are inspected.
        device_arns: Desired device ARNs.

    Returns:
        True if any ARN rule lists the same set of devices.
    """
    wanted = set(device_arns)
    for rule in pool.rules:
        if not _is_arn_membership_rule(rule):
            continue
        if decode_arns(rule.value) == wanted:
            return True
    return False
