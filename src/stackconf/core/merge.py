"""Deep merge of component config trees.

Receiver wins: the node a merge is applied to keeps every value and every
shape it already has, and only gains keys and subcomponents it lacks. This
is how a higher-precedence environment file absorbs a base file.

Namespaces are merged in a separate pass (``merge_namespaces``) because they
follow a different rule: an empty namespace inherits from the peer, a set one
is never replaced.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from stackconf.core.settings import SettingsTree

if TYPE_CHECKING:
    from stackconf.core.node import ConfigNode

__all__ = ["merge_namespaces", "merge_nodes", "merge_settings"]


def merge_settings(receiver: SettingsTree, other: SettingsTree) -> None:
    """Merge ``other`` into ``receiver`` in place, receiver taking precedence.

    Args:
        receiver: Tree that is modified and wins every conflict.
        other: Tree read from; never modified and never shared.
    """
    for key, value in other.items():
        if key not in receiver:
            receiver[key] = value.copy() if isinstance(value, SettingsTree) else copy.deepcopy(value)
            continue

        existing = receiver[key]
        if isinstance(existing, SettingsTree) and isinstance(value, SettingsTree):
            merge_settings(existing, value)
        # Any other combination (scalar/scalar, scalar/map, map/scalar) keeps
        # the receiver's value.


def merge_nodes(receiver: ConfigNode, other: ConfigNode) -> None:
    """Merge settings and subcomponents of ``other`` into ``receiver``.

    Subcomponents present only in ``other`` are deep copied in, including
    their namespaces. Shared subcomponents are merged recursively. Namespaces
    of ``receiver`` itself are left to ``merge_namespaces``.
    """
    merge_settings(receiver.settings, other.settings)

    for name, other_child in other.children.items():
        own_child = receiver.children.get(name)
        if own_child is None:
            receiver.children[name] = other_child.copy()
        else:
            merge_nodes(own_child, other_child)


def merge_namespaces(receiver: ConfigNode, other: ConfigNode) -> ConfigNode:
    """Propagate namespace settings from ``other`` into ``receiver``.

    When ``receiver.namespace`` is empty both the namespace and the inject
    flag are taken from ``other``. The walk then visits every subcomponent of
    ``receiver``; a subcomponent without a peer in ``other`` is paired with an
    empty node.

    Returns:
        ``receiver``, for chaining.
    """
    if not receiver.namespace:
        receiver.namespace = other.namespace
        receiver.inject_namespace = other.inject_namespace

    for name, child in receiver.children.items():
        peer = other.children.get(name)
        if peer is None:
            peer = type(receiver)()
        merge_namespaces(child, peer)

    return receiver
