"""Tree rendering of component configs for ``stackconf show``."""

from __future__ import annotations

from rich.markup import escape
from rich.tree import Tree

from stackconf.core.node import ConfigNode
from stackconf.core.settings import SettingsTree


def _component_label(node: ConfigNode, name: str) -> str:
    label = f"[bold]{escape(name)}[/bold]"
    if node.namespace:
        suffix = ", injected" if node.inject_namespace else ""
        label += f" [dim](namespace: {escape(node.namespace)}{suffix})[/dim]"
    return label


def _add_settings(branch: Tree, settings: SettingsTree) -> None:
    for key, value in settings.items():
        if isinstance(value, SettingsTree):
            child = branch.add(f"[cyan]{escape(key)}[/cyan]")
            if not len(value):
                child.add("[dim]{}[/dim]")
            _add_settings(child, value)
        else:
            text = value if isinstance(value, str) else repr(value)
            branch.add(f"[cyan]{escape(key)}[/cyan]: {escape(text)}")


def _add_component(branch: Tree, node: ConfigNode) -> None:
    if len(node.settings):
        _add_settings(branch.add("[yellow]config[/yellow]"), node.settings)
    for name, child in node.children.items():
        _add_component(branch.add(_component_label(child, name)), child)


def build_component_tree(node: ConfigNode, label: str) -> Tree:
    """Build a rich Tree of a component, its settings and subcomponents."""
    tree = Tree(_component_label(node, label))
    _add_component(tree, node)
    return tree
