"""CLI display package.

- console: Rich console setup and error printing
- tree: Component tree rendering
"""

from stackconf.cli.display.console import console, print_error
from stackconf.cli.display.tree import build_component_tree

__all__ = ["build_component_tree", "console", "print_error"]
