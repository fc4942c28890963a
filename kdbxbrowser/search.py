#
# KDBX Browser
# Terminal browser for KeePass databases
#
from typing import Iterator, List

from . import display
from .vault import EntryNode, GroupNode


def iterate_entries(group):     # type: (GroupNode) -> Iterator[EntryNode]
    """Depth-first walk in child order, yielding every entry below the group"""
    stack = [iter(group.children)]
    while stack:
        for node in stack[-1]:
            if isinstance(node, EntryNode):
                yield node
            elif isinstance(node, GroupNode):
                stack.append(iter(node.children))
                break
        else:
            stack.pop()


def search_by_title(title, root):   # type: (str, GroupNode) -> List[EntryNode]
    return [x for x in iterate_entries(root) if x.title == title]


def run_search_mode(title, root):   # type: (str, GroupNode) -> List[EntryNode]
    entries = search_by_title(title, root)
    print(display.search_summary(title, len(entries)))
    for entry in entries:
        display.format_entry(entry)
        print()
    return entries
