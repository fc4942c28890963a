#
# KDBX Browser
# Terminal browser for KeePass databases
#
import logging
from typing import Callable, Dict, List, Optional

from . import display, menu
from .vault import EntryNode, GroupNode, Vault

PATH_SEPARATOR = ' > '
EXIT_HINT = '(press ESC to exit)'
BACK_HINT = '(press ESC to go back)'
END_MARKER = 'END'

SelectFunc = Callable[[str, List[str], int, Optional[str]], Optional[int]]


class NavigationFrame:
    """One level of the breadcrumb: a group handle and the last selected item index"""

    def __init__(self, group_uid, index=0):   # type: (str, int) -> None
        self.group_uid = group_uid
        self.index = index

    def __repr__(self):
        return f'NavigationFrame({self.group_uid!r}, {self.index})'


class BreadcrumbStack:
    def __init__(self):
        self.frames = []    # type: List[NavigationFrame]

    def __len__(self):
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def push(self, frame):  # type: (NavigationFrame) -> None
        self.frames.append(frame)

    def pop(self):  # type: () -> NavigationFrame
        return self.frames.pop()

    @property
    def top(self):  # type: () -> NavigationFrame
        return self.frames[-1]


class Navigator:
    def __init__(self, vault, select=None):    # type: (Vault, Optional[SelectFunc]) -> None
        self.vault = vault
        self.select = select or menu.select    # type: SelectFunc
        self.breadcrumbs = BreadcrumbStack()
        self.cursors = {}   # type: Dict[str, int]

    def prompt_message(self):   # type: () -> str
        return PATH_SEPARATOR.join(self.vault.get_group(x.group_uid).name for x in self.breadcrumbs)

    def hint(self):     # type: () -> str
        return EXIT_HINT if len(self.breadcrumbs) == 1 else BACK_HINT

    def run(self, root_uid=None):   # type: (Optional[str]) -> None
        root = self.vault.get_group(root_uid or self.vault.root_uid)
        self.breadcrumbs.push(NavigationFrame(root.uid))
        while self.breadcrumbs:
            self.step()
        print()
        print(END_MARKER)

    def step(self):     # type: () -> None
        frame = self.breadcrumbs.top
        group = self.vault.get_group(frame.group_uid)
        items = [display.node_label(x) for x in group.children]

        selected = self.select(self.prompt_message(), items, frame.index, self.hint())
        if selected is None:
            self.breadcrumbs.pop()
            logging.debug('Leaving group "%s"', group.name)
            return

        frame.index = selected
        self.cursors[group.uid] = selected
        node = group.children[selected]
        if isinstance(node, GroupNode):
            logging.debug('Entering group "%s"', node.name)
            self.breadcrumbs.push(NavigationFrame(node.uid, self.cursors.get(node.uid, 0)))
        elif isinstance(node, EntryNode):
            display.format_entry(node)
            print()


def run_interactive_mode(vault, select=None):   # type: (Vault, Optional[SelectFunc]) -> None
    Navigator(vault, select=select).run()
