#
# KDBX Browser
# Terminal browser for KeePass databases
#
from colorama import init, Fore

from .error import DisplayError
from .vault import EntryNode, GroupNode, Node, TITLE, USERNAME, PASSWORD, NOTES

init()


class bcolors:
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    ITALIC = '\033[3m'


GROUP_ICON = '📁'
ENTRY_ICON = '🔑'
USER_ICON = '👤'
PASSWORD_ICON = '🔑'
NOTES_ICON = '📝'


def required_field(entry, name):    # type: (EntryNode, str) -> str
    value = entry.get(name)
    if value is None:
        raise DisplayError(name, f'Entry "{entry.uid}" has no {name} field')
    return value


def node_label(node):   # type: (Node) -> str
    if isinstance(node, GroupNode):
        return f'{GROUP_ICON} {node.name}'
    if isinstance(node, EntryNode):
        return f'{ENTRY_ICON} {required_field(node, TITLE)}'
    raise TypeError(f'Unsupported node type: {type(node).__name__}')


def format_entry(entry):    # type: (EntryNode) -> None
    """Print title, username, password and, if not empty, notes of the entry"""
    title = required_field(entry, TITLE)
    username = required_field(entry, USERNAME)
    password = required_field(entry, PASSWORD)

    print(f'{bcolors.ITALIC}{title}{bcolors.ENDC}')
    print(f'  {USER_ICON}: {bcolors.BOLD}{username}{bcolors.ENDC}')
    print(f'  {PASSWORD_ICON}: {bcolors.BOLD}{password}{bcolors.ENDC}')
    notes = entry.get(NOTES)
    if notes:
        print(f'  {NOTES_ICON}: {notes}')


def search_summary(title, count):   # type: (str, int) -> str
    if count == 0:
        return 'No entries found'
    return f'Found {Fore.GREEN}{count}{Fore.RESET} result(s) for title name "{title}"'
