#
# KDBX Browser
# Terminal browser for KeePass databases
#
import logging
import os
from typing import Dict, List, Optional, Union

from pykeepass import PyKeePass
from pykeepass.exceptions import CredentialsError, HeaderChecksumError, PayloadChecksumError

from .error import DatabaseError, InvalidCredentialsError, VaultError

TITLE = 'Title'
USERNAME = 'UserName'
PASSWORD = 'Password'
URL = 'URL'
NOTES = 'Notes'


class EntryNode:
    def __init__(self, uid, fields=None):   # type: (str, Optional[Dict[str, str]]) -> None
        self.uid = uid
        self.fields = fields or {}     # type: Dict[str, str]

    def get(self, name):    # type: (str) -> Optional[str]
        return self.fields.get(name)

    @property
    def title(self):    # type: () -> Optional[str]
        return self.get(TITLE)

    def __repr__(self):
        return f'EntryNode({self.uid!r}, title={self.title!r})'


class GroupNode:
    def __init__(self, uid, name, parent_uid=None):   # type: (str, str, Optional[str]) -> None
        self.uid = uid
        self.name = name
        self.parent_uid = parent_uid
        self.children = []     # type: List[Union[GroupNode, EntryNode]]

    @property
    def subgroups(self):    # type: () -> List[GroupNode]
        return [x for x in self.children if isinstance(x, GroupNode)]

    @property
    def entries(self):  # type: () -> List[EntryNode]
        return [x for x in self.children if isinstance(x, EntryNode)]

    def __repr__(self):
        return f'GroupNode({self.uid!r}, {self.name!r})'


Node = Union[GroupNode, EntryNode]


class Vault:
    """Decrypted tree of groups and entries.

    Groups are stored once in ``group_cache`` and referenced by uid everywhere
    else, so navigation state never holds on to the pykeepass objects.
    """

    def __init__(self):
        self.group_cache = {}   # type: Dict[str, GroupNode]
        self.root_uid = None    # type: Optional[str]

    @property
    def root(self):     # type: () -> GroupNode
        return self.get_group(self.root_uid)

    def get_group(self, uid):   # type: (Optional[str]) -> GroupNode
        group = self.group_cache.get(uid) if uid is not None else None
        if group is None:
            raise VaultError(f'Group UID "{uid}" not found')
        return group

    def add_group(self, group):     # type: (GroupNode) -> None
        if group.uid in self.group_cache:
            raise VaultError(f'Duplicate group UID "{group.uid}"')
        if group.parent_uid is None:
            if self.root_uid is not None:
                raise VaultError('Vault already has a root group')
            self.root_uid = group.uid
        else:
            self.get_group(group.parent_uid).children.append(group)
        self.group_cache[group.uid] = group


def has_string_field(entry, name):   # type: (any, str) -> bool
    """True if the entry has a String element with the key, even one with an empty value"""
    element = getattr(entry, '_element', None)
    if element is None:
        return False
    return len(element.xpath('String/Key[text()=$name]', name=name)) > 0


def entry_fields(entry):    # type: (any) -> Dict[str, str]
    fields = {}
    for name, value in ((TITLE, entry.title), (USERNAME, entry.username), (PASSWORD, entry.password),
                        (URL, entry.url), (NOTES, entry.notes)):
        if value is not None:
            fields[name] = value
        elif has_string_field(entry, name):
            # pykeepass reads <Value/> as None
            fields[name] = ''
    custom = entry.custom_properties
    if custom:
        for name, value in custom.items():
            if name not in fields:
                fields[name] = value if value is not None else ''
    return fields


def load_vault(kdb):    # type: (PyKeePass) -> Vault
    vault = Vault()
    root = kdb.root_group
    if root is None:
        raise VaultError('Database has no root group')

    groups = [(root, None)]
    pos = 0
    while pos < len(groups):
        g, parent_uid = groups[pos]
        pos = pos + 1
        group = GroupNode(str(g.uuid), g.name or '', parent_uid)
        vault.add_group(group)
        for entry in g.entries:
            group.children.append(EntryNode(str(entry.uuid), entry_fields(entry)))
        groups.extend((x, group.uid) for x in g.subgroups)

    logging.debug('Loaded %d group(s)', len(vault.group_cache))
    return vault


def open_vault(filename, password=None, keyfile=None):
    # type: (str, Optional[str], Optional[str]) -> Vault
    filename = os.path.expanduser(filename)
    if keyfile:
        keyfile = os.path.expanduser(keyfile)
    logging.debug('Opening database "%s"', filename)
    try:
        kdb = PyKeePass(filename, password=password, keyfile=keyfile)
    except CredentialsError as e:
        raise InvalidCredentialsError(filename, 'Invalid password or keyfile') from e
    except (HeaderChecksumError, PayloadChecksumError) as e:
        raise DatabaseError(filename, 'Database file is corrupted') from e
    except FileNotFoundError as e:
        raise DatabaseError(e.filename or filename, 'File not found') from e
    except OSError as e:
        raise DatabaseError(filename, e.strerror or str(e)) from e
    return load_vault(kdb)
