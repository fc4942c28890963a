import uuid
from unittest import mock

from kdbxbrowser.vault import Vault, GroupNode, EntryNode


def make_entry(uid, title=None, username=None, password=None, notes=None, **custom):
    fields = {}
    if title is not None:
        fields['Title'] = title
    if username is not None:
        fields['UserName'] = username
    if password is not None:
        fields['Password'] = password
    if notes is not None:
        fields['Notes'] = notes
    fields.update(custom)
    return EntryNode(uid, fields)


def get_scenario_vault():
    """Database > [Web (group), Email (entry)]"""
    vault = Vault()
    vault.add_group(GroupNode('root', 'Database'))
    vault.add_group(GroupNode('web', 'Web', 'root'))
    vault.root.children.append(make_entry('email', title='Email', username='a@x.com', password='p1'))
    return vault


def get_nested_vault():
    """
    Database
        Web
            GitHub
            Archive
                Email (old)
            Empty
        Email
    """
    vault = Vault()
    vault.add_group(GroupNode('root', 'Database'))
    vault.add_group(GroupNode('web', 'Web', 'root'))
    vault.get_group('web').children.append(
        make_entry('github', title='GitHub', username='octocat', password='gh', notes='call back'))
    vault.add_group(GroupNode('archive', 'Archive', 'web'))
    vault.get_group('archive').children.append(
        make_entry('email-old', title='Email', username='old@x.com', password='p0', notes=''))
    vault.add_group(GroupNode('empty', 'Empty', 'web'))
    vault.root.children.append(make_entry('email', title='Email', username='a@x.com', password='p1'))
    return vault


def keepass_entry(title=None, username=None, password=None, url=None, notes=None, custom_properties=None,
                  empty_fields=()):
    """Build a mock pykeepass Entry.  Fields named in empty_fields have a String element with no value."""
    entry = mock.Mock(name=title)
    entry._element = mock.Mock()
    entry._element.xpath.side_effect = lambda path, name: [name] if name in empty_fields else []
    entry.uuid = uuid.uuid4()
    entry.title = title
    entry.username = username
    entry.password = password
    entry.url = url
    entry.notes = notes
    entry.custom_properties = custom_properties or {}
    return entry


def keepass_group(name, entries=None, subgroups=None):
    """Build a mock pykeepass Group."""
    group = mock.Mock(name=name)
    group.uuid = uuid.uuid4()
    group.name = name
    group.entries = entries or []
    group.subgroups = subgroups or []
    return group


class ScriptedSelect:
    """Stands in for the interactive prompt, answering from a list of selections."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def __call__(self, message, items, default=0, hint=None):
        self.calls.append((message, list(items), default, hint))
        return self.answers.pop(0)
