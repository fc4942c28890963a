import io
import os
import tempfile
from contextlib import redirect_stdout
from unittest import TestCase, mock

from pykeepass import create_database
from pykeepass.exceptions import CredentialsError, HeaderChecksumError

from data_vault import get_nested_vault, keepass_entry, keepass_group
from kdbxbrowser import display
from kdbxbrowser import vault as kdbx_vault
from kdbxbrowser.error import DatabaseError, InvalidCredentialsError, VaultError
from kdbxbrowser.vault import EntryNode, GroupNode, Vault


def keepass_database():
    email = keepass_entry(title='Email', username='a@x.com', password='p1', notes='call back')
    github = keepass_entry(title='GitHub', username='octocat', password='gh', url='https://github.com',
                           custom_properties={'PIN': '1234', 'Empty': None})
    web = keepass_group('Web', entries=[github], subgroups=[keepass_group('Empty')])
    root = keepass_group('Database', entries=[email], subgroups=[web, keepass_group('Bank')])
    kdb = mock.Mock()
    kdb.root_group = root
    return kdb


class TestVault(TestCase):
    def test_load_vault(self):
        kdb = keepass_database()
        vault = kdbx_vault.load_vault(kdb)

        self.assertEqual(len(vault.group_cache), 4)
        root = vault.root
        self.assertEqual(root.name, 'Database')
        self.assertIsNone(root.parent_uid)
        self.assertEqual(root.uid, str(kdb.root_group.uuid))

        self.assertEqual([type(x) for x in root.children], [EntryNode, GroupNode, GroupNode])
        self.assertEqual([x.name for x in root.subgroups], ['Web', 'Bank'])
        email = root.entries[0]
        self.assertEqual(email.title, 'Email')
        self.assertEqual(email.fields, {'Title': 'Email', 'UserName': 'a@x.com', 'Password': 'p1',
                                        'Notes': 'call back'})

        web = root.subgroups[0]
        self.assertEqual(web.parent_uid, root.uid)
        self.assertIs(vault.get_group(web.uid), web)
        self.assertEqual([x.name for x in web.subgroups], ['Empty'])
        github = web.entries[0]
        self.assertEqual(github.get('URL'), 'https://github.com')
        self.assertEqual(github.get('PIN'), '1234')
        self.assertEqual(github.get('Empty'), '')
        self.assertIsNone(github.get('Notes'))

    def test_load_vault_empty_fields(self):
        wifi = keepass_entry(title='Wifi', password='secret', empty_fields=('UserName',))
        kdb = mock.Mock()
        kdb.root_group = keepass_group('Database', entries=[wifi])

        entry = kdbx_vault.load_vault(kdb).root.entries[0]
        self.assertEqual(entry.get('UserName'), '')
        self.assertIsNone(entry.get('Notes'))
        self.assertNotIn('Notes', entry.fields)

    def test_load_vault_without_root(self):
        kdb = mock.Mock()
        kdb.root_group = None
        with self.assertRaises(VaultError):
            kdbx_vault.load_vault(kdb)

    def test_group_cache(self):
        vault = get_nested_vault()
        self.assertEqual(vault.root_uid, 'root')
        self.assertEqual([x.name for x in vault.get_group('web').subgroups], ['Archive', 'Empty'])

        with self.assertRaises(VaultError):
            vault.get_group('unknown')
        with self.assertRaises(VaultError):
            vault.add_group(GroupNode('web', 'Web', 'root'))
        with self.assertRaises(VaultError):
            vault.add_group(GroupNode('second-root', 'Database'))
        with self.assertRaises(VaultError):
            vault.add_group(GroupNode('orphan', 'Orphan', 'unknown'))

    def test_empty_vault(self):
        with self.assertRaises(VaultError):
            _ = Vault().root


class TestOpenVault(TestCase):
    def setUp(self):
        self.keepass_mock = mock.patch('kdbxbrowser.vault.PyKeePass').start()

    def tearDown(self):
        mock.patch.stopall()

    def test_open_vault(self):
        self.keepass_mock.return_value = keepass_database()

        vault = kdbx_vault.open_vault('~/passwords.kdbx', password='secret', keyfile='~/db.key')
        self.assertEqual(vault.root.name, 'Database')
        args, kwargs = self.keepass_mock.call_args
        self.assertFalse(args[0].startswith('~'))
        self.assertEqual(kwargs['password'], 'secret')
        self.assertFalse(kwargs['keyfile'].startswith('~'))

    def test_open_vault_no_keyfile(self):
        self.keepass_mock.return_value = keepass_database()

        kdbx_vault.open_vault('passwords.kdbx')
        self.keepass_mock.assert_called_once_with('passwords.kdbx', password=None, keyfile=None)

    def test_invalid_credentials(self):
        self.keepass_mock.side_effect = CredentialsError()
        with self.assertRaises(InvalidCredentialsError) as ctx:
            kdbx_vault.open_vault('passwords.kdbx', password='wrong')
        self.assertEqual(ctx.exception.filename, 'passwords.kdbx')
        self.assertIsInstance(ctx.exception.__cause__, CredentialsError)

    def test_corrupted_file(self):
        self.keepass_mock.side_effect = HeaderChecksumError()
        with self.assertRaises(DatabaseError) as ctx:
            kdbx_vault.open_vault('passwords.kdbx', password='secret')
        self.assertNotIsInstance(ctx.exception, InvalidCredentialsError)
        self.assertIn('corrupted', str(ctx.exception))

    def test_file_not_found(self):
        self.keepass_mock.side_effect = FileNotFoundError(2, 'No such file or directory', 'db.key')
        with self.assertRaises(DatabaseError) as ctx:
            kdbx_vault.open_vault('passwords.kdbx', password='secret', keyfile='db.key')
        self.assertEqual(ctx.exception.filename, 'db.key')
        self.assertEqual(str(ctx.exception), 'db.key: File not found')


class TestKeePassFile(TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.temp_dir.name, 'passwords.kdbx')
        kdb = create_database(self.filename, password='pw')
        web = kdb.add_group(kdb.root_group, 'Web')
        kdb.add_entry(kdb.root_group, 'Wifi', '', 'secret')
        kdb.add_entry(web, '', 'octocat', 'gh')
        kdb.save()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_blank_fields_are_present(self):
        vault = kdbx_vault.open_vault(self.filename, password='pw')
        wifi = next(x for x in vault.root.entries if x.title == 'Wifi')
        self.assertEqual(wifi.get('UserName'), '')
        self.assertEqual(wifi.get('Password'), 'secret')

        with redirect_stdout(io.StringIO()) as out:
            display.format_entry(wifi)
        lines = out.getvalue().splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn('Wifi', lines[0])
        self.assertIn('secret', lines[2])

    def test_blank_title_is_listed(self):
        vault = kdbx_vault.open_vault(self.filename, password='pw')
        web = next(x for x in vault.root.subgroups if x.name == 'Web')
        self.assertEqual([display.node_label(x) for x in web.children], ['🔑 '])

    def test_wrong_password(self):
        with self.assertRaises(InvalidCredentialsError):
            kdbx_vault.open_vault(self.filename, password='wrong')
