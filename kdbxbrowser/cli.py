#
# KDBX Browser
# Terminal browser for KeePass databases
#
import getpass
import logging
from typing import Optional

from .error import InvalidCredentialsError
from .navigator import run_interactive_mode
from .params import KdbxParams
from .search import run_search_mode
from .vault import Vault, open_vault

PASSWORD_ATTEMPTS = 3


def read_password():    # type: () -> Optional[str]
    password = getpass.getpass(prompt='Password: ', stream=None)
    return password or None


def open_database(params):  # type: (KdbxParams) -> Vault
    """Open the database, prompting for the password when none was supplied.

    A supplied password gets a single attempt.  A typed one is asked again
    after a wrong guess, up to PASSWORD_ATTEMPTS times.
    """
    if params.password_supplied:
        try:
            return open_vault(params.database, password=params.password, keyfile=params.keyfile)
        finally:
            params.clear_session()

    attempt = 0
    while True:
        attempt += 1
        password = read_password()
        try:
            return open_vault(params.database, password=password, keyfile=params.keyfile)
        except InvalidCredentialsError as e:
            if attempt >= PASSWORD_ATTEMPTS:
                raise
            logging.warning('%s. Please try again.', e.message)


def dispatch(params, entry_title=None):     # type: (KdbxParams, Optional[str]) -> int
    vault = open_database(params)
    if entry_title is not None:
        run_search_mode(entry_title, vault.root)
    else:
        run_interactive_mode(vault)
    return 0
