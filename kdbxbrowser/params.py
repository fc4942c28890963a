#
# KDBX Browser
# Terminal browser for KeePass databases
#
from typing import Optional


class KdbxParams:
    """ Global storage of settings during the session """

    def __init__(self, config_filename='', config=None):
        self.config_filename = config_filename
        self.config = config or {}
        self.database = None    # type: Optional[str]
        self.keyfile = None     # type: Optional[str]
        self.password = None   # type: Optional[str]
        self.debug = False
        self.batch_mode = False

    def clear_session(self):
        self.password = None

    @property
    def password_supplied(self):    # type: () -> bool
        return self.password is not None
