#
# KDBX Browser
# Terminal browser for KeePass databases
#

class Error(Exception):
    """Base class for exceptions in this module."""
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class DatabaseError(Error):
    """Exception raised when a KeePass database cannot be opened or read
    """

    def __init__(self, filename, message):
        super().__init__(message)
        self.filename = filename

    def __str__(self):
        if self.filename:
            return f'{self.filename}: {self.message}'
        else:
            return super().__str__()


class InvalidCredentialsError(DatabaseError):
    pass


class DisplayError(Error):
    """Exception raised when an entry lacks a field required for display
    """

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class VaultError(Error):
    pass
