# -*- coding: utf-8 -*-
#
# KDBX Browser
# Terminal browser for KeePass databases
#

__version__ = '1.0.2'
